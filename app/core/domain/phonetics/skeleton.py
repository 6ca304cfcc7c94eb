# phonetics\skeleton.py
"""
PHONETIC SKELETON
-----------------

Reduces a raw string to a coarse "sound skeleton" so that a Czech speaker's
transliteration of an Italian word ("kvatro", "seňora") lands on the same
representation as the real spelling ("quattro", "signora").

Pipeline (strictly ordered, each step works on the previous output):

1. lowercase
2. NFD decomposition, combining marks dropped (accents go away)
3. trim
4. digraph / source-letter table (`SOUND_RULES`)
5. confusable letters (`CONFUSABLE_RULES`)
6. runs of the same character collapsed to one
7. everything outside [a-z0-9] dropped

The order is part of the observable contract: collapsing doubles before the
digraph table would, for example, let "gg" + "n" slip past the "gn" rule.

A single pass is not always stable (a hyphen stripped in step 7 can glue
"g-n" into a fresh "gn"), so `normalize` repeats the pass until nothing
changes. Ordinary words are stable after the first pass and get exactly the
single-pass output.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Tuple

__all__ = [
    "SOUND_RULES",
    "CONFUSABLE_RULES",
    "strip_accents",
    "skeleton_pass",
    "normalize",
]

# Multi-letter sounds shared by the Italian and Czech orthographies, then the
# Czech single letters. Applied top to bottom as global literal replacements.
SOUND_RULES: Tuple[Tuple[str, str], ...] = (
    ("gli", "li"),
    ("gn", "n"),
    ("sci", "si"),
    ("sce", "se"),
    ("chi", "k"),
    ("che", "k"),
    ("ň", "n"),
    ("š", "s"),
    ("č", "c"),
    ("ř", "r"),
    ("ž", "z"),
    ("ď", "d"),
    ("ť", "t"),
)

# Letters that users swap regardless of language.
CONFUSABLE_RULES: Tuple[Tuple[str, str], ...] = (
    ("j", "i"),
    ("y", "i"),
    ("w", "v"),
    ("q", "k"),
    ("x", "ks"),
)

_REPEAT_RE = re.compile(r"(.)\1+")
_NON_SKELETON_RE = re.compile(r"[^a-z0-9]")


def strip_accents(text: str) -> str:
    """Decompose to NFD and drop every combining mark ('č' -> 'c')."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _apply_rules(text: str, rules: Tuple[Tuple[str, str], ...]) -> str:
    for pattern, replacement in rules:
        text = text.replace(pattern, replacement)
    return text


def skeleton_pass(text: str) -> str:
    """
    One run of the ordered pipeline. Exposed for tests and debugging;
    callers want `normalize`.
    """
    text = text.lower()
    text = strip_accents(text)
    text = text.strip()
    text = _apply_rules(text, SOUND_RULES)
    text = _apply_rules(text, CONFUSABLE_RULES)
    text = _REPEAT_RE.sub(r"\1", text)
    return _NON_SKELETON_RE.sub("", text)


def normalize(text: str) -> str:
    """
    Phonetic skeleton of `text`.

    Total over all strings: never raises, "" for empty or fully
    non-alphanumeric input. Idempotent: normalize(normalize(x)) == normalize(x).

    Examples:
        >>> normalize("Quattro")
        'kuatro'
        >>> normalize("pizza") == normalize("piza")
        True
    """
    if not text:
        return ""

    current = skeleton_pass(text)
    while True:
        again = skeleton_pass(current)
        if again == current:
            return current
        current = again
