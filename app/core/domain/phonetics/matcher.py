# phonetics\matcher.py
"""
APPROXIMATE MATCHER
-------------------

Scores how well a raw attempt matches a target word, on the skeletons
produced by `phonetics.skeleton.normalize`.

Scoring:

- empty target skeleton                      -> 0
- target skeleton contained in the input one -> 100 (extra words are fine)
- otherwise slide a window of the target length (and one shorter, one
  longer) over the input skeleton and keep the smallest Levenshtein
  distance to the target; similarity = 100 - distance / len(target) * 100.

Each window is compared with plain whole-string Levenshtein rather than a
local alignment. The thresholds in `MatchThresholds` were tuned against the
output of exactly this scheme.

Cost is O(n * m^2) for input length n and target length m, fine for words
and short phrases but grows quickly for paragraphs.

`score` is not symmetric: the windows always slide over the input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from app.core.domain.models import MatchResult, MatchStatus, MatchType
from app.core.domain.phonetics.skeleton import normalize

__all__ = [
    "WINDOW_OFFSETS",
    "MatchThresholds",
    "levenshtein",
    "similarity_from_distance",
    "score",
    "classify",
    "evaluate",
]

# Window length variations around the target length.
WINDOW_OFFSETS = (-1, 0, 1)


@dataclass(frozen=True)
class MatchThresholds:
    """
    Product constants deciding how forgiving recall checking is.

    `win`: lowest similarity that still counts as a correct recall.
    `exact`: lowest similarity tagged as an exact match.
    """
    win: int = 65
    exact: int = 100

    @classmethod
    def from_settings(cls, settings) -> "MatchThresholds":
        return cls(
            win=settings.MATCH_WIN_THRESHOLD,
            exact=settings.MATCH_EXACT_THRESHOLD,
        )


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit-cost insertions, deletions and substitutions."""
    if len(a) < len(b):
        a, b = b, a
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        curr = [i]
        for j, cb in enumerate(b, 1):
            cost = 0 if ca == cb else 1
            curr.append(min(prev[j] + 1, curr[j - 1] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]


def similarity_from_distance(distance: int, target_length: int) -> int:
    """
    Map an edit distance onto 0..100, rounding halves up.
    """
    raw = 100 - (distance / max(target_length, 1)) * 100
    return int(math.floor(max(0.0, raw) + 0.5))


def _min_window_distance(skel_input: str, skel_target: str) -> int:
    window_size = len(skel_target)
    input_length = len(skel_input)

    # Distance to the empty string; also the answer when no window fits.
    best = window_size

    for start in range(0, input_length - window_size + 2):
        for offset in WINDOW_OFFSETS:
            length = window_size + offset
            if length < 1 or start + length > input_length:
                continue
            distance = levenshtein(skel_input[start:start + length], skel_target)
            if distance < best:
                best = distance
                if best == 0:
                    return 0
    return best


def score(raw_input: str, target_word: str) -> int:
    """
    Similarity (0..100) of `raw_input` against `target_word`.

    Never raises. Empty target gives 0; empty input against a non-empty
    target gives 0.
    """
    skel_input = normalize(raw_input or "")
    skel_target = normalize(target_word or "")

    if not skel_target:
        return 0

    if skel_target in skel_input:
        return 100

    distance = _min_window_distance(skel_input, skel_target)
    return similarity_from_distance(distance, len(skel_target))


def classify(similarity: int, thresholds: Optional[MatchThresholds] = None) -> MatchResult:
    """Turn a similarity score into the win/lookup verdict."""
    limits = thresholds or MatchThresholds()

    if similarity >= limits.exact:
        return MatchResult(similarity=similarity, status=MatchStatus.WIN, match_type=MatchType.EXACT)
    if similarity >= limits.win:
        return MatchResult(similarity=similarity, status=MatchStatus.WIN, match_type=MatchType.PHONETIC)
    return MatchResult(similarity=similarity, status=MatchStatus.LOOKUP, match_type=MatchType.NONE)


def evaluate(raw_input: str, target_word: str, thresholds: Optional[MatchThresholds] = None) -> MatchResult:
    """`score` followed by `classify`."""
    return classify(score(raw_input, target_word), thresholds)
