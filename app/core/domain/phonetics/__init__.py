# app\core\domain\phonetics\__init__.py
"""
Phonetic recall checking.

Pure, stateless string functions: `normalize` builds the sound skeleton,
`score` / `classify` / `evaluate` decide whether an attempt is a win.
"""

from .skeleton import normalize
from .matcher import MatchThresholds, classify, evaluate, levenshtein, score

__all__ = [
    "normalize",
    "score",
    "classify",
    "evaluate",
    "levenshtein",
    "MatchThresholds",
]
