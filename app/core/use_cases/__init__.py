# app\core\use_cases\__init__.py
"""
Core Use Cases (Application Logic).

This package contains the "Interactors" of the system. They orchestrate
the flow of data between the Domain Entities and the Infrastructure Ports.
Each use case represents a specific business action (e.g., "Score Attempt",
"Translate And Score") and is responsible for:
1. Validating input/request models.
2. Interacting with Ports (Translator, Key-Value Store).
3. Returning Domain Entities.
"""

from .score_attempt import ScoreAttempt
from .vocabulary_ledger import VocabularyLedger
from .translate_and_score import TranslateAndScore

__all__ = [
    "ScoreAttempt",
    "VocabularyLedger",
    "TranslateAndScore",
]
