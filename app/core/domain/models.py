# app\core\domain\models.py
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field

# --- Enums ---

class AppMode(str, Enum):
    """Direction of a translation event."""
    SPEAKING = "SPEAKING"   # Source -> target: the user attempts target words
    LISTENING = "LISTENING" # Target -> source: extracted words are exposures

class MatchStatus(str, Enum):
    """Outcome of a recall attempt. Storage and UI branch on these exact strings."""
    WIN = "win"
    LOOKUP = "lookup"

class MatchType(str, Enum):
    """How a win was obtained."""
    EXACT = "exact"
    PHONETIC = "phonetic"
    NONE = "none"
    EXPOSURE = "exposure"   # Listening mode: seen, not produced

SUPPORTED_TARGET_LANGUAGES = ("it", "es", "fr", "de")

# --- Value Objects ---

class MatchResult(BaseModel):
    """
    Result of comparing one raw attempt against one target word.
    Computed fresh per pair; only its fields are copied onto vocabulary items.
    """
    similarity: int = Field(..., ge=0, le=100)
    status: MatchStatus
    match_type: MatchType

class VocabularyItem(BaseModel):
    """
    One target-language word extracted by the translator from a translation.
    """
    word: str = Field(..., description="Lemma (e.g. 'andare')")
    original_form: str = Field("", description="Form used in the translation (e.g. 'vado')")
    input_match: str = Field("", description="Word the user typed for it (e.g. 'kvatro')")
    translation: str = ""
    phonetics: str = ""

    # Attached locally after scoring
    status: MatchStatus = MatchStatus.LOOKUP
    match_type: MatchType = MatchType.NONE
    similarity: int = Field(0, ge=0, le=100)

class TranslationResult(BaseModel):
    """What the external translator hands back for one input text."""
    original: str
    translation: str
    phonetics: Optional[str] = None
    detected_language: Optional[str] = None
    vocabulary: List[VocabularyItem] = Field(default_factory=list)

class TranslationHistoryItem(TranslationResult):
    """A scored translation event as stored in the history log."""
    id: str
    timestamp: int  # epoch milliseconds
    mode: AppMode
    target_lang: str

# --- Entities ---

class WordItem(BaseModel):
    """
    Per-lemma frequency record kept by the vocabulary ledger.
    """
    word: str
    used_forms: List[str] = Field(default_factory=list)
    translation: Optional[str] = None
    phonetics: Optional[str] = None
    count: int = 0      # Current heat: lookups - wins, floored at 0
    lookups: int = 0    # Times the word had to be looked up
    wins: int = 0       # Times the word was produced correctly
    last_used: int = 0  # epoch milliseconds

class RankedWords(BaseModel):
    """Hot words split the way the word cloud shows them."""
    top: List[WordItem] = Field(default_factory=list)
    next: List[WordItem] = Field(default_factory=list)
    max_count: int = 1
