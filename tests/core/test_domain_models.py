# tests\core\test_domain_models.py
import pytest
from pydantic import ValidationError
from app.core.domain.models import (
    AppMode,
    MatchResult,
    MatchStatus,
    MatchType,
    TranslationHistoryItem,
    VocabularyItem,
    WordItem,
)

class TestMatchResultModel:
    def test_similarity_bounds(self):
        with pytest.raises(ValidationError):
            MatchResult(similarity=101, status=MatchStatus.WIN, match_type=MatchType.EXACT)
        with pytest.raises(ValidationError):
            MatchResult(similarity=-1, status=MatchStatus.LOOKUP, match_type=MatchType.NONE)

    def test_accepts_raw_strings(self):
        """Stored records come back as plain strings."""
        result = MatchResult(similarity=70, status="win", match_type="phonetic")
        assert result.status == MatchStatus.WIN
        assert result.match_type == MatchType.PHONETIC

class TestVocabularyItemModel:
    def test_defaults_to_unscored_lookup(self):
        item = VocabularyItem(word="andare")
        assert item.status == MatchStatus.LOOKUP
        assert item.match_type == MatchType.NONE
        assert item.similarity == 0
        assert item.original_form == ""

    def test_missing_word(self):
        with pytest.raises(ValidationError):
            VocabularyItem(original_form="vado")

class TestWordItemModel:
    def test_defaults(self):
        word = WordItem(word="pivo")
        assert word.used_forms == []
        assert (word.count, word.lookups, word.wins) == (0, 0, 0)

class TestHistoryItemModel:
    def test_json_round_trip_keeps_enums(self):
        item = TranslationHistoryItem(
            id="1", timestamp=1, mode=AppMode.LISTENING, target_lang="it",
            original="ciao", translation="ahoj",
            vocabulary=[VocabularyItem(word="ciao", status="win", match_type="exposure", similarity=100)],
        )
        restored = TranslationHistoryItem(**item.model_dump(mode="json"))
        assert restored.mode == AppMode.LISTENING
        assert restored.vocabulary[0].match_type == MatchType.EXPOSURE
