# tests\core\test_use_cases.py
import pytest

from app.core.domain.exceptions import (
    DomainError,
    EmptyInputError,
    LanguageNotSupportedError,
    TranslationFailedError,
)
from app.core.domain.models import AppMode, MatchStatus, MatchType
from app.core.use_cases.translate_and_score import HALLUCINATED_MATCH


class TestScoreAttempt:

    def test_uses_configured_thresholds(self, container):
        use_case = container.score_attempt_use_case()
        result = use_case.execute("kvatro", "quattro")

        assert result.similarity == 83
        assert result.status == MatchStatus.WIN
        assert result.match_type == MatchType.PHONETIC

    def test_lookup(self, container):
        result = container.score_attempt_use_case().execute("xyz", "buongiorno")
        assert result.status == MatchStatus.LOOKUP


@pytest.mark.asyncio
class TestTranslateAndScore:

    async def test_speaking_scores_each_word(self, container, mock_translator, sample_translation):
        """
        Scenario: The user types a Czech sentence with one transliterated Italian word.
        Expected: 'quattro' is a phonetic win, 'birra' a lookup, the invented match is discarded.
        """
        # Arrange
        mock_translator.translate.return_value = sample_translation
        use_case = container.translate_and_score_use_case()

        # Act
        item = await use_case.execute("Já chci kvatro piva", AppMode.SPEAKING, "it")

        # Assert
        mock_translator.translate.assert_called_once_with("Já chci kvatro piva", AppMode.SPEAKING, "it")
        by_word = {v.word: v for v in item.vocabulary}

        assert by_word["quattro"].status == MatchStatus.WIN
        assert by_word["quattro"].match_type == MatchType.PHONETIC
        assert by_word["quattro"].similarity == 83

        assert by_word["birra"].status == MatchStatus.LOOKUP
        assert by_word["birra"].match_type == MatchType.NONE

        assert by_word["grazie"].input_match == HALLUCINATED_MATCH
        assert by_word["grazie"].status == MatchStatus.LOOKUP

        assert item.translation == "Voglio quattro birre"
        assert item.mode == AppMode.SPEAKING
        assert item.target_lang == "it"

    async def test_words_and_history_are_recorded(self, container, mock_translator, sample_translation):
        mock_translator.translate.return_value = sample_translation
        use_case = container.translate_and_score_use_case()

        item = await use_case.execute("Já chci kvatro piva", AppMode.SPEAKING, "it")

        ledger = container.vocabulary_ledger()
        words = {w.word: w for w in await ledger.get_words("it")}
        assert words["quattro"].wins == 1
        assert words["quattro"].count == 0
        assert words["birra"].lookups == 1
        assert words["birra"].count == 1
        assert words["birra"].used_forms == ["birre"]

        history = await ledger.get_history("it")
        assert [h.id for h in history] == [item.id]

    async def test_listening_marks_exposure(self, container, mock_translator, sample_translation):
        mock_translator.translate.return_value = sample_translation
        use_case = container.translate_and_score_use_case()

        item = await use_case.execute("Vorrei quattro birre", AppMode.LISTENING, "it")

        assert all(v.status == MatchStatus.WIN for v in item.vocabulary)
        assert all(v.match_type == MatchType.EXPOSURE for v in item.vocabulary)
        assert HALLUCINATED_MATCH not in {v.input_match for v in item.vocabulary}

    async def test_exact_match_on_lemma(self, container, mock_translator, sample_translation):
        """An inflected form in the translation still counts when the user typed the lemma."""
        mock_translator.translate.return_value = sample_translation
        use_case = container.translate_and_score_use_case()

        item = await use_case.execute("due birra kvatro piva", AppMode.SPEAKING, "it")

        birra = next(v for v in item.vocabulary if v.word == "birra")
        assert birra.similarity == 100
        assert birra.match_type == MatchType.EXACT

    async def test_empty_input(self, container, mock_translator):
        use_case = container.translate_and_score_use_case()

        with pytest.raises(EmptyInputError):
            await use_case.execute("   ", AppMode.SPEAKING, "it")
        mock_translator.translate.assert_not_called()

    async def test_unsupported_language(self, container):
        use_case = container.translate_and_score_use_case()

        with pytest.raises(LanguageNotSupportedError):
            await use_case.execute("ahoj", AppMode.SPEAKING, "xx")

    async def test_translator_failure_propagates(self, container, mock_translator):
        mock_translator.translate.side_effect = TranslationFailedError("quota")
        use_case = container.translate_and_score_use_case()

        with pytest.raises(TranslationFailedError):
            await use_case.execute("ahoj", AppMode.SPEAKING, "it")

    async def test_unexpected_failure_is_wrapped(self, container, mock_translator):
        mock_translator.translate.side_effect = RuntimeError("boom")
        use_case = container.translate_and_score_use_case()

        with pytest.raises(DomainError) as excinfo:
            await use_case.execute("ahoj", AppMode.SPEAKING, "it")

        assert "Unexpected translation failure" in str(excinfo.value)
