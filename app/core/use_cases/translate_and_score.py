# app/core/use_cases/translate_and_score.py
import uuid
import structlog
from typing import List

from app.core.domain.exceptions import (
    DomainError,
    EmptyInputError,
    LanguageNotSupportedError,
)
from app.core.domain.models import (
    SUPPORTED_TARGET_LANGUAGES,
    AppMode,
    MatchStatus,
    MatchType,
    TranslationHistoryItem,
    VocabularyItem,
)
from app.core.ports.translator_port import ITranslator
from app.core.use_cases.score_attempt import ScoreAttempt
from app.core.use_cases.vocabulary_ledger import VocabularyLedger
from app.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

# Marker put in place of an input match the translator made up.
HALLUCINATED_MATCH = "???"

class TranslateAndScore:
    """
    Use Case: One translation event of the chat.

    Responsibilities:
    1. Validates the request (non-blank text, taught language).
    2. Gets translation + vocabulary from the Translator Port.
    3. Discards input matches the translator invented (speaking mode).
    4. Scores every remaining item against what the user actually typed.
    5. Records the words and the event in the Vocabulary Ledger.
    """

    def __init__(self, translator: ITranslator, ledger: VocabularyLedger, scorer: ScoreAttempt):
        self.translator = translator
        self.ledger = ledger
        self.scorer = scorer

    async def execute(self, text: str, mode: AppMode, target_lang: str) -> TranslationHistoryItem:
        if not text or not text.strip():
            raise EmptyInputError()
        if target_lang not in SUPPORTED_TARGET_LANGUAGES:
            raise LanguageNotSupportedError(target_lang)

        with tracer.start_as_current_span("use_case.translate_and_score") as span:
            span.set_attribute("app.mode", mode.value)
            span.set_attribute("app.target_lang", target_lang)
            logger.info("translation_started", mode=mode.value, lang=target_lang)

            try:
                result = await self.translator.translate(text, mode, target_lang)

                vocabulary = result.vocabulary
                # Speaking only: listening items are exposures and keep their input_match
                if mode == AppMode.SPEAKING:
                    vocabulary = self._guard_hallucinations(text, vocabulary)
                vocabulary = [self._score_item(text, item, mode) for item in vocabulary]

                if vocabulary:
                    await self.ledger.save_vocabulary(vocabulary, target_lang)

                history_item = TranslationHistoryItem(
                    **result.model_dump(exclude={"vocabulary"}),
                    vocabulary=vocabulary,
                    id=str(uuid.uuid4()),
                    timestamp=self.ledger.clock(),
                    mode=mode,
                    target_lang=target_lang,
                )
                await self.ledger.save_history_item(history_item)

                wins = sum(1 for v in vocabulary if v.status == MatchStatus.WIN)
                span.set_attribute("app.vocabulary_size", len(vocabulary))
                span.set_attribute("app.wins", wins)
                logger.info("translation_success", lang=target_lang, words=len(vocabulary), wins=wins)

                return history_item

            except DomainError:
                raise
            except Exception as e:
                logger.error("translation_pipeline_failed", error=str(e), exc_info=True)
                raise DomainError(f"Unexpected translation failure: {str(e)}")

    def _guard_hallucinations(self, raw_input: str, items: List[VocabularyItem]) -> List[VocabularyItem]:
        """
        An item whose `input_match` does not occur in the typed text was made
        up by the translator; it can never be a win.
        """
        lowered = raw_input.lower()
        checked = []
        for item in items:
            if item.input_match and item.input_match.lower() not in lowered:
                logger.warning("hallucinated_input_match", word=item.word, input_match=item.input_match)
                item = item.model_copy(update={
                    "input_match": HALLUCINATED_MATCH,
                    "status": MatchStatus.LOOKUP,
                    "match_type": MatchType.NONE,
                    "similarity": 0,
                })
            checked.append(item)
        return checked

    def _score_item(self, raw_input: str, item: VocabularyItem, mode: AppMode) -> VocabularyItem:
        # Listening: the user only read the words, every one counts as seen
        if mode == AppMode.LISTENING:
            return item.model_copy(update={
                "status": MatchStatus.WIN,
                "match_type": MatchType.EXPOSURE,
                "similarity": 100,
            })

        if item.input_match == HALLUCINATED_MATCH:
            return item

        # The inflected form and the lemma are both acceptable targets.
        targets = {t for t in (item.original_form, item.word) if t}
        best = max(
            (self.scorer.execute(raw_input, t) for t in targets),
            key=lambda r: r.similarity,
            default=None,
        )
        if best is None:
            return item
        return item.model_copy(update={
            "status": best.status,
            "match_type": best.match_type,
            "similarity": best.similarity,
        })
