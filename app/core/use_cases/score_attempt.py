# app/core/use_cases/score_attempt.py
import structlog
from typing import Optional

from app.core.domain.models import MatchResult
from app.core.domain.phonetics import MatchThresholds, evaluate
from app.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

class ScoreAttempt:
    """
    Use Case: Decides whether a typed attempt counts as recalling a target word.

    Thin, traced wrapper over the pure matcher; the thresholds are injected so
    the verdict follows configuration.
    """

    def __init__(self, thresholds: Optional[MatchThresholds] = None):
        self.thresholds = thresholds or MatchThresholds()

    def execute(self, raw_input: str, target_word: str) -> MatchResult:
        with tracer.start_as_current_span("use_case.score_attempt") as span:
            result = evaluate(raw_input, target_word, self.thresholds)

            span.set_attribute("app.similarity", result.similarity)
            span.set_attribute("app.match_type", result.match_type.value)
            logger.debug(
                "attempt_scored",
                target=target_word,
                similarity=result.similarity,
                status=result.status.value,
                match_type=result.match_type.value,
            )
            return result
