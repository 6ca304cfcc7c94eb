# app/core/ports/translator_port.py
from abc import ABC, abstractmethod

from app.core.domain.models import AppMode, TranslationResult

class ITranslator(ABC):
    """
    Port (Interface) for the generative translation service.
    Adapters (like GeminiTranslator) must implement this.

    The service is a black box: it translates the text and extracts the
    target-language vocabulary, each item carrying the word the user typed
    for it ('input_match').
    """

    @abstractmethod
    async def translate(self, text: str, mode: AppMode, target_lang: str) -> TranslationResult:
        """
        Translates `text` in the direction given by `mode`.

        Raises:
            EmptyInputError: `text` is blank.
            TranslationFailedError: the service failed or answered garbage.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Returns True if the translator is configured and usable."""
        pass
