import asyncio
import json
import google.generativeai as genai
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import structlog

from app.core.domain.exceptions import EmptyInputError, TranslationFailedError
from app.core.domain.models import AppMode, TranslationResult, VocabularyItem
from app.core.ports.translator_port import ITranslator
from app.shared.config import settings
from app.shared.resilience import CircuitBreakerOpenError, get_circuit_breaker, retry_external_api

logger = structlog.get_logger()

SOURCE_LANGUAGE = "CZECH"

LANGUAGE_NAMES = {
    "it": "ITALIAN",
    "es": "SPANISH",
    "fr": "FRENCH",
    "de": "GERMAN",
}

# Response schema enforced by the API (JSON mode).
@dataclass
class VocabularyEntry:
    word: str
    originalForm: str
    inputMatch: str
    translation: str
    phonetics: str

@dataclass
class TranslationPayload:
    translation: str
    phonetics: str
    detectedLanguage: str
    vocabulary: List[VocabularyEntry]

# `genai.configure` installs one process-wide client. A call must configure
# its own key and finish under this lock, or it may run on another user's key.
_client_lock = asyncio.Lock()

_RESPONSE_SHAPE = """
Answer with JSON only, matching the response schema.
"""

def build_system_instruction(mode: AppMode, target_lang: str) -> str:
    target = LANGUAGE_NAMES.get(target_lang, target_lang.upper())

    if mode == AppMode.SPEAKING:
        return f"""
Role: Strict Translator & Linguist.
Task:
1. Translate the input to {target} (if {SOURCE_LANGUAGE}) or correct the {target} (if {target}).
2. Provide phonetics for {SOURCE_LANGUAGE} speakers.
3. Extract ALL significant words (verbs, nouns, adjectives, adverbs) from the FINAL {target} TEXT into 'vocabulary'.
   'word' is the dictionary lemma, 'originalForm' the exact form in the translation.
4. CRITICAL: for each word, 'inputMatch' is the word from the USER'S INPUT that triggered it, copied exactly as typed.
   Example input: "Já chci kvatro piva" -> {{"word": "quattro", "originalForm": "quattro", "inputMatch": "kvatro"}}
{_RESPONSE_SHAPE}"""

    return f"""
Role: Strict Translator.
Task:
1. Translate the user input ({target}) to {SOURCE_LANGUAGE}.
2. Extract key vocabulary from the {target} source; 'inputMatch' is the word as it appears in the input.
3. 'phonetics' of the whole translation is an empty string.
{_RESPONSE_SHAPE}"""


def _vocabulary_item(raw: Dict[str, Any]) -> Optional[VocabularyItem]:
    word = (raw.get("word") or "").strip()
    if not word:
        return None
    return VocabularyItem(
        word=word,
        original_form=raw.get("originalForm") or word,
        input_match=raw.get("inputMatch") or "",
        translation=raw.get("translation") or "",
        phonetics=raw.get("phonetics") or "",
    )


def parse_translation(original: str, payload: str) -> TranslationResult:
    """Maps the model's JSON answer onto a TranslationResult."""
    try:
        parsed = json.loads(payload)
    except (TypeError, json.JSONDecodeError) as e:
        raise TranslationFailedError(f"Malformed JSON from AI: {e}")

    if not isinstance(parsed, dict) or not parsed.get("translation"):
        raise TranslationFailedError("AI response has no translation.")

    vocabulary = []
    for raw in parsed.get("vocabulary") or []:
        if isinstance(raw, dict):
            item = _vocabulary_item(raw)
            if item:
                vocabulary.append(item)

    return TranslationResult(
        original=original,
        translation=parsed["translation"],
        phonetics=parsed.get("phonetics") or None,
        detected_language=parsed.get("detectedLanguage"),
        vocabulary=vocabulary,
    )


class GeminiTranslator(ITranslator):
    """
    Driven Adapter for Google Gemini translation + vocabulary extraction.
    Supports 'Bring Your Own Key' (BYOK) architecture.
    """
    def __init__(self, user_api_key: Optional[str] = None):
        self.api_key = None
        self.source = "None"
        self.breaker = get_circuit_breaker("gemini")

        # 1. Priority: User provided key (from Request Header)
        if user_api_key and user_api_key != "your_gemini_api_key_here":
            self.api_key = user_api_key
            self.source = "User-Provided"

        # 2. Fallback: Server setting
        elif settings.GOOGLE_API_KEY and settings.GOOGLE_API_KEY != "your_gemini_api_key_here":
            self.api_key = settings.GOOGLE_API_KEY
            self.source = "Server-Default"

        # 3. No key: log, do not crash; translate() reports it per call
        if not self.api_key:
            logger.warning("llm_init_skipped", msg="No valid Google API Key found. Translation is disabled.")

    async def translate(self, text: str, mode: AppMode, target_lang: str) -> TranslationResult:
        if not text or not text.strip():
            raise EmptyInputError()

        if not self.api_key:
            raise TranslationFailedError("AI translation is disabled because no valid Google API Key was found.")

        try:
            payload = await self.breaker.a_call(self._generate, text, mode, target_lang)
        except CircuitBreakerOpenError as e:
            raise TranslationFailedError(str(e))
        except TranslationFailedError:
            raise
        except Exception as e:
            # Quota errors are the user's key, not our outage
            if "429" in str(e):
                raise TranslationFailedError(f"Your Gemini API Key quota is exceeded ({self.source}).")
            logger.error("translation_call_failed", error=str(e))
            raise TranslationFailedError(str(e))

        return parse_translation(text, payload)

    @retry_external_api
    async def _generate(self, text: str, mode: AppMode, target_lang: str) -> str:
        async with _client_lock:
            genai.configure(api_key=self.api_key)
            model = genai.GenerativeModel(
                settings.AI_MODEL_NAME,
                system_instruction=build_system_instruction(mode, target_lang),
            )
            response = await model.generate_content_async(
                text,
                generation_config=genai.GenerationConfig(
                    response_mime_type="application/json",
                    response_schema=TranslationPayload,
                    temperature=settings.AI_TEMPERATURE,
                ),
            )
        if not response.text:
            raise TranslationFailedError("No response from AI")
        return response.text

    async def health_check(self) -> bool:
        return self.api_key is not None
