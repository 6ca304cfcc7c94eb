# app\shared\container.py
from dependency_injector import containers, providers

from app.shared.config import settings
from app.adapters.persistence.filesystem_store import FileSystemKeyValueStore
from app.adapters.persistence.memory_store import InMemoryKeyValueStore
from app.adapters.llm_adapter import GeminiTranslator

from app.core.domain.phonetics import MatchThresholds
from app.core.use_cases.score_attempt import ScoreAttempt
from app.core.use_cases.vocabulary_ledger import VocabularyLedger
from app.core.use_cases.translate_and_score import TranslateAndScore

class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the application.
    """

    # 1. Gateways (Infrastructure Adapters)

    # Persistence (Singleton: one access point to the store), chosen by STORAGE_BACKEND
    key_value_store = providers.Selector(
        providers.Callable(lambda: settings.STORAGE_BACKEND.value),
        filesystem=providers.Singleton(FileSystemKeyValueStore, base_path=settings.STORE_PATH),
        memory=providers.Singleton(InMemoryKeyValueStore),
    )

    # Translator (Factory: may carry a per-request user key)
    translator = providers.Factory(GeminiTranslator)

    # 2. Domain configuration
    match_thresholds = providers.Singleton(MatchThresholds.from_settings, settings)

    # 3. Use Cases (Application Logic)

    # Factory: New instance created for every request (stateless logic),
    # but with Singleton dependencies injected.

    vocabulary_ledger = providers.Factory(
        VocabularyLedger,
        store=key_value_store,
        history_limit=settings.HISTORY_LIMIT,
    )

    score_attempt_use_case = providers.Factory(
        ScoreAttempt,
        thresholds=match_thresholds,
    )

    translate_and_score_use_case = providers.Factory(
        TranslateAndScore,
        translator=translator,
        ledger=vocabulary_ledger,
        scorer=score_attempt_use_case,
    )

# Instantiate the container for global access (e.g. by FastAPI)
container = Container()
