# tests\conftest.py
import pytest
from unittest.mock import AsyncMock, MagicMock
from dependency_injector import providers

from app.shared.container import container as app_container
from app.adapters.persistence.memory_store import InMemoryKeyValueStore
from app.core.domain.models import TranslationResult, VocabularyItem
from app.core.ports.translator_port import ITranslator

@pytest.fixture(scope="function")
def memory_store():
    """A fresh in-memory key-value store."""
    return InMemoryKeyValueStore()

@pytest.fixture(scope="function")
def mock_translator():
    """Returns a mock implementation of the Translator Port."""
    translator = MagicMock(spec=ITranslator)
    # Async methods must be mocked with AsyncMock
    translator.translate = AsyncMock()
    translator.health_check = AsyncMock(return_value=True)
    return translator

@pytest.fixture(scope="function")
def container(memory_store, mock_translator):
    """
    The application container with real infrastructure replaced:
    storage by an in-memory store, Gemini by a mock.
    """
    app_container.key_value_store.override(providers.Object(memory_store))
    app_container.translator.override(providers.Object(mock_translator))

    yield app_container

    # Clean up overrides after test
    app_container.key_value_store.reset_override()
    app_container.translator.reset_override()

@pytest.fixture
def sample_translation():
    """
    What the translator answers for the Czech "Já chci kvatro piva".
    The 'grazie' item claims an input word that was never typed.
    """
    return TranslationResult(
        original="Já chci kvatro piva",
        translation="Voglio quattro birre",
        phonetics="volljo kvatro birre",
        detected_language="cs",
        vocabulary=[
            VocabularyItem(word="quattro", original_form="quattro", input_match="kvatro",
                           translation="čtyři", phonetics="kvatro"),
            VocabularyItem(word="birra", original_form="birre", input_match="piva",
                           translation="pivo", phonetics="birre"),
            VocabularyItem(word="grazie", original_form="grazie", input_match="děkuji",
                           translation="děkuji", phonetics="gracie"),
        ],
    )
