import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from enum import Enum
from typing import Optional

class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

class StorageBackend(str, Enum):
    FILESYSTEM = "filesystem"
    MEMORY = "memory"

class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "amigo-phonetic-recall"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- Security ---
    API_SECRET: str = "change-me-for-production"

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "amigo-backend"

    # --- AI Translator ---
    GOOGLE_API_KEY: Optional[str] = None
    AI_MODEL_NAME: str = "gemini-2.5-flash"
    AI_TEMPERATURE: float = 0.0  # Zero temperature for maximum determinism
    TRANSLATOR_TIMEOUT: int = 30

    # --- Persistence ---
    STORAGE_BACKEND: StorageBackend = StorageBackend.FILESYSTEM
    DATA_DIR: str = "./data"
    HISTORY_LIMIT: int = 50

    # --- Phonetic Matching ---
    # Similarity (0-100) at or above which an attempt counts as a recall win.
    MATCH_WIN_THRESHOLD: int = 65
    # Similarity at or above which a win is tagged as an exact match.
    MATCH_EXACT_THRESHOLD: int = 100

    # --- Dynamic Path Resolution ---

    @property
    def STORE_PATH(self) -> str:
        """Folder holding one JSON file per key of the key-value store."""
        return os.path.join(self.DATA_DIR, "store")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
