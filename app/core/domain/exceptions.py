# app/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Validation Errors ---

class EmptyInputError(DomainError):
    """Raised when a translation is requested for blank text."""
    def __init__(self):
        super().__init__("Input text is empty.")

class LanguageNotSupportedError(DomainError):
    """Raised when the requested target language is not one the app teaches."""
    def __init__(self, lang_code: str):
        super().__init__(f"Target language '{lang_code}' is not supported.")

# --- Collaborator Errors ---

class TranslationFailedError(DomainError):
    """Raised when the external translation service fails or returns garbage."""
    def __init__(self, details: str):
        super().__init__(f"Translation failed: {details}")

class StorageError(DomainError):
    """Raised when the key-value store cannot read or persist a value."""
    def __init__(self, key: str, details: str):
        super().__init__(f"Storage operation on '{key}' failed: {details}")
