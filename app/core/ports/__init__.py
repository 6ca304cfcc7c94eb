# app\core\ports\__init__.py
"""
Core Ports (Interfaces).

This package defines the abstract base classes (Protocols) that the
Infrastructure Adapters must implement. These interfaces allow the Core
Domain to talk to the translation service and to storage without knowing
the implementation details.
"""

from .translator_port import ITranslator
from .key_value_store import IKeyValueStore

__all__ = [
    "ITranslator",
    "IKeyValueStore",
]
