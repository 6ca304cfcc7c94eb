# app\adapters\persistence\__init__.py
"""
Persistence Adapters.

This package implements the key-value store port defined in the Core Domain.

Components:
- FileSystemKeyValueStore: one JSON file per key under a data folder.
- InMemoryKeyValueStore: process-local dict, for tests and ephemeral runs.
"""

from .filesystem_store import FileSystemKeyValueStore
from .memory_store import InMemoryKeyValueStore

__all__ = [
    "FileSystemKeyValueStore",
    "InMemoryKeyValueStore",
]
