# tests\__init__.py
"""
Test Suite for the phonetic recall checker.

Organization:
- `core`: Phonetic rules, matcher, domain models and use cases with mocked ports.
- `adapters`: Storage, translator, CLI and HTTP API tests.
- `shared`: Cross-cutting helpers (resilience).
"""
