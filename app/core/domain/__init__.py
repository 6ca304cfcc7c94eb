# app\core\domain\__init__.py
"""
Domain Entities and Value Objects.

This package defines the core data structures used throughout the application
(vocabulary items, word records, match results) and the phonetic matching
rules. Nothing here touches infrastructure.
"""
