# app\__init__.py
"""
AmiGo - phonetic recall checking for a language-learning chat app.

This package contains the service implementation following
Hexagonal Architecture (Ports & Adapters).
"""

__version__ = "1.0.0"
