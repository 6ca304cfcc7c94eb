# app\adapters\api\routers\__init__.py
"""
API Route Definitions.

This package contains the specific route handlers (controllers) organized by domain area.
- `matching`: Phonetic scoring of recall attempts (Core Value).
- `translation`: Translation events with vocabulary scoring.
- `vocabulary`: Word records, history and data reset.
- `health`: System health checks.
"""

from .matching import router as matching_router
from .translation import router as translation_router
from .vocabulary import router as vocabulary_router
from .health import router as health_router

__all__ = [
    "matching_router",
    "translation_router",
    "vocabulary_router",
    "health_router",
]
