# app\adapters\__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in `app.core.ports`.
These adapters connect the application to the outside world:
- `api`: The Primary Adapter (Driving) - FastAPI web server.
- `cli`: Primary Adapter (Driving) - command-line scoring tools.
- `persistence`: Secondary Adapter (Driven) - key-value storage (JSON files, memory).
- `llm_adapter`: Secondary Adapter (Driven) - Gemini translation service.

In Hexagonal Architecture, dependencies point INWARD. These modules depend on `app.core`,
but `app.core` never imports from here.
"""
