# app/main.py
"""
ASGI entry point: `uvicorn app.main:app`.
"""
from app.adapters.api.main import create_app

app = create_app()
