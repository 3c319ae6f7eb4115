"""
Name: Backend ASGI Entrypoint (app.main)

Responsibilities:
  - Re-export the FastAPI app for uvicorn (`uvicorn app.main:app`) and tests

Notes:
  - No configuration or IO lives here; wiring is in app.api.main
"""

from app.api.main import app

__all__ = ["app"]
