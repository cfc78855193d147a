"""
All Access Artist API package.

Provides the FastAPI application for the All Access Artist subscription backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
