"""
Neoflix API package.

Provides the FastAPI application for the Neoflix subscription catalog.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
