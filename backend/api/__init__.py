"""
Garage Console API package.

Provides the FastAPI application for the garage management console.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
