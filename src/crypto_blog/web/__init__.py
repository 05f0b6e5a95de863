"""
Web Module

Provides the FastAPI application serving the blog page.
"""

from .app import create_app

__all__ = ["create_app"]
