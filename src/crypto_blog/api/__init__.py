"""
Backend Client Module

Provides the async HTTP client for listing and creating blog posts.
"""

from .client import BackendClient, BackendError, Post

__all__ = ["BackendClient", "BackendError", "Post"]
