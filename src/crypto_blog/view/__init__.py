"""
View Module

Provides the page controller, form state and HTML renderer.
"""

from .form import PostForm
from .controller import BlogController
from .render import PageRenderer

__all__ = ["PostForm", "BlogController", "PageRenderer"]
