"""
Blog Controller Module

Owns the page state (post list, loading and submitting flags, form
values) and drives the backend in response to the page being mounted
and the form being submitted.

One controller lives for one page load; nothing is shared between
visitors or carried over a reload.

Backend failures are logged and swallowed: a failed fetch leaves the
list as it was, a failed create leaves the form populated.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..api import BackendClient, BackendError, Post
from .form import PostForm


logger = logging.getLogger(__name__)


class BlogController:
    """
    State holder and orchestrator for the blog page.

    Attributes:
        posts: Last successful get_posts response, in backend order.
        loading: True until the mount fetch has settled.
        submitting: True while a create (and its refresh) is in flight.
        form: Current form values.
        errors: Required-field messages from the last submit attempt.
        on_change: Called with no arguments when a submit starts, so a
            renderer can show the in-flight state.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.posts: List[Post] = []
        self.loading = True
        self.submitting = False
        self.form = PostForm()
        self.errors: Dict[str, str] = {}
        self.on_change: Optional[Callable[[], None]] = None

    async def initialize(self) -> None:
        """Load the post list when the page is shown."""
        self.loading = True
        try:
            await self._refresh_posts()
        finally:
            self.loading = False

    async def submit(self, title: str, body: str, author: str) -> bool:
        """
        Validate the form and create a post.

        Args:
            title: Post title.
            body: Post body.
            author: Author name.

        Returns:
            True if the post was created, False on validation or backend failure.
        """
        self.form = PostForm(title=title, body=body, author=author)
        self.errors = self.form.validate()
        if self.errors:
            logger.info(f"Submit rejected, missing fields: {', '.join(self.errors)}")
            return False

        self.submitting = True
        self._notify()
        try:
            try:
                await self.backend.create_post(title, body, author)
            except BackendError:
                logger.exception("Error creating post")
                return False

            self.form.reset()
            await self._refresh_posts()
            return True
        finally:
            self.submitting = False

    async def _refresh_posts(self) -> None:
        try:
            self.posts = await self.backend.get_posts()
        except BackendError:
            logger.exception("Error fetching posts")

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def get_summary(self) -> dict:
        """
        Get a summary of the controller state.

        Returns:
            Dictionary with the flags and post count.
        """
        return {
            "loading": self.loading,
            "submitting": self.submitting,
            "post_count": len(self.posts),
        }
