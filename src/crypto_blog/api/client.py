"""
Backend Client Module

Async HTTP client for the blog backend. Exposes the two operations the
page needs, listing posts and creating a post, and reports every kind of
failure as a single BackendError.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional
from dataclasses import dataclass

import httpx

from ..config import config


logger = logging.getLogger(__name__)

NANOS_PER_MILLI = 1_000_000


class BackendError(RuntimeError):
    """Raised when a backend call fails for any reason."""


@dataclass(frozen=True)
class Post:
    """Represents a post owned by the backend."""
    id: int
    title: str
    body: str
    author: str
    timestamp: int  # nanoseconds since the epoch

    @property
    def timestamp_ms(self) -> int:
        """Creation time in milliseconds."""
        return self.timestamp // NANOS_PER_MILLI

    def format_timestamp(self) -> str:
        """Format the creation time in local time for display."""
        moment = datetime.fromtimestamp(self.timestamp_ms / 1000)
        return moment.strftime(config.page.timestamp_format)

    @classmethod
    def from_dict(cls, item: Any) -> "Post":
        """
        Build a Post from a decoded JSON object.

        Integer fields may arrive as JSON numbers or decimal strings,
        since nanosecond timestamps overflow many JSON encoders.

        Raises:
            BackendError: If the object is missing keys or has bad values.
        """
        try:
            return cls(
                id=int(item["id"]),
                title=_text(item, "title"),
                body=_text(item, "body"),
                author=_text(item, "author"),
                timestamp=int(item["timestamp"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise BackendError(f"Malformed post in backend response: {e!r}") from e


def _text(item: Any, key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


class BackendClient:
    """
    HTTP client for the blog backend.

    No retries are attempted; a call either succeeds or raises
    BackendError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        posts_endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the backend client.

        Args:
            base_url: Backend base URL (uses config default if None).
            posts_endpoint: Path of the posts collection (uses config default if None).
            timeout: Seconds before a call is abandoned (uses config default if None).
            transport: Optional httpx transport, mainly for tests.
        """
        self.base_url = (base_url or config.backend.base_url).rstrip("/")
        self.posts_endpoint = posts_endpoint or config.backend.posts_endpoint
        self.timeout = timeout if timeout is not None else config.backend.timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )
        logger.info(f"BackendClient initialized (base_url: {self.base_url})")

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def get_posts(self) -> List[Post]:
        """
        Fetch all posts, in the order the backend returns them.

        Returns:
            List of Post objects.

        Raises:
            BackendError: If the request or decoding fails.
        """
        logger.debug(f"GET {self.base_url}{self.posts_endpoint}")
        data = await self._request("GET", self.posts_endpoint)

        # Accept both a bare array and a {"posts": [...]} envelope
        if isinstance(data, dict) and "posts" in data:
            items = data["posts"]
        else:
            items = data
        if not isinstance(items, list):
            raise BackendError(f"Unexpected backend response format: {type(items).__name__}")

        posts = [Post.from_dict(item) for item in items]
        logger.info(f"Fetched {len(posts)} posts")
        return posts

    async def create_post(self, title: str, body: str, author: str) -> Post:
        """
        Create a post.

        Args:
            title: Post title.
            body: Post body.
            author: Author name.

        Returns:
            The Post as stored by the backend.

        Raises:
            BackendError: If the request or decoding fails.
        """
        logger.debug(f"POST {self.base_url}{self.posts_endpoint}")
        data = await self._request(
            "POST",
            self.posts_endpoint,
            json={"title": title, "body": body, "author": author},
        )
        post = Post.from_dict(data)
        logger.info(f"Created post {post.id}")
        return post

    async def test_connection(self) -> bool:
        """Check whether the backend answers a post listing."""
        try:
            await self.get_posts()
            return True
        except BackendError as e:
            logger.warning(f"Backend connection test failed: {e}")
            return False

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise BackendError(f"Timeout calling backend: {e}") from e
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"Backend returned HTTP {e.response.status_code} for {method} {path}"
            ) from e
        except httpx.HTTPError as e:
            raise BackendError(f"HTTP error calling backend: {e}") from e
        except ValueError as e:
            raise BackendError(f"Backend returned invalid JSON: {e}") from e
