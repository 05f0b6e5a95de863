"""
Tests for the Backend Client

Tests for listing and creating posts over HTTP and for the single
BackendError failure mode.
"""

import asyncio
import json
import pytest
import sys
from datetime import datetime
from pathlib import Path

import httpx

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from crypto_blog.api.client import BackendClient, BackendError, Post
from crypto_blog.config import config


POST_JSON = {
    "id": 1,
    "title": "Bitcoin",
    "body": "To the moon",
    "author": "Satoshi",
    "timestamp": "1725526169000000000",
}


def run_with(handler, coro_factory):
    """Run a client coroutine against a mock transport handler."""
    async def run():
        async with BackendClient(
            base_url="http://backend.test",
            transport=httpx.MockTransport(handler),
        ) as client:
            return await coro_factory(client)

    return asyncio.run(run())


class TestPost:
    """Tests for the Post model."""

    def test_from_dict_accepts_string_integers(self):
        """Test that big integers may arrive as strings."""
        post = Post.from_dict(POST_JSON)

        assert post.id == 1
        assert post.timestamp == 1725526169000000000
        assert post.author == "Satoshi"

    def test_from_dict_missing_key(self):
        """Test that a missing key is a backend failure."""
        item = dict(POST_JSON)
        del item["author"]

        with pytest.raises(BackendError):
            Post.from_dict(item)

    def test_from_dict_bad_timestamp(self):
        """Test that a non-integer timestamp is a backend failure."""
        with pytest.raises(BackendError):
            Post.from_dict({**POST_JSON, "timestamp": "yesterday"})

    @pytest.mark.parametrize("key", ["title", "body", "author"])
    def test_from_dict_null_text(self, key):
        """Test that a null text field is a backend failure, not the text "None"."""
        with pytest.raises(BackendError):
            Post.from_dict({**POST_JSON, key: None})

    def test_from_dict_non_string_text(self):
        """Test that a number where text belongs is a backend failure."""
        with pytest.raises(BackendError):
            Post.from_dict({**POST_JSON, "author": 42})

    def test_timestamp_ms(self):
        """Test converting nanoseconds to milliseconds."""
        post = Post.from_dict(POST_JSON)

        assert post.timestamp_ms == 1725526169000

    def test_format_timestamp(self):
        """Test that the display time is the local time of the milliseconds."""
        post = Post.from_dict(POST_JSON)
        expected = datetime.fromtimestamp(1725526169).strftime(config.page.timestamp_format)

        assert post.format_timestamp() == expected


class TestBackendClient:
    """Tests for backend client functionality."""

    def test_initialization_defaults(self):
        """Test that the client falls back to the configured backend."""
        async def build():
            async with BackendClient() as client:
                return client.base_url, client.posts_endpoint

        base_url, endpoint = asyncio.run(build())

        assert base_url == config.backend.base_url.rstrip("/")
        assert endpoint == "/posts"

    def test_get_posts(self):
        """Test listing posts keeps backend order."""
        second = {**POST_JSON, "id": 2, "title": "Ether"}

        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/posts"
            return httpx.Response(200, json=[second, POST_JSON])

        posts = run_with(handler, lambda c: c.get_posts())

        assert [p.id for p in posts] == [2, 1]
        assert all(isinstance(p, Post) for p in posts)

    def test_get_posts_envelope(self):
        """Test that a {"posts": [...]} envelope is accepted."""
        def handler(request):
            return httpx.Response(200, json={"posts": [POST_JSON]})

        posts = run_with(handler, lambda c: c.get_posts())

        assert len(posts) == 1

    def test_get_posts_empty(self):
        """Test listing when the backend has no posts."""
        posts = run_with(lambda r: httpx.Response(200, json=[]), lambda c: c.get_posts())

        assert posts == []

    def test_create_post(self):
        """Test that create_post sends the three fields as JSON."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["payload"] = json.loads(request.content)
            return httpx.Response(200, json={**POST_JSON, "title": "Hello"})

        post = run_with(handler, lambda c: c.create_post("Hello", "World", "Alice"))

        assert seen["method"] == "POST"
        assert seen["payload"] == {"title": "Hello", "body": "World", "author": "Alice"}
        assert post.title == "Hello"

    @pytest.mark.parametrize("response", [
        httpx.Response(500, text="boom"),
        httpx.Response(404),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, json=[{"id": 1}]),
    ])
    def test_bad_responses_raise_backend_error(self, response):
        """Test that every bad response surfaces as BackendError."""
        with pytest.raises(BackendError):
            run_with(lambda r: response, lambda c: c.get_posts())

    def test_null_field_in_listing_raises_backend_error(self):
        """Test that a listing with a null author fails as a whole."""
        def handler(request):
            return httpx.Response(200, json=[{**POST_JSON, "author": None}])

        with pytest.raises(BackendError):
            run_with(handler, lambda c: c.get_posts())

    def test_transport_error_raises_backend_error(self):
        """Test that a connection failure surfaces as BackendError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BackendError):
            run_with(handler, lambda c: c.create_post("Hello", "World", "Alice"))

    def test_timeout_raises_backend_error(self):
        """Test that a timeout surfaces as BackendError."""
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(BackendError):
            run_with(handler, lambda c: c.get_posts())

    def test_connection_check(self):
        """Test the connection check reports success and failure."""
        ok = run_with(lambda r: httpx.Response(200, json=[]), lambda c: c.test_connection())
        down = run_with(lambda r: httpx.Response(503), lambda c: c.test_connection())

        assert ok is True
        assert down is False


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
