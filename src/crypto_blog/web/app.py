"""
Web Application Module

FastAPI application serving the blog page. Each request gets its own
BlogController, so every page load fetches the list afresh and form
state never leaks between visitors. Pages are streamed so the loading
and submitting states reach the browser while the backend works.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Form
from fastapi.responses import HTMLResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from ..api import BackendClient
from ..config import config
from ..view import BlogController, PageRenderer, PostForm


logger = logging.getLogger(__name__)


def create_app(backend: Optional[BackendClient] = None) -> FastAPI:
    """
    Build the page application.

    Args:
        backend: Backend client (a new BackendClient from config if None).

    Returns:
        The FastAPI application.
    """
    backend = backend or BackendClient()
    renderer = PageRenderer()

    # Close the backend connection pool on shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await backend.aclose()

    app = FastAPI(title=config.page.title, docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.backend = backend

    # Mount static files
    static_path = os.path.join(os.path.dirname(__file__), "static")
    if os.path.exists(static_path):
        app.mount("/static", StaticFiles(directory=static_path), name="static")

    @app.get("/")
    async def index():
        controller = BlogController(backend)
        return StreamingResponse(
            renderer.stream(controller, controller.initialize),
            media_type="text/html",
        )

    @app.post("/posts")
    async def submit_post(
        title: str = Form(""),
        body: str = Form(""),
        author: str = Form(""),
    ):
        controller = BlogController(backend)

        if PostForm(title=title, body=body, author=author).validate():
            await controller.initialize()
            await controller.submit(title, body, author)
            return HTMLResponse(renderer.render(controller), status_code=422)

        async def mount_and_submit():
            await controller.initialize()
            await controller.submit(title, body, author)

        controller.form = PostForm(title=title, body=body, author=author)
        return StreamingResponse(
            renderer.stream(controller, mount_and_submit),
            media_type="text/html",
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "backend": backend.base_url}

    logger.info(f"Page application created (backend: {backend.base_url})")
    return app
