"""
Page Renderer Module

Turns the controller state into the HTML page using Jinja2 templates.

The page can be rendered in one piece, or streamed while the controller
talks to the backend: the hero goes out first, then the form and post
list as they stand (progress indicator, disabled submit button), then
each later state. Every new state block hides the one before it with a
one-line style rule, so the browser shows in-flight states without any
script.
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import config
from .controller import BlogController


logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class PageRenderer:
    """Renders the single blog page."""

    def __init__(self):
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.top = self.env.get_template("page_top.html")
        self.main = self.env.get_template("page_main.html")
        self.bottom = self.env.get_template("page_bottom.html")

    def render(self, controller: BlogController) -> str:
        """
        Render the whole page for the current controller state.

        Args:
            controller: The page controller.

        Returns:
            The HTML document.
        """
        return self.render_top() + self.render_main(controller) + self.render_bottom()

    def render_top(self) -> str:
        return self.top.render(page=config.page)

    def render_main(self, controller: BlogController, id_prefix: str = "") -> str:
        """Render the form and post list; id_prefix keeps element ids unique per state."""
        logger.debug(f"Rendering page state: {controller.get_summary()}")
        return self.main.render(
            posts=controller.posts,
            loading=controller.loading,
            submitting=controller.submitting,
            form=controller.form,
            errors=controller.errors,
            id_prefix=id_prefix,
        )

    def render_bottom(self) -> str:
        return self.bottom.render()

    async def stream(
        self,
        controller: BlogController,
        action: Callable[[], Awaitable[object]],
    ) -> AsyncIterator[str]:
        """
        Stream the page while action runs against the controller.

        Args:
            controller: The page controller.
            action: Coroutine function driving the controller (mount, submit).

        Yields:
            HTML chunks; the last state block is the settled page.
        """
        snapshots: asyncio.Queue = asyncio.Queue()
        counter = [0]

        def snapshot() -> None:
            counter[0] += 1
            index = counter[0]
            snapshots.put_nowait(
                (index, self.render_main(controller, id_prefix=f"state-{index}-"))
            )

        controller.on_change = snapshot
        try:
            yield self.render_top()
            yield _state_block(0, self.render_main(controller, id_prefix="state-0-"))

            task = asyncio.ensure_future(action())
            while True:
                getter = asyncio.ensure_future(snapshots.get())
                done, _ = await asyncio.wait(
                    {getter, task}, return_when=asyncio.FIRST_COMPLETED
                )
                if getter not in done:
                    getter.cancel()
                    break
                index, html = getter.result()
                yield _state_block(index, html)
            while not snapshots.empty():
                index, html = snapshots.get_nowait()
                yield _state_block(index, html)
            await task
        finally:
            controller.on_change = None

        yield _state_block(counter[0] + 1, self.render_main(controller))
        yield self.render_bottom()


def _state_block(index: int, html: str) -> str:
    hide = f'<style>#state-{index - 1}{{display:none}}</style>\n' if index else ""
    return f'{hide}<div class="state" id="state-{index}">\n{html}</div>\n'
