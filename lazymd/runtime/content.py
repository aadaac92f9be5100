"""Scrollable document pane shared by the dual-pane and single-file viewers.

The pane always has displayable lines: verbatim text is shown the moment
content arrives, and rendered lines replace it when the background render for
the current generation finishes. Engine lookups and renders are returned as
tasks; stale results (old width, old generation) are dropped on arrival.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from loguru import logger

from ..render import MarkdownRenderer, RendererCache, render_lines
from ..text import read_text, split_lines
from .layout import DEFAULT_WRAP_WIDTH, clamp_viewport
from .messages import Command, ContentRendered, DocumentLoaded, RendererReady, Task


class ViewMode(Enum):
    RENDERED = "rendered"
    RAW = "raw"

    @property
    def label(self) -> str:
        return "Raw" if self is ViewMode.RAW else "Rendered"

    def toggled(self) -> "ViewMode":
        return ViewMode.RENDERED if self is ViewMode.RAW else ViewMode.RAW


def load_document_task(path: Path) -> DocumentLoaded:
    try:
        content = read_text(path)
    except OSError as exc:
        logger.warning("cannot read {}: {}", path, exc)
        return DocumentLoaded(path=path, content="", error=str(exc))
    return DocumentLoaded(path=path, content=content)


def create_renderer_task(cache: RendererCache, width: int) -> RendererReady:
    return RendererReady(width=width, renderer=cache.get_or_create(width))


def render_task(generation: int, content: str, width: int, renderer: MarkdownRenderer) -> ContentRendered:
    return ContentRendered(generation=generation, lines=render_lines(content, width, False, renderer))


class ContentPane:
    """Document text, its display lines, and the pane's scroll offset."""

    def __init__(
        self,
        cache: RendererCache,
        wrap_width: int = DEFAULT_WRAP_WIDTH,
        view_mode: ViewMode = ViewMode.RENDERED,
        placeholder: str = "",
    ) -> None:
        self.cache = cache
        self.wrap_width = wrap_width
        self.view_mode = view_mode
        self.content = ""
        self.lines: list[str] = [placeholder] if placeholder else []
        self.top = 0
        self.visible_height = 1
        self.renderer: MarkdownRenderer | None = None
        self.generation = 0
        self._renderer_requested_width: int | None = None
        self._renderer_failed_width: int | None = None

    @property
    def raw(self) -> bool:
        return self.view_mode is ViewMode.RAW

    def load(self, content: str) -> list[Command]:
        """Replace the document and scroll back to the top."""
        self.content = content
        self.top = 0
        return self.refresh()

    def show_error(self, message: str) -> None:
        """Replace the document with an in-place error line."""
        self.generation += 1
        self.content = message
        self.lines = split_lines(message)
        self.top = 0

    def refresh(self) -> list[Command]:
        """Recompute display lines for the current content, mode, and width."""
        self.generation += 1
        self.lines = split_lines(self.content)
        self.clamp()
        if self.raw or not self.content:
            return []
        if self.renderer is None:
            return self._request_renderer()
        return [
            Task(
                render_task,
                (self.generation, self.content, self.wrap_width, self.renderer),
                name="render",
            )
        ]

    def _request_renderer(self) -> list[Command]:
        width = self.wrap_width
        if width == self._renderer_failed_width or width == self._renderer_requested_width:
            return []
        self._renderer_requested_width = width
        return [Task(create_renderer_task, (self.cache, width), name="create-renderer")]

    def set_wrap_width(self, width: int) -> list[Command]:
        """Switch to ``width``; the engine for the old width stays in the cache."""
        if width == self.wrap_width and (self.renderer is not None or self.raw):
            return []
        self.wrap_width = width
        self.renderer = None
        return self.refresh()

    def on_renderer_ready(self, message: RendererReady) -> list[Command]:
        if message.width == self._renderer_requested_width:
            self._renderer_requested_width = None
        if message.width != self.wrap_width:
            return []
        if message.renderer is None:
            self._renderer_failed_width = message.width
            return []
        self.renderer = message.renderer
        return self.refresh()

    def on_rendered(self, message: ContentRendered) -> None:
        if message.generation != self.generation:
            return
        self.lines = message.lines
        self.clamp()

    def toggle_view_mode(self) -> list[Command]:
        self.view_mode = self.view_mode.toggled()
        return self.refresh()

    def max_top(self) -> int:
        return max(0, len(self.lines) - self.visible_height)

    def clamp(self) -> None:
        self.top = clamp_viewport(self.top, len(self.lines), self.visible_height)

    def scroll(self, delta: int) -> None:
        self.top = clamp_viewport(self.top + delta, len(self.lines), self.visible_height)

    def scroll_to_top(self) -> None:
        self.top = 0

    def scroll_to_bottom(self) -> None:
        self.top = self.max_top()

    def visible_lines(self) -> list[str]:
        return self.lines[self.top : self.top + self.visible_height]


__all__ = [
    "ContentPane",
    "ViewMode",
    "create_renderer_task",
    "load_document_task",
    "render_task",
]
