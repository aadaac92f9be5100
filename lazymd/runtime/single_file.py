"""Single-document viewer controller (one file argument or piped stdin)."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..render import RendererCache
from .content import ContentPane, ViewMode, load_document_task
from .layout import MIN_WRAP_WIDTH
from .messages import (
    Command,
    ContentRendered,
    DocumentLoaded,
    Key,
    Message,
    MouseWheel,
    Quit,
    RendererReady,
    Resize,
    Task,
    deliver,
)

LOADING_FILE_PLACEHOLDER = "Loading file..."
DEFAULT_SINGLE_FILE_WIDTH = 80
SINGLE_FILE_CHROME_ROWS = 1


def single_file_wrap_width(total_width: int) -> int:
    return max(MIN_WRAP_WIDTH, total_width - 2)


class SingleFileController:
    def __init__(
        self,
        path: Path,
        cache: RendererCache,
        content: str | None = None,
        view_mode: ViewMode = ViewMode.RENDERED,
        title: str | None = None,
    ) -> None:
        self.path = path
        self.title = title or str(path)
        self._preloaded = content
        self.width = 0
        self.height = 0
        self.loaded = False
        self.content = ContentPane(
            cache,
            wrap_width=DEFAULT_SINGLE_FILE_WIDTH,
            view_mode=view_mode,
            placeholder=LOADING_FILE_PLACEHOLDER,
        )
        self.dirty = True

    @property
    def view_mode(self) -> ViewMode:
        return self.content.view_mode

    @property
    def visible_rows(self) -> int:
        return max(1, self.height - SINGLE_FILE_CHROME_ROWS)

    def init(self) -> list[Command]:
        if self._preloaded is not None:
            return [deliver(DocumentLoaded(path=self.path, content=self._preloaded))]
        return [Task(load_document_task, (self.path,), name="load-document")]

    def update(self, message: Message) -> list[Command]:
        handlers: dict[type, Callable[[Message], list[Command]]] = {
            DocumentLoaded: self._on_document_loaded,
            RendererReady: self.content.on_renderer_ready,
            ContentRendered: self._on_content_rendered,
            Resize: self._on_resize,
            Key: self._on_key,
            MouseWheel: self._on_mouse_wheel,
        }
        handler = handlers.get(type(message))
        if handler is None:
            return []
        self.dirty = True
        return handler(message)

    def _on_document_loaded(self, message: DocumentLoaded) -> list[Command]:
        self.loaded = True
        if message.error is not None:
            self.content.show_error(f"Error loading file: {message.error}")
            return []
        return self.content.load(message.content)

    def _on_content_rendered(self, message: ContentRendered) -> list[Command]:
        self.content.on_rendered(message)
        return []

    def _on_resize(self, message: Resize) -> list[Command]:
        self.width = message.width
        self.height = message.height
        self.content.visible_height = self.visible_rows
        self.content.clamp()
        if not self.loaded:
            self.content.wrap_width = single_file_wrap_width(message.width)
            return []
        return self.content.set_wrap_width(single_file_wrap_width(message.width))

    def _on_key(self, message: Key) -> list[Command]:
        key = message.name
        page = self.visible_rows
        if key in {"q", "CTRL_C", "ESC"}:
            return [Quit()]
        if key == "r":
            return self.content.toggle_view_mode()
        if key in {"j", "DOWN"}:
            self.content.scroll(1)
        elif key in {"k", "UP"}:
            self.content.scroll(-1)
        elif key in {"CTRL_D", "PGDN"}:
            self.content.scroll(page // 2)
        elif key in {"CTRL_U", "PGUP"}:
            self.content.scroll(-(page // 2))
        elif key in {" ", "f"}:
            self.content.scroll(page)
        elif key == "b":
            self.content.scroll(-page)
        elif key in {"g", "HOME"}:
            self.content.scroll_to_top()
        elif key in {"G", "END"}:
            self.content.scroll_to_bottom()
        return []

    def _on_mouse_wheel(self, message: MouseWheel) -> list[Command]:
        self.content.scroll(-1 if message.direction == "up" else 1)
        return []


__all__ = [
    "DEFAULT_SINGLE_FILE_WIDTH",
    "LOADING_FILE_PLACEHOLDER",
    "SingleFileController",
    "single_file_wrap_width",
]
