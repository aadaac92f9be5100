"""Markdown rendering engine backed by Pygments.

An engine is bound to one theme and one wrap width. Building it resolves the
style and prepares the lexer/formatter pair, which is the expensive part;
``render`` itself is a highlight pass followed by ANSI-aware wrapping.
"""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers.markup import MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..ansi import wrap_ansi_text

DEFAULT_THEME = "monokai"


class RendererError(Exception):
    """Raised when a rendering engine cannot be constructed."""


class MarkdownRenderer:
    """Render Markdown source to wrapped, ANSI-colored terminal text."""

    def __init__(self, theme: str = DEFAULT_THEME, wrap_width: int = 80) -> None:
        if wrap_width <= 0:
            raise RendererError(f"wrap width must be positive, got {wrap_width}")
        try:
            style = get_style_by_name(theme)
        except ClassNotFound as exc:
            raise RendererError(f"unknown style: {theme!r}") from exc
        self.theme = theme
        self.wrap_width = wrap_width
        self._lexer = MarkdownLexer(stripnl=False, ensurenl=False)
        self._formatter = Terminal256Formatter(style=style)

    def render(self, text: str) -> str:
        highlighted = highlight(text, self._lexer, self._formatter)
        if not text.endswith("\n") and highlighted.endswith("\n"):
            highlighted = highlighted[:-1]
        return "\n".join(wrap_ansi_text(highlighted, self.wrap_width))

    def __repr__(self) -> str:
        return f"MarkdownRenderer(theme={self.theme!r}, wrap_width={self.wrap_width})"


__all__ = ["DEFAULT_THEME", "MarkdownRenderer", "RendererError"]
