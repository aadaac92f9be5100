"""Document text -> display lines.

Raw mode, a missing engine, and empty text all take the verbatim path.
Render failures fall back to it too; nothing here raises to the caller.
"""

from __future__ import annotations

from loguru import logger

from ..text import split_lines
from .cache import RendererCache
from .engine import MarkdownRenderer


def render_lines(
    text: str,
    wrap_width: int,
    raw: bool,
    renderer: MarkdownRenderer | None = None,
) -> list[str]:
    """Render ``text`` with an already-resolved engine."""
    if raw or renderer is None or not text:
        return split_lines(text)
    try:
        rendered = renderer.render(text)
    except Exception as exc:
        logger.warning("render at width {} failed, showing raw text: {}", wrap_width, exc)
        return split_lines(text)
    return split_lines(rendered)


def render_document(text: str, wrap_width: int, raw: bool, cache: RendererCache) -> list[str]:
    """Render ``text`` at ``wrap_width`` using (and filling) ``cache``."""
    if raw or not text:
        return split_lines(text)
    return render_lines(text, wrap_width, raw, cache.get_or_create(wrap_width))


__all__ = ["render_document", "render_lines"]
