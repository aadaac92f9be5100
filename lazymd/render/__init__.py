"""Render pipeline: Markdown engines, their width-keyed cache, and line output."""

from __future__ import annotations

from .cache import ReadWriteLock, RendererCache
from .engine import DEFAULT_THEME, MarkdownRenderer, RendererError
from .pipeline import render_document, render_lines

__all__ = [
    "DEFAULT_THEME",
    "MarkdownRenderer",
    "ReadWriteLock",
    "RendererCache",
    "RendererError",
    "render_document",
    "render_lines",
]
