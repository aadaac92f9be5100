"""Width-keyed cache of rendering engines shared with background workers."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from loguru import logger

from .engine import DEFAULT_THEME, MarkdownRenderer


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class RendererCache:
    """Engines keyed by wrap width, created at most once per width.

    One instance is built at startup and handed to every controller that
    renders. Entries are never evicted: terminals only ever produce a small
    set of distinct widths, and returning to an earlier width must be free.
    Construction failures are not cached so a later lookup can retry.
    """

    def __init__(
        self,
        theme: str = DEFAULT_THEME,
        factory: Callable[[str, int], MarkdownRenderer] = MarkdownRenderer,
    ) -> None:
        self.theme = theme
        self._factory = factory
        self._lock = ReadWriteLock()
        self._renderers: dict[int, MarkdownRenderer] = {}

    def get(self, width: int) -> MarkdownRenderer | None:
        """Return the cached engine for ``width`` without creating one."""
        with self._lock.read():
            return self._renderers.get(width)

    def get_or_create(self, width: int) -> MarkdownRenderer | None:
        """Return the engine for ``width``, building and caching it on first use.

        Returns ``None`` when construction fails; callers fall back to raw text.
        """
        cached = self.get(width)
        if cached is not None:
            return cached
        with self._lock.write():
            cached = self._renderers.get(width)
            if cached is not None:
                return cached
            try:
                renderer = self._factory(self.theme, width)
            except Exception as exc:
                logger.warning("renderer for width {} unavailable: {}", width, exc)
                return None
            self._renderers[width] = renderer
            logger.debug("created renderer theme={} width={}", self.theme, width)
            return renderer

    def widths(self) -> list[int]:
        with self._lock.read():
            return sorted(self._renderers)

    def __contains__(self, width: object) -> bool:
        with self._lock.read():
            return width in self._renderers

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._renderers)


__all__ = ["ReadWriteLock", "RendererCache"]
