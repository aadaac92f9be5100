"""Public runtime orchestration entry points.

This package groups the viewer bootstraps (`run_dual_pane`, `run_single_file`)
and the lower-level event loop contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopTiming, TickScheduler


def run_dual_pane(*args, **kwargs):
    """Lazily import the dual-pane entrypoint to avoid heavy bootstrap on import."""
    from .app import run_dual_pane as _run_dual_pane

    return _run_dual_pane(*args, **kwargs)


def run_single_file(*args, **kwargs):
    """Lazily import the single-file entrypoint."""
    from .app import run_single_file as _run_single_file

    return _run_single_file(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"RuntimeLoopTiming", "TickScheduler"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_dual_pane",
    "run_single_file",
    "RuntimeLoopTiming",
    "TickScheduler",
    "run_main_loop",
]
