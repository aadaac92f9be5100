"""Runtime composition layer for lazymd.

Builds the shared renderer cache and background worker, wires a controller to
the terminal, and starts the loop.
"""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

from loguru import logger

from ..render import DEFAULT_THEME, RendererCache
from .config import load_scan_policy, load_split_ratio, save_split_ratio
from .content import ViewMode
from .controller import DualPaneController
from .loop import Controller, run_main_loop
from .screen import compose_dual_pane_frame, compose_single_file_frame
from .single_file import SingleFileController
from .terminal import TerminalController
from .worker import BackgroundWorker

CONTROLLING_TTY = "/dev/tty"


@contextlib.contextmanager
def key_input_fd(use_controlling_tty: bool) -> Iterator[int]:
    """Yield the fd keys are read from: stdin, or ``/dev/tty`` when stdin was piped."""
    if not use_controlling_tty:
        yield sys.stdin.fileno()
        return
    fd = os.open(CONTROLLING_TTY, os.O_RDONLY)
    try:
        yield fd
    finally:
        os.close(fd)


def _run(
    controller: Controller,
    compose_frame: Callable[[Controller], str],
    use_controlling_tty: bool,
) -> None:
    worker = BackgroundWorker()
    try:
        with key_input_fd(use_controlling_tty) as key_fd:
            terminal = TerminalController(key_fd, sys.stdout.fileno())
            run_main_loop(controller, terminal, key_fd, worker, compose_frame)
    finally:
        worker.shutdown()


def run_dual_pane(
    root: Path,
    include_ignored: bool = False,
    style: str = DEFAULT_THEME,
    raw: bool = False,
) -> None:
    """Browse every Markdown document under ``root``."""
    logger.info("dual pane viewer at {} (include_ignored={})", root, include_ignored)
    controller = DualPaneController(
        root,
        RendererCache(theme=style),
        include_ignored=include_ignored,
        split_ratio=load_split_ratio(),
        scan_policy=load_scan_policy(),
        view_mode=ViewMode.RAW if raw else ViewMode.RENDERED,
        on_split_ratio_change=save_split_ratio,
    )
    _run(controller, compose_dual_pane_frame, use_controlling_tty=False)


def run_single_file(
    path: Path,
    content: str | None = None,
    title: str | None = None,
    style: str = DEFAULT_THEME,
    raw: bool = False,
) -> None:
    """View one document; ``content`` given means it came from a pipe."""
    logger.info("single file viewer for {}", title or path)
    controller = SingleFileController(
        path,
        RendererCache(theme=style),
        content=content,
        view_mode=ViewMode.RAW if raw else ViewMode.RENDERED,
        title=title,
    )
    _run(controller, compose_single_file_frame, use_controlling_tty=content is not None)


__all__ = ["key_input_fd", "run_dual_pane", "run_single_file"]
