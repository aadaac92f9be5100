"""Main interactive event loop for the terminal UI.

Owns the controller: every message (terminal resize, finished background task,
elapsed tick, key press) is fed to ``controller.update`` one at a time on this
thread, and the commands it returns are dispatched here.
"""

from __future__ import annotations

import heapq
import itertools
import shutil
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from ..input import message_for_token, read_key
from .messages import Command, Message, Quit, Resize, Task, Tick
from .screen import write_frame
from .terminal import TerminalController
from .worker import BackgroundWorker


class Controller(Protocol):
    dirty: bool

    def init(self) -> list[Command]: ...

    def update(self, message: Message) -> list[Command]: ...


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_timeout_ms: int = 30
    default_size: tuple[int, int] = (80, 24)


class TickScheduler:
    """Deadline heap of delayed messages; ties fire in scheduling order."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._heap: list[tuple[float, int, Message]] = []
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, tick: Tick) -> None:
        deadline = self._clock() + max(0.0, tick.delay)
        heapq.heappush(self._heap, (deadline, next(self._sequence), tick.message))

    def pop_due(self) -> list[Message]:
        now = self._clock()
        due: list[Message] = []
        while self._heap and self._heap[0][0] <= now:
            due.append(heapq.heappop(self._heap)[2])
        return due

    def seconds_until_next(self) -> float | None:
        if not self._heap:
            return None
        return max(0.0, self._heap[0][0] - self._clock())


def dispatch_commands(commands: Iterable[Command], worker: BackgroundWorker, scheduler: TickScheduler) -> bool:
    """Start tasks and schedule ticks; return ``True`` when a ``Quit`` was requested."""
    quit_requested = False
    for command in commands:
        if isinstance(command, Quit):
            quit_requested = True
        elif isinstance(command, Task):
            logger.debug("dispatching task {}", command.name)
            worker.submit(command)
        elif isinstance(command, Tick):
            scheduler.schedule(command)
    return quit_requested


def read_timeout_ms(scheduler: TickScheduler, timing: RuntimeLoopTiming) -> int:
    """Poll timeout for input, shortened so a due tick is not delayed."""
    remaining = scheduler.seconds_until_next()
    if remaining is None:
        return timing.poll_timeout_ms
    return max(0, min(timing.poll_timeout_ms, int(remaining * 1000)))


def run_main_loop(
    controller: Controller,
    terminal: TerminalController,
    key_fd: int,
    worker: BackgroundWorker,
    compose_frame: Callable[[Controller], str],
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    scheduler: TickScheduler | None = None,
) -> None:
    """Run the interactive TUI loop until the controller asks to quit.

    Each iteration checks the terminal size, feeds pending messages to the
    controller, redraws when it is dirty, then waits briefly for one key.
    """
    scheduler = scheduler or TickScheduler()
    last_size: tuple[int, int] | None = None

    def deliver_all(messages: Iterable[Message]) -> bool:
        for message in messages:
            if dispatch_commands(controller.update(message), worker, scheduler):
                return True
        return False

    with terminal.raw_mode():
        if dispatch_commands(controller.init(), worker, scheduler):
            return
        while True:
            term = shutil.get_terminal_size(timing.default_size)
            pending: list[Message] = []
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                pending.append(Resize(width=term.columns, height=term.lines))
            pending.extend(worker.drain_results())
            pending.extend(scheduler.pop_due())
            if deliver_all(pending):
                return

            if controller.dirty:
                write_frame(compose_frame(controller), terminal.stdout_fd)
                controller.dirty = False

            try:
                token = read_key(key_fd, timeout_ms=read_timeout_ms(scheduler, timing))
            except OSError as exc:
                logger.warning("key input closed: {}", exc)
                return
            message = message_for_token(token)
            if message is not None and deliver_all([message]):
                return


__all__ = [
    "Controller",
    "RuntimeLoopTiming",
    "TickScheduler",
    "dispatch_commands",
    "read_timeout_ms",
    "run_main_loop",
]
