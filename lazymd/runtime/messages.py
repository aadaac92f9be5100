"""Messages delivered into the event loop and commands controllers return.

Controllers never block. Work that touches the filesystem or builds render
engines is returned as a ``Task`` whose function runs on a worker thread and
produces the next message; delays are ``Tick`` commands the loop schedules.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..render import MarkdownRenderer
from ..tree_model import FileNode


class Message:
    """Base class for everything the loop feeds into ``update``."""


@dataclass(frozen=True)
class StartScan(Message):
    pass


@dataclass(frozen=True)
class InitialScanDone(Message):
    tree: FileNode | None
    error: str | None = None


@dataclass(frozen=True)
class ExpandTree(Message):
    pass


@dataclass(frozen=True)
class PerformExpansion(Message):
    pass


@dataclass(frozen=True)
class ExpansionDone(Message):
    depth: int
    tree: FileNode | None
    error: str | None = None


@dataclass(frozen=True)
class DocumentLoaded(Message):
    path: Path
    content: str
    error: str | None = None


@dataclass(frozen=True)
class RendererReady(Message):
    width: int
    renderer: MarkdownRenderer | None


@dataclass(frozen=True)
class ContentRendered(Message):
    generation: int
    lines: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Resize(Message):
    width: int
    height: int


@dataclass(frozen=True)
class Key(Message):
    name: str


@dataclass(frozen=True)
class MouseWheel(Message):
    direction: str
    x: int
    y: int


class Command:
    """Base class for side effects requested by a controller."""


@dataclass(frozen=True)
class Task(Command):
    """Run ``fn(*args)`` off the loop; its return value is the next message."""

    fn: Callable[..., Message]
    args: tuple = ()
    name: str = "task"

    def run(self) -> Message:
        return self.fn(*self.args)


@dataclass(frozen=True)
class Tick(Command):
    """Deliver ``message`` after ``delay`` seconds."""

    delay: float
    message: Message


@dataclass(frozen=True)
class Quit(Command):
    pass


def deliver(message: Message) -> Tick:
    """Command that hands ``message`` back to the loop as soon as possible."""
    return Tick(0.0, message)


__all__ = [
    "Command",
    "ContentRendered",
    "DocumentLoaded",
    "ExpandTree",
    "ExpansionDone",
    "InitialScanDone",
    "Key",
    "Message",
    "MouseWheel",
    "PerformExpansion",
    "Quit",
    "RendererReady",
    "Resize",
    "StartScan",
    "Task",
    "Tick",
    "deliver",
]
