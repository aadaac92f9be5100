"""Tree node datatypes used across scan and tree-pane modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileNode:
    """One directory or document retained in the tree view.

    Nodes are immutable; a rescan builds a complete replacement tree.
    """

    name: str
    path: Path
    is_dir: bool
    children: tuple["FileNode", ...] = ()


__all__ = ["FileNode"]
