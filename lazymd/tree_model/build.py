"""Depth-bounded document tree scanning.

Walks a root directory with ``os.scandir`` and keeps only directories and
Markdown documents. Hidden entries are always skipped, ignored entries are
skipped unless the caller asks for them. Filesystem errors never escape.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from ..ignore import IgnoreMatcher, matcher_for_root
from .types import FileNode

DOCUMENT_SUFFIX = ".md"
UNBOUNDED_DEPTH = -1


def is_document_name(name: str) -> bool:
    """Return whether ``name`` carries the document extension (any case)."""
    return name.lower().endswith(DOCUMENT_SUFFIX)


def is_hidden_name(name: str) -> bool:
    return name.startswith(".")


@dataclass
class _NodeBuilder:
    """Mutable node used only while a scan is in progress."""

    name: str
    path: Path
    is_dir: bool
    children: dict[str, "_NodeBuilder"] = field(default_factory=dict)

    def freeze(self) -> FileNode:
        """Return the immutable, recursively sorted counterpart of this node."""
        ordered = sorted(self.children.values(), key=lambda child: (not child.is_dir, child.name.lower()))
        return FileNode(
            name=self.name,
            path=self.path,
            is_dir=self.is_dir,
            children=tuple(child.freeze() for child in ordered),
        )


def _insert(root: _NodeBuilder, relative_parts: tuple[str, ...], is_dir: bool) -> None:
    """Insert a relative path, creating intermediate directories on demand.

    An existing sibling with the same name is reused, so a directory reached
    through several documents appears once.
    """
    current = root
    for idx, part in enumerate(relative_parts):
        existing = current.children.get(part)
        if existing is None:
            existing = _NodeBuilder(
                name=part,
                path=root.path.joinpath(*relative_parts[: idx + 1]),
                is_dir=is_dir or idx < len(relative_parts) - 1,
            )
            current.children[part] = existing
        current = existing


def _root_builder(root: Path) -> _NodeBuilder:
    return _NodeBuilder(name=root.name or str(root), path=root, is_dir=True)


def _normalize_root(root: Path) -> Path:
    try:
        return root.resolve()
    except OSError:
        return root.absolute()


def scan_documents(root: Path, include_ignored: bool = False, max_depth: int = UNBOUNDED_DEPTH) -> FileNode:
    """Scan ``root`` and return its document tree.

    ``max_depth`` of ``-1`` walks everything; ``0`` keeps only the immediate
    children of ``root``; ``n`` keeps entries whose relative path has at most
    ``n + 1`` components. Unreadable directories (including ``root``) simply
    contribute no children.
    """
    root = _normalize_root(root)
    matcher = matcher_for_root(root, include_ignored)
    builder = _root_builder(root)

    def walk(directory: Path, parts: tuple[str, ...]) -> None:
        depth = len(parts)
        try:
            with os.scandir(directory) as entries:
                children = list(entries)
        except OSError as exc:
            logger.debug("skipping unreadable directory {}: {}", directory, exc)
            return

        for entry in children:
            name = entry.name
            if is_hidden_name(name):
                continue
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as exc:
                logger.debug("skipping entry {}: {}", entry.path, exc)
                continue
            child_parts = parts + (name,)
            if _is_ignored(matcher, child_parts, is_dir):
                continue
            if is_dir:
                _insert(builder, child_parts, True)
                if max_depth < 0 or depth + 1 <= max_depth:
                    walk(Path(entry.path), child_parts)
            elif is_document_name(name):
                _insert(builder, child_parts, False)

    walk(root, ())
    tree = builder.freeze()
    logger.debug("scanned {} to depth {}: {} nodes", root, max_depth, count_nodes(tree))
    return tree


def scan_documents_quick(root: Path, include_ignored: bool = False) -> FileNode:
    """List only the immediate children of ``root`` for the first paint.

    Subdirectories are never opened, which keeps this to a single directory
    read regardless of how large the tree is.
    """
    root = _normalize_root(root)
    matcher = matcher_for_root(root, include_ignored)
    builder = _root_builder(root)
    try:
        with os.scandir(root) as entries:
            children = list(entries)
    except OSError as exc:
        logger.debug("cannot list root {}: {}", root, exc)
        return builder.freeze()

    for entry in children:
        name = entry.name
        if is_hidden_name(name):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if _is_ignored(matcher, (name,), is_dir):
            continue
        if is_dir or is_document_name(name):
            _insert(builder, (name,), is_dir)
    return builder.freeze()


def _is_ignored(matcher: IgnoreMatcher | None, parts: tuple[str, ...], is_dir: bool) -> bool:
    if matcher is None:
        return False
    try:
        return matcher.is_ignored("/".join(parts), is_dir=is_dir)
    except Exception as exc:
        logger.debug("ignore check failed for {}: {}", "/".join(parts), exc)
        return False


def count_nodes(node: FileNode) -> int:
    """Return the number of nodes in ``node``'s subtree, itself included."""
    return 1 + sum(count_nodes(child) for child in node.children)


__all__ = [
    "DOCUMENT_SUFFIX",
    "UNBOUNDED_DEPTH",
    "count_nodes",
    "is_document_name",
    "scan_documents",
    "scan_documents_quick",
]
