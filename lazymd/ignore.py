"""Ignore-file matching for tree scans.

Loads a single gitignore-style file and answers per-relative-path queries.
Scanners treat a missing or broken ignore file as "nothing is ignored".
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import pathspec
from loguru import logger

IGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class IgnoreMatcher:
    """Compiled ignore patterns for one scan root.

    Paths are matched relative to the root that owns the ignore file, using
    forward slashes. Directories are matched with a trailing slash so patterns
    like ``build/`` only hit directories.
    """

    source: Path
    spec: pathspec.PathSpec

    def is_ignored(self, relative_path: str | Path, is_dir: bool = False) -> bool:
        """Return whether ``relative_path`` is excluded by the ignore file."""
        rel = PurePosixPath(*Path(relative_path).parts).as_posix()
        if not rel or rel == ".":
            return False
        if is_dir:
            rel = f"{rel}/"
        return bool(self.spec.match_file(rel))


def load_ignore_matcher(path: Path) -> IgnoreMatcher | None:
    """Compile the ignore file at ``path``.

    Returns ``None`` when the file does not exist or cannot be read or parsed,
    so callers fail open and keep every entry.
    """
    if not path.is_file():
        return None
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        spec = pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception as exc:
        logger.debug("ignoring unusable ignore file {}: {}", path, exc)
        return None
    return IgnoreMatcher(source=path, spec=spec)


def matcher_for_root(root: Path, include_ignored: bool) -> IgnoreMatcher | None:
    """Return the matcher for ``root``'s ignore file unless ignoring is disabled."""
    if include_ignored:
        return None
    return load_ignore_matcher(root / IGNORE_FILENAME)
