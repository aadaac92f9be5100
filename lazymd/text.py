"""Document loading and terminal-safe text helpers."""

from __future__ import annotations

import re
from pathlib import Path

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1a\x1c-\x1f\x7f-\x9f]")


def read_text(path: Path) -> str:
    """Read a whole document, trying common encodings before replacing bytes.

    ``OSError`` (missing file, permission denied, directory) propagates.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def split_lines(text: str) -> list[str]:
    """Split on line feeds exactly, keeping empty lines and a trailing empty row."""
    return text.split("\n")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.).

    ESC is kept so renderer color sequences survive; ``\\r`` is dropped.
    """
    source = source.replace("\r", "")
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\t", "\x1b"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)
