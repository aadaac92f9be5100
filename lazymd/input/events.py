"""Translate key tokens from ``read_key`` into controller messages."""

from __future__ import annotations

from ..runtime.messages import Key, Message, MouseWheel

_WHEEL_PREFIXES = {
    "MOUSE_WHEEL_UP:": "up",
    "MOUSE_WHEEL_DOWN:": "down",
}


def parse_mouse_position(token: str) -> tuple[int, int] | None:
    """Return 1-based ``(col, row)`` from a ``NAME:col:row`` mouse token."""
    parts = token.split(":")
    if len(parts) != 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def message_for_token(token: str) -> Message | None:
    """Map a key token to ``Key``/``MouseWheel``; other mouse events map to ``None``."""
    if not token:
        return None
    for prefix, direction in _WHEEL_PREFIXES.items():
        if token.startswith(prefix):
            position = parse_mouse_position(token)
            if position is None:
                return None
            col, row = position
            return MouseWheel(direction=direction, x=col - 1, y=row - 1)
    if token == "MOUSE" or token.startswith("MOUSE_"):
        return None
    return Key(name=token)


__all__ = ["message_for_token", "parse_mouse_position"]
