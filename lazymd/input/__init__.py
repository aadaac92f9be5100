"""Input-layer public API: raw key decoding and token-to-message translation."""

from .events import message_for_token, parse_mouse_position
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "message_for_token",
    "parse_mouse_position",
]
