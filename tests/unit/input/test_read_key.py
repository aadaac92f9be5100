"""Regression tests for raw-key decoding.

Covers ESC timing, paging/home/end sequences, and SGR wheel tokens.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from lazymd import input as input_mod


def _read_tokens(data: bytes, count: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        key = _read_tokens(b"\x1b")[0]
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_tokens(b"\x1bq", count=2), ["ESC", "q"])

    def test_timeout_without_input_is_empty_token(self) -> None:
        self.assertEqual(_read_tokens(b""), [""])

    def test_control_keys(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x03\x04\x15\t\r", count=5),
            ["CTRL_C", "CTRL_D", "CTRL_U", "TAB", "ENTER"],
        )

    def test_arrows_and_ss3_arrows(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOA", count=5),
            ["UP", "DOWN", "RIGHT", "LEFT", "UP"],
        )

    def test_paging_and_home_end_sequences(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x1b[5~\x1b[6~\x1b[H\x1b[F\x1b[1~\x1b[4~", count=6),
            ["PGUP", "PGDN", "HOME", "END", "HOME", "END"],
        )

    def test_sgr_wheel_events_carry_position(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x1b[<64;12;5M\x1b[<65;3;7M", count=2),
            ["MOUSE_WHEEL_UP:12:5", "MOUSE_WHEEL_DOWN:3:7"],
        )

    def test_other_mouse_events_are_generic(self) -> None:
        self.assertEqual(_read_tokens(b"\x1b[<0;4;4M\x1b[<0;4;4m", count=2), ["MOUSE", "MOUSE"])

    def test_multibyte_utf8_character(self) -> None:
        self.assertEqual(_read_tokens("é€".encode("utf-8"), count=2), ["é", "€"])


if __name__ == "__main__":
    unittest.main()
