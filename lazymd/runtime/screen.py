"""Frame composition for the dual-pane and single-file viewers.

Frames are composed into one string and written with a single ``os.write``
so the terminal never shows a half-drawn screen.
"""

from __future__ import annotations

import os
import sys

from ..ansi import pad_ansi_line, truncate_with_ellipsis
from ..text import sanitize_terminal_text
from .controller import DualPaneController, Focus
from .layout import content_pane_width, pane_rows, tree_pane_width
from .single_file import SingleFileController

LOADING_FRAME = "Loading..."
CURSOR_PREFIX = "❯ "
BLANK_PREFIX = "  "
SCROLL_THUMB = "█"
SCROLL_TRACK = "░"
HELP_HINTS = "[tab]switch [e]xpand [q]uit [r]aw/render [<>]resize"
SINGLE_FILE_HINTS = "[q]uit [r]aw/render"
NO_FILE_SELECTED = "No file selected"

ROUNDED_BORDER = ("╭", "╮", "╰", "╯", "─", "│")
SQUARE_BORDER = ("┌", "┐", "└", "┘", "─", "│")

FOCUSED_BORDER_SGR = "\033[38;5;62m"
UNFOCUSED_BORDER_SGR = "\033[38;5;240m"
SELECTED_SGR = "\033[7m"
STATUS_SGR = "\033[48;5;235;38;5;250m"
RESET = "\033[0m"


def scrollbar_column(total: int, visible: int, top: int) -> list[str]:
    """Scroll bar cells for a pane showing ``visible`` of ``total`` lines from ``top``."""
    if visible <= 0:
        return []
    if total <= 0:
        return [SCROLL_TRACK] * visible
    thumb = max(1, visible * visible // total)
    position = top * (visible - thumb) // max(1, total - visible)
    return [SCROLL_THUMB if position <= row < position + thumb else SCROLL_TRACK for row in range(visible)]


def boxed(rows: list[str], outer_width: int, focused: bool) -> list[str]:
    """Wrap already padded inner ``rows`` in a border of ``outer_width`` columns."""
    if outer_width < 2:
        return [""] * (len(rows) + 2)
    top_left, top_right, bottom_left, bottom_right, horizontal, vertical = (
        ROUNDED_BORDER if focused else SQUARE_BORDER
    )
    color = FOCUSED_BORDER_SGR if focused else UNFOCUSED_BORDER_SGR
    inner = outer_width - 2
    out = [f"{color}{top_left}{horizontal * inner}{top_right}{RESET}"]
    for row in rows:
        out.append(f"{color}{vertical}{RESET}{row}{color}{vertical}{RESET}")
    out.append(f"{color}{bottom_left}{horizontal * inner}{bottom_right}{RESET}")
    return out


def scan_status_suffix(controller: DualPaneController) -> str:
    if controller.depth < 0:
        return " | Initializing..."
    if controller.scanning:
        return " | Scanning..."
    if controller.depth > 0:
        return f" | Depth {controller.depth}"
    return ""


def dual_pane_status_text(controller: DualPaneController) -> str:
    path = controller.selected_path
    current = str(path) if path is not None else NO_FILE_SELECTED
    return (
        f"* {current} | {controller.view_mode.label} | "
        f"Focus: {controller.focus.label}{scan_status_suffix(controller)} | {HELP_HINTS}"
    )


def status_bar(text: str, width: int) -> str:
    body = pad_ansi_line(truncate_with_ellipsis(" " + text, width), width)
    return f"{STATUS_SGR}{body}{RESET}"


def _tree_rows(controller: DualPaneController, rows: int, inner_width: int) -> list[str]:
    show_cursor = controller.focus is Focus.TREE and bool(controller.documents)
    out: list[str] = []
    for row in range(rows):
        index = controller.tree_top + row
        if index >= len(controller.tree_lines):
            out.append(" " * inner_width)
            continue
        selected = show_cursor and index == controller.tree_selected_line
        prefix = CURSOR_PREFIX if selected else BLANK_PREFIX
        text = truncate_with_ellipsis(prefix + sanitize_terminal_text(controller.tree_lines[index]), inner_width)
        text = pad_ansi_line(text, inner_width)
        if selected:
            text = f"{SELECTED_SGR}{text}{RESET}"
        out.append(text)
    return out


def _content_rows(lines: list[str], top: int, rows: int, inner_width: int) -> list[str]:
    text_width = max(0, inner_width - 1)
    bar = scrollbar_column(len(lines), rows, top)
    out: list[str] = []
    for row in range(rows):
        index = top + row
        text = sanitize_terminal_text(lines[index]) if index < len(lines) else ""
        cell = bar[row] if inner_width > 0 else ""
        out.append(pad_ansi_line(text, text_width) + cell)
    return out


def compose_dual_pane_frame(controller: DualPaneController) -> str:
    """Build the full dual-pane frame for the controller's current size."""
    width, height = controller.width, controller.height
    if width <= 0 or height <= 0:
        return LOADING_FRAME

    rows = pane_rows(height)
    tree_width = tree_pane_width(width, controller.split_ratio)
    content_width = content_pane_width(width, controller.split_ratio)
    tree_focused = controller.focus is Focus.TREE

    tree_box = boxed(_tree_rows(controller, rows, max(0, tree_width - 2)), tree_width, tree_focused)
    pane = controller.content
    content_box = boxed(
        _content_rows(pane.lines, pane.top, rows, max(0, content_width - 2)),
        content_width,
        not tree_focused,
    )

    out = [left + right for left, right in zip(tree_box, content_box)]
    out.append(status_bar(dual_pane_status_text(controller), width))
    return "\r\n".join(out)


def compose_single_file_frame(controller: SingleFileController) -> str:
    """Build the single-file frame: document rows plus one status row."""
    width, height = controller.width, controller.height
    if width <= 0 or height <= 0:
        return LOADING_FRAME

    pane = controller.content
    rows = controller.visible_rows
    out: list[str] = []
    for row in range(rows):
        index = pane.top + row
        text = sanitize_terminal_text(pane.lines[index]) if index < len(pane.lines) else ""
        out.append(pad_ansi_line(text, width))

    total = len(pane.lines)
    last = min(total, pane.top + rows)
    position = f"{pane.top + 1 if total else 0}-{last}/{total}"
    status = f"{controller.title} | {controller.view_mode.label} | {position} | {SINGLE_FILE_HINTS}"
    out.append(status_bar(status, width))
    return "\r\n".join(out)


def write_frame(frame: str, fd: int | None = None) -> None:
    """Home the cursor, clear, and write ``frame`` in one call."""
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, ("\033[H\033[J" + frame).encode("utf-8", errors="replace"))


__all__ = [
    "LOADING_FRAME",
    "boxed",
    "compose_dual_pane_frame",
    "compose_single_file_frame",
    "dual_pane_status_text",
    "scan_status_suffix",
    "scrollbar_column",
    "write_frame",
]
