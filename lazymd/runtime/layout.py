"""Split-pane geometry and viewport clamping."""

from __future__ import annotations

MIN_SPLIT_RATIO = 0.2
MAX_SPLIT_RATIO = 0.5
DEFAULT_SPLIT_RATIO = 0.3
SPLIT_RATIO_STEP = 0.05
DEFAULT_WRAP_WIDTH = 60
MIN_WRAP_WIDTH = 40
CONTENT_CHROME_COLUMNS = 6
STATUS_ROWS = 1
BORDER_ROWS = 2


def clamp_viewport(offset: int, content_length: int, visible_height: int) -> int:
    """Clamp a top-of-view offset to ``[0, max(0, content_length - visible_height)]``."""
    max_start = max(0, content_length - visible_height)
    return max(0, min(offset, max_start))


def clamp_split_ratio(ratio: float) -> float:
    """Keep the tree pane between one fifth and one half of the width."""
    return max(MIN_SPLIT_RATIO, min(MAX_SPLIT_RATIO, round(ratio, 4)))


def tree_pane_width(total_width: int, split_ratio: float) -> int:
    """Outer width (borders included) of the tree pane."""
    return int(total_width * split_ratio)


def content_pane_width(total_width: int, split_ratio: float) -> int:
    """Outer width (borders included) of the content pane."""
    return max(0, total_width - tree_pane_width(total_width, split_ratio))


def wrap_width_for(total_width: int, split_ratio: float) -> int:
    """Render wrap width for the content pane, never below ``MIN_WRAP_WIDTH``."""
    content_width = int(total_width * (1 - split_ratio))
    return max(MIN_WRAP_WIDTH, content_width - CONTENT_CHROME_COLUMNS)


def pane_rows(total_height: int) -> int:
    """Inner rows of either pane once the status bar and borders are taken."""
    return max(1, total_height - STATUS_ROWS - BORDER_ROWS)


def keep_line_visible(top: int, line: int, visible_height: int) -> int:
    """Scroll ``top`` the minimum amount needed to show ``line``."""
    if line < top:
        return line
    if line >= top + visible_height:
        return line - visible_height + 1
    return top


__all__ = [
    "DEFAULT_SPLIT_RATIO",
    "DEFAULT_WRAP_WIDTH",
    "MAX_SPLIT_RATIO",
    "MIN_SPLIT_RATIO",
    "MIN_WRAP_WIDTH",
    "SPLIT_RATIO_STEP",
    "clamp_split_ratio",
    "clamp_viewport",
    "content_pane_width",
    "keep_line_visible",
    "pane_rows",
    "tree_pane_width",
    "wrap_width_for",
]
