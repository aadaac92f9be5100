"""Command-line front door for lazymd.

Parses CLI options, resolves the startup mode (piped stdin, single file,
directory), and dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import os
import shutil
import sys
from pathlib import Path

from loguru import logger
from pygments.styles import get_all_styles

from .log import configure_logging
from .render import DEFAULT_THEME, RendererCache, render_document
from .runtime import run_dual_pane, run_single_file
from .runtime.config import load_style_name
from .text import read_text

STDIN_TITLE = "stdin"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def resolve_style(requested: str | None) -> str:
    """CLI style, else the persisted one, else the default; unknown names exit."""
    style = requested or load_style_name() or DEFAULT_THEME
    if style not in set(get_all_styles()):
        raise SystemExit(f"Unknown style: {style}")
    return style


def render_to_text(path: Path, style: str, max_cols: int, raw: bool = False) -> str:
    """Render ``path`` the way the content pane would, one line per row."""
    lines = render_document(read_text(path), max_cols, raw, RendererCache(theme=style))
    out: list[str] = []
    for line in lines:
        out.append(line)
        if "\033" in line:
            out.append("\033[0m")
        out.append("\n")
    return "".join(out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazymd",
        description="Browse Markdown documents in a terminal with a tree pane and rendered preview.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Markdown file to view, or directory to browse. Defaults to current directory.",
    )
    parser.add_argument(
        "-i",
        "--inclusive",
        action="store_true",
        help="Include files excluded by .gitignore.",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style name (default: {DEFAULT_THEME}).")
    parser.add_argument("--raw", action="store_true", help="Start in raw (unrendered) view mode.")
    parser.add_argument("--render", metavar="PATH", help="Render PATH to stdout and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write debug logs to PATH.")
    return parser


def _current_directory() -> Path:
    try:
        return Path.cwd()
    except OSError as exc:
        raise SystemExit(f"Error getting current directory: {exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the matching viewer.

    Piped stdin opens the single-document viewer on the piped text; a file
    argument opens it on that file; a directory (or nothing) opens the
    dual-pane browser.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    style = resolve_style(args.style)

    if args.render is not None:
        if args.path is not None:
            raise SystemExit("Cannot combine positional path with --render.")
        render_path = Path(args.render)
        if not render_path.is_file():
            raise SystemExit(f"Path not found: {render_path}")
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(render_to_text(render_path, style, max_cols, raw=args.raw))
        return

    if not os.isatty(sys.stdin.fileno()):
        content = sys.stdin.read()
        logger.debug("read {} characters from stdin", len(content))
        run_single_file(Path(STDIN_TITLE), content=content, title=STDIN_TITLE, style=style, raw=args.raw)
        return

    path = Path(args.path) if args.path is not None else _current_directory()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if path.is_dir():
        run_dual_pane(path, include_ignored=args.inclusive, style=style, raw=args.raw)
    else:
        run_single_file(path, style=style, raw=args.raw)


if __name__ == "__main__":
    main()
