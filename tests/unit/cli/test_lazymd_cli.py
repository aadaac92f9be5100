"""CLI mode selection and --render behavior tests.

Verifies how ``lazymd.cli.main`` picks the directory browser, the single
file viewer, or piped stdin, and how it reports bad arguments.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymd import cli
from lazymd.ansi import ANSI_ESCAPE_RE, display_width


class _FakeStdin(io.StringIO):
    def fileno(self) -> int:
        return 0


class _CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patches = [
            mock.patch("lazymd.cli.configure_logging"),
            mock.patch("lazymd.cli.load_style_name", return_value=None),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def _run_interactive(self, argv: list[str], *, tty: bool = True, stdin_text: str = ""):
        with (
            mock.patch("sys.stdin", _FakeStdin(stdin_text)),
            mock.patch("lazymd.cli.os.isatty", return_value=tty),
            mock.patch("lazymd.cli.run_dual_pane") as run_dual_pane,
            mock.patch("lazymd.cli.run_single_file") as run_single_file,
        ):
            cli.main(argv)
        return run_dual_pane, run_single_file


class CliModeSelectionTests(_CliTestCase):
    def test_directory_argument_opens_dual_pane(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            run_dual_pane, run_single_file = self._run_interactive([str(root), "-i"])

        run_dual_pane.assert_called_once_with(root, include_ignored=True, style="monokai", raw=False)
        run_single_file.assert_not_called()

    def test_no_argument_defaults_to_current_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                run_dual_pane, _ = self._run_interactive([])
            finally:
                os.chdir(previous_cwd)

        path = run_dual_pane.call_args.args[0]
        self.assertEqual(path.resolve(), root)
        self.assertFalse(run_dual_pane.call_args.kwargs["include_ignored"])

    def test_file_argument_opens_single_file_viewer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.md"
            target.write_text("# notes\n", encoding="utf-8")
            run_dual_pane, run_single_file = self._run_interactive([str(target), "--raw", "--style", "native"])

        run_single_file.assert_called_once_with(target, style="native", raw=True)
        run_dual_pane.assert_not_called()

    def test_piped_stdin_opens_single_file_viewer_on_content(self) -> None:
        run_dual_pane, run_single_file = self._run_interactive([], tty=False, stdin_text="# piped\nbody\n")

        run_single_file.assert_called_once_with(
            Path("stdin"),
            content="# piped\nbody\n",
            title="stdin",
            style="monokai",
            raw=False,
        )
        run_dual_pane.assert_not_called()

    def test_missing_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "gone.md"
            with self.assertRaises(SystemExit) as ctx:
                self._run_interactive([str(missing)])

        self.assertEqual(str(ctx.exception), f"Path not found: {missing}")

    def test_unknown_style_exits(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run_interactive(["--style", "no-such-style"])

        self.assertEqual(str(ctx.exception), "Unknown style: no-such-style")

    def test_persisted_style_used_when_flag_absent(self) -> None:
        with mock.patch("lazymd.cli.load_style_name", return_value="native"):
            self.assertEqual(cli.resolve_style(None), "native")
            self.assertEqual(cli.resolve_style("monokai"), "monokai")


class CliRenderTests(_CliTestCase):
    def _render(self, argv: list[str]) -> str:
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            cli.main(argv)
        return stdout.getvalue()

    def test_render_raw_prints_text_verbatim(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "doc.md"
            target.write_text("# Title\n\nbody", encoding="utf-8")
            output = self._render(["--render", str(target), "--raw"])

        self.assertEqual(output, "# Title\n\nbody\n")

    def test_render_wraps_to_max_cols(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "doc.md"
            target.write_text("# Title\n\n" + "word " * 30, encoding="utf-8")
            output = self._render(["--render", str(target), "--max-cols", "40"])

        plain_lines = ANSI_ESCAPE_RE.sub("", output).split("\n")
        self.assertEqual(plain_lines[0], "# Title")
        self.assertGreater(len(plain_lines), 4)
        for line in plain_lines:
            self.assertLessEqual(display_width(line), 40)
        self.assertIn("\033[", output)

    def test_render_missing_file_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope.md"
            with self.assertRaises(SystemExit) as ctx:
                self._render(["--render", str(missing)])

        self.assertEqual(str(ctx.exception), f"Path not found: {missing}")

    def test_render_rejects_positional_path(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._render(["some/path", "--render", "doc.md"])

        self.assertEqual(str(ctx.exception), "Cannot combine positional path with --render.")

    def test_max_cols_must_be_positive(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as ctx:
                cli.build_parser().parse_args(["--max-cols", "0"])

        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
