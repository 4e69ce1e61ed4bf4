"""CLI argument and rendering behavior tests.

Verifies how ``snippetview.cli.main`` loads files, applies line selections
and falls back to persisted defaults.
"""

from __future__ import annotations

import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from snippetview import cli, config


def _run(argv: list[str]) -> str:
    stdout = io.StringIO()
    with mock.patch.object(sys, "argv", ["snippetview", *argv]), mock.patch("sys.stdout", stdout):
        cli.main()
    return stdout.getvalue()


class CliRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        config_patch = mock.patch("snippetview.config.CONFIG_PATH", self.root / "config.json")
        config_patch.start()
        self.addCleanup(config_patch.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_selected_lines_render_collapsed_with_real_numbers(self) -> None:
        target = self.root / "sample.txt"
        target.write_text("".join(f"row {n}\n" for n in range(1, 7)), encoding="utf-8")

        output = _run([str(target), "--lines", "1-2,5", "--no-color", "--max-cols", "80"])

        self.assertEqual(
            output,
            "sample.txt\n"
            "1 │ row 1\n"
            "2 │ row 2\n"
            "⋯ │ ⋯ 2 hidden lines (3-4)\n"
            "5 │ row 5\n"
            "⋯ │ ⋯ 1 hidden line (6-6)\n"
            "[Show Full Code]\n",
        )

    def test_expanded_flag_shows_every_line(self) -> None:
        target = self.root / "sample.txt"
        target.write_text("a\r\nb\r\nc\r\n", encoding="utf-8")

        output = _run([str(target), "--lines", "2", "--expanded", "--no-color", "--no-line-numbers", "--max-cols", "80"])

        self.assertEqual(output, "sample.txt\na\nb\nc\n[Show Less]\n")

    def test_without_lines_the_file_is_not_collapsible(self) -> None:
        target = self.root / "plain.txt"
        target.write_text("x\ny\n", encoding="utf-8")

        output = _run([str(target), "--no-color", "--no-line-numbers", "--max-cols", "80"])

        self.assertEqual(output, "plain.txt\nx\ny\n")

    def test_missing_path_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            _run([str(self.root / "nope.txt")])

        self.assertEqual(str(ctx.exception), f"Path not found: {self.root / 'nope.txt'}")

    def test_malformed_line_list_is_an_argument_error(self) -> None:
        target = self.root / "sample.txt"
        target.write_text("a\n", encoding="utf-8")

        with mock.patch("sys.stderr", io.StringIO()), self.assertRaises(SystemExit) as ctx:
            _run([str(target), "--lines", "x-y"])

        self.assertEqual(ctx.exception.code, 2)

    def test_merge_tolerance_defaults_to_config(self) -> None:
        target = self.root / "sample.txt"
        target.write_text("a\nb\nc\nd\n", encoding="utf-8")

        with mock.patch("snippetview.cli.config.load_merge_tolerance", return_value=1):
            output = _run([str(target), "--lines", "1,3", "--no-color", "--no-line-numbers", "--max-cols", "80"])

        self.assertEqual(output, "sample.txt\na\nb\nc\n⋯ 1 hidden line (4-4)\n[Show Full Code]\n")

    def test_save_defaults_persists_flags(self) -> None:
        target = self.root / "sample.txt"
        target.write_text("a\n", encoding="utf-8")

        _run([str(target), "--style", "friendly", "--merge-tolerance", "3", "--no-line-numbers", "--save-defaults", "--no-color"])

        self.assertEqual(config.load_style(), "friendly")
        self.assertEqual(config.load_merge_tolerance(), 3)
        self.assertFalse(config.load_show_line_numbers())

    def test_markdown_mode_renders_each_block_in_place(self) -> None:
        target = self.root / "doc.md"
        target.write_text(
            "Intro\n\n```text{\ntitle: Demo\nshowLinesOnly: [1]\n}\none\ntwo\n```\n\nOutro\n",
            encoding="utf-8",
        )

        output = _run([str(target), "--markdown", "--no-color", "--max-cols", "80"])

        self.assertEqual(
            output,
            "Intro\n\nDemo [text]\n1 │ one\n⋯ │ ⋯ 1 hidden line (2-2)\n[Show Full Code]\n\nOutro\n",
        )


    def test_markdown_mode_honors_no_line_numbers_flag(self) -> None:
        target = self.root / "doc.md"
        target.write_text("```text\none\ntwo\n```\n", encoding="utf-8")

        output = _run([str(target), "--markdown", "--no-color", "--no-line-numbers", "--max-cols", "80"])

        self.assertEqual(output, "one\ntwo\n")

    def test_markdown_mode_uses_config_default_unless_block_sets_numbers(self) -> None:
        (self.root / "config.json").write_text('{"show_line_numbers": false}', encoding="utf-8")
        target = self.root / "doc.md"
        target.write_text("```text{\nshowLineNumbers: true\n}\na\n```\n\n```text\nb\n```\n", encoding="utf-8")

        output = _run([str(target), "--markdown", "--no-color", "--max-cols", "80"])

        self.assertEqual(output, "1 │ a\n\nb\n")

    def test_markdown_block_mentioning_a_placeholder_keeps_document_order(self) -> None:
        target = self.root / "doc.md"
        target.write_text(
            "```text\nsee [CODE_BLOCK_1]\n```\n\nmid\n\n```text\nsecond\n```\n",
            encoding="utf-8",
        )

        output = _run([str(target), "--markdown", "--no-color", "--no-line-numbers", "--max-cols", "80"])

        self.assertEqual(output, "see [CODE_BLOCK_1]\n\nmid\n\nsecond\n")

    def test_markdown_merge_tolerance_metadata_string_is_applied(self) -> None:
        target = self.root / "doc.md"
        target.write_text(
            "```text{\nmergeTolerance: 1\nshowLinesOnly: [1, 3]\n}\na\nb\nc\nd\n```\n",
            encoding="utf-8",
        )

        output = _run([str(target), "--markdown", "--no-color", "--no-line-numbers", "--max-cols", "80"])

        self.assertEqual(output, "a\nb\nc\n⋯ 1 hidden line (4-4)\n[Show Full Code]\n")


if __name__ == "__main__":
    unittest.main()
