"""File viewing and $EDITOR helper tests."""

from __future__ import annotations

import os
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydired.editor import edit_text, editor_command
from lazydired.highlight import colorize_source, read_text, render_file, sanitize_terminal_text
from lazydired.session import DiredSession


class HighlightTests(unittest.TestCase):
    def test_read_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "legacy.txt"
            path.write_bytes(b"caf\xe9\n")

            self.assertEqual(read_text(path), "caf\xe9\n")

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb\x07\tc\n"), "a\\x1b[2Jb\\x07\tc\n")
        self.assertEqual(sanitize_terminal_text("plain\n"), "plain\n")

    def test_render_file_plain_and_binary(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            text_path = Path(tmp) / "hello.py"
            text_path.write_text("print('hi')\n", encoding="utf-8")
            binary_path = Path(tmp) / "blob.bin"
            binary_path.write_bytes(b"\x00\x01\x02")

            self.assertEqual(render_file(text_path, no_color=True), "print('hi')\n")
            self.assertEqual(render_file(binary_path), "<binary file: blob.bin>\n")

    def test_colorize_emits_ansi_and_tolerates_unknown_style_and_lexer(self) -> None:
        colored = colorize_source("def f():\n    return 1\n", Path("mod.py"), style="no-such-style")
        plain = colorize_source("just words\n", Path("notes.unknownext"))

        self.assertIn("\x1b[", colored)
        self.assertIn("just words", plain)


class EditorTests(unittest.TestCase):
    def test_missing_editor_is_reported(self) -> None:
        with mock.patch.dict(os.environ, {"EDITOR": "  "}):
            self.assertEqual(editor_command(), (None, "Cannot edit: $EDITOR is not set."))
            self.assertEqual(edit_text("x"), (None, "Cannot edit: $EDITOR is not set."))

    def test_edit_text_returns_file_contents_after_editor_exits(self) -> None:
        def fake_run(argv: list[str], check: bool) -> subprocess.CompletedProcess:
            Path(argv[-1]).write_text("edited\n", encoding="utf-8")
            return subprocess.CompletedProcess(argv, 0)

        with (
            mock.patch.dict(os.environ, {"EDITOR": "vim -n"}),
            mock.patch("lazydired.editor.subprocess.run", side_effect=fake_run) as run,
        ):
            edited, error = edit_text("original\n")

        self.assertIsNone(error)
        self.assertEqual(edited, "edited\n")
        argv = run.call_args.args[0]
        self.assertEqual(argv[:2], ["vim", "-n"])
        self.assertFalse(Path(argv[-1]).exists())

    def test_nonzero_exit_discards_changes(self) -> None:
        with (
            mock.patch.dict(os.environ, {"EDITOR": "false"}),
            mock.patch(
                "lazydired.editor.subprocess.run",
                return_value=subprocess.CompletedProcess(["false"], 1),
            ),
        ):
            edited, error = edit_text("text")

        self.assertIsNone(edited)
        self.assertIn("status 1", error)

    @unittest.skipUnless(os.name == "posix", "raw file name bytes are a POSIX concept")
    def test_undecodable_names_round_trip_through_editor(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            try:
                (root / os.fsdecode(b"caf\xe9")).write_text("x", encoding="utf-8")
            except OSError:
                self.skipTest("filesystem rejects non-UTF-8 names")
            (root / "other").write_text("y", encoding="utf-8")
            session = DiredSession()
            session.open_directory(root)
            session.enter_rename()

            def fake_run(argv: list[str], check: bool) -> subprocess.CompletedProcess:
                path = Path(argv[-1])
                raw = path.read_bytes()
                self.assertIn(b"\ncaf\xe9\n", raw)
                path.write_bytes(raw.replace(b"\nother\n", b"\nrenamed\n"))
                return subprocess.CompletedProcess(argv, 0)

            with (
                mock.patch.dict(os.environ, {"EDITOR": "vi"}),
                mock.patch("lazydired.editor.subprocess.run", side_effect=fake_run),
            ):
                edited, error = edit_text(session.snapshot.text)

            self.assertIsNone(error)
            result = session.commit_rename(edited)

            self.assertTrue(result.ok, result.summary())
            self.assertEqual(sorted(os.listdir(os.fsencode(root))), [b"caf\xe9", b"renamed"])


if __name__ == "__main__":
    unittest.main()
