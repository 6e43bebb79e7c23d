"""Command-layer behavior against a recording host."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fakes import FakeHost

from lazydired import config
from lazydired.errors import ReadError
from lazydired.listing import EntryListing
from lazydired.session import BROWSE_OPTION, COMMAND_ITEMS, DiredCommands, DiredSession, build_key_registry
from lazydired.workspace import WorkspaceFolders


class CommandTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name).resolve()
        self.root = base / "root"
        self.root.mkdir()
        (self.root / "docs").mkdir()
        (self.root / "a.txt").write_text("a", encoding="utf-8")
        (self.root / "b.txt").write_text("b", encoding="utf-8")
        self.config_path = base / "config" / "config.json"
        patcher = mock.patch("lazydired.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

        self.host = FakeHost()
        self.session = DiredSession()
        self.commands = DiredCommands(self.session, self.host, WorkspaceFolders(), home=base)
        self.assertTrue(self.commands.open_directory(self.root))

    def line(self, rendered: str) -> int:
        line = self.session.snapshot.line_for_name(rendered)
        assert line is not None, rendered
        return line


class NavigationCommandTests(CommandTestCase):
    def test_opening_directory_shows_listing_and_puts_cursor_on_first_entry(self) -> None:
        self.assertIs(self.host.listing, self.session.source)
        self.assertFalse(self.host.editable)
        self.assertEqual(self.host.cursor, 2)

    def test_select_directory_opens_it_in_place(self) -> None:
        self.host.cursor = self.line(f"docs{os.sep}")

        self.assertTrue(self.commands.run("select"))

        self.assertEqual(self.session.current_directory, self.root / "docs")
        self.assertEqual(self.host.opened, [])

    def test_select_file_opens_it_in_host_and_clears_marks(self) -> None:
        self.commands.run("invert_marks")
        self.host.cursor = self.line("a.txt")

        self.assertTrue(self.commands.run("select"))

        self.assertEqual(self.host.opened, [(self.root / "a.txt", False)])
        self.assertEqual(len(self.session.marks), 0)

    def test_up_moves_to_parent_and_reports_root(self) -> None:
        self.assertTrue(self.commands.run("up"))
        self.assertEqual(self.session.current_directory, self.root.parent)

        self.commands.open_directory(Path(os.sep))
        self.assertFalse(self.commands.run("up"))
        self.assertIn("You are in the root directory.", self.host.kinds("info"))

    def test_prev_and_next_saturate(self) -> None:
        self.commands.run("prev")
        self.assertEqual(self.host.cursor, 2)

        for _ in range(10):
            self.commands.run("next")
        self.assertEqual(self.host.cursor, self.session.snapshot.last_entry_line)

    def test_jump_to_name_uses_picked_entry(self) -> None:
        self.host.pick_answers.append("b.txt")

        self.assertTrue(self.commands.run("jump_to_name"))

        self.assertEqual(self.host.cursor, self.line("b.txt"))

    def test_goto_anywhere_offers_workspace_bookmarks_home_and_browse(self) -> None:
        self.commands.workspace.add(self.root / "docs")
        config.save_bookmarks([self.root])
        self.host.pick_answers.append(str(self.root / "docs"))

        self.assertTrue(self.commands.run("goto_anywhere"))

        options, _placeholder = self.host.pick_calls[-1]
        self.assertEqual(options[0], str(self.root / "docs"))
        self.assertIn(str(self.root), options)
        self.assertEqual(options[-1], BROWSE_OPTION)
        self.assertEqual(self.session.current_directory, self.root / "docs")

    def test_unknown_command_is_reported(self) -> None:
        self.assertFalse(self.commands.run("launch_rockets"))
        self.assertEqual(self.host.kinds("warning"), ["Unknown command: launch_rockets"])


class RenameCommandTests(CommandTestCase):
    def _edit_buffer(self, old: str, new: str) -> None:
        lines = self.host.buffer_text().split("\n")
        lines[self.line(old)] = new
        self.host.edited_text = "\n".join(lines)

    def test_rename_round_trip_renames_and_leaves_rename_mode(self) -> None:
        self.assertTrue(self.commands.run("rename"))
        self.assertTrue(self.host.editable)
        self.assertTrue(config.load_rename_mode())

        self._edit_buffer("a.txt", "c.txt")
        self.assertTrue(self.commands.run("rename_commit"))

        self.assertTrue((self.root / "c.txt").exists())
        self.assertFalse(self.session.renaming)
        self.assertFalse(self.host.editable)
        self.assertFalse(config.load_rename_mode())
        self.assertIn("Renamed 1 entry.", self.host.kinds("info"))

    def test_rejected_edit_warns_and_keeps_rename_mode(self) -> None:
        self.commands.run("rename")
        self._edit_buffer("a.txt", "b.txt")

        self.assertFalse(self.commands.run("rename_commit"))

        self.assertTrue(self.session.renaming)
        self.assertEqual(self.host.kinds("warning"), ["Some entries have the same names: b.txt"])
        self.assertTrue((self.root / "a.txt").exists())

    def test_buffer_edits_update_original_name_hints(self) -> None:
        self.commands.run("rename")
        self._edit_buffer("a.txt", "z.txt")

        self.session.notify_buffer_edited(self.host.buffer_text())
        self.assertEqual(self.host.hints, {self.line("a.txt"): "a.txt"})

        self.commands.run("rename_cancel")
        self.assertEqual(self.host.hints, {})
        self.assertEqual(self.session.buffer_edited.listener_count(), 0)

    def test_failed_reread_after_commit_is_reported(self) -> None:
        self.commands.run("rename")
        self._edit_buffer("a.txt", "c.txt")
        error = ReadError(self.root, PermissionError(13, "Permission denied"))

        with mock.patch.object(self.session, "read_listing", return_value=(EntryListing(), error)):
            self.assertTrue(self.commands.run("rename_commit"))

        self.assertTrue((self.root / "c.txt").exists())
        self.assertIn("Error reading directory: Permission denied", self.host.kinds("error"))

    def test_commit_outside_rename_mode_warns(self) -> None:
        self.assertFalse(self.commands.run("rename_commit"))
        self.assertEqual(self.host.kinds("warning"), ["Rename mode is not active."])


class FileOperationCommandTests(CommandTestCase):
    def test_delete_uses_marks_and_confirmation(self) -> None:
        self.session.marks.toggle(self.line("a.txt"))
        self.session.marks.toggle(self.line(f"docs{os.sep}"))
        self.host.confirm_answers.append(True)

        self.assertTrue(self.commands.run("delete"))

        self.assertIn("Delete 1 directory and 1 file?", self.host.kinds("confirm"))
        self.assertEqual(sorted(os.listdir(self.root)), ["b.txt"])
        self.assertEqual(len(self.session.marks), 0)

    def test_declined_delete_keeps_files(self) -> None:
        self.host.cursor = self.line("a.txt")
        self.host.confirm_answers.append(False)

        self.assertFalse(self.commands.run("delete"))
        self.assertTrue((self.root / "a.txt").exists())

    def test_move_into_other_directory(self) -> None:
        self.host.cursor = self.line("b.txt")
        self.host.directory_answers.append(self.root / "docs")

        self.assertTrue(self.commands.run("move"))

        self.assertTrue((self.root / "docs" / "b.txt").exists())
        self.assertIsNone(self.session.snapshot.line_for_name("b.txt"))

    def test_move_to_same_directory_is_refused(self) -> None:
        self.host.cursor = self.line("b.txt")
        self.host.directory_answers.append(self.root)

        self.assertFalse(self.commands.run("move"))
        self.assertIn("The destination path is the same as the source path.", self.host.kinds("info"))

    def test_create_file_and_nested_directory(self) -> None:
        self.host.text_answers.extend(["new/deep/file.txt", "x/y"])

        self.assertTrue(self.commands.run("create_file"))
        self.assertTrue(self.commands.run("create_directory"))

        self.assertTrue((self.root / "new" / "deep" / "file.txt").is_file())
        self.assertTrue((self.root / "x" / "y").is_dir())
        self.assertIsNotNone(self.session.snapshot.line_for_name(f"new{os.sep}"))

    def test_create_file_warns_when_missing_or_existing(self) -> None:
        self.host.text_answers.extend([None, "a.txt"])

        self.assertFalse(self.commands.run("create_file"))
        self.assertFalse(self.commands.run("create_file"))

        self.assertEqual(self.host.kinds("warning"), ["No file name provided", "This file already exists."])


class MarkAndBookmarkCommandTests(CommandTestCase):
    def test_mark_commands_drive_host_decorations(self) -> None:
        self.host.cursor = self.line("a.txt")
        self.commands.run("toggle_mark")
        self.assertEqual(list(self.host.decorations), [self.line("a.txt")])

        self.commands.run("invert_marks")
        self.assertNotIn(self.line("a.txt"), self.host.decorations)
        self.assertEqual(len(self.host.decorations), 2)

        self.commands.run("unmark_all")
        self.assertEqual(self.host.decorations, {})

    def test_mark_by_name(self) -> None:
        self.host.text_answers.append(".txt")

        self.assertTrue(self.commands.run("mark_by_name"))

        self.assertEqual(self.session.marks.marked_lines(), sorted([self.line("a.txt"), self.line("b.txt")]))

    def test_workspace_add_and_remove_report_noops(self) -> None:
        self.host.pick_answers.extend(
            [
                "Add the currently open directory",
                "Add the currently open directory",
                "Remove the currently open directory",
                "Remove the currently open directory",
            ]
        )

        for command_id in ("add_to_workspace", "add_to_workspace", "remove_from_workspace", "remove_from_workspace"):
            self.commands.run(command_id)

        self.assertEqual(
            self.host.kinds("info"),
            [f"Folder {self.root} is already in the workspace", f"Folder {self.root} is not in the workspace"],
        )

    def test_bookmark_selected_directories_skips_files(self) -> None:
        self.session.marks.toggle_all()
        self.host.pick_answers.append("Bookmark the selected directories")

        self.assertTrue(self.commands.run("add_bookmark"))

        self.assertEqual(config.load_bookmarks(), [self.root / "docs"])
        self.assertEqual(len(self.host.kinds("warning")), 1)

        self.host.pick_answers.append(str(self.root / "docs"))
        self.assertTrue(self.commands.run("remove_bookmark"))
        self.assertEqual(config.load_bookmarks(), [])


class KeyRegistryTests(CommandTestCase):
    def test_every_bound_key_dispatches_its_command(self) -> None:
        registry = build_key_registry(self.commands)
        bound = {key for _command_id, _label, keys in COMMAND_ITEMS for key in keys}

        self.assertEqual(set(registry.combos()), bound)
        with mock.patch.object(DiredCommands, "run", return_value=True) as run:
            registry = build_key_registry(self.commands)
            registry.dispatch("R")
        run.assert_called_once_with("rename")
        self.assertIsNone(registry.dispatch("not-a-key"))


if __name__ == "__main__":
    unittest.main()
