"""User-facing listing commands wired to a host.

Each command is a discrete reaction to one user event. Commands return
``True`` when they did something and report problems through the host
instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from .. import config
from ..errors import DiredError, FilesystemOpError, RenameValidationError
from ..key_registry import KeyBinding, KeyRegistry
from ..listing import FIRST_ENTRY_LINE
from ..workspace import WorkspaceFolders
from .events import ListingSource, Subscription
from .fileops import create_directories, create_file, delete_paths, describe_counts, move_paths
from .host import Host
from .preview import PreviewCoordinator
from .rename import RenameResult
from .state import DiredSession, Transition

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

BROWSE_OPTION = "Browse..."

COMMAND_ITEMS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("browse", "Browse for a directory", ()),
    ("goto", "Goto directory", ("g",)),
    ("goto_anywhere", "Goto anywhere", ("B",)),
    ("refresh", "Refresh view", ("r",)),
    ("select", "Open file / view directory", ("enter", "o")),
    ("up", "Up to parent directory", ("u",)),
    ("rename", "Rename", ("R",)),
    ("rename_cancel", "Cancel rename", ("shift+escape",)),
    ("rename_commit", "Confirm rename", ("ctrl+enter",)),
    ("delete", "Delete", ("D",)),
    ("move", "Move", ("M",)),
    ("create_file", "Create file", ("cf",)),
    ("create_directory", "Create directory", ("cd",)),
    ("prev", "Move to previous entry", ("p",)),
    ("next", "Move to next entry", ("n",)),
    ("jump_to_name", "Jump to file/dir name", ("j",)),
    ("preview", "Toggle preview mode", ("P",)),
    ("toggle_mark", "Toggle mark", ("m",)),
    ("invert_marks", "Toggle all marks", ("t",)),
    ("unmark_all", "Unmark all", ("U",)),
    ("mark_by_name", "Mark by partial name", ("*",)),
    ("add_to_workspace", "Add to project", ("ap",)),
    ("remove_from_workspace", "Remove from project", ("rp",)),
    ("add_bookmark", "Add to bookmarks", ("ab",)),
    ("remove_bookmark", "Remove from bookmarks", ("rb",)),
)


class DiredCommands:
    """Command surface over one ``DiredSession`` and its host."""

    def __init__(
        self,
        session: DiredSession,
        host: Host,
        workspace: WorkspaceFolders | None = None,
        home: Path | None = None,
    ) -> None:
        self.session = session
        self.host = host
        self.workspace = workspace if workspace is not None else WorkspaceFolders()
        self._preview = PreviewCoordinator(session, host)
        self._home = home if home is not None else Path.home()
        self._hint_subscription: Subscription | None = None
        self._saved_rename_mode: bool | None = None
        session.marks.set_decorator(host)

    # -- plumbing -----------------------------------------------------------

    def run(self, command_id: str) -> bool:
        """Run one command by id, reporting any ``DiredError`` to the host."""
        handler: Callable[[], bool] | None = getattr(self, command_id, None)
        if handler is None or command_id not in COMMAND_IDS:
            self.host.show_warning(f"Unknown command: {command_id}")
            return False
        try:
            return bool(handler())
        except DiredError as exc:
            logger.debug("command %s failed: %s", command_id, exc)
            self.host.show_error(str(exc))
            return False

    def _primary_cursor_line(self) -> int:
        lines = self.host.cursor_lines()
        return lines[0] if lines else FIRST_ENTRY_LINE

    def _set_cursor(self, line: int) -> None:
        self.host.set_cursor(line)
        self.session.notify_cursor_moved(line)

    def _on_listing_changed(self, _source: ListingSource) -> None:
        self._set_cursor(FIRST_ENTRY_LINE)

    def _present(self, action: Callable[[], _T]) -> _T:
        """Run a state transition, then show the new listing with the cursor on line 2."""
        subscription = self.session.source.changed.connect_once(self._on_listing_changed)
        try:
            outcome = action()
        finally:
            subscription.dispose()
        if isinstance(outcome, (Transition, RenameResult)):
            for error in outcome.read_errors:
                self.host.show_error(str(error))
        if self.session.snapshot is not None:
            self.host.show_listing(self.session.source, editable=self.session.renaming)
        self._sync_rename_mode()
        return outcome

    def _sync_rename_mode(self) -> None:
        """Arm the original-name hint listener in rename mode, drop it otherwise."""
        renaming = self.session.renaming
        if renaming and self._hint_subscription is None:
            self._hint_subscription = self.session.buffer_edited.connect(self._show_rename_hints)
        elif not renaming and self._hint_subscription is not None:
            self._hint_subscription.dispose()
            self._hint_subscription = None
            self.host.show_rename_hints({})
        if renaming != self._saved_rename_mode:
            config.save_rename_mode(renaming)
            self._saved_rename_mode = renaming

    def _show_rename_hints(self, text: str) -> None:
        self.host.show_rename_hints(self.session.original_name_hints(text))

    def _require_directory(self) -> Path:
        if self.session.current_directory is None or self.session.snapshot is None:
            raise DiredError("No directory selected.")
        return self.session.current_directory

    def _report_failures(self, failures: list[FilesystemOpError]) -> None:
        for failure in failures:
            self.host.show_error(str(failure))

    # -- opening directories ------------------------------------------------

    def open_directory(self, directory: Path) -> bool:
        return self._present(lambda: self.session.open_directory(directory)).ok

    def browse(self, start: Path | None = None) -> bool:
        chosen = self.host.choose_directory(start)
        if chosen is None:
            return False
        return self.open_directory(chosen)

    def goto(self) -> bool:
        return self.browse(self.session.current_directory)

    def goto_anywhere(self) -> bool:
        """Pick among workspace folders, bookmarks, home, or a directory dialog."""
        options: list[str] = []
        for folder in [*self.workspace.folders(), *config.load_bookmarks(), self._home]:
            text = str(folder)
            if text not in options:
                options.append(text)
        options.append(BROWSE_OPTION)
        choice = self.host.pick(options, "Select a directory to open...")
        if choice is None:
            return False
        if choice == BROWSE_OPTION:
            return self.browse()
        return self.open_directory(Path(choice))

    def refresh(self) -> bool:
        self._require_directory()
        return self._present(self.session.refresh).ok

    def select(self) -> bool:
        """Open the entry under the cursor: directories in place, files in the host."""
        snapshot = self.session.snapshot
        if snapshot is None:
            return False
        line = self._primary_cursor_line()
        entry = snapshot.entry_at(line)
        if entry is None:
            return False
        path = snapshot.directory / entry.name
        if entry.is_dir:
            return self.open_directory(path)
        self.session.marks.clear()
        self.host.open_file(path)
        return True

    def up(self) -> bool:
        self._require_directory()
        if self.session.parent_directory() is None:
            self.host.show_info("You are in the root directory.")
            return False
        transition = self._present(self.session.up)
        return transition is not None and transition.ok

    # -- rename session -----------------------------------------------------

    def rename(self) -> bool:
        self._require_directory()
        if self.session.renaming:
            return False
        return self._present(self.session.enter_rename).ok

    def rename_cancel(self) -> bool:
        self._require_directory()
        return self._present(self.session.cancel_rename).ok

    def rename_commit(self) -> bool:
        self._require_directory()
        if not self.session.renaming:
            self.host.show_warning("Rename mode is not active.")
            return False
        text = self.host.buffer_text()
        try:
            result = self._present(lambda: self.session.commit_rename(text))
        except RenameValidationError as exc:
            self.host.show_warning(str(exc))
            return False
        if not result.ok:
            self.host.show_error(result.summary())
            return False
        if result.applied:
            self.host.show_info(result.summary())
        return True

    # -- file operations ----------------------------------------------------

    def delete(self) -> bool:
        self._require_directory()
        paths = self.session.marks.selected_paths(self.host.cursor_lines())
        if not paths:
            return False
        wording = describe_counts(paths)
        if not self.host.confirm(f"Delete {wording}?", "Confirm delete"):
            return False
        failures = delete_paths(paths)
        self._report_failures(failures)
        self._present(self.session.refresh)
        return not failures

    def move(self) -> bool:
        directory = self._require_directory()
        paths = self.session.marks.selected_paths(self.host.cursor_lines())
        if not paths:
            return False
        destination = self.host.choose_directory(directory)
        if destination is None:
            return False
        if destination.resolve() == directory.resolve():
            self.host.show_info("The destination path is the same as the source path.")
            return False
        failures = move_paths(paths, destination)
        self._report_failures(failures)
        self._present(self.session.refresh)
        return not failures

    def create_file(self) -> bool:
        directory = self._require_directory()
        value = self.host.ask_text("Enter file name, you can use / to create structures")
        if not value:
            self.host.show_warning("No file name provided")
            return False
        created = create_file(directory / value)
        if not created:
            self.host.show_warning("This file already exists.")
        self._present(self.session.refresh)
        return created

    def create_directory(self) -> bool:
        directory = self._require_directory()
        value = self.host.ask_text("Enter directory name, you can use / to create structures")
        if not value:
            self.host.show_warning("No directory name provided")
            return False
        create_directories(directory / value)
        self._present(self.session.refresh)
        return True

    # -- cursor -------------------------------------------------------------

    def _move_cursor_by(self, delta: int) -> bool:
        cursor = self.session.cursor
        if cursor is None:
            return False
        self._set_cursor(cursor.move_by(self._primary_cursor_line(), delta))
        return True

    def prev(self) -> bool:
        return self._move_cursor_by(-1)

    def next(self) -> bool:
        return self._move_cursor_by(1)

    def jump_to_name(self) -> bool:
        cursor = self.session.cursor
        if cursor is None:
            return False
        choice = self.host.pick(cursor.entry_names(), "Enter file / directory name to move the cursor to")
        if choice is None:
            return False
        line = cursor.jump_to_name(choice)
        if line is None:
            return False
        self._set_cursor(line)
        return True

    def preview(self) -> bool:
        self._require_directory()
        enabled = self._preview.toggle(self._primary_cursor_line())
        self.host.show_info(f"Preview mode {'enabled' if enabled else 'disabled'}")
        return True

    @property
    def preview_coordinator(self) -> PreviewCoordinator:
        return self._preview

    # -- marks --------------------------------------------------------------

    def _mark_version(self) -> int:
        snapshot = self.session.snapshot
        if snapshot is None:
            raise DiredError("No directory selected.")
        return snapshot.version

    def toggle_mark(self) -> bool:
        self.session.marks.toggle_lines(self.host.cursor_lines(), version=self._mark_version())
        return True

    def invert_marks(self) -> bool:
        self.session.marks.toggle_all(version=self._mark_version())
        return True

    def unmark_all(self) -> bool:
        self.session.marks.clear()
        return True

    def mark_by_name(self) -> bool:
        version = self._mark_version()
        value = self.host.ask_text("Enter a search string, all entries containing it will get marked")
        if not value:
            self.host.show_warning("No search string provided")
            return False
        self.session.marks.mark_matching(value, version=version)
        return True

    # -- workspace and bookmarks --------------------------------------------

    def _pick_targets(self, verb: str, placeholder: str) -> list[Path] | None:
        """Ask whether to act on the selection or the open directory."""
        directory = self._require_directory()
        options = [f"{verb} the selected directories", f"{verb} the currently open directory"]
        choice = self.host.pick(options, placeholder)
        if choice is None:
            return None
        if choice == options[1]:
            return [directory]
        entries = self.session.marks.selected_entries(self.host.cursor_lines())
        skipped = [entry.name for entry in entries if not entry.is_dir]
        if skipped:
            self.host.show_warning(f"Only directories can be used, skipping: {'; '.join(skipped)}")
        return [directory / entry.name for entry in entries if entry.is_dir]

    def add_to_workspace(self) -> bool:
        targets = self._pick_targets("Add", "Select what to add to the current workspace")
        if not targets:
            return False
        for target in targets:
            if not self.workspace.add(target):
                self.host.show_info(f"Folder {target} is already in the workspace")
        return True

    def remove_from_workspace(self) -> bool:
        targets = self._pick_targets("Remove", "Select what to remove from the current workspace")
        if not targets:
            return False
        for target in targets:
            if not self.workspace.remove(target):
                self.host.show_info(f"Folder {target} is not in the workspace")
        return True

    def add_bookmark(self) -> bool:
        targets = self._pick_targets("Bookmark", "Select what to bookmark")
        if not targets:
            return False
        bookmarks = config.load_bookmarks()
        for target in targets:
            resolved = target.resolve()
            if resolved in bookmarks:
                self.host.show_info(f"{resolved} is already bookmarked")
                continue
            bookmarks.append(resolved)
        config.save_bookmarks(bookmarks)
        return True

    def remove_bookmark(self) -> bool:
        bookmarks = config.load_bookmarks()
        if not bookmarks:
            self.host.show_info("There are no bookmarks.")
            return False
        choice = self.host.pick([str(path) for path in bookmarks], "Select a bookmark to remove")
        if choice is None:
            return False
        config.save_bookmarks([path for path in bookmarks if str(path) != choice])
        return True


COMMAND_IDS: frozenset[str] = frozenset(command_id for command_id, _label, _keys in COMMAND_ITEMS)


def build_key_registry(commands: DiredCommands) -> KeyRegistry:
    """Bind every command's keys to ``commands.run``."""
    bindings = [KeyBinding(keys, command_id) for command_id, _label, keys in COMMAND_ITEMS if keys]
    return KeyRegistry(commands.run, bindings)


__all__ = ["BROWSE_OPTION", "COMMAND_ITEMS", "COMMAND_IDS", "DiredCommands", "build_key_registry"]
