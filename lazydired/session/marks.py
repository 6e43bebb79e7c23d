"""Marked-line overlay: a multi-selection independent of cursor position.

Marks are keyed by line number, so they are only meaningful for the snapshot
that produced them. ``bind`` swaps in a new snapshot and drops every mark.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from ..errors import StaleSnapshotError
from ..listing import FIRST_ENTRY_LINE, Entry, ListingSnapshot


class MarkDecorator(Protocol):
    """Host hook that draws and removes mark decorations."""

    def add_mark(self, line: int) -> object: ...

    def remove_mark(self, line: int, handle: object) -> None: ...


class NullMarkDecorator:
    """Decorator used when the host draws marks from ``marked_lines`` itself."""

    def add_mark(self, line: int) -> object:
        return line

    def remove_mark(self, line: int, handle: object) -> None:
        return None


class MarkOverlay:
    """Set of marked entry lines mapped to host decoration handles."""

    def __init__(self, snapshot: ListingSnapshot | None = None, decorator: MarkDecorator | None = None) -> None:
        self._snapshot = snapshot
        self._decorator: MarkDecorator = decorator if decorator is not None else NullMarkDecorator()
        self._marks: dict[int, object] = {}

    @property
    def snapshot(self) -> ListingSnapshot | None:
        return self._snapshot

    def bind(self, snapshot: ListingSnapshot | None) -> None:
        """Attach a freshly rendered snapshot and clear all marks."""
        self.clear()
        self._snapshot = snapshot

    def set_decorator(self, decorator: MarkDecorator | None) -> None:
        self.clear()
        self._decorator = decorator if decorator is not None else NullMarkDecorator()

    def __len__(self) -> int:
        return len(self._marks)

    def __contains__(self, line: object) -> bool:
        return line in self._marks

    def marked_lines(self) -> list[int]:
        return sorted(self._marks)

    def _check_version(self, version: int | None) -> None:
        if version is None or self._snapshot is None:
            return
        if version != self._snapshot.version:
            raise StaleSnapshotError(version, self._snapshot.version)

    def _is_valid(self, line: int) -> bool:
        return self._snapshot is not None and self._snapshot.is_entry_line(line)

    def _add(self, line: int) -> None:
        if line in self._marks:
            return
        self._marks[line] = self._decorator.add_mark(line)

    def _remove(self, line: int) -> None:
        if line not in self._marks:
            return
        handle = self._marks.pop(line)
        self._decorator.remove_mark(line, handle)

    def toggle(self, line: int, version: int | None = None) -> None:
        """Mark ``line`` when unmarked, unmark otherwise; ignore invalid lines."""
        self._check_version(version)
        if not self._is_valid(line):
            return
        if line in self._marks:
            self._remove(line)
        else:
            self._add(line)

    def toggle_lines(self, lines: Iterable[int], version: int | None = None) -> None:
        self._check_version(version)
        for line in lines:
            self.toggle(line)

    def toggle_all(self, version: int | None = None) -> None:
        """Invert membership for every entry line."""
        self._check_version(version)
        if self._snapshot is None:
            return
        for line in range(FIRST_ENTRY_LINE, self._snapshot.last_entry_line + 1):
            if line in self._marks:
                self._remove(line)
            else:
                self._add(line)

    def clear(self) -> None:
        for line in list(self._marks):
            self._remove(line)

    def mark_matching(self, substring: str, version: int | None = None) -> int:
        """Mark every entry line containing ``substring``; never unmarks.

        Returns the number of newly marked lines.
        """
        self._check_version(version)
        if self._snapshot is None or not substring:
            return 0
        added = 0
        for idx, rendered in enumerate(self._snapshot.entry_lines):
            line = idx + FIRST_ENTRY_LINE
            if substring in rendered and line not in self._marks:
                self._add(line)
                added += 1
        return added

    def selected_lines(self, cursor_lines: Iterable[int] = ()) -> list[int]:
        """Return marked lines, or the valid cursor lines when nothing is marked."""
        if self._marks:
            return self.marked_lines()
        lines: list[int] = []
        for line in cursor_lines:
            if self._is_valid(line) and line not in lines:
                lines.append(line)
        return lines

    def selected_entries(self, cursor_lines: Iterable[int] = ()) -> list[Entry]:
        if self._snapshot is None:
            return []
        entries: list[Entry] = []
        for line in self.selected_lines(cursor_lines):
            entry = self._snapshot.entry_at(line)
            if entry is not None:
                entries.append(entry)
        return entries

    def selected_paths(self, cursor_lines: Iterable[int] = ()) -> list[Path]:
        """Return full paths for marked lines, falling back to cursor lines."""
        if self._snapshot is None:
            return []
        directory = self._snapshot.directory
        return [directory / entry.name for entry in self.selected_entries(cursor_lines)]


__all__ = ["MarkDecorator", "NullMarkDecorator", "MarkOverlay"]
