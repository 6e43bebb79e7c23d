"""Explicit session context for one listing buffer.

``DiredSession`` owns every piece of mutable listing state: the current and
last successfully read directory, the rendered snapshot, the rename-session
snapshot, and the mark overlay. All directory-changing actions go through
``_transition``, which swaps directory, snapshot, version and marks together
so line-addressed state never outlives the snapshot it was built on.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import DiredError, ReadError, StaleSnapshotError
from ..listing import (
    FIRST_ENTRY_LINE,
    EntryListing,
    ListingSnapshot,
    entry_lines_from_text,
    list_entries,
    render_listing,
)
from .cursor import NavigationCursor
from .events import LISTING_SOURCE_IDENTITY, ListingSource, Signal
from .marks import MarkOverlay
from .rename import RenameResult, apply_rename_plan, plan_renames

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """Result of one directory-changing transition."""

    snapshot: ListingSnapshot
    read_errors: tuple[ReadError, ...] = ()
    fell_back: bool = False

    @property
    def ok(self) -> bool:
        return self.snapshot.error is None


@dataclass
class DiredSession:
    """Listing state for one buffer plus its change signals."""

    omit_patterns: tuple[re.Pattern[str], ...] = ()
    current_directory: Path | None = None
    last_working_directory: Path | None = None
    snapshot: ListingSnapshot | None = None
    rename_snapshot: ListingSnapshot | None = None
    marks: MarkOverlay = field(default_factory=MarkOverlay)
    version: int = 0
    cursor_moved: Signal = field(default_factory=Signal)
    buffer_edited: Signal = field(default_factory=Signal)
    source: ListingSource = field(init=False)

    def __post_init__(self) -> None:
        self.source = ListingSource(LISTING_SOURCE_IDENTITY, lambda: self.snapshot)

    @property
    def renaming(self) -> bool:
        return self.rename_snapshot is not None

    @property
    def cursor(self) -> NavigationCursor | None:
        if self.snapshot is None:
            return None
        return NavigationCursor(self.snapshot)

    def read_listing(self, directory: Path) -> tuple[EntryListing, ReadError | None]:
        return list_entries(directory, self.omit_patterns)

    def _transition(self, directory: Path | None, *, renaming: bool = False) -> Transition:
        """Read ``directory`` (or the current one) and make it the new snapshot.

        When the read fails, the last successfully read directory is tried
        instead. If that fails too, the snapshot shows the read error and
        ``current_directory`` stays unchanged.
        """
        target = directory if directory is not None else self.current_directory
        if target is None:
            raise DiredError("No directory selected.")

        errors: list[ReadError] = []
        fell_back = False
        listing, error = self.read_listing(target)
        if error is not None:
            errors.append(error)
            fallback = self.last_working_directory
            if fallback is not None and fallback != target:
                listing, fallback_error = self.read_listing(fallback)
                if fallback_error is None:
                    logger.debug("falling back from %s to %s", target, fallback)
                    target = fallback
                    error = None
                    fell_back = True
                else:
                    errors.append(fallback_error)

        self.version += 1
        if error is None:
            self.current_directory = target
            self.last_working_directory = target
            snapshot = render_listing(target, listing, renaming, version=self.version)
        else:
            shown = self.current_directory if self.current_directory is not None else target
            snapshot = render_listing(shown, EntryListing(), renaming, version=self.version, error=str(error))

        self.snapshot = snapshot
        self.rename_snapshot = snapshot if renaming and snapshot.error is None else None
        self.marks.bind(snapshot)
        self.source.notify_changed()
        return Transition(snapshot=snapshot, read_errors=tuple(errors), fell_back=fell_back)

    def open_directory(self, directory: Path) -> Transition:
        return self._transition(directory.expanduser().absolute(), renaming=False)

    def refresh(self) -> Transition:
        return self._transition(None, renaming=self.renaming)

    def parent_directory(self) -> Path | None:
        """Return the parent of the current directory, ``None`` at the root."""
        if self.current_directory is None:
            return None
        parent = self.current_directory.parent
        if parent == self.current_directory:
            return None
        return parent

    def up(self) -> Transition | None:
        parent = self.parent_directory()
        if parent is None:
            return None
        return self._transition(parent, renaming=False)

    def enter_rename(self) -> Transition:
        """Re-render the current directory as an editable rename snapshot."""
        return self._transition(None, renaming=True)

    def cancel_rename(self) -> Transition:
        return self._transition(None, renaming=False)

    def edited_entries(self, edited_text: str) -> list[str]:
        return entry_lines_from_text(edited_text, renaming=True)

    def commit_rename(self, edited_text: str, version: int | None = None) -> RenameResult:
        """Reconcile ``edited_text`` against the rename snapshot and apply it.

        Validation errors propagate before anything touches the disk and keep
        the rename session open. Once renames were attempted the session
        leaves rename mode and re-reads the directory, whatever the outcome.
        """
        original = self.rename_snapshot
        if original is None:
            raise DiredError("Rename mode is not active.")
        if version is not None and version != original.version:
            raise StaleSnapshotError(version, original.version)

        plan = plan_renames(original.directory, original.entry_lines, self.edited_entries(edited_text))
        result = apply_rename_plan(plan)
        logger.debug("rename commit in %s: %d ops, ok=%s", original.directory, len(plan.ops), result.ok)
        transition = self._transition(original.directory, renaming=False)
        result.read_errors = transition.read_errors
        return result

    def original_name_hints(self, edited_text: str) -> dict[int, str]:
        """Map edited entry lines to their original names where they differ."""
        original = self.rename_snapshot
        if original is None:
            return {}
        hints: dict[int, str] = {}
        edited = self.edited_entries(edited_text)
        for idx, old_rendered in enumerate(original.entry_lines):
            if idx >= len(edited):
                break
            if edited[idx] != old_rendered:
                hints[idx + FIRST_ENTRY_LINE] = old_rendered
        return hints

    def notify_cursor_moved(self, line: int) -> None:
        self.cursor_moved.emit(line)

    def notify_buffer_edited(self, text: str) -> None:
        self.buffer_edited.emit(text)


__all__ = ["Transition", "DiredSession"]
