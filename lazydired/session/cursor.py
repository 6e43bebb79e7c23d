"""Cursor targets over the entry lines of one snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from ..listing import FIRST_ENTRY_LINE, ListingSnapshot


@dataclass(frozen=True)
class NavigationCursor:
    """Compute cursor target lines clamped to the snapshot's entry range."""

    snapshot: ListingSnapshot

    @property
    def last_entry_line(self) -> int:
        return self.snapshot.last_entry_line

    def first_entry_line(self) -> int:
        """Return the canonical cursor line right after any render."""
        return FIRST_ENTRY_LINE

    def is_entry_line(self, line: int) -> bool:
        return self.snapshot.is_entry_line(line)

    def move_by(self, current: int, delta: int) -> int:
        """Return ``current + delta`` saturated to the entry range (no wrap)."""
        target = current + delta
        if self.is_entry_line(target):
            return target
        if target < FIRST_ENTRY_LINE:
            return FIRST_ENTRY_LINE
        return max(FIRST_ENTRY_LINE, self.last_entry_line)

    def jump_to_name(self, name: str) -> int | None:
        """Return the line whose rendered entry equals ``name`` exactly."""
        return self.snapshot.line_for_name(name)

    def entry_names(self) -> list[str]:
        return list(self.snapshot.entry_lines)


__all__ = ["NavigationCursor"]
