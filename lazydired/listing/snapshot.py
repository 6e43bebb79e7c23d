"""Line-addressed text snapshots of one directory listing.

Line format (0-indexed)::

    0      <path><sep>            (prefixed "Renaming in " in a rename session)
    1      <blank>
    2..N+1 one rendered entry per line
    N+2    <blank>
    ...    help block for the mode

Line 2 is always the first entry line. The rename prefix only touches line 0,
so entry line numbers are identical in both modes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .help import help_text_for_mode
from .types import Entry, EntryListing

FIRST_ENTRY_LINE = 2
RENAME_HEADER_PREFIX = "Renaming in "
READ_ERROR_TEXT = "Error reading from disk."


@dataclass(frozen=True)
class ListingSnapshot:
    """Rendered listing text plus the entry list and version it came from."""

    directory: Path
    entries: tuple[Entry, ...]
    text: str
    renaming: bool = False
    version: int = 0
    hidden_count: int = 0
    error: str | None = None

    @property
    def last_entry_line(self) -> int:
        """Return the last valid entry line (``1`` when there are no entries)."""
        return len(self.entries) + FIRST_ENTRY_LINE - 1

    @property
    def entry_lines(self) -> tuple[str, ...]:
        return tuple(entry.rendered for entry in self.entries)

    def is_entry_line(self, line: int) -> bool:
        return FIRST_ENTRY_LINE <= line <= self.last_entry_line

    def entry_at(self, line: int) -> Entry | None:
        """Return the entry rendered on ``line`` or ``None`` outside entry lines."""
        if not self.is_entry_line(line):
            return None
        return self.entries[line - FIRST_ENTRY_LINE]

    def path_at(self, line: int) -> Path | None:
        entry = self.entry_at(line)
        if entry is None:
            return None
        return self.directory / entry.name

    def line_for_name(self, rendered: str) -> int | None:
        """Return the line showing exactly ``rendered``, if any."""
        for idx, entry in enumerate(self.entries):
            if entry.rendered == rendered:
                return idx + FIRST_ENTRY_LINE
        return None


def render_header(directory: Path, renaming: bool = False) -> str:
    """Return line 0: the directory path with one trailing separator."""
    path_text = str(directory)
    if not path_text.endswith(os.sep):
        path_text += os.sep
    return f"{RENAME_HEADER_PREFIX if renaming else ''}{path_text}"


def footer_line_count(renaming: bool) -> int:
    """Return how many trailing lines follow the entry block (blank + help)."""
    return 1 + len(help_text_for_mode(renaming).split("\n"))


def render_listing(
    directory: Path,
    listing: EntryListing,
    renaming: bool = False,
    *,
    version: int = 0,
    error: str | None = None,
) -> ListingSnapshot:
    """Render ``listing`` of ``directory`` into a snapshot.

    With ``error`` set the body is a read-error notice, no entries and no
    help block.
    """
    header = render_header(directory, renaming)
    if error is not None:
        return ListingSnapshot(
            directory=directory,
            entries=(),
            text=f"{header}\n\n{READ_ERROR_TEXT}",
            renaming=renaming,
            version=version,
            error=error,
        )

    entries = tuple(listing.entries)
    lines = [header, ""]
    lines.extend(entry.rendered for entry in entries)
    lines.append("")
    lines.append(help_text_for_mode(renaming))
    return ListingSnapshot(
        directory=directory,
        entries=entries,
        text="\n".join(lines),
        renaming=renaming,
        version=version,
        hidden_count=listing.hidden_count,
    )


def entry_lines_from_text(text: str, renaming: bool = True) -> list[str]:
    """Extract entry lines from an (edited) listing buffer.

    Drops the two header lines and the fixed footer of the mode. A single
    trailing newline, as most editors append, is ignored.
    """
    if text.endswith("\n"):
        text = text[:-1]
    lines = text.split("\n")
    end = len(lines) - footer_line_count(renaming)
    return lines[FIRST_ENTRY_LINE:max(FIRST_ENTRY_LINE, end)]


__all__ = [
    "FIRST_ENTRY_LINE",
    "RENAME_HEADER_PREFIX",
    "READ_ERROR_TEXT",
    "ListingSnapshot",
    "render_header",
    "footer_line_count",
    "render_listing",
    "entry_lines_from_text",
]
