"""Domain datatypes for one-directory listings."""

from __future__ import annotations

import os
from dataclasses import dataclass

DIRECTORY_SUFFIX = os.sep


@dataclass(frozen=True)
class Entry:
    """One file or directory shown as a listing line."""

    name: str
    is_dir: bool = False

    @property
    def rendered(self) -> str:
        """Return the listing text; directories carry a trailing separator."""
        return self.name + DIRECTORY_SUFFIX if self.is_dir else self.name


@dataclass(frozen=True)
class EntryListing:
    """Visible entries of one directory read plus counts of what was left out."""

    entries: tuple[Entry, ...] = ()
    omitted_count: int = 0
    inaccessible_count: int = 0

    @property
    def hidden_count(self) -> int:
        return self.omitted_count + self.inaccessible_count


def split_rendered_name(rendered: str) -> tuple[str, bool]:
    """Split a rendered entry line into ``(bare_name, is_dir)``."""
    if rendered.endswith(DIRECTORY_SUFFIX):
        return rendered[: -len(DIRECTORY_SUFFIX)], True
    return rendered, False


__all__ = [
    "DIRECTORY_SUFFIX",
    "Entry",
    "EntryListing",
    "split_rendered_name",
]
