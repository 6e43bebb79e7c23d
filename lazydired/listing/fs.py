"""Filesystem scanning for one-directory listings."""

from __future__ import annotations

import logging
import os
import re
import stat
from collections.abc import Sequence
from pathlib import Path

from ..errors import AccessError, ReadError
from .omit import is_omitted
from .types import Entry, EntryListing

logger = logging.getLogger(__name__)


def classify_entry(directory: Path, name: str) -> Entry:
    """Stat ``directory / name`` and return it as a file or directory entry.

    Symlinks are followed. Raises ``AccessError`` when the entry cannot be
    stat-ed (permission denied, dangling link, vanished file).
    """
    path = directory / name
    try:
        st = os.stat(path)
    except OSError as exc:
        raise AccessError(path, exc) from exc
    return Entry(name=name, is_dir=stat.S_ISDIR(st.st_mode))


def list_entries(
    directory: Path,
    omit_patterns: Sequence[re.Pattern[str]] = (),
) -> tuple[EntryListing, ReadError | None]:
    """List visible entries of ``directory`` in directory-read order.

    Returns ``(listing, read_error)``. ``read_error`` is set, and the listing
    empty, when the directory itself cannot be read. Omitted and inaccessible
    entries are dropped and only counted.
    """
    try:
        names = os.listdir(directory)
    except OSError as exc:
        logger.warning("cannot read directory %s: %s", directory, exc)
        return EntryListing(), ReadError(directory, exc)

    entries: list[Entry] = []
    omitted = 0
    inaccessible = 0
    for name in names:
        if omit_patterns and is_omitted(name, omit_patterns):
            omitted += 1
            continue
        try:
            entries.append(classify_entry(directory, name))
        except AccessError as exc:
            logger.debug("hiding inaccessible entry: %s", exc)
            inaccessible += 1

    return EntryListing(tuple(entries), omitted_count=omitted, inaccessible_count=inaccessible), None


__all__ = ["classify_entry", "list_entries"]
