"""Batch delete/move and create helpers behind the listing commands.

Batches are not atomic: a failing item is reported and the remaining items
are still processed.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from ..errors import FilesystemOpError

logger = logging.getLogger(__name__)


def describe_counts(paths: Iterable[Path]) -> str:
    """Return ``"2 directories and 1 file"`` style wording for a selection."""
    dir_count = 0
    file_count = 0
    for path in paths:
        if path.is_dir() and not path.is_symlink():
            dir_count += 1
        else:
            file_count += 1
    parts: list[str] = []
    if dir_count:
        parts.append(f"{dir_count} {'directories' if dir_count > 1 else 'directory'}")
    if file_count:
        parts.append(f"{file_count} {'files' if file_count > 1 else 'file'}")
    return " and ".join(parts)


def delete_paths(paths: Iterable[Path]) -> list[FilesystemOpError]:
    """Delete files and directory trees; returns per-item failures."""
    failures: list[FilesystemOpError] = []
    for path in paths:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as exc:
            logger.warning("delete failed for %s: %s", path, exc)
            failures.append(FilesystemOpError("delete", path, exc))
            continue
        logger.debug("deleted %s", path)
    return failures


def move_paths(paths: Iterable[Path], destination: Path) -> list[FilesystemOpError]:
    """Move each path into ``destination`` keeping its basename.

    Existing targets are never overwritten; they are reported as failures.
    """
    failures: list[FilesystemOpError] = []
    for path in paths:
        target = destination / path.name
        if os.path.lexists(target):
            failures.append(FilesystemOpError("move", path, FileExistsError(errno.EEXIST, "target already exists", str(target))))
            continue
        try:
            shutil.move(str(path), str(target))
        except OSError as exc:
            logger.warning("move failed for %s: %s", path, exc)
            failures.append(FilesystemOpError("move", path, exc))
            continue
        logger.debug("moved %s -> %s", path, target)
    return failures


def create_directories(path: Path) -> None:
    """Create ``path`` and any missing parents; existing directories are fine."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemOpError("create directory", path, exc) from exc
    logger.debug("created directory %s", path)


def create_file(path: Path) -> bool:
    """Create an empty file, creating missing parent directories.

    Returns ``False`` without touching anything when the file already exists.
    """
    if os.path.lexists(path):
        return False
    create_directories(path.parent)
    try:
        with path.open("x", encoding="utf-8"):
            pass
    except OSError as exc:
        raise FilesystemOpError("create file", path, exc) from exc
    logger.debug("created file %s", path)
    return True


__all__ = [
    "describe_counts",
    "delete_paths",
    "move_paths",
    "create_directories",
    "create_file",
]
