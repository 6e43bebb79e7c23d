"""Workspace folder membership for project-style root lists."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def normalized_workspace_folders(folders: Iterable[Path]) -> list[Path]:
    """Return resolved folders preserving order, dropping repeats."""
    normalized: list[Path] = []
    for raw_folder in folders:
        resolved = Path(raw_folder).expanduser().resolve()
        if resolved not in normalized:
            normalized.append(resolved)
    return normalized


class WorkspaceFolders:
    """Ordered set of workspace folders.

    ``add``/``remove`` return ``False`` for no-op requests so callers can tell
    the user the folder already is (or is not) part of the workspace.
    """

    def __init__(self, folders: Iterable[Path] = ()) -> None:
        self._folders = normalized_workspace_folders(folders)

    def folders(self) -> list[Path]:
        return list(self._folders)

    def __contains__(self, folder: object) -> bool:
        if not isinstance(folder, Path):
            return False
        return folder.resolve() in self._folders

    def add(self, folder: Path) -> bool:
        resolved = folder.resolve()
        if resolved in self._folders:
            return False
        self._folders.append(resolved)
        return True

    def remove(self, folder: Path) -> bool:
        resolved = folder.resolve()
        if resolved not in self._folders:
            return False
        self._folders.remove(resolved)
        return True


__all__ = ["normalized_workspace_folders", "WorkspaceFolders"]
