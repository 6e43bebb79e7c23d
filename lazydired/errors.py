"""Error taxonomy for listing, rename, and filesystem operations.

Every error is user-reportable: commands catch ``DiredError`` and route
``str(error)`` to the host instead of letting it escape the session.
"""

from __future__ import annotations

from pathlib import Path


class DiredError(Exception):
    """Base class for failures surfaced to the user as messages."""


class ReadError(DiredError):
    """A directory could not be read."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Error reading directory: {cause.strerror or cause}")


class AccessError(DiredError):
    """A single directory entry could not be stat-ed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot access {path}: {cause.strerror or cause}")


class RenameValidationError(DiredError):
    """An edited rename buffer was rejected before touching the filesystem.

    ``kind`` is one of ``"count"``, ``"duplicate"``, ``"type_flip"`` or
    ``"invalid_name"``; ``names`` lists the offending entries.
    """

    def __init__(self, kind: str, message: str, names: tuple[str, ...] = ()) -> None:
        self.kind = kind
        self.names = names
        super().__init__(message)


class StaleSnapshotError(DiredError):
    """A line-addressed operation referenced an outdated snapshot."""

    def __init__(self, captured_version: int, current_version: int) -> None:
        self.captured_version = captured_version
        self.current_version = current_version
        super().__init__("The listing changed since this action started. Refresh and try again.")


class FilesystemOpError(DiredError):
    """An individual rename/delete/mkdir/write call failed."""

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        self.operation = operation
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to {operation} {path}: {cause.strerror or cause}")


class ConfigError(DiredError):
    """An omit pattern from configuration is not a valid regular expression."""

    def __init__(self, pattern: str, cause: Exception) -> None:
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"Invalid omit pattern {pattern!r}: {cause}")


__all__ = [
    "DiredError",
    "ReadError",
    "AccessError",
    "RenameValidationError",
    "StaleSnapshotError",
    "FilesystemOpError",
    "ConfigError",
]
