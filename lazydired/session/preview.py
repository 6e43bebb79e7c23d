"""Mirror the entry under the cursor into a secondary read-only view.

Directories are mirrored as a listing snapshot rooted at the subdirectory,
rendered with the same lister/snapshot code as the primary buffer but without
touching the session's current directory. Files are handed to the host to
open for viewing. The primary buffer keeps focus in both cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..listing import ListingSnapshot, render_listing
from .events import PREVIEW_SOURCE_IDENTITY, ListingSource, Subscription
from .host import Host
from .state import DiredSession


@dataclass(frozen=True)
class PreviewTarget:
    """What to show for one cursor line: a directory mirror or a file."""

    kind: str
    path: Path
    snapshot: ListingSnapshot | None = None

    @property
    def is_directory(self) -> bool:
        return self.kind == "directory"


class PreviewCoordinator:
    """Re-resolve the preview on every cursor move while preview mode is on."""

    def __init__(self, session: DiredSession, host: Host) -> None:
        self._session = session
        self._host = host
        self._mirror: ListingSnapshot | None = None
        self._subscription: Subscription | None = None
        self.source = ListingSource(PREVIEW_SOURCE_IDENTITY, lambda: self._mirror)

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def resolve(self, cursor_line: int) -> PreviewTarget | None:
        """Return the preview target for ``cursor_line`` or ``None`` off-entry."""
        snapshot = self._session.snapshot
        if snapshot is None:
            return None
        entry = snapshot.entry_at(cursor_line)
        if entry is None:
            return None
        path = snapshot.directory / entry.name
        if not entry.is_dir:
            return PreviewTarget(kind="file", path=path)

        listing, error = self._session.read_listing(path)
        mirror = render_listing(
            path,
            listing,
            version=snapshot.version,
            error=str(error) if error is not None else None,
        )
        return PreviewTarget(kind="directory", path=path, snapshot=mirror)

    def update(self, cursor_line: int) -> PreviewTarget | None:
        """Resolve ``cursor_line`` and push the result to the host."""
        target = self.resolve(cursor_line)
        if target is None:
            return None
        if target.is_directory:
            self._mirror = target.snapshot
            self._host.show_preview(self.source)
            self.source.notify_changed()
        else:
            self._host.open_file(target.path, preview=True)
        return target

    def enable(self, cursor_line: int) -> None:
        if self.active:
            return
        self._subscription = self._session.cursor_moved.connect(self.update)
        self.update(cursor_line)

    def disable(self) -> None:
        if self._subscription is None:
            return
        self._subscription.dispose()
        self._subscription = None
        self._mirror = None
        self._host.close_preview()

    def toggle(self, cursor_line: int) -> bool:
        """Flip preview mode and return whether it is now active."""
        if self.active:
            self.disable()
        else:
            self.enable(cursor_line)
        return self.active


__all__ = ["PreviewTarget", "PreviewCoordinator"]
