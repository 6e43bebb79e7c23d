"""Narrow interface between the listing engine and the UI shell that shows it."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .events import ListingSource


class Host(Protocol):
    """Everything the command layer needs from a UI shell.

    Hosts render ``ListingSource`` buffers, own the real cursor(s), collect
    user input, and draw mark decorations (``add_mark``/``remove_mark``).
    Line numbers are 0-indexed buffer lines.
    """

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def confirm(self, prompt: str, confirm_label: str) -> bool: ...

    def pick(self, options: Sequence[str], placeholder: str) -> str | None: ...

    def ask_text(self, prompt: str) -> str | None: ...

    def choose_directory(self, start: Path | None) -> Path | None: ...

    def open_file(self, path: Path, preview: bool = False) -> None: ...

    def show_listing(self, source: ListingSource, editable: bool = False) -> None: ...

    def buffer_text(self) -> str: ...

    def cursor_lines(self) -> list[int]: ...

    def set_cursor(self, line: int) -> None: ...

    def show_preview(self, source: ListingSource) -> None: ...

    def close_preview(self) -> None: ...

    def show_rename_hints(self, hints: dict[int, str]) -> None: ...

    def add_mark(self, line: int) -> object: ...

    def remove_mark(self, line: int, handle: object) -> None: ...


__all__ = ["Host"]
