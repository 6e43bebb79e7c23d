"""Line-oriented terminal host.

Implements the ``Host`` interface on top of plain ``read_line``/``write``
callables so the listing engine can run in any terminal and be driven from
tests with scripted input. Buffer edits go through ``$EDITOR``.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .editor import edit_text
from .highlight import DEFAULT_STYLE, render_file
from .session.events import ListingSource

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str | None]
Write = Callable[[str], None]
EditText = Callable[[str], tuple[str | None, str | None]]

CURSOR_MARKER = ">"
MARK_MARKER = "*"


def stdin_read_line(prompt: str) -> str | None:
    """Prompt on stdout and read one line; ``None`` on end of input."""
    try:
        return input(prompt)
    except EOFError:
        return None


def stdout_write(text: str) -> None:
    """Write ``text`` to stdout; undecodable file names go out as their raw bytes."""
    stream = sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text)
        stream.flush()
        return
    stream.flush()
    buffer.write(os.fsencode(text))
    buffer.flush()


class TerminalHost:
    """Host that prints the listing with cursor/mark gutters and prompts for input."""

    def __init__(
        self,
        read_line: ReadLine | None = None,
        write: Write | None = None,
        edit: EditText | None = None,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
    ) -> None:
        self._read_line = read_line if read_line is not None else stdin_read_line
        self._write = write if write is not None else stdout_write
        self._edit = edit if edit is not None else edit_text
        self.style = style
        self.no_color = no_color
        self.source: ListingSource | None = None
        self.editable = False
        self.preview_source: ListingSource | None = None
        self._edited_text: str | None = None
        self._cursor = 0
        self._marks: dict[int, int] = {}
        self._next_mark_handle = 0
        self._hints: dict[int, str] = {}

    # -- messages -----------------------------------------------------------

    def _print(self, text: str) -> None:
        self._write(text if text.endswith("\n") else f"{text}\n")

    def show_info(self, message: str) -> None:
        self._print(message)

    def show_warning(self, message: str) -> None:
        self._print(f"warning: {message}")

    def show_error(self, message: str) -> None:
        logger.debug("error shown: %s", message)
        self._print(f"error: {message}")

    # -- prompts ------------------------------------------------------------

    def read_line(self, prompt: str) -> str | None:
        return self._read_line(prompt)

    def confirm(self, prompt: str, confirm_label: str) -> bool:
        answer = self._read_line(f"{prompt} {confirm_label}? [y/N] ")
        return answer is not None and answer.strip().lower() in {"y", "yes"}

    def pick(self, options: Sequence[str], placeholder: str) -> str | None:
        """Show numbered ``options``; accept a number or an exact option."""
        if not options:
            return None
        for index, option in enumerate(options, start=1):
            self._print(f"{index:>3}. {option}")
        answer = self._read_line(f"{placeholder}: ")
        if answer is None:
            return None
        answer = answer.strip()
        if answer.isdigit():
            index = int(answer)
            if 1 <= index <= len(options):
                return options[index - 1]
            return None
        return answer if answer in options else None

    def ask_text(self, prompt: str) -> str | None:
        answer = self._read_line(f"{prompt}: ")
        if answer is None:
            return None
        return answer.strip() or None

    def choose_directory(self, start: Path | None) -> Path | None:
        hint = f" [{start}]" if start is not None else ""
        answer = self._read_line(f"Directory{hint}: ")
        if answer is None or not answer.strip():
            return None
        chosen = Path(answer.strip()).expanduser()
        if not chosen.is_absolute() and start is not None:
            chosen = start / chosen
        return chosen

    # -- buffers ------------------------------------------------------------

    def open_file(self, path: Path, preview: bool = False) -> None:
        if preview:
            self._print(f"-- preview: {path} --")
        try:
            self._write(render_file(path, self.style, self.no_color))
        except OSError as exc:
            self.show_error(f"Cannot open {path}: {exc.strerror or exc}")

    def show_listing(self, source: ListingSource, editable: bool = False) -> None:
        self.source = source
        self.editable = editable
        self._edited_text = None

    def buffer_text(self) -> str:
        if self._edited_text is not None:
            return self._edited_text
        if self.source is None:
            return ""
        return self.source.render()

    def edit_buffer(self) -> str | None:
        """Edit the listing text in ``$EDITOR``; return the new text or ``None``."""
        if not self.editable:
            self.show_warning("Rename mode is not active.")
            return None
        edited, error = self._edit(self.buffer_text())
        if edited is None:
            self.show_error(error or "Edit failed.")
            return None
        self._edited_text = edited
        return edited

    def cursor_lines(self) -> list[int]:
        return [self._cursor]

    def set_cursor(self, line: int) -> None:
        self._cursor = max(0, line)

    def show_preview(self, source: ListingSource) -> None:
        self.preview_source = source
        self._print(f"-- preview: {source.identity} --")
        self._print(source.render())

    def close_preview(self) -> None:
        self.preview_source = None

    def show_rename_hints(self, hints: dict[int, str]) -> None:
        self._hints = dict(hints)

    # -- mark decorations ---------------------------------------------------

    def add_mark(self, line: int) -> object:
        self._next_mark_handle += 1
        self._marks[line] = self._next_mark_handle
        return self._next_mark_handle

    def remove_mark(self, line: int, handle: object) -> None:
        if self._marks.get(line) == handle:
            del self._marks[line]

    def marked_lines(self) -> list[int]:
        return sorted(self._marks)

    # -- drawing ------------------------------------------------------------

    def render_screen(self) -> str:
        """Return the buffer with a two-column gutter for cursor and marks."""
        out: list[str] = []
        for line_no, text in enumerate(self.buffer_text().split("\n")):
            cursor = CURSOR_MARKER if line_no == self._cursor else " "
            mark = MARK_MARKER if line_no in self._marks else " "
            hint = self._hints.get(line_no)
            suffix = f"    (was {hint})" if hint is not None else ""
            out.append(f"{cursor}{mark} {text}{suffix}".rstrip())
        return "\n".join(out) + "\n"

    def status_line(self) -> str:
        """Describe mode and hidden entries of the shown listing."""
        snapshot = self.source.snapshot() if self.source is not None else None
        if snapshot is None:
            return ""
        parts = ["rename" if snapshot.renaming else "browse", f"{len(snapshot.entries)} entries"]
        if snapshot.hidden_count:
            parts.append(f"{snapshot.hidden_count} hidden")
        return "[" + ", ".join(parts) + "]"

    def draw(self) -> None:
        self._write(self.render_screen())
        status = self.status_line()
        if status:
            self._print(status)


__all__ = ["CURSOR_MARKER", "MARK_MARKER", "TerminalHost", "stdin_read_line", "stdout_write"]
