"""Editor launch helper for editing listing text in ``$EDITOR``.

Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from pathlib import Path


def editor_command() -> tuple[list[str] | None, str | None]:
    """Return the ``$EDITOR`` argv, or an error message when unusable."""
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return None, "Cannot edit: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return None, "Cannot edit: $EDITOR is empty."
    return cmd, None


def edit_text(text: str, suffix: str = ".lazydired") -> tuple[str | None, str | None]:
    """Open ``text`` in ``$EDITOR`` via a temporary file.

    Returns ``(edited_text, error)``; exactly one of them is ``None``. Names
    that are not valid UTF-8 round-trip through the file as their raw bytes.
    """
    cmd, error = editor_command()
    if cmd is None:
        return None, error

    fd, raw_path = tempfile.mkstemp(suffix=suffix, text=True)
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as handle:
            handle.write(text)
        try:
            completed = subprocess.run([*cmd, str(path)], check=False)
        except OSError as exc:
            return None, f"Failed to launch editor: {exc}"
        if completed.returncode != 0:
            return None, f"Editor exited with status {completed.returncode}; changes discarded."
        return path.read_text(encoding="utf-8", errors="surrogateescape"), None
    finally:
        path.unlink(missing_ok=True)


__all__ = ["editor_command", "edit_text"]
