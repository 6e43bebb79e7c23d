"""Interactive loop for the terminal host.

Each input line is one key token. Command keys go through the key registry;
a few terminal-only aliases cover buffer editing and leaving the loop.
"""

from __future__ import annotations

import logging

from .session.commands import DiredCommands, build_key_registry
from .terminal import TerminalHost

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "quit"})
EDIT_KEYS = frozenset({"e"})
COMMIT_KEYS = frozenset({"c", ":w"})
CANCEL_KEYS = frozenset({"x", ":q"})
HELP_KEYS = frozenset({"?", "h"})

PROMPT = "lazydired> "


def _terminal_help() -> str:
    return (
        " Enter = open entry under cursor\n"
        " <number> = move cursor to line\n"
        " e = edit listing in $EDITOR (rename mode)\n"
        " c, :w = confirm rename\n"
        " x, :q = cancel rename\n"
        " q = quit"
    )


def run_session(commands: DiredCommands, host: TerminalHost) -> int:
    """Read key tokens until quit or end of input; return the exit code."""
    registry = build_key_registry(commands)
    session = commands.session
    while True:
        host.draw()
        raw = host.read_line(PROMPT)
        if raw is None:
            return 0
        key = raw.strip()
        logger.debug("key %r", key)

        if key in QUIT_KEYS:
            return 0
        if key in HELP_KEYS:
            host.show_info(_terminal_help())
            continue
        if key in EDIT_KEYS:
            edited = host.edit_buffer()
            if edited is not None:
                session.notify_buffer_edited(edited)
            continue
        if key in COMMIT_KEYS:
            commands.run("rename_commit")
            continue
        if key in CANCEL_KEYS:
            commands.run("rename_cancel")
            continue
        if key.isdigit():
            line = int(key)
            host.set_cursor(line)
            session.notify_cursor_moved(line)
            continue

        handled = registry.dispatch(key or "enter")
        if handled is None:
            host.show_warning(f"Unknown key: {key}")


__all__ = ["run_session"]
