"""Command-line front door for lazydired.

Parses CLI options, builds a listing session for the target directory, and
either prints it, runs one editor-driven rename, or starts the interactive
terminal loop.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .highlight import DEFAULT_STYLE
from .listing import compile_omit_patterns
from .runtime import run_session
from .session import DiredCommands, DiredSession
from .terminal import TerminalHost, stdout_write

logger = logging.getLogger(__name__)


def build_session() -> tuple[DiredSession, list[str]]:
    """Create a session with configured omit patterns plus pattern warnings."""
    patterns, errors = compile_omit_patterns(config.load_omit_patterns())
    return DiredSession(omit_patterns=patterns), [str(error) for error in errors]


def render_listing_text(path: Path) -> str:
    """Return the listing text for ``path`` as the interactive view shows it."""
    session, _warnings = build_session()
    transition = session.open_directory(path)
    if transition.read_errors:
        raise SystemExit(str(transition.read_errors[0]))
    return transition.snapshot.text


def run_rename(commands: DiredCommands, host: TerminalHost) -> bool:
    """Enter rename mode, edit the listing in ``$EDITOR``, and commit it."""
    if not commands.rename():
        return False
    edited = host.edit_buffer()
    if edited is None:
        commands.run("rename_cancel")
        return False
    commands.session.notify_buffer_edited(edited)
    return commands.run("rename_commit")


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and open a listing for a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    parser = argparse.ArgumentParser(description="Browse and batch-rename directory entries as plain text.")
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument("--render", action="store_true", help="Print the listing text and exit.")
    parser.add_argument("--rename", action="store_true", help="Edit the listing in $EDITOR, apply renames, and exit.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for viewing files.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output when viewing files.")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr.")
    args = parser.parse_args()

    if args.render and args.rename:
        raise SystemExit("Cannot combine --render with --rename.")
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    if args.render:
        stdout_write(render_listing_text(path) + "\n")
        return

    session, warnings = build_session()
    host = TerminalHost(style=args.style, no_color=args.no_color)
    for warning in warnings:
        host.show_warning(warning)
    commands = DiredCommands(session, host)
    commands.open_directory(path)

    if args.rename:
        if not run_rename(commands, host):
            raise SystemExit(1)
        return

    logger.debug("starting interactive session in %s", path)
    raise SystemExit(run_session(commands, host))


if __name__ == "__main__":
    main()
