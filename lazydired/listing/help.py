"""Static key-help blocks appended below every listing.

The rename-mode help line count fixes the footer slice used to pull entry
lines back out of an edited buffer.
"""

from __future__ import annotations

HELP_GROUPS_DEFAULT: tuple[tuple[tuple[str, str], ...], ...] = (
    (
        ("m", "toggle mark"),
        ("t", "toggle all marks"),
        ("U", "unmark all"),
        ("*", "mark by partial name"),
    ),
    (
        ("Enter/o", "open file / view directory"),
        ("R", "rename"),
        ("M", "move"),
        ("D", "delete"),
        ("cd", "create directory"),
        ("cf", "create file"),
    ),
    (
        ("u", "up to parent directory"),
        ("g", "goto directory"),
        ("p", "move to previous file"),
        ("n", "move to next file"),
        ("r", "refresh view"),
    ),
    (
        ("B", "goto anywhere (any directory, bookmark or project dir)"),
        ("ab", "add to bookmarks"),
        ("ap", "add to project"),
        ("rb", "remove from bookmarks"),
        ("rp", "remove from project"),
    ),
    (
        ("P", "toggle preview mode on/off"),
        ("j", "jump to file/dir name"),
    ),
)

HELP_GROUPS_RENAME: tuple[tuple[tuple[str, str], ...], ...] = (
    (
        ("Ctrl+Enter", "confirm changes"),
        ("Shift+Escape", "cancel"),
    ),
)


def help_text(groups: tuple[tuple[tuple[str, str], ...], ...]) -> str:
    """Format key groups as `` key = description`` lines, groups blank-separated."""
    return "\n\n".join("\n".join(f" {key} = {description}" for key, description in group) for group in groups)


HELP_TEXT_DEFAULT = help_text(HELP_GROUPS_DEFAULT)
HELP_TEXT_RENAME = help_text(HELP_GROUPS_RENAME)


def help_text_for_mode(renaming: bool) -> str:
    return HELP_TEXT_RENAME if renaming else HELP_TEXT_DEFAULT


__all__ = [
    "HELP_GROUPS_DEFAULT",
    "HELP_GROUPS_RENAME",
    "HELP_TEXT_DEFAULT",
    "HELP_TEXT_RENAME",
    "help_text",
    "help_text_for_mode",
]
