"""File loading, sanitization, and syntax highlighting for file viewing.

Neutralizes terminal control bytes so viewing a file cannot move the cursor
or ring the bell.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
BINARY_SNIFF_BYTES = 4_096

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_ENCODINGS = ("utf-8", "utf-8-sig", "latin-1")


def decode_bytes(raw: bytes) -> str:
    """Decode file bytes, trying UTF-8 (with and without BOM) before latin-1."""
    for encoding in _ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="replace")


def read_text(path: Path) -> str:
    return decode_bytes(path.read_bytes())


def is_probably_binary(path: Path) -> bool:
    with path.open("rb") as handle:
        return b"\x00" in handle.read(BINARY_SNIFF_BYTES)


def _escape_control(match: re.Match[str]) -> str:
    return f"\\x{ord(match.group()):02x}"


def sanitize_terminal_text(source: str) -> str:
    """Show control characters as ``\\xNN`` so file contents cannot drive the terminal.

    Newlines, carriage returns and tabs pass through.
    """
    return _CONTROL_RE.sub(_escape_control, source)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached terminal formatter for style name."""
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` with the lexer guessed from ``path``'s name."""
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(_normalize_style(style)))


def render_file(path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return printable contents of ``path``: highlighted, plain, or a binary notice."""
    if is_probably_binary(path):
        return f"<binary file: {path.name}>\n"
    source = sanitize_terminal_text(read_text(path))
    if no_color:
        return source
    return colorize_source(source, path, style)


__all__ = [
    "DEFAULT_STYLE",
    "decode_bytes",
    "read_text",
    "is_probably_binary",
    "sanitize_terminal_text",
    "colorize_source",
    "render_file",
]
