"""Directory listing model: scanning, omit filtering, and text snapshots.

This package contains non-UI listing primitives:
- entry datatypes and omit-pattern helpers
- one-directory filesystem scanning
- the fixed line-addressed snapshot format and its help footer
"""

from __future__ import annotations

from .fs import classify_entry, list_entries
from .omit import compile_omit_patterns, is_omitted
from .snapshot import (
    FIRST_ENTRY_LINE,
    READ_ERROR_TEXT,
    RENAME_HEADER_PREFIX,
    ListingSnapshot,
    entry_lines_from_text,
    footer_line_count,
    render_header,
    render_listing,
)
from .types import DIRECTORY_SUFFIX, Entry, EntryListing, split_rendered_name

__all__ = [
    "DIRECTORY_SUFFIX",
    "Entry",
    "EntryListing",
    "split_rendered_name",
    "classify_entry",
    "list_entries",
    "compile_omit_patterns",
    "is_omitted",
    "FIRST_ENTRY_LINE",
    "READ_ERROR_TEXT",
    "RENAME_HEADER_PREFIX",
    "ListingSnapshot",
    "entry_lines_from_text",
    "footer_line_count",
    "render_header",
    "render_listing",
]
