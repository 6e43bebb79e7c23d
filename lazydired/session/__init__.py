"""Listing session: state transitions, cursor, marks, rename, and preview.

This package wires listing snapshots to a host:
- ``DiredSession`` owns all mutable listing state
- cursor, mark overlay, and rename reconciliation work on one snapshot
- ``DiredCommands`` maps user commands onto the session and a ``Host``
"""

from __future__ import annotations

from .commands import BROWSE_OPTION, COMMAND_IDS, COMMAND_ITEMS, DiredCommands, build_key_registry
from .cursor import NavigationCursor
from .events import LISTING_SOURCE_IDENTITY, PREVIEW_SOURCE_IDENTITY, ListingSource, Signal, Subscription
from .host import Host
from .marks import MarkDecorator, MarkOverlay, NullMarkDecorator
from .preview import PreviewCoordinator, PreviewTarget
from .rename import (
    RenameOp,
    RenamePlan,
    RenameResult,
    apply_rename_plan,
    find_duplicates,
    plan_renames,
    validate_rename_edit,
)
from .state import DiredSession, Transition

__all__ = [
    "BROWSE_OPTION",
    "COMMAND_IDS",
    "COMMAND_ITEMS",
    "DiredCommands",
    "build_key_registry",
    "NavigationCursor",
    "LISTING_SOURCE_IDENTITY",
    "PREVIEW_SOURCE_IDENTITY",
    "ListingSource",
    "Signal",
    "Subscription",
    "Host",
    "MarkDecorator",
    "MarkOverlay",
    "NullMarkDecorator",
    "PreviewCoordinator",
    "PreviewTarget",
    "RenameOp",
    "RenamePlan",
    "RenameResult",
    "apply_rename_plan",
    "find_duplicates",
    "plan_renames",
    "validate_rename_edit",
    "DiredSession",
    "Transition",
]
