"""Reconcile an edited rename buffer into collision-safe filesystem renames.

Old and new entries are paired by position only: the buffer has no hidden
per-line identifiers, so line index is the identity of an entry.

Renames run in two phases. Every changed entry first moves to a unique
temporary name derived from its target, then every temporary moves to its
final name. Permutations and cycles (``a, b -> b, a``) therefore never rename
onto a name still held by an entry that has not moved yet.

On any failure the already-performed renames are reverted through the same
temporary-name mapping.
"""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import ReadError, RenameValidationError
from ..listing import split_rendered_name

logger = logging.getLogger(__name__)

TEMP_NAME_MARKER = ".lazydired-tmp-"
TEMP_SUFFIX_HEX = 8
DEFAULT_NAME_MAX = 255
MAX_REPORTED_NAMES = 10


@dataclass(frozen=True)
class RenameOp:
    """One changed position: bare source name to bare target name."""

    position: int
    source: str
    target: str
    is_dir: bool = False


@dataclass(frozen=True)
class RenamePlan:
    directory: Path
    ops: tuple[RenameOp, ...] = ()

    @property
    def is_noop(self) -> bool:
        return not self.ops


@dataclass
class RenameResult:
    """Outcome of applying a rename plan."""

    applied: list[RenameOp] = field(default_factory=list)
    failed: list[tuple[RenameOp, str]] = field(default_factory=list)
    rolled_back: bool = False
    read_errors: tuple[ReadError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        if self.ok:
            count = len(self.applied)
            return f"Renamed {count} {'entry' if count == 1 else 'entries'}."
        lines = ["Rename failed" + (", all changes were reverted:" if self.rolled_back else ":")]
        for op, error in self.failed[:MAX_REPORTED_NAMES]:
            lines.append(f"  {op.source} -> {op.target}: {error}")
        if len(self.failed) > MAX_REPORTED_NAMES:
            lines.append(f"  ... and {len(self.failed) - MAX_REPORTED_NAMES} more")
        return "\n".join(lines)


def find_duplicates(names: Sequence[str]) -> list[str]:
    """Return each name occurring more than once, in first-repeat order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates


def _is_invalid_name(name: str) -> bool:
    if name in ("", ".", ".."):
        return True
    if "\0" in name:
        return True
    return os.sep in name or (os.altsep is not None and os.altsep in name)


def validate_rename_edit(old_entries: Sequence[str], new_entries: Sequence[str]) -> None:
    """Raise ``RenameValidationError`` unless ``new_entries`` is a legal edit.

    Checks run in order: line count, duplicates, directory-suffix flips, and
    names that cannot be a single path component.
    """
    if len(new_entries) != len(old_entries):
        raise RenameValidationError(
            "count",
            "Adding or removing lines isn't allowed in Rename mode. "
            "Make sure you keep the file count the same.",
        )

    # A file and a directory cannot share a name on disk.
    duplicates = find_duplicates([split_rendered_name(entry)[0] for entry in new_entries])
    if duplicates:
        raise RenameValidationError(
            "duplicate",
            f"Some entries have the same names: {'; '.join(duplicates)}",
            tuple(duplicates),
        )

    flipped: list[str] = []
    invalid: list[str] = []
    for old_rendered, new_rendered in zip(old_entries, new_entries):
        _old_name, old_is_dir = split_rendered_name(old_rendered)
        new_name, new_is_dir = split_rendered_name(new_rendered)
        if old_is_dir != new_is_dir:
            flipped.append(new_rendered)
        elif old_rendered != new_rendered and _is_invalid_name(new_name):
            invalid.append(new_rendered)

    if flipped:
        raise RenameValidationError(
            "type_flip",
            "Directories must keep their trailing separator and files must not gain one: "
            + "; ".join(flipped),
            tuple(flipped),
        )
    if invalid:
        raise RenameValidationError(
            "invalid_name",
            f"Invalid names: {'; '.join(repr(name) for name in invalid)}",
            tuple(invalid),
        )


def plan_renames(directory: Path, old_entries: Sequence[str], new_entries: Sequence[str]) -> RenamePlan:
    """Validate an edit and return the changed positions as rename ops."""
    validate_rename_edit(old_entries, new_entries)
    ops: list[RenameOp] = []
    for position, (old_rendered, new_rendered) in enumerate(zip(old_entries, new_entries)):
        if old_rendered == new_rendered:
            continue
        source, is_dir = split_rendered_name(old_rendered)
        target, _ = split_rendered_name(new_rendered)
        ops.append(RenameOp(position=position, source=source, target=target, is_dir=is_dir))
    return RenamePlan(directory=directory, ops=tuple(ops))


def name_max(directory: Path) -> int:
    """Longest file name, in bytes, that ``directory`` accepts."""
    pathconf = getattr(os, "pathconf", None)
    if pathconf is None:
        return DEFAULT_NAME_MAX
    try:
        return int(pathconf(directory, "PC_NAME_MAX"))
    except (OSError, ValueError):
        return DEFAULT_NAME_MAX


def _truncate_to_bytes(name: str, limit: int) -> str:
    while name and len(os.fsencode(name)) > limit:
        name = name[:-1]
    return name


def temporary_name(directory: Path, target: str, exists: Callable[[Path], bool] = os.path.lexists) -> str:
    """Return an unused name derived from ``target`` for the first phase.

    The part taken from ``target`` is shortened so the whole name fits the
    directory's name length limit.
    """
    budget = max(0, name_max(directory) - len(TEMP_NAME_MARKER) - TEMP_SUFFIX_HEX)
    stem = _truncate_to_bytes(target, budget)
    while True:
        candidate = f"{stem}{TEMP_NAME_MARKER}{uuid.uuid4().hex[:TEMP_SUFFIX_HEX]}"
        if not exists(directory / candidate):
            return candidate


def _same_file(left: Path, right: Path) -> bool:
    try:
        return os.path.samefile(left, right)
    except OSError:
        return False


def find_target_collisions(plan: RenamePlan, exists: Callable[[Path], bool] = os.path.lexists) -> list[RenameOp]:
    """Return ops whose target is occupied by an entry outside the plan.

    A target held by another source of the plan is fine because that source
    moves away in the first phase. Case-only renames on case-insensitive
    filesystems resolve to the source itself and are fine too.
    """
    sources = {op.source for op in plan.ops}
    collisions: list[RenameOp] = []
    for op in plan.ops:
        if op.target in sources:
            continue
        target_path = plan.directory / op.target
        if not exists(target_path):
            continue
        if _same_file(target_path, plan.directory / op.source):
            continue
        collisions.append(op)
    return collisions


def _revert(
    directory: Path,
    staged: list[tuple[RenameOp, str]],
    finished: int,
    result: RenameResult,
    rename: Callable[[Path, Path], None],
) -> None:
    """Undo a partially applied plan.

    The first ``finished`` staged ops already hold their final names. Those
    move back to their temporary names first, so that every source name is
    free again before temporaries return to their sources.
    """
    restorable: list[tuple[RenameOp, str]] = list(staged[finished:])
    for op, temp in reversed(staged[:finished]):
        try:
            rename(directory / op.target, directory / temp)
        except OSError as exc:
            logger.warning("could not revert %s -> %s: %s", op.target, temp, exc)
            result.failed.append((op, f"could not restore from {op.target!r}: {exc.strerror or exc}"))
            continue
        restorable.append((op, temp))

    for op, temp in reversed(restorable):
        try:
            rename(directory / temp, directory / op.source)
        except OSError as exc:
            logger.warning("could not revert %s -> %s: %s", temp, op.source, exc)
            result.failed.append((op, f"could not restore from {temp!r}: {exc.strerror or exc}"))
            continue
        logger.debug("reverted %s -> %s", temp, op.source)
    result.rolled_back = True


def apply_rename_plan(
    plan: RenamePlan,
    *,
    rename: Callable[[Path, Path], None] = os.rename,
    exists: Callable[[Path], bool] = os.path.lexists,
) -> RenameResult:
    """Apply ``plan`` in two phases, reverting everything on failure."""
    result = RenameResult()
    if plan.is_noop:
        return result

    directory = plan.directory
    collisions = find_target_collisions(plan, exists=exists)
    if collisions:
        for op in collisions:
            result.failed.append((op, "target name already exists"))
        return result

    # Phase 1: sources -> temporary names.
    staged: list[tuple[RenameOp, str]] = []
    for op in plan.ops:
        temp = temporary_name(directory, op.target, exists=exists)
        try:
            rename(directory / op.source, directory / temp)
        except OSError as exc:
            logger.warning("rename phase 1 failed for %s: %s", op.source, exc)
            result.failed.append((op, exc.strerror or str(exc)))
            _revert(directory, staged, 0, result, rename)
            return result
        logger.debug("staged %s -> %s", op.source, temp)
        staged.append((op, temp))

    # Phase 2: temporary names -> final names.
    for idx, (op, temp) in enumerate(staged):
        try:
            rename(directory / temp, directory / op.target)
        except OSError as exc:
            logger.warning("rename phase 2 failed for %s: %s", op.target, exc)
            result.failed.append((op, exc.strerror or str(exc)))
            _revert(directory, staged, idx, result, rename)
            result.applied.clear()
            return result
        logger.debug("renamed %s -> %s", op.source, op.target)
        result.applied.append(op)
    return result


__all__ = [
    "TEMP_NAME_MARKER",
    "RenameOp",
    "RenamePlan",
    "RenameResult",
    "find_duplicates",
    "validate_rename_edit",
    "plan_renames",
    "name_max",
    "temporary_name",
    "find_target_collisions",
    "apply_rename_plan",
]
