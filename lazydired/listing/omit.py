"""Omit-pattern compilation and matching for directory listings."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from ..errors import ConfigError

logger = logging.getLogger(__name__)


def compile_omit_patterns(patterns: Iterable[str]) -> tuple[tuple[re.Pattern[str], ...], list[ConfigError]]:
    """Compile configured omit patterns.

    Invalid expressions are reported as ``ConfigError`` values and skipped so
    the remaining patterns still apply.
    """
    compiled: list[re.Pattern[str]] = []
    errors: list[ConfigError] = []
    for raw in patterns:
        if not isinstance(raw, str) or not raw:
            continue
        try:
            compiled.append(re.compile(raw))
        except re.error as exc:
            logger.warning("skipping invalid omit pattern %r: %s", raw, exc)
            errors.append(ConfigError(raw, exc))
    return tuple(compiled), errors


def is_omitted(name: str, omit_patterns: Sequence[re.Pattern[str]]) -> bool:
    """Return whether ``name`` matches at least one omit pattern."""
    return any(pattern.search(name) for pattern in omit_patterns)


__all__ = ["compile_omit_patterns", "is_omitted"]
