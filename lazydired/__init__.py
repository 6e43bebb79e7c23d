"""Public package surface for lazydired.

Exports ``main`` for programmatic CLI invocation.
The listing engine lives in ``lazydired.listing`` and ``lazydired.session``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
