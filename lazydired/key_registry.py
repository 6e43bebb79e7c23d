"""Key tokens to command ids.

Letter tokens are case-sensitive (``r`` refreshes, ``R`` renames). Named keys
and modifier chords (``Enter``, ``Shift+Escape``) match case-insensitively.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

NAMED_KEYS = frozenset({"enter", "escape", "tab", "space", "backspace", "up", "down"})


def normalize_key(key: str) -> str:
    """Return the lookup form of ``key``."""
    token = key.strip()
    lowered = token.lower()
    if "+" in token or lowered in NAMED_KEYS:
        return lowered
    return token


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens that run a single command."""

    keys: tuple[str, ...]
    command_id: str


class KeyRegistry:
    """Keymap from normalized key tokens to command ids.

    ``dispatch`` hands the bound command id to ``runner`` and returns its
    result, or ``None`` when the key is unbound.
    """

    def __init__(self, runner: Callable[[str], bool], bindings: Iterable[KeyBinding] = ()) -> None:
        self._runner = runner
        self._commands: dict[str, str] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> KeyRegistry:
        """Register ``binding``; a key already bound to another command is an error."""
        for key in binding.keys:
            token = normalize_key(key)
            bound = self._commands.get(token)
            if bound is not None and bound != binding.command_id:
                raise ValueError(f"key {key!r} is bound to both {bound!r} and {binding.command_id!r}")
            self._commands[token] = binding.command_id
        return self

    def combos(self) -> list[str]:
        return list(self._commands)

    def command_for(self, key: str) -> str | None:
        return self._commands.get(normalize_key(key))

    def keys_for(self, command_id: str) -> list[str]:
        return [key for key, bound in self._commands.items() if bound == command_id]

    def dispatch(self, key: str) -> bool | None:
        command_id = self.command_for(key)
        if command_id is None:
            return None
        return self._runner(command_id)


__all__ = ["NAMED_KEYS", "normalize_key", "KeyBinding", "KeyRegistry"]
