"""Keymap normalization and dispatch tests."""

from __future__ import annotations

import unittest

from lazydired.key_registry import KeyBinding, KeyRegistry, normalize_key


class KeyRegistryTests(unittest.TestCase):
    def test_letters_stay_case_sensitive_and_named_keys_do_not(self) -> None:
        self.assertEqual(normalize_key("R"), "R")
        self.assertEqual(normalize_key(" cd "), "cd")
        self.assertEqual(normalize_key("Enter"), "enter")
        self.assertEqual(normalize_key("Shift+Escape"), "shift+escape")

    def test_dispatch_runs_bound_command(self) -> None:
        calls: list[str] = []
        registry = KeyRegistry(lambda command_id: calls.append(command_id) or True)
        registry.bind(KeyBinding(("r",), "refresh")).bind(KeyBinding(("R",), "rename"))

        self.assertTrue(registry.dispatch("R"))
        self.assertTrue(registry.dispatch("r"))
        self.assertIsNone(registry.dispatch("x"))
        self.assertEqual(calls, ["rename", "refresh"])
        self.assertEqual(registry.keys_for("rename"), ["R"])

    def test_conflicting_binding_is_rejected(self) -> None:
        registry = KeyRegistry(lambda _command_id: True, [KeyBinding(("Enter", "o"), "select")])

        with self.assertRaises(ValueError):
            registry.bind(KeyBinding(("enter",), "rename_commit"))
        self.assertEqual(registry.command_for("ENTER"), "select")


if __name__ == "__main__":
    unittest.main()
