"""Signal, listing source, and preview coordinator tests."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fakes import FakeHost

from lazydired.session import (
    LISTING_SOURCE_IDENTITY,
    PREVIEW_SOURCE_IDENTITY,
    DiredSession,
    PreviewCoordinator,
    Signal,
)


class SignalTests(unittest.TestCase):
    def test_connect_once_fires_a_single_time(self) -> None:
        signal = Signal()
        calls: list[int] = []
        signal.connect_once(calls.append)

        signal.emit(1)
        signal.emit(2)

        self.assertEqual(calls, [1])
        self.assertEqual(signal.listener_count(), 0)

    def test_dispose_is_idempotent_and_stops_delivery(self) -> None:
        signal = Signal()
        calls: list[str] = []
        subscription = signal.connect(calls.append)

        signal.emit("a")
        subscription.dispose()
        subscription.dispose()
        signal.emit("b")

        self.assertEqual(calls, ["a"])
        self.assertTrue(subscription.disposed)

    def test_listener_connected_during_emit_waits_for_next_emit(self) -> None:
        signal = Signal()
        calls: list[str] = []

        def first(value: str) -> None:
            calls.append(f"first:{value}")
            signal.connect(lambda later: calls.append(f"late:{later}"))

        signal.connect_once(first)
        signal.emit("x")
        signal.emit("y")

        self.assertEqual(calls, ["first:x", "late:y"])


class ListingSourceTests(unittest.TestCase):
    def test_source_renders_placeholder_without_directory(self) -> None:
        session = DiredSession()

        self.assertEqual(session.source.identity, LISTING_SOURCE_IDENTITY)
        self.assertEqual(session.source.render(), "No directory selected.")


class PreviewCoordinatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "child").mkdir()
        (self.root / "child" / "inner.txt").write_text("", encoding="utf-8")
        (self.root / "file.txt").write_text("hello", encoding="utf-8")
        self.session = DiredSession()
        self.session.open_directory(self.root)
        self.host = FakeHost()
        self.preview = PreviewCoordinator(self.session, self.host)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _line(self, rendered: str) -> int:
        line = self.session.snapshot.line_for_name(rendered)
        assert line is not None
        return line

    def test_resolve_mirrors_directory_without_changing_current_directory(self) -> None:
        target = self.preview.resolve(self._line("child/"))

        self.assertTrue(target.is_directory)
        self.assertEqual(target.snapshot.directory, self.root / "child")
        self.assertEqual(target.snapshot.entry_lines, ("inner.txt",))
        self.assertEqual(self.session.current_directory, self.root)

    def test_resolve_file_and_off_entry_lines(self) -> None:
        target = self.preview.resolve(self._line("file.txt"))

        self.assertEqual(target.kind, "file")
        self.assertEqual(target.path, self.root / "file.txt")
        self.assertIsNone(self.preview.resolve(0))

    def test_enabled_preview_follows_cursor_moves_until_disabled(self) -> None:
        self.preview.enable(self._line("child/"))
        self.assertEqual(self.preview.source.identity, PREVIEW_SOURCE_IDENTITY)
        self.assertEqual(len(self.host.previews), 1)
        self.assertIn("inner.txt", self.host.previews[0])

        self.session.notify_cursor_moved(self._line("file.txt"))
        self.assertEqual(self.host.opened, [(self.root / "file.txt", True)])

        self.preview.disable()
        self.session.notify_cursor_moved(self._line("child/"))
        self.assertEqual(len(self.host.previews), 1)
        self.assertEqual(self.host.preview_closed, 1)
        self.assertFalse(self.preview.active)

    def test_toggle_reports_new_state(self) -> None:
        self.assertTrue(self.preview.toggle(self._line("file.txt")))
        self.assertFalse(self.preview.toggle(self._line("file.txt")))


if __name__ == "__main__":
    unittest.main()
