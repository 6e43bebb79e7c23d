"""Change signals and virtual read-only buffer sources.

``Signal`` is a tiny synchronous event emitter. ``connect_once`` registers a
listener that disposes itself after its first call, which replaces manual
"remove myself from inside the handler" bookkeeping.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..listing import ListingSnapshot

LISTING_SOURCE_IDENTITY = "lazydired://listing"
PREVIEW_SOURCE_IDENTITY = "lazydired://preview"


class Subscription:
    """Handle returned by ``Signal.connect``; ``dispose`` is idempotent."""

    def __init__(self, signal: Signal, listener: Callable[..., Any], once: bool) -> None:
        self._signal = signal
        self.listener = listener
        self.once = once
        self.disposed = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self._signal._remove(self)


class Signal:
    """Synchronous multi-listener event emitter."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def connect(self, listener: Callable[..., Any]) -> Subscription:
        subscription = Subscription(self, listener, once=False)
        self._subscriptions.append(subscription)
        return subscription

    def connect_once(self, listener: Callable[..., Any]) -> Subscription:
        """Register ``listener`` for the next emission only."""
        subscription = Subscription(self, listener, once=True)
        self._subscriptions.append(subscription)
        return subscription

    def emit(self, *args: Any) -> None:
        """Call every live listener in registration order.

        Listeners connected during an emission first fire on the next one.
        """
        for subscription in list(self._subscriptions):
            if subscription.disposed:
                continue
            if subscription.once:
                subscription.dispose()
            subscription.listener(*args)

    def listener_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)


@dataclass
class ListingSource:
    """Virtual read-only buffer backed by a snapshot provider.

    Hosts render ``render()`` under ``identity`` and re-render whenever
    ``changed`` fires.
    """

    identity: str
    provider: Callable[[], ListingSnapshot | None]
    changed: Signal = field(default_factory=Signal)

    def snapshot(self) -> ListingSnapshot | None:
        return self.provider()

    def render(self) -> str:
        snapshot = self.provider()
        if snapshot is None:
            return "No directory selected."
        return snapshot.text

    def notify_changed(self) -> None:
        self.changed.emit(self)


__all__ = [
    "LISTING_SOURCE_IDENTITY",
    "PREVIEW_SOURCE_IDENTITY",
    "Subscription",
    "Signal",
    "ListingSource",
]
