"""Minimal publish/subscribe used by grids to announce redraw points."""

from __future__ import annotations

from typing import Callable

CHANGE = "change"
EVENT_TYPES = (CHANGE,)

Listener = Callable[[], object]


class ChangeNotifier:
    """Ordered listener lists keyed by event type."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {
            event_type: [] for event_type in EVENT_TYPES
        }

    def subscribe(self, event_type: str, callback: Listener) -> None:
        self._listeners_for(event_type).append(callback)

    def unsubscribe(self, event_type: str, callback: Listener) -> None:
        listeners = self._listeners_for(event_type)
        self._listeners[event_type] = [
            listener for listener in listeners if listener != callback
        ]

    def notify(self, event_type: str = CHANGE) -> None:
        # Copy so listeners may (un)subscribe while being called.
        for listener in list(self._listeners_for(event_type)):
            listener()

    def listener_count(self, event_type: str = CHANGE) -> int:
        return len(self._listeners_for(event_type))

    def _listeners_for(self, event_type: str) -> list[Listener]:
        try:
            return self._listeners[event_type]
        except KeyError:
            raise ValueError(f"unknown event type: {event_type!r}") from None
