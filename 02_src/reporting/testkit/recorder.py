"""Listener that records the full event stream of a session."""

import threading

from ..models import ExecutionEvent, ExecutionResult, NodeIdentifier
from .events import Events


class EventRecorder:
    """Captures every event, in delivery order, for later assertions.

    Listener callbacks receive the node and payload, not the bus's event
    object, so each recorded event is rebuilt on delivery and its timestamp
    is the delivery time. Delivery is synchronous inside ``publish``, so it
    is never earlier than the bus's own timestamp. Compare events by type,
    node and payload, not by timestamp.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._events: list[ExecutionEvent] = []

    def on_started(self, node: NodeIdentifier) -> None:
        self._record(ExecutionEvent.started(node))

    def on_skipped(self, node: NodeIdentifier, reason: str | None) -> None:
        self._record(ExecutionEvent.skipped(node, reason))

    def on_finished(self, node: NodeIdentifier, result: ExecutionResult) -> None:
        self._record(ExecutionEvent.finished(node, result))

    def _record(self, event: ExecutionEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> tuple[ExecutionEvent, ...]:
        """Snapshot of the log; later events do not change it."""
        with self._lock:
            return tuple(self._events)

    def all_events(self) -> Events:
        return Events(self.events)

    def test_events(self) -> Events:
        return self.all_events().tests()

    def container_events(self) -> Events:
        return self.all_events().containers()
