"""ExecutionEventBus: synchronous, ordered fan-out of lifecycle events."""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Protocol

from ..errors import EventOrderError, ListenerExecutionError, SessionStateError
from ..listener import IExecutionListener
from ..logging_config import get_logger
from ..models import (
    EventType,
    ExecutionEvent,
    ExecutionResult,
    NodeIdentifier,
    UniqueId,
)

logger = get_logger(__name__)


class NodeState(str, Enum):
    """Per-identifier lifecycle state."""

    NOT_STARTED = "not_started"
    STARTED = "started"
    SKIPPED = "skipped"
    FINISHED = "finished"


@dataclass(frozen=True)
class ListenerFailure:
    """An exception raised by a listener while handling one event."""

    listener: IExecutionListener
    event: ExecutionEvent
    error: Exception

    def describe(self) -> str:
        return (
            f"{type(self.listener).__name__} failed on {self.event.type.name} "
            f"{self.event.node.unique_id}: {type(self.error).__name__}: {self.error}"
        )


ListenerErrorHandler = Callable[[ListenerFailure], None]


class IEventBus(Protocol):
    """Single producer of the ordered event stream of one session."""

    def publish(self, event: ExecutionEvent) -> None:
        """Deliver event to every listener in registration order."""
        ...

    def started(self, node: NodeIdentifier) -> ExecutionEvent:
        """Publish a STARTED event."""
        ...

    def skipped(self, node: NodeIdentifier, reason: str | None) -> ExecutionEvent:
        """Publish a SKIPPED event."""
        ...

    def finished(self, node: NodeIdentifier, result: ExecutionResult) -> ExecutionEvent:
        """Publish a FINISHED event."""
        ...


class ExecutionEventBus:
    """Pass-through sequencer for one execution session.

    Delivery to all listeners happens under a re-entrant lock, so events
    published concurrently by worker threads are delivered one at a time and
    every listener observes the same total order. Listener exceptions are
    isolated per listener and collected in ``listener_failures``.
    """

    def __init__(
        self,
        listeners: Iterable[IExecutionListener] = (),
        on_listener_error: ListenerErrorHandler | None = None,
    ):
        self._listeners: list[IExecutionListener] = list(listeners)
        self._on_listener_error = on_listener_error
        self._lock = threading.RLock()
        self._states: dict[UniqueId, NodeState] = {}
        self._root_id: UniqueId | None = None
        self._finished = False
        self._sequence = 0
        self._failures: list[ListenerFailure] = []

    def add_listener(self, listener: IExecutionListener) -> None:
        """Register a listener; only allowed before the first event."""
        with self._lock:
            if self._sequence:
                raise SessionStateError(
                    "Listeners cannot be registered after the session has started"
                )
            self._listeners.append(listener)

    @property
    def listeners(self) -> tuple[IExecutionListener, ...]:
        return tuple(self._listeners)

    @property
    def events_published(self) -> int:
        return self._sequence

    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def listener_failures(self) -> tuple[ListenerFailure, ...]:
        with self._lock:
            return tuple(self._failures)

    def state_of(self, unique_id: UniqueId) -> NodeState:
        with self._lock:
            return self._states.get(unique_id, NodeState.NOT_STARTED)

    def raise_for_listener_failures(self) -> None:
        """Raise ListenerExecutionError if any listener failed so far."""
        failures = self.listener_failures
        if failures:
            raise ListenerExecutionError(failures)

    def started(self, node: NodeIdentifier) -> ExecutionEvent:
        event = ExecutionEvent.started(node)
        self.publish(event)
        return event

    def skipped(self, node: NodeIdentifier, reason: str | None) -> ExecutionEvent:
        event = ExecutionEvent.skipped(node, reason)
        self.publish(event)
        return event

    def finished(self, node: NodeIdentifier, result: ExecutionResult) -> ExecutionEvent:
        event = ExecutionEvent.finished(node, result)
        self.publish(event)
        return event

    def publish(self, event: ExecutionEvent) -> None:
        """Deliver event to every listener in registration order.

        Raises:
            EventOrderError: if the event breaks the node's lifecycle; nothing
                is delivered in that case.
        """
        with self._lock:
            self._advance(event)
            self._sequence += 1
            if self._sequence == 1:
                logger.info(
                    "Execution session started with %s listener(s)",
                    len(self._listeners),
                )
            logger.debug("Delivering event #%s: %s", self._sequence, event.describe())

            failures = []
            for listener in self._listeners:
                failure = self._deliver(listener, event)
                if failure is not None:
                    failures.append(failure)

            if self._finished:
                logger.info(
                    "Execution session finished after %s events, %s listener failure(s)",
                    self._sequence,
                    len(self._failures),
                )

        if self._on_listener_error is not None:
            for failure in failures:
                self._on_listener_error(failure)

    def _advance(self, event: ExecutionEvent) -> None:
        """Validate and apply the node's state transition."""
        node = event.node
        uid = node.unique_id
        if self._finished:
            raise EventOrderError(
                f"Session already finished; cannot publish {event.type.name} for {uid}"
            )

        current = self._states.get(uid, NodeState.NOT_STARTED)
        if event.type is EventType.FINISHED:
            if current is not NodeState.STARTED:
                raise EventOrderError(f"Cannot finish {uid} in state {current.name}")
        elif current is not NodeState.NOT_STARTED:
            raise EventOrderError(
                f"Cannot report {event.type.name} for {uid} in state {current.name}"
            )

        if node.parent_id is None:
            if self._root_id is not None and self._root_id != uid:
                raise EventOrderError(
                    f"Session already has root {self._root_id}; got second root {uid}"
                )
            self._root_id = uid
        else:
            parent_state = self._states.get(node.parent_id, NodeState.NOT_STARTED)
            if parent_state is not NodeState.STARTED:
                raise EventOrderError(
                    f"Parent {node.parent_id} of {uid} is {parent_state.name}, "
                    f"expected STARTED"
                )

        if event.type is EventType.STARTED:
            self._states[uid] = NodeState.STARTED
        elif event.type is EventType.SKIPPED:
            self._states[uid] = NodeState.SKIPPED
        else:
            self._states[uid] = NodeState.FINISHED

        if uid == self._root_id and event.type is not EventType.STARTED:
            self._finished = True

    def _deliver(
        self, listener: IExecutionListener, event: ExecutionEvent
    ) -> ListenerFailure | None:
        try:
            if event.type is EventType.STARTED:
                listener.on_started(event.node)
            elif event.type is EventType.SKIPPED:
                listener.on_skipped(event.node, event.reason)
            else:
                listener.on_finished(event.node, event.result)
        except Exception as e:
            failure = ListenerFailure(listener=listener, event=event, error=e)
            self._failures.append(failure)
            logger.error(
                "Error in listener %s: %s",
                type(listener).__name__,
                e,
                exc_info=e,
                extra={
                    "context": {
                        "event": event.type.value,
                        "unique_id": str(event.node.unique_id),
                    }
                },
            )
            return failure
        return None
