"""Observer contract for execution events."""

from typing import Protocol

from ..models import ExecutionResult, NodeIdentifier


class IExecutionListener(Protocol):
    """Receives lifecycle events from an ExecutionEventBus.

    Implementations may be called from several worker threads and must
    synchronize any state they share.
    """

    def on_started(self, node: NodeIdentifier) -> None:
        """A node started executing."""
        ...

    def on_skipped(self, node: NodeIdentifier, reason: str | None) -> None:
        """A node was skipped and will never start."""
        ...

    def on_finished(self, node: NodeIdentifier, result: ExecutionResult) -> None:
        """A started node reached its terminal result."""
        ...
