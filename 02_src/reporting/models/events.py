"""Lifecycle events emitted during an execution session."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .nodes import NodeIdentifier
from .results import ExecutionResult


class EventType(str, Enum):
    """Closed set of lifecycle event kinds."""

    STARTED = "started"
    SKIPPED = "skipped"
    FINISHED = "finished"


@dataclass(frozen=True)
class ExecutionEvent:
    """A single lifecycle event for one node."""

    type: EventType
    node: NodeIdentifier
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    result: ExecutionResult | None = None  # FINISHED only
    reason: str | None = None  # SKIPPED only

    def __post_init__(self):
        if (self.type is EventType.FINISHED) != (self.result is not None):
            raise ValueError(f"{self.type.name} event must carry a result iff it is FINISHED")
        if self.reason is not None and self.type is not EventType.SKIPPED:
            raise ValueError(f"{self.type.name} event cannot carry a skip reason")

    @classmethod
    def started(cls, node: NodeIdentifier) -> "ExecutionEvent":
        return cls(EventType.STARTED, node)

    @classmethod
    def skipped(cls, node: NodeIdentifier, reason: str | None) -> "ExecutionEvent":
        return cls(EventType.SKIPPED, node, reason=reason)

    @classmethod
    def finished(cls, node: NodeIdentifier, result: ExecutionResult) -> "ExecutionEvent":
        return cls(EventType.FINISHED, node, result=result)

    def describe(self) -> str:
        """One-line form used in assertion diagnostics."""
        text = f"{self.type.name:<8} {self.node.kind.name:<9} {self.node.unique_id}"
        if self.result is not None:
            text += f" -> {self.result}"
        if self.reason is not None:
            text += f" (reason: {self.reason})"
        return text
