"""Core data models for execution reporting."""

from .identifiers import Segment, UniqueId
from .nodes import NodeIdentifier, NodeKind
from .results import ExecutionResult, ResultStatus
from .events import EventType, ExecutionEvent

__all__ = [
    # Identity
    "Segment",
    "UniqueId",
    "NodeKind",
    "NodeIdentifier",
    # Results
    "ResultStatus",
    "ExecutionResult",
    # Events
    "EventType",
    "ExecutionEvent",
]
