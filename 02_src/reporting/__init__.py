"""Execution reporting: test identity, lifecycle events, tracking and trace assertions."""

from .app import ExecutionSession, IExecutionSession
from .config import ReportingConfig
from .errors import (
    EventOrderError,
    IdentifierFormatError,
    ListenerExecutionError,
    ReportingError,
    SessionStateError,
    TrackingWriteError,
)
from .event_bus import ExecutionEventBus, IEventBus, ListenerFailure, NodeState
from .listener import IExecutionListener
from .models import (
    EventType,
    ExecutionEvent,
    ExecutionResult,
    NodeIdentifier,
    NodeKind,
    ResultStatus,
    Segment,
    UniqueId,
)
from .tracker import IUniqueIdTracker, UniqueIdTrackingListener

__all__ = [
    # Session
    "ExecutionSession",
    "IExecutionSession",
    "ReportingConfig",
    # Models
    "Segment",
    "UniqueId",
    "NodeKind",
    "NodeIdentifier",
    "ResultStatus",
    "ExecutionResult",
    "EventType",
    "ExecutionEvent",
    # Components
    "IExecutionListener",
    "IEventBus",
    "ExecutionEventBus",
    "ListenerFailure",
    "NodeState",
    "IUniqueIdTracker",
    "UniqueIdTrackingListener",
    # Errors
    "ReportingError",
    "IdentifierFormatError",
    "EventOrderError",
    "SessionStateError",
    "TrackingWriteError",
    "ListenerExecutionError",
]
