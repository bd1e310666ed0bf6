"""EventBus module."""

from .event_bus import (
    ExecutionEventBus,
    IEventBus,
    ListenerErrorHandler,
    ListenerFailure,
    NodeState,
)

__all__ = [
    "ExecutionEventBus",
    "IEventBus",
    "ListenerErrorHandler",
    "ListenerFailure",
    "NodeState",
]
