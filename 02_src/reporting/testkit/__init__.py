"""Event assertion facility.

Record the events of a session and verify their shape::

    results = execute(plan)
    results.test_events().assert_statistics(started=3, failed=1)
"""

from . import conditions
from .conditions import Condition
from .events import EventStatistics, Events
from .execution import ExecutionResults, execute
from .recorder import EventRecorder

__all__ = [
    "Condition",
    "conditions",
    "EventRecorder",
    "EventStatistics",
    "Events",
    "ExecutionResults",
    "execute",
]
