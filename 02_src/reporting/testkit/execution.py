"""Run a plan and capture what happened, for use in tests."""

from dataclasses import dataclass
from typing import Iterable

from ..app import ExecutionSession
from ..config import ReportingConfig
from ..engine import PlanNode
from ..event_bus import ListenerFailure
from ..listener import IExecutionListener
from ..models import ExecutionEvent
from .events import Events
from .recorder import EventRecorder


@dataclass(frozen=True)
class ExecutionResults:
    """Recorded events and infrastructure failures of one execution."""

    events: tuple[ExecutionEvent, ...]
    listener_failures: tuple[ListenerFailure, ...]
    tracked_unique_ids: tuple[str, ...]

    def all_events(self) -> Events:
        return Events(self.events)

    def test_events(self) -> Events:
        return self.all_events().tests()

    def container_events(self) -> Events:
        return self.all_events().containers()


def execute(
    root: PlanNode,
    *,
    config: ReportingConfig | None = None,
    listeners: Iterable[IExecutionListener] = (),
    max_workers: int = 1,
) -> ExecutionResults:
    """Execute ``root`` in a fresh session with an EventRecorder attached."""
    recorder = EventRecorder()
    with ExecutionSession(config, [recorder, *listeners]) as session:
        session.execute(root, max_workers=max_workers)

    return ExecutionResults(
        events=recorder.events,
        listener_failures=session.listener_failures,
        tracked_unique_ids=tuple(session.tracker.unique_ids),
    )
