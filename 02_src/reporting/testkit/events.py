"""Queryable event logs, statistics and trace assertions."""

from dataclasses import asdict, dataclass
from typing import Callable, Iterable, Iterator

from ..models import EventType, ExecutionEvent, NodeKind, ResultStatus
from .conditions import Condition

EventPredicate = Callable[[ExecutionEvent], bool]


@dataclass(frozen=True)
class EventStatistics:
    """Counts derived purely from a recorded event log."""

    started: int
    skipped: int
    aborted: int
    succeeded: int
    failed: int
    finished: int
    identifiers: int

    @classmethod
    def from_events(cls, events: Iterable[ExecutionEvent]) -> "EventStatistics":
        counts = {"started": 0, "skipped": 0, "aborted": 0, "succeeded": 0, "failed": 0}
        by_status = {
            ResultStatus.SUCCESSFUL: "succeeded",
            ResultStatus.ABORTED: "aborted",
            ResultStatus.FAILED: "failed",
        }
        finished = 0
        ids = set()
        for event in events:
            ids.add(event.node.unique_id)
            if event.type is EventType.STARTED:
                counts["started"] += 1
            elif event.type is EventType.SKIPPED:
                counts["skipped"] += 1
            else:
                finished += 1
                counts[by_status[event.result.status]] += 1
        return cls(finished=finished, identifiers=len(ids), **counts)

    def is_balanced(self) -> bool:
        """True once every started node finished and each id is accounted for once."""
        return (
            self.started == self.succeeded + self.aborted + self.failed
            and self.started + self.skipped == self.identifiers
        )

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


class Events:
    """Immutable, ordered view over recorded events.

    Filters return new ``Events``; assertion methods return ``self`` so
    checks can be chained. Failures raise ``AssertionError`` with the full
    actual sequence attached.
    """

    def __init__(self, events: Iterable[ExecutionEvent], category: str = "All"):
        self._events = tuple(events)
        self._category = category

    @property
    def category(self) -> str:
        return self._category

    def to_list(self) -> list[ExecutionEvent]:
        return list(self._events)

    def count(self) -> int:
        return len(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ExecutionEvent]:
        return iter(self._events)

    def __getitem__(self, index: int) -> ExecutionEvent:
        return self._events[index]

    def filter(self, predicate: EventPredicate, category: str | None = None) -> "Events":
        return Events(
            (e for e in self._events if predicate(e)),
            category or self._category,
        )

    def tests(self) -> "Events":
        return self.filter(lambda e: e.node.kind is NodeKind.TEST, "Test")

    def containers(self) -> "Events":
        return self.filter(lambda e: e.node.kind is NodeKind.CONTAINER, "Container")

    def started(self) -> "Events":
        return self.filter(lambda e: e.type is EventType.STARTED)

    def skipped(self) -> "Events":
        return self.filter(lambda e: e.type is EventType.SKIPPED)

    def finished(self) -> "Events":
        return self.filter(lambda e: e.type is EventType.FINISHED)

    def succeeded(self) -> "Events":
        return self._with_status(ResultStatus.SUCCESSFUL)

    def aborted(self) -> "Events":
        return self._with_status(ResultStatus.ABORTED)

    def failed(self) -> "Events":
        return self._with_status(ResultStatus.FAILED)

    def _with_status(self, status: ResultStatus) -> "Events":
        return self.filter(
            lambda e: e.type is EventType.FINISHED and e.result.status is status
        )

    def statistics(self) -> EventStatistics:
        return EventStatistics.from_events(self._events)

    def debug(self) -> str:
        """Render the log, one event per line."""
        lines = [f"{self._category} events ({len(self._events)}):"]
        lines.extend(f"  [{i}] {e.describe()}" for i, e in enumerate(self._events))
        return "\n".join(lines)

    def assert_statistics(self, **expected: int) -> "Events":
        """Check counters, e.g. ``assert_statistics(started=7, skipped=1)``."""
        actual = self.statistics().as_dict()
        unknown = sorted(set(expected) - set(actual))
        if unknown:
            raise TypeError(f"Unknown statistics: {', '.join(unknown)}")

        mismatches = [
            f"{name}: expected {count} but was {actual[name]}"
            for name, count in expected.items()
            if actual[name] != count
        ]
        if mismatches:
            self._fail(f"{self._category} event statistics did not match", mismatches)
        return self

    def assert_events_match_exactly(self, *conditions: Condition[ExecutionEvent]) -> "Events":
        """Every event matches the condition at the same position, nothing extra."""
        problems = []
        if len(conditions) != len(self._events):
            problems.append(
                f"expected {len(conditions)} event(s) but {len(self._events)} were recorded"
            )
        for index, condition in enumerate(conditions):
            if index >= len(self._events):
                problems.append(f"[{index}] {condition} had no event at this position")
            elif not condition.matches(self._events[index]):
                problems.append(
                    f"[{index}] {condition} did not match {self._events[index].describe()}"
                )
        if problems:
            self._fail(f"{self._category} events did not match exactly", problems)
        return self

    def assert_events_match_loosely(self, *conditions: Condition[ExecutionEvent]) -> "Events":
        """Conditions match events in increasing position; extra events are allowed."""
        problems = []
        position = 0
        for index, condition in enumerate(conditions):
            match = self._find(condition, position)
            if match is not None:
                position = match + 1
                continue
            earlier = [i for i in range(position) if condition.matches(self._events[i])]
            if earlier:
                problems.append(
                    f"[{index}] {condition} only matched out of order, at position(s) "
                    f"{', '.join(str(i) for i in earlier)}"
                )
            else:
                problems.append(f"[{index}] {condition} was never satisfied")
        if problems:
            self._fail(f"{self._category} events did not match loosely", problems)
        return self

    def _find(self, condition: Condition[ExecutionEvent], start: int) -> int | None:
        for index in range(start, len(self._events)):
            if condition.matches(self._events[index]):
                return index
        return None

    def _fail(self, headline: str, problems: list[str]) -> None:
        lines = [f"{headline}:"]
        lines.extend(f"  - {problem}" for problem in problems)
        lines.append(self.debug())
        raise AssertionError("\n".join(lines))

    def __repr__(self) -> str:
        return f"Events(category={self._category!r}, count={len(self._events)})"
