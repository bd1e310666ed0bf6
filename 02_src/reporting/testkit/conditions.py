"""Composable, self-describing predicates over events and results.

Conditions combine with ``&`` (or ``all_of``) and render a readable
description, which is what assertion failures print for expectations that
were not met::

    event(leaf_node(unique_id_ends_with("method", "failing()")),
          finished_with_failure(instance_of(AssertionError)))
"""

from typing import Callable, Generic, TypeVar, Union

from ..models import (
    EventType,
    ExecutionEvent,
    ExecutionResult,
    NodeKind,
    ResultStatus,
    Segment,
    UniqueId,
)

T = TypeVar("T")

TextMatcher = Union[str, Callable[[str], bool]]


class Condition(Generic[T]):
    """A predicate with a human-readable description."""

    def __init__(self, predicate: Callable[[T], bool], description: str):
        self._predicate = predicate
        self._description = description

    @property
    def description(self) -> str:
        return self._description

    def matches(self, value: T) -> bool:
        return bool(self._predicate(value))

    def __call__(self, value: T) -> bool:
        return self.matches(value)

    def __and__(self, other: "Condition[T]") -> "Condition[T]":
        return all_of(self, other)

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"Condition({self._description!r})"


def all_of(*conditions: Condition[T]) -> Condition[T]:
    """AND of all conditions; an empty list matches everything."""
    if len(conditions) == 1:
        return conditions[0]
    description = ", ".join(str(c) for c in conditions) or "anything"
    return Condition(lambda value: all(c.matches(value) for c in conditions), description)


def _text_matches(expected: TextMatcher, actual: str | None) -> bool:
    if actual is None:
        return False
    if callable(expected):
        return bool(expected(actual))
    return actual == expected


def _text_description(expected: TextMatcher) -> str:
    return "<predicate>" if callable(expected) else repr(expected)


# Event conditions


def event(*conditions: Condition[ExecutionEvent]) -> Condition[ExecutionEvent]:
    """Group event conditions; reads like the expectation it describes."""
    combined = all_of(*conditions)
    return Condition(combined.matches, f"event({combined})")


def leaf_node(*conditions: Condition[ExecutionEvent]) -> Condition[ExecutionEvent]:
    """Event for a TEST node that also satisfies ``conditions``."""
    combined = all_of(*conditions)
    return Condition(
        lambda e: e.node.kind is NodeKind.TEST and combined.matches(e),
        f"test({combined})" if conditions else "test",
    )


def container_node(*conditions: Condition[ExecutionEvent]) -> Condition[ExecutionEvent]:
    """Event for a CONTAINER node that also satisfies ``conditions``."""
    combined = all_of(*conditions)
    return Condition(
        lambda e: e.node.kind is NodeKind.CONTAINER and combined.matches(e),
        f"container({combined})" if conditions else "container",
    )


def unique_id(expected: str | UniqueId) -> Condition[ExecutionEvent]:
    if isinstance(expected, str):
        expected = UniqueId.parse(expected)
    return Condition(lambda e: e.node.unique_id == expected, f"unique id '{expected}'")


def unique_id_ends_with(segment_type: str, value: str) -> Condition[ExecutionEvent]:
    """Event whose node id's last segment is ``[segment_type:value]``."""
    segment = Segment(segment_type, value)
    return Condition(
        lambda e: e.node.unique_id.last_segment == segment,
        f"unique id ending with '{segment}'",
    )


def has_segment(segment_type: str, value: str) -> Condition[ExecutionEvent]:
    segment = Segment(segment_type, value)
    return Condition(
        lambda e: segment in e.node.unique_id.segments,
        f"unique id containing '{segment}'",
    )


def display_name(expected: TextMatcher) -> Condition[ExecutionEvent]:
    return Condition(
        lambda e: _text_matches(expected, e.node.display_name),
        f"display name {_text_description(expected)}",
    )


def event_type(expected: EventType) -> Condition[ExecutionEvent]:
    return Condition(lambda e: e.type is expected, expected.value)


def started() -> Condition[ExecutionEvent]:
    return event_type(EventType.STARTED)


def skipped() -> Condition[ExecutionEvent]:
    return event_type(EventType.SKIPPED)


def skipped_with_reason(expected: TextMatcher) -> Condition[ExecutionEvent]:
    return Condition(
        lambda e: e.type is EventType.SKIPPED and _text_matches(expected, e.reason),
        f"skipped with reason {_text_description(expected)}",
    )


def finished(*conditions: Condition[ExecutionResult]) -> Condition[ExecutionEvent]:
    """FINISHED event whose result satisfies ``conditions``."""
    combined = all_of(*conditions)
    return Condition(
        lambda e: e.type is EventType.FINISHED and combined.matches(e.result),
        f"finished({combined})" if conditions else "finished",
    )


def finished_successfully() -> Condition[ExecutionEvent]:
    return Condition(
        finished(result_status(ResultStatus.SUCCESSFUL)).matches,
        "finished successfully",
    )


def aborted(*conditions: Condition[BaseException]) -> Condition[ExecutionEvent]:
    """FINISHED as ABORTED with a cause satisfying ``conditions``."""
    return _finished_with(ResultStatus.ABORTED, "aborted", conditions)


aborted_with_reason = aborted


def finished_with_failure(*conditions: Condition[BaseException]) -> Condition[ExecutionEvent]:
    """FINISHED as FAILED with a cause satisfying ``conditions``."""
    return _finished_with(ResultStatus.FAILED, "finished with failure", conditions)


def _finished_with(status, label, conditions) -> Condition[ExecutionEvent]:
    result_condition = result_status(status)
    if conditions:
        result_condition = result_condition & throwable(*conditions)
    return Condition(
        finished(result_condition).matches,
        f"{label}({all_of(*conditions)})" if conditions else label,
    )


# Result and cause conditions


def result_status(expected: ResultStatus) -> Condition[ExecutionResult]:
    return Condition(lambda r: r.status is expected, f"status {expected.name}")


def throwable(*conditions: Condition[BaseException]) -> Condition[ExecutionResult]:
    """Result carrying a cause that satisfies ``conditions``."""
    combined = all_of(*conditions)
    return Condition(
        lambda r: r.throwable is not None and combined.matches(r.throwable),
        f"throwable({combined})",
    )


def instance_of(category: type[BaseException]) -> Condition[BaseException]:
    return Condition(lambda t: isinstance(t, category), f"instance of {category.__name__}")


def message(expected: TextMatcher) -> Condition[BaseException]:
    return Condition(
        lambda t: _text_matches(expected, str(t)),
        f"message {_text_description(expected)}",
    )
