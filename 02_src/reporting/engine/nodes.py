"""Already-discovered plan nodes the executor walks."""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from ..models import NodeKind

Executable = Callable[[], None]


@dataclass
class DynamicTest:
    """A test generated by a factory while the plan is executing."""

    display_name: str
    executable: Executable


DynamicTestFactory = Callable[[], Iterable[DynamicTest]]


@dataclass
class PlanNode:
    """A node of a discovered plan.

    Containers hold children and, for test factories, a ``factory`` producing
    further tests at execution time. ``disabled`` holds the skip reason.
    """

    segment_type: str
    name: str
    kind: NodeKind
    display_name: str
    children: list["PlanNode"] = field(default_factory=list)
    executable: Executable | None = None
    factory: DynamicTestFactory | None = None
    disabled: str | None = None


def engine(engine_id: str, *children: PlanNode) -> PlanNode:
    """Root container of a plan."""
    return PlanNode("engine", engine_id, NodeKind.CONTAINER, engine_id, list(children))


def container(
    name: str,
    *children: PlanNode,
    segment_type: str = "class",
    display_name: str | None = None,
    disabled: str | None = None,
) -> PlanNode:
    return PlanNode(
        segment_type,
        name,
        NodeKind.CONTAINER,
        display_name or name,
        list(children),
        disabled=disabled,
    )


def leaf(
    name: str,
    executable: Executable | None = None,
    *,
    segment_type: str = "method",
    display_name: str | None = None,
    disabled: str | None = None,
) -> PlanNode:
    return PlanNode(
        segment_type,
        name,
        NodeKind.TEST,
        display_name or name,
        executable=executable,
        disabled=disabled,
    )


def factory(
    name: str,
    produce: DynamicTestFactory,
    *,
    segment_type: str = "test-factory",
    display_name: str | None = None,
    disabled: str | None = None,
) -> PlanNode:
    """Container whose tests are only known once execution reaches it."""
    return PlanNode(
        segment_type,
        name,
        NodeKind.CONTAINER,
        display_name or name,
        factory=produce,
        disabled=disabled,
    )


def dynamic(display_name: str, executable: Executable) -> DynamicTest:
    return DynamicTest(display_name, executable)
