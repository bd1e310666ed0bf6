"""Tests for TreeExecutor and the plan builders."""

import pytest

from reporting.engine import (
    AssumptionViolated,
    TreeExecutor,
    abort,
    assume_false,
    assume_true,
    container,
    dynamic,
    engine,
    factory,
    fail,
    leaf,
)
from reporting.errors import EventOrderError
from reporting.event_bus import ExecutionEventBus
from reporting.models import EventType, NodeKind, ResultStatus, UniqueId


def execute(plan, recorder, max_workers=1):
    bus = ExecutionEventBus([recorder])
    root = TreeExecutor(bus, max_workers=max_workers).execute(plan)
    return bus, root


def result_of(recorder, uid):
    uid = UniqueId.parse(uid)
    return next(
        e.result
        for e in recorder.events
        if e.type is EventType.FINISHED and e.node.unique_id == uid
    )


class TestAssumptions:
    """Tests for assumption helpers."""

    def test_assume_true(self):
        """Test that a false condition aborts."""
        assume_true(True)
        with pytest.raises(AssumptionViolated):
            assume_true(False)

    def test_assume_false(self):
        """Test that a true condition aborts."""
        assume_false(False)
        with pytest.raises(AssumptionViolated, match="custom"):
            assume_false(True, "custom")

    def test_abort_and_fail(self):
        """Test unconditional abort and failure."""
        with pytest.raises(AssumptionViolated):
            abort()
        with pytest.raises(AssertionError):
            fail("boom")


class TestPlanBuilders:
    """Tests for plan node builders."""

    def test_builders(self):
        """Test kinds and defaults of built nodes."""
        plan = engine("e", container("Case", leaf("m()"), factory("gen()", list)))
        case = plan.children[0]

        assert plan.kind is NodeKind.CONTAINER
        assert plan.segment_type == "engine"
        assert case.segment_type == "class"
        assert case.children[0].kind is NodeKind.TEST
        assert case.children[0].segment_type == "method"
        assert case.children[1].kind is NodeKind.CONTAINER
        assert case.children[1].segment_type == "test-factory"

    def test_display_name_defaults_to_name(self):
        """Test display name fallback."""
        assert leaf("m()").display_name == "m()"
        assert leaf("m()", display_name="My test").display_name == "My test"


class TestTreeExecutorOutcomes:
    """Tests for mapping test bodies to results."""

    def test_outcomes(self, recorder):
        """Test successful, aborted and failed outcomes."""
        error = ValueError("unexpected")

        def raise_error():
            raise error

        plan = engine(
            "e",
            leaf("ok()", lambda: None),
            leaf("aborted()", lambda: assume_true(False)),
            leaf("assertion()", fail),
            leaf("error()", raise_error),
            leaf("empty()"),
        )
        execute(plan, recorder)

        assert result_of(recorder, "[engine:e]/[method:ok()]").status is ResultStatus.SUCCESSFUL
        assert result_of(recorder, "[engine:e]/[method:aborted()]").status is ResultStatus.ABORTED
        assertion = result_of(recorder, "[engine:e]/[method:assertion()]")
        assert assertion.status is ResultStatus.FAILED
        assert isinstance(assertion.throwable, AssertionError)
        assert result_of(recorder, "[engine:e]/[method:error()]").throwable is error
        assert result_of(recorder, "[engine:e]/[method:empty()]").status is ResultStatus.SUCCESSFUL

    def test_disabled_is_skipped_not_started(self, recorder):
        """Test that disabled nodes only produce SKIPPED."""
        plan = engine("e", leaf("off()", fail, disabled="not today"))
        execute(plan, recorder)

        off = [e for e in recorder.events if e.node.unique_id.last_segment.value == "off()"]
        assert [e.type for e in off] == [EventType.SKIPPED]
        assert off[0].reason == "not today"

    def test_disabled_container_skips_subtree(self, recorder):
        """Test that children of a disabled container produce no events."""
        plan = engine("e", container("Case", leaf("m()"), disabled="off"))
        execute(plan, recorder)

        assert [str(e.node.unique_id) for e in recorder.events] == [
            "[engine:e]",
            "[engine:e]/[class:Case]",
            "[engine:e]",
        ]

    def test_container_finishes_after_children(self, recorder):
        """Test depth-first ordering."""
        plan = engine("e", container("Case", leaf("a()"), leaf("b()")))
        bus, root = execute(plan, recorder)

        assert [(e.type.name, e.node.unique_id.last_segment.value) for e in recorder.events] == [
            ("STARTED", "e"),
            ("STARTED", "Case"),
            ("STARTED", "a()"),
            ("FINISHED", "a()"),
            ("STARTED", "b()"),
            ("FINISHED", "b()"),
            ("FINISHED", "Case"),
            ("FINISHED", "e"),
        ]
        assert bus.is_finished
        assert root.unique_id == UniqueId.for_engine("e")


class TestTreeExecutorDynamicTests:
    """Tests for test factories."""

    def test_dynamic_ids_assigned_lazily(self, recorder):
        """Test that the factory runs only once its container started."""
        seen = []

        def produce():
            seen.append(len(recorder.events))
            return [dynamic("first", lambda: None), dynamic("second", fail)]

        plan = engine("e", factory("gen()", produce))
        execute(plan, recorder)

        # root and factory STARTED were already delivered
        assert seen == [2]
        first = result_of(recorder, "[engine:e]/[test-factory:gen()]/[dynamic-test:#1]")
        second = result_of(recorder, "[engine:e]/[test-factory:gen()]/[dynamic-test:#2]")
        assert first.status is ResultStatus.SUCCESSFUL
        assert second.status is ResultStatus.FAILED
        names = [e.node.display_name for e in recorder.events if e.node.is_test]
        assert names == ["first", "first", "second", "second"]

    def test_factory_error_fails_container(self, recorder):
        """Test that a raising factory finishes its container as FAILED."""

        def produce():
            raise RuntimeError("cannot generate")

        plan = engine("e", factory("gen()", produce))
        execute(plan, recorder)

        result = result_of(recorder, "[engine:e]/[test-factory:gen()]")
        assert result.status is ResultStatus.FAILED
        assert str(result.throwable) == "cannot generate"
        assert result_of(recorder, "[engine:e]").status is ResultStatus.SUCCESSFUL


class TestTreeExecutorParallel:
    """Tests for running siblings on worker threads."""

    def test_parallel_preserves_ordering(self, recorder):
        """Test per-node and parent/child ordering under a thread pool."""
        plan = engine(
            "e",
            *[
                container(f"Case{c}", *[leaf(f"m{n}()") for n in range(10)])
                for c in range(4)
            ],
        )
        bus, _ = execute(plan, recorder, max_workers=4)

        events = recorder.events
        assert len(events) == 2 + 4 * 2 + 40 * 2
        positions = {}
        for index, event in enumerate(events):
            positions.setdefault(event.node.unique_id, []).append((event.type, index))
        for uid, sequence in positions.items():
            assert [t for t, _ in sequence] == [EventType.STARTED, EventType.FINISHED]
            if uid.parent is not None:
                parent = positions[uid.parent]
                assert parent[0][1] < sequence[0][1] < sequence[1][1] < parent[1][1]

    def test_invalid_worker_count(self):
        """Test that at least one worker is required."""
        with pytest.raises(ValueError):
            TreeExecutor(ExecutionEventBus(), max_workers=0)

    def test_ordering_errors_propagate(self, recorder):
        """Test that bus ordering errors surface from worker threads."""
        plan = engine("e", leaf("dup()"), leaf("dup()"))
        with pytest.raises(EventOrderError):
            execute(plan, recorder, max_workers=2)
