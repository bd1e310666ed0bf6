"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

ENGINE_ID = "demo-engine"
CASE_ONE = "sample.CaseOne"
CASE_TWO = "sample.CaseTwo"

PASSING_TEST = f"[engine:{ENGINE_ID}]/[class:{CASE_ONE}]/[method:passing()]"
DISABLED_TEST = f"[engine:{ENGINE_ID}]/[class:{CASE_ONE}]/[method:disabled()]"
ABORTED_TEST = f"[engine:{ENGINE_ID}]/[class:{CASE_ONE}]/[method:aborted()]"
FAILING_TEST = f"[engine:{ENGINE_ID}]/[class:{CASE_ONE}]/[method:failing()]"
DYNAMIC_TEST_1 = (
    f"[engine:{ENGINE_ID}]/[class:{CASE_ONE}]/[test-factory:dynamic_tests()]/[dynamic-test:#1]"
)
DYNAMIC_TEST_2 = (
    f"[engine:{ENGINE_ID}]/[class:{CASE_ONE}]/[test-factory:dynamic_tests()]/[dynamic-test:#2]"
)
TEST_1 = f"[engine:{ENGINE_ID}]/[class:{CASE_TWO}]/[method:test1()]"
TEST_2 = f"[engine:{ENGINE_ID}]/[class:{CASE_TWO}]/[method:test2()]"

EXPECTED_UNIQUE_IDS = [
    PASSING_TEST,
    ABORTED_TEST,
    FAILING_TEST,
    DYNAMIC_TEST_1,
    DYNAMIC_TEST_2,
    TEST_1,
    TEST_2,
]


def build_sample_plan():
    """Two containers: one with mixed outcomes and a test factory, one all green."""
    from reporting.engine import (
        assert_equals,
        assume_true,
        container,
        dynamic,
        engine,
        factory,
        fail,
        leaf,
    )

    return engine(
        ENGINE_ID,
        container(
            CASE_ONE,
            leaf("passing()", lambda: None),
            leaf("disabled()", lambda: None, disabled="testing"),
            leaf("aborted()", lambda: assume_true(False)),
            leaf("failing()", fail),
            factory(
                "dynamic_tests()",
                lambda: [
                    dynamic(text, lambda text=text: assert_equals(3, len(text)))
                    for text in ("cat", "dog")
                ],
            ),
        ),
        container(
            CASE_TWO,
            leaf("test1()"),
            leaf("test2()"),
        ),
    )


@pytest.fixture
def sample_plan():
    """Plan with 8 leaves: 5 succeed, 1 skipped, 1 aborted, 1 failed."""
    return build_sample_plan()


@pytest.fixture
def recorder():
    """Create an EventRecorder."""
    from reporting.testkit import EventRecorder

    return EventRecorder()


@pytest.fixture
def event_bus(recorder):
    """Create ExecutionEventBus with a recorder registered."""
    from reporting.event_bus import ExecutionEventBus

    return ExecutionEventBus([recorder])


@pytest.fixture
def tracking_config(tmp_path):
    """Enabled tracking config writing below tmp_path."""
    from reporting.config import ReportingConfig

    return ReportingConfig(
        uid_tracking_enabled=True,
        uid_tracking_output_dir=tmp_path / "build",
    )


@pytest.fixture
def tracker(tracking_config):
    """Create an enabled UniqueIdTrackingListener."""
    from reporting.tracker import UniqueIdTrackingListener

    return UniqueIdTrackingListener(tracking_config)


@pytest.fixture
def make_node():
    """Factory for NodeIdentifiers below [engine:demo-engine]."""
    from reporting.models import NodeIdentifier, NodeKind, UniqueId

    def _make(*path, kind=NodeKind.TEST):
        unique_id = UniqueId.for_engine(ENGINE_ID)
        for segment_type, value in path:
            unique_id = unique_id.append(segment_type, value)
        return NodeIdentifier(
            unique_id=unique_id,
            kind=kind if path else NodeKind.CONTAINER,
            display_name=unique_id.last_segment.value,
            parent_id=unique_id.parent,
        )

    return _make
