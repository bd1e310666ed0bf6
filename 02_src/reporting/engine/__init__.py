"""Plan model and in-process executor."""

from .assertions import AssertionFailedError, assert_equals, assert_null, fail
from .assumptions import AssumptionViolated, abort, assume_false, assume_true
from .executor import DYNAMIC_TEST_SEGMENT_TYPE, TreeExecutor
from .nodes import (
    DynamicTest,
    PlanNode,
    container,
    dynamic,
    engine,
    factory,
    leaf,
)

__all__ = [
    # Plan
    "PlanNode",
    "DynamicTest",
    "engine",
    "container",
    "leaf",
    "factory",
    "dynamic",
    # Execution
    "TreeExecutor",
    "DYNAMIC_TEST_SEGMENT_TYPE",
    # Assumptions
    "AssumptionViolated",
    "assume_true",
    "assume_false",
    "abort",
    # Assertions
    "AssertionFailedError",
    "assert_equals",
    "assert_null",
    "fail",
]
