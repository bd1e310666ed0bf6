"""Helpers tests use to abort themselves."""

from typing import NoReturn


class AssumptionViolated(Exception):
    """A test precondition does not hold; the test is aborted, not failed."""


def assume_true(condition: bool, message: str | None = None) -> None:
    if not condition:
        raise AssumptionViolated(message or "Assumption failed: condition is not true")


def assume_false(condition: bool, message: str | None = None) -> None:
    if condition:
        raise AssumptionViolated(message or "Assumption failed: condition is not false")


def abort(message: str | None = None) -> NoReturn:
    raise AssumptionViolated(message or "Aborted")
