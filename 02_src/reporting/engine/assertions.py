"""Assertions test bodies use to fail with expected and actual values."""

from typing import Any, Callable, NoReturn, Union

MessageSupplier = Union[str, Callable[[], str], None]

_UNDEFINED = object()


class AssertionFailedError(AssertionError):
    """Failed assertion, optionally carrying the compared values."""

    def __init__(
        self,
        message: str | None = None,
        expected: Any = _UNDEFINED,
        actual: Any = _UNDEFINED,
    ):
        super().__init__(message)
        self.message = message
        self._expected = expected
        self._actual = actual

    @property
    def is_expected_defined(self) -> bool:
        return self._expected is not _UNDEFINED

    @property
    def is_actual_defined(self) -> bool:
        return self._actual is not _UNDEFINED

    @property
    def expected(self) -> Any:
        return None if self._expected is _UNDEFINED else self._expected

    @property
    def actual(self) -> Any:
        return None if self._actual is _UNDEFINED else self._actual


def _build_prefix(message: MessageSupplier) -> str:
    if callable(message):
        message = message()
    if message is None or not str(message).strip():
        return ""
    return f"{message} ==> "


def _class_and_value(value: Any, text: str) -> str:
    if value is None:
        return "<None>"
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}@{id(value):x}<{text}>"


def _format_values(expected: Any, actual: Any) -> str:
    expected_text, actual_text = str(expected), str(actual)
    # Same text for different values: show the types so the difference is visible
    if expected_text == actual_text:
        return (
            f"expected: {_class_and_value(expected, expected_text)} "
            f"but was: {_class_and_value(actual, actual_text)}"
        )
    return f"expected: <{expected_text}> but was: <{actual_text}>"


def _fail_not_equal(expected: Any, actual: Any, message: MessageSupplier) -> NoReturn:
    raise AssertionFailedError(
        _build_prefix(message) + _format_values(expected, actual),
        expected=expected,
        actual=actual,
    )


def fail(message: MessageSupplier = None) -> NoReturn:
    """Fail the current test unconditionally."""
    if callable(message):
        message = message()
    raise AssertionFailedError(message)


def assert_null(actual: Any, message: MessageSupplier = None) -> None:
    """Fail unless ``actual`` is None."""
    if actual is not None:
        _fail_not_equal(None, actual, message)


def assert_equals(expected: Any, actual: Any, message: MessageSupplier = None) -> None:
    """Fail unless ``expected == actual``.

    ``message`` is a string or a callable producing one; it is only
    evaluated on failure and is prefixed to the diff as ``"<message> ==> "``.
    """
    if expected != actual:
        _fail_not_equal(expected, actual, message)
