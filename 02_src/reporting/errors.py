"""Infrastructure error taxonomy.

Test outcomes (failed or aborted tests) are never raised through these types;
they travel in ``ExecutionResult``. Everything here signals that the reporting
pipeline itself went wrong.
"""


class ReportingError(Exception):
    """Base class for reporting pipeline errors."""


class IdentifierFormatError(ReportingError, ValueError):
    """A string does not match the unique id segment grammar."""

    def __init__(self, text: str, token: str, reason: str):
        self.text = text
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed unique id {text!r}: token {token!r} {reason}")


class EventOrderError(ReportingError):
    """An event would break the per-identifier lifecycle ordering."""


class SessionStateError(ReportingError):
    """An operation is not allowed in the session's current state."""


class TrackingWriteError(ReportingError):
    """The unique id tracking output could not be written."""


class ListenerExecutionError(ReportingError):
    """One or more listeners raised while handling events."""

    def __init__(self, failures):
        self.failures = tuple(failures)
        lines = [f"{len(self.failures)} listener failure(s):"]
        lines.extend(f"  - {failure.describe()}" for failure in self.failures)
        super().__init__("\n".join(lines))
