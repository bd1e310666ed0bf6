"""Terminal outcomes of executed nodes."""

from dataclasses import dataclass
from enum import Enum


class ResultStatus(str, Enum):
    """Outcome of a finished node."""

    SUCCESSFUL = "successful"
    ABORTED = "aborted"  # precondition not met, not a failure
    FAILED = "failed"


@dataclass(frozen=True)
class ExecutionResult:
    """Status plus an optional opaque cause.

    ``throwable`` is diagnostic payload only. Nothing in the pipeline parses
    it to decide what to do next.
    """

    status: ResultStatus
    throwable: BaseException | None = None

    def __post_init__(self):
        if self.status is ResultStatus.SUCCESSFUL and self.throwable is not None:
            raise ValueError("A successful result cannot carry a throwable")

    @classmethod
    def successful(cls) -> "ExecutionResult":
        return cls(ResultStatus.SUCCESSFUL)

    @classmethod
    def aborted(cls, throwable: BaseException | None = None) -> "ExecutionResult":
        return cls(ResultStatus.ABORTED, throwable)

    @classmethod
    def failed(cls, throwable: BaseException | None = None) -> "ExecutionResult":
        return cls(ResultStatus.FAILED, throwable)

    def __str__(self) -> str:
        if self.throwable is None:
            return self.status.name
        return f"{self.status.name}({type(self.throwable).__name__}: {self.throwable})"
