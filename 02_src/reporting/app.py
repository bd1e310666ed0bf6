"""Execution session bootstrap and lifecycle management."""

from typing import Iterable, Protocol

from .config import ReportingConfig
from .engine import PlanNode, TreeExecutor
from .errors import SessionStateError
from .event_bus import ExecutionEventBus, ListenerErrorHandler, ListenerFailure
from .listener import IExecutionListener
from .logging_config import get_logger
from .models import NodeIdentifier
from .tracker import UniqueIdTrackingListener

logger = get_logger(__name__)


class IExecutionSession(Protocol):
    """One execution of one plan."""

    def execute(self, root: PlanNode, max_workers: int = 1) -> NodeIdentifier:
        """Run the plan, delivering events to all listeners."""
        ...

    def close(self) -> None:
        """Release listener resources."""
        ...


class ExecutionSession:
    """Wires configuration, listeners, bus and executor for one run.

    The unique id tracking listener is always registered first; whether it
    does anything is decided by ``config`` alone. Further listeners are
    registered explicitly, in the order given.
    """

    def __init__(
        self,
        config: ReportingConfig | None = None,
        listeners: Iterable[IExecutionListener] = (),
        on_listener_error: ListenerErrorHandler | None = None,
    ):
        self._config = config or ReportingConfig()
        self._tracker = UniqueIdTrackingListener(self._config)
        self._bus = ExecutionEventBus(
            [self._tracker, *listeners],
            on_listener_error=on_listener_error,
        )
        self._executed = False

    @property
    def config(self) -> ReportingConfig:
        return self._config

    @property
    def bus(self) -> ExecutionEventBus:
        return self._bus

    @property
    def tracker(self) -> UniqueIdTrackingListener:
        return self._tracker

    @property
    def listener_failures(self) -> tuple[ListenerFailure, ...]:
        return self._bus.listener_failures

    def execute(self, root: PlanNode, max_workers: int = 1) -> NodeIdentifier:
        """Run the plan, delivering events to all listeners."""
        if self._executed:
            raise SessionStateError("ExecutionSession can only execute once")
        self._executed = True

        logger.info(
            "Executing plan %s (uid tracking %s)",
            root.name,
            "enabled" if self._tracker.enabled else "disabled",
        )
        executor = TreeExecutor(self._bus, max_workers=max_workers)
        return executor.execute(root)

    def close(self) -> None:
        """Flush the tracker if the root finish did not already."""
        self._tracker.close()

    def __enter__(self) -> "ExecutionSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
