"""Tracker that records the unique ids of leaf tests that ran."""

import threading
from pathlib import Path
from typing import Protocol

from ..config import ReportingConfig
from ..errors import TrackingWriteError
from ..logging_config import get_logger
from ..models import ExecutionResult, NodeIdentifier

logger = get_logger(__name__)


class IUniqueIdTracker(Protocol):
    """Collects finished test ids and persists them once per session."""

    @property
    def enabled(self) -> bool:
        """Whether tracking is active for this session."""
        ...

    @property
    def unique_ids(self) -> list[str]:
        """Ids collected so far, in completion order."""
        ...

    def close(self) -> None:
        """Write collected ids if that has not happened yet."""
        ...


class UniqueIdTrackingListener:
    """Listener writing the ids of every finished TEST node to a text file.

    Successful, aborted and failed tests are recorded; skipped tests never
    finish and are therefore absent. The file is written once, when the root
    node finishes or on ``close()``, and overwrites any previous content.
    When disabled the listener collects nothing and never touches the file
    system, so it is safe to register it unconditionally.
    """

    def __init__(self, config: ReportingConfig | None = None):
        self._config = config or ReportingConfig()
        self._lock = threading.Lock()
        self._unique_ids: list[str] = []
        self._written = False
        self._attempted = False
        if not self.enabled:
            logger.debug("Unique id tracking disabled")

    @property
    def enabled(self) -> bool:
        return self._config.uid_tracking_enabled

    @property
    def output_path(self) -> Path:
        return self._config.output_path

    @property
    def unique_ids(self) -> list[str]:
        with self._lock:
            return list(self._unique_ids)

    @property
    def written(self) -> bool:
        return self._written

    def on_started(self, node: NodeIdentifier) -> None:
        pass

    def on_skipped(self, node: NodeIdentifier, reason: str | None) -> None:
        pass

    def on_finished(self, node: NodeIdentifier, result: ExecutionResult) -> None:
        if not self.enabled:
            return
        if node.is_test:
            with self._lock:
                self._unique_ids.append(str(node.unique_id))
        if node.is_root and not self._attempted:
            self._write()

    def close(self) -> None:
        """Write collected ids unless a write was already attempted."""
        if self.enabled and not self._attempted:
            self._write()

    def flush(self) -> None:
        """Write collected ids now, retrying after an earlier failed write."""
        if self.enabled:
            self._write()

    def _write(self) -> None:
        path = self.output_path
        with self._lock:
            if self._written:
                return
            self._attempted = True
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with path.open("w", encoding="utf-8") as f:
                    for unique_id in self._unique_ids:
                        f.write(f"{unique_id}\n")
            except OSError as e:
                # In-memory ids stay available through unique_ids
                raise TrackingWriteError(f"Failed to write unique ids to {path}: {e}") from e
            self._written = True
            count = len(self._unique_ids)

        logger.info(
            "Wrote %s unique id(s) to %s",
            count,
            path,
            extra={"context": {"path": str(path), "count": count}},
        )
