"""TreeExecutor: walks a plan and drives the event bus."""

from concurrent.futures import ThreadPoolExecutor

from ..event_bus import IEventBus
from ..logging_config import get_logger
from ..models import ExecutionResult, NodeIdentifier, NodeKind, UniqueId
from .assumptions import AssumptionViolated
from .nodes import Executable, PlanNode

logger = get_logger(__name__)

DYNAMIC_TEST_SEGMENT_TYPE = "dynamic-test"


def _invoke(executable: Executable | None) -> ExecutionResult:
    """Run a test body and map its outcome to a result."""
    try:
        if executable is not None:
            executable()
    except AssumptionViolated as e:
        return ExecutionResult.aborted(e)
    except Exception as e:
        return ExecutionResult.failed(e)
    return ExecutionResult.successful()


class TreeExecutor:
    """Executes a plan depth-first, optionally running siblings on threads."""

    def __init__(self, bus: IEventBus, max_workers: int = 1):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._bus = bus
        self._max_workers = max_workers

    def execute(self, root: PlanNode) -> NodeIdentifier:
        """Execute the whole plan; returns the root's identifier."""
        identifier = NodeIdentifier(
            unique_id=UniqueId.root(root.segment_type, root.name),
            kind=root.kind,
            display_name=root.display_name,
        )
        self._execute(root, identifier)
        return identifier

    def _execute(self, node: PlanNode, identifier: NodeIdentifier) -> None:
        if node.disabled is not None:
            self._bus.skipped(identifier, node.disabled)
            return

        self._bus.started(identifier)
        if node.kind is NodeKind.TEST:
            result = _invoke(node.executable)
        else:
            result = self._execute_children(node, identifier)
        self._bus.finished(identifier, result)

    def _execute_children(
        self, node: PlanNode, identifier: NodeIdentifier
    ) -> ExecutionResult:
        children = list(node.children)
        factory_error = None
        if node.factory is not None:
            try:
                children.extend(self._expand(node))
            except Exception as e:
                logger.warning("Test factory %s raised: %s", identifier.unique_id, e)
                factory_error = e

        pairs = [(child, self._identify(child, identifier)) for child in children]
        if self._max_workers > 1 and len(pairs) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                futures = [pool.submit(self._execute, child, ident) for child, ident in pairs]
                for future in futures:
                    future.result()
        else:
            for child, ident in pairs:
                self._execute(child, ident)

        if factory_error is not None:
            return ExecutionResult.failed(factory_error)
        return ExecutionResult.successful()

    @staticmethod
    def _expand(node: PlanNode) -> list[PlanNode]:
        """Materialize dynamic tests; ids are 1-based in generation order."""
        return [
            PlanNode(
                DYNAMIC_TEST_SEGMENT_TYPE,
                f"#{index}",
                NodeKind.TEST,
                dynamic.display_name,
                executable=dynamic.executable,
            )
            for index, dynamic in enumerate(node.factory(), start=1)
        ]

    @staticmethod
    def _identify(child: PlanNode, parent: NodeIdentifier) -> NodeIdentifier:
        return NodeIdentifier(
            unique_id=parent.unique_id.append(child.segment_type, child.name),
            kind=child.kind,
            display_name=child.display_name,
            parent_id=parent.unique_id,
        )
