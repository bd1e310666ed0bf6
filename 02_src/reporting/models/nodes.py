"""Plan node identity as seen by listeners."""

from dataclasses import dataclass
from enum import Enum

from .identifiers import UniqueId


class NodeKind(str, Enum):
    """Kind of a plan node."""

    CONTAINER = "container"
    TEST = "test"


@dataclass(frozen=True)
class NodeIdentifier:
    """Identity of a single node in an executing plan."""

    unique_id: UniqueId
    kind: NodeKind
    display_name: str
    parent_id: UniqueId | None = None

    @property
    def is_test(self) -> bool:
        return self.kind is NodeKind.TEST

    @property
    def is_container(self) -> bool:
        return self.kind is NodeKind.CONTAINER

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def __str__(self) -> str:
        return str(self.unique_id)
