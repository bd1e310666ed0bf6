"""Hierarchical unique ids for plan nodes."""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from ..errors import IdentifierFormatError

SEGMENT_SEPARATOR = "/"

# Characters that carry meaning in the string form and must be escaped
# inside a segment type or value.
_RESERVED = "%[]:/"
_TOKEN_PATTERN = re.compile(r"^\[(?P<type>[^\[\]:/]*):(?P<value>[^\[\]/]*)\]$")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _encode(text: str) -> str:
    return "".join(f"%{ord(ch):02X}" if ch in _RESERVED else ch for ch in text)


def _decode(text: str, source: str, token: str) -> str:
    if _BAD_ESCAPE.search(text):
        raise IdentifierFormatError(source, token, "contains an invalid percent escape")
    try:
        return unquote(text, errors="strict")
    except UnicodeDecodeError as e:
        raise IdentifierFormatError(
            source, token, "contains a percent escape that is not valid UTF-8"
        ) from e


@dataclass(frozen=True)
class Segment:
    """A single (type, value) pair of a unique id."""

    type: str
    value: str

    def __post_init__(self):
        if not self.type:
            raise ValueError("Segment type must not be empty")

    def __str__(self) -> str:
        return f"[{_encode(self.type)}:{_encode(self.value)}]"


@dataclass(frozen=True)
class UniqueId:
    """Immutable path of segments from the engine root down to a node.

    Equality is segment-wise, so two ids built independently for the same
    node compare (and hash) equal. The string form is only a serialization
    boundary; consumers should compare ``UniqueId`` objects.
    """

    segments: tuple[Segment, ...]

    def __post_init__(self):
        if not self.segments:
            raise ValueError("UniqueId requires at least one segment")
        # Accept lists for convenience, store a tuple.
        object.__setattr__(self, "segments", tuple(self.segments))

    @classmethod
    def root(cls, segment_type: str, value: str) -> "UniqueId":
        return cls((Segment(segment_type, value),))

    @classmethod
    def for_engine(cls, engine_id: str) -> "UniqueId":
        """Create the root id of an engine."""
        return cls.root("engine", engine_id)

    @classmethod
    def parse(cls, text: str) -> "UniqueId":
        """Parse the canonical ``[type:value]/[type:value]`` form.

        Raises:
            IdentifierFormatError: if any token does not match the grammar.
        """
        if not text:
            raise IdentifierFormatError(text, text, "is empty")

        segments = []
        for token in text.split(SEGMENT_SEPARATOR):
            match = _TOKEN_PATTERN.match(token)
            if match is None:
                raise IdentifierFormatError(text, token, "is not of the form [type:value]")
            segment_type = _decode(match.group("type"), text, token)
            if not segment_type:
                raise IdentifierFormatError(text, token, "has an empty segment type")
            segments.append(Segment(segment_type, _decode(match.group("value"), text, token)))
        return cls(tuple(segments))

    def append(self, segment_type: str, value: str) -> "UniqueId":
        """Return a new id one level deeper."""
        return UniqueId(self.segments + (Segment(segment_type, value),))

    @property
    def parent(self) -> "UniqueId | None":
        if len(self.segments) == 1:
            return None
        return UniqueId(self.segments[:-1])

    @property
    def last_segment(self) -> Segment:
        return self.segments[-1]

    @property
    def engine_id(self) -> str | None:
        first = self.segments[0]
        return first.value if first.type == "engine" else None

    def has_prefix(self, other: "UniqueId") -> bool:
        """True if ``other`` is this id or one of its ancestors."""
        size = len(other.segments)
        return size <= len(self.segments) and self.segments[:size] == other.segments

    def __str__(self) -> str:
        return SEGMENT_SEPARATOR.join(str(segment) for segment in self.segments)
