"""Core entities shared by the structural and geometry engines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np

VertexId = str
EdgeId = str
Point = Tuple[float, float]
Offset = Tuple[float, float]

ZERO_OFFSET: Offset = (0.0, 0.0)


class GraphError(Exception):
    """Base class for graph engine failures."""


class InvalidReference(GraphError, KeyError):
    """Raised when an id does not name a live vertex or edge."""

    def __str__(self) -> str:  # KeyError quotes its argument otherwise
        return str(self.args[0]) if self.args else ""


class LabelConflict(GraphError, ValueError):
    """Raised when a vertex label is already used by another live vertex."""


class SearchLimitExceeded(GraphError, RuntimeError):
    """Raised when a combinatorial search exhausts its iteration budget."""


class Directed(str, Enum):
    NONE = "none"
    FORWARD = "forward"
    REVERSED = "reversed"
    BIDIRECTIONAL = "bidirectional"


class TextDirection(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"

    def flipped(self) -> "TextDirection":
        if self is TextDirection.POSITIVE:
            return TextDirection.NEGATIVE
        return TextDirection.POSITIVE


class VertexStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


def as_point(value) -> Point:
    """Coerce any numeric length-2 sequence (tuple, list, ndarray) to a float pair."""
    if isinstance(value, (str, bytes)):
        raise ValueError(f"expected an (x, y) pair, got {value!r}")
    try:
        arr = np.asarray(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"expected an (x, y) pair, got {value!r}") from exc
    if arr.shape != (2,):
        raise ValueError(f"expected an (x, y) pair, got {value!r}")
    return (float(arr[0]), float(arr[1]))


@dataclass(eq=False)
class Vertex:
    id: VertexId
    position: Point
    label: str = ""
    offset: Offset = ZERO_OFFSET
    status: VertexStatus = VertexStatus.ACTIVE

    @property
    def current_position(self) -> Point:
        """Position including any uncommitted drag offset."""
        return (self.position[0] + self.offset[0], self.position[1] + self.offset[1])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("vertex", self.id))


@dataclass(eq=False)
class Edge:
    id: EdgeId
    start: VertexId
    end: VertexId
    weight: float = 0.0
    directed: Directed = Directed.NONE
    control_point: Optional[Point] = None
    control_offset: Offset = ZERO_OFFSET
    text_edge_position: float = 0.5
    text_distance: float = 20.0
    text_direction: TextDirection = TextDirection.POSITIVE

    @property
    def is_loop(self) -> bool:
        return self.start == self.end

    @property
    def is_curved(self) -> bool:
        return self.control_point is not None

    @property
    def endpoints(self) -> Tuple[VertexId, VertexId]:
        return (self.start, self.end)

    @property
    def current_control_point(self) -> Optional[Point]:
        if self.control_point is None:
            return None
        return (
            self.control_point[0] + self.control_offset[0],
            self.control_point[1] + self.control_offset[1],
        )

    def is_incident(self, vertex_id: VertexId) -> bool:
        return self.start == vertex_id or self.end == vertex_id

    def traverse(self, vertex_id: VertexId) -> Optional[VertexId]:
        """Return the endpoint opposite ``vertex_id`` or ``None`` if not incident."""
        if self.start == vertex_id:
            return self.end
        if self.end == vertex_id:
            return self.start
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("edge", self.id))


__all__ = [
    "Directed",
    "Edge",
    "EdgeId",
    "GraphError",
    "InvalidReference",
    "LabelConflict",
    "Offset",
    "Point",
    "SearchLimitExceeded",
    "TextDirection",
    "Vertex",
    "VertexId",
    "VertexStatus",
    "ZERO_OFFSET",
    "as_point",
]
