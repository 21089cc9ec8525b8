"""Mutable graph document: vertices, edges, live drags and derived queries."""

from __future__ import annotations

import copy
import logging
import math
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from . import structure
from .config import get_engine_config
from .geometry import EdgeCurve, build_curve, crossing_pairs, intersects
from .model import (
    ZERO_OFFSET,
    Directed,
    Edge,
    EdgeId,
    InvalidReference,
    LabelConflict,
    Offset,
    Point,
    TextDirection,
    Vertex,
    VertexId,
    VertexStatus,
    as_point,
)

logger = logging.getLogger(__name__)


def _label_sequence() -> Iterator[str]:
    """A, B, ..., Z, AA, AB, ..., AZ, BA, ..."""
    n = 0
    while True:
        value = n
        label = ""
        while True:
            value, rem = divmod(value, 26)
            label = chr(ord("A") + rem) + label
            if value == 0:
                break
            value -= 1
        yield label
        n += 1


def _chord_frame(start: Point, end: Point, point: Point) -> Optional[Tuple[float, float]]:
    """Coordinates of ``point`` along and across the chord ``start -> end``."""
    dx, dy = end[0] - start[0], end[1] - start[1]
    length_sq = dx * dx + dy * dy
    if length_sq <= get_engine_config().eps ** 2:
        return None
    px, py = point[0] - start[0], point[1] - start[1]
    along = (px * dx + py * dy) / length_sq
    across = (dx * py - dy * px) / length_sq
    return along, across


def _from_chord_frame(start: Point, end: Point, along: float, across: float) -> Point:
    dx, dy = end[0] - start[0], end[1] - start[1]
    return (
        start[0] + along * dx - across * dy,
        start[1] + along * dy + across * dx,
    )


class Graph:
    """An insertion-ordered multigraph with per-edge curve geometry.

    Structural queries are recomputed from the edge list on every call and
    geometry is derived from current positions plus any live drag offsets, so
    a drag can be previewed without committing state.
    """

    def __init__(self, *, vertex_diameter: Optional[float] = None) -> None:
        config = get_engine_config()
        self.vertex_diameter = (
            config.default_vertex_diameter if vertex_diameter is None else float(vertex_diameter)
        )
        self._vertices: Dict[VertexId, Vertex] = {}
        self._edges: Dict[EdgeId, Edge] = {}
        self._vertex_counter = 0
        self._edge_counter = 0

    # ------------------------------------------------------------------
    # lookup
    def vertex(self, vertex_id: VertexId) -> Vertex:
        try:
            return self._vertices[vertex_id]
        except KeyError:
            raise InvalidReference(f"unknown vertex {vertex_id!r}") from None

    def edge(self, edge_id: EdgeId) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise InvalidReference(f"unknown edge {edge_id!r}") from None

    def vertex_by_label(self, label: str) -> Vertex:
        for vertex in self._vertices.values():
            if vertex.label == label:
                return vertex
        raise InvalidReference(f"no vertex labelled {label!r}")

    def vertices(self) -> List[Vertex]:
        return list(self._vertices.values())

    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def vertex_ids(self) -> List[VertexId]:
        return list(self._vertices)

    def edge_ids(self) -> List[EdgeId]:
        return list(self._edges)

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, item: object) -> bool:
        return item in self._vertices or item in self._edges

    def _edge_subset(self, edge_ids: Optional[Iterable[EdgeId]]) -> List[Edge]:
        if edge_ids is None:
            return self.edges()
        return [self.edge(edge_id) for edge_id in edge_ids]

    # ------------------------------------------------------------------
    # mutation
    def _check_label(self, label: str, owner: Optional[VertexId] = None) -> None:
        if not label:
            return
        for vertex in self._vertices.values():
            if vertex.label == label and vertex.id != owner:
                raise LabelConflict(f"label {label!r} already used by vertex {vertex.id}")

    def _next_free_label(self) -> str:
        used = {vertex.label for vertex in self._vertices.values()}
        for label in _label_sequence():
            if label not in used:
                return label
        raise AssertionError("unreachable")  # pragma: no cover

    def add_vertex(self, position, label: Optional[str] = None) -> VertexId:
        point = as_point(position)
        if label is None:
            label = self._next_free_label()
        else:
            self._check_label(label)
        vertex_id = f"v{self._vertex_counter}"
        self._vertex_counter += 1
        self._vertices[vertex_id] = Vertex(id=vertex_id, position=point, label=label)
        logger.debug("Added vertex %s (%s) at %s", vertex_id, label, point)
        return vertex_id

    def add_edge(
        self,
        v1: VertexId,
        v2: VertexId,
        directed: Directed = Directed.NONE,
        weight: float = 0.0,
        *,
        control_point=None,
    ) -> EdgeId:
        self.vertex(v1)
        self.vertex(v2)
        edge_id = f"e{self._edge_counter}"
        self._edge_counter += 1
        edge = Edge(
            id=edge_id,
            start=v1,
            end=v2,
            weight=float(weight),
            directed=Directed(directed),
            text_distance=get_engine_config().default_text_distance,
        )
        self._edges[edge_id] = edge
        if control_point is not None:
            self.curve_edge(edge_id, control_point)
        logger.debug("Added edge %s between %s and %s", edge_id, v1, v2)
        return edge_id

    def delete_edge(self, edge_id: EdgeId) -> None:
        self.edge(edge_id)
        del self._edges[edge_id]
        logger.debug("Deleted edge %s", edge_id)

    def delete_vertex(self, vertex_id: VertexId) -> None:
        vertex = self.vertex(vertex_id)
        doomed = [edge.id for edge in self._edges.values() if edge.is_incident(vertex_id)]
        for edge_id in doomed:
            del self._edges[edge_id]
        del self._vertices[vertex_id]
        vertex.status = VertexStatus.DELETED
        logger.debug("Deleted vertex %s and %d incident edge(s)", vertex_id, len(doomed))

    def move_vertex(self, vertex_id: VertexId, position) -> None:
        """Place ``vertex_id`` at ``position`` as if it had been dragged there."""
        vertex = self.vertex(vertex_id)
        target = as_point(position)
        self.drag_vertex(
            vertex_id, (target[0] - vertex.position[0], target[1] - vertex.position[1])
        )
        self.end_vertex_drag(vertex_id)

    def set_label(self, vertex_id: VertexId, label: str) -> None:
        vertex = self.vertex(vertex_id)
        self._check_label(label, owner=vertex_id)
        vertex.label = label

    def set_weight(self, edge_id: EdgeId, weight: float) -> None:
        self.edge(edge_id).weight = float(weight)

    def set_direction(self, edge_id: EdgeId, directed: Directed) -> None:
        self.edge(edge_id).directed = Directed(directed)

    def curve_edge(self, edge_id: EdgeId, control_point) -> None:
        edge = self.edge(edge_id)
        if edge.is_loop:
            raise ValueError(f"loop {edge_id} has a fixed shape and cannot be curved")
        edge.control_point = as_point(control_point)
        edge.control_offset = ZERO_OFFSET
        logger.debug("Curved edge %s through %s", edge_id, edge.control_point)

    def straighten_edge(self, edge_id: EdgeId) -> None:
        edge = self.edge(edge_id)
        edge.control_point = None
        edge.control_offset = ZERO_OFFSET

    # ------------------------------------------------------------------
    # live drags
    def drag_vertex(self, vertex_id: VertexId, translation: Offset) -> None:
        """Preview moving ``vertex_id`` by ``translation`` without committing it.

        Control points of connected curved edges keep their place relative to
        the edge chord, so the curve bends with the vertex. Weight labels stay
        at their parameter and distance along the curve.
        """

        vertex = self.vertex(vertex_id)
        vertex.offset = as_point(translation)
        for edge in self.connected_edges(vertex_id):
            if edge.is_loop or not edge.is_curved:
                continue
            start = self._vertices[edge.start]
            end = self._vertices[edge.end]
            frame = _chord_frame(start.position, end.position, edge.control_point)
            if frame is None:
                # collapsed chord: carry the control point with the midpoint of the ends
                dx = 0.5 * (start.offset[0] + end.offset[0])
                dy = 0.5 * (start.offset[1] + end.offset[1])
                edge.control_offset = (dx, dy)
                continue
            moved = _from_chord_frame(start.current_position, end.current_position, *frame)
            edge.control_offset = (
                moved[0] - edge.control_point[0],
                moved[1] - edge.control_point[1],
            )

    def end_vertex_drag(self, vertex_id: VertexId) -> None:
        vertex = self.vertex(vertex_id)
        for edge in self.connected_edges(vertex_id):
            if edge.is_curved:
                edge.control_point = edge.current_control_point
                edge.control_offset = ZERO_OFFSET
        vertex.position = vertex.current_position
        vertex.offset = ZERO_OFFSET
        logger.debug("Committed drag of vertex %s to %s", vertex_id, vertex.position)

    def drag_control_point(self, edge_id: EdgeId, translation: Offset) -> None:
        """Preview bending ``edge_id``; a straight edge starts from its chord midpoint."""
        edge = self.edge(edge_id)
        if edge.is_loop:
            raise ValueError(f"loop {edge_id} has a fixed shape and cannot be bent")
        if not edge.is_curved:
            start = self._vertices[edge.start].position
            end = self._vertices[edge.end].position
            edge.control_point = (0.5 * (start[0] + end[0]), 0.5 * (start[1] + end[1]))
        edge.control_offset = as_point(translation)

    def end_control_point_drag(self, edge_id: EdgeId) -> None:
        edge = self.edge(edge_id)
        if edge.is_curved:
            edge.control_point = edge.current_control_point
        edge.control_offset = ZERO_OFFSET

    def place_label(self, edge_id: EdgeId, point) -> None:
        """Re-anchor the weight label of ``edge_id`` at the curve point nearest ``point``."""

        edge = self.edge(edge_id)
        target = as_point(point)
        curve = self.curve(edge_id)
        t, distance = curve.closest_parameter(target)
        anchor = curve.point_on_curve(t)
        candidate = curve.perpendicular_point(anchor, distance, TextDirection.POSITIVE, t=t)
        flipped = curve.perpendicular_point(anchor, distance, TextDirection.NEGATIVE, t=t)
        if math.dist(flipped, target) < math.dist(candidate, target):
            direction = TextDirection.NEGATIVE
        else:
            direction = TextDirection.POSITIVE
        edge.text_edge_position = t
        edge.text_distance = distance
        edge.text_direction = direction
        logger.debug("Placed label of %s at t=%.4f, distance=%.4f", edge_id, t, distance)

    # ------------------------------------------------------------------
    # structural queries
    def degree(self, vertex_id: VertexId) -> int:
        self.vertex(vertex_id)
        return structure.degree(vertex_id, self._edges.values())

    def are_adjacent(self, v1: VertexId, v2: VertexId) -> bool:
        self.vertex(v1)
        self.vertex(v2)
        return structure.are_adjacent(v1, v2, self._edges.values())

    def edges_between(self, v1: VertexId, v2: VertexId) -> List[Edge]:
        self.vertex(v1)
        self.vertex(v2)
        return structure.edges_between(v1, v2, self._edges.values())

    def connected_edges(self, vertex_id: VertexId) -> List[Edge]:
        self.vertex(vertex_id)
        return structure.connected_edges(vertex_id, self._edges.values())

    def has_cycle(self, edge_ids: Optional[Iterable[EdgeId]] = None) -> bool:
        return structure.has_cycle(self.vertex_ids(), self._edge_subset(edge_ids))

    def is_hamiltonian_cycle(self, edge_ids: Iterable[EdgeId]) -> bool:
        return structure.is_hamiltonian_cycle(self.vertex_ids(), self._edge_subset(edge_ids))

    def is_connected(self) -> bool:
        return structure.is_connected(self.vertex_ids(), self.edges())

    def cycle_rank(self) -> int:
        return structure.cycle_rank(self.vertex_ids(), self.edges())

    def odd_degree_vertices(self) -> List[VertexId]:
        return structure.odd_degree_vertices(self.vertex_ids(), self.edges())

    def is_eulerian(self) -> bool:
        return structure.is_eulerian(self.vertex_ids(), self.edges())

    def is_complete(self) -> bool:
        return structure.is_complete(self.vertex_ids(), self.edges())

    def all_trails_between(self, start: VertexId, end: VertexId) -> List[List[Edge]]:
        self.vertex(start)
        self.vertex(end)
        return structure.all_trails_between(start, end, self.edges())

    def shortest_trails(self, start: VertexId, end: VertexId) -> List[List[Edge]]:
        self.vertex(start)
        self.vertex(end)
        return structure.shortest_trails(start, end, self.edges())

    def walk_weight(self, edge_ids: Sequence[EdgeId]) -> Optional[float]:
        return structure.walk_weight(self._edge_subset(edge_ids))

    def smallest_distance(self, start: VertexId, end: VertexId) -> Optional[float]:
        self.vertex(start)
        self.vertex(end)
        return structure.smallest_distance(start, end, self.edges())

    def are_vertices_connected(self, v1: VertexId, v2: VertexId) -> bool:
        self.vertex(v1)
        self.vertex(v2)
        return structure.are_vertices_connected(v1, v2, self.edges())

    def are_edges_adjacent(self, e1: EdgeId, e2: EdgeId) -> bool:
        return structure.are_edges_adjacent(self.edge(e1), self.edge(e2))

    def is_cycle(self) -> bool:
        return structure.is_cycle(self.vertex_ids(), self.edges())

    def hamiltonian_cycle(self) -> Optional[List[Edge]]:
        return structure.hamiltonian_cycle(self.vertex_ids(), self.edges())

    def has_hamiltonian_cycle(self) -> bool:
        return structure.has_hamiltonian_cycle(self.vertex_ids(), self.edges())

    # ------------------------------------------------------------------
    # geometry
    def curve(self, edge_id: EdgeId) -> EdgeCurve:
        edge = self.edge(edge_id)
        start = self._vertices[edge.start].current_position
        end = self._vertices[edge.end].current_position
        return build_curve(edge, start, end, vertex_diameter=self.vertex_diameter)

    def label_position(self, edge_id: EdgeId) -> Point:
        return self.curve(edge_id).label_position(self.edge(edge_id))

    def _loop_tolerance(self) -> float:
        return 0.5 * self.vertex_diameter

    def edges_intersect(self, e1: EdgeId, e2: EdgeId) -> bool:
        c1 = self.curve(e1)
        c2 = self.curve(e2)
        tolerance = self._loop_tolerance() if (c1.is_loop or c2.is_loop) else None
        return intersects(c1, c2, tolerance=tolerance)

    def crossing_pairs(self) -> List[Tuple[EdgeId, EdgeId]]:
        curves = [self.curve(edge_id) for edge_id in self._edges]
        return crossing_pairs(curves, loop_tolerance=self._loop_tolerance())

    # ------------------------------------------------------------------
    # snapshots
    def copy(self) -> "Graph":
        return copy.deepcopy(self)

    def restore(self, snapshot: "Graph") -> None:
        """Replace this graph's contents with a copy of ``snapshot``."""
        state = copy.deepcopy(snapshot)
        self.vertex_diameter = state.vertex_diameter
        self._vertices = state._vertices
        self._edges = state._edges
        self._vertex_counter = max(self._vertex_counter, state._vertex_counter)
        self._edge_counter = max(self._edge_counter, state._edge_counter)
        logger.debug(
            "Restored graph with %d vertices and %d edges", len(self._vertices), len(self._edges)
        )


__all__ = ["Graph"]
