"""Reference graphs used by the puzzles and the command line.

Layouts are in normalised coordinates with ``y`` pointing up; vertices are
labelled so callers can address them without knowing the generated ids.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .graph import Graph
from .model import EdgeId

# small enough that the closest vertices of the dodecahedron stay apart
NORMALISED_VERTEX_DIAMETER = 0.05

ICOSIAN_POSITIONS: Dict[str, Tuple[float, float]] = {
    # outer pentagon
    "A1": (0.5, 0.9),
    "B1": (0.88, 0.624),
    "C1": (0.735, 0.176),
    "D1": (0.265, 0.176),
    "E1": (0.12, 0.624),
    # middle decagon corners
    "A2": (0.5, 0.8),
    "B2": (0.785, 0.593),
    "C2": (0.676, 0.257),
    "D2": (0.324, 0.257),
    "E2": (0.215, 0.593),
    # middle decagon midpoints
    "MAB": (0.643, 0.696),
    "MAE": (0.357, 0.696),
    "MBC": (0.731, 0.425),
    "MCD": (0.5, 0.257),
    "MDE": (0.269, 0.425),
    # inner pentagon
    "A3": (0.429, 0.598),
    "B3": (0.571, 0.598),
    "C3": (0.615, 0.463),
    "D3": (0.5, 0.379),
    "E3": (0.385, 0.463),
}

ICOSIAN_EDGES: List[Tuple[str, str]] = [
    ("A1", "B1"), ("B1", "C1"), ("C1", "D1"), ("D1", "E1"), ("E1", "A1"),
    ("A1", "A2"), ("B1", "B2"), ("C1", "C2"), ("D1", "D2"), ("E1", "E2"),
    ("A2", "MAB"), ("MAB", "B2"), ("B2", "MBC"), ("MBC", "C2"), ("C2", "MCD"),
    ("MCD", "D2"), ("D2", "MDE"), ("MDE", "E2"), ("E2", "MAE"), ("MAE", "A2"),
    ("MAB", "B3"), ("MBC", "C3"), ("MCD", "D3"), ("MDE", "E3"), ("MAE", "A3"),
    ("A3", "B3"), ("B3", "C3"), ("C3", "D3"), ("D3", "E3"), ("A3", "E3"),
]

# a closed tour through all twenty vertices, first vertex repeated at the end
ICOSIAN_TOUR: List[str] = [
    "A1", "B1", "C1", "D1", "E1", "E2", "MDE", "D2", "MCD", "C2",
    "MBC", "B2", "MAB", "B3", "C3", "D3", "E3", "A3", "MAE", "A2", "A1",
]

PLANAR_POSITIONS: Dict[str, Tuple[float, float]] = {
    "a": (0.5, 0.95),
    "b": (0.928, 0.6391),
    "c": (0.7645, 0.1359),
    "d": (0.2355, 0.1359),
    "e": (0.072, 0.6391),
    "f": (0.5, 0.25),
}

PLANAR_EDGES: List[Tuple[str, str]] = [
    ("a", "b"), ("a", "c"), ("a", "d"), ("a", "e"),
    ("b", "c"), ("b", "f"), ("b", "e"),
    ("c", "d"), ("c", "f"),
    ("d", "e"), ("d", "f"),
    ("e", "f"),
]


def _build(
    positions: Dict[str, Tuple[float, float]],
    edges: Sequence[Tuple[str, str]],
    vertex_diameter: float,
) -> Graph:
    graph = Graph(vertex_diameter=vertex_diameter)
    ids = {label: graph.add_vertex(point, label=label) for label, point in positions.items()}
    for first, second in edges:
        graph.add_edge(ids[first], ids[second])
    return graph


def icosian_graph() -> Graph:
    """Hamilton's dodecahedron puzzle drawn flat: 20 vertices, 30 edges."""
    return _build(ICOSIAN_POSITIONS, ICOSIAN_EDGES, NORMALISED_VERTEX_DIAMETER)


def planar_graph() -> Graph:
    """Octahedron in a tangled starting layout for the planarity puzzle."""
    return _build(PLANAR_POSITIONS, PLANAR_EDGES, NORMALISED_VERTEX_DIAMETER)


def konigsberg_graph(width: float = 1.0, height: float = 1.0) -> Graph:
    """The seven bridges of Königsberg; the two doubled bridges are drawn curved."""

    graph = Graph(vertex_diameter=NORMALISED_VERTEX_DIAMETER * min(width, height))

    def at(x: float, y: float) -> Tuple[float, float]:
        return (x * width, y * height)

    a = graph.add_vertex(at(0.2, 0.5), label="A")
    b = graph.add_vertex(at(0.4, 0.8), label="B")
    c = graph.add_vertex(at(0.4, 0.2), label="C")
    d = graph.add_vertex(at(0.8, 0.5), label="D")
    graph.add_edge(a, b, control_point=at(0.2, 0.7))
    graph.add_edge(a, b, control_point=at(0.4, 0.6))
    graph.add_edge(a, c, control_point=at(0.2, 0.3))
    graph.add_edge(a, c, control_point=at(0.4, 0.4))
    graph.add_edge(a, d)
    graph.add_edge(b, d)
    graph.add_edge(c, d)
    return graph


def tour_edges(graph: Graph, labels: Sequence[str]) -> List[EdgeId]:
    """Edge ids walked by consecutive vertex ``labels``; the first joining edge is used."""

    edge_ids: List[EdgeId] = []
    for first, second in zip(labels, labels[1:]):
        v1 = graph.vertex_by_label(first).id
        v2 = graph.vertex_by_label(second).id
        joining = graph.edges_between(v1, v2)
        if not joining:
            raise ValueError(f"{first} and {second} are not adjacent")
        edge_ids.append(joining[0].id)
    return edge_ids


REFERENCE_GRAPHS = {
    "icosian": icosian_graph,
    "konigsberg": konigsberg_graph,
    "planar": planar_graph,
}


__all__ = [
    "ICOSIAN_EDGES",
    "ICOSIAN_POSITIONS",
    "ICOSIAN_TOUR",
    "NORMALISED_VERTEX_DIAMETER",
    "PLANAR_EDGES",
    "PLANAR_POSITIONS",
    "REFERENCE_GRAPHS",
    "icosian_graph",
    "konigsberg_graph",
    "planar_graph",
    "tour_edges",
]
