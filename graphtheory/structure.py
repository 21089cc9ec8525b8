"""Structural queries over a snapshot of vertices and an edge subset.

Every function here is read-only: it takes the vertex ids and the edges to
consider and recomputes its answer from scratch. ``Graph`` forwards its query
surface to these functions; the Hamiltonian game calls them directly on the
growing trail.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .config import get_engine_config
from .logging_utils import apply_debug_logging
from .model import Edge, SearchLimitExceeded, VertexId

logger = logging.getLogger(__name__)


def _unique_edges(edges: Iterable[Edge]) -> List[Edge]:
    seen: Set[str] = set()
    out: List[Edge] = []
    for edge in edges:
        if edge.id in seen:
            continue
        seen.add(edge.id)
        out.append(edge)
    return out


def _incidence(edges: Sequence[Edge]) -> Dict[VertexId, List[Edge]]:
    incident: Dict[VertexId, List[Edge]] = defaultdict(list)
    for edge in edges:
        incident[edge.start].append(edge)
        if not edge.is_loop:
            incident[edge.end].append(edge)
    return incident


def connected_edges(vertex: VertexId, edges: Iterable[Edge]) -> List[Edge]:
    return [edge for edge in edges if edge.is_incident(vertex)]


def degree(vertex: VertexId, edges: Iterable[Edge]) -> int:
    """Number of edge ends at ``vertex``; a loop contributes two."""
    total = 0
    for edge in edges:
        if edge.is_loop:
            if edge.start == vertex:
                total += 2
        elif edge.is_incident(vertex):
            total += 1
    return total


def edges_between(v1: VertexId, v2: VertexId, edges: Iterable[Edge]) -> List[Edge]:
    return [edge for edge in edges if edge.is_incident(v1) and edge.traverse(v1) == v2]


def are_adjacent(v1: VertexId, v2: VertexId, edges: Iterable[Edge]) -> bool:
    return bool(edges_between(v1, v2, edges))


def has_cycle(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    """Return True when the edges contain a cycle, loops and 2-cycles included.

    From every vertex a path is grown one unused edge at a time; reaching a
    vertex already on the path closes a cycle. Each stack frame owns its path
    and used-edge set, so retreating is just popping the frame. States are
    deduplicated on ``(tail, used edges)``.
    """

    edge_list = _unique_edges(edges)
    if not edge_list:
        return False

    incident = _incidence(edge_list)
    limit = get_engine_config().cycle_search_limit
    steps = 0

    starts = list(dict.fromkeys(list(vertices) + [v for e in edge_list for v in e.endpoints]))
    for start in starts:
        if start not in incident:
            continue
        seen: Set[Tuple[VertexId, FrozenSet[str]]] = set()
        stack: List[Tuple[Tuple[VertexId, ...], FrozenSet[str]]] = [((start,), frozenset())]
        while stack:
            path, used = stack.pop()
            tail = path[-1]
            state = (tail, used)
            if state in seen:
                continue
            seen.add(state)
            for edge in incident[tail]:
                if edge.id in used:
                    continue
                steps += 1
                if steps > limit:
                    raise SearchLimitExceeded(
                        f"cycle search exceeded {limit} steps on {len(edge_list)} edges"
                    )
                nxt = edge.traverse(tail)
                if nxt in path:
                    return True
                stack.append((path + (nxt,), used | {edge.id}))
    return False


def cycle_rank(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> int:
    """Circuit rank ``E - V + C``; positive exactly when a cycle exists."""

    edge_list = _unique_edges(edges)
    nodes = list(dict.fromkeys(list(vertices) + [v for e in edge_list for v in e.endpoints]))
    return len(edge_list) - len(nodes) + len(connected_components(nodes, edge_list))


def connected_components(
    vertices: Iterable[VertexId], edges: Iterable[Edge]
) -> List[List[VertexId]]:
    edge_list = _unique_edges(edges)
    incident = _incidence(edge_list)
    nodes = list(dict.fromkeys(list(vertices) + [v for e in edge_list for v in e.endpoints]))
    seen: Set[VertexId] = set()
    components: List[List[VertexId]] = []
    for start in nodes:
        if start in seen:
            continue
        seen.add(start)
        component = [start]
        frontier = [start]
        while frontier:
            current = frontier.pop()
            for edge in incident.get(current, []):
                other = edge.traverse(current)
                if other not in seen:
                    seen.add(other)
                    component.append(other)
                    frontier.append(other)
        components.append(component)
    return components


def is_connected(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    nodes = list(vertices)
    if not nodes:
        return True
    return len(connected_components(nodes, edges)) == 1


def is_hamiltonian_cycle(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    """True iff ``edges`` form one closed walk through every vertex exactly once."""

    nodes = list(dict.fromkeys(vertices))
    edge_list = _unique_edges(edges)
    if not nodes or len(edge_list) != len(nodes):
        return False
    node_set = set(nodes)
    if any(not (edge.start in node_set and edge.end in node_set) for edge in edge_list):
        return False
    if any(degree(vertex, edge_list) != 2 for vertex in nodes):
        return False

    incident = _incidence(edge_list)
    start = nodes[0]
    current = start
    used: Set[str] = set()
    visited = [start]
    while True:
        step = next((edge for edge in incident[current] if edge.id not in used), None)
        if step is None:
            return False
        used.add(step.id)
        current = step.traverse(current)
        if current == start:
            break
        visited.append(current)
    return len(used) == len(edge_list) and len(set(visited)) == len(nodes)


def odd_degree_vertices(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> List[VertexId]:
    edge_list = _unique_edges(edges)
    return [vertex for vertex in vertices if degree(vertex, edge_list) % 2 == 1]


def is_eulerian(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    """True when a closed walk can traverse every edge exactly once."""

    nodes = list(vertices)
    edge_list = _unique_edges(edges)
    if not edge_list:
        return False
    if odd_degree_vertices(nodes, edge_list):
        return False
    touched = [vertex for vertex in nodes if degree(vertex, edge_list) > 0]
    return len(connected_components(touched, edge_list)) == 1


def is_complete(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    nodes = list(vertices)
    edge_list = _unique_edges(edges)
    for i, v1 in enumerate(nodes):
        for v2 in nodes[i + 1 :]:
            if not are_adjacent(v1, v2, edge_list):
                return False
    return True


def all_trails_between(
    start: VertexId, end: VertexId, edges: Iterable[Edge]
) -> List[List[Edge]]:
    """Every trail (no repeated edge) from ``start`` that stops on reaching ``end``.

    With ``start == end`` this enumerates the closed trails through ``start``.
    The count grows exponentially; intended for the small graphs of the tool.
    """

    edge_list = _unique_edges(edges)
    incident = _incidence(edge_list)
    limit = get_engine_config().cycle_search_limit
    trails: List[List[Edge]] = []
    steps = 0

    stack: List[Tuple[VertexId, Tuple[Edge, ...]]] = [(start, ())]
    while stack:
        current, trail = stack.pop()
        if trail and current == end:
            trails.append(list(trail))
            continue
        if not trail and start == end and not incident.get(start):
            break
        used = {edge.id for edge in trail}
        for edge in reversed(incident.get(current, [])):
            if edge.id in used:
                continue
            steps += 1
            if steps > limit:
                raise SearchLimitExceeded(f"trail enumeration exceeded {limit} steps")
            stack.append((edge.traverse(current), trail + (edge,)))
    return trails


def walk_weight(edges: Sequence[Edge]) -> Optional[float]:
    if not edges:
        return None
    return float(sum(edge.weight for edge in edges))


def shortest_trails(start: VertexId, end: VertexId, edges: Iterable[Edge]) -> List[List[Edge]]:
    """Minimum-weight trails from ``start`` to ``end``.

    With non-negative weights a lightest trail never needs to pass a vertex
    twice, so the search only grows vertex-simple trails (the end vertex may
    close a trail back on ``start``) and drops any partial trail already
    heavier than the best complete one. Lighter edges are tried first so the
    bound tightens early. Negative weights fall back to full enumeration.
    """

    edge_list = _unique_edges(edges)
    if any(edge.weight < 0 for edge in edge_list):
        trails = all_trails_between(start, end, edge_list)
        if not trails:
            return []
        lightest = min(walk_weight(trail) for trail in trails)
        return [trail for trail in trails if walk_weight(trail) == lightest]

    config = get_engine_config()
    incident = _incidence(edge_list)
    for bucket in incident.values():
        bucket.sort(key=lambda edge: edge.weight)

    best = math.inf
    found: List[List[Edge]] = []
    steps = 0

    def same_weight(a: float, b: float) -> bool:
        return math.isclose(a, b, rel_tol=config.eps, abs_tol=config.eps)

    stack: List[Tuple[VertexId, Tuple[Edge, ...], float, FrozenSet[VertexId]]] = [
        (start, (), 0.0, frozenset([start]))
    ]
    while stack:
        current, trail, weight, on_path = stack.pop()
        if weight > best and not same_weight(weight, best):
            continue
        if trail and current == end:
            if same_weight(weight, best):
                found.append(list(trail))
            else:
                best = weight
                found = [list(trail)]
            continue
        used = {edge.id for edge in trail}
        # pushed heaviest first so the lightest edge is explored next
        for edge in reversed(incident.get(current, [])):
            if edge.id in used:
                continue
            nxt = edge.traverse(current)
            if nxt != end and nxt in on_path:
                continue
            total = weight + edge.weight
            if total > best and not same_weight(total, best):
                continue
            steps += 1
            if steps > config.cycle_search_limit:
                raise SearchLimitExceeded(
                    f"shortest trail search exceeded {config.cycle_search_limit} steps"
                )
            stack.append((nxt, trail + (edge,), total, on_path | {nxt}))
    return found


def smallest_distance(start: VertexId, end: VertexId, edges: Iterable[Edge]) -> Optional[float]:
    """Weight of a lightest trail, ``0`` from a vertex to itself, ``None`` if unreachable."""
    if start == end:
        return 0.0
    trails = shortest_trails(start, end, edges)
    if not trails:
        return None
    return walk_weight(trails[0])


def are_vertices_connected(v1: VertexId, v2: VertexId, edges: Iterable[Edge]) -> bool:
    """True when some walk joins ``v1`` to ``v2``; every vertex reaches itself."""
    if v1 == v2:
        return True
    for component in connected_components([v1], edges):
        if v1 in component:
            return v2 in component
    return False


def are_edges_adjacent(e1: Edge, e2: Edge) -> bool:
    return bool(set(e1.endpoints) & set(e2.endpoints))


def is_cycle(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    """True when the vertices and edges together form exactly one cycle."""

    nodes = list(dict.fromkeys(vertices))
    edge_list = _unique_edges(edges)
    if not nodes or not edge_list:
        return False
    if any(degree(vertex, edge_list) != 2 for vertex in nodes):
        return False
    return len(connected_components(nodes, edge_list)) == 1


def hamiltonian_cycle(
    vertices: Iterable[VertexId], edges: Iterable[Edge]
) -> Optional[List[Edge]]:
    """Edges of some Hamiltonian cycle of the graph, or ``None`` when there is none.

    A simple path is grown from the first vertex, one edge per distinct
    neighbour; once it holds every vertex, an unused edge back to the start
    closes it. A single vertex closes with a loop and two vertices with a
    parallel edge.
    """

    nodes = list(dict.fromkeys(vertices))
    if not nodes:
        return None
    edge_list = _unique_edges(edges)
    incident = _incidence(edge_list)
    limit = get_engine_config().cycle_search_limit
    start = nodes[0]
    steps = 0

    stack: List[Tuple[Tuple[VertexId, ...], Tuple[Edge, ...]]] = [((start,), ())]
    while stack:
        path, trail = stack.pop()
        tail = path[-1]
        if len(path) == len(nodes):
            used = {edge.id for edge in trail}
            closing = next(
                (
                    edge
                    for edge in incident.get(tail, [])
                    if edge.id not in used and edge.traverse(tail) == start
                ),
                None,
            )
            if closing is not None:
                return list(trail) + [closing]
            continue
        seen_neighbours: Set[VertexId] = set()
        for edge in reversed(incident.get(tail, [])):
            nxt = edge.traverse(tail)
            if nxt in path or nxt in seen_neighbours:
                continue
            seen_neighbours.add(nxt)
            steps += 1
            if steps > limit:
                raise SearchLimitExceeded(
                    f"Hamiltonian cycle search exceeded {limit} steps on {len(nodes)} vertices"
                )
            stack.append((path + (nxt,), trail + (edge,)))
    return None


def has_hamiltonian_cycle(vertices: Iterable[VertexId], edges: Iterable[Edge]) -> bool:
    return hamiltonian_cycle(vertices, edges) is not None


__all__ = [
    "all_trails_between",
    "are_adjacent",
    "are_edges_adjacent",
    "are_vertices_connected",
    "connected_components",
    "connected_edges",
    "cycle_rank",
    "degree",
    "edges_between",
    "hamiltonian_cycle",
    "has_cycle",
    "has_hamiltonian_cycle",
    "is_complete",
    "is_connected",
    "is_cycle",
    "is_eulerian",
    "is_hamiltonian_cycle",
    "odd_degree_vertices",
    "shortest_trails",
    "smallest_distance",
    "walk_weight",
]

apply_debug_logging(globals(), logger=logger)
