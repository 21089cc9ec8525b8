"""Hamiltonian-path game: build a closed tour one edge at a time."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Set

from ..graph import Graph
from ..model import EdgeId, VertexId

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    CHOOSING_START_VERTEX = "choosing_start_vertex"
    SELECTING_EDGES = "selecting_edges"
    ERROR = "error"
    COMPLETE = "complete"


class IcosianGame:
    """Session state for one attempt at a Hamiltonian tour of ``graph``.

    The player first picks a start vertex, then taps edges incident to the
    current tail. An edge that would close a cycle before every vertex is
    covered puts the game in ``ERROR`` until the same edge is tapped again;
    re-tapping the last edge of the trail walks back one step. Taps that do
    not apply in the current state are ignored.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self.status = GameStatus.CHOOSING_START_VERTEX
        self.tail: Optional[VertexId] = None
        self.trail: List[EdgeId] = []
        self.error_edge: Optional[EdgeId] = None
        self.visited: Set[VertexId] = set()

    @property
    def accented(self) -> Set[VertexId]:
        return set(self.visited)

    @property
    def start(self) -> Optional[VertexId]:
        if not self.trail:
            return self.tail
        first = self.graph.edge(self.trail[0])
        if len(self.trail) == 1:
            return first.traverse(self.tail) if self.tail is not None else None
        second = self.graph.edge(self.trail[1])
        return first.start if first.end in second.endpoints else first.end

    def reset(self) -> None:
        self.status = GameStatus.CHOOSING_START_VERTEX
        self.tail = None
        self.trail = []
        self.error_edge = None
        self.visited = set()
        logger.info("Game reset")

    def _ignore(self, what: str, ident: str) -> None:
        logger.debug("Ignored tap on %s %s in state %s", what, ident, self.status.value)

    def tap_vertex(self, vertex_id: VertexId) -> None:
        self.graph.vertex(vertex_id)

        if self.status is GameStatus.CHOOSING_START_VERTEX and not self.trail:
            self.tail = vertex_id
            self.visited = {vertex_id}
            self.status = GameStatus.SELECTING_EDGES
            logger.info("Tour starts at %s", vertex_id)
            return

        if self.status is not GameStatus.SELECTING_EDGES or self.tail is None:
            self._ignore("vertex", vertex_id)
            return

        if not self.trail and vertex_id == self.tail:
            self.reset()
            return

        if vertex_id == self.tail:
            self._ignore("vertex", vertex_id)
            return

        # a neighbour of the tail stands for the edge joining them; prefer the
        # last trail edge so the previous vertex walks back
        if self.trail:
            last = self.graph.edge(self.trail[-1])
            if last.traverse(self.tail) == vertex_id:
                self.tap_edge(last.id)
                return
        joining = self.graph.edges_between(self.tail, vertex_id)
        if not joining:
            self._ignore("vertex", vertex_id)
            return
        self.tap_edge(joining[0].id)

    def tap_edge(self, edge_id: EdgeId) -> None:
        edge = self.graph.edge(edge_id)

        if self.status is GameStatus.ERROR:
            if edge_id == self.error_edge:
                self.error_edge = None
                self.status = GameStatus.SELECTING_EDGES
                logger.info("Error on %s acknowledged", edge_id)
            else:
                self._ignore("edge", edge_id)
            return

        if self.status is not GameStatus.SELECTING_EDGES or self.tail is None:
            self._ignore("edge", edge_id)
            return
        if not edge.is_incident(self.tail):
            self._ignore("edge", edge_id)
            return

        is_new = edge_id not in self.trail
        candidate = self.trail + [edge_id] if is_new else list(self.trail)
        far = edge.traverse(self.tail)

        if self.graph.is_hamiltonian_cycle(candidate):
            self.trail = candidate
            self.tail = far
            self.visited = set(self.graph.vertex_ids())
            self.status = GameStatus.COMPLETE
            logger.info("Hamiltonian tour completed with %d edges", len(candidate))
        elif self.graph.has_cycle(candidate):
            self.error_edge = edge_id
            self.status = GameStatus.ERROR
            logger.info("Edge %s closes a cycle before every vertex is visited", edge_id)
        elif is_new:
            self.trail = candidate
            self.tail = far
            self.visited.add(far)
            logger.debug("Trail extended by %s to %s", edge_id, far)
        elif edge_id == self.trail[-1]:
            left = self.tail
            self.trail = self.trail[:-1]
            self.tail = far
            self.visited.discard(left)
            logger.debug("Backtracked over %s to %s", edge_id, far)
        else:
            self._ignore("edge", edge_id)


__all__ = ["GameStatus", "IcosianGame"]
