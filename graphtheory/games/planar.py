"""Planarity puzzle: drag vertices until no two edges cross."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Tuple

from ..graph import Graph
from ..model import EdgeId, Offset, VertexId

logger = logging.getLogger(__name__)


class PlanarStatus(str, Enum):
    UNSOLVED = "unsolved"
    SOLVED = "solved"


class PlanarPuzzle:
    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._original = graph.copy()
        self.status = PlanarStatus.UNSOLVED

    def crossing_pairs(self) -> List[Tuple[EdgeId, EdgeId]]:
        return self.graph.crossing_pairs()

    def check(self) -> PlanarStatus:
        pairs = self.crossing_pairs()
        self.status = PlanarStatus.UNSOLVED if pairs else PlanarStatus.SOLVED
        if pairs:
            logger.debug("%d crossing pair(s) remain", len(pairs))
        else:
            logger.info("Planar layout found")
        return self.status

    def drag_vertex(self, vertex_id: VertexId, translation: Offset) -> None:
        self.graph.drag_vertex(vertex_id, translation)

    def end_vertex_drag(self, vertex_id: VertexId) -> PlanarStatus:
        """Commit a drag and re-check the layout, as releasing a vertex does."""
        self.graph.end_vertex_drag(vertex_id)
        return self.check()

    def move_vertex(self, vertex_id: VertexId, position) -> PlanarStatus:
        self.graph.move_vertex(vertex_id, position)
        return self.check()

    def reset(self) -> None:
        self.graph.restore(self._original)
        self.status = PlanarStatus.UNSOLVED
        logger.info("Puzzle reset to its starting layout")


__all__ = ["PlanarPuzzle", "PlanarStatus"]
