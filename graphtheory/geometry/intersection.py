"""Curve/curve intersection used by the planarity puzzle."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import get_engine_config
from ..logging_utils import apply_debug_logging
from .curve import EdgeCurve
from .math_utils import Point2, _dist2, bounding_extent, segment_intersections

logger = logging.getLogger(__name__)


def _shared_vertex_points(c1: EdgeCurve, c2: EdgeCurve) -> List[Point2]:
    """Positions of the vertices both curves are attached to."""

    ends1: Dict[str, Point2] = {c1.start_vertex: c1.start_anchor, c1.end_vertex: c1.end_anchor}
    ends2: Dict[str, Point2] = {c2.start_vertex: c2.start_anchor, c2.end_vertex: c2.end_anchor}
    shared = []
    for vertex_id, point in ends1.items():
        if vertex_id in ends2:
            shared.append(point)
            if ends2[vertex_id] != point:
                shared.append(ends2[vertex_id])
    return shared


def _polyline_boxes_disjoint(p: Sequence[Point2], q: Sequence[Point2], eps: float) -> bool:
    return (
        max(x for x, _ in p) + eps < min(x for x, _ in q)
        or max(x for x, _ in q) + eps < min(x for x, _ in p)
        or max(y for _, y in p) + eps < min(y for _, y in q)
        or max(y for _, y in q) + eps < min(y for _, y in p)
    )


def crossing_points(
    c1: EdgeCurve, c2: EdgeCurve, *, tolerance: Optional[float] = None
) -> List[Point2]:
    """Points where the two curves meet, excluding their shared vertices.

    ``tolerance`` is the radius around a shared vertex inside which contacts
    are ignored; it defaults to ``eps`` scaled by the size of the curves.
    """

    if c1.edge_id == c2.edge_id:
        raise ValueError(f"cannot intersect edge {c1.edge_id} with itself")

    config = get_engine_config()
    poly1 = c1.polyline()
    poly2 = c2.polyline()
    scale = max(bounding_extent(poly1 + poly2), 1.0)
    eps = config.eps * scale
    if _polyline_boxes_disjoint(poly1, poly2, eps):
        return []

    radius = eps if tolerance is None else max(tolerance, eps)
    shared = _shared_vertex_points(c1, c2)

    found: List[Point2] = []
    for a, b in zip(poly1, poly1[1:]):
        for c, d in zip(poly2, poly2[1:]):
            for point in segment_intersections(a, b, c, d, eps):
                if any(_dist2(point, vertex) <= radius for vertex in shared):
                    continue
                found.append(point)
    return found


def intersects(c1: EdgeCurve, c2: EdgeCurve, *, tolerance: Optional[float] = None) -> bool:
    """True when the curves cross anywhere other than at a shared vertex."""
    return bool(crossing_points(c1, c2, tolerance=tolerance))


def crossing_pairs(
    curves: Sequence[EdgeCurve], *, loop_tolerance: Optional[float] = None
) -> List[Tuple[str, str]]:
    """All unordered pairs of curves that intersect, in input order."""

    pairs: List[Tuple[str, str]] = []
    for i, first in enumerate(curves):
        for second in curves[i + 1 :]:
            tolerance = loop_tolerance if (first.is_loop or second.is_loop) else None
            if intersects(first, second, tolerance=tolerance):
                pairs.append((first.edge_id, second.edge_id))
    if pairs:
        logger.debug("Found %d crossing pair(s) among %d curves", len(pairs), len(curves))
    return pairs


__all__ = ["crossing_pairs", "crossing_points", "intersects"]

apply_debug_logging(globals(), logger=logger)
