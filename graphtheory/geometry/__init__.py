"""Curve geometry engine: edge curves, label placement and intersection."""

from .curve import CurveKind, EdgeCurve, build_curve, loop_control_polygon
from .intersection import crossing_pairs, crossing_points, intersects
from .math_utils import segment_intersections

__all__ = [
    "CurveKind",
    "EdgeCurve",
    "build_curve",
    "crossing_pairs",
    "crossing_points",
    "intersects",
    "loop_control_polygon",
    "segment_intersections",
]
