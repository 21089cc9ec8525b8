from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

Point2 = Tuple[float, float]


def _vec2(a: Point2, b: Point2) -> Point2:
    return b[0] - a[0], b[1] - a[1]


def _cross2(a: Point2, b: Point2) -> float:
    return a[0] * b[1] - a[1] * b[0]


def _dot2(a: Point2, b: Point2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def _dist2(a: Point2, b: Point2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def _lerp2(a: Point2, b: Point2, t: float) -> Point2:
    return a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1])


def _orient(a: Point2, b: Point2, c: Point2) -> float:
    return _cross2(_vec2(a, b), _vec2(a, c))


def _within_box(a: Point2, b: Point2, p: Point2, eps: float) -> bool:
    return (
        min(a[0], b[0]) - eps <= p[0] <= max(a[0], b[0]) + eps
        and min(a[1], b[1]) - eps <= p[1] <= max(a[1], b[1]) + eps
    )


def _boxes_disjoint(a: Point2, b: Point2, c: Point2, d: Point2, eps: float) -> bool:
    return (
        max(a[0], b[0]) + eps < min(c[0], d[0])
        or max(c[0], d[0]) + eps < min(a[0], b[0])
        or max(a[1], b[1]) + eps < min(c[1], d[1])
        or max(c[1], d[1]) + eps < min(a[1], b[1])
    )


def _collinear_overlap(a: Point2, b: Point2, c: Point2, d: Point2, eps: float) -> List[Point2]:
    """Shared part of two collinear segments as its end points and midpoint."""
    direction = _vec2(a, b)
    length_sq = _dot2(direction, direction)
    if length_sq <= eps * eps:
        direction = _vec2(c, d)
        length_sq = _dot2(direction, direction)
        if length_sq <= eps * eps:
            return [a] if _dist2(a, c) <= eps else []
        a, b, c, d = c, d, a, b

    def param(p: Point2) -> float:
        return _dot2(_vec2(a, p), direction) / length_sq

    lo = max(0.0, min(param(c), param(d)))
    hi = min(1.0, max(param(c), param(d)))
    tol = eps / math.sqrt(length_sq)
    if hi < lo - tol:
        return []
    if hi - lo <= tol:
        return [_lerp2(a, b, lo)]
    return [_lerp2(a, b, lo), _lerp2(a, b, 0.5 * (lo + hi)), _lerp2(a, b, hi)]


def segment_intersections(
    a: Point2, b: Point2, c: Point2, d: Point2, eps: float = 1e-9
) -> List[Point2]:
    """Points where segment ``ab`` meets segment ``cd``.

    A proper crossing or a touch yields one point; a collinear overlap yields
    the two ends of the overlap plus its midpoint, so that an overlap of
    positive length always reports at least one point away from its ends.
    """

    if _boxes_disjoint(a, b, c, d, eps):
        return []

    o1 = _orient(a, b, c)
    o2 = _orient(a, b, d)
    o3 = _orient(c, d, a)
    o4 = _orient(c, d, b)

    scale = max(_dist2(a, b), _dist2(c, d), 1.0)
    area_eps = eps * scale

    if all(abs(o) <= area_eps for o in (o1, o2, o3, o4)):
        return _collinear_overlap(a, b, c, d, eps)

    if (o1 > area_eps and o2 < -area_eps or o1 < -area_eps and o2 > area_eps) and (
        o3 > area_eps and o4 < -area_eps or o3 < -area_eps and o4 > area_eps
    ):
        denom = _cross2(_vec2(a, b), _vec2(c, d))
        t = _cross2(_vec2(a, c), _vec2(c, d)) / denom
        return [_lerp2(a, b, t)]

    # touching configurations: an endpoint of one segment lies on the other
    touches: List[Point2] = []
    for orient, point, seg in ((o1, c, (a, b)), (o2, d, (a, b)), (o3, a, (c, d)), (o4, b, (c, d))):
        if abs(orient) <= area_eps and _within_box(seg[0], seg[1], point, eps):
            touches.append(point)
    return touches[:1]


def bernstein_points(control: np.ndarray, ts: np.ndarray) -> np.ndarray:
    """Evaluate the Bézier curve with ``control`` polygon at parameters ``ts``."""

    degree = control.shape[0] - 1
    ts = np.atleast_1d(np.asarray(ts, dtype=float))
    one_minus = 1.0 - ts
    out = np.zeros((ts.shape[0], 2), dtype=float)
    for i in range(degree + 1):
        coeff = math.comb(degree, i) * one_minus ** (degree - i) * ts**i
        out += coeff[:, None] * control[i][None, :]
    return out


def bernstein_derivative(control: np.ndarray, t: float) -> Point2:
    degree = control.shape[0] - 1
    if degree < 1:
        return (0.0, 0.0)
    hodograph = degree * np.diff(control, axis=0)
    value = bernstein_points(hodograph, np.array([t]))[0]
    return float(value[0]), float(value[1])


def slope(direction: Point2, eps: float = 0.0) -> Optional[float]:
    if abs(direction[0]) <= eps:
        return None
    return direction[1] / direction[0]


def bounding_extent(points: Sequence[Point2]) -> float:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return max(max(xs) - min(xs), max(ys) - min(ys))


__all__ = [
    "Point2",
    "_cross2",
    "_dist2",
    "_dot2",
    "_lerp2",
    "_orient",
    "_vec2",
    "bernstein_derivative",
    "bernstein_points",
    "bounding_extent",
    "segment_intersections",
    "slope",
]
