"""Parametric curve model for graph edges."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from scipy.optimize import minimize_scalar

from ..config import get_engine_config
from ..model import Edge, EdgeId, Point, TextDirection, VertexId
from .math_utils import (
    _dist2,
    _vec2,
    bernstein_derivative,
    bernstein_points,
    bounding_extent,
    slope,
)

logger = logging.getLogger(__name__)

CurveKind = str  # "line", "quadratic" or "loop"


@dataclass(frozen=True)
class EdgeCurve:
    """Snapshot of an edge's geometry with live offsets already applied."""

    edge_id: EdgeId
    start_vertex: VertexId
    end_vertex: VertexId
    kind: CurveKind
    control: Tuple[Point, ...]
    # vertex positions the curve hangs from; loops start and end off-centre
    start_anchor: Point
    end_anchor: Point

    @property
    def start(self) -> Point:
        return self.control[0]

    @property
    def end(self) -> Point:
        return self.control[-1]

    @property
    def is_loop(self) -> bool:
        return self.kind == "loop"

    def _control_array(self) -> np.ndarray:
        return np.asarray(self.control, dtype=float)

    # -------- evaluation --------
    def point_on_curve(self, t: float) -> Point:
        t = _clamp_parameter(t)
        if self.kind == "line":
            return self._point_on_line(t)
        x, y = bernstein_points(self._control_array(), np.array([t]))[0]
        return (float(x), float(y))

    point_on_edge = point_on_curve

    def _point_on_line(self, t: float) -> Point:
        (x0, y0), (x1, y1) = self.start, self.end
        # steep chords would overflow the slope, so walk them coordinate-wise
        if abs(x1 - x0) <= get_engine_config().eps * abs(y1 - y0):
            return (x0 + t * (x1 - x0), y0 + t * (y1 - y0))
        gradient = self.edge_gradient()
        x = x0 + t * (x1 - x0)
        intercept = y0 - gradient * x0
        return (x, gradient * x + intercept)

    def midpoint(self) -> Point:
        return self.point_on_curve(0.5)

    # -------- gradients --------
    def edge_gradient(self) -> Optional[float]:
        """Slope of the chord from start to end, ``None`` when it is vertical."""
        if self.start[0] == self.end[0]:
            return None
        return (self.end[1] - self.start[1]) / (self.end[0] - self.start[0])

    def perpendicular_gradient(self) -> Optional[float]:
        """Negative reciprocal of the chord slope, ``None`` when the chord is horizontal."""
        if self.start[1] == self.end[1]:
            return None
        return -(self.end[0] - self.start[0]) / (self.end[1] - self.start[1])

    def tangent(self, t: float) -> Point:
        """Derivative direction at ``t``; the chord stands in where it vanishes."""
        eps = get_engine_config().eps
        t = _clamp_parameter(t)
        if self.kind != "line":
            dx, dy = bernstein_derivative(self._control_array(), t)
            if math.hypot(dx, dy) > eps:
                return (dx, dy)
        return _vec2(self.start, self.end)

    def tangent_slope(self, t: Optional[float] = None) -> Optional[float]:
        if t is None:
            return self.edge_gradient()
        return slope(self.tangent(t))

    # -------- label placement --------
    def perpendicular_point(
        self,
        anchor: Point,
        distance: float,
        direction: TextDirection = TextDirection.POSITIVE,
        t: Optional[float] = None,
    ) -> Point:
        """Point at ``|distance|`` from ``anchor`` across the curve.

        The perpendicular is taken against the tangent at ``t`` or, when ``t``
        is omitted, against the chord. ``direction`` picks the root of the
        line/circle quadratic; a negative distance flips it.
        """

        px, py = float(anchor[0]), float(anchor[1])
        direction = TextDirection(direction)
        if distance < 0:
            distance = -distance
            direction = direction.flipped()
        sign = 1.0 if direction is TextDirection.POSITIVE else -1.0

        if t is None:
            dx, dy = _vec2(self.start, self.end)
        else:
            dx, dy = self.tangent(t)

        eps = get_engine_config().eps
        # (near) vertical tangent, or no tangent at all: the perpendicular is horizontal
        if abs(dx) <= eps * abs(dy):
            return (px + sign * distance, py)
        # (near) horizontal tangent: the perpendicular is vertical, on the side the
        # quadratic root tends to as dy shrinks; an exact zero keeps the + side
        if abs(dy) <= eps * abs(dx):
            flip = -1.0 if dy != 0 and (dx > 0) == (dy > 0) else 1.0
            return (px, py + flip * sign * distance)

        m = -dx / dy
        # in a frame centred on the anchor the line is u -> (u, m u) and the
        # circle u^2 + (m u)^2 = d^2, i.e. qa u^2 + qb u + qc = 0 with qb = 0
        qa = 1.0 + m * m
        qb = 0.0
        qc = -distance * distance
        disc = max(qb * qb - 4.0 * qa * qc, 0.0)
        u = (-qb + sign * math.sqrt(disc)) / (2.0 * qa)
        return (px + u, py + m * u)

    def label_position(self, edge: Edge) -> Point:
        t = _clamp_parameter(edge.text_edge_position)
        anchor = self.point_on_curve(t)
        return self.perpendicular_point(anchor, edge.text_distance, edge.text_direction, t=t)

    def closest_parameter(self, point: Point) -> Tuple[float, float]:
        """Return ``(t, distance)`` of the curve point nearest to ``point``."""

        config = get_engine_config()
        target = (float(point[0]), float(point[1]))
        if self.kind == "line":
            dx, dy = _vec2(self.start, self.end)
            length_sq = dx * dx + dy * dy
            if length_sq <= config.eps * config.eps:
                return 0.0, _dist2(self.start, target)
            t = ((target[0] - self.start[0]) * dx + (target[1] - self.start[1]) * dy) / length_sq
            t = _clamp_parameter(t)
            return t, _dist2(self.point_on_curve(t), target)

        # the distance along a Bézier curve is not unimodal in general: bracket on a coarse grid first
        ts = np.linspace(0.0, 1.0, 33)
        samples = bernstein_points(self._control_array(), ts)
        d2 = np.sum((samples - np.asarray(target)) ** 2, axis=1)
        best = int(np.argmin(d2))
        lo = ts[max(best - 1, 0)]
        hi = ts[min(best + 1, len(ts) - 1)]
        result = minimize_scalar(
            lambda s: _dist2(self.point_on_curve(s), target),
            bounds=(lo, hi),
            method="bounded",
            options={"xatol": config.closest_parameter_xatol},
        )
        t = float(result.x)
        if not result.success:  # pragma: no cover - bounded search always converges here
            logger.warning("closest_parameter did not converge for edge %s", self.edge_id)
            t = float(ts[best])
        return t, _dist2(self.point_on_curve(t), target)

    # -------- sampling --------
    def polyline(self) -> List[Point]:
        """Adaptive polyline approximation; flatter pieces get fewer samples."""

        if self.kind == "line":
            return [self.start, self.end]

        config = get_engine_config()
        extent = bounding_extent(self.control)
        tolerance = max(config.flatness_tolerance * extent, config.eps)
        control = self._control_array()

        def evaluate(t: float) -> Point:
            x, y = bernstein_points(control, np.array([t]))[0]
            return (float(x), float(y))

        points: List[Point] = [self.start]

        def refine(t0: float, p0: Point, t1: float, p1: Point, depth: int) -> None:
            tm = 0.5 * (t0 + t1)
            pm = evaluate(tm)
            chord_mid = (0.5 * (p0[0] + p1[0]), 0.5 * (p0[1] + p1[1]))
            # depth < 2 forces a few splits so a symmetric loop is never a single chord
            if depth < config.max_subdivision_depth and (
                depth < 2 or _dist2(pm, chord_mid) > tolerance
            ):
                refine(t0, p0, tm, pm, depth + 1)
                refine(tm, pm, t1, p1, depth + 1)
            else:
                points.append(p1)

        refine(0.0, self.start, 1.0, self.end, 0)
        return points


def _clamp_parameter(t: float) -> float:
    if not isinstance(t, (int, float)) or isinstance(t, bool) or math.isnan(t):
        raise ValueError(f"curve parameter must be a number, got {t!r}")
    return min(max(float(t), 0.0), 1.0)


def loop_control_polygon(center: Point, diameter: float) -> Tuple[Point, ...]:
    """Fixed teardrop below the vertex: ends just inside the vertex disc."""
    x, y = center
    return (
        (x - diameter / 4.0, y),
        (x - 2.0 * diameter, y + 2.0 * diameter),
        (x + 2.0 * diameter, y + 2.0 * diameter),
        (x + diameter / 4.0, y),
    )


def build_curve(
    edge: Edge,
    start: Point,
    end: Point,
    *,
    vertex_diameter: float,
) -> EdgeCurve:
    """Build the curve of ``edge`` from already offset endpoint positions."""

    if edge.is_loop:
        control = loop_control_polygon(start, vertex_diameter)
        kind = "loop"
    elif edge.is_curved:
        control = (start, edge.current_control_point, end)  # type: ignore[assignment]
        kind = "quadratic"
    else:
        control = (start, end)
        kind = "line"
    return EdgeCurve(
        edge_id=edge.id,
        start_vertex=edge.start,
        end_vertex=edge.end,
        kind=kind,
        control=tuple((float(p[0]), float(p[1])) for p in control),
        start_anchor=(float(start[0]), float(start[1])),
        end_anchor=(float(end[0]), float(end[1])),
    )


__all__ = ["CurveKind", "EdgeCurve", "build_curve", "loop_control_polygon"]
