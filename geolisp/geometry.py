"""Geometry engine: pure constructions over :mod:`geolisp.values`.

All arithmetic is float64 via numpy.  Degeneracy tests (collinear vertices,
parallel lines, zero-length directions) share one epsilon taken from
:class:`geolisp.config.GeometryConfig` and are applied relative to the size of
the inputs, so scaling a construction does not change which inputs are
rejected.

The only nondeterministic construction is :func:`triangle_on_circle`; it draws
from the ``numpy.random.Generator`` handed to it.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np

from .config import GeometryConfig, get_geometry_config
from .errors import GeometryGenerationError, InvalidGeometryError, NoIntersectionError
from .logging_utils import apply_debug_logging
from .values import Angle, Circle, Lineseg, Point, Triangle, check_triangle

logger = logging.getLogger(__name__)


def _config(config: Optional[GeometryConfig]) -> GeometryConfig:
    return config if config is not None else get_geometry_config()


def _cross2(u: np.ndarray, v: np.ndarray) -> float:
    return float(u[0] * v[1] - u[1] * v[0])


def _norm(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def distance(p: Point, q: Point) -> float:
    return _norm(p.as_array() - q.as_array())


def _direction(seg: Lineseg, eps: float) -> np.ndarray:
    d = seg.direction
    if _norm(d) <= eps:
        raise InvalidGeometryError(
            f'line segment from ({seg.start.x:g}, {seg.start.y:g}) has zero length; a direction is required'
        )
    return d


# ---------------------------------------------------------------------------
# Basic constructors


def make_point(x: float, y: float) -> Point:
    return Point(x, y)


def midpoint(p: Point, q: Point) -> Point:
    return Point((p.x + q.x) / 2, (p.y + q.y) / 2)


def make_circle(center: Point, radius: float) -> Circle:
    return Circle(center, radius)


def default_circle(config: Optional[GeometryConfig] = None) -> Circle:
    return Circle(Point(0, 0), _config(config).default_circle_radius)


def make_angle(start: Point, vertex: Point, end: Point) -> Angle:
    return Angle(start, vertex, end)


def inscribed_angle(circle: Circle, degrees: float, config: Optional[GeometryConfig] = None) -> Angle:
    """Inscribed angle of ``degrees`` with its vertex at the bottom of ``circle``.

    The intercepted arc is centred on the top of the circle: the ray endpoints
    sit at polar angles ``90 + degrees`` (start) and ``90 - degrees`` (end), the
    vertex at 270.  The placement only depends on the circle.
    """

    cfg = _config(config)
    if circle.radius <= cfg.eps:
        raise InvalidGeometryError('cannot inscribe an angle in a circle of zero radius')
    if not 0 < degrees < 180:
        raise InvalidGeometryError(f'inscribed angle must be strictly between 0 and 180 degrees, got {degrees}')
    half_turn = math.pi / 2
    theta = math.radians(degrees)
    start = circle.point_at(half_turn + theta)
    end = circle.point_at(half_turn - theta)
    vertex = circle.point_at(3 * half_turn)
    return Angle(start, vertex, end, circle=circle)


# ---------------------------------------------------------------------------
# Triangles


def make_triangle(a: Point, b: Point, c: Point, config: Optional[GeometryConfig] = None) -> Triangle:
    check_triangle(a, b, c, _config(config).eps)
    return Triangle(a, b, c)


def triangle_from_angle(angle: Angle, config: Optional[GeometryConfig] = None) -> Triangle:
    """Close the two rays of ``angle`` with the side start-end."""
    return make_triangle(angle.start, angle.vertex, angle.end, config)


def triangle_on_circle(
    circle: Circle,
    rng: Optional[np.random.Generator] = None,
    config: Optional[GeometryConfig] = None,
) -> Triangle:
    """Random triangle inscribed in ``circle`` whose sides are all longer than the radius."""

    cfg = _config(config)
    if circle.radius <= cfg.eps:
        raise GeometryGenerationError('cannot sample a triangle on a circle of zero radius')
    rng = rng if rng is not None else np.random.default_rng()
    threshold = circle.radius * (1 + cfg.eps)
    for attempt in range(1, cfg.max_sampling_attempts + 1):
        thetas = rng.uniform(0.0, 2 * math.pi, size=3)
        pts = [circle.point_at(float(theta)) for theta in thetas]
        chords = (distance(pts[0], pts[1]), distance(pts[1], pts[2]), distance(pts[2], pts[0]))
        if min(chords) > threshold:
            logger.debug("triangle-on-circle: accepted sample after %d attempt(s)", attempt)
            return make_triangle(*pts, cfg)
    raise GeometryGenerationError(
        f'no well-spaced triangle found on circle of radius {circle.radius:g} '
        f'after {cfg.max_sampling_attempts} attempts'
    )


def side_lengths(tri: Triangle) -> Tuple[float, float, float]:
    """Lengths of the sides opposite a, b and c."""
    return (distance(tri.b, tri.c), distance(tri.c, tri.a), distance(tri.a, tri.b))


def signed_area(tri: Triangle) -> float:
    # shoelace formula
    a, b, c = tri.vertices
    return 0.5 * ((a.x * b.y - b.x * a.y) + (b.x * c.y - c.x * b.y) + (c.x * a.y - a.x * c.y))


def area(tri: Triangle) -> float:
    return abs(signed_area(tri))


def centroid(tri: Triangle) -> Point:
    coords = np.array([p.as_tuple() for p in tri.vertices], dtype=float)
    return Point.from_array(coords.mean(axis=0))


def circumcenter(tri: Triangle) -> Point:
    """Intersection of the perpendicular bisectors.

    Solves ``2 (B - A) . O = |B|^2 - |A|^2`` and ``2 (C - A) . O = |C|^2 - |A|^2``.
    """

    a, b, c = (p.as_array() for p in tri.vertices)
    lhs = 2.0 * np.array([b - a, c - a])
    rhs = np.array([b @ b - a @ a, c @ c - a @ a])
    return Point.from_array(_solve2(lhs, rhs, 'circumcenter'))


def orthocenter(tri: Triangle) -> Point:
    """Intersection of the altitudes from A and B.

    Solves ``(H - A) . (C - B) = 0`` and ``(H - B) . (C - A) = 0``.
    """

    a, b, c = (p.as_array() for p in tri.vertices)
    lhs = np.array([c - b, c - a])
    rhs = np.array([a @ (c - b), b @ (c - a)])
    return Point.from_array(_solve2(lhs, rhs, 'orthocenter'))


def _solve2(lhs: np.ndarray, rhs: np.ndarray, what: str) -> np.ndarray:
    try:
        return np.linalg.solve(lhs, rhs)
    except np.linalg.LinAlgError as exc:
        raise InvalidGeometryError(f'{what} is undefined for a degenerate triangle') from exc


def incenter(tri: Triangle) -> Point:
    la, lb, lc = side_lengths(tri)
    weights = np.array([la, lb, lc])
    coords = np.array([p.as_tuple() for p in tri.vertices], dtype=float)
    return Point.from_array(weights @ coords / weights.sum())


def inradius(tri: Triangle) -> float:
    semiperimeter = sum(side_lengths(tri)) / 2
    return area(tri) / semiperimeter


# ---------------------------------------------------------------------------
# Intersections


def intersect_line_circle(
    seg: Lineseg,
    circle: Circle,
    index: int,
    config: Optional[GeometryConfig] = None,
) -> Point:
    """``index``-th intersection of the line through ``seg`` with ``circle``.

    The line is parametrised as ``start + t * (end - start)``; the two
    intersections are ordered by ascending ``t``.  A tangent line yields the
    touching point for both indices.
    """

    cfg = _config(config)
    if index not in (0, 1):
        raise NoIntersectionError(f'intersection index must be 0 or 1, got {index}')
    d = _direction(seg, cfg.eps)
    f = seg.start.as_array() - circle.center.as_array()
    qa = float(d @ d)
    qb = 2.0 * float(d @ f)
    qc = float(f @ f) - circle.radius ** 2
    disc = qb * qb - 4 * qa * qc
    # discriminant scales like |d|^2 r^2
    tol = cfg.eps * qa * max(circle.radius ** 2, 1.0)
    if disc < -tol:
        raise NoIntersectionError(
            f'line through ({seg.start.x:g}, {seg.start.y:g}) and ({seg.end.x:g}, {seg.end.y:g}) '
            f'misses circle centred at ({circle.center.x:g}, {circle.center.y:g}) with radius {circle.radius:g}'
        )
    root = math.sqrt(max(disc, 0.0))
    ts = sorted(((-qb - root) / (2 * qa), (-qb + root) / (2 * qa)))
    return Point.from_array(seg.start.as_array() + ts[index] * d)


def intersect_lines(first: Lineseg, second: Lineseg, config: Optional[GeometryConfig] = None) -> Point:
    """Intersection of the infinite lines through two segments."""

    cfg = _config(config)
    d1 = _direction(first, cfg.eps)
    d2 = _direction(second, cfg.eps)
    denom = _cross2(d1, d2)
    if abs(denom) <= cfg.eps * _norm(d1) * _norm(d2):
        raise NoIntersectionError('line segments are parallel; their lines have no unique intersection')
    offset = second.start.as_array() - first.start.as_array()
    t = _cross2(offset, d2) / denom
    return Point.from_array(first.start.as_array() + t * d1)


apply_debug_logging(globals(), logger=logger)
