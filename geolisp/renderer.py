"""Mapping from evaluated values to drawable primitives.

Primitives keep geometric coordinates; the canvas transform is applied by the
serializers (:mod:`geolisp.svg`, :mod:`geolisp.tikz_codegen`).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .printer import format_number
from .values import Angle, Circle, Lineseg, Point, Triangle, Value, is_number

logger = logging.getLogger(__name__)

Vec = Tuple[float, float]

DEFAULT_LABEL_DIRECTION: Vec = (math.sqrt(0.5), math.sqrt(0.5))


@dataclass(frozen=True)
class LinePrimitive:
    start: Point
    end: Point


@dataclass(frozen=True)
class CirclePrimitive:
    center: Point
    radius: float
    filled: bool = False


@dataclass(frozen=True)
class TextPrimitive:
    """Label anchored at ``anchor``, pushed along the unit vector ``direction``."""

    anchor: Point
    text: str
    direction: Vec = DEFAULT_LABEL_DIRECTION


Primitive = Union[LinePrimitive, CirclePrimitive, TextPrimitive]


@dataclass
class RenderOptions:
    label: bool = False
    point_markers: bool = False
    scale: float = 20.0
    margin: float = 20.0
    stroke_width: float = 1.5
    marker_radius: float = 2.5
    font_size: float = 12.0
    label_offset: float = 10.0


@dataclass
class Diagram:
    primitives: List[Primitive] = field(default_factory=list)

    @property
    def lines(self) -> List[LinePrimitive]:
        return [p for p in self.primitives if isinstance(p, LinePrimitive)]

    @property
    def circles(self) -> List[CirclePrimitive]:
        return [p for p in self.primitives if isinstance(p, CirclePrimitive)]

    @property
    def texts(self) -> List[TextPrimitive]:
        return [p for p in self.primitives if isinstance(p, TextPrimitive)]


def _unit(dx: float, dy: float, fallback: Vec = DEFAULT_LABEL_DIRECTION) -> Vec:
    norm = math.hypot(dx, dy)
    if norm <= 1e-12:
        return fallback
    return (dx / norm, dy / norm)


def point_label(point: Point, names: Mapping[Point, str]) -> str:
    name = names.get(point)
    if name is not None:
        return name
    return f"({format_number(round(point.x, 2))}, {format_number(round(point.y, 2))})"


def _point_primitives(point: Point, options: RenderOptions, names: Mapping[Point, str]) -> List[Primitive]:
    if not options.label:
        return []
    out: List[Primitive] = []
    if options.point_markers:
        # marker_radius is in canvas units
        out.append(CirclePrimitive(point, options.marker_radius / options.scale, filled=True))
    out.append(TextPrimitive(point, point_label(point, names)))
    return out


def _triangle_primitives(tri: Triangle, options: RenderOptions, names: Mapping[Point, str]) -> List[Primitive]:
    out: List[Primitive] = [LinePrimitive(side.start, side.end) for side in tri.sides]
    if options.label:
        cx = sum(p.x for p in tri.vertices) / 3
        cy = sum(p.y for p in tri.vertices) / 3
        for vertex in tri.vertices:
            direction = _unit(vertex.x - cx, vertex.y - cy)
            out.append(TextPrimitive(vertex, point_label(vertex, names), direction))
    return out


def _angle_primitives(angle: Angle, options: RenderOptions) -> List[Primitive]:
    out: List[Primitive] = [LinePrimitive(ray.start, ray.end) for ray in angle.rays]
    if options.label:
        v = angle.vertex
        u1 = _unit(angle.start.x - v.x, angle.start.y - v.y, (0.0, 0.0))
        u2 = _unit(angle.end.x - v.x, angle.end.y - v.y, (0.0, 0.0))
        bisector = _unit(u1[0] + u2[0], u1[1] + u2[1], _unit(-u1[1], u1[0]))
        out.append(TextPrimitive(v, f"{angle.measure:.1f}°", bisector))
    return out


def value_primitives(
    value: Value,
    options: Optional[RenderOptions] = None,
    names: Optional[Mapping[Point, str]] = None,
) -> List[Primitive]:
    """Primitives for one value; the set of value kinds is closed."""

    options = options or RenderOptions()
    names = names or {}
    if is_number(value):
        return []
    if isinstance(value, Point):
        return _point_primitives(value, options, names)
    if isinstance(value, Lineseg):
        return [LinePrimitive(value.start, value.end)]
    if isinstance(value, Circle):
        return [CirclePrimitive(value.center, value.radius)]
    if isinstance(value, Triangle):
        return _triangle_primitives(value, options, names)
    if isinstance(value, Angle):
        return _angle_primitives(value, options)
    raise TypeError(f"cannot render value of type {type(value).__name__}")


def render_values(
    values: Iterable[Value],
    options: Optional[RenderOptions] = None,
    names: Optional[Mapping[Point, str]] = None,
) -> Diagram:
    options = options or RenderOptions()
    diagram = Diagram()
    for value in values:
        diagram.primitives.extend(value_primitives(value, options, names))
    logger.info(
        "Rendered %d primitive(s): %d line(s), %d circle(s), %d label(s)",
        len(diagram.primitives),
        len(diagram.lines),
        len(diagram.circles),
        len(diagram.texts),
    )
    return diagram


def diagram_bounds(diagram: Diagram) -> Optional[Tuple[float, float, float, float]]:
    """Geometric bounding box ``(min_x, min_y, max_x, max_y)`` of all primitives."""

    xs: List[float] = []
    ys: List[float] = []
    for prim in diagram.primitives:
        if isinstance(prim, LinePrimitive):
            xs += [prim.start.x, prim.end.x]
            ys += [prim.start.y, prim.end.y]
        elif isinstance(prim, CirclePrimitive):
            xs += [prim.center.x - prim.radius, prim.center.x + prim.radius]
            ys += [prim.center.y - prim.radius, prim.center.y + prim.radius]
        else:
            xs.append(prim.anchor.x)
            ys.append(prim.anchor.y)
    if not xs:
        return None
    return (min(xs), min(ys), max(xs), max(ys))
