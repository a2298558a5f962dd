"""Runtime values produced by evaluating a geolisp program."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .errors import InvalidGeometryError

Number = Union[int, float]


def is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_int(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _as_float(kind: str, component: object) -> float:
    try:
        converted = float(component)
    except OverflowError:
        raise InvalidGeometryError(f'{kind} is out of the floating point range') from None
    if not math.isfinite(converted):
        raise InvalidGeometryError(f'{kind} has a non-finite coordinate: {converted!r}')
    return converted


def collinear(a: "Point", b: "Point", c: "Point", eps: float) -> bool:
    # scale-relative: |cross| / (|ab| |ac|) is the sine of the angle at a
    abx, aby = b.x - a.x, b.y - a.y
    acx, acy = c.x - a.x, c.y - a.y
    cross = abx * acy - aby * acx
    return abs(cross) <= eps * math.hypot(abx, aby) * math.hypot(acx, acy)


def check_triangle(a: "Point", b: "Point", c: "Point", eps: float) -> None:
    """Raise :class:`InvalidGeometryError` unless the vertices span a proper triangle."""
    if a == b or b == c or c == a:
        raise InvalidGeometryError('triangle vertices must be pairwise distinct')
    if collinear(a, b, c, eps):
        raise InvalidGeometryError(
            'triangle vertices are collinear: '
            f'({a.x:g}, {a.y:g}), ({b.x:g}, {b.y:g}), ({c.x:g}, {c.y:g})'
        )


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _as_float("point", self.x))
        object.__setattr__(self, "y", _as_float("point", self.y))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Point":
        return cls(float(arr[0]), float(arr[1]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Lineseg:
    start: Point
    end: Point

    @property
    def direction(self) -> np.ndarray:
        return self.end.as_array() - self.start.as_array()

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.direction))


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", _as_float("circle radius", self.radius))
        if self.radius < 0:
            raise InvalidGeometryError(f'circle radius must be >= 0, got {self.radius:g}')

    def point_at(self, theta: float) -> Point:
        """Point on the boundary at polar angle ``theta`` (radians)."""
        return Point(
            self.center.x + self.radius * math.cos(theta),
            self.center.y + self.radius * math.sin(theta),
        )


@dataclass(frozen=True)
class Angle:
    """Angle at ``vertex`` between the rays towards ``start`` and ``end``.

    ``circle`` is set when the angle was inscribed in a circle by ``iangle``.
    """

    start: Point
    vertex: Point
    end: Point
    circle: Optional[Circle] = None

    @property
    def rays(self) -> Tuple[Lineseg, Lineseg]:
        return Lineseg(self.vertex, self.start), Lineseg(self.vertex, self.end)

    @property
    def measure(self) -> float:
        """Unsigned measure in degrees, in ``[0, 180]``."""
        u = self.start.as_array() - self.vertex.as_array()
        v = self.end.as_array() - self.vertex.as_array()
        cross = float(u[0] * v[1] - u[1] * v[0])
        dot = float(np.dot(u, v))
        return math.degrees(abs(math.atan2(cross, dot)))


@dataclass(frozen=True)
class Triangle:
    a: Point
    b: Point
    c: Point

    def __post_init__(self) -> None:
        # exact check only; constructions apply the configured epsilon
        check_triangle(self.a, self.b, self.c, 0.0)

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    @property
    def sides(self) -> Tuple[Lineseg, Lineseg, Lineseg]:
        return (Lineseg(self.a, self.b), Lineseg(self.b, self.c), Lineseg(self.c, self.a))


Value = Union[int, float, Point, Lineseg, Circle, Angle, Triangle]


def type_name(value: object) -> str:
    """Kind name used in overload signatures and error messages."""
    if is_number(value):
        return "Number"
    return type(value).__name__
