"""Built-in procedures and their overload signatures.

Each built-in name maps to an ordered list of :class:`Signature` entries.
Resolution walks the list in declaration order and picks the first entry whose
arity and per-position kinds match the evaluated arguments exactly.  The only
widening is ``Number``, which accepts integer and decimal literals alike;
``Int`` accepts integers only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from . import geometry
from .config import GeometryConfig, get_geometry_config
from .errors import NoMatchingOverloadError, UnknownFunctionError
from .values import Angle, Circle, Lineseg, Point, Triangle, Value, is_int, is_number, type_name

logger = logging.getLogger(__name__)

KIND_CHECKS: Dict[str, Callable[[object], bool]] = {
    "Number": is_number,
    "Int": is_int,
    "Point": lambda v: isinstance(v, Point),
    "Lineseg": lambda v: isinstance(v, Lineseg),
    "Circle": lambda v: isinstance(v, Circle),
    "Angle": lambda v: isinstance(v, Angle),
    "Triangle": lambda v: isinstance(v, Triangle),
}


@dataclass
class CallContext:
    """Per-run resources handed to every built-in."""

    rng: np.random.Generator
    config: GeometryConfig


@dataclass(frozen=True)
class Signature:
    name: str
    params: Tuple[str, ...]
    impl: Callable[..., Value]

    def matches(self, args: Sequence[Value]) -> bool:
        if len(args) != len(self.params):
            return False
        return all(KIND_CHECKS[kind](arg) for kind, arg in zip(self.params, args))

    def __str__(self) -> str:
        return f"{self.name}({', '.join(self.params)})"


BUILTINS: Dict[str, List[Signature]] = {}


def builtin(name: str, *params: str):
    """Register the decorated function as an overload of ``name``."""

    for kind in params:
        if kind not in KIND_CHECKS:
            raise ValueError(f"unknown parameter kind {kind!r} for {name}")

    def decorator(func: Callable[..., Value]) -> Callable[..., Value]:
        BUILTINS.setdefault(name, []).append(Signature(name, tuple(params), func))
        return func

    return decorator


def resolve(name: str, args: Sequence[Value]) -> Signature:
    signatures = BUILTINS.get(name)
    if signatures is None:
        raise UnknownFunctionError(name, [type_name(arg) for arg in args])
    for signature in signatures:
        if signature.matches(args):
            return signature
    raise NoMatchingOverloadError(
        name,
        [type_name(arg) for arg in args],
        [str(signature) for signature in signatures],
    )


def call_builtin(name: str, args: Sequence[Value], ctx: CallContext) -> Value:
    signature = resolve(name, args)
    logger.debug("dispatch %s -> %s", name, signature)
    return signature.impl(ctx, *args)


def signatures_for(name: str) -> List[Signature]:
    return list(BUILTINS.get(name, []))


# ---------------------------------------------------------------------------
# Declarations.  Order within a name is the resolution priority.


@builtin("point", "Number", "Number")
def _point(ctx: CallContext, x, y):
    return geometry.make_point(x, y)


@builtin("lineseg", "Point", "Point")
def _lineseg(ctx: CallContext, p1, p2):
    return Lineseg(p1, p2)


@builtin("midpoint", "Point", "Point")
def _midpoint(ctx: CallContext, p1, p2):
    return geometry.midpoint(p1, p2)


@builtin("circle")
def _circle_default(ctx: CallContext):
    return geometry.default_circle(ctx.config)


@builtin("circle", "Point", "Number")
def _circle(ctx: CallContext, center, radius):
    return geometry.make_circle(center, radius)


@builtin("angle", "Point", "Point", "Point")
def _angle(ctx: CallContext, p1, p2, p3):
    return geometry.make_angle(p1, p2, p3)


@builtin("iangle", "Circle", "Number")
def _iangle(ctx: CallContext, circle, degrees):
    return geometry.inscribed_angle(circle, degrees, ctx.config)


@builtin("triangle", "Point", "Point", "Point")
def _triangle(ctx: CallContext, p1, p2, p3):
    return geometry.make_triangle(p1, p2, p3, ctx.config)


@builtin("triangle", "Angle")
def _triangle_from_angle(ctx: CallContext, angle):
    return geometry.triangle_from_angle(angle, ctx.config)


@builtin("triangle", "Circle")
def _triangle_on_circle(ctx: CallContext, circle):
    return geometry.triangle_on_circle(circle, ctx.rng, ctx.config)


@builtin("circumcenter", "Triangle")
def _circumcenter(ctx: CallContext, tri):
    return geometry.circumcenter(tri)


@builtin("orthocenter", "Triangle")
def _orthocenter(ctx: CallContext, tri):
    return geometry.orthocenter(tri)


@builtin("centroid", "Triangle")
def _centroid(ctx: CallContext, tri):
    return geometry.centroid(tri)


@builtin("incenter", "Triangle")
def _incenter(ctx: CallContext, tri):
    return geometry.incenter(tri)


@builtin("inradius", "Triangle")
def _inradius(ctx: CallContext, tri):
    return geometry.inradius(tri)


@builtin("intersect", "Lineseg", "Circle", "Int")
def _intersect_line_circle(ctx: CallContext, seg, circle, index):
    return geometry.intersect_line_circle(seg, circle, int(index), ctx.config)


@builtin("intersect", "Lineseg", "Lineseg")
def _intersect_lines(ctx: CallContext, first, second):
    return geometry.intersect_lines(first, second, ctx.config)


def make_context(
    rng: Optional[np.random.Generator] = None, config: Optional[GeometryConfig] = None
) -> CallContext:
    return CallContext(
        rng=rng if rng is not None else np.random.default_rng(),
        config=config if config is not None else get_geometry_config(),
    )
