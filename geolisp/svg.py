"""SVG serialization of a :class:`~geolisp.renderer.Diagram`.

Canvas transform (stable, documented contract)::

    X = scale * x
    Y = -scale * y

The y axis is flipped so that geometric "up" is up on screen.  Nothing else is
moved: the ``viewBox`` is the bounding box of every primitive in canvas space,
padded by ``margin`` on each side, so coordinates in the markup are literal
scaled geometry.  Labels are pushed ``label_offset`` canvas units along their
direction (flipped the same way).
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape

from .renderer import (
    CirclePrimitive,
    Diagram,
    LinePrimitive,
    RenderOptions,
    TextPrimitive,
    diagram_bounds,
)
from .values import Point

SVG_NS = "http://www.w3.org/2000/svg"


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


class CanvasTransform:
    def __init__(self, scale: float = 20.0):
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale

    def point(self, p: Point) -> Tuple[float, float]:
        return (self.scale * p.x, -self.scale * p.y)

    def length(self, value: float) -> float:
        return self.scale * value

    def direction(self, d: Tuple[float, float]) -> Tuple[float, float]:
        return (d[0], -d[1])


def _view_box(diagram: Diagram, transform: CanvasTransform, options: RenderOptions) -> Tuple[float, float, float, float]:
    bounds = diagram_bounds(diagram)
    if bounds is None:
        min_x = min_y = max_x = max_y = 0.0
    else:
        min_x, min_y, max_x, max_y = bounds
    # the flip swaps which geometric y bound is on top
    left, top = transform.point(Point(min_x, max_y))
    right, bottom = transform.point(Point(max_x, min_y))
    m = options.margin
    return (left - m, top - m, (right - left) + 2 * m, (bottom - top) + 2 * m)


def _line(prim: LinePrimitive, transform: CanvasTransform, options: RenderOptions) -> str:
    x1, y1 = transform.point(prim.start)
    x2, y2 = transform.point(prim.end)
    return (
        f'<line x1="{_format_float(x1)}" y1="{_format_float(y1)}" '
        f'x2="{_format_float(x2)}" y2="{_format_float(y2)}" '
        f'stroke="black" stroke-width="{_format_float(options.stroke_width)}" />'
    )


def _circle(prim: CirclePrimitive, transform: CanvasTransform, options: RenderOptions) -> str:
    cx, cy = transform.point(prim.center)
    r = transform.length(prim.radius)
    if prim.filled:
        style = 'fill="black" stroke="none"'
    else:
        style = f'fill="none" stroke="black" stroke-width="{_format_float(options.stroke_width)}"'
    return f'<circle cx="{_format_float(cx)}" cy="{_format_float(cy)}" r="{_format_float(r)}" {style} />'


def _text(prim: TextPrimitive, transform: CanvasTransform, options: RenderOptions) -> str:
    ax, ay = transform.point(prim.anchor)
    dx, dy = transform.direction(prim.direction)
    x = ax + options.label_offset * dx
    y = ay + options.label_offset * dy
    return (
        f'<text x="{_format_float(x)}" y="{_format_float(y)}" '
        f'font-size="{_format_float(options.font_size)}" font-family="sans-serif" '
        f'text-anchor="middle" dominant-baseline="central">{escape(prim.text)}</text>'
    )


def render_svg(diagram: Diagram, options: Optional[RenderOptions] = None) -> str:
    """Serialize ``diagram`` to a standalone SVG document."""

    options = options or RenderOptions()
    transform = CanvasTransform(options.scale)
    vb = _view_box(diagram, transform, options)
    body: List[str] = []
    for prim in diagram.primitives:
        if isinstance(prim, LinePrimitive):
            body.append(_line(prim, transform, options))
        elif isinstance(prim, CirclePrimitive):
            body.append(_circle(prim, transform, options))
        elif isinstance(prim, TextPrimitive):
            body.append(_text(prim, transform, options))
        else:
            raise TypeError(f"unknown primitive {prim!r}")
    header = (
        f'<svg xmlns="{SVG_NS}" viewBox="{" ".join(_format_float(v) for v in vb)}" '
        f'width="{_format_float(vb[2])}" height="{_format_float(vb[3])}">'
    )
    return "\n".join([header, *("  " + line for line in body), "</svg>"]) + "\n"
