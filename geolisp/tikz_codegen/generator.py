"""TikZ renderer for geolisp diagrams.

TikZ already has its y axis pointing up, so geometric coordinates are written
unchanged; ``scale`` is applied by the ``tikzpicture`` environment (1 unit =
1 cm at ``scale=1``).
"""

from __future__ import annotations

import math
from typing import List, Optional

from .utils import latex_label
from ..renderer import CirclePrimitive, Diagram, LinePrimitive, TextPrimitive

ANCHOR_SEQUENCE = [
    "right",
    "above right",
    "above",
    "above left",
    "left",
    "below left",
    "below",
    "below right",
]

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage{tikz}
\tikzset{
  geo line/.style={line width=0.8pt},
  carrier/.style={geo line},
  outline/.style={geo line},
  point/.style={circle,fill=black,inner sep=0pt,minimum size=2.8pt},
  ptlabel/.style={font=\footnotesize, inner sep=1pt},
}
\begin{document}
%s
\end{document}
"""


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def anchor_for_direction(dx: float, dy: float) -> str:
    """Nearest of the eight TikZ compass anchors to the direction ``(dx, dy)``."""
    angle = math.degrees(math.atan2(dy, dx)) % 360.0
    return ANCHOR_SEQUENCE[int(((angle + 22.5) % 360.0) // 45.0)]


def generate_tikz_code(diagram: Diagram, *, scale: float = 1.0) -> str:
    lines: List[str] = [f"\\begin{{tikzpicture}}[scale={_format_float(scale)}]"]
    for prim in diagram.primitives:
        if isinstance(prim, LinePrimitive):
            lines.append(
                "  \\draw[carrier] ({x1}, {y1}) -- ({x2}, {y2});".format(
                    x1=_format_float(prim.start.x),
                    y1=_format_float(prim.start.y),
                    x2=_format_float(prim.end.x),
                    y2=_format_float(prim.end.y),
                )
            )
        elif isinstance(prim, CirclePrimitive):
            center = f"({_format_float(prim.center.x)}, {_format_float(prim.center.y)})"
            if prim.filled:
                lines.append(f"  \\node[point] at {center} {{}};")
            else:
                lines.append(f"  \\draw[outline] {center} circle ({_format_float(prim.radius)});")
        elif isinstance(prim, TextPrimitive):
            anchor = anchor_for_direction(*prim.direction)
            lines.append(
                f"  \\node[ptlabel,{anchor}] at ({_format_float(prim.anchor.x)}, {_format_float(prim.anchor.y)}) "
                f"{{{latex_label(prim.text)}}};"
            )
        else:
            raise TypeError(f"unknown primitive {prim!r}")
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def generate_tikz_document(diagram: Diagram, *, scale: float = 1.0, title: Optional[str] = None) -> str:
    """Render a standalone LaTeX document around :func:`generate_tikz_code`."""

    body = generate_tikz_code(diagram, scale=scale)
    if title:
        body = f"% {title}\n{body}"
    return standalone_tpl % body
