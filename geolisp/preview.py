"""Raster preview of a diagram using matplotlib (Agg backend)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.patches import Circle as CirclePatch  # noqa: E402

from .renderer import CirclePrimitive, Diagram, LinePrimitive, RenderOptions, TextPrimitive, diagram_bounds

logger = logging.getLogger(__name__)


def render_preview(
    diagram: Diagram,
    path: Union[str, Path],
    options: Optional[RenderOptions] = None,
    *,
    title: Optional[str] = None,
) -> Path:
    """Write a PNG preview of ``diagram`` in geometric coordinates."""

    options = options or RenderOptions()
    path = Path(path)
    fig, ax = plt.subplots(figsize=(4, 4))
    # label offset is given in canvas units
    offset = options.label_offset / options.scale
    for prim in diagram.primitives:
        if isinstance(prim, LinePrimitive):
            ax.plot([prim.start.x, prim.end.x], [prim.start.y, prim.end.y], color="black", linewidth=1.0)
        elif isinstance(prim, CirclePrimitive):
            ax.add_patch(
                CirclePatch(
                    (prim.center.x, prim.center.y),
                    prim.radius,
                    fill=prim.filled,
                    color="black",
                    linewidth=1.0,
                )
            )
        elif isinstance(prim, TextPrimitive):
            dx, dy = prim.direction
            ax.text(
                prim.anchor.x + offset * dx,
                prim.anchor.y + offset * dy,
                prim.text,
                fontsize=8,
                ha="center",
                va="center",
            )

    bounds = diagram_bounds(diagram)
    if bounds is not None:
        min_x, min_y, max_x, max_y = bounds
        span = max(max_x - min_x, max_y - min_y, 1.0)
        ax.set_xlim(min_x - 0.1 * span, max_x + 0.1 * span)
        ax.set_ylim(min_y - 0.1 * span, max_y + 0.1 * span)
    ax.set_aspect("equal", adjustable="box")
    if title:
        ax.set_title(title)
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.5)
    fig.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    logger.info("Wrote preview to %s", path)
    return path
