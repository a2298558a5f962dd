"""geolisp → TikZ code generation helpers."""

from .generator import (
    anchor_for_direction,
    generate_tikz_code,
    generate_tikz_document,
)
from .utils import latex_label

__all__ = [
    "anchor_for_direction",
    "generate_tikz_code",
    "generate_tikz_document",
    "latex_label",
]
