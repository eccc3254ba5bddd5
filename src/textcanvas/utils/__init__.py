"""Utility modules."""

from textcanvas.utils.text import (
    LayoutResult,
    Line,
    create_lines,
    get_anchor_x,
    get_dimensions,
    iter_line_positions,
    layout_text,
    measure_width,
)

__all__ = [
    "LayoutResult",
    "Line",
    "create_lines",
    "get_anchor_x",
    "get_dimensions",
    "iter_line_positions",
    "layout_text",
    "measure_width",
]
