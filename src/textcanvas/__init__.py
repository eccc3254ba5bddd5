"""Lay out wrapped text and draw it onto an image or PDF surface."""

__version__ = "0.1.1"

from textcanvas.canvas import TextCanvas
from textcanvas.config import DEFAULT_STYLE, TextStyle, load_style, resolve_resolution, resolve_style
from textcanvas.errors import (
    InvalidArgument,
    InvalidConfiguration,
    InvalidRange,
    MeasurementFailure,
    TextCanvasError,
)
from textcanvas.render import ImageSurface, PDFSurface, Surface, TextMetrics
from textcanvas.utils.text import LayoutResult, Line, get_anchor_x, iter_line_positions, layout_text

__all__ = [
    "DEFAULT_STYLE",
    "ImageSurface",
    "InvalidArgument",
    "InvalidConfiguration",
    "InvalidRange",
    "LayoutResult",
    "Line",
    "MeasurementFailure",
    "PDFSurface",
    "Surface",
    "TextCanvas",
    "TextCanvasError",
    "TextMetrics",
    "TextStyle",
    "get_anchor_x",
    "iter_line_positions",
    "layout_text",
    "load_style",
    "resolve_resolution",
    "resolve_style",
]
