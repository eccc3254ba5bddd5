"""Drawing surfaces for Pillow images and PDF pages."""

from textcanvas.render.base import Surface, TextMetrics
from textcanvas.render.image import ImageSurface
from textcanvas.render.pdf import PDFSurface

__all__ = [
    "ImageSurface",
    "PDFSurface",
    "Surface",
    "TextMetrics",
]
