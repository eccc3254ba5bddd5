"""Single-page PDF drawing surface using ReportLab."""

import logging
from io import BytesIO
from pathlib import Path

from reportlab.lib.colors import Color, toColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from textcanvas.config import TextStyle
from textcanvas.errors import InvalidConfiguration
from textcanvas.fonts import resolve_pdf_font
from textcanvas.render.base import Surface, TextMetrics

logger = logging.getLogger(__name__)


def parse_color(color: str) -> Color:
    """
    Parse a color string with ReportLab ("black", "#ff8800", "rgb(...)"...).

    Raises:
        InvalidConfiguration: If the color cannot be parsed.
    """
    try:
        return toColor(color)
    except ValueError as e:
        raise InvalidConfiguration(f"Invalid color {color!r}: {e}") from e


class PDFSurface(Surface):
    """
    Renders text onto a single PDF page sized to the text block.

    Logical pixels map to points. PDF pages grow upwards, so y coordinates are
    flipped against the page height when painting.
    """

    def __init__(self) -> None:
        super().__init__()
        self._style: TextStyle | None = None
        self._font_name: str | None = None
        self._pdf: bytes | None = None
        self._new_canvas((1, 1))

    def _new_canvas(self, pagesize: tuple[float, float]) -> None:
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=pagesize)
        self._pdf = None

    def apply_style(self, style: TextStyle) -> None:
        self._font_name = resolve_pdf_font(style)
        self._canvas.setFont(self._font_name, style.font_size, leading=style.resolved_line_height)
        self._canvas.setFillColor(parse_color(style.text_color))
        self._style = style

    def measure_text(self, text: str) -> TextMetrics:
        if self._style is None or self._font_name is None:
            raise RuntimeError("apply_style() must be called before measure_text()")
        return TextMetrics(width=pdfmetrics.stringWidth(text, self._font_name, self._style.font_size))

    def resize(self, width: int, height: int, scale: float) -> None:
        self.width = width
        self.height = height
        self.scale = scale
        self._new_canvas((max(width * scale, 1), max(height * scale, 1)))
        self._canvas.scale(scale, scale)

        # A new canvas starts with no paint state
        self._style = None
        self._font_name = None
        logger.debug(f"Resized PDF surface to {width * scale:g}x{height * scale:g}pt (scale {scale:g})")

    def clear(self) -> None:
        """Nothing to do: every resize starts a blank page."""

    def _baseline_offset(self) -> float:
        """Distance from the requested baseline down to the alphabetic baseline."""
        ascent, descent = pdfmetrics.getAscentDescent(self._font_name, self._style.font_size)
        baseline = self._style.text_baseline
        if baseline in ("top", "hanging"):
            return ascent
        if baseline == "middle":
            return (ascent + descent) / 2
        if baseline in ("bottom", "ideographic"):
            return descent
        return 0.0

    def _draw(self, text: str, x: float, y: float) -> None:
        align = self._style.text_align
        if align == "center":
            self._canvas.drawCentredString(x, y, text)
        elif align == "right":
            self._canvas.drawRightString(x, y, text)
        else:
            self._canvas.drawString(x, y, text)

    def paint_text(self, text: str, x: float, y: float) -> None:
        style = self._style
        if style is None:
            raise RuntimeError("apply_style() must be called before paint_text()")

        pdf_y = self.height - (y + self._baseline_offset())

        if style.shadow_color:
            # No blur in PDF, the shadow is a plain offset copy
            self._canvas.saveState()
            self._canvas.setFillColor(parse_color(style.shadow_color))
            self._draw(text, x + style.shadow_offset_x, pdf_y - style.shadow_offset_y)
            self._canvas.restoreState()

        self._draw(text, x, pdf_y)

    def output(self) -> bytes:
        if self._pdf is None:
            self._canvas.showPage()
            self._canvas.save()
            self._pdf = self._buffer.getvalue()
        return self._pdf

    def save(self, output_path: Path) -> None:
        """Write the PDF to a file."""
        output_path.write_bytes(self.output())
        logger.info(f"Saved PDF to {output_path}")
