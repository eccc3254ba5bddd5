"""TextCanvas: draws a block of text onto a surface sized to fit it."""

import logging
from collections.abc import Mapping
from typing import Any

from textcanvas.config import TextStyle, resolve_resolution, resolve_style
from textcanvas.errors import InvalidArgument, InvalidRange
from textcanvas.render.base import Surface
from textcanvas.render.image import ImageSurface
from textcanvas.utils.text import LayoutResult, iter_line_positions, layout_text

logger = logging.getLogger(__name__)


class TextCanvas:
    """
    Draws text on a surface so it can be used as a texture or as a layer.

    The text, style and resolution are changed through explicit setters. Every
    setter drops the cached layout, so the next render lays the text out again.

        canvas = TextCanvas("Hello\\nWorld", {"fontSize": 24, "textAlign": "center"})
        image = canvas.render()
    """

    def __init__(
        self,
        text: str,
        style: Mapping[str, Any] | TextStyle | None = None,
        resolution: float | None = None,
        *,
        surface: Surface | None = None,
        default_scale: float | None = None,
    ) -> None:
        """
        Create a text canvas.

        Args:
            text: Text to draw; surrounding whitespace is trimmed.
            style: Style overrides merged over the defaults.
            resolution: Pixel density of the surface. None uses default_scale.
            surface: Surface to draw on. Defaults to a new ImageSurface.
            default_scale: Host pixel density used when no resolution is given (1 if None).

        Raises:
            InvalidArgument, InvalidRange: For bad text or resolution.
            InvalidConfiguration: For a bad style.
        """
        self._default_scale = default_scale
        self._surface = surface if surface is not None else ImageSurface()
        self._style = resolve_style()
        self._layout: LayoutResult | None = None

        self.set_text(text)
        self.set_style(style)
        self.set_resolution(resolution)

    # ========================================================================
    # Configuration
    # ========================================================================

    @property
    def text(self) -> str:
        return self._text

    @property
    def style(self) -> TextStyle:
        return self._style

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def surface(self) -> Surface:
        return self._surface

    def _invalidate(self) -> None:
        if self._layout is not None:
            logger.debug("Dropping cached layout")
        self._layout = None

    def set_text(self, value: Any) -> str:
        """
        Change the text to draw.

        Returns:
            The stored, trimmed text.

        Raises:
            InvalidArgument: If the value is not a string.
            InvalidRange: If the text is empty after trimming.
        """
        if not isinstance(value, str):
            raise InvalidArgument(f"{type(self).__name__}: 'text' must be a string, got {type(value).__name__}")

        value = value.strip()
        if not value:
            raise InvalidRange(f"{type(self).__name__}: 'text' is empty")

        self._text = value
        self._invalidate()
        return self._text

    def set_style(self, partial: Mapping[str, Any] | TextStyle | None) -> TextStyle:
        """
        Merge style overrides over the current style.

        Returns:
            The resolved style.

        Raises:
            InvalidConfiguration: If the merged style is invalid.
        """
        self._style = resolve_style(partial, base=self._style)
        self._invalidate()
        return self._style

    def set_resolution(self, value: Any) -> float:
        """
        Change the pixel density of the surface.

        Returns:
            The stored resolution.

        Raises:
            InvalidArgument: If the value is not a number or is NaN.
            InvalidRange: If the value is 0, negative or infinite.
        """
        self._resolution = resolve_resolution(value, self._default_scale)
        self._invalidate()
        return self._resolution

    # ========================================================================
    # Layout and Rendering
    # ========================================================================

    def _measure(self, text: str) -> float:
        return self._surface.measure_text(text).width

    def _cached_layout(self) -> LayoutResult:
        # The style must already be applied to the surface
        if self._layout is None:
            self._layout = layout_text(self._text, self._style, self._measure)
        return self._layout

    def layout(self) -> LayoutResult:
        """
        Lay out the text with the surface's measurements, reusing the cached result.

        Raises:
            MeasurementFailure: If the surface measures a string badly.
        """
        if self._layout is None:
            self._surface.apply_style(self._style)
        return self._cached_layout()

    def render(self) -> Any:
        """
        Draw the text.

        The surface is resized to the text block, the style is applied again
        because resizing resets it, and each line is painted at its position.

        Returns:
            The surface's output (a PIL image for ImageSurface, PDF bytes for PDFSurface).
        """
        self._surface.apply_style(self._style)
        result = self._cached_layout()

        self._surface.resize(result.width, result.height, self._resolution)
        self._surface.apply_style(self._style)
        self._surface.clear()

        for line, x, y in iter_line_positions(result, self._style.text_align):
            self._surface.paint_text(line.text, x, y)

        logger.debug(f"Rendered {len(result.lines)} line(s) at resolution {self._resolution:g}")
        return self._surface.output()
