"""Raster drawing surface using Pillow."""

import logging
import math
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from textcanvas.config import TextStyle
from textcanvas.errors import InvalidConfiguration
from textcanvas.fonts import load_image_font
from textcanvas.render.base import Surface, TextMetrics

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)

# Pillow text anchors: horizontal letter from the alignment, vertical from the baseline
HORIZONTAL_ANCHORS = {"left": "l", "center": "m", "right": "r"}
VERTICAL_ANCHORS = {
    "top": "a",
    "hanging": "a",
    "middle": "m",
    "alphabetic": "s",
    "ideographic": "d",
    "bottom": "d",
}


def parse_color(color: str) -> tuple[int, int, int, int]:
    """
    Parse a color string into RGBA.

    Accepts anything ``PIL.ImageColor`` does: names, "#rgb", "#rrggbbaa",
    "rgb(...)", "hsl(...)".

    Raises:
        InvalidConfiguration: If the color cannot be parsed.
    """
    try:
        return ImageColor.getcolor(color, "RGBA")
    except ValueError as e:
        raise InvalidConfiguration(f"Invalid color {color!r}: {e}") from e


class ImageSurface(Surface):
    """Renders text into a transparent RGBA ``PIL.Image``."""

    def __init__(self) -> None:
        super().__init__()
        self._image = Image.new("RGBA", (0, 0), TRANSPARENT)
        self._style: TextStyle | None = None
        self._measure_font: ImageFont.FreeTypeFont | None = None
        self._paint_font: ImageFont.FreeTypeFont | None = None
        self._fill = TRANSPARENT
        self._shadow = TRANSPARENT

    @property
    def image(self) -> Image.Image:
        return self._image

    def apply_style(self, style: TextStyle) -> None:
        # Measuring works in logical pixels, painting in device pixels
        self._measure_font = load_image_font(style, style.font_size)
        self._paint_font = load_image_font(style, style.font_size * self.scale)
        self._fill = parse_color(style.text_color)
        self._shadow = parse_color(style.shadow_color) if style.shadow_color else TRANSPARENT
        self._style = style

    def measure_text(self, text: str) -> TextMetrics:
        if self._measure_font is None:
            raise RuntimeError("apply_style() must be called before measure_text()")
        return TextMetrics(width=self._measure_font.getlength(text))

    def resize(self, width: int, height: int, scale: float) -> None:
        self.width = width
        self.height = height
        self.scale = scale
        size = (math.ceil(width * scale), math.ceil(height * scale))
        self._image = Image.new("RGBA", size, TRANSPARENT)

        # A new backing image starts with no paint state
        self._style = None
        self._measure_font = None
        self._paint_font = None
        logger.debug(f"Resized image surface to {size[0]}x{size[1]}px (scale {scale:g})")

    def clear(self) -> None:
        self._image.paste(TRANSPARENT, (0, 0, *self._image.size))

    def _draw_layer(
        self,
        text: str,
        position: tuple[float, float],
        fill: tuple[int, int, int, int],
        anchor: str,
        blur: float = 0.0,
    ) -> None:
        layer = Image.new("RGBA", self._image.size, TRANSPARENT)
        ImageDraw.Draw(layer).text(position, text, font=self._paint_font, fill=fill, anchor=anchor)
        if blur > 0:
            layer = layer.filter(ImageFilter.GaussianBlur(blur))
        self._image.alpha_composite(layer)

    def paint_text(self, text: str, x: float, y: float) -> None:
        style = self._style
        if style is None or self._paint_font is None:
            raise RuntimeError("apply_style() must be called before paint_text()")

        anchor = HORIZONTAL_ANCHORS[style.text_align] + VERTICAL_ANCHORS[style.text_baseline]
        position = (x * self.scale, y * self.scale)

        if self._shadow[3] > 0:
            shadow_position = (
                position[0] + style.shadow_offset_x * self.scale,
                position[1] + style.shadow_offset_y * self.scale,
            )
            # Canvas blur radius is roughly twice the Gaussian standard deviation
            self._draw_layer(text, shadow_position, self._shadow, anchor, blur=style.shadow_blur * self.scale / 2)

        self._draw_layer(text, position, self._fill, anchor)

    def output(self) -> Image.Image:
        return self._image

    def save(self, output_path: Path, format: str = "PNG") -> None:
        """
        Save the rendered image.

        Args:
            output_path: Destination file.
            format: Image format (PNG, WEBP, ...).
        """
        self._image.save(output_path, format=format)
        logger.info(f"Saved {self._image.width}x{self._image.height}px image to {output_path}")
