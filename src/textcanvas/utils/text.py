"""Line layout: hard breaks, word wrapping, block dimensions and draw positions."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence

from textcanvas.errors import InvalidConfiguration, MeasurementFailure
from textcanvas.types import Measure

if TYPE_CHECKING:
    from textcanvas.config import TextStyle

logger = logging.getLogger(__name__)

SEPARATOR = " "


# ============================================================================
# Layout Types
# ============================================================================

@dataclass(frozen=True)
class Line:
    """
    One laid-out line.

    Attributes:
        text: Line content, with no separator at either end.
        width: Measured width in pixels.
        height: Line height in pixels.
    """
    text: str
    width: float
    height: float


@dataclass(frozen=True)
class LayoutResult:
    """
    Laid-out block of text.

    Attributes:
        lines: Lines in draw order, top to bottom.
        width: Ceiling of the widest line width.
        height: Ceiling of the summed line heights.
    """
    lines: tuple[Line, ...]
    width: int
    height: int


# ============================================================================
# Measurement
# ============================================================================

def measure_width(measure: Measure, text: str) -> float:
    """
    Measure text, rejecting anything that is not a non-negative real width.

    Raises:
        MeasurementFailure: If measure raises, or returns a non-number, NaN or a negative width.
    """
    try:
        width = measure(text)
    except Exception as e:
        raise MeasurementFailure(f"Measuring {text!r} failed: {e}") from e

    if isinstance(width, bool) or not isinstance(width, numbers.Real):
        raise MeasurementFailure(f"Measuring {text!r} returned {width!r}, expected a number")
    if math.isnan(width) or width < 0:
        raise MeasurementFailure(f"Measuring {text!r} returned invalid width {width!r}")
    return float(width)


# ============================================================================
# Line Building
# ============================================================================

class _LineBuffer:
    """Accumulates words for one output line; each word is followed by a separator."""

    def __init__(self, height: float) -> None:
        self.text = ""
        self.width = 0.0
        self.height = height

    def append(self, word: str, word_width: float, space_width: float) -> None:
        self.text += word + SEPARATOR
        self.width += word_width + space_width

    def commit(self, space_width: float) -> Line:
        return Line(
            text=self.text.strip(SEPARATOR),
            width=self.width - space_width,
            height=self.height,
        )


def _wrap_forced_line(
    forced_line: str,
    max_width: float,
    line_height: float,
    measure: Measure,
) -> list[Line]:
    """
    Wrap one forced line word by word.

    A word that does not fit commits the current line and starts a new one.
    The first word of a forced line has nothing to commit before it, so the
    very first word of the text stays on the first line however wide it is,
    and the first word of a later forced line opens that line's own buffer.
    """
    lines: list[Line] = []
    space_width = measure_width(measure, SEPARATOR)
    buffer = _LineBuffer(line_height)

    for word in forced_line.split(SEPARATOR):
        word_width = measure_width(measure, word)
        overflows = buffer.width + word_width > max_width

        if overflows and buffer.text:
            lines.append(buffer.commit(space_width))
            buffer = _LineBuffer(line_height)

        buffer.append(word, word_width, space_width)

    lines.append(buffer.commit(space_width))
    return lines


def create_lines(text: str, style: TextStyle, measure: Measure) -> list[Line]:
    """
    Split text into lines on newlines, then wrap each one if word wrap is on.

    Args:
        text: Text to lay out, already trimmed and non-empty.
        style: Resolved style; only word_wrap and the line height are read.
        measure: Returns the pixel width of a string under the active font.

    Returns:
        Lines in draw order.
    """
    # Separators at either end of a forced line are never drawn or measured
    forced_lines = [forced.strip(SEPARATOR) for forced in text.split("\n")]
    line_height = style.resolved_line_height

    if style.word_wrap is False:
        return [Line(text=forced, width=measure_width(measure, forced), height=line_height) for forced in forced_lines]

    lines: list[Line] = []
    for forced in forced_lines:
        lines.extend(
            _wrap_forced_line(
                forced,
                max_width=style.word_wrap,
                line_height=line_height,
                measure=measure,
            )
        )
    return lines


def get_dimensions(lines: Sequence[Line]) -> tuple[int, int]:
    """
    Get the pixel size of the box holding the lines.

    Lines stack with no gap, so the height is the sum of the line heights.

    Returns:
        (width, height), each rounded up to a whole pixel.
    """
    max_width = max((line.width for line in lines), default=0.0)
    total_height = sum(line.height for line in lines)
    return math.ceil(max_width), math.ceil(total_height)


def layout_text(text: str, style: TextStyle, measure: Measure) -> LayoutResult:
    """
    Lay out a block of text.

    Args:
        text: Text to lay out, already trimmed and non-empty.
        style: Resolved style.
        measure: Returns the pixel width of a string under the active font.

    Returns:
        LayoutResult with the lines and the block dimensions.

    Raises:
        MeasurementFailure: If measure misbehaves for any string.
    """
    lines = create_lines(text, style, measure)
    width, height = get_dimensions(lines)
    logger.debug(f"Laid out {len(lines)} line(s) in {width}x{height}px (word_wrap={style.word_wrap})")
    return LayoutResult(lines=tuple(lines), width=width, height=height)


# ============================================================================
# Draw Positions
# ============================================================================

def get_anchor_x(width: float, align: str) -> float:
    """
    Horizontal anchor for every line of a block.

    Args:
        width: Block width in pixels.
        align: "left", "center" or "right".

    Returns:
        0 for left, width / 2 for center, width for right.
    """
    if align == "left":
        return 0
    if align == "center":
        return width / 2
    if align == "right":
        return width
    raise InvalidConfiguration(f"Unknown text alignment: {align!r}")


def iter_line_positions(result: LayoutResult, align: str) -> Iterator[tuple[Line, float, float]]:
    """
    Yield (line, x, y) for each line, top to bottom.

    y is advanced by the line height before the line is yielded, so the first
    line sits at y = its own height.
    """
    x = get_anchor_x(result.width, align)
    y = 0.0
    for line in result.lines:
        y += line.height
        yield line, x, y
