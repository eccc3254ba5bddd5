"""Drawing surface abstraction used by TextCanvas."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from textcanvas.config import TextStyle


@dataclass(frozen=True)
class TextMetrics:
    """Result of measuring a string."""

    width: float  # Width in logical pixels


class Surface(ABC):
    """
    Base class for drawing surfaces.

    A surface measures and paints text with the style most recently applied.
    Resizing resets the paint state, so callers re-apply the style after every
    resize and before painting.
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0
        self.scale = 1.0

    @abstractmethod
    def apply_style(self, style: TextStyle) -> None:
        """
        Configure font, alignment, baseline, fill color and shadow.

        Args:
            style: Resolved text style.
        """
        pass

    @abstractmethod
    def measure_text(self, text: str) -> TextMetrics:
        """
        Measure text with the active font.

        Args:
            text: Text to measure.

        Returns:
            TextMetrics with the width in logical pixels.
        """
        pass

    @abstractmethod
    def resize(self, width: int, height: int, scale: float) -> None:
        """
        Allocate width*scale by height*scale device pixels.

        Paint coordinates stay in logical pixels; the surface scales them.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the whole logical area."""
        pass

    @abstractmethod
    def paint_text(self, text: str, x: float, y: float) -> None:
        """
        Paint text with its alignment anchor at (x, y) in logical pixels.
        """
        pass

    @abstractmethod
    def output(self) -> Any:
        """Get the rendered result (an image, PDF bytes...)."""
        pass
