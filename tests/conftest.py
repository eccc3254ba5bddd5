"""Shared fixtures: a recording surface and a fixed-width measure."""

import sys
from pathlib import Path

import pytest

# Make `import textcanvas` work from a plain checkout
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from textcanvas.config import TextStyle  # noqa: E402
from textcanvas.render.base import Surface, TextMetrics  # noqa: E402

CHAR_WIDTH = 10.0


def char_measure(text: str) -> float:
    """Every character is 10px wide, spaces included."""
    return CHAR_WIDTH * len(text)


class RecordingSurface(Surface):
    """Surface that measures with char_measure and records every other call."""

    def __init__(self, measure=char_measure) -> None:
        super().__init__()
        self.calls: list[tuple] = []
        self.measured: list[str] = []
        self._measure = measure

    def apply_style(self, style: TextStyle) -> None:
        self.calls.append(("apply_style", style))

    def measure_text(self, text: str) -> TextMetrics:
        self.measured.append(text)
        return TextMetrics(width=self._measure(text))

    def resize(self, width: int, height: int, scale: float) -> None:
        self.width, self.height, self.scale = width, height, scale
        self.calls.append(("resize", width, height, scale))

    def clear(self) -> None:
        self.calls.append(("clear",))

    def paint_text(self, text: str, x: float, y: float) -> None:
        self.calls.append(("paint_text", text, x, y))

    def output(self) -> "RecordingSurface":
        return self

    @property
    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    @property
    def painted(self) -> list[tuple]:
        return [call[1:] for call in self.calls if call[0] == "paint_text"]


@pytest.fixture
def measure():
    return char_measure


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()
