"""Type aliases used across the textcanvas package."""

from typing import Callable, Literal, Union

# Style enums
FontStyle = Literal["normal", "italic", "oblique"]
FontVariant = Literal["normal", "small-caps"]
FontWeight = Union[str, int]
TextAlign = Literal["left", "center", "right"]
TextBaseline = Literal["top", "hanging", "middle", "alphabetic", "ideographic", "bottom"]

# Any color string the active surface understands (CSS names, "#rrggbb", ...)
Color = str

# Pixel width of a string under the active font
Measure = Callable[[str], float]

# CLI output formats
OutputFormat = Literal["png", "pdf"]
