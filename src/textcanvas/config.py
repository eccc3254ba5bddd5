"""Style resolution, resolution validation and style file loading."""

import logging
import math
import numbers
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from textcanvas.errors import InvalidArgument, InvalidConfiguration, InvalidRange
from textcanvas.types import Color, FontStyle, FontVariant, FontWeight, TextAlign, TextBaseline

logger = logging.getLogger(__name__)

LINE_HEIGHT_RATIO = 1.2
"""Line height used when a style leaves it unset or zero, as a multiple of the font size."""


class TextStyle(BaseModel):
    """
    Complete text style.

    Field names are snake_case; every field also accepts its camelCase alias,
    so ``{"fontSize": 24}`` and ``{"font_size": 24}`` resolve the same way.
    Keys the model does not know are kept as extra fields and ignored by layout.

    Build one through ``resolve_style`` so that validation errors surface as
    ``InvalidConfiguration``:

        style = resolve_style({"fontSize": 24, "wordWrap": 300})
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    # ========================================================================
    # Font
    # ========================================================================
    font_family: str = "sans-serif"
    """Font family name, or one of the generic families (sans-serif, serif, monospace)."""

    font_style: FontStyle = "normal"
    font_weight: FontWeight = "normal"
    """"normal", "bold", or a multiple of 100 from 100 to 900."""

    font_variant: FontVariant = "normal"

    font_size: float = Field(16.0, gt=0, allow_inf_nan=False)
    """Font size in pixels."""

    line_height: float | None = Field(None, ge=0, allow_inf_nan=False)
    """Height of each line in pixels. None or 0 means font_size * 1.2."""

    # ========================================================================
    # Paint state (passed through to the surface)
    # ========================================================================
    text_align: TextAlign = "left"
    text_baseline: TextBaseline = "bottom"
    text_color: Color = "black"

    word_wrap: Literal[False] | float = False
    """False to only break on newlines, otherwise the maximum line width in pixels."""

    shadow_blur: float = Field(0.0, ge=0, allow_inf_nan=False)
    shadow_offset_x: float = 0.0
    shadow_offset_y: float = 0.0
    shadow_color: Color | None = None
    """Shadow color. None disables the shadow."""

    @field_validator("word_wrap", mode="before")
    @classmethod
    def _check_word_wrap(cls, value: Any) -> Any:
        if value is False:
            return value
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValueError(f"must be false or a number of pixels, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"must be a finite number greater than 0, got {value!r}")
        return float(value)

    # ========================================================================
    # Computed Properties
    # ========================================================================

    @property
    def resolved_line_height(self) -> float:
        """Line height in pixels, falling back to font_size * 1.2."""
        return self.line_height or self.font_size * LINE_HEIGHT_RATIO

    @property
    def font(self) -> str:
        """CSS font shorthand, e.g. "italic normal bold 16px serif"."""
        size = f"{self.font_size:g}px"
        return f"{self.font_style} {self.font_variant} {self.font_weight} {size} {self.font_family}"


DEFAULT_STYLE = TextStyle()

# camelCase alias -> field name
_FIELD_NAMES = {to_camel(name): name for name in TextStyle.model_fields}


def _field_name(key: str) -> str:
    return _FIELD_NAMES.get(key, key)


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "style"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def resolve_style(
    partial: Mapping[str, Any] | TextStyle | None = None,
    base: TextStyle | None = None,
) -> TextStyle:
    """
    Merge a partial style over a base style.

    The merge is shallow: every key present in ``partial`` replaces the base
    value, keys absent from it keep the base value, and unknown keys are kept.

    Args:
        partial: Style keys to override, in snake_case or camelCase.
        base: Style to merge over. Defaults to DEFAULT_STYLE.

    Returns:
        Validated TextStyle.

    Raises:
        InvalidArgument: If partial is neither a mapping nor a TextStyle.
        InvalidConfiguration: If the merged style does not validate.
    """
    if base is None:
        base = DEFAULT_STYLE
    if partial is None:
        return base

    if isinstance(partial, TextStyle):
        # Only the fields given when the instance was built override the base
        updates = partial.model_dump(exclude_unset=True)
        updates.update(partial.model_extra or {})
    elif isinstance(partial, Mapping):
        updates = dict(partial)
    else:
        raise InvalidArgument(f"style must be a mapping, got {type(partial).__name__}")

    merged = base.model_dump()
    for key, value in updates.items():
        merged[_field_name(key)] = value

    try:
        return TextStyle.model_validate(merged)
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid text style: {_format_errors(e)}") from e


def resolve_resolution(value: Any = None, default_scale: float | None = None) -> float:
    """
    Validate a resolution (pixel density scale).

    Args:
        value: Requested resolution. None falls back to default_scale.
        default_scale: Host pixel density, queried by the caller. None means 1.

    Returns:
        Resolution as a float greater than 0.

    Raises:
        InvalidArgument: If the value is not a number, or is NaN.
        InvalidRange: If the value is 0, negative or infinite.
    """
    if value is None:
        value = 1.0 if default_scale is None else default_scale

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"resolution must be a number, got {type(value).__name__}")

    value = float(value)
    if math.isnan(value):
        raise InvalidArgument("resolution must be a number, got NaN")
    if value == 0:
        raise InvalidRange("resolution must be greater than 0")
    if value < 0:
        raise InvalidRange(f"resolution must be a positive number, got {value:g}")
    if math.isinf(value):
        raise InvalidRange("resolution must be finite")

    return value


def load_style(style_path: Path) -> TextStyle:
    """
    Load a text style from a TOML file.

    Keys may sit at the top level or under a ``[style]`` table:

        [style]
        fontFamily = "serif"
        font_size = 24
        word_wrap = 320

    Args:
        style_path: Path to the TOML file.

    Returns:
        Validated TextStyle merged over the defaults.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        InvalidConfiguration: If the style is invalid.
    """
    if not style_path.exists():
        raise FileNotFoundError(f"Style file not found: {style_path}")

    with open(style_path, "rb") as f:
        data = tomllib.load(f)

    table = data.get("style", data)
    if not isinstance(table, dict):
        raise InvalidConfiguration(f"[style] in {style_path} must be a table")

    logger.debug(f"Loaded {len(table)} style key(s) from {style_path}")
    return resolve_style(table)
