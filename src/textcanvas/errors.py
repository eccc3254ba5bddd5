"""Exceptions raised by textcanvas."""


class TextCanvasError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(TextCanvasError, TypeError):
    """A value of the wrong type was given for the text or the resolution."""


class InvalidRange(TextCanvasError, ValueError):
    """Empty text, or a resolution that is zero, negative or infinite."""


class InvalidConfiguration(TextCanvasError, ValueError):
    """A style that cannot be laid out (bad font size, word wrap limit, enum value...)."""


class MeasurementFailure(TextCanvasError, RuntimeError):
    """The measurement function raised or returned a negative or NaN width."""
