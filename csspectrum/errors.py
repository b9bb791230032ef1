"""
Exception types raised by the color engine.
"""

from typing import Iterable


class ColorError(ValueError):
    """Base class for every error raised while parsing or converting colors."""


class FormatError(ColorError):
    """Input matched a notation but a value is unusable (out of range, NaN, unknown channel)."""


class UnsupportedFormat(FormatError):
    """No converter recognizes the input, or the requested format does not exist."""

    def __init__(self, value: str, known: Iterable[str]):
        self.value = value
        self.known = list(known)
        super().__init__(
            f"Unsupported color format: {value}\nSupported formats: {', '.join(self.known)}"
        )


class GrammarError(ColorError):
    """Relative color or color-mix() syntax is malformed."""


class RegistrationConflict(ColorError):
    """A named color with the same normalized name is already registered."""
