from typing import Optional

from ..schemas.components import ComponentDefinition
from ..schemas.requests import FormattingOptions


def format_number(value: float, decimals: int) -> str:
    """Fixed-point rendering without trailing zeros; never prints "-0"."""
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def decimals_for(definition: ComponentDefinition, options: Optional[FormattingOptions], shift: int = 0) -> int:
    """
    Digits to print for a channel. shift accounts for unit changes, e.g. an
    oklab lightness of 0.6279 printed as 62.79% needs two digits fewer.
    """
    if options is not None and options.precision is not None:
        return options.precision
    return max(0, definition.decimals - shift)


def fmt(value: float, definition: ComponentDefinition, options: Optional[FormattingOptions] = None) -> str:
    return format_number(value, decimals_for(definition, options))


def fmt_percent(value: float, definition: ComponentDefinition, options: Optional[FormattingOptions] = None, scale: float = 1.0) -> str:
    shift = 2 if scale == 100 else 0
    return f"{format_number(value * scale, decimals_for(definition, options, shift))}%"


def fmt_alpha(value: float) -> str:
    return format_number(value, 3)


def is_opaque(alpha: float) -> bool:
    return alpha >= 1.0
