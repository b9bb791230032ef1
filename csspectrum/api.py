"""
Module-level entry points over the default registry.

Every function takes an optional ``registry`` so callers can work against an
isolated Registry instead of the process-wide one.
"""

import logging
from typing import Dict, List, Optional, Pattern, Union

from .color import Color
from .contrast import wcag_levels
from .converters import Converter
from .errors import ColorError
from .mix import COLOR_MIX_RE, is_color_mix
from .registry import Registry, default_registry
from .relative import RELATIVE_RE, is_relative
from .schemas.components import SpaceDescriptor
from .schemas.requests import RGBA, ColorConvertRequest
from .schemas.responses import ConversionResult

logger = logging.getLogger(__name__)

__all__ = [
    "parse",
    "type_of",
    "convert",
    "is_valid",
    "is_parsable",
    "is_relative",
    "is_color_mix",
    "patterns",
    "list_formats",
    "list_spaces",
    "register_named_color",
    "register_format",
    "register_space",
    "contrast_ratio",
    "contrast_report",
    "is_accessible_pair",
]


def parse(text: str, registry: Optional[Registry] = None) -> Color:
    return Color.parse(text, registry)


def type_of(text: str, registry: Optional[Registry] = None) -> str:
    return Color.type_of(text, registry)


def is_parsable(text: str, registry: Optional[Registry] = None) -> bool:
    try:
        Color.parse(text, registry)
    except ColorError:
        return False
    return True


def is_valid(fmt: str, text: str, registry: Optional[Registry] = None) -> bool:
    """Whether text is written in fmt (relative and color-mix forms count by their model)."""
    try:
        return type_of(text, registry) == fmt.strip().lower() and is_parsable(text, registry)
    except ColorError:
        return False


def patterns(registry: Optional[Registry] = None) -> Dict[str, Pattern]:
    """Pattern table for substring scanners: every converter plus the two function forms."""
    table = (registry or default_registry).patterns()
    table["relative"] = RELATIVE_RE
    table["color-mix"] = COLOR_MIX_RE
    return table


def list_formats(registry: Optional[Registry] = None) -> List[str]:
    return (registry or default_registry).list_formats()


def list_spaces(registry: Optional[Registry] = None) -> List[str]:
    return (registry or default_registry).list_spaces()


def register_named_color(name: str, rgba: Union[RGBA, dict, tuple, list], registry: Optional[Registry] = None) -> None:
    (registry or default_registry).register_named_color(name, rgba)


def register_format(name: str, converter: Converter, registry: Optional[Registry] = None) -> None:
    (registry or default_registry).register_format(name, converter)


def register_space(name: str, descriptor: Union[SpaceDescriptor, dict], registry: Optional[Registry] = None) -> None:
    (registry or default_registry).register_space(name, descriptor)


def contrast_ratio(first: Union[Color, str], second: Union[Color, str], registry: Optional[Registry] = None) -> float:
    return Color.contrast_ratio(first, second, registry)


def contrast_report(first: Union[Color, str], second: Union[Color, str], registry: Optional[Registry] = None) -> dict:
    """Ratio plus Pass/Fail for each WCAG level and text size."""
    ratio = contrast_ratio(first, second, registry)
    return {"ratio": ratio, "levels": wcag_levels(ratio)}


def is_accessible_pair(
    first: Union[Color, str],
    second: Union[Color, str],
    level: str = "AA",
    large_text: bool = False,
    registry: Optional[Registry] = None,
) -> bool:
    return Color.is_accessible_pair(first, second, level, large_text, registry)


def convert(request: Union[ColorConvertRequest, dict], registry: Optional[Registry] = None) -> ConversionResult:
    """Parse a CSS color and render it in the target format."""
    if isinstance(request, dict):
        request = ColorConvertRequest(**request)
    color = Color.parse(request.code, registry)
    result = color.to(request.target, modern=request.modern, precision=request.precision)
    logger.debug("converted %s -> %s", request.code, result)
    return ConversionResult(
        code=request.code,
        source_format=type_of(request.code, registry),
        target=request.target,
        result=result,
    )
