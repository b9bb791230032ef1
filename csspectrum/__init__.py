"""
csspectrum: parse, convert and manipulate CSS colors.

    >>> from csspectrum import parse
    >>> parse("#ff0000").to("hsl")
    'hsl(0, 100%, 50%)'
"""

import logging

from .api import (
    contrast_ratio,
    contrast_report,
    convert,
    is_accessible_pair,
    is_color_mix,
    is_parsable,
    is_relative,
    is_valid,
    list_formats,
    list_spaces,
    parse,
    patterns,
    register_format,
    register_named_color,
    register_space,
    type_of,
)
from .color import Color, ModelView
from .converters import XYZA, ComponentConverter, OpaqueConverter
from .errors import ColorError, FormatError, GrammarError, RegistrationConflict, UnsupportedFormat
from .registry import Registry, default_registry
from .schemas import (
    RGBA,
    ColorConvertRequest,
    ComponentDefinition,
    ConversionResult,
    FormattingOptions,
    SpaceDescriptor,
    ToNextColorOptions,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "Color",
    "ModelView",
    "XYZA",
    "ComponentConverter",
    "OpaqueConverter",
    "ComponentDefinition",
    "SpaceDescriptor",
    "Registry",
    "default_registry",
    "RGBA",
    "ColorConvertRequest",
    "ConversionResult",
    "FormattingOptions",
    "ToNextColorOptions",
    "ColorError",
    "FormatError",
    "GrammarError",
    "RegistrationConflict",
    "UnsupportedFormat",
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
