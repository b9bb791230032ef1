from .components import ALPHA, ComponentDefinition, SpaceDescriptor
from .requests import RGBA, ColorConvertRequest, CssColorString, FormattingOptions, ToNextColorOptions
from .responses import ConversionResult

__all__ = [
    "ALPHA",
    "ComponentDefinition",
    "SpaceDescriptor",
    "RGBA",
    "ColorConvertRequest",
    "CssColorString",
    "FormattingOptions",
    "ToNextColorOptions",
    "ConversionResult",
]
