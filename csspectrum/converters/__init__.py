from typing import Dict

from .base import XYZA, ComponentConverter, Converter, OpaqueConverter
from .hex import HexConverter
from .lab import LabConverter, LchConverter
from .named import NAMED, NamedConverter, RGBATuple, normalize_name
from .oklab import OklabConverter, OklchConverter
from .spaces import SPACES, SpaceConverter
from .srgb import HslConverter, HwbConverter, RgbConverter


def build_formats(named_table: Dict[str, RGBATuple]) -> Dict[str, Converter]:
    """Built-in notations in dispatch order."""
    return {
        "rgb": RgbConverter(),
        "named": NamedConverter(named_table),
        "hex": HexConverter(),
        "hsl": HslConverter(),
        "hwb": HwbConverter(),
        "lab": LabConverter(),
        "lch": LchConverter(),
        "oklab": OklabConverter(),
        "oklch": OklchConverter(),
    }


def build_spaces() -> Dict[str, SpaceConverter]:
    return {name: SpaceConverter(name, descriptor) for name, descriptor in SPACES.items()}


__all__ = [
    "XYZA",
    "ComponentConverter",
    "Converter",
    "OpaqueConverter",
    "SpaceConverter",
    "NamedConverter",
    "NAMED",
    "SPACES",
    "normalize_name",
    "build_formats",
    "build_spaces",
]
