"""
Converter registry: every notation and color() space by name, plus the
named-color table, in the order parsing tries them.

A module-level default instance backs the public API. Tests and embedders
can build isolated registries with Registry() or default_registry.copy().
"""

import logging
import threading
from typing import Dict, List, Optional, Pattern, Tuple, Union

from pydantic import ValidationError

from .converters import (
    NAMED,
    ComponentConverter,
    Converter,
    NamedConverter,
    OpaqueConverter,
    SpaceConverter,
    build_formats,
    build_spaces,
    normalize_name,
)
from .errors import FormatError, RegistrationConflict, UnsupportedFormat
from .schemas.components import SpaceDescriptor
from .schemas.requests import RGBA

logger = logging.getLogger(__name__)


class Registry:
    """Converters and named colors, in parse order, guarded by one lock."""

    def __init__(self, builtins: bool = True):
        self._lock = threading.Lock()
        self.named_colors: Dict[str, tuple] = dict(NAMED) if builtins else {}
        self.formats: Dict[str, Converter] = build_formats(self.named_colors) if builtins else {}
        self.spaces: Dict[str, SpaceConverter] = build_spaces() if builtins else {}

    def copy(self) -> "Registry":
        """Independent registry with the same entries (the named table is copied)."""
        other = Registry(builtins=False)
        with self._lock:
            other.named_colors = dict(self.named_colors)
            for name, converter in self.formats.items():
                if isinstance(converter, NamedConverter):
                    converter = NamedConverter(other.named_colors)
                other.formats[name] = converter
            other.spaces = dict(self.spaces)
        return other

    # Lookup --------------------------------------------------------

    def converters(self) -> Dict[str, Converter]:
        """Formats then spaces, in dispatch order. A snapshot, safe to iterate."""
        with self._lock:
            return {**self.formats, **self.spaces}

    def names(self) -> List[str]:
        """Every format and space name, in dispatch order."""
        return list(self.converters())

    def list_formats(self) -> List[str]:
        """Registered notation names, in dispatch order."""
        return list(self.formats)

    def list_spaces(self) -> List[str]:
        """Registered color() space names."""
        return list(self.spaces)

    def get(self, name: str) -> Converter:
        """Converter for a format or space name."""
        converter = self.converters().get(name.strip().lower())
        if converter is None:
            raise UnsupportedFormat(name, self.names())
        return converter

    def get_model(self, name: str) -> ComponentConverter:
        """A converter with channels; hex/named and other opaque formats are rejected."""
        converter = self.get(name)
        if not isinstance(converter, ComponentConverter):
            raise FormatError(f"Format '{name}' has no components; use one of {', '.join(self.models())}")
        return converter

    def models(self) -> List[str]:
        """Names of every converter that has channels."""
        return [name for name, conv in self.converters().items() if isinstance(conv, ComponentConverter)]

    def match(self, text: str) -> Optional[Tuple[str, Converter]]:
        """First converter whose pattern accepts the (trimmed, lower-cased) text."""
        for name, converter in self.converters().items():
            if converter.matches(text):
                logger.debug("%r matched converter %s", text, name)
                return name, converter
        return None

    def patterns(self) -> Dict[str, Pattern]:
        """Recognition pattern of every converter, by name."""
        return {name: converter.pattern for name, converter in self.converters().items()}

    @property
    def named(self) -> Optional[NamedConverter]:
        """The named-color converter, if one is registered."""
        converter = self.formats.get("named")
        return converter if isinstance(converter, NamedConverter) else None

    # Registration --------------------------------------------------

    def register_named_color(self, name: str, rgba: Union[RGBA, dict, tuple, list]) -> None:
        """
        Add a named color. Names are normalized (case, whitespace, hyphens);
        a name that already exists raises RegistrationConflict.
        """
        key = normalize_name(name)
        if not key:
            raise FormatError(f"Invalid color name: {name!r}")
        try:
            if isinstance(rgba, RGBA):
                value = rgba
            elif isinstance(rgba, dict):
                value = RGBA(**rgba)
            else:
                value = RGBA(**dict(zip("rgba", rgba)))
        except ValidationError as e:
            raise FormatError(f"Invalid RGBA for named color '{name}': {e}") from e
        with self._lock:
            if key in self.named_colors:
                raise RegistrationConflict(f"Named color '{key}' is already registered")
            entry = (value.r, value.g, value.b) if value.a >= 1 else (value.r, value.g, value.b, value.a)
            self.named_colors[key] = entry
        logger.debug("registered named color %s = %r", key, entry)

    def register_format(self, name: str, converter: Converter) -> None:
        """Add or replace a notation. Replacing an existing name is allowed."""
        if not isinstance(converter, (ComponentConverter, OpaqueConverter)):
            raise TypeError(f"converter must be a ComponentConverter or OpaqueConverter, got {type(converter).__name__}")
        key = name.strip().lower()
        with self._lock:
            if key in self.formats:
                logger.warning("format %s is being overwritten", key)
            self.formats[key] = converter

    def register_space(self, name: str, descriptor: Union[SpaceDescriptor, dict]) -> SpaceConverter:
        """Add or replace a color() space built from a descriptor."""
        if isinstance(descriptor, dict):
            descriptor = SpaceDescriptor(**descriptor)
        key = name.strip().lower()
        converter = SpaceConverter(key, descriptor)
        with self._lock:
            if key in self.spaces:
                logger.warning("space %s is being overwritten", key)
            self.spaces[key] = converter
        return converter


default_registry = Registry()
