"""
Converter interfaces.

Two kinds exist. ComponentConverter exposes named channels (rgb, hsl, lab,
every color() space ...) and can be read and edited channel by channel.
OpaqueConverter only maps whole strings to and from the canonical value
(hex, named). Callers branch with isinstance.
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, List, NamedTuple, Optional, Pattern, Sequence, Union

from .. import config as c
from ..errors import FormatError
from ..schemas.components import ALPHA, ComponentDefinition
from ..schemas.requests import FormattingOptions


class XYZA(NamedTuple):
    """Canonical value: CIE XYZ relative to D65 plus alpha."""

    x: float
    y: float
    z: float
    alpha: float = 1.0


class ComponentConverter(ABC):
    def __init__(self, name: str, pattern: Pattern, components: Dict[str, ComponentDefinition]):
        self.name = name
        self._pattern = pattern
        self.components: Dict[str, ComponentDefinition] = dict(components)
        self.components.setdefault("alpha", ALPHA)

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    def matches(self, text: str) -> bool:
        return self.pattern.match(text) is not None

    @property
    def channel_names(self) -> List[str]:
        """Channel names ordered by index, alpha last."""
        return sorted(self.components, key=lambda n: self.components[n].index)

    def channel(self, name: str) -> ComponentDefinition:
        try:
            return self.components[name.lower()]
        except KeyError:
            raise FormatError(
                f"Unknown component '{name}' for {self.name}; expected one of {', '.join(self.channel_names)}"
            ) from None

    @property
    def hue_channel(self) -> Optional[str]:
        for name in self.channel_names:
            if self.components[name].loop:
                return name
        return None

    def normalize(self, values: Sequence[float]) -> List[float]:
        """Fit and quantize a full component array (alpha included)."""
        out = []
        for name in self.channel_names:
            d = self.components[name]
            v = values[d.index] if d.index < len(values) else 1.0
            out.append(d.normalize(v))
        return out

    def check_finite(self, values: Sequence[float]) -> None:
        for name, v in zip(self.channel_names, values):
            if math.isnan(v):
                raise FormatError(f"Cannot serialize {self.name}: component '{name}' is NaN")
            if math.isinf(v):
                raise FormatError(f"Cannot serialize {self.name}: component '{name}' is infinite")

    def in_gamut(self, xyza: XYZA, tolerance: float = c.GAMUT_EPS) -> bool:
        """Every bounded, non-hue channel lies within its range (alpha ignored)."""
        values = self.from_xyza(xyza)
        for name in self.channel_names:
            d = self.components[name]
            if name == "alpha" or d.loop:
                continue
            if not d.contains(values[d.index], tolerance):
                return False
        return True

    def render(self, xyza: XYZA, options: Optional[FormattingOptions] = None) -> str:
        values = self.normalize(self.from_xyza(xyza))
        self.check_finite(values)
        return self.format(values, options or FormattingOptions())

    @abstractmethod
    def parse(self, text: str) -> List[float]:
        """Matched text -> [c1, c2, c3, alpha]."""

    @abstractmethod
    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        """Normalized components -> text."""

    @abstractmethod
    def to_xyza(self, values: Sequence[float]) -> XYZA:
        ...

    @abstractmethod
    def from_xyza(self, xyza: XYZA) -> List[float]:
        ...

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class OpaqueConverter(ABC):
    model: str = "rgb"

    def __init__(self, name: str, pattern: Optional[Pattern] = None):
        self.name = name
        self._pattern = pattern

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    def matches(self, text: str) -> bool:
        return self.pattern.match(text) is not None

    def render(self, xyza: XYZA, options: Optional[FormattingOptions] = None) -> str:
        if any(math.isnan(v) for v in xyza):
            raise FormatError(f"Cannot serialize {self.name}: value is NaN")
        if any(math.isinf(v) for v in xyza):
            raise FormatError(f"Cannot serialize {self.name}: value is infinite")
        return self.from_xyza(xyza)

    @abstractmethod
    def to_xyza(self, text: str) -> XYZA:
        ...

    @abstractmethod
    def from_xyza(self, xyza: XYZA) -> str:
        ...

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


Converter = Union[ComponentConverter, OpaqueConverter]
