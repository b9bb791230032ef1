"""
The Color value object.

A Color holds one canonical value (D65 XYZ plus alpha) and nothing else;
every notation is computed on demand by the registry's converters. Colors
are immutable: editing channels or applying a filter returns a new Color.
"""

import logging
import math
import random
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel

from . import config as c
from .contrast import composite_luminance, contrast_ratio, wcag_threshold
from .converters import XYZA, ComponentConverter
from .errors import FormatError, UnsupportedFormat
from .hue import interpolate_hue
from .registry import Registry, default_registry
from .schemas.requests import FormattingOptions, ToNextColorOptions

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseModel)
Update = Union[float, Callable[[float], float]]


def coerce_options(model: Type[OptionsT], options: Any, overrides: Mapping[str, Any]) -> OptionsT:
    """Accept a model instance, a dict or nothing, with keyword overrides on top."""
    if isinstance(options, model) and not overrides:
        return options
    if options is None:
        data: Dict[str, Any] = {}
    elif isinstance(options, BaseModel):
        data = options.model_dump(include=set(model.model_fields))
    else:
        data = dict(options)
    data.update(overrides)
    return model(**data)


class Color:
    """An immutable CSS color, stored as D65 XYZ plus alpha."""

    def __init__(self, x: float, y: float, z: float, alpha: float = 1.0, registry: Optional[Registry] = None):
        alpha = float(alpha)
        if not math.isnan(alpha):
            alpha = max(0.0, min(1.0, alpha))
        self._xyza = XYZA(float(x), float(y), float(z), alpha)
        self._registry = registry or default_registry

    @classmethod
    def from_xyza(cls, xyza: Sequence[float], registry: Optional[Registry] = None) -> "Color":
        """Build a Color from a canonical (x, y, z, alpha) sequence."""
        return cls(*xyza, registry=registry)

    @classmethod
    def parse(cls, text: str, registry: Optional[Registry] = None) -> "Color":
        """
        Parse any supported CSS color string.

        Relative color syntax and color-mix() are recognized first; otherwise
        each registered converter's pattern is tried in registry order.
        """
        from .mix import is_color_mix, mix_colors
        from .relative import is_relative, resolve_relative

        if not isinstance(text, str):
            raise TypeError("string required")
        registry = registry or default_registry
        s = text.strip().lower()

        if is_relative(s):
            return resolve_relative(s, registry)
        if is_color_mix(s):
            return mix_colors(s, registry)

        found = registry.match(s)
        if found is None:
            raise UnsupportedFormat(text, registry.names())
        _, converter = found
        if isinstance(converter, ComponentConverter):
            xyza = converter.to_xyza(converter.parse(s))
        else:
            xyza = converter.to_xyza(s)
        return cls.from_xyza(xyza, registry)

    @classmethod
    def type_of(cls, text: str, registry: Optional[Registry] = None) -> str:
        """Name of the format or space that parse() would use for text."""
        from .mix import is_color_mix, mix_model
        from .relative import is_relative, relative_model

        registry = registry or default_registry
        s = text.strip().lower()
        if is_relative(s):
            return relative_model(s, registry)
        if is_color_mix(s):
            return mix_model(s, registry)
        found = registry.match(s)
        if found is None:
            raise UnsupportedFormat(text, registry.names())
        return found[0]

    @classmethod
    def define(cls, model: str, registry: Optional[Registry] = None) -> "ModelView":
        """A channel view over opaque black, for building a color from components."""
        return cls(0.0, 0.0, 0.0, 1.0, registry).in_model(model)

    @classmethod
    def random(cls, fmt: str = "rgb", registry: Optional[Registry] = None, rng: Optional[random.Random] = None) -> str:
        """Random opaque sRGB color rendered in fmt (or a random table name for named)."""
        registry = registry or default_registry
        rng = rng or random.Random()
        if fmt == "named":
            return rng.choice(list(registry.named_colors))
        rgb = registry.get_model("rgb")
        values = [rng.randint(0, int(c.RGB_MAX)) for _ in range(3)] + [1.0]
        return cls.from_xyza(rgb.to_xyza(values), registry).to(fmt)

    # Accessors -----------------------------------------------------

    @property
    def xyza(self) -> XYZA:
        """Canonical D65 XYZ plus alpha."""
        return self._xyza

    @property
    def alpha(self) -> float:
        """Alpha in [0, 1]."""
        return self._xyza.alpha

    @property
    def registry(self) -> Registry:
        """Registry this color resolves formats against."""
        return self._registry

    @property
    def name(self) -> Optional[str]:
        """Exact named-color match, if any, against the registry as it is now."""
        named = self._registry.named
        return named.lookup(self._xyza) if named is not None else None

    def _derive(self, xyza: Sequence[float]) -> "Color":
        return type(self).from_xyza(xyza, self._registry)

    # Output --------------------------------------------------------

    def to(self, fmt: str, options: Union[FormattingOptions, dict, None] = None, **kwargs) -> str:
        """Render in a registered format or color() space."""
        opts = coerce_options(FormattingOptions, options, kwargs)
        return self._registry.get(fmt).render(self._xyza, opts)

    def to_all_formats(self, options: Union[FormattingOptions, dict, None] = None, **kwargs) -> Dict[str, str]:
        """Render in every registered notation; named only when there is an exact match."""
        out = {}
        for fmt in self._registry.list_formats():
            if fmt == "named" and self.name is None:
                continue
            out[fmt] = self.to(fmt, options, **kwargs)
        return out

    def to_all_spaces(self, options: Union[FormattingOptions, dict, None] = None, **kwargs) -> Dict[str, str]:
        """Render in every registered color() space."""
        return {space: self.to(space, options, **kwargs) for space in self._registry.list_spaces()}

    def to_next_color(self, current: str, options: Union[ToNextColorOptions, dict, None] = None, **kwargs) -> str:
        """
        Render this color in the format after current's in registry order.

        Excluded formats are skipped, and so is named when the color has no
        exact name.
        """
        opts = coerce_options(ToNextColorOptions, options, kwargs)
        excluded = {name.lower() for name in opts.exclude}
        formats = [name for name in self._registry.converters() if name not in excluded]
        if self.name is None:
            formats = [name for name in formats if name != "named"]
        if not formats:
            raise FormatError("No available formats after applying exclusions.")

        kind = self.type_of(current, self._registry)
        index = len(formats) - 1 - formats[::-1].index(kind) if kind in formats else -1
        next_format = formats[(index + 1) % len(formats)]
        logger.debug("cycling %s -> %s", kind, next_format)
        return self.to(next_format, modern=opts.modern, precision=opts.precision)

    def in_model(self, model: str) -> "ModelView":
        """Channel view of this color in a component model."""
        return ModelView(self, self._registry.get_model(model))

    # Comparison ----------------------------------------------------

    def equals(self, other: Union["Color", str], tolerance: float = c.EQUALITY_EPS) -> bool:
        """Canonical values match within tolerance."""
        if isinstance(other, str):
            other = Color.parse(other, self._registry)
        return all(abs(a - b) <= tolerance for a, b in zip(self._xyza, other.xyza))

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        x, y, z, a = self._xyza
        return f"Color(x={x:.6g}, y={y:.6g}, z={z:.6g}, alpha={a:.4g})"

    def __str__(self):
        return self.to("hex") if self.name is None else self.name

    # Gamut, luminance and contrast ---------------------------------

    def is_in_gamut(self, space: str = "srgb", tolerance: float = c.GAMUT_EPS) -> bool:
        """Whether the color fits inside space's channel ranges."""
        return self._registry.get_model(space).in_gamut(self._xyza, tolerance)

    def get_luminance(self, background: Union["Color", str] = "white") -> float:
        """Relative luminance (canonical Y), composited over background when translucent."""
        if self.alpha >= 1:
            return self._xyza.y
        bg = background if isinstance(background, Color) else Color.parse(background, self._registry)
        return composite_luminance(self._xyza.y, self.alpha, bg.xyza.y)

    def is_dark(self, background: Union["Color", str] = "white") -> bool:
        """Luminance below the dark threshold."""
        return self.get_luminance(background) < c.DARK_LUMINANCE_THRESHOLD

    def is_light(self, background: Union["Color", str] = "white") -> bool:
        """Opposite of is_dark."""
        return not self.is_dark(background)

    def contrast_with(self, other: Union["Color", str]) -> float:
        """WCAG contrast ratio against another color."""
        if isinstance(other, str):
            other = Color.parse(other, self._registry)
        return contrast_ratio(self.get_luminance(), other.get_luminance())

    @classmethod
    def contrast_ratio(cls, first: Union["Color", str], second: Union["Color", str], registry: Optional[Registry] = None) -> float:
        """WCAG contrast ratio between two colors or color strings."""
        a = first if isinstance(first, Color) else cls.parse(first, registry)
        return a.contrast_with(second)

    @classmethod
    def is_accessible_pair(
        cls,
        first: Union["Color", str],
        second: Union["Color", str],
        level: str = "AA",
        large_text: bool = False,
        registry: Optional[Registry] = None,
    ) -> bool:
        """Whether the pair meets the WCAG threshold for level and text size."""
        return cls.contrast_ratio(first, second, registry) >= wcag_threshold(level, large_text)

    def is_cool(self) -> bool:
        """HSL hue between 60 and 300 degrees."""
        h = self.in_model("hsl").get("h")
        return 60 < h < 300

    def is_warm(self) -> bool:
        """Opposite of is_cool."""
        return not self.is_cool()

    # Filters -------------------------------------------------------

    def opacity(self, alpha: float) -> "Color":
        """Same color with a new alpha."""
        x, y, z, _ = self._xyza
        return self._derive((x, y, z, alpha))

    def lighten(self, amount: float) -> "Color":
        """Raise HSL lightness by amount percentage points."""
        return self.in_model("hsl").set(l=lambda l: _clamp_percent(l + amount)).color

    def darken(self, amount: float) -> "Color":
        """Lower HSL lightness by amount percentage points."""
        return self.lighten(-amount)

    def saturate(self, amount: float) -> "Color":
        """Raise HSL saturation by amount percentage points."""
        return self.in_model("hsl").set(s=lambda s: _clamp_percent(s + amount)).color

    def desaturate(self, amount: float) -> "Color":
        """Lower HSL saturation by amount percentage points."""
        return self.saturate(-amount)

    def rotate(self, degrees: float) -> "Color":
        """Turn the HSL hue by degrees."""
        return self.in_model("hsl").set(h=lambda h: (h + degrees) % c.HUE_MAX).color

    def grayscale(self) -> "Color":
        """Drop HSL saturation to zero."""
        return self.in_model("hsl").set(s=0).color

    def invert(self) -> "Color":
        """Invert each sRGB channel."""
        return self.in_model("rgb").set(
            r=lambda v: c.RGB_MAX - v,
            g=lambda v: c.RGB_MAX - v,
            b=lambda v: c.RGB_MAX - v,
        ).color


def _clamp_percent(v: float) -> float:
    return max(0.0, min(c.PERCENT, v))


class ModelView:
    """
    Channel-level view of a Color in one model (rgb, hsl, lab, a color()
    space ...). Editing methods return a new view over a new Color.
    """

    def __init__(self, color: Color, converter: ComponentConverter):
        self._color = color
        self._converter = converter

    @property
    def color(self) -> Color:
        """The Color this view reads."""
        return self._color

    @property
    def model(self) -> str:
        """Name of the viewed model."""
        return self._converter.name

    @property
    def components(self) -> List[str]:
        """Channel names in index order, alpha last."""
        return self._converter.channel_names

    def _raw(self) -> List[float]:
        return list(self._converter.from_xyza(self._color.xyza))

    def get(self, name: str) -> float:
        """Fitted and quantized value of one channel."""
        d = self._converter.channel(name)
        return d.normalize(self._raw()[d.index])

    def get_components(self) -> Dict[str, float]:
        """Quantized channels keyed by name."""
        return dict(zip(self.components, self.get_array()))

    def get_array(self) -> List[float]:
        """Quantized channels in index order."""
        return self._converter.normalize(self._raw())

    def set(self, values: Optional[Mapping[str, Update]] = None, **kwargs: Update) -> "ModelView":
        """
        Replace channels with literals or with functions of the current
        (unquantized) value.
        """
        updates = dict(values or {}, **kwargs)
        raw = self._raw()
        for name, update in updates.items():
            d = self._converter.channel(name)
            raw[d.index] = float(update(raw[d.index]) if callable(update) else update)
        return self._rewrap(raw)

    def set_array(self, values: Sequence[float]) -> "ModelView":
        """Replace all channels; alpha is kept when only three values are given."""
        values = list(values)
        if len(values) == 3:
            values.append(self._color.alpha)
        return self._rewrap(values)

    def mix_with(self, other: Union[Color, str], amount: float = 0.5, hue_method: str = "shorter") -> "ModelView":
        """Interpolate channel-wise toward other; hues follow hue_method."""
        t = max(0.0, min(1.0, float(amount)))
        if isinstance(other, str):
            other = Color.parse(other, self._color.registry)
        mine = self.get_array()
        theirs = other.in_model(self.model).get_array()
        mixed = []
        for name, a, b in zip(self.components, mine, theirs):
            if self._converter.components[name].loop:
                mixed.append(interpolate_hue(a, b, t, hue_method))
            else:
                mixed.append(a + (b - a) * t)
        return self._rewrap(mixed)

    def _rewrap(self, values: Sequence[float]) -> "ModelView":
        return ModelView(self._color._derive(self._converter.to_xyza(values)), self._converter)

    def to(self, fmt: str, options: Union[FormattingOptions, dict, None] = None, **kwargs) -> str:
        """Render the underlying color."""
        return self._color.to(fmt, options, **kwargs)

    def in_model(self, model: str) -> "ModelView":
        """Switch the view to another model."""
        return self._color.in_model(model)

    def __repr__(self):
        return f"<ModelView {self.model} {self.get_components()}>"
