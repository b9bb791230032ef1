"""
sRGB family: rgb(), hsl() and hwb() notations plus the shared sRGB math.

All three describe gamma-encoded sRGB; they differ only in how channels are
laid out. Internally channels are floats in [0, 1] (values outside that
range are out-of-gamut colors and survive until output clamping).
"""

import math
from typing import List, Sequence, Tuple

from .. import config as c
from ..matrices import SRGB_TO_XYZ, XYZ_TO_SRGB, multiply_vector
from ..errors import FormatError
from ..schemas.components import ComponentDefinition
from ..schemas.requests import FormattingOptions
from .base import XYZA, ComponentConverter
from .formatting import fmt, fmt_alpha, fmt_percent, is_opaque
from .patterns import function_pattern, hue, number_or_percent, parse_alpha, parse_channel, require_range

# Transfer functions ------------------------------------------------


def srgb_to_linear(v: float) -> float:
    """sRGB companding, sign-preserving for out-of-gamut values."""
    a = abs(v)
    if a <= c.SRGB_TO_LINEAR_TH:
        return v / c.SRGB_SLOPE
    return math.copysign(((a + c.SRGB_OFFSET) / c.SRGB_DIVISOR) ** c.SRGB_GAMMA, v)


def linear_to_srgb(v: float) -> float:
    a = abs(v)
    if a <= c.LINEAR_TO_SRGB_TH:
        return v * c.SRGB_SLOPE
    return math.copysign(c.SRGB_DIVISOR * a ** (1 / c.SRGB_GAMMA) - c.SRGB_OFFSET, v)


def srgb_to_xyz(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Gamma-encoded sRGB in [0, 1] to D65 XYZ."""
    try:
        linear = (srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))
    except OverflowError:
        raise FormatError(f"sRGB value out of range: ({r:g}, {g:g}, {b:g})") from None
    return multiply_vector(SRGB_TO_XYZ, linear)


def xyz_to_srgb(x: float, y: float, z: float) -> Tuple[float, float, float]:
    lr, lg, lb = multiply_vector(XYZ_TO_SRGB, (x, y, z))
    return linear_to_srgb(lr), linear_to_srgb(lg), linear_to_srgb(lb)


# Cylindrical helpers -----------------------------------------------


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[float, float, float]:
    """Convert HSL to RGB. h in deg, s,l in [0,1]; result in [0,1]."""
    h = h % c.HUE_MAX
    chroma = (1 - abs(2 * l - 1)) * s
    hp = h / c.HUE_SECTOR
    x = chroma * (1 - abs((hp % 2) - 1))

    if 0 <= hp < 1:
        r1, g1, b1 = chroma, x, 0.0
    elif 1 <= hp < 2:
        r1, g1, b1 = x, chroma, 0.0
    elif 2 <= hp < 3:
        r1, g1, b1 = 0.0, chroma, x
    elif 3 <= hp < 4:
        r1, g1, b1 = 0.0, x, chroma
    elif 4 <= hp < 5:
        r1, g1, b1 = x, 0.0, chroma
    else:
        r1, g1, b1 = chroma, 0.0, x

    m = l - chroma / 2
    return r1 + m, g1 + m, b1 + m


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """Convert RGB in [0,1] to HSL (h deg, s and l in [0,1])."""
    max_val = max(r, g, b)
    min_val = min(r, g, b)
    d = max_val - min_val
    l = (max_val + min_val) / 2
    if d < c.ACHROMATIC_EPS:
        return 0.0, 0.0, l
    denom = 1 - abs(2 * l - 1)
    s = d / denom if abs(denom) > c.EPS else 0.0
    if max_val == r:
        h = c.HUE_SECTOR * (((g - b) / d) % 6)
    elif max_val == g:
        h = c.HUE_SECTOR * ((b - r) / d + 2)
    else:
        h = c.HUE_SECTOR * ((r - g) / d + 4)
    return h % c.HUE_MAX, s, l


def hwb_to_rgb(h: float, w: float, bl: float) -> Tuple[float, float, float]:
    """HWB (w, bl in [0,1]) to RGB: the pure hue mixed with white and black."""
    if w + bl >= 1:
        gray = w / (w + bl)
        return gray, gray, gray
    r, g, b = hsl_to_rgb(h, 1.0, 0.5)
    k = 1 - w - bl
    return r * k + w, g * k + w, b * k + w


def rgb_to_hwb(r: float, g: float, b: float) -> Tuple[float, float, float]:
    h, _, _ = rgb_to_hsl(r, g, b)
    return h, min(r, g, b), 1 - max(r, g, b)


# Converters --------------------------------------------------------


class RgbConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "rgb",
            function_pattern("rgba?", number_or_percent, number_or_percent, number_or_percent),
            {
                "r": ComponentDefinition(index=0, min=0, max=c.RGB_MAX, step=1),
                "g": ComponentDefinition(index=1, min=0, max=c.RGB_MAX, step=1),
                "b": ComponentDefinition(index=2, min=0, max=c.RGB_MAX, step=1),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid RGB color format: {text}")
        *channels, a = m.groups()
        values = []
        for token, name in zip(channels, ("r", "g", "b")):
            v = parse_channel(token, self.components[name])
            require_range(v, 0, c.RGB_MAX, "RGB channel", token, text)
            values.append(v)
        values.append(parse_alpha(a, text))
        return values

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        r, g, b = (fmt(v, self.components[n], options) for n, v in zip("rgb", values))
        a = fmt_alpha(values[3])
        if options.modern:
            if is_opaque(values[3]):
                return f"rgb({r} {g} {b})"
            return f"rgb({r} {g} {b} / {a})"
        if is_opaque(values[3]):
            return f"rgb({r}, {g}, {b})"
        return f"rgba({r}, {g}, {b}, {a})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        r, g, b = (v / c.RGB_MAX for v in values[:3])
        return XYZA(*srgb_to_xyz(r, g, b), _alpha(values))

    def from_xyza(self, xyza: XYZA) -> List[float]:
        r, g, b = xyz_to_srgb(xyza.x, xyza.y, xyza.z)
        return [r * c.RGB_MAX, g * c.RGB_MAX, b * c.RGB_MAX, xyza.alpha]


class HslConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "hsl",
            function_pattern("hsla?", hue, number_or_percent, number_or_percent),
            {
                "h": ComponentDefinition(index=0, min=0, max=c.HUE_MAX, step=1, loop=True),
                "s": ComponentDefinition(index=1, min=0, max=c.PERCENT, step=0.1),
                "l": ComponentDefinition(index=2, min=0, max=c.PERCENT, step=0.1),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid HSL color format: {text}")
        h_val, s_val, l_val, a_val = m.groups()
        h = parse_channel(h_val, self.components["h"])
        s = parse_channel(s_val, self.components["s"])
        l = parse_channel(l_val, self.components["l"])
        require_range(s, 0, c.PERCENT, "HSL saturation", s_val, text)
        require_range(l, 0, c.PERCENT, "HSL lightness", l_val, text)
        return [h, s, l, parse_alpha(a_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        h = fmt(values[0], self.components["h"], options)
        s = fmt_percent(values[1], self.components["s"], options)
        l = fmt_percent(values[2], self.components["l"], options)
        a = fmt_alpha(values[3])
        if options.modern:
            if is_opaque(values[3]):
                return f"hsl({h} {s} {l})"
            return f"hsl({h} {s} {l} / {a})"
        if is_opaque(values[3]):
            return f"hsl({h}, {s}, {l})"
        return f"hsla({h}, {s}, {l}, {a})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        h, s, l = values[:3]
        r, g, b = hsl_to_rgb(h, s / c.PERCENT, l / c.PERCENT)
        return XYZA(*srgb_to_xyz(r, g, b), _alpha(values))

    def from_xyza(self, xyza: XYZA) -> List[float]:
        h, s, l = rgb_to_hsl(*xyz_to_srgb(xyza.x, xyza.y, xyza.z))
        return [h, s * c.PERCENT, l * c.PERCENT, xyza.alpha]


class HwbConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "hwb",
            function_pattern("hwb", hue, number_or_percent, number_or_percent),
            {
                "h": ComponentDefinition(index=0, min=0, max=c.HUE_MAX, step=0.001, loop=True),
                "w": ComponentDefinition(index=1, min=0, max=c.PERCENT, step=0.001),
                "b": ComponentDefinition(index=2, min=0, max=c.PERCENT, step=0.001),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid HWB color format: {text}")
        h_val, w_val, b_val, a_val = m.groups()
        h = parse_channel(h_val, self.components["h"])
        w = parse_channel(w_val, self.components["w"])
        bl = parse_channel(b_val, self.components["b"])
        require_range(w, 0, c.PERCENT, "HWB whiteness", w_val, text)
        require_range(bl, 0, c.PERCENT, "HWB blackness", b_val, text)
        return [h, w, bl, parse_alpha(a_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        h = fmt(values[0], self.components["h"], options)
        w = fmt_percent(values[1], self.components["w"], options)
        bl = fmt_percent(values[2], self.components["b"], options)
        if is_opaque(values[3]):
            return f"hwb({h} {w} {bl})"
        return f"hwb({h} {w} {bl} / {fmt_alpha(values[3])})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        h, w, bl = values[:3]
        r, g, b = hwb_to_rgb(h, w / c.PERCENT, bl / c.PERCENT)
        return XYZA(*srgb_to_xyz(r, g, b), _alpha(values))

    def from_xyza(self, xyza: XYZA) -> List[float]:
        h, w, bl = rgb_to_hwb(*xyz_to_srgb(xyza.x, xyza.y, xyza.z))
        return [h, w * c.PERCENT, bl * c.PERCENT, xyza.alpha]


def _alpha(values: Sequence[float]) -> float:
    return values[3] if len(values) > 3 else 1.0
