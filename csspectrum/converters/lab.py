"""
CIE Lab and LCH.

Both are referenced to D50; the canonical D65 value is Bradford-adapted on
the way in and out.
"""

import math
from typing import List, Sequence, Tuple

from .. import config as c
from ..errors import FormatError
from ..matrices import D50_TO_D65, D65_TO_D50, multiply_vector
from ..schemas.components import ComponentDefinition
from ..schemas.requests import FormattingOptions
from .base import XYZA, ComponentConverter
from .formatting import fmt, fmt_alpha, fmt_percent, is_opaque
from .patterns import function_pattern, hue, number_or_percent, parse_alpha, parse_channel, require_range


def cbrt(v: float) -> float:
    """Real cube root for either sign."""
    return math.copysign(abs(v) ** (1 / 3), v)


def f_lab(t: float) -> float:
    """LAB forward transform."""
    return cbrt(t) if t > c.LAB_EPSILON else (c.LAB_KAPPA * t + c.LAB_L_SUB) / c.LAB_L_MULT


def f_inv_lab(t: float) -> float:
    """LAB inverse transform."""
    t3 = t * t * t
    return t3 if t3 > c.LAB_EPSILON else (c.LAB_L_MULT * t - c.LAB_L_SUB) / c.LAB_KAPPA


def xyz_to_lab(x: float, y: float, z: float) -> Tuple[float, float, float]:
    """D65 XYZ to D50 Lab."""
    xd, yd, zd = multiply_vector(D65_TO_D50, (x, y, z))
    wx, wy, wz = c.D50_WHITE
    fx, fy, fz = f_lab(xd / wx), f_lab(yd / wy), f_lab(zd / wz)
    L = c.LAB_L_MULT * fy - c.LAB_L_SUB
    a = c.LAB_A_MULT * (fx - fy)
    b = c.LAB_B_MULT * (fy - fz)
    return L, a, b


def lab_to_xyz(L: float, a: float, b: float) -> Tuple[float, float, float]:
    """D50 Lab to D65 XYZ."""
    fy = (L + c.LAB_L_SUB) / c.LAB_L_MULT
    fx = fy + a / c.LAB_A_MULT
    fz = fy - b / c.LAB_B_MULT
    wx, wy, wz = c.D50_WHITE
    return multiply_vector(D50_TO_D65, (f_inv_lab(fx) * wx, f_inv_lab(fy) * wy, f_inv_lab(fz) * wz))


def lab_to_lch(L: float, a: float, b: float) -> Tuple[float, float, float]:
    chroma = math.hypot(a, b)
    h = math.degrees(math.atan2(b, a)) % c.HUE_MAX
    return L, chroma, h


def lch_to_lab(L: float, chroma: float, h: float) -> Tuple[float, float, float]:
    hr = math.radians(h)
    return L, chroma * math.cos(hr), chroma * math.sin(hr)


class LabConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "lab",
            function_pattern("lab", number_or_percent, number_or_percent, number_or_percent),
            {
                "l": ComponentDefinition(index=0, min=0, max=c.PERCENT, step=0.001),
                "a": ComponentDefinition(index=1, min=-math.inf, max=math.inf, step=0.001, reference=c.LAB_AB_PERCENT_REF),
                "b": ComponentDefinition(index=2, min=-math.inf, max=math.inf, step=0.001, reference=c.LAB_AB_PERCENT_REF),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid LAB color format: {text}")
        l_val, a_val, b_val, alpha_val = m.groups()
        L = parse_channel(l_val, self.components["l"])
        require_range(L, 0, c.PERCENT, "LAB lightness", l_val, text)
        a = parse_channel(a_val, self.components["a"])
        b = parse_channel(b_val, self.components["b"])
        return [L, a, b, parse_alpha(alpha_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        L = fmt_percent(values[0], self.components["l"], options)
        a = fmt(values[1], self.components["a"], options)
        b = fmt(values[2], self.components["b"], options)
        if is_opaque(values[3]):
            return f"lab({L} {a} {b})"
        return f"lab({L} {a} {b} / {fmt_alpha(values[3])})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        return XYZA(*lab_to_xyz(*values[:3]), values[3] if len(values) > 3 else 1.0)

    def from_xyza(self, xyza: XYZA) -> List[float]:
        return [*xyz_to_lab(xyza.x, xyza.y, xyza.z), xyza.alpha]


class LchConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "lch",
            function_pattern("lch", number_or_percent, number_or_percent, hue),
            {
                "l": ComponentDefinition(index=0, min=0, max=c.PERCENT, step=0.001),
                "c": ComponentDefinition(index=1, min=0, max=math.inf, step=0.001, reference=c.LCH_C_PERCENT_REF),
                "h": ComponentDefinition(index=2, min=0, max=c.HUE_MAX, step=0.001, loop=True),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid LCH color format: {text}")
        l_val, c_val, h_val, alpha_val = m.groups()
        L = parse_channel(l_val, self.components["l"])
        require_range(L, 0, c.PERCENT, "LCH lightness", l_val, text)
        chroma = parse_channel(c_val, self.components["c"])
        require_range(chroma, 0, math.inf, "LCH chroma", c_val, text)
        h = parse_channel(h_val, self.components["h"])
        return [L, chroma, h, parse_alpha(alpha_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        L = fmt_percent(values[0], self.components["l"], options)
        chroma = fmt(values[1], self.components["c"], options)
        h = fmt(values[2], self.components["h"], options)
        if is_opaque(values[3]):
            return f"lch({L} {chroma} {h})"
        return f"lch({L} {chroma} {h} / {fmt_alpha(values[3])})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        return XYZA(*lab_to_xyz(*lch_to_lab(*values[:3])), values[3] if len(values) > 3 else 1.0)

    def from_xyza(self, xyza: XYZA) -> List[float]:
        L, chroma, h = lab_to_lch(*xyz_to_lab(xyza.x, xyza.y, xyza.z))
        if chroma < self.components["c"].step / 2:
            h = 0.0
        return [L, chroma, h, xyza.alpha]
