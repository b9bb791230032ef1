"""
OKLab and OKLCH (Björn Ottosson's perceptual space), computed straight from
D65 XYZ through the LMS cone matrices.
"""

import math
from typing import List, Sequence, Tuple

from .. import config as c
from ..errors import FormatError
from ..matrices import LMS_TO_OKLAB, LMS_TO_XYZ, OKLAB_TO_LMS, XYZ_TO_LMS, multiply_vector
from ..schemas.components import ComponentDefinition
from ..schemas.requests import FormattingOptions
from .base import XYZA, ComponentConverter
from .formatting import fmt, fmt_alpha, fmt_percent, is_opaque
from .lab import cbrt, lab_to_lch, lch_to_lab
from .patterns import function_pattern, hue, number_or_percent, parse_alpha, parse_channel, require_range


def xyz_to_oklab(x: float, y: float, z: float) -> Tuple[float, float, float]:
    l, m, s = multiply_vector(XYZ_TO_LMS, (x, y, z))
    return multiply_vector(LMS_TO_OKLAB, (cbrt(l), cbrt(m), cbrt(s)))


def oklab_to_xyz(L: float, a: float, b: float) -> Tuple[float, float, float]:
    l_, m_, s_ = multiply_vector(OKLAB_TO_LMS, (L, a, b))
    return multiply_vector(LMS_TO_XYZ, (l_ * l_ * l_, m_ * m_ * m_, s_ * s_ * s_))


class OklabConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "oklab",
            function_pattern("oklab", number_or_percent, number_or_percent, number_or_percent),
            {
                "l": ComponentDefinition(index=0, min=0, max=1, step=0.0001),
                "a": ComponentDefinition(index=1, min=-math.inf, max=math.inf, step=0.001, reference=c.OKLAB_AB_PERCENT_REF),
                "b": ComponentDefinition(index=2, min=-math.inf, max=math.inf, step=0.001, reference=c.OKLAB_AB_PERCENT_REF),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid OKLab color format: {text}")
        l_val, a_val, b_val, alpha_val = m.groups()
        L = parse_channel(l_val, self.components["l"])
        require_range(L, 0, 1, "OKLab lightness", l_val, text)
        a = parse_channel(a_val, self.components["a"])
        b = parse_channel(b_val, self.components["b"])
        return [L, a, b, parse_alpha(alpha_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        L = fmt_percent(values[0], self.components["l"], options, scale=c.PERCENT)
        a = fmt(values[1], self.components["a"], options)
        b = fmt(values[2], self.components["b"], options)
        if is_opaque(values[3]):
            return f"oklab({L} {a} {b})"
        return f"oklab({L} {a} {b} / {fmt_alpha(values[3])})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        return XYZA(*oklab_to_xyz(*values[:3]), values[3] if len(values) > 3 else 1.0)

    def from_xyza(self, xyza: XYZA) -> List[float]:
        return [*xyz_to_oklab(xyza.x, xyza.y, xyza.z), xyza.alpha]


class OklchConverter(ComponentConverter):
    def __init__(self):
        super().__init__(
            "oklch",
            function_pattern("oklch", number_or_percent, number_or_percent, hue),
            {
                "l": ComponentDefinition(index=0, min=0, max=1, step=0.0001),
                "c": ComponentDefinition(index=1, min=0, max=math.inf, step=0.001, reference=c.OKLCH_C_PERCENT_REF),
                "h": ComponentDefinition(index=2, min=0, max=c.HUE_MAX, step=0.001, loop=True),
            },
        )

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid OKLCH color format: {text}")
        l_val, c_val, h_val, alpha_val = m.groups()
        L = parse_channel(l_val, self.components["l"])
        require_range(L, 0, 1, "OKLCH lightness", l_val, text)
        chroma = parse_channel(c_val, self.components["c"])
        require_range(chroma, 0, math.inf, "OKLCH chroma", c_val, text)
        h = parse_channel(h_val, self.components["h"])
        return [L, chroma, h, parse_alpha(alpha_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        L = fmt_percent(values[0], self.components["l"], options, scale=c.PERCENT)
        chroma = fmt(values[1], self.components["c"], options)
        h = fmt(values[2], self.components["h"], options)
        if is_opaque(values[3]):
            return f"oklch({L} {chroma} {h})"
        return f"oklch({L} {chroma} {h} / {fmt_alpha(values[3])})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        return XYZA(*oklab_to_xyz(*lch_to_lab(*values[:3])), values[3] if len(values) > 3 else 1.0)

    def from_xyza(self, xyza: XYZA) -> List[float]:
        L, chroma, h = lab_to_lch(*xyz_to_oklab(xyza.x, xyza.y, xyza.z))
        if chroma < self.components["c"].step / 2:
            h = 0.0
        return [L, chroma, h, xyza.alpha]
