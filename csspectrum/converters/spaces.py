"""
color() spaces, generated from SpaceDescriptor records.

Each descriptor gives a transfer function pair and a linear RGB -> XYZ
matrix in the space's own white. D50 spaces get the Bradford adaptation
folded into their matrices here, so every SpaceConverter exchanges D65 XYZ.
"""

import math
import re
from typing import Dict, List, Sequence

from .. import config as c
from ..errors import FormatError
from ..matrices import (
    A98_RGB_TO_XYZ,
    D50_TO_D65,
    D65_TO_D50,
    DISPLAY_P3_TO_XYZ,
    IDENTITY,
    PROPHOTO_RGB_TO_XYZ_D50,
    REC2020_TO_XYZ,
    SRGB_TO_XYZ,
    multiply,
    multiply_vector,
)
from ..schemas.components import ComponentDefinition, SpaceDescriptor
from ..schemas.requests import FormattingOptions
from .base import XYZA, ComponentConverter
from .formatting import fmt, fmt_alpha, is_opaque
from .patterns import alpha, number_or_percent, parse_alpha, parse_channel, slash, ws
from .srgb import linear_to_srgb, srgb_to_linear

# Transfer functions (all odd-extended so out-of-gamut negatives survive)


def rec2020_to_linear(v: float) -> float:
    a = abs(v)
    if a < c.REC2020_BETA * c.REC2020_SLOPE:
        return v / c.REC2020_SLOPE
    return math.copysign(((a + c.REC2020_ALPHA - 1) / c.REC2020_ALPHA) ** (1 / c.REC2020_GAMMA), v)


def linear_to_rec2020(v: float) -> float:
    a = abs(v)
    if a < c.REC2020_BETA:
        return v * c.REC2020_SLOPE
    return math.copysign(c.REC2020_ALPHA * a ** c.REC2020_GAMMA - (c.REC2020_ALPHA - 1), v)


def a98_to_linear(v: float) -> float:
    return math.copysign(abs(v) ** c.A98_GAMMA, v)


def linear_to_a98(v: float) -> float:
    return math.copysign(abs(v) ** (1 / c.A98_GAMMA), v)


def prophoto_to_linear(v: float) -> float:
    a = abs(v)
    if a <= c.PROPHOTO_ET2:
        return v / c.PROPHOTO_SLOPE
    return math.copysign(a ** c.PROPHOTO_GAMMA, v)


def linear_to_prophoto(v: float) -> float:
    a = abs(v)
    if a >= c.PROPHOTO_ET:
        return math.copysign(a ** (1 / c.PROPHOTO_GAMMA), v)
    return v * c.PROPHOTO_SLOPE


def _xyz_space(white: str) -> SpaceDescriptor:
    return SpaceDescriptor(
        components=["x", "y", "z"],
        to_xyz_matrix=IDENTITY,
        white=white,
        min=-math.inf,
        max=math.inf,
    )


SPACES: Dict[str, SpaceDescriptor] = {
    "srgb": SpaceDescriptor(to_linear=srgb_to_linear, from_linear=linear_to_srgb, to_xyz_matrix=SRGB_TO_XYZ),
    "srgb-linear": SpaceDescriptor(to_xyz_matrix=SRGB_TO_XYZ),
    "display-p3": SpaceDescriptor(to_linear=srgb_to_linear, from_linear=linear_to_srgb, to_xyz_matrix=DISPLAY_P3_TO_XYZ),
    "rec2020": SpaceDescriptor(to_linear=rec2020_to_linear, from_linear=linear_to_rec2020, to_xyz_matrix=REC2020_TO_XYZ),
    "a98-rgb": SpaceDescriptor(to_linear=a98_to_linear, from_linear=linear_to_a98, to_xyz_matrix=A98_RGB_TO_XYZ),
    "prophoto-rgb": SpaceDescriptor(
        to_linear=prophoto_to_linear,
        from_linear=linear_to_prophoto,
        to_xyz_matrix=PROPHOTO_RGB_TO_XYZ_D50,
        white="d50",
    ),
    "xyz-d65": _xyz_space("d65"),
    "xyz-d50": _xyz_space("d50"),
    "xyz": _xyz_space("d65"),
}


class SpaceConverter(ComponentConverter):
    """Component converter for ``color(<name> c1 c2 c3 [/ a])``."""

    def __init__(self, name: str, descriptor: SpaceDescriptor):
        self.descriptor = descriptor
        to_xyz = descriptor.to_xyz_matrix
        from_xyz = descriptor.from_xyz_matrix
        if descriptor.white == "d50":
            to_xyz = multiply(D50_TO_D65, to_xyz)
            from_xyz = multiply(from_xyz, D65_TO_D50)
        self.to_xyz_matrix = to_xyz
        self.from_xyz_matrix = from_xyz

        bounded = math.isfinite(descriptor.min) and math.isfinite(descriptor.max)
        components = {
            component: ComponentDefinition(
                index=i,
                min=descriptor.min,
                max=descriptor.max,
                step=descriptor.step,
                reference=None if bounded else 1.0,
            )
            for i, component in enumerate(descriptor.components)
        }
        value = f"{number_or_percent}"
        pattern = re.compile(
            f"^color{ws}\\({ws}{re.escape(name)}\\s+({value})\\s+({value})\\s+({value})"
            f"(?:{slash}({alpha}))?{ws}\\)$",
            re.IGNORECASE,
        )
        super().__init__(name, pattern, components)

    def parse(self, text: str) -> List[float]:
        m = self.pattern.match(text)
        if not m:
            raise FormatError(f"Invalid color({self.name}) format: {text}")
        *channels, alpha_val = m.groups()
        values = [
            parse_channel(token, self.components[component])
            for token, component in zip(channels, self.descriptor.components)
        ]
        return values + [parse_alpha(alpha_val, text)]

    def format(self, values: Sequence[float], options: FormattingOptions) -> str:
        body = " ".join(
            fmt(v, self.components[component], options) for v, component in zip(values, self.descriptor.components)
        )
        if is_opaque(values[3]):
            return f"color({self.name} {body})"
        return f"color({self.name} {body} / {fmt_alpha(values[3])})"

    def to_xyza(self, values: Sequence[float]) -> XYZA:
        try:
            linear = [self.descriptor.to_linear(v) for v in values[:3]]
        except OverflowError:
            raise FormatError(
                f"color({self.name}) value out of range: {' '.join(format(v, 'g') for v in values[:3])}"
            ) from None
        return XYZA(*multiply_vector(self.to_xyz_matrix, linear), values[3] if len(values) > 3 else 1.0)

    def from_xyza(self, xyza: XYZA) -> List[float]:
        linear = multiply_vector(self.from_xyz_matrix, (xyza.x, xyza.y, xyza.z))
        return [self.descriptor.from_linear(v) for v in linear] + [xyza.alpha]

