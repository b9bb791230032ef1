"""
color-mix(in <model> [<method> hue], <color> [<p>%], <color> [<p>%])
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .converters import ComponentConverter
from .converters.patterns import split_top_level
from .errors import FormatError, GrammarError
from .hue import HUE_METHODS
from .registry import Registry

logger = logging.getLogger(__name__)

COLOR_MIX_RE = re.compile(r"^color-mix\(\s*(.*)\)$", re.IGNORECASE | re.DOTALL)
weight = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)%"
LEADING_WEIGHT_RE = re.compile(f"^({weight})\\s+(.+)$", re.DOTALL)
TRAILING_WEIGHT_RE = re.compile(f"^(.+?)\\s+({weight})$", re.DOTALL)


@dataclass(frozen=True)
class MixOperand:
    color: str
    weight: Optional[float] = None  # fraction, 0..1


@dataclass(frozen=True)
class ColorMix:
    model: str
    hue_method: str
    first: MixOperand
    second: MixOperand


def is_color_mix(text: str) -> bool:
    return COLOR_MIX_RE.match(text.strip()) is not None


def _split_arguments(body: str, source: str) -> List[str]:
    try:
        return split_top_level(body, ",")
    except FormatError as e:
        raise GrammarError(f"{e} ({source})") from e


def parse_operand(arg: str, source: str) -> MixOperand:
    """"red 70%" and "70% red" both carry a weight; "red" alone does not."""
    for regex, weight_group, color_group in ((LEADING_WEIGHT_RE, 1, 2), (TRAILING_WEIGHT_RE, 2, 1)):
        m = regex.match(arg)
        if m:
            value = float(m.group(weight_group)[:-1])
            if not 0 <= value <= 100:
                raise GrammarError(f"Mix weight out of range [0%, 100%]: {m.group(weight_group)} in {source}")
            return MixOperand(m.group(color_group).strip(), value / 100)
    if not arg:
        raise GrammarError(f"Missing color in {source}")
    return MixOperand(arg)


def parse_color_mix(text: str, registry: Registry) -> ColorMix:
    m = COLOR_MIX_RE.match(text.strip().lower())
    if not m:
        raise GrammarError(f"Expected 'color-mix(in <model>, <color>, <color>)': {text}")
    args = _split_arguments(m.group(1), text)
    if len(args) != 3:
        raise GrammarError(f"color-mix() takes an interpolation clause and two colors, got {len(args)} arguments: {text}")

    clause = args[0].split()
    if not clause or clause[0] != "in":
        raise GrammarError(f"Missing 'in <model>' in {text}")
    if len(clause) not in (2, 4):
        raise GrammarError(f"Malformed interpolation clause '{args[0]}' in {text}")
    model = clause[1]
    converter = registry.converters().get(model)
    if not isinstance(converter, ComponentConverter):
        raise GrammarError(f"Unknown interpolation model '{model}' in {text}")

    hue_method = "shorter"
    if len(clause) == 4:
        hue_method, keyword = clause[2], clause[3]
        if keyword != "hue" or hue_method not in HUE_METHODS:
            raise GrammarError(f"Unknown hue interpolation '{hue_method} {keyword}' in {text}")
        if converter.hue_channel is None:
            raise GrammarError(f"Model '{model}' has no hue to interpolate in {text}")

    return ColorMix(model, hue_method, parse_operand(args[1], text), parse_operand(args[2], text))


def normalize_weights(w1: Optional[float], w2: Optional[float]) -> Tuple[float, float]:
    """
    Missing weights complement the given one (or both default to 0.5); a
    sum above 1 is scaled back to 1.
    """
    if w1 is None and w2 is None:
        w1 = w2 = 0.5
    elif w1 is None:
        w1 = 1 - w2
    elif w2 is None:
        w2 = 1 - w1
    total = w1 + w2
    if total > 1:
        w1, w2 = w1 / total, w2 / total
    return w1, w2


def mix_model(text: str, registry: Registry) -> str:
    return parse_color_mix(text, registry).model


def mix_colors(text: str, registry: Registry):
    """Evaluate color-mix() text into a plain Color."""
    from .color import Color

    mix = parse_color_mix(text, registry)
    w1, w2 = normalize_weights(mix.first.weight, mix.second.weight)
    total = w1 + w2
    if total <= 0:
        raise GrammarError(f"color-mix() weights sum to zero: {text}")

    first = Color.parse(mix.first.color, registry)
    second = Color.parse(mix.second.color, registry)
    color = first.in_model(mix.model).mix_with(second, w2 / total, mix.hue_method).color
    if total < 1:
        color = color.opacity(color.alpha * total)
    logger.debug("color-mix in %s at %.4g (%s hue) -> %r", mix.model, w2 / total, mix.hue_method, color)
    return color
