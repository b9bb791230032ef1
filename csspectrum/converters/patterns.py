"""
Regular-expression building blocks and token helpers shared by the converters.

Patterns are deliberately loose about numbers (any sign, any magnitude); range
checks happen after matching so an out-of-range literal is reported as a
FormatError instead of falling through to "unsupported".
"""

import math
import re
from typing import List, Optional, Pattern

from .. import config as c
from ..errors import FormatError
from ..schemas.components import ALPHA, ComponentDefinition

ws = r"\s*"
num = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?"
angle = f"{num}(?:deg|grad|rad|turn)?"
none = "none"
slash = f"{ws}/{ws}"
sep = r"(?:\s*,\s*|\s+)"
alpha_sep = r"(?:\s*,\s*|\s*/\s*)"

number_or_percent = f"{num}%?|{none}"
hue = f"{angle}|{none}"
alpha = f"{num}%?|{none}"

ANGLE_RE = re.compile(f"^({num})(deg|grad|rad|turn)?$", re.IGNORECASE)


def function_pattern(names: str, *channels: str, separator: str = sep) -> Pattern:
    """
    Compile ``names(c1 c2 c3 [/ a])`` with one capture group per channel and a
    trailing optional alpha group.
    """
    body = separator.join(f"({channel})" for channel in channels)
    return re.compile(
        f"^(?:{names}){ws}\\({ws}{body}(?:{alpha_sep}({alpha}))?{ws}\\)$",
        re.IGNORECASE,
    )


def pct(x: str) -> float:
    """Percentage string to a number in percent units ("50%" -> 50.0)."""
    return float(x.replace("%", ""))


def angle_to_deg(s: str) -> float:
    """Convert an angle token to degrees; a bare number is already degrees."""
    m = ANGLE_RE.match(s)
    if not m:
        raise FormatError(f"Invalid angle: {s}")
    v = float(m.group(1))
    unit = (m.group(2) or "deg").lower()
    if unit == "grad":
        return v * 9 / 10
    elif unit == "rad":
        return v * 180 / math.pi
    elif unit == "turn":
        return v * c.HUE_MAX
    return v


def parse_channel(token: str, definition: ComponentDefinition) -> float:
    """Turn one matched channel token into a number in the channel's own units."""
    token = token.strip().lower()
    if token == none:
        return 0.0
    if token.endswith("%"):
        return definition.from_percent(pct(token))
    if definition.loop:
        return angle_to_deg(token)
    return float(token)


def parse_alpha(token: Optional[str], source: str) -> float:
    if token is None:
        return 1.0
    value = parse_channel(token, ALPHA)
    require_range(value, 0.0, 1.0, "alpha", token, source)
    return value


def require_range(value: float, lo: float, hi: float, label: str, token: str, source: str) -> None:
    if not lo <= value <= hi:
        raise FormatError(f"{label} out of range [{lo:g}, {hi:g}]: {token} in {source}")


def split_top_level(text: str, delimiter: Optional[str] = None) -> List[str]:
    """
    Split on a delimiter (or runs of whitespace when None) outside parentheses.

    Raises FormatError on unbalanced parentheses.
    """
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise FormatError(f"Unbalanced ')' in {text}")
        if depth == 0 and (ch == delimiter if delimiter else ch.isspace()):
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if depth != 0:
        raise FormatError(f"Unbalanced '(' in {text}")
    parts.append("".join(current))
    if delimiter is None:
        return [p for p in parts if p]
    return [p.strip() for p in parts]
