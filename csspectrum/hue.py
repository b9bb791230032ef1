"""
Hue interpolation policies for mixing cylindrical channels.
"""

from . import config as c
from .errors import GrammarError

HUE_METHODS = ("shorter", "longer", "increasing", "decreasing")


def interpolate_hue(h1: float, h2: float, t: float, method: str = "shorter") -> float:
    """
    Interpolate from h1 to h2 at t along the arc picked by method; the result
    is normalized into [0, 360).
    """
    method = method.lower()
    if method == "shorter":
        delta = (h2 - h1 + 180) % c.HUE_MAX - 180
    elif method == "longer":
        delta = (h2 - h1 + 180) % c.HUE_MAX - 180
        if delta > 0:
            delta -= c.HUE_MAX
        elif delta < 0:
            delta += c.HUE_MAX
    elif method == "increasing":
        if h2 < h1:
            h2 += c.HUE_MAX
        delta = h2 - h1
    elif method == "decreasing":
        if h2 > h1:
            h2 -= c.HUE_MAX
        delta = h2 - h1
    else:
        raise GrammarError(f"Unknown hue interpolation method '{method}'; expected one of {', '.join(HUE_METHODS)}")
    return (h1 + t * delta) % c.HUE_MAX
