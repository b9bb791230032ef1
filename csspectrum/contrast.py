"""
WCAG 2.x contrast helpers over relative luminance values.
"""

from typing import Dict

from . import config as c
from .errors import FormatError


def composite_luminance(y: float, alpha: float, background_y: float) -> float:
    """Luminance of a translucent color laid over a background."""
    if alpha >= 1:
        return y
    return alpha * y + (1 - alpha) * background_y


def contrast_ratio(l1: float, l2: float) -> float:
    """Calculates contrast ratio between two luminance values."""
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + c.WCAG_LUMINANCE_OFFSET) / (darker + c.WCAG_LUMINANCE_OFFSET)


def wcag_threshold(level: str = "AA", large_text: bool = False) -> float:
    level = level.upper()
    if level == "AA":
        return c.WCAG_AA_LARGE if large_text else c.WCAG_AA_NORMAL
    if level == "AAA":
        return c.WCAG_AAA_LARGE if large_text else c.WCAG_AAA_NORMAL
    raise FormatError(f"Unknown WCAG level '{level}'; expected 'AA' or 'AAA'")


def wcag_levels(ratio: float) -> Dict[str, Dict[str, str]]:
    """Determines Pass/Fail status for WCAG levels."""
    def status(threshold: float) -> str:
        return "Pass" if ratio >= threshold else "Fail"

    return {
        "AA": {"normal": status(c.WCAG_AA_NORMAL), "large": status(c.WCAG_AA_LARGE)},
        "AAA": {"normal": status(c.WCAG_AAA_NORMAL), "large": status(c.WCAG_AAA_LARGE)},
    }
