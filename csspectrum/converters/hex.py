import re

from .. import config as c
from ..errors import FormatError
from ..schemas.components import ALPHA
from .base import XYZA, OpaqueConverter
from .named import CHANNEL
from .srgb import srgb_to_xyz, xyz_to_srgb

HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)


class HexConverter(OpaqueConverter):
    def __init__(self):
        super().__init__("hex", HEX_RE)

    def to_xyza(self, text: str) -> XYZA:
        m = HEX_RE.match(text.strip())
        if not m:
            raise FormatError(f"Invalid HEX color format: {text}")
        h = m.group(1)
        if len(h) in (3, 4):
            h = "".join(ch * 2 for ch in h)
        r = int(h[0:2], 16)
        g = int(h[2:4], 16)
        b = int(h[4:6], 16)
        a = int(h[6:8], 16) / c.RGB_MAX if len(h) == 8 else 1.0
        return XYZA(*srgb_to_xyz(r / c.RGB_MAX, g / c.RGB_MAX, b / c.RGB_MAX), a)

    def from_xyza(self, xyza: XYZA) -> str:
        """Six digits when opaque, eight otherwise; always lower case."""
        r, g, b = (int(CHANNEL.normalize(v * c.RGB_MAX)) for v in xyz_to_srgb(xyza.x, xyza.y, xyza.z))
        base = f"#{r:02x}{g:02x}{b:02x}"
        a = int(CHANNEL.normalize(ALPHA.fit(xyza.alpha) * c.RGB_MAX))
        if a >= 255:
            return base
        return f"{base}{a:02x}"
