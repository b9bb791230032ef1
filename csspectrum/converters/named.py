"""
CSS named colors (CSS Color 4 keywords plus transparent).

Reverse lookup returns the first name in table order whose 8-bit channels and
alpha match exactly, so synonyms resolve to the earlier spelling
(gray before grey, cyan before aqua).
"""

import math
import re
from typing import Dict, Optional, Pattern, Tuple, Union

from .. import config as c
from ..errors import FormatError
from ..schemas.components import ALPHA, ComponentDefinition
from .base import XYZA, OpaqueConverter
from .srgb import srgb_to_xyz, xyz_to_srgb

RGBATuple = Union[Tuple[int, int, int], Tuple[int, int, int, float]]

CHANNEL = ComponentDefinition(index=0, min=0, max=c.RGB_MAX, step=1)

NAMED: Dict[str, RGBATuple] = {
    "cornsilk": (255, 248, 220),
    "blanchedalmond": (255, 235, 205),
    "bisque": (255, 228, 196),
    "navajowhite": (255, 222, 173),
    "wheat": (245, 222, 179),
    "burlywood": (222, 184, 135),
    "tan": (210, 180, 140),
    "rosybrown": (188, 143, 143),
    "sandybrown": (244, 164, 96),
    "goldenrod": (218, 165, 32),
    "peru": (205, 133, 63),
    "chocolate": (210, 105, 30),
    "saddlebrown": (139, 69, 19),
    "sienna": (160, 82, 45),
    "brown": (165, 42, 42),
    "maroon": (128, 0, 0),
    "gainsboro": (220, 220, 220),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "silver": (192, 192, 192),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "dimgray": (105, 105, 105),
    "dimgrey": (105, 105, 105),
    "lightslategray": (119, 136, 153),
    "lightslategrey": (119, 136, 153),
    "slategray": (112, 128, 144),
    "slategrey": (112, 128, 144),
    "darkslategray": (47, 79, 79),
    "darkslategrey": (47, 79, 79),
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "snow": (255, 250, 250),
    "honeydew": (240, 255, 240),
    "mintcream": (245, 255, 250),
    "azure": (240, 255, 255),
    "aliceblue": (240, 248, 255),
    "ghostwhite": (248, 248, 255),
    "whitesmoke": (245, 245, 245),
    "seashell": (255, 245, 238),
    "beige": (245, 245, 220),
    "oldlace": (253, 245, 230),
    "floralwhite": (255, 250, 240),
    "ivory": (255, 255, 240),
    "antiquewhite": (250, 235, 215),
    "linen": (250, 240, 230),
    "lavenderblush": (255, 240, 245),
    "mistyrose": (255, 228, 225),
    "pink": (255, 192, 203),
    "lightpink": (255, 182, 193),
    "hotpink": (255, 105, 180),
    "deeppink": (255, 20, 147),
    "palevioletred": (219, 112, 147),
    "mediumvioletred": (199, 21, 133),
    "lavender": (230, 230, 250),
    "thistle": (216, 191, 216),
    "plum": (221, 160, 221),
    "violet": (238, 130, 238),
    "orchid": (218, 112, 214),
    "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255),
    "mediumorchid": (186, 85, 211),
    "mediumpurple": (147, 112, 219),
    "blueviolet": (138, 43, 226),
    "darkviolet": (148, 0, 211),
    "darkorchid": (153, 50, 204),
    "darkmagenta": (139, 0, 139),
    "purple": (128, 0, 128),
    "indigo": (75, 0, 130),
    "powderblue": (176, 224, 230),
    "lightblue": (173, 216, 230),
    "lightskyblue": (135, 206, 250),
    "skyblue": (135, 206, 235),
    "deepskyblue": (0, 191, 255),
    "lightsteelblue": (176, 196, 222),
    "dodgerblue": (30, 144, 255),
    "cornflowerblue": (100, 149, 237),
    "steelblue": (70, 130, 180),
    "royalblue": (65, 105, 225),
    "blue": (0, 0, 255),
    "mediumblue": (0, 0, 205),
    "darkblue": (0, 0, 139),
    "navy": (0, 0, 128),
    "midnightblue": (25, 25, 112),
    "mediumslateblue": (123, 104, 238),
    "slateblue": (106, 90, 205),
    "darkslateblue": (72, 61, 139),
    "lightcyan": (224, 255, 255),
    "cyan": (0, 255, 255),
    "aqua": (0, 255, 255),
    "aquamarine": (127, 255, 212),
    "mediumaquamarine": (102, 205, 170),
    "paleturquoise": (175, 238, 238),
    "turquoise": (64, 224, 208),
    "mediumturquoise": (72, 209, 204),
    "darkturquoise": (0, 206, 209),
    "lightseagreen": (32, 178, 170),
    "cadetblue": (95, 158, 160),
    "darkcyan": (0, 139, 139),
    "teal": (0, 128, 128),
    "lawngreen": (124, 252, 0),
    "chartreuse": (127, 255, 0),
    "limegreen": (50, 205, 50),
    "lime": (0, 255, 0),
    "forestgreen": (34, 139, 34),
    "green": (0, 128, 0),
    "darkgreen": (0, 100, 0),
    "greenyellow": (173, 255, 47),
    "yellowgreen": (154, 205, 50),
    "springgreen": (0, 255, 127),
    "mediumspringgreen": (0, 250, 154),
    "lightgreen": (144, 238, 144),
    "palegreen": (152, 251, 152),
    "darkseagreen": (143, 188, 143),
    "mediumseagreen": (60, 179, 113),
    "seagreen": (46, 139, 87),
    "olive": (128, 128, 0),
    "darkolivegreen": (85, 107, 47),
    "olivedrab": (107, 142, 35),
    "lightyellow": (255, 255, 224),
    "lemonchiffon": (255, 250, 205),
    "lightgoldenrodyellow": (250, 250, 210),
    "papayawhip": (255, 239, 213),
    "moccasin": (255, 228, 181),
    "peachpuff": (255, 218, 185),
    "palegoldenrod": (238, 232, 170),
    "khaki": (240, 230, 140),
    "darkkhaki": (189, 183, 107),
    "yellow": (255, 255, 0),
    "coral": (255, 127, 80),
    "tomato": (255, 99, 71),
    "orangered": (255, 69, 0),
    "gold": (255, 215, 0),
    "orange": (255, 165, 0),
    "darkorange": (255, 140, 0),
    "lightsalmon": (255, 160, 122),
    "salmon": (250, 128, 114),
    "darksalmon": (233, 150, 122),
    "lightcoral": (240, 128, 128),
    "indianred": (205, 92, 92),
    "crimson": (220, 20, 60),
    "firebrick": (178, 34, 34),
    "red": (255, 0, 0),
    "darkred": (139, 0, 0),
    "rebeccapurple": (102, 51, 153),
    "darkgoldenrod": (184, 134, 11),
    "transparent": (0, 0, 0, 0.0),
}


def normalize_name(name: str) -> str:
    """Lower-case and drop whitespace/hyphens ("Dark-Slate Gray" -> "darkslategray")."""
    return re.sub(r"[\s-]+", "", name).lower()


def rgba_of(entry: RGBATuple) -> Tuple[int, int, int, float]:
    r, g, b = entry[:3]
    a = entry[3] if len(entry) > 3 else 1.0
    return r, g, b, a


class NamedConverter(OpaqueConverter):
    """
    Converter over a live name table. The pattern is rebuilt whenever the
    table grows, so names registered at runtime are matched immediately.
    """

    def __init__(self, table: Dict[str, RGBATuple]):
        super().__init__("named")
        self.table = table
        self._compiled_for = -1

    @property
    def pattern(self) -> Pattern:
        if self._compiled_for != len(self.table):
            names = sorted(self.table, key=len, reverse=True)
            self._pattern = re.compile(f"^(?:{'|'.join(map(re.escape, names))})$", re.IGNORECASE)
            self._compiled_for = len(self.table)
        return self._pattern

    def to_xyza(self, text: str) -> XYZA:
        entry = self.table.get(normalize_name(text))
        if entry is None:
            raise FormatError(f"Invalid named color: {text}")
        r, g, b, a = rgba_of(entry)
        return XYZA(*srgb_to_xyz(r / c.RGB_MAX, g / c.RGB_MAX, b / c.RGB_MAX), a)

    def lookup(self, xyza: XYZA) -> Optional[str]:
        """First table name whose rounded channels and alpha equal the value's, if any."""
        if not all(math.isfinite(v) for v in xyza):
            return None
        rgb = tuple(int(CHANNEL.normalize(v * c.RGB_MAX)) for v in xyz_to_srgb(xyza.x, xyza.y, xyza.z))
        alpha = ALPHA.normalize(xyza.alpha)
        for name, entry in self.table.items():
            r, g, b, a = rgba_of(entry)
            if (r, g, b) == rgb and abs(a - alpha) < c.ALPHA_STEP / 2:
                return name
        return None

    def from_xyza(self, xyza: XYZA) -> str:
        name = self.lookup(xyza)
        if name is None:
            raise FormatError("No named color found for the given color")
        return name
