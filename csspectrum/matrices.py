"""
3x3 matrix helpers and the RGB primaries used by the space and format converters.

Only forward (RGB -> XYZ) matrices are written out; inverses and chromatic
adaptation matrices are derived at import time so every pair round-trips to
floating-point precision.
"""

from typing import Sequence, Tuple

from . import config as c

Vector3 = Tuple[float, float, float]
Matrix3 = Tuple[Vector3, Vector3, Vector3]


IDENTITY: Matrix3 = (
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
)


def as_matrix(rows: Sequence[Sequence[float]]) -> Matrix3:
    """Coerce nested sequences to a 3x3 tuple matrix."""
    if len(rows) != 3 or any(len(row) != 3 for row in rows):
        raise ValueError(f"expected a 3x3 matrix, got {rows!r}")
    return tuple(tuple(float(v) for v in row) for row in rows)  # type: ignore[return-value]


def multiply_vector(m: Sequence[Sequence[float]], v: Sequence[float]) -> Vector3:
    """Apply matrix m to column vector v."""
    return (
        m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2],
        m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2],
        m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2],
    )


def multiply(a: Sequence[Sequence[float]], b: Sequence[Sequence[float]]) -> Matrix3:
    """Matrix product a . b."""
    return tuple(
        tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3))
        for i in range(3)
    )  # type: ignore[return-value]


def invert(m: Sequence[Sequence[float]]) -> Matrix3:
    """Inverse of a 3x3 matrix via cofactors."""
    (a, b, cc), (d, e, f), (g, h, i) = m
    det = a * (e * i - f * h) - b * (d * i - f * g) + cc * (d * h - e * g)
    if abs(det) < c.EPS:
        raise ValueError("matrix is singular")
    inv = 1.0 / det
    return (
        ((e * i - f * h) * inv, (cc * h - b * i) * inv, (b * f - cc * e) * inv),
        ((f * g - d * i) * inv, (a * i - cc * g) * inv, (cc * d - a * f) * inv),
        ((d * h - e * g) * inv, (b * g - a * h) * inv, (a * e - b * d) * inv),
    )


def diagonal(v: Sequence[float]) -> Matrix3:
    return (
        (v[0], 0.0, 0.0),
        (0.0, v[1], 0.0),
        (0.0, 0.0, v[2]),
    )


def chromatic_adaptation(
    source_white: Sequence[float],
    target_white: Sequence[float],
    cone: Sequence[Sequence[float]] = c.BRADFORD_CONE,
) -> Matrix3:
    """
    von Kries style adaptation matrix in the given cone space (Bradford by default).

    M = cone^-1 . diag(cone . target / cone . source) . cone
    """
    src = multiply_vector(cone, source_white)
    dst = multiply_vector(cone, target_white)
    scale = diagonal((dst[0] / src[0], dst[1] / src[1], dst[2] / src[2]))
    return multiply(invert(cone), multiply(scale, cone))


D65_TO_D50 = chromatic_adaptation(c.D65_WHITE, c.D50_WHITE)
D50_TO_D65 = invert(D65_TO_D50)


# Linear RGB -> XYZ matrices (Source: CSS Color 4, exact rational forms where published)

SRGB_TO_XYZ: Matrix3 = (
    (506752 / 1228815, 87881 / 245763, 12673 / 70218),
    (87098 / 409605, 175762 / 245763, 12673 / 175545),
    (7918 / 409605, 87881 / 737289, 1001167 / 1053270),
)
XYZ_TO_SRGB = invert(SRGB_TO_XYZ)

DISPLAY_P3_TO_XYZ: Matrix3 = (
    (608311 / 1250200, 189793 / 714400, 198249 / 1000160),
    (35783 / 156275, 247089 / 357200, 198249 / 2500400),
    (0.0, 32229 / 714400, 5220557 / 5000800),
)

REC2020_TO_XYZ: Matrix3 = (
    (63426534 / 99577255, 20160776 / 139408157, 47086771 / 278816314),
    (26158966 / 99577255, 472592308 / 697040785, 8267143 / 139408157),
    (0.0, 19567812 / 697040785, 295819943 / 278816314),
)

A98_RGB_TO_XYZ: Matrix3 = (
    (573536 / 994567, 263643 / 1420810, 187206 / 994567),
    (591459 / 1989134, 6239551 / 9945670, 374412 / 4972835),
    (53769 / 1989134, 351524 / 4972835, 4929758 / 4972835),
)

# ProPhoto primaries are defined against D50
PROPHOTO_RGB_TO_XYZ_D50: Matrix3 = (
    (0.7977666449006423, 0.13518129740053308, 0.0313477341283922),
    (0.2880748288194013, 0.711835234241873, 0.00008993693872564),
    (0.0, 0.0, 0.8251046025104602),
)


# OKLab (Source: Ottosson 2020, recomputed for the CSS Color 4 D65 white)

XYZ_TO_LMS: Matrix3 = (
    (0.8190224379967030, 0.3619062600528904, -0.1288737815209879),
    (0.0329836539323885, 0.9292868615863434, 0.0361446663506424),
    (0.0481771893596242, 0.2642395317527308, 0.6335478284694309),
)
LMS_TO_XYZ = invert(XYZ_TO_LMS)

LMS_TO_OKLAB: Matrix3 = (
    (0.2104542683093140, 0.7936177747023054, -0.0040720430116193),
    (1.9779985324311684, -2.4285922420485799, 0.4505937096174110),
    (0.0259040424655478, 0.7827717124575296, -0.8086757549230774),
)
OKLAB_TO_LMS = invert(LMS_TO_OKLAB)
