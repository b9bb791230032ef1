"""
Tests for color() spaces, transfer functions and the matrix helpers.
"""

import pytest

from csspectrum import FormatError, is_parsable, parse, type_of
from csspectrum.config import D50_WHITE, D65_WHITE
from csspectrum.converters.spaces import (
    a98_to_linear,
    linear_to_a98,
    linear_to_prophoto,
    linear_to_rec2020,
    prophoto_to_linear,
    rec2020_to_linear,
)
from csspectrum.converters.srgb import linear_to_srgb, srgb_to_linear
from csspectrum.matrices import D50_TO_D65, D65_TO_D50, IDENTITY, SRGB_TO_XYZ, XYZ_TO_SRGB, invert, multiply, multiply_vector

SPACE_NAMES = [
    "srgb",
    "srgb-linear",
    "display-p3",
    "rec2020",
    "a98-rgb",
    "prophoto-rgb",
    "xyz-d65",
    "xyz-d50",
    "xyz",
]


class TestTransferFunctions:
    """Each encode/decode pair inverts the other, negatives included."""

    @pytest.mark.parametrize("encode,decode", [
        (linear_to_srgb, srgb_to_linear),
        (linear_to_rec2020, rec2020_to_linear),
        (linear_to_a98, a98_to_linear),
        (linear_to_prophoto, prophoto_to_linear),
    ])
    @pytest.mark.parametrize("value", [0.0, 0.001, 0.02, 0.18, 0.5, 1.0, 1.2, -0.3])
    def test_inverse_pair(self, encode, decode, value):
        assert decode(encode(value)) == pytest.approx(value, abs=1e-9)

    @pytest.mark.parametrize("encode", [linear_to_srgb, linear_to_rec2020, linear_to_a98, linear_to_prophoto])
    def test_sign_preserved(self, encode):
        assert encode(-0.25) == pytest.approx(-encode(0.25))


class TestMatrices:

    def test_inverse(self):
        product = multiply(SRGB_TO_XYZ, XYZ_TO_SRGB)
        for row, expected in zip(product, IDENTITY):
            assert row == pytest.approx(expected, abs=1e-12)

    def test_bradford_maps_whites(self):
        assert multiply_vector(D65_TO_D50, D65_WHITE) == pytest.approx(D50_WHITE, abs=1e-9)
        assert multiply_vector(D50_TO_D65, D50_WHITE) == pytest.approx(D65_WHITE, abs=1e-9)

    def test_singular_matrix_rejected(self):
        with pytest.raises(ValueError):
            invert(((1, 2, 3), (2, 4, 6), (0, 0, 1)))


class TestColorFunction:

    @pytest.mark.parametrize("space", SPACE_NAMES)
    def test_round_trip(self, space):
        text = f"color({space} 0.2 0.4 0.6)"
        assert type_of(text) == space
        assert parse(text).to(space) == text

    @pytest.mark.parametrize("space", ["srgb", "display-p3", "rec2020", "a98-rgb", "prophoto-rgb", "srgb-linear"])
    def test_white_is_one(self, space):
        assert parse("white").to(space) == f"color({space} 1 1 1)"

    def test_red_in_srgb(self):
        assert parse("red").to("srgb") == "color(srgb 1 0 0)"

    def test_xyz_white_points(self):
        assert parse("white").to("xyz-d65") == "color(xyz-d65 0.95046 1 1.08906)"
        assert parse("white").to("xyz") == "color(xyz 0.95046 1 1.08906)"
        assert parse("white").to("xyz-d50") == "color(xyz-d50 0.9643 1 0.8251)"

    def test_percent_and_alpha(self):
        assert parse("color(srgb 100% 0% 0%)").to("rgb") == "rgb(255, 0, 0)"
        assert parse("color(srgb 1 0 0 / 0.5)").to("rgb") == "rgba(255, 0, 0, 0.5)"
        assert parse("color(srgb 1 0 0 / 50%)").to("srgb") == "color(srgb 1 0 0 / 0.5)"

    def test_out_of_gamut_values_survive(self):
        color = parse("color(display-p3 0 1 1)")
        srgb = color.in_model("srgb")
        assert srgb.get("r") == 0.0
        assert color.in_model("display-p3").get_array() == pytest.approx([0.0, 1.0, 1.0, 1.0], abs=1e-9)


class TestGamut:

    def test_p3_cyan_outside_srgb(self):
        color = parse("color(display-p3 0 1 1)")
        assert not color.is_in_gamut()
        assert color.is_in_gamut("display-p3")

    def test_p3_green_inside_rec2020(self):
        color = parse("color(display-p3 0.2 0.9 0.2)")
        assert not color.is_in_gamut("srgb")
        assert color.is_in_gamut("rec2020")

    @pytest.mark.parametrize("text", ["red", "white", "black", "#123456", "rebeccapurple"])
    def test_srgb_colors_fit_everywhere(self, text):
        color = parse(text)
        for space in ["srgb", "display-p3", "rec2020", "prophoto-rgb"]:
            assert color.is_in_gamut(space)

    def test_xyz_is_unbounded(self):
        assert parse("color(xyz 5 -2 3)").is_in_gamut("xyz")

    def test_hue_is_ignored(self):
        assert parse("hsl(300 100% 50%)").is_in_gamut("hsl")


class TestOverflow:

    @pytest.mark.parametrize("text", [
        "color(srgb 1e200 0 0)",
        "color(a98-rgb 1e200 0 0)",
        "color(display-p3 0 1e200 0)",
        "color(prophoto-rgb 0 0 -1e200)",
        "color(rec2020 1e200 1e200 1e200)",
    ])
    def test_huge_components_raise_format_error(self, text):
        with pytest.raises(FormatError):
            parse(text)

    def test_huge_rgb_channel(self):
        with pytest.raises(FormatError):
            parse("red").in_model("rgb").set(g=1e200)

    def test_huge_channel_edit(self):
        with pytest.raises(FormatError):
            parse("red").in_model("srgb").set(r=1e200)

    def test_not_parsable(self):
        assert not is_parsable("color(srgb 1e200 0 0)")

    def test_infinite_lab_refuses_output(self):
        color = parse("lab(50% 1e200 0)")
        assert color.name is None
        with pytest.raises(FormatError):
            color.to("hex")
        with pytest.raises(FormatError):
            color.to("rgb")
