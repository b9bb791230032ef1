"""
Tests for the Color value object and its channel views.
"""

import random

import pytest

from csspectrum import Color, FormatError, FormattingOptions, XYZA, list_spaces, parse
from csspectrum.converters import NAMED
from csspectrum.converters.hex import HEX_RE


class TestValueSemantics:

    def test_equal_across_notations(self):
        assert parse("red") == parse("#ff0000")
        assert parse("red").equals("rgb(255 0 0)")
        assert parse("red") != parse("blue")

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(parse("red"))

    def test_alpha_clamped(self):
        assert Color(0, 0, 0, 1.5).alpha == 1.0
        assert Color(0, 0, 0, -1).alpha == 0.0

    def test_from_xyza(self):
        color = Color.from_xyza(XYZA(0.0, 0.0, 0.0))
        assert color.to("hex") == "#000000"
        assert color.xyza.alpha == 1.0

    def test_edits_return_new_colors(self):
        red = parse("red")
        green = red.in_model("hsl").set(h=120).color
        assert red.to("rgb") == "rgb(255, 0, 0)"
        assert green.to("rgb") == "rgb(0, 255, 0)"

    def test_str_prefers_name(self):
        assert str(parse("#663399")) == "rebeccapurple"
        assert str(parse("#123456")) == "#123456"

    def test_name(self):
        assert parse("#663399").name == "rebeccapurple"
        assert parse("#123456").name is None


class TestOutput:

    def test_to_all_formats(self):
        formats = parse("red").to_all_formats()
        assert formats["rgb"] == "rgb(255, 0, 0)"
        assert formats["named"] == "red"
        assert formats["hex"] == "#ff0000"
        assert "named" not in parse("#123456").to_all_formats()

    def test_to_all_spaces(self):
        spaces = parse("red").to_all_spaces()
        assert list(spaces) == list_spaces()
        assert spaces["srgb"] == "color(srgb 1 0 0)"

    def test_options_forms(self):
        color = parse("red")
        assert color.to("rgb", {"modern": True}) == "rgb(255 0 0)"
        assert color.to("rgb", FormattingOptions(modern=True)) == "rgb(255 0 0)"

    def test_precision(self):
        color = parse("rgb(18, 52, 86)")
        assert color.to("hsl", precision=0) == "hsl(210, 65%, 20%)"

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError):
            parse("red").to("rgb", {"legacy": True})


class TestToNextColor:

    @pytest.mark.parametrize("current,expected", [
        ("rgb(255, 0, 0)", "red"),
        ("red", "#ff0000"),
        ("#ff0000", "hsl(0, 100%, 50%)"),
        ("color(xyz 0.41239 0.21264 0.01933)", "rgb(255, 0, 0)"),
    ])
    def test_cycles_in_registry_order(self, current, expected):
        assert parse("red").to_next_color(current) == expected

    def test_skips_named_without_match(self):
        assert parse("#123456").to_next_color("rgb(18, 52, 86)") == "#123456"

    def test_exclusions(self):
        assert parse("red").to_next_color("red", exclude=["hex"]) == "hsl(0, 100%, 50%)"
        assert parse("red").to_next_color("red", {"exclude": ["hex", "hsl"]}) == "hwb(0 0% 0%)"

    def test_everything_excluded(self):
        with pytest.raises(FormatError):
            parse("red").to_next_color("red", exclude=parse("red").registry.names())


class TestModelView:

    def test_get_components(self):
        assert parse("red").in_model("hsl").get_components() == {"h": 0.0, "s": 100.0, "l": 50.0, "alpha": 1.0}

    def test_get_array(self):
        assert parse("red").in_model("rgb").get_array() == [255.0, 0.0, 0.0, 1.0]

    def test_space_channel_names(self):
        assert parse("red").in_model("display-p3").components == ["r", "g", "b", "alpha"]
        assert parse("red").in_model("xyz-d50").components == ["x", "y", "z", "alpha"]

    def test_set_with_function(self):
        view = parse("red").in_model("hsl").set(l=lambda l: l - 30)
        assert view.to("rgb") == "rgb(102, 0, 0)"

    def test_set_with_mapping(self):
        assert parse("red").in_model("rgb").set({"g": 255}).to("hex") == "#ffff00"

    def test_set_alpha(self):
        assert parse("red").in_model("rgb").set(alpha=0.25).to("rgb") == "rgba(255, 0, 0, 0.25)"

    def test_unknown_channel(self):
        with pytest.raises(FormatError, match="Unknown component"):
            parse("red").in_model("rgb").set(x=1)

    def test_set_array_keeps_alpha(self):
        view = parse("rgba(0, 0, 0, 0.5)").in_model("rgb").set_array([0, 128, 255])
        assert view.to("hex") == "#0080ff7f"

    def test_define(self):
        assert Color.define("rgb").set_array([0, 128, 255]).to("hex") == "#0080ff"
        assert Color.define("hsl").set(h=240, s=100, l=50).to("named") == "blue"

    def test_opaque_formats_have_no_model(self):
        with pytest.raises(FormatError, match="no components"):
            parse("red").in_model("hex")

    def test_mix_with_wraps_hue(self):
        view = parse("hsl(350, 100%, 50%)").in_model("hsl").mix_with("hsl(10, 100%, 50%)", 0.5)
        assert view.get("h") == 0.0

    def test_mix_with_longer_hue(self):
        view = parse("hsl(350, 100%, 50%)").in_model("hsl").mix_with("hsl(10, 100%, 50%)", 0.5, "longer")
        assert view.get("h") == 180.0

    def test_mix_amount_clamped(self):
        view = parse("red").in_model("rgb").mix_with("blue", 2)
        assert view.to("hex") == "#0000ff"


class TestFilters:

    def test_opacity(self):
        assert parse("red").opacity(0.5).to("rgb") == "rgba(255, 0, 0, 0.5)"

    def test_lighten_and_darken(self):
        assert parse("hsl(0, 100%, 30%)").lighten(20).to("hsl") == "hsl(0, 100%, 50%)"
        assert parse("hsl(0, 100%, 50%)").darken(20).to("hsl") == "hsl(0, 100%, 30%)"
        assert parse("hsl(0, 100%, 90%)").lighten(50).to("hex") == "#ffffff"

    def test_saturation(self):
        assert parse("red").desaturate(100).to("hsl") == "hsl(0, 0%, 50%)"
        assert parse("hsl(0, 50%, 50%)").saturate(80).to("hsl") == "hsl(0, 100%, 50%)"

    def test_rotate(self):
        assert parse("red").rotate(120).to("rgb") == "rgb(0, 255, 0)"
        assert parse("red").rotate(-120).to("rgb") == "rgb(0, 0, 255)"

    def test_grayscale(self):
        assert parse("rgb(200, 100, 50)").grayscale().to("rgb") == "rgb(125, 125, 125)"

    def test_invert(self):
        assert parse("#ff0000").invert().to("hex") == "#00ffff"
        assert parse("rgb(18, 52, 86)").invert().to("rgb") == "rgb(237, 203, 169)"

    def test_filters_keep_alpha(self):
        assert parse("rgba(255, 0, 0, 0.5)").invert().to("rgb") == "rgba(0, 255, 255, 0.5)"


class TestTemperature:

    @pytest.mark.parametrize("text", ["blue", "cyan", "green"])
    def test_cool(self, text):
        assert parse(text).is_cool()

    @pytest.mark.parametrize("text", ["red", "orange", "yellow"])
    def test_warm(self, text):
        assert parse(text).is_warm()


class TestRandom:

    def test_random_hex(self):
        assert HEX_RE.match(Color.random("hex", rng=random.Random(1)))

    def test_random_named(self):
        assert Color.random("named", rng=random.Random(7)) in NAMED

    def test_random_is_reproducible(self):
        assert Color.random("rgb", rng=random.Random(3)) == Color.random("rgb", rng=random.Random(3))
