"""
Tests for color-mix() parsing, weight normalization and interpolation.
"""

import pytest

from csspectrum import GrammarError, default_registry, parse, type_of
from csspectrum.hue import interpolate_hue
from csspectrum.mix import MixOperand, is_color_mix, normalize_weights, parse_color_mix, parse_operand


class TestParse:

    def test_structure(self):
        mix = parse_color_mix("color-mix(in oklch longer hue, red 30%, rgb(0 0 255))", default_registry)
        assert mix.model == "oklch"
        assert mix.hue_method == "longer"
        assert mix.first == MixOperand("red", 0.3)
        assert mix.second == MixOperand("rgb(0 0 255)")

    @pytest.mark.parametrize("arg,expected", [
        ("red", MixOperand("red")),
        ("red 70%", MixOperand("red", 0.7)),
        ("70% red", MixOperand("red", 0.7)),
        ("rgb(255 0 0 / 50%) 25%", MixOperand("rgb(255 0 0 / 50%)", 0.25)),
    ])
    def test_operand(self, arg, expected):
        assert parse_operand(arg, "") == expected

    def test_type_of(self):
        assert type_of("color-mix(in oklch, red, blue)") == "oklch"
        assert is_color_mix("color-mix(in srgb, red, blue)")
        assert not is_color_mix("red")

    @pytest.mark.parametrize("text", [
        "color-mix(srgb, red, blue)",
        "color-mix(in foo, red, blue)",
        "color-mix(in hex, red, blue)",
        "color-mix(in srgb, red)",
        "color-mix(in srgb, red, blue, green)",
        "color-mix(in srgb longer hue, red, blue)",
        "color-mix(in hsl sideways hue, red, blue)",
        "color-mix(in srgb, red 120%, blue)",
        "color-mix(in srgb, red 0%, blue 0%)",
    ])
    def test_grammar_errors(self, text):
        with pytest.raises(GrammarError):
            parse(text)


class TestWeights:

    @pytest.mark.parametrize("w1,w2,expected", [
        (None, None, (0.5, 0.5)),
        (0.7, None, (0.7, pytest.approx(0.3))),
        (None, 0.2, (pytest.approx(0.8), 0.2)),
        (0.3, 0.3, (0.3, 0.3)),
        (0.6, 0.6, (0.5, 0.5)),
    ])
    def test_normalize(self, w1, w2, expected):
        assert normalize_weights(w1, w2) == expected


class TestMixColors:

    def test_srgb(self):
        assert parse("color-mix(in srgb, red 70%, blue)").to("srgb") == "color(srgb 0.7 0 0.3)"
        assert parse("color-mix(in srgb, red, blue)").to("srgb") == "color(srgb 0.5 0 0.5)"
        assert parse("color-mix(in srgb, 70% red, blue)").to("srgb") == "color(srgb 0.7 0 0.3)"

    def test_weights_below_one_scale_alpha(self):
        assert parse("color-mix(in srgb, red 30%, blue 30%)").to("srgb") == "color(srgb 0.5 0 0.5 / 0.6)"

    def test_weights_above_one_are_scaled(self):
        assert parse("color-mix(in srgb, red 60%, blue 60%)").to("srgb") == "color(srgb 0.5 0 0.5)"

    def test_hue_takes_shorter_arc(self):
        mixed = parse("color-mix(in hsl, hsl(350 100% 50%), hsl(10 100% 50%))")
        assert mixed.to("hsl") == "hsl(0, 100%, 50%)"

    def test_longer_hue(self):
        mixed = parse("color-mix(in hsl longer hue, hsl(350 100% 50%), hsl(10 100% 50%))")
        assert mixed.to("hsl") == "hsl(180, 100%, 50%)"

    def test_nested_arguments(self):
        text = "color-mix(in srgb, color-mix(in srgb, red, blue), rgb(from blue r g b))"
        assert parse(text).to("srgb") == "color(srgb 0.25 0 0.75)"

    def test_mix_as_relative_base(self):
        assert parse("rgb(from color-mix(in srgb, white, black 0%) r g b)").to("hex") == "#ffffff"


class TestInterpolateHue:

    @pytest.mark.parametrize("method,expected", [
        ("shorter", 0.0),
        ("longer", 180.0),
        ("increasing", 0.0),
        ("decreasing", 180.0),
    ])
    def test_methods(self, method, expected):
        assert interpolate_hue(350, 10, 0.5, method) == pytest.approx(expected)

    def test_endpoints(self):
        assert interpolate_hue(30, 90, 0) == pytest.approx(30)
        assert interpolate_hue(30, 90, 1) == pytest.approx(90)

    def test_unknown_method(self):
        with pytest.raises(GrammarError):
            interpolate_hue(0, 10, 0.5, "sideways")
