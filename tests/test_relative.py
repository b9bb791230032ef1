"""
Tests for relative color syntax: tokenizing, calc() compilation and evaluation.
"""

import math

import pytest

from csspectrum import FormatError, GrammarError, default_registry, parse, type_of
from csspectrum.relative import (
    Calc,
    ChannelRef,
    NoneKeyword,
    Number,
    Percentage,
    compile_calc,
    evaluate_rpn,
    is_relative,
    parse_relative,
    tokenize,
)

RGB = default_registry.get_model("rgb")


class TestTokenize:

    def test_top_level_split(self):
        assert tokenize("red calc(r / 2) g b / 50%") == ["red", "calc(r / 2)", "g", "b", "/", "50%"]

    def test_nested_base_color(self):
        assert tokenize("rgb(255 0 0 / 0.5) r g b") == ["rgb(255 0 0 / 0.5)", "r", "g", "b"]

    def test_unbalanced(self):
        with pytest.raises(GrammarError):
            tokenize("calc(r / 2 g b")


class TestCompileCalc:

    def test_precedence(self):
        assert compile_calc("1 + 2 * 3", RGB, "") == [Number(1.0), Number(2.0), Number(3.0), "*", "+"]

    def test_parentheses(self):
        assert compile_calc("(1 + 2) * 3", RGB, "") == [Number(1.0), Number(2.0), "+", Number(3.0), "*"]

    def test_channels_and_unary_minus(self):
        assert compile_calc("-r + 10%", RGB, "") == [ChannelRef("r"), "neg", Percentage(10.0), "+"]

    @pytest.mark.parametrize("body", ["1 +", "(1 + 2", "1 + 2)", "* 2", "q + 1", "1 $ 2"])
    def test_malformed(self, body):
        with pytest.raises(GrammarError):
            compile_calc(body, RGB, "")


class TestEvaluateRpn:

    def test_arithmetic(self):
        rpn = compile_calc("(10 + 2) * 20 - r / 5", RGB, "")
        assert evaluate_rpn(rpn, {"r": 255.0}.__getitem__) == pytest.approx(189.0)

    def test_percentage_is_fraction(self):
        assert evaluate_rpn([Percentage(50.0)], {}.__getitem__) == 0.5

    def test_division_by_zero_is_nan(self):
        assert math.isnan(evaluate_rpn(compile_calc("r / 0", RGB, ""), {"r": 1.0}.__getitem__))


class TestParseRelative:

    def test_structure(self):
        expr = parse_relative("rgb(from red calc(r / 2) none b / 50%)", default_registry)
        assert expr.model == "rgb"
        assert expr.base == "red"
        assert isinstance(expr.channels[0], Calc)
        assert expr.channels[1] == NoneKeyword()
        assert expr.channels[2] == ChannelRef("b")
        assert expr.alpha == Percentage(50.0)

    def test_color_function(self):
        expr = parse_relative("color(from red display-p3 r g b)", default_registry)
        assert expr.model == "display-p3"

    def test_alias(self):
        assert type_of("rgba(from red r g b)") == "rgb"
        assert type_of("hsla(from red h s l)") == "hsl"
        assert type_of("color(from red xyz x y z)") == "xyz"

    @pytest.mark.parametrize("text", [
        "foo(from red r g b)",
        "hex(from red r g b)",
        "color(from red foo r g b)",
        "rgb(from red r g)",
        "rgb(from red r g b a)",
        "rgb(from red r g x)",
        "rgb(from red r g b / 1 2)",
        "rgb(from r g b)",
    ])
    def test_grammar_errors(self, text):
        with pytest.raises(GrammarError):
            parse(text)

    def test_detection(self):
        assert is_relative("rgb(from red r g b)")
        assert not is_relative("rgb(255 0 0)")


class TestResolve:

    def test_identity(self):
        assert parse("rgb(from red r g b)").to("rgb") == "rgb(255, 0, 0)"

    def test_calc(self):
        assert parse("rgb(from red calc(r / 5) g b)").to("rgb") == "rgb(51, 0, 0)"
        assert parse("rgb(from black calc(10 + 2 * 20) g b)").to("rgb") == "rgb(50, 0, 0)"
        assert parse("rgb(from black calc(-1 * -255) g b)").to("rgb") == "rgb(255, 0, 0)"

    def test_half_channel_rounds_down(self):
        assert parse("rgb(from red calc(r / 2) g b)").to("rgb") == "rgb(127, 0, 0)"
        assert parse("rgb(from red calc(r / 2) g b)").in_model("rgb").get("r") == 127

    def test_hue_rotation(self):
        assert parse("hsl(from red calc(h + 120) s l)").to("hsl") == "hsl(120, 100%, 50%)"

    def test_percentages_use_channel_range(self):
        assert parse("rgb(from red 20% g b)").to("rgb") == "rgb(51, 0, 0)"
        assert parse("hsl(from red 50% s l)").to("hsl") == "hsl(180, 100%, 50%)"

    def test_alpha(self):
        assert parse("rgb(from red r g b / 50%)").to("rgb") == "rgba(255, 0, 0, 0.5)"
        assert parse("rgb(from red r g b / calc(alpha / 4))").to("rgb") == "rgba(255, 0, 0, 0.25)"

    def test_alpha_inherited_from_base(self):
        assert parse("rgb(from rgb(255 0 0 / 0.5) r g b)").to("rgb") == "rgba(255, 0, 0, 0.5)"

    def test_none_is_zero(self):
        assert parse("rgb(from white r none none)").to("rgb") == "rgb(255, 0, 0)"

    def test_color_space(self):
        assert parse("color(from red srgb r g b)").to("srgb") == "color(srgb 1 0 0)"
        assert parse("color(from red srgb b g r)").to("hex") == "#0000ff"

    def test_nested_relative_base(self):
        assert parse("rgb(from rgb(from red g r b) r g b)").to("hex") == "#00ff00"

    def test_division_by_zero_fails_on_output(self):
        color = parse("rgb(from red calc(r / 0) g b)")
        with pytest.raises(FormatError, match="NaN"):
            color.to("rgb")
        with pytest.raises(FormatError):
            color.to("hex")
