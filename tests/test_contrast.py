"""
Tests for luminance, contrast ratios and WCAG thresholds.
"""

import pytest

from csspectrum import Color, FormatError, contrast_ratio, contrast_report, is_accessible_pair, parse
from csspectrum.contrast import composite_luminance, wcag_levels, wcag_threshold


class TestLuminance:

    def test_extremes(self):
        assert parse("white").get_luminance() == pytest.approx(1.0)
        assert parse("black").get_luminance() == pytest.approx(0.0)

    def test_translucent_over_background(self):
        assert parse("rgba(0, 0, 0, 0.5)").get_luminance() == pytest.approx(0.5)
        assert parse("rgba(0, 0, 0, 0.5)").get_luminance("black") == pytest.approx(0.0)

    def test_composite(self):
        assert composite_luminance(0.2, 1.0, 0.9) == 0.2
        assert composite_luminance(0.2, 0.25, 1.0) == pytest.approx(0.8)

    @pytest.mark.parametrize("text", ["black", "navy", "#333333", "darkred"])
    def test_dark(self, text):
        assert parse(text).is_dark()

    @pytest.mark.parametrize("text", ["white", "yellow", "#eeeeee", "cyan"])
    def test_light(self, text):
        assert parse(text).is_light()


class TestContrastRatio:

    def test_black_on_white(self):
        assert contrast_ratio("#fff", "#000") == pytest.approx(21.0, rel=1e-6)

    def test_symmetric(self):
        assert contrast_ratio("red", "blue") == pytest.approx(contrast_ratio("blue", "red"))

    def test_same_color(self):
        assert Color.contrast_ratio("teal", parse("teal")) == pytest.approx(1.0)

    def test_gray_on_white(self):
        ratio = parse("#777777").contrast_with("white")
        assert 4.4 < ratio < 4.5

    def test_accessible_pair(self):
        assert is_accessible_pair("#fff", "#000", "AAA")
        assert not is_accessible_pair("#777777", "white")
        assert is_accessible_pair("#777777", "white", large_text=True)

    def test_unknown_level(self):
        with pytest.raises(FormatError):
            wcag_threshold("A")


class TestReport:

    def test_levels(self):
        assert wcag_levels(5.0) == {
            "AA": {"normal": "Pass", "large": "Pass"},
            "AAA": {"normal": "Fail", "large": "Pass"},
        }

    def test_report(self):
        report = contrast_report("#fff", "#000")
        assert report["ratio"] == pytest.approx(21.0, rel=1e-6)
        assert report["levels"]["AAA"]["normal"] == "Pass"
