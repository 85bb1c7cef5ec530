"""
Tests for specified-to-computed CSS color conversion.
"""

import pytest
from a11y_scanner.css_colors import (
    NAMED_COLORS,
    computed_color,
    format_rgb,
    hsl_to_rgb,
)


class TestComputedColor:
    """Tests for computed_color."""

    def test_named_colors(self):
        """Test named colors are case-insensitive and cover the full table."""
        assert computed_color("Navy") == "rgb(0, 0, 128)"
        assert computed_color("darkblue") == "rgb(0, 0, 139)"
        assert computed_color("rebeccapurple") == "rgb(102, 51, 153)"
        assert len(NAMED_COLORS) >= 140

    def test_transparent(self):
        """Test transparent is fully transparent black."""
        assert computed_color("transparent") == "rgba(0, 0, 0, 0)"

    def test_hex(self):
        """Test every hex notation length."""
        assert computed_color("#09c") == "rgb(0, 153, 204)"
        assert computed_color("#fff8") == "rgba(255, 255, 255, 0.533)"
        assert computed_color("#1A2B3C") == "rgb(26, 43, 60)"
        assert computed_color("#00000080") == "rgba(0, 0, 0, 0.502)"

    def test_rgb_comma_syntax(self):
        """Test legacy rgb()/rgba() with numbers and percentages."""
        assert computed_color("rgb(118, 118, 118)") == "rgb(118, 118, 118)"
        assert computed_color("rgba(0, 0, 0, 0)") == "rgba(0, 0, 0, 0)"
        assert computed_color("rgb(100%, 50%, 0%)") == "rgb(255, 128, 0)"
        assert computed_color("RGBA(10, 20, 30, .5)") == "rgba(10, 20, 30, 0.5)"

    def test_rgb_space_syntax(self):
        """Test modern space separated rgb() with a slash alpha."""
        assert computed_color("rgb(0 0 0)") == "rgb(0, 0, 0)"
        assert computed_color("rgb(0 0 0 / 50%)") == "rgba(0, 0, 0, 0.5)"
        assert computed_color("rgba(255 255 255 / 0.25)") == "rgba(255, 255, 255, 0.25)"

    def test_channels_are_clamped(self):
        """Test out-of-range channels and alpha are clamped."""
        assert computed_color("rgb(300, -5, 0)") == "rgb(255, 0, 0)"
        assert computed_color("rgba(0, 0, 0, 2)") == "rgb(0, 0, 0)"

    @pytest.mark.parametrize("value,expected", [
        ("hsl(0,0%,0%)", "rgb(0, 0, 0)"),
        ("hsl(0, 0%, 100%)", "rgb(255, 255, 255)"),
        ("hsl(0, 100%, 50%)", "rgb(255, 0, 0)"),
        ("hsl(0.5turn 100% 50%)", "rgb(0, 255, 255)"),
        ("hsl(240 100% 50% / 0.5)", "rgba(0, 0, 255, 0.5)"),
        ("hsla(120deg, 100%, 50%, 25%)", "rgba(0, 255, 0, 0.25)"),
        ("hsl(-120, 100%, 50%)", "rgb(0, 0, 255)"),
    ])
    def test_hsl(self, value, expected):
        """Test hsl()/hsla() in both syntaxes and with hue units."""
        assert computed_color(value) == expected

    @pytest.mark.parametrize("value", [
        None,
        "",
        "notacolor",
        "inherit",
        "currentcolor",
        "#12345",
        "var(--muted)",
        "color-mix(in srgb, red, blue)",
        "lab(50% 0 0)",
        "rgb(0, 0)",
        "rgb(0 0 0 /)",
        "rgb(0, 0, 0 / 1)",
        "hsl(10foo, 10%, 10%)",
    ])
    def test_unsupported_values(self, value):
        """Test values with no computed color yield None."""
        assert computed_color(value) is None


class TestHelpers:
    """Tests for the conversion helpers."""

    def test_hsl_to_rgb(self):
        """Test primary hues at full saturation."""
        assert hsl_to_rgb(0, 1.0, 0.5) == pytest.approx((255, 0, 0))
        assert hsl_to_rgb(120, 1.0, 0.5) == pytest.approx((0, 255, 0))
        assert hsl_to_rgb(240, 1.0, 0.25) == pytest.approx((0, 0, 127.5))

    def test_format_rgb_rounds_half_up(self):
        """Test channels round half up and alpha keeps three places."""
        assert format_rgb(0.4, 254.6, 127.5) == "rgb(0, 255, 128)"
        assert format_rgb(0, 0, 0, 1 / 3) == "rgba(0, 0, 0, 0.333)"
