"""
Tests for color interpolation and palettes.
"""

import re

import pytest

from app.features.charts.colors import (
    gradient_stops,
    hsl_to_rgb,
    interpolate_color,
    runner_color,
)
from app.features.charts.constants import HIGHLIGHT_COLORS

RGB = re.compile(r"^rgb\((\d+),(\d+),(\d+)\)$")


def hue_of(color: str) -> float:
    """Hue in degrees of an "rgb(r,g,b)" string."""
    r, g, b = (int(v) / 255 for v in RGB.match(color).groups())
    high, low = max(r, g, b), min(r, g, b)
    delta = high - low
    if delta == 0:
        return 0.0
    if high == r:
        hue = 60 * (((g - b) / delta) % 6)
    elif high == g:
        hue = 60 * ((b - r) / delta + 2)
    else:
        hue = 60 * ((r - g) / delta + 4)
    return hue


# =============================================================================
# Test HSL Conversion
# =============================================================================

class TestHslToRgb:
    """Tests for hsl_to_rgb."""

    @pytest.mark.parametrize("hue,rgb", [
        (0, (255, 0, 0)),
        (60, (255, 255, 0)),
        (120, (0, 255, 0)),
        (180, (0, 255, 255)),
        (240, (0, 0, 255)),
        (300, (255, 0, 255)),
    ])
    def test_primary_hues(self, hue, rgb):
        assert hsl_to_rgb(hue, 1.0, 0.5) == rgb

    def test_hue_wraps(self):
        assert hsl_to_rgb(360, 1.0, 0.5) == hsl_to_rgb(0, 1.0, 0.5)

    def test_grey(self):
        assert hsl_to_rgb(123, 0.0, 0.5) == (128, 128, 128)

    def test_white_and_black(self):
        assert hsl_to_rgb(0, 1.0, 1.0) == (255, 255, 255)
        assert hsl_to_rgb(0, 1.0, 0.0) == (0, 0, 0)


# =============================================================================
# Test Interpolation
# =============================================================================

class TestInterpolateColor:
    """Tests for interpolate_color."""

    def test_start_is_red(self):
        assert interpolate_color(0) == "rgb(255,0,0)"

    def test_end_is_purple(self):
        assert interpolate_color(1) == "rgb(255,0,255)"

    def test_clamped(self):
        assert interpolate_color(-0.5) == interpolate_color(0)
        assert interpolate_color(1.5) == interpolate_color(1)

    def test_deterministic(self):
        assert interpolate_color(0.37) == interpolate_color(0.37)

    def test_hue_monotonic(self):
        hues = [hue_of(interpolate_color(i / 50)) for i in range(51)]
        assert hues == sorted(hues)

    def test_format(self):
        assert RGB.match(interpolate_color(0.5))


# =============================================================================
# Test Gradient and Palette
# =============================================================================

class TestPalettes:
    """Tests for gradient stops and runner colors."""

    def test_gradient_stops(self):
        stops = gradient_stops()
        assert len(stops) == 11
        assert stops[0] == (0.0, interpolate_color(0))
        assert stops[-1] == (100.0, interpolate_color(1))

    def test_gradient_needs_two_stops(self):
        with pytest.raises(ValueError):
            gradient_stops(1)

    def test_runner_colors_distinct(self):
        colors = [runner_color(i) for i in range(len(HIGHLIGHT_COLORS))]
        assert len(set(colors)) == len(colors)

    def test_runner_colors_cycle(self):
        assert runner_color(len(HIGHLIGHT_COLORS)) == runner_color(0)
