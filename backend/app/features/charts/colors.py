"""Color helpers: HSL conversion, start-time gradient and highlight palette."""

from __future__ import annotations

import math

from .constants import HIGHLIGHT_COLORS

HUE_START = 0.0  # red: earliest start
HUE_END = 300.0  # purple: latest start


def _round(value: float) -> int:
    """Round half up (0.5 -> 1), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:
    """Convert HSL (hue in degrees, s/l in 0..1) to 0..255 RGB."""
    hue = h % 360

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((hue / 60) % 2 - 1))
    m = l - c / 2

    if hue < 60:
        r, g, b = c, x, 0.0
    elif hue < 120:
        r, g, b = x, c, 0.0
    elif hue < 180:
        r, g, b = 0.0, c, x
    elif hue < 240:
        r, g, b = 0.0, x, c
    elif hue < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return _round((r + m) * 255), _round((g + m) * 255), _round((b + m) * 255)


def interpolate_color(t: float) -> str:
    """Map t in [0, 1] to "rgb(r,g,b)" along the red -> purple hue ramp."""
    clamped = max(0.0, min(1.0, t))
    hue = HUE_START + (HUE_END - HUE_START) * clamped
    r, g, b = hsl_to_rgb(hue, 1.0, 0.5)
    return f"rgb({r},{g},{b})"


def gradient_stops(count: int = 11) -> list[tuple[float, str]]:
    """Evenly spaced (offset percent, color) stops for the legend gradient."""
    if count < 2:
        raise ValueError("A gradient needs at least 2 stops")
    return [
        (i / (count - 1) * 100, interpolate_color(i / (count - 1)))
        for i in range(count)
    ]


def runner_color(index: int) -> str:
    """Highlight color for the index-th selected runner."""
    return HIGHLIGHT_COLORS[index % len(HIGHLIGHT_COLORS)]
