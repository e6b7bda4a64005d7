"""
Tests for linear scales and tick interval selection.
"""

import pytest

from app.features.charts.constants import MAX_TICKS, TICK_INTERVALS_MINUTES
from app.features.charts.scales import choose_tick_interval, scale_linear, tick_values


# =============================================================================
# Test Linear Scale
# =============================================================================

class TestScaleLinear:
    """Tests for scale_linear."""

    @pytest.mark.parametrize("domain,output", [
        ((0, 10), (70, 1170)),
        ((2712, 2790.5), (530, 40)),
        ((-5, 5), (0, 1)),
        ((100, 0), (0, 600)),
    ])
    def test_domain_ends_map_to_range_ends(self, domain, output):
        scale = scale_linear(*domain, *output)
        assert scale(domain[0]) == pytest.approx(output[0])
        assert scale(domain[1]) == pytest.approx(output[1])

    def test_midpoint(self):
        scale = scale_linear(0, 10, 0, 100)
        assert scale(5) == pytest.approx(50)

    def test_inverted_range(self):
        """Y axes map larger values to smaller pixel positions."""
        scale = scale_linear(0, 10, 530, 40)
        assert scale(10) < scale(0)

    def test_no_clamping(self):
        scale = scale_linear(0, 10, 0, 100)
        assert scale(11) == pytest.approx(110)
        assert scale(-1) == pytest.approx(-10)

    def test_degenerate_domain_uses_span_one(self):
        scale = scale_linear(5, 5, 0, 100)
        assert scale(5) == 0
        assert scale(6) == pytest.approx(100)


# =============================================================================
# Test Tick Interval
# =============================================================================

class TestChooseTickInterval:
    """Tests for choose_tick_interval."""

    def test_zero_range(self):
        assert choose_tick_interval(45, 45) == 1

    def test_short_range_small_interval(self):
        assert choose_tick_interval(45, 50) == 1
        assert choose_tick_interval(40, 60) == 2

    def test_long_range_multiple_of_five(self):
        for span in (30, 60, 90, 150, 300, 600):
            assert choose_tick_interval(0, span) % 5 == 0

    def test_tick_count_bounded(self):
        for span in (1, 7, 13, 25, 59, 61, 119, 240, 1000):
            interval = choose_tick_interval(100, 100 + span)
            assert span / interval <= MAX_TICKS

    def test_monotonic(self):
        intervals = [choose_tick_interval(0, span) for span in range(0, 2000, 7)]
        assert intervals == sorted(intervals)

    def test_huge_range_largest_interval(self):
        assert choose_tick_interval(0, 100000) == TICK_INTERVALS_MINUTES[-1]

    def test_order_of_arguments_irrelevant(self):
        assert choose_tick_interval(60, 0) == choose_tick_interval(0, 60)


# =============================================================================
# Test Tick Values
# =============================================================================

class TestTickValues:
    """Tests for tick_values."""

    def test_multiples_inside_range(self):
        assert tick_values(43, 71, 10) == [50, 60, 70]

    def test_bounds_inclusive(self):
        assert tick_values(40, 60, 10) == [40, 50, 60]

    def test_fractional_bounds(self):
        assert tick_values(45.2, 46.5, 1) == [46]

    def test_empty_when_no_multiple(self):
        assert tick_values(41, 49, 10) == []

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            tick_values(0, 10, 0)
