"""
Tests for highlight callout placement.
"""

import random

import pytest

from app.features.charts.placement import (
    PlacementStrategy,
    PlotArea,
    STAGGER_PX,
    place_label,
)


@pytest.fixture
def plot():
    """Default 1200x600 canvas with 70/30/40/70 padding."""
    return PlotArea(left=70, right=1170, top=40, bottom=530, canvas_width=1200, canvas_height=600)


@pytest.fixture
def narrow_plot():
    return PlotArea(left=0, right=100, top=0, bottom=200, canvas_width=100, canvas_height=200)


# =============================================================================
# Test Strategies
# =============================================================================

class TestStrategies:
    """Which strategy is picked for where the point sits."""

    def test_top_right_default(self, plot):
        p = place_label(600, 300, plot)

        assert p.strategy == PlacementStrategy.TOP_RIGHT
        assert (p.arrow_start_x, p.arrow_start_y) == (660, 260)
        assert (p.arrow_end_x, p.arrow_end_y) == (608, 292)
        assert (p.text_x, p.text_y) == (665, 260)
        assert p.text_anchor == "start"

    def test_side_right_near_top(self, plot):
        p = place_label(300, 60, plot)

        assert p.strategy == PlacementStrategy.SIDE_RIGHT
        assert (p.arrow_start_x, p.arrow_start_y) == (380, 65)
        assert (p.arrow_end_x, p.arrow_end_y) == (308, 60)
        assert (p.text_x, p.text_y) == (385, 69)
        assert p.text_anchor == "start"

    def test_side_left_near_top_right(self, plot):
        p = place_label(1000, 60, plot)

        assert p.strategy == PlacementStrategy.SIDE_LEFT
        assert (p.arrow_start_x, p.arrow_start_y) == (920, 65)
        assert (p.arrow_end_x, p.arrow_end_y) == (992, 60)
        assert (p.text_x, p.text_y) == (915, 69)
        assert p.text_anchor == "end"

    def test_top_left_near_right_edge(self, plot):
        p = place_label(1150, 300, plot)

        assert p.strategy == PlacementStrategy.TOP_LEFT
        assert (p.arrow_start_x, p.arrow_start_y) == (1090, 260)
        assert (p.arrow_end_x, p.arrow_end_y) == (1142, 292)
        assert (p.text_x, p.text_y) == (1085, 260)
        assert p.text_anchor == "end"

    def test_short_top_left(self, narrow_plot):
        p = place_label(50, 150, narrow_plot)

        assert p.strategy == PlacementStrategy.SHORT_TOP_LEFT
        assert (p.arrow_start_x, p.arrow_start_y) == (10, 130)
        assert (p.arrow_end_x, p.arrow_end_y) == (42, 142)
        assert p.text_x == 5

    def test_short_top_right_when_left_edge_is_closer(self):
        plot = PlotArea(left=0, right=50, top=0, bottom=200, canvas_width=50, canvas_height=200)
        p = place_label(2, 150, plot)

        assert p.strategy == PlacementStrategy.SHORT_TOP_RIGHT
        assert (p.arrow_start_x, p.arrow_start_y) == (40, 130)
        assert (p.arrow_end_x, p.arrow_end_y) == (10, 142)
        assert p.text_x == 45
        assert p.text_anchor == "start"

    def test_zero_length_arrow_head_stays_on_point(self):
        plot = PlotArea(left=0, right=10, top=0, bottom=200, canvas_width=10, canvas_height=200)
        p = place_label(5, 150, plot)

        assert p.strategy == PlacementStrategy.SHORT_TOP_LEFT
        assert p.arrow_start_x == p.arrow_end_x == 5

    def test_short_side_left(self, narrow_plot):
        p = place_label(50, 20, narrow_plot)

        assert p.strategy == PlacementStrategy.SHORT_SIDE_LEFT
        assert (p.arrow_start_x, p.arrow_start_y) == (10, 25)
        assert (p.text_x, p.text_y) == (5, 29)

    def test_short_side_right(self, narrow_plot):
        p = place_label(40, 20, narrow_plot)

        assert p.strategy == PlacementStrategy.SHORT_SIDE_RIGHT
        assert (p.arrow_start_x, p.arrow_start_y) == (90, 25)
        assert (p.text_x, p.text_y) == (95, 29)


# =============================================================================
# Test Staggering
# =============================================================================

class TestStagger:
    """Later highlights are pushed further away."""

    def test_diagonal_rises_with_index(self, plot):
        first = place_label(600, 300, plot, highlight_index=0)
        third = place_label(600, 300, plot, highlight_index=2)

        assert first.arrow_start_y - third.arrow_start_y == 2 * STAGGER_PX
        assert third.arrow_start_y == 210

    def test_side_drops_with_index(self, plot):
        first = place_label(300, 60, plot, highlight_index=0)
        second = place_label(300, 60, plot, highlight_index=1)

        assert second.arrow_start_y - first.arrow_start_y == STAGGER_PX

    def test_stagger_raises_top_threshold(self, plot):
        assert place_label(600, 120, plot, 0).strategy == PlacementStrategy.TOP_RIGHT
        assert place_label(600, 120, plot, 2).strategy == PlacementStrategy.SIDE_RIGHT


# =============================================================================
# Test Canvas Bounds
# =============================================================================

class TestBounds:
    """Text anchor stays on the canvas."""

    def test_text_clamped_to_bottom(self):
        plot = PlotArea(left=0, right=400, top=0, bottom=100, canvas_width=400, canvas_height=100)
        p = place_label(100, 20, plot, highlight_index=4)

        assert p.strategy == PlacementStrategy.SIDE_RIGHT
        assert p.text_y == 100
        assert p.arrow_start_y == 96
        assert (p.arrow_end_x, p.arrow_end_y) == (108, 20)

    def test_random_points_stay_inside(self, plot):
        rng = random.Random(7)
        for _ in range(500):
            px = rng.uniform(plot.left, plot.right)
            py = rng.uniform(plot.top, plot.bottom)
            p = place_label(px, py, plot, highlight_index=rng.randrange(10))

            assert 0 <= p.text_x <= plot.canvas_width
            assert 0 <= p.text_y <= plot.canvas_height
            assert min(px, p.arrow_start_x) <= p.arrow_end_x <= max(px, p.arrow_start_x)
