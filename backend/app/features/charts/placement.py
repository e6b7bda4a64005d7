"""
Callout placement for highlighted runners.

Each highlighted point gets an arrow (label -> dot) and a text label.
Preferred placement is up and to the right of the point. Near the top edge
the label goes beside the point; near the right edge it goes up-left.
Shortened arrows never reach past their own tail: the stand-off from the
dot is capped at the arrow length.
The n-th highlight is pushed down/up by n * 25 px so labels of nearby
points do not stack on top of each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Pixel constants of the heuristic
STAGGER_PX = 25  # extra vertical offset per highlight index
MIN_SPACE_ABOVE_PX = 50  # below this (+ stagger) the label goes to the side
MIN_SPACE_SIDE_PX = 60  # horizontal room needed for a diagonal arrow
SIDE_ARROW_PX = 80  # arrow length for side placements
DIAGONAL_DX_PX = 60
DIAGONAL_DY_PX = 40
SHORT_DY_PX = 20  # rise of the shortened top-left arrow
STANDOFF_PX = 8  # gap between arrow head and dot
TEXT_GAP_PX = 5  # gap between arrow tail and text
SIDE_TEXT_BASELINE_PX = 4  # vertical centering of side labels
EDGE_MARGIN_PX = 10  # shortened arrows stop this far from the plot edge


class PlacementStrategy(str, Enum):
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"
    SHORT_TOP_LEFT = "short_top_left"
    SHORT_TOP_RIGHT = "short_top_right"
    SIDE_RIGHT = "side_right"
    SIDE_LEFT = "side_left"
    SHORT_SIDE_RIGHT = "short_side_right"
    SHORT_SIDE_LEFT = "short_side_left"


@dataclass(frozen=True)
class PlotArea:
    """Plot rectangle inside a canvas, in pixels."""

    left: float
    right: float
    top: float
    bottom: float
    canvas_width: float
    canvas_height: float


@dataclass(frozen=True)
class LabelPlacement:
    """Where to draw one callout."""

    arrow_start_x: float
    arrow_start_y: float
    arrow_end_x: float
    arrow_end_y: float
    text_x: float
    text_y: float
    text_anchor: str  # "start" (label right of tail) or "end"
    strategy: PlacementStrategy


def _side(
    px: float, py: float, direction: int, length: float, offset: float,
    strategy: PlacementStrategy,
) -> LabelPlacement:
    """Label beside the point, slightly below it, arrow pointing back."""
    start_x = px + direction * length
    start_y = py + TEXT_GAP_PX + offset
    return LabelPlacement(
        arrow_start_x=start_x,
        arrow_start_y=start_y,
        arrow_end_x=px + direction * min(STANDOFF_PX, length),
        arrow_end_y=py,
        text_x=start_x + direction * TEXT_GAP_PX,
        text_y=start_y + SIDE_TEXT_BASELINE_PX,
        text_anchor="start" if direction > 0 else "end",
        strategy=strategy,
    )


def _diagonal(
    px: float, py: float, direction: int, length: float, dy: float,
    strategy: PlacementStrategy,
) -> LabelPlacement:
    """Label above the point, arrow pointing diagonally down to it."""
    start_x = px + direction * length
    start_y = py - dy
    return LabelPlacement(
        arrow_start_x=start_x,
        arrow_start_y=start_y,
        arrow_end_x=px + direction * min(STANDOFF_PX, length),
        arrow_end_y=py - STANDOFF_PX,
        text_x=start_x + direction * TEXT_GAP_PX,
        text_y=start_y,
        text_anchor="start" if direction > 0 else "end",
        strategy=strategy,
    )


def _short_length(space: float) -> float:
    return max(0.0, min(DIAGONAL_DX_PX, space - EDGE_MARGIN_PX))


def _choose(px: float, py: float, plot: PlotArea, offset: float) -> LabelPlacement:
    space_above = py - plot.top
    space_right = plot.right - px
    space_left = px - plot.left

    if space_above < MIN_SPACE_ABOVE_PX + offset:
        if space_right > space_left and space_right > SIDE_ARROW_PX:
            return _side(px, py, 1, SIDE_ARROW_PX, offset, PlacementStrategy.SIDE_RIGHT)
        if space_left > SIDE_ARROW_PX:
            return _side(px, py, -1, SIDE_ARROW_PX, offset, PlacementStrategy.SIDE_LEFT)
        if space_right > space_left:
            return _side(
                px, py, 1, _short_length(space_right), offset,
                PlacementStrategy.SHORT_SIDE_RIGHT,
            )
        return _side(
            px, py, -1, _short_length(space_left), offset,
            PlacementStrategy.SHORT_SIDE_LEFT,
        )

    if space_right < MIN_SPACE_SIDE_PX:
        if space_left > MIN_SPACE_SIDE_PX:
            return _diagonal(
                px, py, -1, DIAGONAL_DX_PX, DIAGONAL_DY_PX + offset,
                PlacementStrategy.TOP_LEFT,
            )
        # Shortened arrow toward whichever side still has room.
        short_left, short_right = _short_length(space_left), _short_length(space_right)
        if short_right > short_left:
            return _diagonal(
                px, py, 1, short_right, SHORT_DY_PX + offset,
                PlacementStrategy.SHORT_TOP_RIGHT,
            )
        return _diagonal(
            px, py, -1, short_left, SHORT_DY_PX + offset,
            PlacementStrategy.SHORT_TOP_LEFT,
        )

    return _diagonal(
        px, py, 1, DIAGONAL_DX_PX, DIAGONAL_DY_PX + offset, PlacementStrategy.TOP_RIGHT
    )


def place_label(
    px: float, py: float, plot: PlotArea, highlight_index: int = 0
) -> LabelPlacement:
    """
    Choose arrow and label position for a highlighted point.

    Args:
        px, py: Point position in canvas pixels
        plot: Plot rectangle and canvas size
        highlight_index: Position of the runner in the highlight list

    Returns:
        LabelPlacement whose text anchor point lies inside the canvas
    """
    offset = highlight_index * STAGGER_PX
    placement = _choose(px, py, plot, offset)

    # Keep the text anchor on the canvas; the arrow tail follows the text.
    text_x = min(max(placement.text_x, 0.0), plot.canvas_width)
    text_y = min(max(placement.text_y, 0.0), plot.canvas_height)
    shift_x = text_x - placement.text_x
    shift_y = text_y - placement.text_y
    if not shift_x and not shift_y:
        return placement

    return LabelPlacement(
        arrow_start_x=placement.arrow_start_x + shift_x,
        arrow_start_y=placement.arrow_start_y + shift_y,
        arrow_end_x=placement.arrow_end_x,
        arrow_end_y=placement.arrow_end_y,
        text_x=text_x,
        text_y=text_y,
        text_anchor=placement.text_anchor,
        strategy=placement.strategy,
    )
