"""Scatter of net finish times, participants in file order."""

from __future__ import annotations

import logging
from typing import Sequence

from app.features.results.models import ResultRecord
from app.features.results.timeparse import minutes_to_label

from ..colors import runner_color
from ..constants import BAR_COLOR, GRID_COLOR, SVG_HEIGHT, SVG_WIDTH
from ..scales import scale_linear, tick_values
from ..svg import (
    Highlight,
    axes,
    axis_labels,
    element,
    fmt,
    highlight_overlay,
    horizontal_grid,
    plot_area,
    svg_document,
    tooltip,
    y_tick,
)
from .common import match_highlights, timed_net

logger = logging.getLogger(__name__)

GRID_INTERVAL_MINUTES = 10
POINT_RADIUS = 2
HIGHLIGHT_RADIUS = 5


def render_net_times_svg(
    records: Sequence[ResultRecord],
    highlights: Sequence[ResultRecord] = (),
) -> str:
    """
    Render every finisher's net time as a dot, x = order in the file.

    Args:
        records: Result records (non-finishers are skipped)
        highlights: Runners to mark with an arrow and label

    Returns:
        SVG document, 1200x600

    Raises:
        EmptyDatasetError: No finishers, or no parseable net time
    """
    timed = timed_net(records)
    width, height = SVG_WIDTH, SVG_HEIGHT
    plot = plot_area(width, height)

    seconds = [item.net_seconds for item in timed]
    min_seconds, max_seconds = min(seconds), max(seconds)

    scale_x = scale_linear(0, len(timed) - 1, plot.left, plot.right)
    scale_y = scale_linear(min_seconds, max_seconds, plot.bottom, plot.top)

    # 10-minute gridlines and labels inside the data range
    grid: list[str] = []
    ticks: list[str] = []
    for minute in tick_values(min_seconds / 60, max_seconds / 60, GRID_INTERVAL_MINUTES):
        y = scale_y(minute * 60)
        grid.append(horizontal_grid(plot, y, GRID_COLOR))
        ticks.extend(y_tick(plot, y, minutes_to_label(minute)))

    def label(position: int) -> str:
        item = timed[position]
        record = item.record
        return f"{item.finisher_position + 1}. {record.display_name} - {record.net_time_string}".strip()

    matched = match_highlights(timed, highlights)
    highlighted = {position for _, position, _ in matched}

    points = [
        element(
            "circle", children=[tooltip(label(i))],
            cx=fmt(scale_x(i)), cy=fmt(scale_y(item.net_seconds)), r=POINT_RADIUS,
            fill=BAR_COLOR,
        )
        for i, item in enumerate(timed)
        if i not in highlighted
    ]

    overlay = [
        Highlight(
            slot=slot,
            name=item.record.display_name,
            tooltip=label(position),
            color=runner_color(slot),
            x=scale_x(position),
            y=scale_y(item.net_seconds),
        )
        for slot, position, item in matched
    ]
    markers, marks = highlight_overlay(overlay, plot, "arrowhead-net", HIGHLIGHT_RADIUS)

    logger.debug(f"Net times scatter: {len(timed)} points, {len(overlay)} highlighted")

    body = [
        *grid,
        *axes(plot),
        *ticks,
        *points,
        *marks,
        *axis_labels(plot, "Participants (ordered as in file)", "Net finish time"),
    ]
    return svg_document(
        width,
        height,
        title="Net finish times",
        description=(
            "Each dot represents the net finish time for a finisher "
            "(only entries with non-zero placing)."
        ),
        body=body,
        defs=markers,
    )
