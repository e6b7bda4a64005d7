"""Scatter of relative start time vs net finish time."""

from __future__ import annotations

import logging
from typing import Sequence

from app.features.results.models import ResultRecord
from app.features.results.timeparse import format_net_time, format_offset, minutes_to_label

from ..colors import runner_color
from ..constants import BAR_COLOR, SVG_HEIGHT_TALL, SVG_WIDTH
from ..scales import choose_tick_interval, scale_linear, tick_values
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
    vertical_grid,
    x_tick,
    y_tick,
)
from .common import match_highlights, timed_net_and_start

logger = logging.getLogger(__name__)

POINT_RADIUS = 3
POINT_OPACITY = 0.6
HIGHLIGHT_RADIUS = 5
GRID_COLOR = "#e0e0e0"
# Below this relative start (minutes) the Y labels are "+M", above "+HH:MM"
MINUTE_LABELS_LIMIT = 60


def render_start_vs_finish_svg(
    records: Sequence[ResultRecord],
    highlights: Sequence[ResultRecord] = (),
) -> str:
    """
    Render each finisher at (net time, start offset from the first starter).

    Returns:
        SVG document, 1200x800

    Raises:
        EmptyDatasetError: No finishers with a start time, or nothing parseable
    """
    timed = timed_net_and_start(records)
    width, height = SVG_WIDTH, SVG_HEIGHT_TALL
    plot = plot_area(width, height)

    earliest = min(item.start_seconds for item in timed)
    offsets = [item.start_seconds - earliest for item in timed]
    nets = [item.net_seconds for item in timed]
    min_offset, max_offset = min(offsets), max(offsets)
    min_net, max_net = min(nets), max(nets)

    scale_x = scale_linear(min_net, max_net, plot.left, plot.right)
    scale_y = scale_linear(min_offset, max_offset, plot.bottom, plot.top)

    grid: list[str] = []
    ticks: list[str] = []

    x_interval = choose_tick_interval(min_net / 60, max_net / 60)
    for minute in tick_values(min_net / 60, max_net / 60, x_interval):
        x = scale_x(minute * 60)
        grid.append(vertical_grid(plot, x, GRID_COLOR))
        ticks.extend(x_tick(plot, x, minutes_to_label(minute)))

    use_minutes = max_offset / 60 < MINUTE_LABELS_LIMIT
    y_interval = choose_tick_interval(min_offset / 60, max_offset / 60)
    for minute in tick_values(min_offset / 60, max_offset / 60, y_interval):
        y = scale_y(minute * 60)
        grid.append(horizontal_grid(plot, y, GRID_COLOR))
        label = f"+{minute:g}" if use_minutes else f"+{minutes_to_label(minute)}"
        ticks.extend(y_tick(plot, y, label))

    def label(position: int) -> str:
        item = timed[position]
        return (
            f"{item.record.display_name} - Start: {format_offset(offsets[position])}, "
            f"Net time: {format_net_time(item.net_seconds)}"
        )

    matched = match_highlights(timed, highlights)
    highlighted = {position for _, position, _ in matched}

    points = [
        element(
            "circle", children=[tooltip(label(i))],
            cx=fmt(scale_x(item.net_seconds)), cy=fmt(scale_y(offsets[i])),
            r=POINT_RADIUS, fill=BAR_COLOR, opacity=POINT_OPACITY,
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
            x=scale_x(item.net_seconds),
            y=scale_y(offsets[position]),
        )
        for slot, position, item in matched
    ]
    markers, marks = highlight_overlay(overlay, plot, "arrowhead-start", HIGHLIGHT_RADIUS)

    logger.debug(
        f"Start vs finish: {len(timed)} points, start spread {max_offset - min_offset:.0f}s"
    )

    y_label = (
        "Relative start time (minutes after first starter)"
        if use_minutes
        else "Relative start time (HH:MM after first starter)"
    )
    body = [
        *grid,
        *axes(plot),
        *ticks,
        *points,
        *marks,
        *axis_labels(plot, "Net finish time", y_label),
    ]
    return svg_document(
        width,
        height,
        title="Relative Start Time vs Net Finish Time",
        description=(
            "Scatter plot showing correlation between relative start time "
            "and net finish time for race participants"
        ),
        body=body,
        defs=markers,
    )
