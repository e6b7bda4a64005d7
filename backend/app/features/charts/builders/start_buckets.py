"""Stacked histogram of net finish times, colored by start time."""

from __future__ import annotations

import logging
from typing import Sequence

from app.features.results.models import ResultRecord
from app.features.results.timeparse import minutes_to_label
from app.shared.formatters import format_bucket_size

from ..binning import StackedBin, build_stacked_bins
from ..colors import gradient_stops, interpolate_color, runner_color
from ..constants import (
    AXIS_COLOR,
    DEFAULT_BUCKET_SIZE_SECONDS,
    MUTED_TEXT_COLOR,
    START_BUCKET_COUNT,
    SVG_HEIGHT,
    SVG_WIDTH,
    Y_TICK_COUNT,
)
from ..placement import PlotArea
from ..scales import choose_tick_interval, scale_linear, tick_values
from ..svg import (
    Highlight,
    axes,
    axis_labels,
    count_ticks,
    element,
    fmt,
    highlight_overlay,
    plot_area,
    svg_document,
    tooltip,
    x_tick,
)
from .common import match_highlights, timed_net_and_start

logger = logging.getLogger(__name__)

HIGHLIGHT_RADIUS = 6
GRADIENT_ID = "startGradient"

# Legend: gradient bar in the top-right corner of the plot
LEGEND_WIDTH = 180
LEGEND_HEIGHT = 12
LEGEND_RIGHT_OFFSET = 220
# Above this start spread (seconds) legend labels switch from s to min
LEGEND_MINUTES_THRESHOLD = 180


def _legend_value(seconds: float, spread: float) -> str:
    if spread > LEGEND_MINUTES_THRESHOLD:
        return f"{int(seconds / 60 + 0.5)}min"
    return f"{int(seconds + 0.5)}s"


def _legend(plot: PlotArea, spread: float) -> tuple[str, list[str]]:
    """Gradient definition plus the legend bar and its labels."""
    stops = [
        element("stop", offset=f"{offset:.1f}%", stop_color=color)
        for offset, color in gradient_stops()
    ]
    gradient = element(
        "linearGradient", children=stops,
        id=GRADIENT_ID, x1="0%", y1="0%", x2="100%", y2="0%",
        gradientUnits="objectBoundingBox",
    )

    x = plot.right - LEGEND_RIGHT_OFFSET
    y = plot.top
    right = x + LEGEND_WIDTH
    middle = x + LEGEND_WIDTH / 2
    marks = [
        element(
            "rect", x=x, y=y, width=LEGEND_WIDTH, height=LEGEND_HEIGHT,
            fill=f"url(#{GRADIENT_ID})",
        ),
        element(
            "text", "Earlier start",
            x=x, y=y - 6, text_anchor="start", font_size=12, fill=AXIS_COLOR,
        ),
        element(
            "text", "Later start",
            x=right, y=y - 6, text_anchor="end", font_size=12, fill=AXIS_COLOR,
        ),
    ]
    for label_x, anchor, seconds in (
        (x, "start", 0),
        (middle, "middle", spread / 2),
        (right, "end", spread),
    ):
        marks.append(element(
            "text", _legend_value(seconds, spread),
            x=fmt(label_x), y=y + 24, text_anchor=anchor, font_size=10,
            fill=MUTED_TEXT_COLOR,
        ))
    return gradient, marks


def render_start_buckets_svg(
    records: Sequence[ResultRecord],
    bucket_size_seconds: int = DEFAULT_BUCKET_SIZE_SECONDS,
    highlights: Sequence[ResultRecord] = (),
    start_bucket_count: int = START_BUCKET_COUNT,
) -> str:
    """
    Render finishers per net-time bucket, each bar stacked by start window.

    The start-time range is split into start_bucket_count equal windows;
    segment color runs red (earliest window) to purple (latest).

    Raises:
        EmptyDatasetError: No finishers with a start time, or nothing parseable
        ValueError: Non-positive bucket size
    """
    if bucket_size_seconds <= 0:
        raise ValueError(f"Bucket size must be positive, got {bucket_size_seconds}")

    timed = timed_net_and_start(records)
    width, height = SVG_WIDTH, SVG_HEIGHT
    plot = plot_area(width, height)

    bin_minutes = bucket_size_seconds / 60
    layout, windows = build_stacked_bins(
        timed,
        bin_minutes,
        value=lambda item: item.net_minutes,
        secondary=lambda item: item.start_seconds,
        window_count=start_bucket_count,
    )
    bins: list[StackedBin] = layout.bins
    max_total = max(b.total for b in bins)
    spread = windows.high - windows.low

    scale_x = scale_linear(layout.low, layout.high + bin_minutes, plot.left, plot.right)
    scale_y = scale_linear(0, max_total, plot.bottom, plot.top)

    def bar_geometry(start: float) -> tuple[float, float]:
        x = scale_x(start)
        return x, max(1.0, scale_x(start + bin_minutes) - x - 1)

    columns: list[str] = []
    for b in bins:
        if not b.total:
            continue
        x, bar_width = bar_geometry(b.start_value)
        finish_range = (
            f"{minutes_to_label(b.start_value)}-{minutes_to_label(b.start_value + bin_minutes)}"
        )
        cumulative = 0
        for segment in b.segments:
            y_top = scale_y(cumulative + segment.count)
            y_bottom = scale_y(cumulative)
            cumulative += segment.count
            color = interpolate_color(
                (segment.representative_value - windows.low) / (spread or 1)
            )
            columns.append(element(
                "rect",
                children=[tooltip(
                    f"Finish {finish_range}\nStart bucket {segment.key + 1}: {segment.count}"
                )],
                x=fmt(x), y=fmt(y_top), width=fmt(bar_width),
                height=fmt(max(1.0, y_bottom - y_top)), fill=color,
            ))

    interval = choose_tick_interval(layout.low, layout.high)
    ticks: list[str] = []
    for minute in tick_values(layout.low, layout.high + bin_minutes, interval):
        ticks.extend(x_tick(plot, scale_x(minute), minutes_to_label(minute)))

    overlay = []
    for slot, _, item in match_highlights(timed, highlights):
        b = bins[layout.index_of(item.net_minutes)]
        x, bar_width = bar_geometry(b.start_value)
        stack_height = b.segment_offset(windows.key_of(item.start_seconds))
        name = item.record.display_name
        overlay.append(Highlight(
            slot=slot,
            name=name,
            tooltip=f"{name} - Finish: {minutes_to_label(item.net_minutes)}",
            color=runner_color(slot),
            x=x + bar_width / 2,
            y=scale_y(stack_height if stack_height is not None else b.total),
        ))
    markers, marks = highlight_overlay(overlay, plot, "arrowhead-bucket", HIGHLIGHT_RADIUS)

    gradient, legend = _legend(plot, spread)

    logger.debug(
        f"Start buckets: {len(timed)} finishers, {layout.bin_count} bins, "
        f"{windows.count} start windows of {windows.size:.1f}s"
    )

    bucket_label = format_bucket_size(bucket_size_seconds)
    body = [
        *axes(plot),
        *ticks,
        *count_ticks(plot, scale_y, max_total, Y_TICK_COUNT),
        *columns,
        *marks,
        *axis_labels(
            plot,
            f"Net finish time ({bucket_label}, labels every {interval} min)",
            "Number of finishers",
        ),
        *legend,
    ]
    return svg_document(
        width,
        height,
        title="Finish time vs start time",
        description=(
            f"Stacked histogram showing the number of finishers in {bucket_label} "
            f"of net finish time, segmented by start time (color)."
        ),
        body=body,
        defs=[gradient, *markers],
    )
