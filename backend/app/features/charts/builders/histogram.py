"""Histogram of net finish times."""

from __future__ import annotations

import logging
from typing import Sequence

from app.features.results.models import ResultRecord
from app.features.results.timeparse import minutes_to_label
from app.shared.formatters import format_bucket_size

from ..binning import build_bins
from ..colors import runner_color
from ..constants import (
    BAR_COLOR,
    DEFAULT_BUCKET_SIZE_SECONDS,
    SVG_HEIGHT,
    SVG_WIDTH,
    Y_TICK_COUNT,
)
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
from .common import TimedRecord, match_highlights, timed_net

logger = logging.getLogger(__name__)

HIGHLIGHT_RADIUS = 6


def render_histogram_svg(
    records: Sequence[ResultRecord],
    bucket_size_seconds: int = DEFAULT_BUCKET_SIZE_SECONDS,
    highlights: Sequence[ResultRecord] = (),
) -> str:
    """
    Render finishers per net-time bucket as bars.

    Highlighted runners are marked on top of the bar holding their time.

    Raises:
        EmptyDatasetError: No finishers, or no parseable net time
        ValueError: Non-positive bucket size
    """
    if bucket_size_seconds <= 0:
        raise ValueError(f"Bucket size must be positive, got {bucket_size_seconds}")

    timed = timed_net(records)
    width, height = SVG_WIDTH, SVG_HEIGHT
    plot = plot_area(width, height)

    bin_minutes = bucket_size_seconds / 60
    layout = build_bins(timed, bin_minutes, value=lambda item: item.net_minutes)
    max_count = max(b.count for b in layout.bins)

    scale_x = scale_linear(layout.low, layout.high + bin_minutes, plot.left, plot.right)
    scale_y = scale_linear(0, max_count, plot.bottom, plot.top)

    def bar_geometry(start: float) -> tuple[float, float]:
        x = scale_x(start)
        return x, max(1.0, scale_x(start + bin_minutes) - x - 1)

    bars = []
    for b in layout.bins:
        x, bar_width = bar_geometry(b.start_value)
        y = scale_y(b.count)
        end = b.start_value + bin_minutes
        bars.append(element(
            "rect",
            children=[tooltip(f"{minutes_to_label(b.start_value)}-{minutes_to_label(end)}: {b.count}")],
            x=fmt(x), y=fmt(y), width=fmt(bar_width), height=fmt(plot.bottom - y),
            fill=BAR_COLOR,
        ))

    interval = choose_tick_interval(layout.low, layout.high)
    ticks: list[str] = []
    for minute in tick_values(layout.low, layout.high + bin_minutes, interval):
        ticks.extend(x_tick(plot, scale_x(minute), minutes_to_label(minute)))

    def highlight(slot: int, item: TimedRecord) -> Highlight:
        b = layout.bins[layout.index_of(item.net_minutes)]
        x, bar_width = bar_geometry(b.start_value)
        name = item.record.display_name
        return Highlight(
            slot=slot,
            name=name,
            tooltip=f"{name} - {item.record.net_time_string}",
            color=runner_color(slot),
            x=x + bar_width / 2,
            y=scale_y(b.count),
        )

    overlay = [highlight(slot, item) for slot, _, item in match_highlights(timed, highlights)]
    markers, marks = highlight_overlay(overlay, plot, "arrowhead-hist", HIGHLIGHT_RADIUS)

    logger.debug(
        f"Histogram: {len(timed)} finishers in {layout.bin_count} bins of {bucket_size_seconds}s"
    )

    x_label = (
        f"Net finish time ({format_bucket_size(bucket_size_seconds)}, "
        f"labels every {interval} min)"
    )
    body = [
        *axes(plot),
        *ticks,
        *count_ticks(plot, scale_y, max_count, Y_TICK_COUNT),
        *bars,
        *marks,
        *axis_labels(plot, x_label, "Number of finishers"),
    ]
    return svg_document(
        width,
        height,
        title="Histogram of net finish times",
        description=(
            f"Bar chart showing the number of finishers in "
            f"{format_bucket_size(bucket_size_seconds)} of net time."
        ),
        body=body,
        defs=markers,
    )
