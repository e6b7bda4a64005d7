"""Charts feature module: SVG charts of race results."""

from .constants import ChartType, MAX_HIGHLIGHTS
from .errors import ChartError, EmptyDatasetError
from .service import ChartService, ChartSet
from .builders import (
    render_histogram_svg,
    render_net_times_svg,
    render_start_buckets_svg,
    render_start_vs_finish_svg,
)

__all__ = [
    "ChartType",
    "MAX_HIGHLIGHTS",
    "ChartError",
    "EmptyDatasetError",
    "ChartService",
    "ChartSet",
    "render_histogram_svg",
    "render_net_times_svg",
    "render_start_buckets_svg",
    "render_start_vs_finish_svg",
]
