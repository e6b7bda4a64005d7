"""Chart builders: one pure function per chart type, each returning an SVG string."""

from .histogram import render_histogram_svg
from .net_times import render_net_times_svg
from .start_buckets import render_start_buckets_svg
from .start_vs_finish import render_start_vs_finish_svg

__all__ = [
    "render_histogram_svg",
    "render_net_times_svg",
    "render_start_buckets_svg",
    "render_start_vs_finish_svg",
]
