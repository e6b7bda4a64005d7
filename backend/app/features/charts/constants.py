"""
Chart constants: canvas geometry, palette and chart types.
"""

from enum import Enum


class ChartType(str, Enum):
    """Available chart types."""
    NET_TIMES = "net_times"
    HISTOGRAM = "histogram"
    START_BUCKETS = "start_buckets"
    START_VS_FINISH = "start_vs_finish"


# Canvas
SVG_WIDTH = 1200
SVG_HEIGHT = 600
SVG_HEIGHT_TALL = 800  # start vs finish scatter

PADDING_LEFT = 70
PADDING_RIGHT = 30
PADDING_TOP = 40
PADDING_BOTTOM = 70

# Colors
BAR_COLOR = "#1f77b4"
AXIS_COLOR = "#333333"
GRID_COLOR = "#dddddd"
MUTED_TEXT_COLOR = "#666666"
FONT_FAMILY = "Arial, sans-serif"

# One color per highlighted runner, cycled by highlight index
HIGHLIGHT_COLORS = [
    "#ff4444",
    "#2ca02c",
    "#ff7f0e",
    "#9467bd",
    "#e377c2",
    "#17becf",
    "#8c564b",
    "#bcbd22",
    "#1a55a8",
    "#7f7f7f",
]
MAX_HIGHLIGHTS = 10

# Histograms
DEFAULT_BUCKET_SIZE_SECONDS = 60
START_BUCKET_COUNT = 30
Y_TICK_COUNT = 6

# Human-friendly tick spacings in minutes
TICK_INTERVALS_MINUTES = (1, 2, 5, 10, 15, 20, 30, 60, 120, 180, 240)
MAX_TICKS = 12
