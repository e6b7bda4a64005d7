"""Fixed-width binning for histograms and stacked histograms.

Bins cover [floor(min), ceil(max)] in steps of `width`, plus one extra bin
so a maximum sitting exactly on a boundary still has a bin. Values past the
nominal range fall into the last bin; nothing is dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Sequence, TypeVar

from .constants import START_BUCKET_COUNT
from .errors import EmptyDatasetError

T = TypeVar("T")


def _identity(item: Any) -> float:
    return item


@dataclass
class Bin(Generic[T]):
    """One histogram bucket: [start_value, start_value + width)."""

    start_value: float
    count: int = 0
    entries: list[T] = field(default_factory=list)


@dataclass
class Segment:
    """Part of a stacked bin belonging to one secondary window."""

    key: int
    count: int
    representative_value: float  # midpoint of the key's window


@dataclass
class StackedBin:
    """Histogram bucket split into per-window segments (ascending key)."""

    start_value: float
    total: int = 0
    segments: list[Segment] = field(default_factory=list)

    def segment_offset(self, key: int) -> float | None:
        """Stack height at the middle of the segment for key, or None."""
        below = 0
        for segment in self.segments:
            if segment.key == key:
                return below + segment.count / 2
            below += segment.count
        return None


@dataclass
class BinLayout(Generic[T]):
    """Bin boundaries plus the filled bins."""

    low: float  # floor(min value)
    high: float  # ceil(max value)
    width: float
    bins: list[Any]

    @property
    def bin_count(self) -> int:
        return len(self.bins)

    def index_of(self, value: float) -> int:
        return bin_index(value, self.low, self.width, self.bin_count)


@dataclass
class Windows:
    """N equal-width windows over a secondary value range."""

    low: float
    high: float
    count: int
    size: float  # (high - low) / count, or 1 for a zero-width range

    def key_of(self, value: float) -> int:
        index = math.floor((value - self.low) / self.size)
        return max(0, min(self.count - 1, index))

    def midpoint(self, key: int) -> float:
        return self.low + (key + 0.5) * self.size


def bin_index(value: float, low: float, width: float, bin_count: int) -> int:
    """Bin index for value, clamped to [0, bin_count - 1]."""
    index = math.floor((value - low) / width)
    return max(0, min(bin_count - 1, index))


def _layout(values: Sequence[float], width: float) -> tuple[float, float, int]:
    if width <= 0:
        raise ValueError(f"Bin width must be positive, got {width}")
    if not values:
        raise EmptyDatasetError("No values to bin.")
    low = math.floor(min(values))
    high = math.ceil(max(values))
    bin_count = max(1, math.ceil((high - low) / width) + 1)
    return low, high, bin_count


def build_bins(
    items: Sequence[T],
    width: float,
    value: Callable[[T], float] = _identity,
) -> BinLayout[T]:
    """
    Count items into fixed-width bins.

    Args:
        items: Values, or objects holding a value
        width: Bin width, same unit as the values
        value: Extracts the numeric value from an item

    Returns:
        BinLayout whose bins hold the items they counted

    Raises:
        EmptyDatasetError: No items
        ValueError: Non-positive width
    """
    values = [value(item) for item in items]
    low, high, bin_count = _layout(values, width)

    layout = BinLayout(
        low=low,
        high=high,
        width=width,
        bins=[Bin(start_value=low + i * width) for i in range(bin_count)],
    )
    for item, v in zip(items, values):
        target = layout.bins[layout.index_of(v)]
        target.count += 1
        target.entries.append(item)
    return layout


def make_windows(values: Sequence[float], count: int = START_BUCKET_COUNT) -> Windows:
    """Split [min, max] of values into count equal windows."""
    if count < 1:
        raise ValueError(f"Window count must be at least 1, got {count}")
    if not values:
        raise EmptyDatasetError("No values to split into windows.")
    low, high = min(values), max(values)
    size = (high - low) / count or 1
    return Windows(low=low, high=high, count=count, size=size)


def build_stacked_bins(
    items: Sequence[T],
    width: float,
    value: Callable[[T], float],
    secondary: Callable[[T], float],
    window_count: int,
) -> tuple[BinLayout[T], Windows]:
    """
    Count items into fixed-width bins, split by secondary-value window.

    Each item's secondary value is assigned to one of window_count equal
    windows over the secondary range; every bin keeps a count per window.

    Returns:
        (layout of StackedBin, windows used for the secondary value)
    """
    values = [value(item) for item in items]
    low, high, bin_count = _layout(values, width)
    windows = make_windows([secondary(item) for item in items], window_count)

    counts: list[dict[int, int]] = [{} for _ in range(bin_count)]
    for item, v in zip(items, values):
        key = windows.key_of(secondary(item))
        per_key = counts[bin_index(v, low, width, bin_count)]
        per_key[key] = per_key.get(key, 0) + 1

    bins = [
        StackedBin(
            start_value=low + i * width,
            total=sum(per_key.values()),
            segments=[
                Segment(key=k, count=c, representative_value=windows.midpoint(k))
                for k, c in sorted(per_key.items())
            ],
        )
        for i, per_key in enumerate(counts)
    ]
    return BinLayout(low=low, high=high, width=width, bins=bins), windows
