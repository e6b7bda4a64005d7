"""ChartService: chart dispatch by type and highlight resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from app.features.results.models import ResultRecord

from .builders import (
    render_histogram_svg,
    render_net_times_svg,
    render_start_buckets_svg,
    render_start_vs_finish_svg,
)
from .constants import DEFAULT_BUCKET_SIZE_SECONDS, START_BUCKET_COUNT, ChartType
from .errors import ChartError

logger = logging.getLogger(__name__)


@dataclass
class ChartSet:
    """Output of render_all: rendered charts plus the reason for each failure."""

    charts: dict[ChartType, str] = field(default_factory=dict)
    errors: dict[ChartType, str] = field(default_factory=dict)


class ChartService:
    """Renders charts for one list of records."""

    def __init__(
        self,
        bucket_size_seconds: int = DEFAULT_BUCKET_SIZE_SECONDS,
        start_bucket_count: int = START_BUCKET_COUNT,
    ):
        self.bucket_size_seconds = bucket_size_seconds
        self.start_bucket_count = start_bucket_count

    @staticmethod
    def resolve_highlights(
        records: Sequence[ResultRecord], indices: Iterable[int]
    ) -> list[ResultRecord]:
        """Map record indices to records, keeping order, skipping unknown and repeated ones.

        The highlight limit is applied by the chart builders.
        """
        by_index = {r.index: r for r in records}
        selected: list[ResultRecord] = []
        for index in indices:
            record = by_index.get(index)
            if record is None:
                logger.warning(f"Highlighted runner #{index} not in records, skipped")
                continue
            if record not in selected:
                selected.append(record)

        return selected

    def render(
        self,
        chart_type: ChartType | str,
        records: Sequence[ResultRecord],
        bucket_size_seconds: int | None = None,
        highlight_indices: Iterable[int] = (),
    ) -> str:
        """
        Render one chart.

        Args:
            chart_type: ChartType or its value ("histogram", ...)
            records: Records to plot (already filtered by distance)
            bucket_size_seconds: Histogram bucket width, service default if None
            highlight_indices: Record indices of runners to highlight

        Returns:
            SVG document

        Raises:
            EmptyDatasetError: Nothing to plot
            ValueError: Unknown chart type or invalid bucket size
        """
        chart_type = ChartType(chart_type)
        bucket_size = bucket_size_seconds or self.bucket_size_seconds
        highlights = self.resolve_highlights(records, highlight_indices)

        if chart_type is ChartType.NET_TIMES:
            return render_net_times_svg(records, highlights=highlights)
        if chart_type is ChartType.HISTOGRAM:
            return render_histogram_svg(records, bucket_size, highlights=highlights)
        if chart_type is ChartType.START_BUCKETS:
            return render_start_buckets_svg(
                records,
                bucket_size,
                highlights=highlights,
                start_bucket_count=self.start_bucket_count,
            )
        return render_start_vs_finish_svg(records, highlights=highlights)

    def render_all(
        self,
        records: Sequence[ResultRecord],
        bucket_size_seconds: int | None = None,
        highlight_indices: Iterable[int] = (),
    ) -> ChartSet:
        """Render every chart type; a chart that cannot be drawn records its error."""
        indices = list(highlight_indices)
        result = ChartSet()
        for chart_type in ChartType:
            try:
                result.charts[chart_type] = self.render(
                    chart_type, records, bucket_size_seconds, indices
                )
            except ChartError as e:
                logger.info(f"Chart {chart_type.value} not rendered: {e}")
                result.errors[chart_type] = str(e)
        return result
