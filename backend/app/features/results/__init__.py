"""Results feature module: datasport records, filters, fetching and storage."""

from .models import DistanceOption, ResultRecord, RunnerOption, records_from_vendor
from .timeparse import parse_net_time, parse_start_time
from .filters import (
    filter_by_distance,
    filter_finishers,
    finisher_summary,
    format_distance,
    runner_options,
    search_runners,
    unique_distances,
)
from .datasport import (
    DatasportClient,
    DatasportError,
    DatasportFetchError,
    DatasportURLError,
    get_json_url,
)

__all__ = [
    "DistanceOption",
    "ResultRecord",
    "RunnerOption",
    "records_from_vendor",
    "parse_net_time",
    "parse_start_time",
    "filter_by_distance",
    "filter_finishers",
    "finisher_summary",
    "format_distance",
    "runner_options",
    "search_runners",
    "unique_distances",
    "DatasportClient",
    "DatasportError",
    "DatasportFetchError",
    "DatasportURLError",
    "get_json_url",
]
