"""Record selection shared by all chart builders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from app.features.results.filters import filter_finishers
from app.features.results.models import ResultRecord
from app.features.results.timeparse import parse_net_time, parse_start_time

from ..constants import MAX_HIGHLIGHTS
from ..errors import EmptyDatasetError

logger = logging.getLogger(__name__)

NO_FINISHERS_MESSAGE = "No completed runs in the data."


@dataclass(frozen=True)
class TimedRecord:
    """A finisher with its parsed times (start is None for net-only charts)."""

    record: ResultRecord
    net_seconds: float
    start_seconds: float | None = None
    finisher_position: int = 0  # among chart finishers, before unparsable times are dropped

    @property
    def net_minutes(self) -> float:
        return self.net_seconds / 60


def chart_finishers(
    records: Sequence[ResultRecord], require_start: bool = False
) -> list[ResultRecord]:
    """Placed runners with a net time (and a start time when required)."""
    finishers = [
        r for r in filter_finishers(records)
        if r.is_placed
        and (not require_start or r.start_time_string.strip())
    ]
    if not finishers:
        raise EmptyDatasetError(NO_FINISHERS_MESSAGE)
    return finishers


def _report_dropped(total: int, kept: int, what: str) -> None:
    if kept < total:
        logger.warning(f"Skipped {total - kept} of {total} finishers with unparsable {what}")


def timed_net(records: Sequence[ResultRecord]) -> list[TimedRecord]:
    """Finishers with a parseable net time, input order kept."""
    finishers = chart_finishers(records)
    timed = []
    for position, record in enumerate(finishers):
        seconds = parse_net_time(record.net_time_string)
        if seconds is not None:
            timed.append(TimedRecord(
                record=record, net_seconds=seconds, finisher_position=position
            ))

    if not timed:
        raise EmptyDatasetError("Failed to parse net times.")
    _report_dropped(len(finishers), len(timed), "net times")
    return timed


def timed_net_and_start(records: Sequence[ResultRecord]) -> list[TimedRecord]:
    """Finishers with both net and start time parseable, input order kept."""
    finishers = chart_finishers(records, require_start=True)
    timed = []
    for position, record in enumerate(finishers):
        net = parse_net_time(record.net_time_string)
        start = parse_start_time(record.start_time_string)
        if net is not None and start is not None:
            timed.append(TimedRecord(
                record=record, net_seconds=net, start_seconds=start,
                finisher_position=position,
            ))

    if not timed:
        raise EmptyDatasetError("Failed to parse start and net finish times.")
    _report_dropped(len(finishers), len(timed), "start or net times")
    return timed


def limit_highlights(highlights: Sequence[ResultRecord]) -> list[ResultRecord]:
    """First MAX_HIGHLIGHTS highlights; the rest are dropped with a warning."""
    if len(highlights) > MAX_HIGHLIGHTS:
        logger.warning(
            f"{len(highlights)} runners selected, highlighting the first {MAX_HIGHLIGHTS}"
        )
    return list(highlights[:MAX_HIGHLIGHTS])


def match_highlights(
    timed: Sequence[TimedRecord], highlights: Sequence[ResultRecord]
) -> list[tuple[int, int, TimedRecord]]:
    """
    Pair each highlight with its plotted entry.

    Returns (highlight position, position in `timed`, entry) in highlight
    order. The highlight position picks the color and label stagger, so a
    runner keeps its color on every chart. Highlights that are not plotted
    (filtered out or unparsable) are skipped.
    """
    position = {item.record: i for i, item in enumerate(timed)}
    matched = []
    for slot, record in enumerate(limit_highlights(highlights)):
        i = position.get(record)
        if i is not None:
            matched.append((slot, i, timed[i]))
    return matched
