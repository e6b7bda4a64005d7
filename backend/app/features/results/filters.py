"""Record filtering, distance enumeration and runner search."""

from __future__ import annotations

import math
from typing import Sequence

from .models import DistanceOption, ResultRecord, RunnerOption

MARATHON_KM = 42.195
HALF_MARATHON_KM = 21.0975
# Distances within this many km of a named distance get its name
NAMED_DISTANCE_TOLERANCE_KM = 0.1


def filter_finishers(records: Sequence[ResultRecord]) -> list[ResultRecord]:
    """Keep entries with a non-empty net time."""
    return [r for r in records if r.net_time_string.strip()]


def finisher_summary(records: Sequence[ResultRecord]) -> tuple[int, int]:
    """(finishers, entries without a net time: DNF/DNS)."""
    finishers = len(filter_finishers(records))
    return finishers, len(records) - finishers


def filter_by_distance(
    records: Sequence[ResultRecord], distance: str | None
) -> list[ResultRecord]:
    """Keep entries for one distance value. Empty distance keeps everything."""
    if not distance:
        return list(records)
    return [r for r in records if r.distance == distance]


def _meters(value: str) -> float | None:
    try:
        meters = float(value)
    except ValueError:
        return None
    return meters if math.isfinite(meters) else None


def format_distance(value: str) -> str:
    """Format a distance in meters for display.

    "42195"    -> "Marathon (42.20 km)"
    "21097.00" -> "Half Marathon (21.10 km)"
    "10000"    -> "10 km"
    "7500"     -> "7.50 km"
    """
    meters = _meters(value)
    if meters is None:
        return value

    km = meters / 1000
    if abs(km - MARATHON_KM) < NAMED_DISTANCE_TOLERANCE_KM:
        return f"Marathon ({km:.2f} km)"
    if abs(km - HALF_MARATHON_KM) < NAMED_DISTANCE_TOLERANCE_KM:
        return f"Half Marathon ({km:.2f} km)"
    if abs(km - 10) < NAMED_DISTANCE_TOLERANCE_KM:
        return "10 km"
    if abs(km - 5) < NAMED_DISTANCE_TOLERANCE_KM:
        return "5 km"
    return f"{km:.2f} km"


def unique_distances(records: Sequence[ResultRecord]) -> list[DistanceOption]:
    """Distinct distances sorted numerically (non-numeric values last)."""
    values = {r.distance for r in records if r.distance}

    def sort_key(value: str) -> tuple[int, float, str]:
        meters = _meters(value)
        if meters is None:
            return (1, 0.0, value)
        return (0, meters, value)

    return [
        DistanceOption(value=v, label=format_distance(v))
        for v in sorted(values, key=sort_key)
    ]


def runner_options(records: Sequence[ResultRecord]) -> list[RunnerOption]:
    """Build the list of selectable runners, sorted by name.

    Display name: "Name (Category) #Bib", parts omitted when missing.
    Entries without a name are skipped.
    """
    options = []
    for r in records:
        name = r.display_name
        if not name:
            continue
        display = name
        if r.category:
            display += f" ({r.category})"
        if r.bib_number:
            display += f" #{r.bib_number}"
        options.append(
            RunnerOption(
                index=r.index,
                name=name,
                bib=r.bib_number,
                category=r.category,
                display_name=display,
            )
        )
    options.sort(key=lambda o: (o.name.casefold(), o.index))
    return options


def search_runners(
    options: Sequence[RunnerOption], query: str, limit: int = 50
) -> list[RunnerOption]:
    """Case-insensitive partial match on display name, name or bib."""
    term = query.strip().lower()
    if not term:
        return []
    found = [
        o
        for o in options
        if term in o.display_name.lower()
        or term in o.name.lower()
        or term in o.bib.lower()
    ]
    return found[:limit]
