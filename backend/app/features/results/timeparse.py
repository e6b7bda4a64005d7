"""Parsing and formatting of datasport time strings.

Formats:
    net time   "01:02:03,456" -> 3723.456  (HH:MM:SS,fff)
    start time "08:15"        -> 29700     (HH:MM or HH:MM:SS)

Both parsers return None on failure. 0.0 is a valid parsed time.
"""

from __future__ import annotations

import math
import re

_WHITESPACE = re.compile(r"\s+")


def _number(text: str) -> float | None:
    """Parse one numeric component, rejecting nan/inf and negatives."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_net_time(value: str | None) -> float | None:
    """Parse net time "HH:MM:SS,fff" to seconds.

    "01:02:03,456" -> 3723.456
    "1:2:3"        -> None  (fraction part is mandatory)
    """
    if not value:
        return None
    parts = _WHITESPACE.sub("", value).split(":")
    if len(parts) != 3:
        return None
    sec_fraction = parts[2].split(",")
    if len(sec_fraction) != 2:
        return None

    hours = _number(parts[0])
    minutes = _number(parts[1])
    seconds = _number(sec_fraction[0])
    fraction = _number(f"0.{sec_fraction[1]}")
    if None in (hours, minutes, seconds, fraction):
        return None
    return hours * 3600 + minutes * 60 + seconds + fraction


def parse_start_time(value: str | None) -> float | None:
    """Parse start clock time "HH:MM[:SS]" to seconds from midnight.

    "08:15"    -> 29700
    "08:15:30" -> 29730
    """
    if not value:
        return None
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        return None

    hours = _number(parts[0])
    minutes = _number(parts[1])
    seconds = _number(parts[2]) if len(parts) == 3 else 0.0
    if None in (hours, minutes, seconds):
        return None
    return hours * 3600 + minutes * 60 + seconds


def minutes_to_label(minute: float) -> str:
    """Format minutes as "HH:MM" (fractional minutes are floored).

    45.5 -> "00:45", 135 -> "02:15"
    """
    total = math.floor(minute)
    hours, mins = divmod(total, 60)
    return f"{hours:02d}:{mins:02d}"


def format_net_time(seconds: float) -> str:
    """Format seconds as "HH:MM:SS" (fractions are dropped)."""
    total = math.floor(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_offset(seconds: float) -> str:
    """Format a start offset as "+M:SS".

    65 -> "+1:05"
    """
    total = math.floor(seconds)
    minutes, secs = divmod(total, 60)
    return f"+{minutes}:{secs:02d}"
