"""Data models for datasport result records (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

# datasport.pl results.json keys -> ResultRecord fields
VENDOR_FIELDS = {
    "msc": "placing",
    "czasnetto": "net_time_string",
    "start": "start_time_string",
    "nazwisko": "surname",
    "imie": "given_name",
    "numer": "bib_number",
    "katw": "category",
    "odleglosc": "distance",
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class ResultRecord:
    """Single entry of a results.json export."""

    index: int  # position in the uploaded list
    placing: str = ""  # "0" for DNF/DSQ
    net_time_string: str = ""  # "00:45:12,000"
    start_time_string: str = ""  # "08:00:05"
    surname: str = ""
    given_name: str = ""
    bib_number: str = ""
    category: str = ""  # "M30"
    distance: str = ""  # meters as string: "21097.00"
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_vendor(cls, index: int, entry: Mapping[str, Any]) -> ResultRecord:
        """Build a record from one raw results.json mapping."""
        values = {
            attr: _as_text(entry.get(key)) for key, attr in VENDOR_FIELDS.items()
        }
        return cls(index=index, raw=dict(entry), **values)

    @property
    def display_name(self) -> str:
        return f"{self.surname} {self.given_name}".strip()

    @property
    def is_placed(self) -> bool:
        """Has a non-zero placing."""
        return self.placing.strip() not in ("", "0")


def records_from_vendor(entries: list[Mapping[str, Any]]) -> list[ResultRecord]:
    """Convert a raw results.json list into ResultRecords.

    Non-mapping entries are skipped but keep their index slot,
    so indices always match positions in the stored payload.
    """
    return [
        ResultRecord.from_vendor(i, entry)
        for i, entry in enumerate(entries)
        if isinstance(entry, Mapping)
    ]


@dataclass(frozen=True)
class DistanceOption:
    """A distinct race distance found in a dataset."""

    value: str  # "21097.00"
    label: str  # "Half Marathon (21.10 km)"


@dataclass(frozen=True)
class RunnerOption:
    """A runner that can be selected for highlighting."""

    index: int
    name: str
    bib: str
    category: str
    display_name: str  # "Kowalski Jan (M30) #123"
