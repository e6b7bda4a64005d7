"""Shared fixtures for chart tests."""

import pytest

from app.features.results.models import records_from_vendor


def _entry(placing, net, start, surname, given_name, bib="", category="M30"):
    """One raw results.json entry."""
    return {
        "msc": placing, "czasnetto": net, "start": start,
        "nazwisko": surname, "imie": given_name, "numer": bib, "katw": category,
        "odleglosc": "10000.00",
    }


@pytest.fixture
def make_records():
    """Build records from (placing, net, start, surname, given_name) tuples."""
    def make(*rows):
        return records_from_vendor([_entry(*row) for row in rows])
    return make


@pytest.fixture
def race_records(make_records):
    """Two finishers 2:30 apart at the start, plus one DNF."""
    return make_records(
        ("1", "00:45:12,000", "08:00:00", "Kowalski", "Jan", "101"),
        ("2", "00:46:30,500", "08:02:30", "Nowak", "Anna", "102", "K30"),
        ("0", "", "08:01:00", "Zielinski", "Piotr", "103"),
    )


@pytest.fixture
def no_start_records(make_records):
    """Finishers without start times."""
    return make_records(
        ("1", "00:45:12,000", "", "Kowalski", "Jan"),
        ("2", "00:46:30,500", "", "Nowak", "Anna"),
    )


@pytest.fixture
def crowd_records(make_records):
    """Twelve finishers, one per minute of net time and start time."""
    return make_records(*[
        (str(i + 1), f"00:{40 + i:02d}:00,000", f"09:{i:02d}:00", f"Runner{i:02d}", "Test")
        for i in range(12)
    ])
