#!/usr/bin/env python3
"""CLI script for rendering race result charts to SVG files.

Usage:
    # Render all charts from a downloaded results.json
    python backend/scripts/render_charts.py \
        --file results.json --out charts/

    # Fetch from datasport, half marathon only, 30-second buckets
    python backend/scripts/render_charts.py \
        --url "https://wyniki.datasport.pl/results4567/" \
        --distance 21097.00 --bucket-size 30 --out charts/

    # Highlight runners (first name match each)
    python backend/scripts/render_charts.py \
        --file results.json --runner "Kowalski Jan" --runner 1234 --out charts/

    # List distances found in the file
    python backend/scripts/render_charts.py --file results.json --list-distances
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.features.charts import ChartService
from app.features.results import (
    DatasportClient,
    DatasportError,
    ResultRecord,
    filter_by_distance,
    finisher_summary,
    records_from_vendor,
    runner_options,
    search_runners,
    unique_distances,
)


def load_records(args: argparse.Namespace) -> list[ResultRecord]:
    """Read records from --file or download them from --url."""
    if args.url:
        print(f"Fetching {args.url}...")
        try:
            data = asyncio.run(DatasportClient().fetch_results(args.url))
        except DatasportError as e:
            print(f"Fetch failed: {e}")
            sys.exit(1)
    else:
        path = Path(args.file)
        if not path.exists():
            print(f"File not found: {path}")
            sys.exit(1)
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list) or not all(isinstance(e, dict) for e in data):
            print(f"Expected a JSON list of result objects in {path}")
            sys.exit(1)

    records = records_from_vendor(data)
    finishers, dnf = finisher_summary(records)
    if dnf:
        print(f"Loaded {finishers} finishers ({dnf} DNF/DNS excluded)")
    else:
        print(f"Loaded {finishers} results")
    return records


def resolve_runners(records: list[ResultRecord], queries: list[str]) -> list[int]:
    """Record index of the first match for each --runner query."""
    options = runner_options(records)
    indices = []
    for query in queries:
        found = search_runners(options, query, limit=1)
        if not found:
            print(f'  No runner matches "{query}"')
            continue
        print(f'  "{query}" -> {found[0].display_name}')
        indices.append(found[0].index)
    return indices


def print_distances(records: list[ResultRecord]) -> None:
    for option in unique_distances(records):
        count = sum(1 for r in records if r.distance == option.value)
        print(f"  {option.value:>12s}  {option.label:<28s} {count:5d} records")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render datasport results charts as SVG")
    parser.add_argument("--url", help="datasport results page URL")
    parser.add_argument("--file", help="Load from a saved results.json")
    parser.add_argument("--out", help="Output directory for SVG files")
    parser.add_argument("--distance", help="Only records with this distance value")
    parser.add_argument(
        "--bucket-size",
        type=int,
        default=settings.default_bucket_size_seconds,
        help="Histogram bucket size in seconds",
    )
    parser.add_argument(
        "--runner",
        action="append",
        default=[],
        help="Runner to highlight (name or bib, repeatable, max 10)",
    )
    parser.add_argument(
        "--list-distances",
        action="store_true",
        help="Print distances found in the data and exit",
    )

    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Either --url or --file is required")
    if not args.out and not args.list_distances:
        parser.error("--out is required")
    if args.bucket_size <= 0:
        parser.error("--bucket-size must be positive")

    records = load_records(args)

    if args.list_distances:
        print_distances(records)
        return

    records = filter_by_distance(records, args.distance)
    if args.distance:
        print(f"Distance {args.distance}: {len(records)} records")

    indices = resolve_runners(records, args.runner) if args.runner else []

    service = ChartService(
        bucket_size_seconds=args.bucket_size,
        start_bucket_count=settings.start_bucket_count,
    )
    result = service.render_all(records, highlight_indices=indices)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    for chart_type, svg in result.charts.items():
        path = out_dir / f"{chart_type.value}.svg"
        path.write_text(svg, encoding="utf-8")
        print(f"Saved {path}")
    for chart_type, message in result.errors.items():
        print(f"Skipped {chart_type.value}: {message}")

    if not result.charts:
        sys.exit(1)


if __name__ == "__main__":
    main()
