#!/usr/bin/env python3
"""
Country Acquisition Script

Discovers, extracts and normalizes listings for one or more countries
concurrently and saves them to the SQLite price store.

Features:
- One browser per country, countries run in parallel
- Per-URL retries, failed URLs recorded without stopping the batch
- All-or-nothing save per country

Usage:
    python3 scripts/scrape_countries.py --countries hr si at de --limit 50
    python3 scripts/scrape_countries.py --countries de --limit 10 --db data/test.db
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pricecompare.common.log_config import setup_logging
from pricecompare.common.settings import get_db_path, get_headless
from pricecompare.discovery import get_supported_countries
from pricecompare.pipeline import DEFAULT_LIMIT, AcquisitionContext, run_countries
from pricecompare.storage import SQLitePriceStore

logger = logging.getLogger(__name__)


def main():
    load_dotenv()
    supported = get_supported_countries()

    parser = argparse.ArgumentParser(
        description="Acquire Lidl listings per country into the price store"
    )
    parser.add_argument(
        "--countries", "-c",
        nargs="+",
        default=supported,
        choices=supported,
        help=f"Countries to acquire (default: all of {', '.join(supported)})"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Maximum product URLs per country (default: {DEFAULT_LIMIT})"
    )
    parser.add_argument(
        "--db",
        help="SQLite database path (default: $PRICECOMPARE_DB_PATH or data/prices.db)"
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser windows"
    )
    parser.add_argument(
        "--summary-json",
        help="Write the per-country outcomes to this JSON file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    db_path = args.db or get_db_path()
    headless = get_headless() and not args.headed

    print("=" * 60)
    print("Lidl Price Acquisition")
    print("=" * 60)
    print(f"  Countries:        {', '.join(args.countries)}")
    print(f"  Limit/country:    {args.limit}")
    print(f"  Database:         {db_path}")
    print(f"  Headless:         {headless}")

    context = AcquisitionContext()
    with SQLitePriceStore(db_path) as store:
        run_countries(args.countries, args.limit, context=context, store=store, headless=headless)
        counts = store.get_table_counts()

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for country in args.countries:
        outcome = context.outcomes[country]
        line = f"  {country}: {outcome.status:9} {len(outcome.records):4} records, {outcome.failed_urls} failed URLs"
        if outcome.error:
            line += f" ({outcome.error})"
        print(line)
    elapsed = (context.finished_at - context.started_at).total_seconds()
    print(f"\n  Time elapsed:     {elapsed:.1f} seconds")
    print(f"  Stored prices:    {counts['prices']}")
    print(f"  Stored products:  {counts['products']}")
    print("=" * 60)

    if args.summary_json:
        with open(args.summary_json, "w", encoding="utf-8") as f:
            json.dump([context.outcomes[c].to_dict() for c in args.countries], f, indent=2)

    if not any(outcome.ok for outcome in context.outcomes.values()):
        logger.error("No country was acquired successfully")
        sys.exit(1)


if __name__ == "__main__":
    main()
