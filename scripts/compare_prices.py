#!/usr/bin/env python3
"""
Cross-Country Price Comparison

Builds comparison groups from the stored records and prints them as JSON:
one group per match key found in at least two countries.

Usage:
    python3 scripts/compare_prices.py
    python3 scripts/compare_prices.py --db data/prices.db --output output/compare.json
    python3 scripts/compare_prices.py --min-tier BrandCategory
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pricecompare.common.log_config import setup_logging
from pricecompare.common.settings import get_db_path
from pricecompare.comparison import aggregate, groups_to_dicts
from pricecompare.models import MatchTier
from pricecompare.storage import SQLitePriceStore

logger = logging.getLogger(__name__)


def main():
    load_dotenv()
    tiers = [tier.label for tier in MatchTier]

    parser = argparse.ArgumentParser(description="Print cross-country comparison groups as JSON")
    parser.add_argument(
        "--db",
        help="SQLite database path (default: $PRICECOMPARE_DB_PATH or data/prices.db)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write JSON to this file instead of stdout"
    )
    parser.add_argument(
        "--min-tier",
        choices=tiers,
        default=MatchTier.FALLBACK.label,
        help="Drop groups matched below this tier (default: keep all)"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose (debug) logging")
    parser.add_argument("--quiet", action="store_true", help="Show only warnings and errors")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    db_path = args.db or get_db_path()
    if not os.path.exists(db_path):
        logger.error("Database not found: %s", db_path)
        sys.exit(1)

    with SQLitePriceStore(db_path) as store:
        records = store.load_records()

    min_tier = MatchTier.from_label(args.min_tier)
    groups = [g for g in aggregate(records) if g.match_tier.value >= min_tier.value]
    logger.info("%d records -> %d comparison groups", len(records), len(groups))

    output = json.dumps(groups_to_dicts(groups), indent=2, ensure_ascii=False)
    if args.output:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        print(f"Wrote {len(groups)} groups to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
