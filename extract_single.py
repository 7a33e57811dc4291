#!/usr/bin/env python3
"""
Single Listing Extraction

Extracts one product page and prints the raw listing, its validation report
and the normalized record it produces.

Usage:
    python3 extract_single.py --country hr --url https://www.lidl.hr/p/...
    python3 extract_single.py --country de --url https://www.lidl.de/p/... --verbose
"""

import argparse
import json
import sys

from dotenv import load_dotenv

from pricecompare.browser import open_page
from pricecompare.common import load_countries, setup_logging
from pricecompare.common.settings import get_headless
from pricecompare.extraction import ListingExtractor, ListingValidator, RetryingFetcher
from pricecompare.models import RawListing
from pricecompare.normalization import normalize_listing


def print_report(listing: RawListing, validation: dict):
    """Print extracted fields with the tier each came from."""
    print("\n" + "=" * 80)
    print("EXTRACTION REPORT")
    print("=" * 80)
    print(f"\nURL:     {listing.url}")
    print(f"Country: {listing.country}")

    print("\n" + "-" * 80)
    print("EXTRACTED DATA")
    print("-" * 80)
    fields = [
        ("name", listing.name),
        ("brand", listing.brand),
        ("gtin", listing.gtin),
        ("price", listing.price),
        ("unit_text", listing.unit_text),
        ("deposit", listing.deposit),
    ]
    for label, value in fields:
        source = listing.extraction_method.get(label, "")
        status = "OK" if value else "MISSING"
        print(f"  [{status:7}] {label:12} {value if value else '-'}  {source}")
    print(f"  Loyalty price: {listing.is_loyalty_price}")
    print(f"  Promo:         {listing.is_promo}")

    print("\n" + "-" * 80)
    print("VALIDATION")
    print("-" * 80)
    print(f"  Valid: {validation['overall_valid']}")
    for error in validation["errors"]:
        print(f"  ERROR:   {error}")
    for warning in validation["warnings"]:
        print(f"  WARNING: {warning}")


def main():
    load_dotenv()
    countries = load_countries()

    parser = argparse.ArgumentParser(description="Extract and normalize a single product page")
    parser.add_argument("--url", "-u", required=True, help="Product URL")
    parser.add_argument("--country", "-c", required=True, choices=list(countries), help="Country code")
    parser.add_argument("--json", action="store_true", help="Print the normalized record as JSON only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose (debug) logging")
    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    accept_language = countries[args.country].get("accept_language")
    with open_page(headless=get_headless(), accept_language=accept_language) as page:
        extractor = ListingExtractor(page, args.country)
        result = RetryingFetcher(extractor.extract).fetch(args.url)

    if not result.ok:
        print(f"Extraction failed after {result.attempts} attempts: {result.error}")
        sys.exit(1)

    record = normalize_listing(result.listing)
    if args.json:
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
        return

    print_report(result.listing, ListingValidator(result.listing).validate())
    print("\n" + "-" * 80)
    print("NORMALIZED RECORD")
    print("-" * 80)
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
