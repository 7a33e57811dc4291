#!/usr/bin/env python3
"""
URL Discovery Script

Discovers product URLs for a Lidl country storefront (sitemap first,
category pages as fallback).

Usage:
    python3 discover_urls.py --country hr --output data/hr/urls.txt
    python3 discover_urls.py --country de --limit 100
"""

import argparse
import os
import sys

from dotenv import load_dotenv

from pricecompare.browser import open_page
from pricecompare.common import DiscoveryError, load_countries, setup_logging
from pricecompare.common.settings import get_headless
from pricecompare.discovery import get_discoverer_for_country, get_supported_countries


def main():
    load_dotenv()
    supported = get_supported_countries()

    parser = argparse.ArgumentParser(
        description=f"Discover product URLs (supports: {', '.join(supported)})"
    )
    parser.add_argument(
        "--country", "-c",
        required=True,
        choices=supported,
        help=f"Country storefront to crawl ({', '.join(supported)})"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file for product URLs (default: data/{country}/urls.txt)"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=50,
        help="Limit number of URLs to discover (0 = no limit, default: 50)"
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Sitemap only; skip the category page fallback"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    output_path = args.output or f"data/{args.country}/urls.txt"
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    print("=" * 60)
    print(f"{load_countries()[args.country]['name']} URL Discovery")
    print("=" * 60)
    print(f"  Country: {args.country}")
    print(f"  Output:  {output_path}")
    print(f"  Limit:   {args.limit if args.limit else 'none'}")

    with get_discoverer_for_country(args.country) as discoverer:
        try:
            if args.no_browser:
                discoverer.discover(limit=args.limit)
            else:
                accept_language = load_countries()[args.country].get("accept_language")
                with open_page(headless=get_headless(), accept_language=accept_language) as page:
                    discoverer.discover(limit=args.limit, page=page)
        except DiscoveryError as e:
            print(f"\nDiscovery failed: {e}")
            sys.exit(1)

        discoverer.save_urls(output_path)
        stats = discoverer.get_stats()

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print(f"  Country:          {stats['country']}")
    print(f"  Source:           {stats['source']}")
    print(f"  Products found:   {stats['products_found']}")
    print(f"  Output file:      {output_path}")
    print("=" * 60)


if __name__ == "__main__":
    main()
