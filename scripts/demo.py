#!/usr/bin/env python3
"""
Demo Script - Cross-Country Price Comparison

Demonstrates extraction, normalization and comparison without a browser or
network access, using sample product pages from two storefronts.

Usage:
    python scripts/demo.py
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pricecompare.comparison import aggregate, groups_to_dicts  # noqa: I001
from pricecompare.extraction import ListingExtractor
from pricecompare.normalization import normalize_listings


# Croatian page: structured data carries brand, barcode and price
SAMPLE_HR_HTML = """
<!DOCTYPE html>
<html lang="hr">
<head>
    <title>Milbona Svježe mlijeko 3,5% m.m. - Lidl Hrvatska</title>
    <script type="application/ld+json">
    {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": "Svježe mlijeko 3,5% m.m.",
        "brand": {"@type": "Brand", "name": "Milbona"},
        "gtin13": "20123456",
        "offers": {"@type": "Offer", "price": "1.19", "priceCurrency": "EUR"}
    }
    </script>
</head>
<body>
    <h1 class="keyfacts__title">Svježe mlijeko 3,5% m.m.</h1>
    <div class="m-price__price">1,19 €</div>
    <div class="m-price__unit">1 l</div>
</body>
</html>
"""

# German page: no structured data, brand found in the name, Lidl Plus price
SAMPLE_DE_HTML = """
<!DOCTYPE html>
<html lang="de">
<head><title>Frische Vollmilch - Lidl Deutschland</title></head>
<body>
    <h1>Milbona Frische Vollmilch 3,5 % Fett</h1>
    <div class="m-price__price">1,09 €</div>
    <div class="m-price__unit">1 l = 1,09 €</div>
    <img alt="Lidl Plus Preis" src="/lidl-plus.png">
</body>
</html>
"""


def print_section(title: str, char: str = "="):
    """Print a formatted section header."""
    print(f"\n{char * 70}")
    print(f" {title}")
    print(f"{char * 70}\n")


def print_field(label: str, value, indent: int = 0):
    """Print a field with label and value."""
    print(f"{'  ' * indent}{label}: {value}")


def run_demo():
    """Run the comparison demo."""
    print_section("Lidl Cross-Country Price Comparison Demo", "=")

    print("This demo extracts two sample product pages, normalizes them and")
    print("groups them by match key. No browser or network required!\n")

    listings = []
    for country, url, html in [
        ("hr", "https://www.lidl.hr/p/milbona-svjeze-mlijeko/p10001", SAMPLE_HR_HTML),
        ("de", "https://www.lidl.de/p/milbona-frische-vollmilch/p20001", SAMPLE_DE_HTML),
    ]:
        extractor = ListingExtractor(page=None, country=country)
        listing = extractor.extract_from_html(html, url)
        listings.append(listing)

        print_section(f"Extracted listing ({country})", "-")
        print_field("Name", listing.name)
        print_field("Brand", listing.brand)
        print_field("GTIN", listing.gtin)
        print_field("Price", f"{listing.price} EUR")
        print_field("Unit text", listing.unit_text)
        print_field("Loyalty price", listing.is_loyalty_price)
        print_field("Sources", listing.extraction_method)

    records = normalize_listings(listings)

    print_section("Normalized records", "-")
    for record in records:
        print_field(record.country, f"{record.match_key} [{record.match_tier.label}] "
                                    f"{record.unit_price} EUR/{record.unit_base.unit.value}")

    print_section("Comparison groups", "=")
    print(json.dumps(groups_to_dicts(aggregate(records)), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    run_demo()
