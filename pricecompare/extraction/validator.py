"""
Listing Validator

Field validity checks used by the extraction cascade, plus a whole-listing
report for diagnostics.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional

from ..common.constants import PRICE_MAX, PRICE_MIN, VALID_GTIN_LENGTHS
from ..models import RawListing

_GTIN_PATTERN = re.compile(r"\d{8}|\d{12}|\d{13}|\d{14}")


def normalize_gtin(value) -> Optional[str]:
    """
    Return the barcode if it is 8, 12, 13 or 14 digits, else None.

    Surrounding whitespace is ignored; anything else must be digits.
    """
    if value is None:
        return None
    text = str(value).strip()
    if _GTIN_PATTERN.fullmatch(text) and len(text) in VALID_GTIN_LENGTHS:
        return text
    return None


def is_plausible_price(price: Optional[Decimal]) -> bool:
    """True if the price lies in the plausible shelf price range (inclusive)."""
    return price is not None and PRICE_MIN <= price <= PRICE_MAX


class ListingValidator:
    """Validates an extracted listing."""

    def __init__(self, listing: RawListing):
        self.listing = listing

    def validate(self) -> dict:
        """
        Run all validations.

        Returns a dict with keys:
          overall_valid - False if any error fires
          errors        - blocking problems (no name and price, bad price)
          warnings      - quality issues (missing brand, unit text, gtin)
        """
        errors: list[str] = []
        warnings: list[str] = []
        p = self.listing

        if not p.name and p.price is None:
            errors.append("name and price: both missing")
        elif p.price is None:
            errors.append("price: missing")
        elif not is_plausible_price(p.price):
            errors.append(f"price: outside {PRICE_MIN}-{PRICE_MAX} (got {p.price})")

        if not p.url.startswith("https://"):
            errors.append(f"url: must start with https:// (got {p.url[:50]!r})")

        if not p.name:
            warnings.append("name: missing")
        if not p.brand:
            warnings.append("brand: missing")
        if not p.unit_text:
            warnings.append("unit_text: missing (no unit price)")
        if p.gtin and normalize_gtin(p.gtin) is None:
            warnings.append(f"gtin: invalid format ({p.gtin!r}, expected 8/12/13/14 digits)")

        return {
            "overall_valid": not errors,
            "errors": errors,
            "warnings": warnings,
        }
