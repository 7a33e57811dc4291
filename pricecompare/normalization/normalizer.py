"""
Listing Normalizer

Turns a RawListing into an immutable NormalizedRecord. Pure given the
capture timestamp, so re-normalizing the same listing yields the same
record and records can be normalized in parallel.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from ..common.constants import CURRENCY
from ..models import NormalizedRecord, PriceType, RawListing
from .classifier import ProductClassifier, get_classifier, standard_brand
from .match_key import build_match_key
from .size_quantizer import quantize_size
from .unit_normalizer import compute_unit_price, parse_unit_text

_CENTS = Decimal("0.01")


def _price_type(listing: RawListing) -> PriceType:
    if listing.is_loyalty_price:
        return PriceType.LOYALTY
    if listing.is_promo:
        return PriceType.PROMO
    return PriceType.REGULAR


def normalize_listing(
    listing: RawListing,
    captured_at: Optional[datetime] = None,
    classifier: Optional[ProductClassifier] = None,
) -> NormalizedRecord:
    """
    Normalize one listing.

    Args:
        listing: Listing with a price (acquisition guarantees one)
        captured_at: Capture time; defaults to now (UTC)
        classifier: Classifier to use (defaults to the config-backed one)

    Returns:
        NormalizedRecord carrying exactly one match key and its tier

    Raises:
        ValueError: If the listing has no price
    """
    if listing.price is None:
        raise ValueError(f"Cannot normalize listing without price: {listing.url}")

    classifier = classifier or get_classifier()
    captured_at = captured_at or datetime.now(timezone.utc)

    unit_base = parse_unit_text(listing.unit_text)
    match = build_match_key(
        listing.name, listing.brand, listing.gtin, unit_base, classifier=classifier
    )

    return NormalizedRecord(
        match_key=match.key,
        match_tier=match.tier,
        country=listing.country,
        name=(listing.name or "").strip(),
        brand=listing.brand,
        standard_brand=standard_brand(listing.brand),
        gtin=listing.gtin,
        price_amount=listing.price.quantize(_CENTS, rounding=ROUND_HALF_UP),
        unit_base=unit_base,
        unit_price=compute_unit_price(listing.price, unit_base),
        price_type=_price_type(listing),
        deposit_amount=listing.deposit,
        source_url=listing.url,
        captured_at=captured_at,
        currency=CURRENCY,
        unit_text=listing.unit_text or "",
        product_type=classifier.product_type(listing.name),
        category=classifier.category(listing.name),
        standard_size=quantize_size(unit_base.quantity, unit_base.unit),
    )


def normalize_listings(
    listings: Iterable[RawListing],
    captured_at: Optional[datetime] = None,
    classifier: Optional[ProductClassifier] = None,
) -> List[NormalizedRecord]:
    """Normalize a batch with one shared capture timestamp."""
    captured_at = captured_at or datetime.now(timezone.utc)
    return [normalize_listing(listing, captured_at, classifier) for listing in listings]
