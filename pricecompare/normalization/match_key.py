"""
Match Key Builder

Builds the canonical comparison key for a listing through a strictly
ordered cascade. The first satisfied rule determines the key and its
tier:

1. brand + product type + size  -> type-{brand}-{type}-{size}{unit}   Semantic
2. brand + product type         -> type-{brand}-{type}                SemanticNoSize
3. gtin                         -> gtin-{gtin}                        Identifier
4. brand + size + category      -> brand-{brand}-{size}{unit}-{cat}   BrandSizeCategory
5. brand + category             -> brand-{brand}-{cat}                BrandCategory
6. otherwise                    -> sha1(trimmed name)                 Fallback

The identifier tier sits below the semantic tiers: the same barcode can
label region-specific packaging variants that are not comparable.
"""

from __future__ import annotations

import hashlib
import logging
from typing import NamedTuple, Optional

from ..models import MatchTier, UnitBase
from .classifier import ProductClassifier, get_classifier, standard_brand
from .size_quantizer import quantize_size

logger = logging.getLogger(__name__)


class MatchKey(NamedTuple):
    key: str
    tier: MatchTier


def format_size(size: float) -> str:
    """Render a size compactly: 1.0 -> '1', 0.5 -> '0.5', 0.33 -> '0.33'."""
    return f"{size:.6f}".rstrip('0').rstrip('.')


def fallback_key(name: Optional[str]) -> str:
    """Stable SHA-1 hex digest of the trimmed display name."""
    return hashlib.sha1((name or "").strip().encode('utf-8')).hexdigest()


def build_match_key(
    name: Optional[str],
    brand: Optional[str],
    gtin: Optional[str],
    unit_base: UnitBase,
    classifier: Optional[ProductClassifier] = None,
) -> MatchKey:
    """
    Run the match key cascade for one listing.

    Pure and deterministic in (name, brand, gtin, unit_base).

    Args:
        name: Display name
        brand: Brand as extracted
        gtin: Validated barcode, if any
        unit_base: Parsed package size
        classifier: Classifier to use (defaults to the config-backed one)

    Returns:
        MatchKey(key, tier)
    """
    classifier = classifier or get_classifier()

    brand_token = standard_brand(brand)
    product_type = classifier.product_type(name)
    category = classifier.category(name)
    size = quantize_size(unit_base.quantity, unit_base.unit)
    unit = unit_base.unit.value if unit_base.resolved else None

    if brand_token and product_type and size and unit:
        return MatchKey(
            f"type-{brand_token}-{product_type}-{format_size(size)}{unit}",
            MatchTier.SEMANTIC,
        )

    if brand_token and product_type:
        return MatchKey(f"type-{brand_token}-{product_type}", MatchTier.SEMANTIC_NO_SIZE)

    if product_type is None:
        logger.debug("No product type for %r, falling through", name)

    if gtin:
        return MatchKey(f"gtin-{gtin}", MatchTier.IDENTIFIER)

    if brand_token and size and unit and category:
        return MatchKey(
            f"brand-{brand_token}-{format_size(size)}{unit}-{category}",
            MatchTier.BRAND_SIZE_CATEGORY,
        )

    if brand_token and category:
        return MatchKey(f"brand-{brand_token}-{category}", MatchTier.BRAND_CATEGORY)

    return MatchKey(fallback_key(name), MatchTier.FALLBACK)
