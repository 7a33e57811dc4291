"""
Listing data models.

Pure data classes for raw listings scraped from a storefront and the
normalized records derived from them. No business logic - only data
structure definitions and (de)serialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


class BaseUnit(str, Enum):
    """Canonical unit of a package size."""
    KG = "kg"
    L = "l"
    NONE = "none"


class PriceType(str, Enum):
    REGULAR = "regular"
    PROMO = "promo"
    LOYALTY = "loyalty"


class MatchTier(Enum):
    """
    Confidence of a match key, named after the cascade rule that built it.

    Values are ranks: a higher value is a more trustworthy match.
    """
    SEMANTIC = 6
    SEMANTIC_NO_SIZE = 5
    IDENTIFIER = 4
    BRAND_SIZE_CATEGORY = 3
    BRAND_CATEGORY = 2
    FALLBACK = 1

    @property
    def label(self) -> str:
        return {
            MatchTier.SEMANTIC: "Semantic",
            MatchTier.SEMANTIC_NO_SIZE: "SemanticNoSize",
            MatchTier.IDENTIFIER: "Identifier",
            MatchTier.BRAND_SIZE_CATEGORY: "BrandSizeCategory",
            MatchTier.BRAND_CATEGORY: "BrandCategory",
            MatchTier.FALLBACK: "Fallback",
        }[self]

    @classmethod
    def from_label(cls, label: str) -> "MatchTier":
        for tier in cls:
            if tier.label == label:
                return tier
        raise ValueError(f"Unknown match tier: {label}")


@dataclass(frozen=True)
class UnitBase:
    """Package size in canonical units (kilograms or liters)."""
    quantity: Optional[float] = None
    unit: BaseUnit = BaseUnit.NONE

    @property
    def resolved(self) -> bool:
        return self.quantity is not None and self.unit is not BaseUnit.NONE

    def to_dict(self) -> dict:
        return {"quantity": self.quantity, "unit": self.unit.value}


@dataclass
class RawListing:
    """
    One product page as extracted, before any normalization.

    Prices are in the storefront's display currency (EUR).
    """

    url: str
    country: str
    name: Optional[str] = None
    brand: Optional[str] = None
    gtin: Optional[str] = None
    price: Optional[Decimal] = None
    unit_text: str = ""
    is_loyalty_price: bool = False
    is_promo: bool = False
    deposit: Optional[Decimal] = None

    # Tracks which source tier provided each field
    extraction_method: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.url:
            raise ValueError("Listing URL is required")
        if self.price is not None and self.price <= 0:
            raise ValueError(f"Listing price must be positive (got {self.price})")


@dataclass(frozen=True)
class NormalizedRecord:
    """A listing reduced to a comparable, match-keyed price observation."""

    match_key: str
    match_tier: MatchTier
    country: str
    name: str
    brand: Optional[str]
    standard_brand: Optional[str]
    gtin: Optional[str]
    price_amount: Decimal
    unit_base: UnitBase
    unit_price: Optional[float]
    price_type: PriceType
    deposit_amount: Optional[Decimal]
    source_url: str
    captured_at: datetime

    # Output metadata for ranking and debugging
    currency: str = "EUR"
    unit_text: str = ""
    product_type: Optional[str] = None
    category: str = "other"
    standard_size: Optional[float] = None

    def to_dict(self) -> dict:
        """Return a JSON-serializable representation."""
        return {
            "matchKey": self.match_key,
            "matchTier": self.match_tier.label,
            "country": self.country,
            "name": self.name,
            "brand": self.brand,
            "standardBrand": self.standard_brand,
            "gtin": self.gtin,
            "priceAmount": str(self.price_amount),
            "currency": self.currency,
            "unitBase": self.unit_base.to_dict(),
            "unitPrice": self.unit_price,
            "priceType": self.price_type.value,
            "depositAmount": str(self.deposit_amount) if self.deposit_amount is not None else None,
            "sourceUrl": self.source_url,
            "capturedAt": self.captured_at.isoformat(),
            "unitText": self.unit_text,
            "productType": self.product_type,
            "category": self.category,
            "standardSize": self.standard_size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NormalizedRecord":
        """Rebuild a record from the output of to_dict()."""
        unit_base = data.get("unitBase") or {}
        deposit = data.get("depositAmount")
        return cls(
            match_key=data["matchKey"],
            match_tier=MatchTier.from_label(data["matchTier"]),
            country=data["country"],
            name=data.get("name") or "",
            brand=data.get("brand"),
            standard_brand=data.get("standardBrand"),
            gtin=data.get("gtin"),
            price_amount=Decimal(str(data["priceAmount"])),
            unit_base=UnitBase(
                quantity=unit_base.get("quantity"),
                unit=BaseUnit(unit_base.get("unit", "none")),
            ),
            unit_price=data.get("unitPrice"),
            price_type=PriceType(data.get("priceType", "regular")),
            deposit_amount=Decimal(str(deposit)) if deposit is not None else None,
            source_url=data["sourceUrl"],
            captured_at=datetime.fromisoformat(data["capturedAt"]),
            currency=data.get("currency", "EUR"),
            unit_text=data.get("unitText") or "",
            product_type=data.get("productType"),
            category=data.get("category") or "other",
            standard_size=data.get("standardSize"),
        )
