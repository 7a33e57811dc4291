"""
Comparison group model.

A transient read-model built on demand from normalized records; it is
never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .listing import MatchTier, NormalizedRecord, UnitBase


@dataclass
class ComparisonGroup:
    """Latest listing per country for one match key, across 2+ countries."""

    match_key: str
    match_tier: MatchTier
    representative_name: str
    brand: Optional[str]
    category: str
    unit_base: UnitBase
    per_country: Dict[str, NormalizedRecord] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.per_country) < 2:
            raise ValueError(
                f"Comparison group {self.match_key!r} needs at least 2 countries "
                f"(got {len(self.per_country)})"
            )

    @property
    def country_count(self) -> int:
        return len(self.per_country)

    def to_dict(self) -> dict:
        """Return the JSON shape handed to the query layer."""
        return {
            "matchKey": self.match_key,
            "matchTier": self.match_tier.label,
            "name": self.representative_name,
            "brand": self.brand,
            "category": self.category,
            "unitBase": self.unit_base.to_dict(),
            "countryCount": self.country_count,
            "countries": {
                country: {
                    "priceAmount": str(record.price_amount),
                    "currency": record.currency,
                    "priceType": record.price_type.value,
                    "unitPrice": record.unit_price,
                    "depositAmount": (
                        str(record.deposit_amount) if record.deposit_amount is not None else None
                    ),
                    "sourceUrl": record.source_url,
                    "capturedAt": record.captured_at.isoformat(),
                }
                for country, record in sorted(self.per_country.items())
            },
        }
