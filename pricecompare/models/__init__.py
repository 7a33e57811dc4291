"""
Data models for listing acquisition and price comparison.

This module contains pure data classes with no business logic.
"""

from .comparison import ComparisonGroup
from .listing import (
    BaseUnit,
    MatchTier,
    NormalizedRecord,
    PriceType,
    RawListing,
    UnitBase,
)

__all__ = [
    'BaseUnit',
    'ComparisonGroup',
    'MatchTier',
    'NormalizedRecord',
    'PriceType',
    'RawListing',
    'UnitBase',
]
