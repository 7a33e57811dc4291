"""
Unit Normalizer

Parses free-text package sizes ("1 l", "500 g", "6 x 0,5 l") into a
canonical (quantity, unit) pair: kilograms for mass, liters for volume.

Unrecognized text is not an error: the base stays unresolved and the
record simply carries no unit price.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Optional

from ..models import BaseUnit, UnitBase

logger = logging.getLogger(__name__)

# Surface form -> (canonical unit, factor to canonical)
UNIT_FACTORS = {
    'l': (BaseUnit.L, 1.0),
    'lit': (BaseUnit.L, 1.0),
    'liter': (BaseUnit.L, 1.0),
    'litre': (BaseUnit.L, 1.0),
    'litar': (BaseUnit.L, 1.0),
    'ml': (BaseUnit.L, 0.001),
    'milliliter': (BaseUnit.L, 0.001),
    'millilitre': (BaseUnit.L, 0.001),
    'kg': (BaseUnit.KG, 1.0),
    'kilogram': (BaseUnit.KG, 1.0),
    'g': (BaseUnit.KG, 0.001),
    'gr': (BaseUnit.KG, 0.001),
    'gram': (BaseUnit.KG, 0.001),
}

# Longest alternatives first so "ml" is not read as "m" + "l"
_UNIT_ALT = '|'.join(sorted(UNIT_FACTORS, key=len, reverse=True))

MULTIPACK_PATTERN = re.compile(
    rf'(\d+)\s*[x×]\s*(\d+(?:\.\d+)?)\s*({_UNIT_ALT})\b',
    re.IGNORECASE,
)
SINGLE_PATTERN = re.compile(
    rf'(\d+(?:\.\d+)?)\s*({_UNIT_ALT})\b',
    re.IGNORECASE,
)

UNRESOLVED = UnitBase()


def _to_base(value: float, unit: str) -> UnitBase:
    canonical, factor = UNIT_FACTORS[unit.lower()]
    return UnitBase(quantity=round(value * factor, 6), unit=canonical)


def parse_unit_text(unit_text: Optional[str]) -> UnitBase:
    """
    Parse a package size description into canonical units.

    Args:
        unit_text: Free text such as "1 l", "500 g", "6 x 0,5 l"

    Returns:
        UnitBase with quantity in kg or l, or an unresolved UnitBase

    Example:
        >>> parse_unit_text("6 x 0,5 l")
        UnitBase(quantity=3.0, unit=<BaseUnit.L: 'l'>)
    """
    if not unit_text:
        return UNRESOLVED

    text = str(unit_text).replace(',', '.').lower()

    multi = MULTIPACK_PATTERN.search(text)
    if multi:
        count = float(multi.group(1))
        value = float(multi.group(2))
        return _to_base(count * value, multi.group(3))

    single = SINGLE_PATTERN.search(text)
    if single:
        return _to_base(float(single.group(1)), single.group(2))

    logger.debug("Unrecognized unit text: %r", unit_text)
    return UNRESOLVED


def compute_unit_price(price: Optional[Decimal], base: UnitBase) -> Optional[float]:
    """
    Price per canonical unit, rounded to 4 decimals.

    Returns None when the base is unresolved or zero.
    """
    if price is None or not base.resolved or not base.quantity:
        return None
    return round(float(price) / base.quantity, 4)
