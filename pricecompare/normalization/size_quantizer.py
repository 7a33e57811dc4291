"""
Size Quantizer

Snaps a canonical package size to the nearest standard size, absorbing
small cross-market packaging differences (0.48 l vs 0.5 l) without
conflating genuinely different sizes.
"""

from __future__ import annotations

from typing import Optional

from ..common.constants import SIZE_TOLERANCE
from ..models import BaseUnit

STANDARD_SIZES = {
    BaseUnit.L: (0.25, 0.33, 0.5, 1.0, 1.5, 2.0, 3.0, 5.0),
    BaseUnit.KG: (0.1, 0.2, 0.25, 0.5, 1.0, 1.5, 2.0, 2.5, 5.0),
}


def quantize_size(
    quantity: Optional[float],
    unit: BaseUnit,
    tolerance: float = SIZE_TOLERANCE,
) -> Optional[float]:
    """
    Snap a quantity to the closest standard size within tolerance.

    A standard size is only taken when its distance from the raw quantity
    is below ``tolerance * quantity``; otherwise the raw quantity is
    returned unchanged.

    Args:
        quantity: Size in kg or l (None if unresolved)
        unit: Canonical unit of the quantity
        tolerance: Allowed relative difference

    Returns:
        Standard size, the raw quantity, or None if unresolved
    """
    if not quantity or unit is BaseUnit.NONE:
        return None

    closest = quantity
    min_diff = float('inf')

    for size in STANDARD_SIZES.get(unit, ()):
        diff = abs(quantity - size)
        if diff < min_diff and diff < quantity * tolerance:
            min_diff = diff
            closest = size

    return closest
