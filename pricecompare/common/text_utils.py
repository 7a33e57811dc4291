"""
Text Utilities

Helper functions for text cleanup and locale-aware number parsing.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_NUMBER = re.compile(r"\d{1,3}(?:[.,\s]\d{3})+(?:[.,]\d+)?|\d+(?:[.,]\d+)?")


def clean_text(text: str | None) -> str:
    """Collapse whitespace and strip."""
    if not text:
        return ""
    return " ".join(text.split()).strip()


def parse_decimal(value) -> Decimal | None:
    """
    Parse a displayed price into a positive Decimal.

    Handles both decimal conventions and collapses thousands separators:
    "1,29" -> 1.29, "1.29 €" -> 1.29, "1.299,00" -> 1299.00,
    "1,299.00" -> 1299.00, "2.5" -> 2.50.

    Args:
        value: String or number as displayed on the page

    Returns:
        Positive Decimal, or None if nothing numeric could be parsed
    """
    if value is None:
        return None

    if str(value).strip().startswith("-"):
        return None

    match = _NUMBER.search(str(value))
    if not match:
        return None
    # Only the first number counts: "1,29 € 2,58 /kg" -> 1.29
    text = re.sub(r"\s", "", match.group(0))

    last_comma = text.rfind(",")
    last_dot = text.rfind(".")

    if last_comma != -1 and last_dot != -1:
        # Whichever separator comes last is the decimal mark
        if last_comma > last_dot:
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif last_comma != -1:
        decimals = len(text) - last_comma - 1
        if text.count(",") == 1 and decimals != 3:
            text = text.replace(",", ".")
        else:
            text = text.replace(",", "")
    elif text.count(".") > 1:
        head, _, tail = text.rpartition(".")
        text = head.replace(".", "") + ("." + tail if len(tail) != 3 else tail)

    try:
        number = Decimal(text)
    except InvalidOperation:
        return None

    if not number.is_finite() or number <= 0:
        return None
    return number
