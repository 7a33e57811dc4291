"""
Page Text Parser

Last-resort extraction over the visible page text:
- Price patterns with a currency suffix or prefix
- Deposit amounts following a deposit keyword
- Marker substrings (loyalty programme, promo wording)
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Iterable, List, Optional

from ...common.constants import DEPOSIT_CENT_THRESHOLD
from ...common.text_utils import parse_decimal

_AMOUNT = r'(\d{1,3}(?:[.\s]\d{3})*[,.]\d{2})'

PRICE_PATTERNS = [
    re.compile(_AMOUNT + r'\s*€'),
    re.compile(r'€\s*' + _AMOUNT),
    re.compile(_AMOUNT + r'\s*EUR\b', re.IGNORECASE),
]

_DEPOSIT_UNIT = r'(€|(?:eur|cent[a-z]*|ct)\b)'


class PageTextParser:
    """
    Parses prices, deposits and markers from flat page text.

    Usage:
        parser = PageTextParser(page_text)
        candidates = parser.price_candidates()
        deposit = parser.extract_deposit(['pfand'])
    """

    def __init__(self, text: str):
        self.text = text or ""
        self._lower = self.text.lower()

    def price_candidates(self) -> List[Decimal]:
        """
        Parsed amounts matching the currency patterns, pattern by pattern.

        Plausibility filtering is left to the caller.
        """
        candidates = []
        for pattern in PRICE_PATTERNS:
            for match in pattern.finditer(self.text):
                amount = parse_decimal(match.group(1))
                if amount is not None:
                    candidates.append(amount)
        return candidates

    def extract_deposit(self, keywords: Iterable[str]) -> Optional[Decimal]:
        """
        Find a deposit amount after one of the keywords.

        Amounts quoted in cents are converted to EUR when their magnitude
        is implausible for a EUR deposit (e.g. "Pfand 25 Cent" -> 0.25).

        Returns:
            Deposit in EUR or None
        """
        words = [re.escape(k.lower()) for k in keywords if k]
        if not words:
            return None

        pattern = re.compile(
            rf'(?:{"|".join(words)})[:\s]*(\d+(?:[.,]\d+)?)\s*{_DEPOSIT_UNIT}',
            re.IGNORECASE,
        )
        match = pattern.search(self.text)
        if not match:
            return None

        amount = parse_decimal(match.group(1))
        if amount is None:
            return None

        unit = match.group(2).lower()
        if unit.startswith('c') and amount >= DEPOSIT_CENT_THRESHOLD:
            amount = amount / 100
        return amount

    def contains_any(self, markers: Iterable[str]) -> bool:
        """Case-insensitive substring check."""
        return any(marker.lower() in self._lower for marker in markers if marker)
