"""
Brand Matcher

Resolves a listing's brand using multiple strategies in priority order:
1. Brand from structured data (JSON-LD)
2. Brand element on the page
3. Curated brand vocabulary found as a whole word in the product name

The vocabulary is loaded from config/known_brands.yaml.
"""

import re
from typing import List, Optional, Tuple

from ..common.config_loader import get_brands_lowercase_map, load_known_brands


class BrandMatcher:
    """
    Matches product names to known brand names.

    Usage:
        matcher = BrandMatcher()
        brand, source = matcher.match(
            name="Milbona Mlijeko 3.5% 1L",
            structured_brand="",  # From JSON-LD
            dom_brand="",         # From brand selectors
        )
        # Returns: ("Milbona", "vocabulary")
    """

    def __init__(self, brands: Optional[List[str]] = None):
        """
        Initialize the brand matcher.

        Args:
            brands: Optional ordered list of known brands. If None, loads from config.
        """
        if brands is None:
            self.known_brands = load_known_brands()
        else:
            self.known_brands = list(brands)

        # Create lowercase lookup for case-insensitive matching
        self.brands_lower = get_brands_lowercase_map(self.known_brands)
        self._patterns = [
            (re.compile(r"(?<!\w)" + re.escape(brand_lower) + r"(?!\w)"), canonical)
            for brand_lower, canonical in self.brands_lower.items()
        ]

    def match(
        self,
        name: str,
        structured_brand: str = "",
        dom_brand: str = "",
    ) -> Tuple[str, str]:
        """
        Match a listing to a brand using multiple strategies.

        Args:
            name: Product name
            structured_brand: Brand from JSON-LD structured data
            dom_brand: Brand from the page's brand element

        Returns:
            (brand, source) where source is 'structured', 'dom' or
            'vocabulary'; ("", "") if nothing matched
        """
        # Priority 1: Structured data (most reliable)
        stripped = structured_brand.strip() if structured_brand else ""
        if stripped:
            return stripped, "structured"

        # Priority 2: Brand element on the page
        stripped = dom_brand.strip() if dom_brand else ""
        if stripped:
            return stripped, "dom"

        # Priority 3: Vocabulary word in the name
        matched = self.match_from_name(name)
        if matched:
            return matched, "vocabulary"

        return "", ""

    def match_from_name(self, name: str) -> str:
        """
        Find the first known brand contained in the product name.

        Matching is case-insensitive and in vocabulary order. A brand must
        appear as a whole word, so "Tower" does not match "Powertower".

        Args:
            name: Product name

        Returns:
            Matched brand name (canonical capitalization) or empty string

        Example:
            >>> matcher.match_from_name("Frische Milch Milbona 1L")
            'Milbona'
        """
        if not name:
            return ""

        name_lower = name.lower()
        for pattern, canonical in self._patterns:
            if pattern.search(name_lower):
                return canonical

        return ""

