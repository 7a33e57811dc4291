"""
Structured Data Parser

Extracts product information from JSON-LD structured data (schema.org).
This is the highest priority source for product data as it's explicitly
structured by the storefront for search engines.

Accepts a Product object, a list of objects, or an @graph container.
"""

import json
from typing import Any, Dict, Iterator, Optional

from bs4 import BeautifulSoup


class StructuredDataParser:
    """
    Parses JSON-LD structured data from HTML pages.

    JSON-LD is embedded in <script type="application/ld+json"> tags and
    contains schema.org structured data for products.

    Usage:
        parser = StructuredDataParser()
        data = parser.parse(soup)
        brand = parser.extract_brand(data)
        price = parser.extract_price(data)
    """

    SUPPORTED_TYPES = ['Product']
    GTIN_FIELDS = ['gtin13', 'gtin', 'sku', 'mpn']

    def parse(self, soup: BeautifulSoup) -> Dict[str, Any]:
        """
        Extract the first JSON-LD Product object from the page.

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            Parsed JSON-LD data as dictionary, or empty dict if not found
        """
        scripts = soup.find_all('script', type='application/ld+json')

        for script in scripts:
            text = script.string or script.get_text()
            if not text:
                continue
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                continue
            for item in self._iter_items(data):
                if self._is_supported(item):
                    return item

        return {}

    def _iter_items(self, data: Any) -> Iterator[Dict[str, Any]]:
        if isinstance(data, list):
            for item in data:
                yield from self._iter_items(item)
        elif isinstance(data, dict):
            yield data
            graph = data.get('@graph')
            if isinstance(graph, list):
                yield from self._iter_items(graph)

    def _is_supported(self, item: Dict[str, Any]) -> bool:
        item_type = item.get('@type')
        if isinstance(item_type, list):
            return any(t in self.SUPPORTED_TYPES for t in item_type)
        return item_type in self.SUPPORTED_TYPES

    def extract_brand(self, data: Dict[str, Any]) -> str:
        """
        Extract brand name from structured data.

        Args:
            data: Parsed JSON-LD data

        Returns:
            Brand name or empty string
        """
        if not data:
            return ""

        brand_data = data.get("brand")
        if isinstance(brand_data, dict):
            return self._clean_text(brand_data.get("name", ""))
        elif isinstance(brand_data, str):
            return self._clean_text(brand_data)

        return ""

    def extract_price(self, data: Dict[str, Any]) -> Optional[str]:
        """
        Extract current offer price from structured data.

        Args:
            data: Parsed JSON-LD data

        Returns:
            Price as found (e.g., "1.29" or 1.29) or None
        """
        if not data:
            return None

        offers = data.get("offers", [])
        if isinstance(offers, dict):
            offers = [offers]

        if offers and isinstance(offers[0], dict):
            offer = offers[0]
            price = offer.get("price")
            if price is None:
                price = offer.get("lowPrice")
            if price is not None and str(price).strip():
                return str(price)

        return None

    def extract_gtin_candidates(self, data: Dict[str, Any]) -> list:
        """
        Return identifier values in priority order (gtin13, gtin, sku, mpn).

        Values are not validated here.
        """
        if not data:
            return []

        candidates = []
        for key in self.GTIN_FIELDS:
            value = data.get(key)
            if value is not None and str(value).strip():
                candidates.append(str(value).strip())
        return candidates

    def _clean_text(self, text) -> str:
        """Clean and normalize text."""
        if not text or not isinstance(text, str):
            return ""
        return ' '.join(text.split()).strip()
