"""
Product Classifier

Derives the tags the match key is built from:

1. standard_brand - lowercase brand token without whitespace or trademark glyphs
2. product_type   - fine-grained product family ("milk", "cream-cheese", ...)
3. category       - coarse grouping ("dairy", "beverages", ...)

Families and categories are declarative keyword tables loaded from
config/product_types.yaml and config/categories.yaml, evaluated by one
generic matcher. Adding a language or a family is a config change.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from ..common.config_loader import load_categories, load_product_types

_TRADEMARK_GLYPHS = re.compile(r'[™®©]')
_WHITESPACE = re.compile(r'\s+')

DEFAULT_CATEGORY = "other"


def standard_brand(brand: Optional[str]) -> Optional[str]:
    """
    Reduce a brand to a comparison token.

    Idempotent: standard_brand(standard_brand(x)) == standard_brand(x).

    Example:
        >>> standard_brand("Chef Select™")
        'chefselect'
    """
    if not brand:
        return None
    token = _TRADEMARK_GLYPHS.sub('', brand.lower())
    token = _WHITESPACE.sub('', token)
    return token or None


def _keywords(entry: Dict[str, Any]) -> List[str]:
    """Flatten a language -> keywords mapping into one lowercase list."""
    keywords = entry.get('keywords') or {}
    if isinstance(keywords, dict):
        words = [w for per_language in keywords.values() for w in (per_language or [])]
    else:
        words = list(keywords)
    return [str(w).lower() for w in words]


def _matches(text: str, entry: Dict[str, Any]) -> bool:
    """Case-insensitive substring match of an entry's keywords, minus its excludes."""
    if any(str(word).lower() in text for word in entry.get('exclude') or []):
        return False
    return any(word in text for word in _keywords(entry))


class ProductClassifier:
    """
    Tags product names with a product type and a category.

    Classification is a pure function of the name: identical inputs
    always produce identical outputs.

    Usage:
        classifier = ProductClassifier()
        classifier.product_type("Milbona Mlijeko 3.5% 1L")   # 'milk'
        classifier.category("Milbona Mlijeko 3.5% 1L")       # 'dairy'
    """

    def __init__(
        self,
        product_types: Optional[List[Dict[str, Any]]] = None,
        categories: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        Initialize the classifier.

        Args:
            product_types: Ordered family table. If None, loads from config.
            categories: Ordered category table. If None, loads from config.
        """
        self.product_types = product_types if product_types is not None else load_product_types()
        self.categories = categories if categories is not None else load_categories()

    def product_type(self, name: Optional[str]) -> Optional[str]:
        """
        Return the first matching product family, refined by subtype.

        Returns None when no family matches; the match key cascade then
        falls through to a lower tier.
        """
        if not name:
            return None

        text = name.lower()
        for family in self.product_types:
            if not _matches(text, family):
                continue
            for subtype in family.get('subtypes') or []:
                if _matches(text, subtype):
                    return subtype['type']
            return family['type']

        return None

    def category(self, name: Optional[str]) -> str:
        """Return the first matching coarse category, or 'other'."""
        if not name:
            return DEFAULT_CATEGORY

        text = name.lower()
        for entry in self.categories:
            if _matches(text, entry):
                return entry['category']

        return DEFAULT_CATEGORY


_shared_classifier: Optional[ProductClassifier] = None


def get_classifier() -> ProductClassifier:
    """Return a classifier built from config, loaded once per process."""
    global _shared_classifier
    if _shared_classifier is None:
        _shared_classifier = ProductClassifier()
    return _shared_classifier
