"""Shared test fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from playwright.sync_api import Error as PlaywrightError

from pricecompare.models import RawListing
from pricecompare.normalization import ProductClassifier


class FakePage:
    """
    In-memory PageSession.

    `pages` maps URL -> HTML, or an exception instance to raise on
    navigation. Every navigation is recorded.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.visited = []
        self.waits = []
        self._url = ""
        self._html = ""

    @property
    def current_url(self) -> str:
        return self._url

    def navigate(self, url: str, timeout: float) -> None:
        self.visited.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise PlaywrightError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self._url = url
        self._html = page

    def content(self) -> str:
        return self._html

    def wait(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def sample_known_brands():
    """Small ordered brand list for BrandMatcher tests."""
    return ["Milbona", "Chef Select", "Pilos", "Solevita", "Fin Carré", "Bio"]


@pytest.fixture
def sample_product_types():
    """Reduced family table in the same shape as config/product_types.yaml."""
    return [
        {
            "type": "milk",
            "keywords": {"en": ["milk"], "de": ["milch"], "hr": ["mlijeko"], "sl": ["mleko"]},
            "exclude": ["schokolade", "chocolate"],
            "subtypes": [
                {"type": "fresh-milk", "keywords": {"en": ["fresh"], "de": ["frisch"], "hr": ["svjež"]}},
            ],
        },
        {
            "type": "cheese",
            "keywords": {"en": ["cheese"], "de": ["käse"], "hr": ["sir"], "sl": ["sir"]},
            "exclude": ["sirup"],
            "subtypes": [
                {"type": "cream-cheese", "keywords": {"en": ["cream cheese"], "de": ["frischkäse"]}},
            ],
        },
        {
            "type": "cola",
            "keywords": {"en": ["cola"], "de": ["cola"], "hr": ["cola"], "sl": ["kola"]},
            "exclude": ["chocolate", "schokolade"],
        },
        {
            "type": "candy",
            "keywords": {"en": ["chocolate"], "de": ["schokolade"], "hr": ["čokolada"], "sl": ["čokolada"]},
        },
    ]


@pytest.fixture
def sample_categories():
    """Reduced category table in the same shape as config/categories.yaml."""
    return [
        {
            "category": "dairy",
            "keywords": {"en": ["milk", "cheese"], "de": ["milch", "käse"], "hr": ["mlijeko", "sir"]},
            "exclude": ["sirup"],
        },
        {
            "category": "beverages",
            "keywords": {"en": ["juice", "cola"], "de": ["saft", "cola"], "hr": ["sok"]},
        },
        {
            "category": "sweets",
            "keywords": {"en": ["chocolate"], "de": ["schokolade"], "hr": ["čokolada"]},
        },
    ]


@pytest.fixture
def classifier(sample_product_types, sample_categories):
    """Classifier over the reduced tables (no config I/O)."""
    return ProductClassifier(product_types=sample_product_types, categories=sample_categories)


@pytest.fixture
def captured_at():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_listing():
    """Factory for RawListing with sensible defaults."""
    def _make(country="hr", name="Milbona Mlijeko 3,5% m.m.", brand="Milbona", gtin=None,
              price="1.19", unit_text="1 l", url=None, **kwargs):
        return RawListing(
            url=url or f"https://www.lidl.{country}/p/{(name or 'item').lower().replace(' ', '-')}",
            country=country,
            name=name,
            brand=brand,
            gtin=gtin,
            price=Decimal(price) if price is not None else None,
            unit_text=unit_text,
            **kwargs,
        )
    return _make
