"""
Listing Page Extractor

Extracts one RawListing from a rendered product page. Each field is taken
from the first source in priority order that yields a valid value:

    name       DOM selectors
    brand      structured data -> DOM selectors -> brand vocabulary in name
    gtin       structured data -> DOM selectors (8/12/13/14 digits)
    price      structured data -> DOM selectors -> page text patterns
    unit text  DOM selectors
    flags      marker elements or marker text
    deposit    deposit keyword + amount in page text
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError

from ..browser import PageSession
from ..common.config_loader import load_selectors
from ..common.constants import NAVIGATION_TIMEOUT_SECONDS, SETTLE_DELAY_SECONDS
from ..common.errors import ExtractionError, MissingPriceError
from ..common.text_utils import parse_decimal
from ..models import RawListing
from .brand_matcher import BrandMatcher
from .parsers import HTMLContentParser, PageTextParser, StructuredDataParser
from .validator import is_plausible_price, normalize_gtin

logger = logging.getLogger(__name__)


class ListingExtractor:
    """Extracts listing data from product pages through one page session."""

    _shared_brand_matcher = None
    _shared_selectors = None

    def __init__(
        self,
        page: PageSession,
        country: str,
        brand_matcher: Optional[BrandMatcher] = None,
        selectors: Optional[Dict[str, Any]] = None,
        timeout: float = NAVIGATION_TIMEOUT_SECONDS,
        settle_delay: float = SETTLE_DELAY_SECONDS,
    ):
        self.page = page
        self.country = country
        self.timeout = timeout
        self.settle_delay = settle_delay
        self.structured_parser = StructuredDataParser()

        if brand_matcher is None:
            if ListingExtractor._shared_brand_matcher is None:
                ListingExtractor._shared_brand_matcher = BrandMatcher()
            brand_matcher = ListingExtractor._shared_brand_matcher
        self.brand_matcher = brand_matcher

        if selectors is None:
            if ListingExtractor._shared_selectors is None:
                ListingExtractor._shared_selectors = load_selectors()
            selectors = ListingExtractor._shared_selectors
        self.selectors = selectors

    def extract(self, url: str) -> RawListing:
        """
        Navigate to a product page and extract its listing.

        Raises:
            ExtractionError: Navigation failed, or neither name nor price found
            MissingPriceError: Name found but no plausible price
        """
        try:
            self.page.navigate(url, timeout=self.timeout)
            self.page.wait(self.settle_delay)
            html = self.page.content()
            final_url = self.page.current_url or url
        except PlaywrightError as e:
            raise ExtractionError(url, f"Navigation failed: {e}") from e

        return self.extract_from_html(html, final_url)

    def extract_from_html(self, html: str, url: str) -> RawListing:
        """Extract a listing from an already-rendered HTML snapshot."""
        soup = BeautifulSoup(html or "", "lxml")
        structured = self.structured_parser.parse(soup)
        dom = HTMLContentParser(soup)
        text = PageTextParser(dom.page_text())
        methods: Dict[str, str] = {}

        name = dom.first_text(self._selectors("name")) or None
        if name:
            methods["name"] = "dom"

        brand = self._extract_brand(name, structured, dom, methods)
        gtin = self._extract_gtin(structured, dom, methods)
        price = self._extract_price(structured, dom, text, methods)

        if not name and price is None:
            raise ExtractionError(url)
        if price is None:
            raise MissingPriceError(url, name)

        unit_text = dom.first_text(self._selectors("unit"))
        if unit_text:
            methods["unit_text"] = "dom"

        listing = RawListing(
            url=url,
            country=self.country,
            name=name,
            brand=brand,
            gtin=gtin,
            price=price,
            unit_text=unit_text,
            is_loyalty_price=self._has_marker("loyalty", dom, text),
            is_promo=self._has_marker("promo", dom, text),
            deposit=text.extract_deposit(self.selectors.get("deposit", {}).get("keywords", [])),
            extraction_method=methods,
        )
        logger.debug("Extracted: name=%r brand=%r gtin=%r price=%s (%s)",
                     listing.name, listing.brand, listing.gtin, listing.price, methods)
        return listing

    def _selectors(self, field: str) -> list:
        return list(self.selectors.get(field) or [])

    def _extract_brand(self, name, structured, dom, methods) -> Optional[str]:
        brand, source = self.brand_matcher.match(
            name or "",
            structured_brand=self.structured_parser.extract_brand(structured),
            dom_brand=dom.first_text(self._selectors("brand")),
        )
        if brand:
            methods["brand"] = source
        return brand or None

    def _extract_gtin(self, structured, dom, methods) -> Optional[str]:
        for candidate in self.structured_parser.extract_gtin_candidates(structured):
            gtin = normalize_gtin(candidate)
            if gtin:
                methods["gtin"] = "structured"
                return gtin

        for candidate in dom.texts_in_order(self._selectors("gtin")):
            gtin = normalize_gtin(candidate)
            if gtin:
                methods["gtin"] = "dom"
                return gtin

        return None

    def _extract_price(self, structured, dom, text, methods) -> Optional[Decimal]:
        # Structured offer price is trusted without the plausibility filter
        price = parse_decimal(self.structured_parser.extract_price(structured))
        if price is not None:
            methods["price"] = "structured"
            return price

        for candidate in dom.texts_in_order(self._selectors("price")):
            price = parse_decimal(candidate)
            if is_plausible_price(price):
                methods["price"] = "dom"
                return price

        for price in text.price_candidates():
            if is_plausible_price(price):
                methods["price"] = "text"
                return price

        return None

    def _has_marker(self, kind: str, dom: HTMLContentParser, text: PageTextParser) -> bool:
        markers = self.selectors.get(kind) or {}
        return dom.has_any(markers.get("elements") or []) or text.contains_any(markers.get("text") or [])
