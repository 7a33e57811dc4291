"""
URL Discovery for Lidl storefronts

Discovers product URLs from the country's gzip product sitemap, falling back
to crawling category listing pages through a rendered page session.
"""

from __future__ import annotations

import gzip
import logging
import math
import re
import time
import zlib
from typing import Any, Callable, Dict, List, Optional

import requests
from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError

from ..browser import PageSession
from ..common.constants import (
    CATEGORY_DELAY_SECONDS,
    CATEGORY_SETTLE_DELAY_SECONDS,
    CATEGORY_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    SITEMAP_TIMEOUT_SECONDS,
)
from ..common.errors import DiscoveryError
from ..extraction.parsers import HTMLContentParser

logger = logging.getLogger(__name__)

PRODUCT_PATH_MARKER = "/p/"
_LOC_PATTERN = re.compile(r"<loc>\s*([^<]+?)\s*</loc>")


def pick_product_urls(xml: str, host: str, limit: int = 0) -> List[str]:
    """
    Extract product URLs from sitemap XML text.

    Only <loc> entries on the storefront host whose path marks a product page
    are kept, in document order.

    Args:
        xml: Sitemap document as text
        host: Storefront origin, e.g. "https://www.lidl.hr"
        limit: Maximum number of URLs (0 = no limit)
    """
    urls = []
    for match in _LOC_PATTERN.finditer(xml):
        url = match.group(1)
        if PRODUCT_PATH_MARKER in url and url.startswith(host):
            urls.append(url)
            if limit and len(urls) >= limit:
                break
    return urls


def decode_sitemap(body: bytes) -> str:
    """Gunzip a sitemap body, treating it as plain text if it is not gzip."""
    try:
        return gzip.decompress(body).decode("utf-8", errors="replace")
    except (OSError, EOFError, zlib.error):
        return body.decode("utf-8", errors="replace")


class LidlURLDiscoverer:
    """Discovers product URLs for one country's Lidl storefront."""

    def __init__(
        self,
        country_config: Dict[str, Any],
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the discoverer.

        Args:
            country_config: Entry from config/countries.yaml (plus 'code')
            session: HTTP session for the sitemap; one is created if omitted
            sleep: Sleep function between category pages (injectable for tests)
        """
        self.country = country_config.get("code") or country_config["host"]
        self.host = country_config["host"].rstrip("/")
        self.sitemap_url = self.host + country_config["sitemap"]
        self.fallback_paths: List[str] = list(country_config.get("fallback_paths") or [])
        self._sleep = sleep

        self._owns_session = session is None
        self.session = session or requests.Session()
        if self._owns_session:
            self.session.headers.update({
                "User-Agent": DEFAULT_USER_AGENT,
                "Accept": "application/xml, text/xml, */*",
                "Accept-Language": country_config.get("accept_language", "en"),
            })

        self.product_urls: List[str] = []
        self.source = ""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self._owns_session:
            self.session.close()

    def discover_from_sitemap(self, limit: int = 0) -> List[str]:
        """
        Fetch product URLs from the gzip sitemap.

        Raises:
            requests.RequestException: On network errors or non-2xx status
        """
        logger.info("Fetching sitemap from %s...", self.sitemap_url)

        response = self.session.get(self.sitemap_url, timeout=SITEMAP_TIMEOUT_SECONDS)
        response.raise_for_status()

        urls = pick_product_urls(decode_sitemap(response.content), self.host, limit)
        logger.info("Extracted %d product URLs from sitemap", len(urls))
        return urls

    def discover_from_categories(self, page: Optional[PageSession], limit: int = 0) -> List[str]:
        """
        Collect product URLs from rendered category listing pages.

        Each category contributes at most ceil(limit / categories) URLs; a
        category that fails to load is skipped.
        """
        if page is None:
            logger.warning("No page session available for category crawl of %s", self.country)
            return []
        if not self.fallback_paths:
            return []

        per_category = math.ceil(limit / len(self.fallback_paths)) if limit else 0
        seen = set()
        urls: List[str] = []

        for i, path in enumerate(self.fallback_paths):
            category_url = self.host + path
            logger.info("Scraping product URLs from category: %s", category_url)
            try:
                page.navigate(category_url, timeout=CATEGORY_TIMEOUT_SECONDS)
                page.wait(CATEGORY_SETTLE_DELAY_SECONDS)
                soup = BeautifulSoup(page.content(), "lxml")
            except PlaywrightError as e:
                logger.warning("Category %s failed: %s", path, e)
                continue

            links = HTMLContentParser(soup).extract_links(
                PRODUCT_PATH_MARKER, base_url=page.current_url or category_url)
            if per_category:
                links = links[:per_category]
            logger.info("Found %d product URLs in category", len(links))

            for link in links:
                if link not in seen:
                    seen.add(link)
                    urls.append(link)

            if limit and len(urls) >= limit:
                break
            if i < len(self.fallback_paths) - 1:
                self._sleep(CATEGORY_DELAY_SECONDS)

        return urls[:limit] if limit else urls

    def discover(self, limit: int = 0, page: Optional[PageSession] = None) -> List[str]:
        """
        Discover product URLs, sitemap first.

        Args:
            limit: Maximum number of URLs to return (0 = no limit)
            page: Page session for the category fallback

        Returns:
            Product URLs in discovery order

        Raises:
            DiscoveryError: If both the sitemap and the category crawl are empty
        """
        try:
            urls = self.discover_from_sitemap(limit)
            self.source = "sitemap"
            if not urls:
                logger.info("Sitemap for %s listed no product URLs", self.country)
        except requests.RequestException as e:
            logger.info("Sitemap failed for %s: %s", self.country, e)
            urls = []

        if not urls:
            logger.info("Falling back to category scraping for %s...", self.country)
            urls = self.discover_from_categories(page, limit)
            self.source = "categories"

        if not urls:
            raise DiscoveryError(self.country, "sitemap and category pages yielded nothing")

        self.product_urls = urls
        return urls

    def save_urls(self, filepath: str):
        """Save discovered URLs to a file, one per line."""
        with open(filepath, "w", encoding="utf-8") as f:
            for url in self.product_urls:
                f.write(url + "\n")

        logger.info("Saved %d URLs to %s", len(self.product_urls), filepath)

    def get_stats(self) -> dict:
        """Return discovery statistics."""
        return {
            "country": self.country,
            "products_found": len(self.product_urls),
            "source": self.source,
        }
