"""
HTML Content Parser

Extracts listing fields from rendered HTML elements using ordered
selector lists (config/selectors.yaml):
- Name, brand and identifier text
- Price text candidates
- Unit/size text
- Loyalty and promo marker elements
- Product links on category pages

This parser handles direct HTML element extraction when structured
data (JSON-LD) is not available or incomplete.
"""

from typing import Iterable, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment

_NON_VISIBLE = {"script", "style", "noscript", "template"}


class HTMLContentParser:
    """
    Parses listing content from HTML elements.

    Usage:
        parser = HTMLContentParser(soup)
        name = parser.first_text(['h1', '.product-title'])
        prices = parser.texts_in_order(['.price', '[class*="price"]'])
    """

    def __init__(self, soup: BeautifulSoup):
        """
        Initialize the HTML parser.

        Args:
            soup: BeautifulSoup object of the rendered page
        """
        self.soup = soup

    def first_text(self, selectors: Iterable[str]) -> str:
        """
        Return the first non-empty trimmed text over selectors in priority order.

        Only the first element matching each selector is considered.

        Returns:
            Text or empty string
        """
        for text in self.texts_in_order(selectors):
            return text
        return ""

    def texts_in_order(self, selectors: Iterable[str]) -> List[str]:
        """
        Collect the non-empty text of the first element matching each selector.

        Returns:
            Texts in selector priority order
        """
        texts = []
        for selector in selectors:
            element = self.soup.select_one(selector)
            if element is None:
                continue
            text = self._clean_text(element.get_text(" "))
            if text:
                texts.append(text)
        return texts

    def has_any(self, selectors: Iterable[str]) -> bool:
        """True if any selector matches an element."""
        return any(self.soup.select_one(selector) is not None for selector in selectors)

    def page_text(self) -> str:
        """Visible text of the body (whole document if there is no body)."""
        root = self.soup.body or self.soup
        strings = [
            s for s in root.find_all(string=True)
            if not isinstance(s, Comment) and s.parent.name not in _NON_VISIBLE
        ]
        return self._clean_text(" ".join(strings))

    def extract_links(self, path_marker: str, base_url: str = "") -> List[str]:
        """
        Extract absolute anchor URLs containing a path marker.

        Args:
            path_marker: Substring identifying product pages (e.g. "/p/")
            base_url: Base for resolving relative hrefs

        Returns:
            Deduplicated URLs in document order
        """
        seen = set()
        links = []
        for anchor in self.soup.find_all("a", href=True):
            href = urljoin(base_url, anchor["href"].strip()) if base_url else anchor["href"].strip()
            if path_marker in href and href not in seen:
                seen.add(href)
                links.append(href)
        return links

    def _clean_text(self, text: str) -> str:
        """Clean and normalize text."""
        if not text:
            return ""
        return ' '.join(text.split()).strip()
