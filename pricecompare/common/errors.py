"""
Error taxonomy for acquisition.

Non-fatal conditions (unparseable unit text, unclassifiable products) are not
exceptions: they degrade a record to an unresolved unit price or a lower
match tier.
"""

from __future__ import annotations


class PriceCompareError(Exception):
    """Base class for all project errors."""


class DiscoveryError(PriceCompareError):
    """Neither the sitemap nor the category crawl produced any product URL."""

    def __init__(self, country: str, reason: str = ""):
        self.country = country
        message = f"No product URLs found for {country}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ExtractionError(PriceCompareError):
    """A product page yielded neither a name nor a price."""

    def __init__(self, url: str, message: str = "No usable product data found"):
        self.url = url
        super().__init__(message)


class MissingPriceError(ExtractionError):
    """A product page yielded a name but no plausible price."""

    def __init__(self, url: str, name: str):
        self.name = name
        super().__init__(url, f'No price found for "{name}"')


class BatchError(PriceCompareError):
    """Zero URLs of a country's batch succeeded."""

    def __init__(self, country: str, errors: list[dict] | None = None, sample: int = 3):
        self.country = country
        self.errors = list(errors or [])
        details = "; ".join(e["error"] for e in self.errors[:sample])
        message = f"No valid products extracted for {country}"
        if details:
            message = f"{message}. First {min(sample, len(self.errors))} errors: {details}"
        super().__init__(message)
