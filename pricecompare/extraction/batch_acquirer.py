"""
Batch Acquirer

Runs the retrying fetcher over one country's discovered URLs.

Features:
- Strictly sequential processing within one page session
- Fixed delay between requests for respectful crawling
- Per-URL failure tracking; the batch fails only if nothing succeeded
- Failed URL export for later retry
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from ..common.constants import BATCH_ERROR_SAMPLE, REQUEST_DELAY_SECONDS
from ..common.errors import BatchError
from ..models import RawListing
from .retrying_fetcher import RetryingFetcher
from .validator import ListingValidator

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 5


@dataclass
class BatchResult:
    """Successful listings plus one error entry per failed URL."""
    listings: list[RawListing] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)


class BatchAcquirer:
    """Sequential acquisition of one country's listings with failure tracking."""

    def __init__(
        self,
        country: str,
        fetcher: RetryingFetcher,
        delay: float = REQUEST_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the batch acquirer.

        Args:
            country: Country code the URLs belong to
            fetcher: RetryingFetcher wrapping the page extractor
            delay: Delay between requests in seconds
            sleep: Sleep function (injectable for tests)
        """
        self.country = country
        self.fetcher = fetcher
        self.delay = delay
        self._sleep = sleep

        self.failed_urls: list[dict] = []
        self.total_extracted = 0
        self.total_attempts = 0
        self.start_time = None

    def acquire(self, urls: list[str], limit: int = 0) -> BatchResult:
        """
        Acquire listings for up to `limit` URLs.

        Args:
            urls: Discovered product URLs
            limit: Maximum number of URLs to process (0 = no limit)

        Returns:
            BatchResult with at least one listing

        Raises:
            BatchError: If zero URLs succeeded
        """
        self.start_time = datetime.now()
        urls_to_process = urls[:limit] if limit > 0 else list(urls)
        total_urls = len(urls_to_process)
        result = BatchResult()
        brands: list[str] = []

        logger.info("Acquiring %d listings for %s", total_urls, self.country)

        for i, url in enumerate(urls_to_process, 1):
            logger.debug("[%d/%d] %s...", i, total_urls, url[:80])
            fetched = self.fetcher.fetch(url)
            self.total_attempts += fetched.attempts

            if fetched.ok:
                listing = fetched.listing
                result.listings.append(listing)
                self.total_extracted += 1
                if listing.brand and listing.brand not in brands:
                    brands.append(listing.brand)

                report = ListingValidator(listing).validate()
                for warning in report["warnings"]:
                    logger.debug("%s: %s", url, warning)
            else:
                error_msg = f"{type(fetched.error).__name__}: {str(fetched.error)[:100]}"
                logger.warning("Failed %s: %s", url, error_msg)
                failure = {
                    "url": url,
                    "error": error_msg,
                    "timestamp": datetime.now().isoformat(),
                }
                result.errors.append(failure)
                self.failed_urls.append(failure)

            if i % PROGRESS_EVERY == 0:
                logger.info("%s progress: %d/%d (%d ok), brands: %s",
                            self.country, i, total_urls, len(result.listings),
                            ", ".join(brands) or "-")

            # Rate limiting
            if i < total_urls:
                self._sleep(self.delay)

        elapsed = (datetime.now() - self.start_time).total_seconds()
        logger.info("%s: %d/%d listings extracted in %.1fs (%d failed)",
                    self.country, len(result.listings), total_urls, elapsed, len(result.errors))

        if not result.listings:
            raise BatchError(self.country, result.errors, sample=BATCH_ERROR_SAMPLE)
        return result

    def save_failed_urls(self, path: str) -> None:
        """Save failed URLs to a file for retry."""
        with open(path, "w", encoding="utf-8") as f:
            for failure in self.failed_urls:
                f.write(f"{failure['url']}\t{failure['error']}\n")

    def get_stats(self) -> dict:
        """Return acquisition statistics."""
        return {
            'country': self.country,
            'total_extracted': self.total_extracted,
            'total_attempts': self.total_attempts,
            'failed_urls': len(self.failed_urls),
        }
