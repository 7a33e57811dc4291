"""
Retrying Fetcher

Bounded retries around one page visit + extraction attempt. The loop
blocks only the URL it is working on and returns a tagged result instead
of raising, so the batch can record the outcome and move on.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..common.constants import MAX_RETRIES, RETRY_DELAY_SECONDS
from ..common.errors import ExtractionError
from ..models import RawListing

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Outcome of fetching one URL: a listing or the last error."""
    url: str
    listing: Optional[RawListing] = None
    error: Optional[ExtractionError] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.listing is not None


class RetryingFetcher:
    """
    Runs an extraction function with a fixed number of retries.

    Only extraction failures (ExtractionError and subclasses, which include
    navigation timeouts) are retried; anything else propagates.

    Usage:
        fetcher = RetryingFetcher(extractor.extract)
        result = fetcher.fetch(url)
        if result.ok:
            listings.append(result.listing)
    """

    def __init__(
        self,
        extract_fn: Callable[[str], RawListing],
        max_retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the fetcher.

        Args:
            extract_fn: Callable that visits a URL and returns its listing
            max_retries: Retries after the first attempt
            retry_delay: Fixed delay between attempts in seconds
            sleep: Sleep function (injectable for tests)
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0 (got {max_retries})")
        self.extract_fn = extract_fn
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch one URL, retrying extraction failures.

        Returns:
            FetchResult with the listing, or with the final error after
            1 + max_retries attempts
        """
        max_attempts = self.max_retries + 1
        last_error: Optional[ExtractionError] = None

        for attempt in range(1, max_attempts + 1):
            try:
                listing = self.extract_fn(url)
                return FetchResult(url=url, listing=listing, attempts=attempt)
            except ExtractionError as e:
                last_error = e
                if attempt < max_attempts:
                    logger.info("Retrying %s (%d/%d): %s", url, attempt + 1, max_attempts, e)
                    self._sleep(self.retry_delay)

        logger.debug("Giving up on %s after %d attempts", url, max_attempts)
        return FetchResult(url=url, error=last_error, attempts=max_attempts)
