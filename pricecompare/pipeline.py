"""
Acquisition pipeline.

Ties discovery, batch acquisition and normalization together per country,
and runs several countries concurrently. Each country worker opens its own
browser page; the caller owns the AcquisitionContext that tracks the run.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from playwright.sync_api import Error as PlaywrightError

from .browser import PageSession, open_page
from .common.config_loader import load_countries
from .common.errors import PriceCompareError
from .discovery import LidlURLDiscoverer, get_discoverer_for_country
from .extraction import BatchAcquirer, ListingExtractor, RetryingFetcher
from .models import NormalizedRecord
from .normalization import normalize_listings
from .storage import PriceStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


@dataclass
class CountryOutcome:
    """Result of acquiring one country."""
    country: str
    status: str = "pending"
    records: List[NormalizedRecord] = field(default_factory=list)
    urls_discovered: int = 0
    failed_urls: int = 0
    saved: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "status": self.status,
            "urlsDiscovered": self.urls_discovered,
            "records": len(self.records),
            "failedUrls": self.failed_urls,
            "saved": self.saved,
            "error": self.error,
        }


@dataclass
class AcquisitionContext:
    """State of one acquisition run, owned by whoever started it."""
    in_progress: bool = False
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    outcomes: Dict[str, CountryOutcome] = field(default_factory=dict)

    def start(self) -> None:
        if self.in_progress:
            raise RuntimeError("Acquisition already in progress")
        self.in_progress = True
        self.started_at = datetime.now(timezone.utc)
        self.finished_at = None
        self.outcomes = {}

    def finish(self) -> None:
        self.in_progress = False
        self.finished_at = datetime.now(timezone.utc)

    def records(self) -> List[NormalizedRecord]:
        """All records from successful countries, in country order."""
        return [r for c in sorted(self.outcomes) for r in self.outcomes[c].records]


def run_country(
    country: str,
    limit: int,
    page: PageSession,
    discoverer: Optional[LidlURLDiscoverer] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> CountryOutcome:
    """
    Discover, extract and normalize one country's listings through one page.

    Raises:
        DiscoveryError: No product URLs found
        BatchError: No listing could be extracted
    """
    outcome = CountryOutcome(country=country)
    discoverer = discoverer or get_discoverer_for_country(country)

    with discoverer:
        urls = discoverer.discover(limit, page=page)
    outcome.urls_discovered = len(urls)

    extractor = ListingExtractor(page, country)
    fetcher = RetryingFetcher(extractor.extract, sleep=sleep)
    acquirer = BatchAcquirer(country, fetcher, sleep=sleep)
    result = acquirer.acquire(urls, limit)

    outcome.records = normalize_listings(result.listings)
    outcome.failed_urls = len(result.errors)
    outcome.status = "completed"
    return outcome


def acquire_country(country: str, limit: int, headless: bool = True) -> CountryOutcome:
    """Acquire one country in its own browser; failures become a failed outcome."""
    accept_language = load_countries().get(country, {}).get("accept_language")
    try:
        with open_page(headless=headless, accept_language=accept_language) as page:
            return run_country(country, limit, page)
    except (PriceCompareError, PlaywrightError) as e:
        logger.error("%s: %s", country, e)
        return CountryOutcome(country=country, status="failed", error=str(e))


def run_countries(
    countries: Iterable[str],
    limit: int = DEFAULT_LIMIT,
    context: Optional[AcquisitionContext] = None,
    store: Optional[PriceStore] = None,
    headless: bool = True,
    acquire: Callable[..., CountryOutcome] = acquire_country,
    max_workers: Optional[int] = None,
) -> AcquisitionContext:
    """
    Acquire several countries concurrently.

    Each country runs in its own worker with its own browser. Records are
    saved from the calling thread as each country completes, so one
    country's failure never affects the others.

    Args:
        countries: Country codes to acquire
        limit: Maximum URLs per country
        context: Run state to update (a new one is created if omitted)
        store: Optional store with save_batch(records, country)
        headless: Run browsers headless
        acquire: Per-country worker (injectable for tests)
        max_workers: Thread pool size (defaults to one per country)

    Returns:
        The AcquisitionContext with one outcome per country
    """
    countries = list(dict.fromkeys(countries))
    context = context or AcquisitionContext()
    context.start()
    logger.info("Acquiring %d countries (limit %d): %s", len(countries), limit, ", ".join(countries))

    try:
        if not countries:
            return context
        with ThreadPoolExecutor(max_workers=max_workers or len(countries)) as executor:
            futures = {executor.submit(acquire, country, limit, headless): country
                       for country in countries}
            for future in as_completed(futures):
                country = futures[future]
                try:
                    outcome = future.result()
                except Exception as e:
                    logger.exception("%s: acquisition crashed", country)
                    outcome = CountryOutcome(country=country, status="failed", error=f"{type(e).__name__}: {e}")
                if outcome.ok and store is not None:
                    _save(store, outcome)
                context.outcomes[country] = outcome
                logger.info("%s finished: %s (%d records)", country, outcome.status, len(outcome.records))
    finally:
        context.finish()

    return context


def _save(store: PriceStore, outcome: CountryOutcome) -> None:
    try:
        outcome.saved = store.save_batch(outcome.records, outcome.country)
    except (sqlite3.Error, ValueError) as e:
        logger.error("Saving %s failed: %s", outcome.country, e)
        outcome.status = "failed"
        outcome.error = f"save failed: {e}"
