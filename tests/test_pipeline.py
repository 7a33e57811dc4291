"""Tests for pricecompare/pipeline.py"""

import sqlite3

import pytest

from pricecompare.common.errors import BatchError, DiscoveryError
from pricecompare.pipeline import (
    AcquisitionContext,
    CountryOutcome,
    run_countries,
    run_country,
)

PAGE = """
<html><head>
<script type="application/ld+json">
{{"@type": "Product", "name": "{name}", "brand": {{"name": "Milbona"}},
 "offers": {{"@type": "Offer", "price": "{price}", "priceCurrency": "EUR"}}}}
</script>
</head><body>
<h1>{name}</h1>
<div class="m-price__unit">1 l</div>
</body></html>
"""


class FakeDiscoverer:
    def __init__(self, urls=None, error=None):
        self.urls = urls or []
        self.error = error
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.closed = True

    def discover(self, limit=0, page=None):
        self.calls.append((limit, page))
        if self.error:
            raise self.error
        return self.urls[:limit] if limit else list(self.urls)


def no_sleep(seconds):
    pass


class TestRunCountry:
    def test_discovers_extracts_and_normalizes(self, fake_page):
        urls = ["https://www.lidl.hr/p/mlijeko/p1", "https://www.lidl.hr/p/mlijeko-svjeze/p2"]
        fake_page.pages[urls[0]] = PAGE.format(name="Milbona Mlijeko 3,5%", price="1.19")
        fake_page.pages[urls[1]] = PAGE.format(name="Milbona Svježe mlijeko", price="1.29")
        discoverer = FakeDiscoverer(urls)

        outcome = run_country("hr", 10, fake_page, discoverer=discoverer, sleep=no_sleep)

        assert outcome.ok
        assert outcome.urls_discovered == 2
        assert outcome.failed_urls == 0
        assert [r.country for r in outcome.records] == ["hr", "hr"]
        assert all(r.match_key for r in outcome.records)
        assert discoverer.calls == [(10, fake_page)]
        assert discoverer.closed

    def test_failed_urls_counted(self, fake_page):
        urls = ["https://www.lidl.hr/p/mlijeko/p1", "https://www.lidl.hr/p/missing/p2"]
        fake_page.pages[urls[0]] = PAGE.format(name="Milbona Mlijeko", price="1.19")

        outcome = run_country("hr", 0, fake_page, discoverer=FakeDiscoverer(urls), sleep=no_sleep)

        assert len(outcome.records) == 1
        assert outcome.failed_urls == 1

    def test_discovery_error_propagates(self, fake_page):
        discoverer = FakeDiscoverer(error=DiscoveryError("hr"))
        with pytest.raises(DiscoveryError):
            run_country("hr", 10, fake_page, discoverer=discoverer, sleep=no_sleep)

    def test_all_urls_failing_raises_batch_error(self, fake_page):
        discoverer = FakeDiscoverer(["https://www.lidl.hr/p/missing/p1"])
        with pytest.raises(BatchError, match="No valid products extracted for hr"):
            run_country("hr", 10, fake_page, discoverer=discoverer, sleep=no_sleep)


class TestAcquisitionContext:
    def test_start_twice_raises(self):
        context = AcquisitionContext()
        context.start()
        with pytest.raises(RuntimeError, match="already in progress"):
            context.start()

    def test_restart_after_finish(self):
        context = AcquisitionContext()
        context.start()
        context.outcomes["hr"] = CountryOutcome("hr")
        context.finish()

        context.start()
        assert context.outcomes == {}
        assert context.in_progress


def make_acquire(records_by_country, failing=()):
    def acquire(country, limit, headless):
        if country in failing:
            return CountryOutcome(country=country, status="failed", error="No product URLs found for " + country)
        return CountryOutcome(country=country, status="completed", records=list(records_by_country[country]))
    return acquire


class FakeStore:
    def __init__(self, fail_for=()):
        self.saved = {}
        self.fail_for = fail_for

    def save_batch(self, records, country):
        if country in self.fail_for:
            raise sqlite3.OperationalError("database is locked")
        self.saved[country] = list(records)
        return len(self.saved[country])


@pytest.fixture
def records_by_country(make_listing, classifier, captured_at):
    from pricecompare.normalization import normalize_listing
    return {
        country: [normalize_listing(make_listing(country), captured_at, classifier)]
        for country in ("hr", "si", "de")
    }


class TestRunCountries:
    def test_one_failing_country_does_not_affect_others(self, records_by_country):
        store = FakeStore()
        context = run_countries(
            ["hr", "si", "de"], limit=5, store=store,
            acquire=make_acquire(records_by_country, failing={"si"}))

        assert not context.in_progress
        assert context.finished_at is not None
        assert context.outcomes["hr"].ok
        assert context.outcomes["de"].ok
        assert context.outcomes["si"].status == "failed"
        assert set(store.saved) == {"hr", "de"}
        assert context.outcomes["hr"].saved == 1
        assert [r.country for r in context.records()] == ["de", "hr"]

    def test_crashing_country_does_not_abort_run(self, records_by_country):
        healthy = make_acquire(records_by_country)

        def acquire(country, limit, headless):
            if country == "si":
                raise RuntimeError("renderer crashed")
            return healthy(country, limit, headless)

        store = FakeStore()
        context = run_countries(["hr", "si", "de"], store=store, acquire=acquire)

        assert context.outcomes["hr"].ok
        assert context.outcomes["de"].ok
        assert context.outcomes["si"].status == "failed"
        assert context.outcomes["si"].error == "RuntimeError: renderer crashed"
        assert set(store.saved) == {"hr", "de"}
        assert not context.in_progress

    def test_duplicate_countries_run_once(self, records_by_country):
        seen = []

        def acquire(country, limit, headless):
            seen.append((country, limit, headless))
            return CountryOutcome(country=country, status="completed")

        run_countries(["hr", "hr", "de"], limit=3, headless=False, acquire=acquire)

        assert sorted(seen) == [("de", 3, False), ("hr", 3, False)]

    def test_save_failure_marks_country_failed(self, records_by_country):
        context = run_countries(
            ["hr", "de"], store=FakeStore(fail_for={"de"}), acquire=make_acquire(records_by_country))

        assert context.outcomes["hr"].ok
        assert context.outcomes["de"].status == "failed"
        assert context.outcomes["de"].error.startswith("save failed:")

    def test_rejects_concurrent_run(self, records_by_country):
        context = AcquisitionContext()
        context.start()
        with pytest.raises(RuntimeError):
            run_countries(["hr"], context=context, acquire=make_acquire(records_by_country))

    def test_empty_country_list(self):
        context = run_countries([])
        assert context.outcomes == {}
        assert not context.in_progress

    def test_outcome_summary(self, records_by_country):
        context = run_countries(["hr"], acquire=make_acquire(records_by_country))
        assert context.outcomes["hr"].to_dict() == {
            "country": "hr", "status": "completed", "urlsDiscovered": 0, "records": 1,
            "failedUrls": 0, "saved": 0, "error": None,
        }
