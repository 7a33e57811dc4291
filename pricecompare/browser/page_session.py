"""
Page Session

The page-rendering capability used by discovery and extraction:
navigate with a timeout, snapshot the rendered HTML, wait, and report the
current URL. Extraction runs over the rendered snapshot.

open_page() is a scoped acquisition: the browser, context and page are
released on every exit path. Each call owns an independent Playwright
instance, so countries can be acquired from separate threads.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from ..common.constants import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class PageSession(Protocol):
    """What acquisition needs from a rendered browser page."""

    @property
    def current_url(self) -> str: ...

    def navigate(self, url: str, timeout: float) -> None: ...

    def content(self) -> str: ...

    def wait(self, seconds: float) -> None: ...


class PlaywrightPageSession:
    """PageSession backed by a Playwright page."""

    def __init__(self, page: Page):
        self._page = page

    @property
    def current_url(self) -> str:
        return self._page.url

    def navigate(self, url: str, timeout: float) -> None:
        """
        Load a URL, waiting for DOMContentLoaded.

        Args:
            url: Page to load
            timeout: Load timeout in seconds

        Raises:
            playwright.sync_api.Error: On timeout or navigation failure
        """
        self._page.goto(url, wait_until="domcontentloaded", timeout=timeout * 1000)

    def content(self) -> str:
        """Return the rendered HTML of the current page."""
        return self._page.content()

    def wait(self, seconds: float) -> None:
        self._page.wait_for_timeout(seconds * 1000)


@contextmanager
def open_page(
    headless: bool = True,
    accept_language: Optional[str] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Iterator[PlaywrightPageSession]:
    """
    Launch Chromium and yield one page session, closing everything on exit.

    Args:
        headless: Run the browser headless
        accept_language: Accept-Language header for the storefront
        user_agent: User-Agent string for the browser context

    Yields:
        PlaywrightPageSession
    """
    headers = {"Accept-Language": accept_language} if accept_language else None

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(
            headless=headless,
            args=["--no-sandbox", "--disable-dev-shm-usage"],
        )
        try:
            context = browser.new_context(user_agent=user_agent, extra_http_headers=headers)
            try:
                page = context.new_page()
                logger.debug("Browser page opened (headless=%s)", headless)
                yield PlaywrightPageSession(page)
            finally:
                context.close()
        finally:
            try:
                browser.close()
            except PlaywrightError as e:
                logger.warning("Browser close failed: %s", e)
            logger.debug("Browser closed")
