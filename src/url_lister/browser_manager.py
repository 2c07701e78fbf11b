#!/usr/bin/env python3
"""Browser management for Playwright-based link discovery."""
import logging
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Route,
    async_playwright,
)

from .adapter import NavigationResult
from .config import RenderOptions
from .errors import AdapterError, NavigationError

logger = logging.getLogger(__name__)


def _resolve(base_url: str, href: str) -> str:
    # Unparseable hrefs are returned as-is; the link filter rejects them.
    try:
        return urljoin(base_url, href.strip())
    except ValueError:
        return href


class BrowserManager:
    """Manages browser lifecycle and page operations."""

    def __init__(self, options: Optional[RenderOptions] = None):
        """
        Initialize browser manager.

        Args:
            options: Browser session settings (scripts, blocked resources,
                user agent, timeout, headless mode)
        """
        self.options = options or RenderOptions()
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None
        self._playwright: Optional[Playwright] = None

    async def start(self):
        """Launch the browser and open a page configured with the options."""
        try:
            self._playwright = await async_playwright().start()
            self.browser = await self._playwright.chromium.launch(headless=self.options.headless)
            self.context = await self.browser.new_context(
                java_script_enabled=self.options.execute_scripts,
                user_agent=self.options.user_agent
            )
            self.page = await self.context.new_page()
            if self.options.blocked_resource_kinds:
                await self.page.route("**/*", self._filter_resources)
        except PlaywrightError as e:
            await self._shutdown_quietly()
            raise AdapterError(f"Could not start browser: {e}") from e

        logger.debug(
            "Browser started (headless=%s, javascript=%s)",
            self.options.headless, self.options.execute_scripts
        )

    async def close(self):
        """Close browser and cleanup."""
        try:
            if self.browser:
                await self.browser.close()
            if self._playwright:
                await self._playwright.stop()
        except PlaywrightError as e:
            raise AdapterError(f"Could not close browser: {e}") from e
        finally:
            self.browser = None
            self.context = None
            self.page = None
            self._playwright = None
        logger.debug("Browser closed")

    async def _shutdown_quietly(self):
        # Best-effort cleanup after a failed start; the start error is what gets reported.
        try:
            await self.close()
        except AdapterError as e:
            logger.debug("Ignoring cleanup failure: %s", e)

    async def _filter_resources(self, route: Route):
        if route.request.resource_type in self.options.blocked_resource_kinds:
            await route.abort()
        else:
            await route.continue_()

    def _require_page(self) -> Page:
        if not self.page:
            raise RuntimeError("Browser not started. Call start() first.")
        return self.page

    async def navigate(self, url: str) -> NavigationResult:
        """
        Navigate to a URL and wait for the network to go idle.

        Args:
            url: URL to navigate to

        Returns:
            Final page URL and HTTP status (None when there was no response)

        Raises:
            NavigationError: If the page could not be loaded
        """
        page = self._require_page()
        try:
            response = await page.goto(url, wait_until="networkidle", timeout=self.options.timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(url, e) from e

        return NavigationResult(
            url=page.url,
            status_code=response.status if response else None
        )

    async def extract_anchor_hrefs(self) -> List[str]:
        """
        Get the href of every anchor in the rendered page.

        Hrefs are resolved against the document base: the final page URL,
        or the page's <base href> when it has one.

        Returns:
            Absolute href values (non-web schemes are passed through)
        """
        page = self._require_page()
        try:
            html = await page.content()
        except PlaywrightError as e:
            raise NavigationError(page.url, e) from e

        soup = BeautifulSoup(html, 'html.parser')
        base_url = page.url
        base = soup.find('base', href=True)
        if base is not None:
            base_url = _resolve(base_url, base['href'])

        return [_resolve(base_url, anchor['href']) for anchor in soup.find_all('a', href=True)]

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
