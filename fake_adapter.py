#!/usr/bin/env python3
"""In-memory RenderingAdapter used by the tests in place of a real browser."""
from typing import Dict, List, Optional

from url_lister.adapter import NavigationResult
from url_lister.errors import NavigationError


class FakeAdapter:
    """
    Serves canned link lists.

    Args:
        pages: Final URL -> raw hrefs found on that page
        statuses: URL -> HTTP status (default 200)
        failures: URL -> exception raised as the navigation cause
        redirects: Requested URL -> URL the page ends up on
    """

    def __init__(
        self,
        pages: Dict[str, List[str]],
        statuses: Optional[Dict[str, int]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        redirects: Optional[Dict[str, str]] = None
    ):
        self.pages = pages
        self.statuses = statuses or {}
        self.failures = failures or {}
        self.redirects = redirects or {}
        self.visits: List[str] = []
        self.started = False
        self.closed = False
        self._current: Optional[str] = None

    async def start(self):
        self.started = True

    async def close(self):
        self.closed = True

    async def navigate(self, url: str) -> NavigationResult:
        self.visits.append(url)
        if url in self.failures:
            raise NavigationError(url, self.failures[url])
        self._current = self.redirects.get(url, url)
        return NavigationResult(url=self._current, status_code=self.statuses.get(url, 200))

    async def extract_anchor_hrefs(self) -> List[str]:
        return list(self.pages.get(self._current, []))
