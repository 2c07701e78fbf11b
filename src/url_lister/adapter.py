#!/usr/bin/env python3
"""Interface between the crawler and the page rendering engine."""
from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of a successful navigation."""
    url: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        """True unless the server answered with a non-2xx status."""
        return self.status_code is None or 200 <= self.status_code < 300


@runtime_checkable
class RenderingAdapter(Protocol):
    """
    Protocol for the engine that loads pages for the crawler.

    Implementations must raise NavigationError when a page cannot be loaded
    and AdapterError when the engine itself cannot start or stop.
    """

    async def start(self) -> None:
        """Open the rendering session."""
        ...

    async def close(self) -> None:
        """Release the rendering session."""
        ...

    async def navigate(self, url: str) -> NavigationResult:
        """Load url and wait until the page's network activity settles."""
        ...

    async def extract_anchor_hrefs(self) -> List[str]:
        """Return the raw href of every anchor on the current page."""
        ...
