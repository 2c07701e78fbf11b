"""
Link Crawler Module

Breadth-first crawler that renders each page through a RenderingAdapter,
prints every admissible link it discovers and follows them up to a maximum
depth.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .adapter import RenderingAdapter
from .config import CrawlConfig
from .errors import NavigationError
from .filters import admissible_links, normalize_url
from .pacing import FixedDelayPacer, Pacer
from .registry import CrawlState, FrontierEntry

logger = logging.getLogger(__name__)


def print_url(url: str):
    """Write one discovered URL to stdout."""
    print(url, flush=True)


@dataclass
class CrawlStats:
    """Counters collected during a crawl."""
    pages_fetched: int = 0
    pages_failed: int = 0
    entries_skipped: int = 0
    non_success: int = 0
    emitted: List[str] = field(default_factory=list)


class LinkCrawler:
    """
    Crawls from one or more seed URLs and emits the links it finds.

    Attributes:
        config (CrawlConfig): Seeds, depth, delay and filter settings
        adapter (RenderingAdapter): Engine used to load pages
        pacer (Pacer): Waits between page requests
        state (CrawlState): Frontier plus visited and printed registries
        stats (CrawlStats): Counters for the current run
    """

    def __init__(
        self,
        config: CrawlConfig,
        adapter: RenderingAdapter,
        pacer: Optional[Pacer] = None,
        emit: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize the crawler.

        Args:
            config: Crawl configuration, validated here
            adapter: Rendering engine (started and closed by run())
            pacer: Delay policy between requests (default: config.delay)
            emit: Called once per discovered URL (default: print to stdout)

        Raises:
            UsageError: If the configuration is invalid
        """
        config.validate()
        self.config = config
        self.adapter = adapter
        self.pacer = pacer or FixedDelayPacer(config.delay)
        self.emit = emit or print_url
        self.state = CrawlState()
        self.stats = CrawlStats()

    def seed(self):
        """Queue every entry URL at depth 1."""
        for url in self.config.normalized_seeds():
            self.state.frontier.push(FrontierEntry(url=url, origin_url=url, depth=1))

    async def run(self) -> CrawlStats:
        """
        Start the crawling process.

        Returns:
            CrawlStats: Counters and the emitted URLs in output order
        """
        self.seed()
        await self.adapter.start()
        try:
            await self._drain()
        finally:
            await self.adapter.close()

        logger.debug(
            "Crawl complete. Fetched %d pages (%d failed), printed %d URLs.",
            self.stats.pages_fetched, self.stats.pages_failed, len(self.stats.emitted)
        )
        return self.stats

    async def _drain(self):
        frontier = self.state.frontier
        while frontier:
            entry = frontier.pop()

            if entry.depth > self.config.max_depth or entry.url in self.state.visited:
                self.stats.entries_skipped += 1
                continue

            await self.process(entry)

            # Polite delay between requests
            if frontier:
                await self.pacer.wait()

    async def process(self, entry: FrontierEntry):
        """
        Fetch one page, print its new links and queue them for the next level.

        Args:
            entry: Frontier entry to visit
        """
        state = self.state
        state.visited.add(entry.url)

        if self.config.max_depth > 1:
            logger.info("Visiting: %s (depth: %d)", entry.url, entry.depth)
        else:
            logger.info("Visiting: %s", entry.url)

        try:
            result = await self.adapter.navigate(entry.url)
            if not result.ok:
                self.stats.non_success += 1
                logger.warning("%s returned status %s", entry.url, result.status_code)
            hrefs = await self.adapter.extract_anchor_hrefs()
        except NavigationError as e:
            self.stats.pages_failed += 1
            logger.error("Failed to fetch %s: %s", entry.url, e.cause or e)
            return

        self.stats.pages_fetched += 1

        # Links resolve against the page that was rendered, which differs
        # from entry.url after a redirect.
        page_url = normalize_url(result.url, entry.url) or entry.url
        state.visited.add(page_url)

        links = admissible_links(
            hrefs,
            page_url=page_url,
            origin_url=entry.origin_url,
            config=self.config.filters,
            visited=state.visited
        )
        logger.debug("  Found %d links on %s", len(links), entry.url)

        for link in links:
            if state.printed.add(link):
                self.stats.emitted.append(link)
                self.emit(link)

        if entry.depth < self.config.max_depth:
            for link in links:
                state.frontier.push(
                    FrontierEntry(url=link, origin_url=entry.origin_url, depth=entry.depth + 1)
                )
