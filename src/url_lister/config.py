#!/usr/bin/env python3
"""
Run configuration for the URL lister.
"""
from dataclasses import dataclass, field
from typing import FrozenSet, List

from .errors import UsageError
from .filters import FilterConfig, normalize_url

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/129.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class RenderOptions:
    """Settings applied to the browser session."""
    execute_scripts: bool = True
    # Playwright resource types, e.g. "image", "font", "media"
    blocked_resource_kinds: FrozenSet[str] = frozenset()
    user_agent: str = DEFAULT_USER_AGENT
    timeout_ms: int = 30000
    headless: bool = True


@dataclass
class CrawlConfig:
    """Configuration for a single crawl."""
    seeds: List[str]
    max_depth: int = 1
    delay: float = 0.0
    filters: FilterConfig = field(default_factory=FilterConfig)
    render: RenderOptions = field(default_factory=RenderOptions)

    def validate(self):
        """
        Validate configuration values.

        Raises:
            UsageError: If the configuration cannot be crawled
        """
        if not self.seeds:
            raise UsageError("Please provide an entry URL.")

        for seed in self.seeds:
            if normalize_url(seed, seed) is None:
                raise UsageError(f"Invalid entry URL: {seed}")

        if self.max_depth < 1:
            raise UsageError("depth must be at least 1")

        if self.delay < 0:
            raise UsageError("delay must be non-negative")

        if self.render.timeout_ms <= 0:
            raise UsageError("timeout must be positive")

    def normalized_seeds(self) -> List[str]:
        """Seed URLs resolved and stripped of fragments, in the given order."""
        seeds = []
        for seed in self.seeds:
            url = normalize_url(seed, seed)
            if url is None:
                raise UsageError(f"Invalid entry URL: {seed}")
            seeds.append(url)
        return seeds
