#!/usr/bin/env python3
"""Crawl state: the frontier queue and the visited/printed registries."""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterator


@dataclass(frozen=True)
class FrontierEntry:
    """A pending page to visit."""
    url: str
    origin_url: str
    depth: int = 1


class UrlRegistry:
    """Insertion-ordered set of URLs."""

    def __init__(self):
        self._urls: Dict[str, None] = {}

    def add(self, url: str) -> bool:
        """
        Record a URL.

        Args:
            url: URL to record

        Returns:
            True if the URL was not already present
        """
        if url in self._urls:
            return False
        self._urls[url] = None
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)


class Frontier:
    """FIFO queue of frontier entries. Duplicate URLs are allowed."""

    def __init__(self):
        self._queue: Deque[FrontierEntry] = deque()

    def push(self, entry: FrontierEntry):
        self._queue.append(entry)

    def pop(self) -> FrontierEntry:
        """Remove and return the oldest entry. Raises IndexError when empty."""
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)


@dataclass
class CrawlState:
    """Everything a single crawl run mutates."""
    frontier: Frontier = field(default_factory=Frontier)
    # URLs that have been dequeued and fetched (or attempted)
    visited: UrlRegistry = field(default_factory=UrlRegistry)
    # URLs already written to the output
    printed: UrlRegistry = field(default_factory=UrlRegistry)
