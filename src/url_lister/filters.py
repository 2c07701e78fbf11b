#!/usr/bin/env python3
"""
Link filtering.

Turns the raw hrefs found on a page into the absolute URLs the crawler is
allowed to print and follow. Every function here is side-effect free.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Container, Iterable, List, Optional, Pattern
from urllib.parse import urldefrag, urljoin, urlparse, urlunparse

from .errors import UsageError

WEB_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}


class Anchor(Enum):
    """Which URL the host and path filters are measured against."""
    PAGE = "page"
    ORIGIN = "origin"


@dataclass(frozen=True)
class FilterConfig:
    """
    Link filter settings.

    Attributes:
        allow_pattern: If set, only URLs matching it are admitted
        disallow_pattern: If set, URLs matching it are rejected (wins over allow)
        same_host_only: Only admit URLs on the anchor's host
        child_only: Only admit URLs below the anchor's path on the anchor's host
        anchor: Measure host/path against the current page or the seed URL
    """
    allow_pattern: Optional[Pattern[str]] = None
    disallow_pattern: Optional[Pattern[str]] = None
    same_host_only: bool = False
    child_only: bool = False
    anchor: Anchor = Anchor.ORIGIN

    @classmethod
    def from_patterns(
        cls,
        allow: Optional[str] = None,
        disallow: Optional[str] = None,
        same_host_only: bool = False,
        child_only: bool = False,
        anchor: Anchor = Anchor.ORIGIN
    ) -> "FilterConfig":
        """
        Build a FilterConfig from regular expression source strings.

        Raises:
            UsageError: If a pattern is not a valid regular expression
        """
        return cls(
            allow_pattern=_compile(allow, "--allow"),
            disallow_pattern=_compile(disallow, "--disallow"),
            same_host_only=same_host_only,
            child_only=child_only,
            anchor=anchor
        )


def _compile(pattern: Optional[str], name: str) -> Optional[Pattern[str]]:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise UsageError(f"Invalid {name} pattern {pattern!r}: {e}") from e


def normalize_url(href: str, base: str) -> Optional[str]:
    """
    Resolve an href against the page it appeared on.

    - Joins relative URLs against base
    - Drops fragments (#...)
    - Lowercases scheme and host, removes default ports
    - Uses "/" for an empty path

    Args:
        href: Raw href attribute value
        base: URL of the page containing the href

    Returns:
        Absolute URL, or None if href is empty, unparseable or not http(s)
    """
    if not href or not href.strip():
        return None

    try:
        joined, _ = urldefrag(urljoin(base, href.strip()))
        parsed = urlparse(joined)
        port = parsed.port
    except ValueError:
        return None

    scheme = parsed.scheme.lower()
    hostname = parsed.hostname
    if scheme not in WEB_SCHEMES or not hostname:
        return None

    # urlparse strips the brackets from IPv6 literals
    if ":" in hostname:
        hostname = f"[{hostname}]"
    if port is None or port == DEFAULT_PORTS[scheme]:
        netloc = hostname
    else:
        netloc = f"{hostname}:{port}"

    path = _remove_dot_segments(parsed.path) or "/"
    return urlunparse((scheme, netloc, path, parsed.params, parsed.query, ""))


def _remove_dot_segments(path: str) -> str:
    """Collapse "." and ".." path segments, as a browser does for absolute hrefs."""
    if "." not in path:
        return path

    segments = path.split("/")
    resolved: List[str] = []
    for segment in segments:
        if segment == ".":
            continue
        if segment == "..":
            # Never climb above the root
            if len(resolved) > 1:
                resolved.pop()
            continue
        resolved.append(segment)

    # "/a/b/.." names the directory "/a/"
    if segments[-1] in (".", ".."):
        resolved.append("")
    return "/".join(resolved)


def _anchor_parts(anchor_url: str):
    parsed = urlparse(normalize_url(anchor_url, anchor_url) or anchor_url)
    path = parsed.path if parsed.path.endswith("/") else f"{parsed.path}/"
    return parsed.netloc.lower(), path


def admit(
    href: str,
    page_url: str,
    origin_url: str,
    config: FilterConfig,
    visited: Container[str] = ()
) -> Optional[str]:
    """
    Decide whether a single href may be printed and followed.

    Args:
        href: Raw href found on the page
        page_url: URL of the page the href was found on
        origin_url: Seed URL of the branch that led to this page
        config: Filter settings
        visited: URLs that have already been fetched

    Returns:
        The normalized absolute URL, or None if rejected
    """
    url = normalize_url(href, page_url)
    if url is None:
        return None

    if config.allow_pattern is not None and not config.allow_pattern.search(url):
        return None
    if config.disallow_pattern is not None and config.disallow_pattern.search(url):
        return None

    if config.same_host_only or config.child_only:
        anchor_url = page_url if config.anchor is Anchor.PAGE else origin_url
        anchor_host, anchor_path = _anchor_parts(anchor_url)
        parsed = urlparse(url)

        if parsed.netloc != anchor_host:
            return None
        if config.child_only and not parsed.path.startswith(anchor_path):
            return None

    if url in visited:
        return None

    return url


def admissible_links(
    hrefs: Iterable[str],
    page_url: str,
    origin_url: str,
    config: FilterConfig,
    visited: Container[str] = ()
) -> List[str]:
    """Filter a page's hrefs, keeping first-seen order and dropping duplicates."""
    links: List[str] = []
    seen = set()
    for href in hrefs:
        url = admit(href, page_url, origin_url, config, visited)
        if url is not None and url not in seen:
            seen.add(url)
            links.append(url)
    return links
