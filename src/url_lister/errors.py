#!/usr/bin/env python3
"""Exceptions raised by the URL lister."""
from typing import Optional


class UrlListerError(Exception):
    """Base class for all URL lister errors."""


class UsageError(UrlListerError, ValueError):
    """Invalid input supplied before any crawling begins."""


class NavigationError(UrlListerError):
    """
    A single page could not be loaded.

    The crawler logs it and moves on to the next frontier entry.
    """

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        reason = str(cause) if cause is not None else "unknown error"
        super().__init__(f"{url}: {reason}")


class AdapterError(UrlListerError):
    """The rendering engine failed to start or shut down. Aborts the run."""
