"""
Breadth-first link lister. Renders pages in a headless browser and prints
every link that passes the host, path and pattern filters.
"""

__version__ = "0.1.0"

from .config import CrawlConfig, RenderOptions
from .crawler import CrawlStats, LinkCrawler
from .errors import AdapterError, NavigationError, UrlListerError, UsageError
from .filters import Anchor, FilterConfig, admit, normalize_url

__all__ = [
    'CrawlConfig', 'RenderOptions',
    'CrawlStats', 'LinkCrawler',
    'AdapterError', 'NavigationError', 'UrlListerError', 'UsageError',
    'Anchor', 'FilterConfig', 'admit', 'normalize_url',
]
