#!/usr/bin/env python3
"""
Command-line interface for the URL lister.
"""
import argparse
import asyncio
import logging
import os
import sys
from typing import Callable, List, Optional

from . import __version__
from .adapter import RenderingAdapter
from .browser_manager import BrowserManager
from .config import DEFAULT_USER_AGENT, CrawlConfig, RenderOptions
from .crawler import LinkCrawler
from .errors import AdapterError, UsageError
from .filters import Anchor, FilterConfig
from .log import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-lister",
        description="List the URLs linked from one or more pages, following links breadth-first.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  url-lister https://example.com/                        # links on one page
  url-lister --same-host --depth 3 https://example.com/  # whole site, 3 levels deep
  url-lister --children --delay 1 https://example.com/docs/
        """
    )

    parser.add_argument('urls', nargs='+', metavar='URL', help='Entry URL(s) to start from')
    parser.add_argument('--same-host', action='store_true', help='Only follow links on the same host')
    parser.add_argument(
        '--children', '--child',
        dest='children',
        action='store_true',
        help='Only follow links whose path is below the anchor URL'
    )
    parser.add_argument('--allow', metavar='PATTERN', help='Regex pattern for allowed URLs')
    parser.add_argument('--disallow', metavar='PATTERN', help='Regex pattern for disallowed URLs')
    parser.add_argument(
        '--delay',
        type=float,
        default=0.0,
        metavar='SECONDS',
        help='Time to wait between requests (default: 0)'
    )
    parser.add_argument(
        '--depth',
        type=int,
        default=1,
        metavar='N',
        help='Maximum depth of URL search (default: 1)'
    )
    parser.add_argument('--disable-javascript', action='store_true', help='Do not run JavaScript')
    parser.add_argument(
        '--anchor',
        choices=[a.value for a in Anchor],
        default=Anchor.ORIGIN.value,
        help='Compare --same-host/--children against the entry URL (origin) '
             'or the page the link was found on (default: origin)'
    )
    parser.add_argument(
        '--block',
        action='append',
        default=[],
        metavar='KIND',
        help='Resource type to skip loading, e.g. image, font, media (repeatable)'
    )
    parser.add_argument('--user-agent', default=DEFAULT_USER_AGENT, help='Browser User-Agent')
    parser.add_argument(
        '--timeout',
        type=float,
        default=30.0,
        metavar='SECONDS',
        help='Navigation timeout per page (default: 30)'
    )
    parser.add_argument('--headful', action='store_true', help='Show the browser window')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only show warnings and errors')

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def build_config(args: argparse.Namespace) -> CrawlConfig:
    """
    Turn parsed arguments into a validated CrawlConfig.

    Raises:
        UsageError: If an argument value is invalid
    """
    filters = FilterConfig.from_patterns(
        allow=args.allow,
        disallow=args.disallow,
        same_host_only=args.same_host,
        child_only=args.children,
        anchor=Anchor(args.anchor)
    )
    render = RenderOptions(
        execute_scripts=not args.disable_javascript,
        blocked_resource_kinds=frozenset(args.block),
        user_agent=args.user_agent,
        timeout_ms=int(args.timeout * 1000),
        headless=not args.headful
    )
    config = CrawlConfig(
        seeds=list(args.urls),
        max_depth=args.depth,
        delay=args.delay,
        filters=filters,
        render=render
    )
    config.validate()
    return config


def main(
    argv: Optional[List[str]] = None,
    adapter_factory: Callable[[RenderOptions], RenderingAdapter] = BrowserManager
) -> int:
    """Main entry point for the URL lister CLI."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    setup_logging(level)

    try:
        config = build_config(args)
        crawler = LinkCrawler(config, adapter_factory(config.render))
        asyncio.run(crawler.run())
    except UsageError as e:
        logger.error("%s", e)
        return 1
    except AdapterError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except BrokenPipeError:
        # Reader went away (e.g. piped into head); stop without a traceback
        _silence_stdout()
        return 1
    except Exception as e:
        logger.error("Fatal error: %s", e, exc_info=args.verbose)
        return 1

    return 0


def _silence_stdout():
    # Point stdout at devnull so the interpreter's final flush doesn't raise again.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError) as e:
        logger.debug("Could not redirect stdout: %s", e)


if __name__ == "__main__":
    raise SystemExit(main())
