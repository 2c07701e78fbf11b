#!/usr/bin/env python3
"""
Unit tests for the command-line interface.
"""

import io
import unittest
from unittest.mock import AsyncMock, patch

from fake_adapter import FakeAdapter
from url_lister.cli import build_config, build_parser, main
from url_lister.config import DEFAULT_USER_AGENT
from url_lister.errors import AdapterError, UsageError
from url_lister.filters import Anchor


class TestBuildConfig(unittest.TestCase):

    def parse(self, argv):
        return build_config(build_parser().parse_args(argv))

    def test_defaults(self):
        config = self.parse(["https://ex.com/"])
        self.assertEqual(config.seeds, ["https://ex.com/"])
        self.assertEqual(config.max_depth, 1)
        self.assertEqual(config.delay, 0.0)
        self.assertIsNone(config.filters.allow_pattern)
        self.assertIsNone(config.filters.disallow_pattern)
        self.assertFalse(config.filters.same_host_only)
        self.assertFalse(config.filters.child_only)
        self.assertIs(config.filters.anchor, Anchor.ORIGIN)
        self.assertTrue(config.render.execute_scripts)
        self.assertTrue(config.render.headless)
        self.assertEqual(config.render.user_agent, DEFAULT_USER_AGENT)
        self.assertEqual(config.render.timeout_ms, 30000)

    def test_all_flags(self):
        config = self.parse([
            "--same-host", "--children",
            "--allow", "docs", "--disallow", r"\.pdf$",
            "--delay", "1.5", "--depth", "3",
            "--disable-javascript",
            "--anchor", "page",
            "--block", "image", "--block", "font",
            "--timeout", "10",
            "https://a.com/", "https://b.com/",
        ])
        self.assertEqual(config.seeds, ["https://a.com/", "https://b.com/"])
        self.assertTrue(config.filters.same_host_only)
        self.assertTrue(config.filters.child_only)
        self.assertEqual(config.filters.allow_pattern.pattern, "docs")
        self.assertEqual(config.filters.disallow_pattern.pattern, r"\.pdf$")
        self.assertEqual(config.delay, 1.5)
        self.assertEqual(config.max_depth, 3)
        self.assertFalse(config.render.execute_scripts)
        self.assertIs(config.filters.anchor, Anchor.PAGE)
        self.assertEqual(config.render.blocked_resource_kinds, frozenset({"image", "font"}))
        self.assertEqual(config.render.timeout_ms, 10000)

    def test_child_alias(self):
        self.assertTrue(self.parse(["--child", "https://ex.com/"]).filters.child_only)

    def test_invalid_values(self):
        with self.assertRaises(UsageError):
            self.parse(["--depth", "0", "https://ex.com/"])
        with self.assertRaises(UsageError):
            self.parse(["--delay", "-1", "https://ex.com/"])
        with self.assertRaises(UsageError):
            self.parse(["--allow", "(", "https://ex.com/"])


@patch('sys.stderr', new_callable=io.StringIO)
@patch('sys.stdout', new_callable=io.StringIO)
class TestMain(unittest.TestCase):

    def test_prints_links(self, stdout, stderr):
        adapter = FakeAdapter({"https://ex.com/": ["/a", "/b", "/a"]})
        code = main(["https://ex.com/"], adapter_factory=lambda options: adapter)

        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue().splitlines(), ["https://ex.com/a", "https://ex.com/b"])
        self.assertIn("Visiting: https://ex.com/", stderr.getvalue())
        self.assertTrue(adapter.closed)

    def test_adapter_receives_render_options(self, stdout, stderr):
        received = []

        def factory(options):
            received.append(options)
            return FakeAdapter({})

        main(["--disable-javascript", "--block", "media", "https://ex.com/"], adapter_factory=factory)
        self.assertFalse(received[0].execute_scripts)
        self.assertEqual(received[0].blocked_resource_kinds, frozenset({"media"}))

    def test_no_urls(self, stdout, stderr):
        with self.assertRaises(SystemExit) as ctx:
            main([], adapter_factory=lambda options: FakeAdapter({}))
        self.assertNotEqual(ctx.exception.code, 0)
        self.assertEqual(stdout.getvalue(), "")

    def test_usage_error(self, stdout, stderr):
        code = main(["--allow", "(", "https://ex.com/"], adapter_factory=lambda options: FakeAdapter({}))
        self.assertEqual(code, 1)
        self.assertIn("Invalid --allow pattern", stderr.getvalue())

    def test_invalid_seed(self, stdout, stderr):
        code = main(["ftp://ex.com/"], adapter_factory=lambda options: FakeAdapter({}))
        self.assertEqual(code, 1)
        self.assertIn("Invalid entry URL", stderr.getvalue())

    def test_fatal_adapter_error(self, stdout, stderr):
        adapter = FakeAdapter({})
        adapter.start = AsyncMock(side_effect=AdapterError("Could not start browser: boom"))
        code = main(["https://ex.com/"], adapter_factory=lambda options: adapter)
        self.assertEqual(code, 1)
        self.assertIn("Error: Could not start browser: boom", stderr.getvalue())

    def test_broken_pipe_exits_quietly(self, stdout, stderr):
        adapter = FakeAdapter({"https://ex.com/": ["/a", "/b"]})
        with patch('url_lister.crawler.print_url', side_effect=BrokenPipeError):
            code = main(["https://ex.com/"], adapter_factory=lambda options: adapter)

        self.assertEqual(code, 1)
        self.assertNotIn("Traceback", stderr.getvalue())
        self.assertNotIn("Error:", stderr.getvalue())
        self.assertTrue(adapter.closed)

    def test_unexpected_error_is_reported(self, stdout, stderr):
        adapter = FakeAdapter({})
        adapter.navigate = AsyncMock(side_effect=RuntimeError("boom"))
        code = main(["https://ex.com/"], adapter_factory=lambda options: adapter)

        self.assertEqual(code, 1)
        self.assertIn("Error: Fatal error: boom", stderr.getvalue())
        self.assertNotIn("Traceback", stderr.getvalue())
        self.assertTrue(adapter.closed)

    def test_warning_prefix(self, stdout, stderr):
        adapter = FakeAdapter({"https://ex.com/": []}, statuses={"https://ex.com/": 500})
        main(["https://ex.com/"], adapter_factory=lambda options: adapter)
        self.assertIn("Warning: https://ex.com/ returned status 500", stderr.getvalue())

    def test_quiet(self, stdout, stderr):
        adapter = FakeAdapter({"https://ex.com/": ["/a"]})
        main(["-q", "https://ex.com/"], adapter_factory=lambda options: adapter)
        self.assertNotIn("Visiting", stderr.getvalue())
        self.assertEqual(stdout.getvalue(), "https://ex.com/a\n")


if __name__ == "__main__":
    unittest.main()
