#!/usr/bin/env python3
"""
Logging setup. Progress and diagnostics go to stderr so stdout carries only
the discovered URLs.
"""
import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "url_lister"


class ProgressFormatter(logging.Formatter):
    """Plain messages for INFO, level-prefixed messages for everything else."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        return f"{record.levelname.capitalize()}: {message}"


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Minimum level to show
        stream: Destination stream (default: sys.stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Clear existing handlers so repeated calls don't duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ProgressFormatter("%(message)s"))
    logger.addHandler(handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return logger
