"""Logging configuration shared by the CLI, web and MCP entry points."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging to stderr.

    Args:
        level: Level name or number. Defaults to ``TIMECLOCK_LOG_LEVEL`` or WARNING.
    """
    if level is None:
        level = os.environ.get("TIMECLOCK_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # stdout carries MCP protocol traffic, so logs always go to stderr
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
