# Blocks Schema MCP Server
# File: logging_setup.py
# Version: v1

"""Logging configuration for the server process.

stdout carries the MCP stdio protocol, so log records go to stderr and,
optionally, to a daily-rotated file.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import List

from .config import BlocksConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Name of the package logger every module logger hangs off.
PACKAGE_LOGGER = "blocks_schema_mcp"


def configure_logging(config: BlocksConfig) -> logging.Logger:
    """Attach stderr (and optional file) handlers to the package logger.

    Safe to call more than once; previously installed handlers are replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.log_file:
        path = Path(config.log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            TimedRotatingFileHandler(
                path,
                when="midnight",
                backupCount=config.log_retention_days,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
