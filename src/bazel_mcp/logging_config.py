"""
bazel_mcp.logging_config - Logging setup for the CLI and server.

Log records always go to stderr: with the stdio transport, stdout carries
the JSON-RPC stream.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "bazel-mcp-stderr"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stderr handler to the ``bazel_mcp`` logger.

    Calling this again only updates the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("bazel_mcp")
    logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
