"""Entry point for running the bazel-mcp server directly.

Usage:
    python -m bazel_mcp.mcp
"""

from bazel_mcp.config import get_config
from bazel_mcp.logging_config import configure_logging
from bazel_mcp.mcp.server import run_server

if __name__ == "__main__":
    config = get_config()
    configure_logging(config["logging"]["level"])
    run_server(config=config)
