"""
bazel_mcp.commands - CLI command implementations
"""

from bazel_mcp.commands import config_cmd, query_cmd, resolve_cmd

__all__ = [
    "config_cmd",
    "query_cmd",
    "resolve_cmd",
]
