"""bazel_mcp.mcp - Model Context Protocol server for bazel.

Usage:
    from bazel_mcp.mcp import create_server, run_server

    # Create server
    server = create_server()

    # Or run directly
    run_server()
"""

from bazel_mcp.mcp.server import create_server, run_server
from bazel_mcp.mcp.tools import TOOL_SPECS, ToolInvocationError, ToolSpec, invoke_tool

__all__ = [
    "TOOL_SPECS",
    "ToolInvocationError",
    "ToolSpec",
    "create_server",
    "invoke_tool",
    "run_server",
]
