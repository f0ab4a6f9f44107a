"""
bazel-mcp - Bazel build graph tools over the Model Context Protocol

Exposes reverse-dependency, dependency and source queries plus bazel
build and test runs as MCP tools. Targets may be given as Bazel labels
or as file paths inside the project, which are converted to labels.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bazel-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from bazel_mcp.bazel import (
    BazelMCPError,
    CommandExecutionError,
    InvalidArgumentError,
    OutsideProjectError,
    PathResolutionError,
    QueryMode,
    QueryPlan,
    parse_depth,
    plan_query,
    resolve_target,
)

__all__ = [
    "__version__",
    "BazelMCPError",
    "CommandExecutionError",
    "InvalidArgumentError",
    "OutsideProjectError",
    "PathResolutionError",
    "QueryMode",
    "QueryPlan",
    "parse_depth",
    "plan_query",
    "resolve_target",
]
