"""
bazel_mcp.bazel - Target resolution, query planning and bazel execution.
"""

from bazel_mcp.bazel.errors import (
    BazelMCPError,
    CommandExecutionError,
    InvalidArgumentError,
    OutsideProjectError,
    PathResolutionError,
)
from bazel_mcp.bazel.execute import BazelRunner, run_bazel
from bazel_mcp.bazel.query import (
    RDEPS_UNIVERSE,
    QueryMode,
    QueryPlan,
    parse_depth,
    plan_query,
)
from bazel_mcp.bazel.target import is_label, normalize_project_root, resolve_target

__all__ = [
    "BazelMCPError",
    "BazelRunner",
    "CommandExecutionError",
    "InvalidArgumentError",
    "OutsideProjectError",
    "PathResolutionError",
    "QueryMode",
    "QueryPlan",
    "RDEPS_UNIVERSE",
    "is_label",
    "normalize_project_root",
    "parse_depth",
    "plan_query",
    "resolve_target",
    "run_bazel",
]
