"""
bazel_mcp.mcp.tools - Tool table and the shared request pipeline.

Every tool runs the same stages: validate the raw arguments, resolve the
target to a label (query tools only), plan the bazel invocation, execute
it. A failure in any stage is wrapped in ToolInvocationError naming the
stage and the inputs involved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from bazel_mcp.bazel.errors import BazelMCPError, InvalidArgumentError
from bazel_mcp.bazel.query import QueryMode, QueryPlan, parse_depth, plan_query
from bazel_mcp.bazel.target import normalize_project_root, resolve_target

logger = logging.getLogger(__name__)

PROJECT_PATH_DESCRIPTION = "Where MODULE.bazel or WORKSPACE is located."


@dataclass(frozen=True)
class ToolSpec:
    """Static description of one MCP tool."""

    name: str
    mode: QueryMode
    description: str
    target_description: str
    resolves_target: bool
    depth_field: str | None = None
    depth_description: str | None = None


TOOL_SPECS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name="reverse-dependencies",
            mode=QueryMode.REVERSE_DEPENDENCIES,
            description=(
                "Given a bazel target, or file path, find all other bazel targets that depend on it."
            ),
            target_description="The target to find reverse dependencies for.",
            resolves_target=True,
            depth_field="max_depth",
            depth_description=(
                "The maximum depth to search for reverse dependencies. "
                "Set to -1 to search indefinitely. 1 finds the immediate targets."
            ),
        ),
        ToolSpec(
            name="deps",
            mode=QueryMode.DEPENDENCIES,
            description="Finds the dependencies of a given Bazel target, or file path.",
            target_description="The Bazel target to find dependencies for (e.g., //foo:bar).",
            resolves_target=True,
            depth_field="depth",
            depth_description=(
                "The maximum depth for dependency search (default: 1 for direct deps). "
                "Must be non-negative."
            ),
        ),
        ToolSpec(
            name="sources",
            mode=QueryMode.SOURCES,
            description="Finds the source files associated with a given Bazel target.",
            target_description="The Bazel target to find sources for (e.g., //foo:bar).",
            resolves_target=True,
        ),
        ToolSpec(
            name="build",
            mode=QueryMode.BUILD,
            description="Builds a given Bazel target.",
            target_description="The Bazel target to build (e.g., //foo:bar).",
            resolves_target=False,
        ),
        ToolSpec(
            name="test",
            mode=QueryMode.TEST,
            description="Runs tests for a given Bazel target.",
            target_description="The Bazel target to test (e.g., //foo:test, //path/to/tests/...).",
            resolves_target=False,
        ),
    )
}


class ToolInvocationError(Exception):
    """A tool call failed; carries the stage and inputs for the caller."""

    def __init__(
        self,
        tool: str,
        stage: str,
        inputs: dict[str, Any],
        cause: Exception,
        label: str | None = None,
        depth: int | None = None,
    ):
        self.tool = tool
        self.stage = stage
        self.inputs = inputs
        self.cause = cause
        self.label = label
        self.depth = depth

        details = ", ".join(f"{key}={value!r}" for key, value in inputs.items())
        if label is not None:
            details += f", label={label!r}"
        if depth is not None:
            details += f", depth={depth}"
        super().__init__(f"{tool}: {stage} failed ({details}): {cause}")


class Runner(Protocol):
    async def run(self, plan: QueryPlan, project_root: str) -> str: ...


def prepare_tool_call(
    spec: ToolSpec,
    target: Any,
    project_path: Any,
    depth: Any = None,
    notes: list[str] | None = None,
) -> tuple[QueryPlan, str]:
    """Run the validate, resolve and plan stages for a tool call.

    Messages the caller should see (depth truncation, defaulted depth) are
    appended to *notes* when it is given.

    Returns:
        The plan and the normalized project root to execute it in.

    Raises:
        ToolInvocationError: Wrapping the first stage that failed.
    """
    inputs: dict[str, Any] = {"target": target, "project_path": project_path}
    if spec.depth_field is not None:
        inputs[spec.depth_field] = depth

    stage = "validate"
    label: str | None = None
    parsed_depth: int | None = None
    try:
        if not isinstance(target, str) or not target:
            raise InvalidArgumentError("target", "target must be a non-empty string")
        if not isinstance(project_path, str) or not project_path:
            raise InvalidArgumentError("project_path", "project_path must be a non-empty string")
        root = normalize_project_root(project_path)
        if spec.depth_field is not None:
            parsed_depth = parse_depth(
                depth, default=spec.mode.default_depth, field=spec.depth_field, notes=notes
            )

        stage = "resolve"
        label = resolve_target(target, root) if spec.resolves_target else target

        stage = "plan"
        plan = plan_query(spec.mode, label, parsed_depth)
    except BazelMCPError as e:
        raise ToolInvocationError(spec.name, stage, inputs, e, label, parsed_depth) from e

    return plan, root


async def invoke_tool(
    runner: Runner,
    spec: ToolSpec,
    target: Any,
    project_path: Any,
    depth: Any = None,
    notes: list[str] | None = None,
) -> str:
    """Run a tool end to end and return bazel's output text."""
    plan, root = prepare_tool_call(spec, target, project_path, depth, notes)
    try:
        return await runner.run(plan, root)
    except BazelMCPError as e:
        inputs: dict[str, Any] = {"target": target, "project_path": project_path}
        if spec.depth_field is not None:
            inputs[spec.depth_field] = depth
        raise ToolInvocationError(spec.name, "execute", inputs, e, plan.label, plan.depth) from e
