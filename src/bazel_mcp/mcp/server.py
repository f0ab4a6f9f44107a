"""bazel_mcp.mcp.server - MCP server implementation.

Creates and runs the MCP server exposing bazel query, build and test tools.
Each registered tool is a thin wrapper around ``invoke_tool``.
"""

import logging
from pathlib import Path
from typing import Annotated, Any

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from bazel_mcp.bazel.execute import BazelRunner
from bazel_mcp.config import get_config
from bazel_mcp.mcp.tools import (
    PROJECT_PATH_DESCRIPTION,
    TOOL_SPECS,
    Runner,
    ToolInvocationError,
    invoke_tool,
)

logger = logging.getLogger(__name__)

MCP_SERVER_INSTRUCTIONS = """\
Bazel build graph tools.

Every tool takes `project_path`, the directory holding MODULE.bazel or
WORKSPACE. `target` is a Bazel label (//pkg:name, @repo//pkg:name) or,
for reverse-dependencies, deps and sources, a file path absolute or
relative to project_path, which is converted to its label.

- reverse-dependencies: targets depending on `target` (`max_depth` -1 = unlimited)
- deps: dependencies of `target` (`depth` 1 = direct only, 0 = itself)
- sources: source files `target` is built from
- build / test: run bazel build / bazel test on a label or pattern

Results are bazel's own output text.
"""

ProjectPath = Annotated[str, Field(description=PROJECT_PATH_DESCRIPTION)]


async def _call(
    runner: Runner,
    tool: str,
    target: str,
    project_path: str,
    depth: Any = None,
    ctx: Context | None = None,
) -> str:
    notes: list[str] = []
    try:
        return await invoke_tool(runner, TOOL_SPECS[tool], target, project_path, depth, notes)
    except ToolInvocationError as e:
        logger.warning("%s", e)
        raise ToolError(str(e)) from e
    finally:
        # Sent as log notifications so the client sees the adjusted depth.
        if ctx is not None:
            for note in notes:
                await ctx.warning(note)


def create_server(
    config: dict[str, Any] | None = None,
    runner: Runner | None = None,
    working_dir: Path | None = None,
) -> FastMCP:
    """Create the MCP server with all tools registered.

    Args:
        config: Effective configuration; loaded from *working_dir* if None.
        runner: Executes query plans (injected by tests).
        working_dir: Where to look for .bazel-mcp.toml.

    Returns:
        FastMCP server instance.
    """
    if config is None:
        config = get_config(start_path=working_dir)
    if runner is None:
        runner = BazelRunner.from_config(config)

    server_name = config.get("server", {}).get("name", "bazel-mcp")
    mcp = FastMCP(server_name, instructions=MCP_SERVER_INSTRUCTIONS)

    rdeps_spec = TOOL_SPECS["reverse-dependencies"]
    deps_spec = TOOL_SPECS["deps"]
    sources_spec = TOOL_SPECS["sources"]
    build_spec = TOOL_SPECS["build"]
    test_spec = TOOL_SPECS["test"]

    @mcp.tool(name=rdeps_spec.name, description=rdeps_spec.description)
    async def reverse_dependencies(
        target: Annotated[str, Field(description=rdeps_spec.target_description)],
        project_path: ProjectPath,
        max_depth: Annotated[float, Field(description=rdeps_spec.depth_description)] = -1,
        ctx: Context = None,
    ) -> str:
        return await _call(runner, rdeps_spec.name, target, project_path, max_depth, ctx)

    @mcp.tool(name=deps_spec.name, description=deps_spec.description)
    async def deps(
        target: Annotated[str, Field(description=deps_spec.target_description)],
        project_path: ProjectPath,
        depth: Annotated[float, Field(description=deps_spec.depth_description)] = 1,
        ctx: Context = None,
    ) -> str:
        return await _call(runner, deps_spec.name, target, project_path, depth, ctx)

    @mcp.tool(name=sources_spec.name, description=sources_spec.description)
    async def sources(
        target: Annotated[str, Field(description=sources_spec.target_description)],
        project_path: ProjectPath,
    ) -> str:
        return await _call(runner, sources_spec.name, target, project_path)

    @mcp.tool(name=build_spec.name, description=build_spec.description)
    async def build(
        target: Annotated[str, Field(description=build_spec.target_description)],
        project_path: ProjectPath,
    ) -> str:
        return await _call(runner, build_spec.name, target, project_path)

    @mcp.tool(name=test_spec.name, description=test_spec.description)
    async def test(
        target: Annotated[str, Field(description=test_spec.target_description)],
        project_path: ProjectPath,
    ) -> str:
        return await _call(runner, test_spec.name, target, project_path)

    return mcp


def run_server(
    config: dict[str, Any] | None = None,
    working_dir: Path | None = None,
    transport: str | None = None,
) -> None:
    """Run the MCP server.

    Args:
        config: Effective configuration; loaded from *working_dir* if None.
        working_dir: Where to look for .bazel-mcp.toml.
        transport: 'stdio', 'sse' or 'streamable-http'; defaults to the
            configured transport.
    """
    if config is None:
        config = get_config(start_path=working_dir)
    if transport is None:
        transport = config.get("server", {}).get("transport", "stdio")
    mcp = create_server(config=config, working_dir=working_dir)
    logger.info("Starting %s MCP server (transport: %s)", mcp.name, transport)
    mcp.run(transport=transport)
