"""
bazel_mcp.commands.query_cmd - Plan or run a tool from the command line.

``plan`` prints the bazel command a tool call would execute without
running it; ``run`` executes it and prints bazel's output.
"""

from __future__ import annotations

import argparse
import asyncio
import shlex
import sys

from bazel_mcp.bazel import BazelRunner
from bazel_mcp.config import get_config
from bazel_mcp.mcp.tools import TOOL_SPECS, ToolInvocationError, invoke_tool, prepare_tool_call


def run_plan(args: argparse.Namespace) -> int:
    """Print the bazel argv for a tool call."""
    spec = TOOL_SPECS[args.tool]
    config = get_config(start_path=args.project, config_path=args.config)
    runner = BazelRunner.from_config(config)
    try:
        plan, root = prepare_tool_call(spec, args.target, str(args.project), args.depth)
    except ToolInvocationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    argv = [runner.executable, *runner.startup_options, *plan.args]
    if args.verbose:
        print(f"# label: {plan.label}")
        if plan.depth is not None:
            print(f"# depth: {plan.depth}")
        print(f"# directory: {root}")
    print(shlex.join(argv))
    return 0


def run_tool(args: argparse.Namespace) -> int:
    """Execute a tool call and print the output."""
    spec = TOOL_SPECS[args.tool]
    config = get_config(start_path=args.project, config_path=args.config)
    runner = BazelRunner.from_config(config)
    try:
        output = asyncio.run(
            invoke_tool(runner, spec, args.target, str(args.project), args.depth)
        )
    except ToolInvocationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0
