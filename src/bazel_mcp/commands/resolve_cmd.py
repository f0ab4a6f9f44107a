"""
bazel_mcp.commands.resolve_cmd - Print the canonical label for a target or path.
"""

from __future__ import annotations

import argparse
import sys

from bazel_mcp.bazel import BazelMCPError, resolve_target


def run(args: argparse.Namespace) -> int:
    """Run the resolve command."""
    try:
        label = resolve_target(args.target, str(args.project))
    except BazelMCPError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(label)
    return 0
