"""
bazel_mcp.commands.config_cmd - Show, locate or create the configuration file.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from bazel_mcp.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    find_config_file,
    get_config,
    write_default_config,
)


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)
    if action == "show":
        return _show(args)
    if action == "path":
        return _path(args)
    if action == "init":
        return _init(args)
    print("Usage: bazel-mcp config {show,path,init}", file=sys.stderr)
    return 1


def _show(args: argparse.Namespace) -> int:
    try:
        config = get_config(config_path=args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(config, indent=2))
    return 0


def _path(args: argparse.Namespace) -> int:
    path = args.config or find_config_file()
    if path is None:
        print(f"No {CONFIG_FILE_NAME} found (using defaults)", file=sys.stderr)
        return 1
    print(path)
    return 0


def _init(args: argparse.Namespace) -> int:
    target = Path(args.path) if args.path else Path.cwd() / CONFIG_FILE_NAME
    try:
        written = write_default_config(target, force=args.force)
    except FileExistsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not args.quiet:
        print(f"Created {written}")
    return 0
