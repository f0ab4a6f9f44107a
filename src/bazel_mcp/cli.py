"""
bazel_mcp.cli - Command-line interface.

Main entry point for the bazel-mcp CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from bazel_mcp import __version__
from bazel_mcp.commands import config_cmd, query_cmd, resolve_cmd
from bazel_mcp.config import get_config
from bazel_mcp.config.defaults import TRANSPORTS
from bazel_mcp.logging_config import configure_logging
from bazel_mcp.mcp.tools import TOOL_SPECS


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bazel-mcp",
        description="MCP server for Bazel dependency queries, builds and tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bazel-mcp serve                                  # Run the MCP server on stdio
  bazel-mcp resolve src/app/main.go --project .    # Path -> //src/app:main.go
  bazel-mcp plan reverse-dependencies //a:b --depth 1
  bazel-mcp run deps //foo:bar --project ~/repo    # Run a tool from the shell

Configuration:
  bazel-mcp config init         # Create .bazel-mcp.toml in current directory
  bazel-mcp config path         # Show config file location
  bazel-mcp config show         # View effective settings

For detailed command help: bazel-mcp <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"bazel-mcp {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the MCP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Claude Desktop / MCP client configuration:

    {
      "mcpServers": {
        "bazel": {
          "command": "bazel-mcp",
          "args": ["serve"]
        }
      }
    }

Tools:
  reverse-dependencies  Targets that depend on a target or file
  deps                  Dependencies of a target
  sources               Source files of a target
  build                 bazel build <target>
  test                  bazel test <target>
""",
    )
    serve_parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=None,
        help="Transport type (default: from config, usually stdio)",
    )

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Convert a file path or label to a canonical Bazel label",
    )
    resolve_parser.add_argument("target", help="Bazel label or file path")
    _add_project_argument(resolve_parser)

    # plan / run commands
    for name, help_text in (
        ("plan", "Show the bazel command a tool would execute"),
        ("run", "Execute a tool and print bazel's output"),
    ):
        tool_parser = subparsers.add_parser(name, help=help_text)
        tool_parser.add_argument("tool", choices=list(TOOL_SPECS), help="Tool name")
        tool_parser.add_argument("target", help="Bazel label or file path")
        _add_project_argument(tool_parser)
        tool_parser.add_argument(
            "--depth",
            type=float,
            default=None,
            help="Depth for deps (default 1) or reverse-dependencies (default -1, unlimited)",
        )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View and create configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("show", help="Show effective configuration as JSON")
    config_subparsers.add_parser("path", help="Show config file location")
    init_parser = config_subparsers.add_parser("init", help="Create a default config file")
    init_parser.add_argument(
        "--path",
        type=Path,
        default=None,
        help="Where to write the file (default: ./.bazel-mcp.toml)",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file",
    )

    return parser


def _add_project_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        type=Path,
        default=Path.cwd(),
        help="Where MODULE.bazel or WORKSPACE is located (default: current directory)",
        metavar="PATH",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install bazel-mcp[completion]
    # Then activate: eval "$(register-python-argcomplete bazel-mcp)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        _setup_logging(args)

        if args.command == "serve":
            return serve_command(args)
        elif args.command == "resolve":
            return resolve_cmd.run(args)
        elif args.command == "plan":
            return query_cmd.run_plan(args)
        elif args.command == "run":
            return query_cmd.run_tool(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _setup_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        config = get_config(config_path=args.config, start_path=getattr(args, "project", None))
        configure_logging(config["logging"]["level"])


def serve_command(args: argparse.Namespace) -> int:
    """Handle the serve command."""
    from bazel_mcp.mcp.server import run_server

    config = get_config(config_path=args.config)
    transport = args.transport or config["server"]["transport"]

    # stdout belongs to the stdio transport
    print("Starting bazel-mcp server...", file=sys.stderr)
    print(f"Transport: {transport}", file=sys.stderr)

    try:
        run_server(config=config, transport=transport)
    except KeyboardInterrupt:
        print("\nServer stopped.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
