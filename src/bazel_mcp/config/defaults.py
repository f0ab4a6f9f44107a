"""
bazel_mcp.config.defaults - Default configuration values.
"""

CONFIG_FILE_NAME = ".bazel-mcp.toml"

ENV_PREFIX = "BAZEL_MCP_"

DEFAULT_CONFIG = {
    "bazel": {
        # "bazelisk" works too
        "executable": "bazel",
        "startup_options": [],
    },
    "server": {
        "name": "bazel-mcp",
        "transport": "stdio",
    },
    "logging": {
        "level": "INFO",
    },
}

TRANSPORTS = ("stdio", "sse", "streamable-http")
