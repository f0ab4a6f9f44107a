"""
bazel_mcp.config - Configuration loading and defaults
"""

from bazel_mcp.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG
from bazel_mcp.config.loader import (
    ConfigError,
    _try_parse_env_value,
    apply_env_overrides,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml_document,
    write_default_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "DEFAULT_CONFIG",
    "apply_env_overrides",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml_document",
    "write_default_config",
]
