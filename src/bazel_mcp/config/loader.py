"""
bazel_mcp.config.loader - Find, load and merge configuration.

Precedence, lowest first: DEFAULT_CONFIG, the .bazel-mcp.toml file,
BAZEL_MCP_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from bazel_mcp.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG, ENV_PREFIX


class ConfigError(Exception):
    """Configuration file could not be read or parsed."""


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find .bazel-mcp.toml in *start_path* or any parent directory.

    Returns:
        Path to the config file, or None if not found.
    """
    current = Path(start_path or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def parse_toml_document(text: str) -> tomlkit.TOMLDocument:
    """Parse TOML text, raising ConfigError on syntax errors."""
    try:
        return tomlkit.parse(text)
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge *override* into a copy of *base*.

    Nested tables merge key by key; any other value in *override* replaces
    the base value.
    """
    result = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file and merge it over the defaults.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    data = parse_toml_document(text).unwrap()
    return merge_configs(DEFAULT_CONFIG, data)


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment variable value into a typed Python value.

    JSON arrays and objects, ``true``/``false`` and numbers are converted;
    everything else (including malformed JSON) is returned as a string.
    """
    stripped = value.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return _try_parse_numeric(stripped, value)


def _try_parse_numeric(stripped: str, original: str) -> Any:
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return original


def apply_env_overrides(
    config: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Apply BAZEL_MCP_<SECTION>_<KEY> overrides.

    Only sections that already exist in *config* are matched, so
    ``BAZEL_MCP_BAZEL_STARTUP_OPTIONS`` maps to ``bazel.startup_options``.
    """
    if environ is None:
        environ = os.environ
    result = copy.deepcopy(dict(config))
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        rest = name[len(ENV_PREFIX) :].lower()
        for section, table in result.items():
            if not isinstance(table, dict) or not rest.startswith(section + "_"):
                continue
            key = rest[len(section) + 1 :]
            if key:
                table[key] = _try_parse_env_value(raw)
            break
    return result


def get_config(
    start_path: Path | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the effective configuration.

    Args:
        start_path: Where to start looking for .bazel-mcp.toml.
        config_path: Explicit config file; skips the search.
        environ: Environment mapping (defaults to os.environ).
    """
    if config_path is None:
        config_path = find_config_file(start_path)
    if config_path is not None:
        config = load_config(config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)
    return apply_env_overrides(config, environ)


def write_default_config(path: Path, force: bool = False) -> Path:
    """Write a commented default config file.

    Raises:
        FileExistsError: If *path* exists and *force* is False.
    """
    if path.exists() and not force:
        raise FileExistsError(f"{path} already exists (use --force to overwrite)")

    doc = tomlkit.document()
    doc.add(tomlkit.comment("bazel-mcp configuration"))
    doc.add(tomlkit.nl())

    bazel = tomlkit.table()
    bazel.add("executable", DEFAULT_CONFIG["bazel"]["executable"])
    bazel["executable"].comment("or bazelisk")
    options = tomlkit.array()
    options.comment('e.g. ["--output_user_root=/tmp/bazel"]')
    bazel.add("startup_options", options)
    doc.add("bazel", bazel)

    server = tomlkit.table()
    server.add("name", DEFAULT_CONFIG["server"]["name"])
    server.add("transport", DEFAULT_CONFIG["server"]["transport"])
    server["transport"].comment("stdio | sse | streamable-http")
    doc.add("server", server)

    logging_table = tomlkit.table()
    logging_table.add("level", DEFAULT_CONFIG["logging"]["level"])
    doc.add("logging", logging_table)

    path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return path
