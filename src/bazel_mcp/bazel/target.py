"""
bazel_mcp.bazel.target - Resolve user input to a canonical Bazel label.

Input is either a label already (``//pkg:name``, ``@repo//pkg:name``) or a
file path, absolute or relative to the project root. Paths are handled with
pure path algebra: nothing is read from disk and symlinks are not followed.
"""

from __future__ import annotations

import logging
import os
import posixpath

from bazel_mcp.bazel.errors import (
    InvalidArgumentError,
    OutsideProjectError,
    PathResolutionError,
)

logger = logging.getLogger(__name__)

LABEL_PREFIXES = ("//", "@")


def is_label(identifier: str) -> bool:
    """Return True if *identifier* is already written as a Bazel label."""
    return identifier.startswith(LABEL_PREFIXES)


def normalize_project_root(project_root: str | os.PathLike[str]) -> str:
    """Return *project_root* as an absolute, lexically cleaned path."""
    root = os.fspath(project_root)
    if not root:
        raise InvalidArgumentError("project_path", "project path cannot be empty")
    return os.path.normpath(os.path.abspath(root))


def resolve_target(identifier: str, project_root: str | os.PathLike[str]) -> str:
    """Resolve *identifier* to a canonical Bazel label.

    Args:
        identifier: A Bazel label or a file path (absolute, or relative to
            *project_root*).
        project_root: Directory holding MODULE.bazel or WORKSPACE.

    Returns:
        ``//pkg:name`` for paths (``//:name`` for files at the root), or the
        identifier unchanged when it is already a label.

    Raises:
        InvalidArgumentError: Empty identifier or project root, or a path that
            names the project root itself.
        OutsideProjectError: The path escapes the project root.
        PathResolutionError: No relative path exists between the two.
    """
    if not identifier:
        raise InvalidArgumentError("target", "target input cannot be empty")
    if not os.fspath(project_root):
        raise InvalidArgumentError("project_path", "project path cannot be empty")

    if is_label(identifier):
        logger.debug("Input %r is already a Bazel label", identifier)
        return identifier

    root = normalize_project_root(project_root)
    logger.debug("Resolving %r as a file path relative to project %r", identifier, root)

    if os.path.isabs(identifier):
        abs_target = os.path.normpath(identifier)
    else:
        abs_target = os.path.normpath(os.path.join(root, identifier))

    try:
        rel = os.path.relpath(abs_target, root)
    except ValueError as e:
        # Windows: paths on different drives
        raise PathResolutionError(abs_target, root, e) from e

    if os.path.isabs(rel) or rel.split(os.sep, 1)[0] == os.pardir:
        raise OutsideProjectError(identifier, abs_target, root)
    if rel == os.curdir:
        raise InvalidArgumentError(
            "target", f"{identifier!r} resolves to the project root {root!r}, not a file"
        )

    rel = rel.replace(os.sep, "/")
    directory, base = posixpath.split(rel)

    if directory:
        label = f"//{directory}:{base}"
    else:
        label = f"//:{base}"

    logger.info("Interpreted %r as file path, resolved to %r in project %r", identifier, label, root)
    return label
