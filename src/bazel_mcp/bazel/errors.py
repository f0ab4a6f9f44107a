"""
bazel_mcp.bazel.errors - Error types raised while resolving, planning and running.
"""

from __future__ import annotations

from collections.abc import Sequence


class BazelMCPError(Exception):
    """Base class for all bazel-mcp errors."""


class InvalidArgumentError(BazelMCPError):
    """A required input is empty or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"invalid argument {field!r}: {message}")


class OutsideProjectError(BazelMCPError):
    """A path-like identifier resolves outside the project root."""

    def __init__(self, identifier: str, abs_path: str, project_root: str):
        self.identifier = identifier
        self.abs_path = abs_path
        self.project_root = project_root
        super().__init__(
            f"target path {abs_path!r} (resolved from {identifier!r}) "
            f"is outside the project directory {project_root!r}"
        )


class PathResolutionError(BazelMCPError):
    """The target path could not be expressed relative to the project root."""

    def __init__(self, target_path: str, project_root: str, cause: Exception | None = None):
        self.target_path = target_path
        self.project_root = project_root
        self.cause = cause
        message = f"target path {target_path!r} could not be made relative to {project_root!r}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class CommandExecutionError(BazelMCPError):
    """The bazel subprocess could not be started or exited non-zero.

    ``output`` holds the combined stdout/stderr captured before the failure.
    """

    def __init__(
        self,
        args: Sequence[str],
        output: str,
        returncode: int | None = None,
        reason: str | None = None,
    ):
        self.args_list = list(args)
        self.output = output
        self.returncode = returncode
        if reason is None:
            reason = f"exit status {returncode}"
        super().__init__(f"bazel command failed ({reason})\nArgs: {self.args_list}\nOutput:\n{output}")
