"""
bazel_mcp.bazel.query - Build the bazel command line for each tool.

``plan_query`` turns a mode, a canonical label and an integer depth into an
immutable ``QueryPlan``. Depth values coming off the wire are cleaned up
first by ``parse_depth``; the planner itself only ever sees ints.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from bazel_mcp.bazel.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# Universe for rdeps queries: every target under the project root.
RDEPS_UNIVERSE = "//..."

DEFAULT_DEPS_DEPTH = 1
DEFAULT_RDEPS_DEPTH = -1


class QueryMode(Enum):
    """The operations the planner knows how to express."""

    DEPENDENCIES = "deps"
    REVERSE_DEPENDENCIES = "reverse-dependencies"
    SOURCES = "sources"
    BUILD = "build"
    TEST = "test"

    @property
    def is_query(self) -> bool:
        return self in (QueryMode.DEPENDENCIES, QueryMode.REVERSE_DEPENDENCIES, QueryMode.SOURCES)

    @property
    def default_depth(self) -> int | None:
        return _DEFAULT_DEPTHS.get(self)


_DEFAULT_DEPTHS = {
    QueryMode.DEPENDENCIES: DEFAULT_DEPS_DEPTH,
    QueryMode.REVERSE_DEPENDENCIES: DEFAULT_RDEPS_DEPTH,
}

_OUTPUT_FORMATS = {
    QueryMode.DEPENDENCIES: "label",
    QueryMode.REVERSE_DEPENDENCIES: "graph",
    QueryMode.SOURCES: "label",
}


@dataclass(frozen=True)
class QueryPlan:
    """A fully assembled bazel invocation.

    For query modes ``expression`` and ``output_format`` are set and
    ``command`` is ``"query"``; for build/test they are None and the label is
    passed positionally.
    """

    mode: QueryMode
    label: str
    command: str
    expression: str | None = None
    output_format: str | None = None
    depth: int | None = None

    @property
    def args(self) -> list[str]:
        """Argument list for the bazel executable (without startup options)."""
        if not self.mode.is_query:
            return [self.command, self.label]
        return [self.command, self.expression, "--output", self.output_format or "label"]


def parse_depth(
    value: Any,
    *,
    default: int,
    field: str = "depth",
    notes: list[str] | None = None,
) -> int:
    """Convert a loosely typed depth value to an int.

    JSON numbers arrive as floats. They are truncated toward zero; a value
    with a fractional part is still accepted but logged. ``None`` means the
    caller left the field out and yields *default*. Values of any other type
    are logged and replaced by *default*.

    Args:
        notes: If given, a message for the caller is appended whenever the
            value used differs from the value received.

    Raises:
        InvalidArgumentError: For NaN or infinite values.
    """
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        message = (
            f"{field} argument was not a number, using default {default}. "
            f"Value received: {value!r}"
        )
        logger.warning("%s (%s)", message, type(value).__name__)
        if notes is not None:
            notes.append(message)
        return default
    if isinstance(value, int):
        return value
    if not math.isfinite(value):
        raise InvalidArgumentError(field, f"must be a finite number, got {value!r}")

    depth = math.trunc(value)
    if depth != value:
        message = f"{field} received non-integer number {value!r}, using truncated value {depth}"
        logger.warning("%s", message)
        if notes is not None:
            notes.append(message)
    return depth


def plan_query(mode: QueryMode, label: str, depth: int | None = None) -> QueryPlan:
    """Assemble the bazel invocation for *mode* on *label*.

    Args:
        mode: Which operation to plan.
        label: Canonical label (query modes) or any label-shaped target
            string (build/test, passed through untouched).
        depth: Search depth for DEPENDENCIES (>= 0, default 1) and
            REVERSE_DEPENDENCIES (> 0 bounds the search, <= 0 is unlimited,
            default -1). Ignored by the other modes.

    Raises:
        InvalidArgumentError: Empty label, or negative dependency depth.
    """
    if not label:
        raise InvalidArgumentError("target", "target cannot be empty")

    if mode is QueryMode.DEPENDENCIES:
        if depth is None:
            depth = DEFAULT_DEPS_DEPTH
        if depth < 0:
            raise InvalidArgumentError("depth", f"depth argument cannot be negative, got {depth}")
        expression = f"deps('{label}', {depth})"
    elif mode is QueryMode.REVERSE_DEPENDENCIES:
        if depth is None:
            depth = DEFAULT_RDEPS_DEPTH
        if depth > 0:
            expression = f"rdeps({RDEPS_UNIVERSE}, {label}, {depth})"
        else:
            expression = f"rdeps({RDEPS_UNIVERSE}, {label})"
    elif mode is QueryMode.SOURCES:
        depth = None
        expression = f"kind('source file', deps('{label}'))"
    else:
        return QueryPlan(mode=mode, label=label, command=mode.value)

    return QueryPlan(
        mode=mode,
        label=label,
        command="query",
        expression=expression,
        output_format=_OUTPUT_FORMATS[mode],
        depth=depth,
    )
