"""
bazel_mcp.bazel.execute - Run bazel as a subprocess.

The child's stdout and stderr are merged into one stream so callers see
build and test failures exactly as bazel printed them.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Sequence

from bazel_mcp.bazel.errors import CommandExecutionError
from bazel_mcp.bazel.query import QueryPlan

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "bazel"


async def run_bazel(
    args: Sequence[str],
    working_dir: str | os.PathLike[str],
    *,
    executable: str = DEFAULT_EXECUTABLE,
    startup_options: Sequence[str] = (),
    env: dict[str, str] | None = None,
) -> str:
    """Run ``executable [startup_options] args`` in *working_dir*.

    Returns:
        Combined stdout/stderr text.

    Raises:
        CommandExecutionError: The executable could not be started, or it
            exited non-zero (the captured output is attached).
        asyncio.CancelledError: The awaiting task was cancelled. The child
            process is killed before this propagates.
    """
    argv = [executable, *startup_options, *args]
    logger.info("Executing bazel command with args: %s in directory: [%s]", list(args), working_dir)

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            cwd=os.fspath(working_dir),
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as e:
        raise CommandExecutionError(args, "", reason=f"could not start {executable!r}: {e}") from e

    try:
        stdout, _ = await proc.communicate()
    except asyncio.CancelledError:
        logger.info("Bazel command cancelled, terminating pid %s", proc.pid)
        if proc.returncode is None:
            proc.kill()
        await proc.wait()
        raise

    output = stdout.decode("utf-8", errors="replace") if stdout else ""
    if proc.returncode != 0:
        logger.warning("Bazel command %s exited with status %s", list(args), proc.returncode)
        raise CommandExecutionError(args, output, returncode=proc.returncode)
    return output


class BazelRunner:
    """Executes query plans with a fixed executable and startup options."""

    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        startup_options: Sequence[str] = (),
    ):
        self.executable = executable
        self.startup_options = list(startup_options)

    @classmethod
    def from_config(cls, config: dict) -> BazelRunner:
        bazel = config.get("bazel", {})
        return cls(
            executable=bazel.get("executable", DEFAULT_EXECUTABLE),
            startup_options=bazel.get("startup_options", []),
        )

    async def run(self, plan: QueryPlan, project_root: str | os.PathLike[str]) -> str:
        return await run_bazel(
            plan.args,
            project_root,
            executable=self.executable,
            startup_options=self.startup_options,
        )
