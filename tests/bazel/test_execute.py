"""Tests for bazel_mcp.bazel.execute, driven by fake bazel scripts."""

import asyncio
import os
import sys
import time

import pytest

from bazel_mcp.bazel import BazelRunner, CommandExecutionError, QueryMode, plan_query, run_bazel

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake bazel is a shell script")


class TestRunBazel:
    def test_returns_combined_output(self, fake_bazel, project_root):
        output = asyncio.run(
            run_bazel(["query", "//..."], project_root, executable=str(fake_bazel))
        )
        assert f"cwd: {os.path.realpath(project_root)}" in output
        assert "args: query //..." in output
        assert "note: from stderr" in output

    def test_startup_options_precede_args(self, fake_bazel, project_root):
        output = asyncio.run(
            run_bazel(
                ["build", "//a:b"],
                project_root,
                executable=str(fake_bazel),
                startup_options=["--batch"],
            )
        )
        assert "args: --batch build //a:b" in output

    def test_non_zero_exit_raises_with_output(self, failing_bazel, project_root):
        with pytest.raises(CommandExecutionError) as exc_info:
            asyncio.run(run_bazel(["build", "//nope:x"], project_root, executable=str(failing_bazel)))

        error = exc_info.value
        assert error.returncode == 1
        assert error.args_list == ["build", "//nope:x"]
        assert "Loading: 0 packages loaded" in error.output
        assert "ERROR: no such package 'nope'" in error.output
        assert "ERROR: no such package 'nope'" in str(error)

    def test_missing_executable(self, tmp_path):
        with pytest.raises(CommandExecutionError) as exc_info:
            asyncio.run(
                run_bazel(["info"], tmp_path, executable=str(tmp_path / "no-such-bazel"))
            )
        assert exc_info.value.returncode is None
        assert "could not start" in str(exc_info.value)

    def test_cancellation_kills_the_process(self, sleeping_bazel, tmp_path):
        script, pid_file = sleeping_bazel

        async def scenario():
            task = asyncio.create_task(run_bazel(["test", "//..."], tmp_path, executable=str(script)))
            deadline = time.monotonic() + 10
            while not pid_file.exists() or not pid_file.read_text().strip():
                if time.monotonic() > deadline:
                    raise AssertionError("fake bazel never started")
                await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(scenario())

        pid = int(pid_file.read_text().strip())
        with pytest.raises(ProcessLookupError):
            os.kill(pid, 0)


class TestBazelRunner:
    def test_from_config(self):
        runner = BazelRunner.from_config(
            {"bazel": {"executable": "bazelisk", "startup_options": ["--nohome_rc"]}}
        )
        assert runner.executable == "bazelisk"
        assert runner.startup_options == ["--nohome_rc"]

    def test_from_empty_config_uses_defaults(self):
        runner = BazelRunner.from_config({})
        assert runner.executable == "bazel"
        assert runner.startup_options == []

    def test_runs_plan_args(self, fake_bazel, project_root):
        runner = BazelRunner(executable=str(fake_bazel))
        plan = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//src/app:main.go", 1)
        output = asyncio.run(runner.run(plan, str(project_root)))
        assert "args: query rdeps(//..., //src/app:main.go, 1) --output graph" in output
