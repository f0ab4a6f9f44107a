"""Shared pytest fixtures."""

import logging
import os
import stat
from pathlib import Path

import pytest


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def project_root(tmp_path):
    """A Bazel-shaped project tree: myproject/{MODULE.bazel,BUILD.bazel,src/app/main.go}."""
    root = tmp_path / "myproject"
    (root / "src" / "app").mkdir(parents=True)
    (root / "MODULE.bazel").write_text('module(name = "myproject")\n')
    (root / "BUILD.bazel").write_text("")
    (root / "src" / "app" / "main.go").write_text("package main\n")
    return root


@pytest.fixture
def fake_bazel(tmp_path):
    """Executable that echoes its working directory and args, plus a stderr line."""
    return _write_script(
        tmp_path / "fake-bazel",
        'echo "cwd: $(pwd -P)"\necho "args: $*"\necho "note: from stderr" >&2\n',
    )


@pytest.fixture
def failing_bazel(tmp_path):
    """Executable that reports an error on stderr and exits 1."""
    return _write_script(
        tmp_path / "failing-bazel",
        "echo \"Loading: 0 packages loaded\"\n"
        "echo \"ERROR: no such package 'nope': BUILD file not found\" >&2\n"
        "exit 1\n",
    )


@pytest.fixture
def sleeping_bazel(tmp_path):
    """Executable that records its pid in ./pid and then sleeps."""
    pid_file = tmp_path / "pid"
    script = _write_script(
        tmp_path / "sleeping-bazel",
        f'echo $$ > "{pid_file}"\nexec sleep 30\n',
    )
    return script, pid_file


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handler and level changes made by configure_logging()."""
    logger = logging.getLogger("bazel_mcp")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BAZEL_MCP_* variables inherited from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("BAZEL_MCP_"):
            monkeypatch.delenv(name)
