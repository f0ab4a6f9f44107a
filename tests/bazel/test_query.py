"""Tests for bazel_mcp.bazel.query - depth parsing and query planning."""

import dataclasses
import logging

import pytest

from bazel_mcp.bazel import InvalidArgumentError, QueryMode, parse_depth, plan_query


class TestPlanReverseDependencies:
    def test_default_is_unlimited(self):
        plan = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//a:b")
        assert plan.expression == "rdeps(//..., //a:b)"
        assert plan.output_format == "graph"
        assert plan.depth == -1

    def test_depth_one_finds_immediate_dependents(self):
        plan = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//a:b", 1)
        assert plan.expression == "rdeps(//..., //a:b, 1)"

    @pytest.mark.parametrize("depth", [0, -1, -7])
    def test_non_positive_depth_is_unlimited(self, depth):
        plan = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//a:b", depth)
        assert plan.expression == "rdeps(//..., //a:b)"

    def test_args(self):
        plan = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//src/app:main.go", 3)
        assert plan.args == ["query", "rdeps(//..., //src/app:main.go, 3)", "--output", "graph"]


class TestPlanDependencies:
    def test_default_depth_is_direct_deps(self):
        plan = plan_query(QueryMode.DEPENDENCIES, "//foo:bar")
        assert plan.expression == "deps('//foo:bar', 1)"
        assert plan.output_format == "label"
        assert plan.depth == 1

    def test_depth_zero_is_target_only(self):
        plan = plan_query(QueryMode.DEPENDENCIES, "//foo:bar", 0)
        assert plan.expression == "deps('//foo:bar', 0)"

    def test_negative_depth_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            plan_query(QueryMode.DEPENDENCIES, "//a:b", -1)
        assert exc_info.value.field == "depth"

    def test_args(self):
        plan = plan_query(QueryMode.DEPENDENCIES, "//foo:bar", 5)
        assert plan.args == ["query", "deps('//foo:bar', 5)", "--output", "label"]


class TestPlanSources:
    def test_expression(self):
        plan = plan_query(QueryMode.SOURCES, "//foo:bar")
        assert plan.expression == "kind('source file', deps('//foo:bar'))"
        assert plan.output_format == "label"

    def test_depth_is_ignored(self):
        assert plan_query(QueryMode.SOURCES, "//foo:bar", 4) == plan_query(QueryMode.SOURCES, "//foo:bar")


class TestPlanBuildAndTest:
    @pytest.mark.parametrize("mode,command", [(QueryMode.BUILD, "build"), (QueryMode.TEST, "test")])
    def test_label_passed_positionally(self, mode, command):
        plan = plan_query(mode, "//path/to/tests/...")
        assert plan.args == [command, "//path/to/tests/..."]
        assert plan.expression is None
        assert plan.output_format is None

    def test_raw_target_not_resolved(self):
        """Build/test take whatever the caller passes."""
        plan = plan_query(QueryMode.BUILD, "src/app/main.go")
        assert plan.args == ["build", "src/app/main.go"]

    @pytest.mark.parametrize("mode", list(QueryMode))
    def test_empty_label_rejected(self, mode):
        with pytest.raises(InvalidArgumentError):
            plan_query(mode, "")


class TestQueryPlan:
    def test_plan_is_immutable(self):
        plan = plan_query(QueryMode.SOURCES, "//foo:bar")
        with pytest.raises(dataclasses.FrozenInstanceError):
            plan.label = "//other:target"

    def test_planning_is_deterministic(self):
        first = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//a:b", 2)
        second = plan_query(QueryMode.REVERSE_DEPENDENCIES, "//a:b", 2)
        assert first == second

    def test_mode_metadata(self):
        assert QueryMode.DEPENDENCIES.default_depth == 1
        assert QueryMode.REVERSE_DEPENDENCIES.default_depth == -1
        assert QueryMode.BUILD.default_depth is None
        assert QueryMode.SOURCES.is_query
        assert not QueryMode.TEST.is_query


class TestParseDepth:
    def test_none_uses_default(self):
        assert parse_depth(None, default=-1) == -1

    def test_int_passthrough(self):
        assert parse_depth(3, default=1) == 3

    def test_integral_float(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bazel_mcp"):
            assert parse_depth(2.0, default=1) == 2
        assert caplog.records == []

    @pytest.mark.parametrize("value,expected", [(2.7, 2), (-2.7, -2), (0.5, 0), (-0.5, 0)])
    def test_truncates_toward_zero(self, value, expected):
        assert parse_depth(value, default=1) == expected

    def test_fractional_value_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bazel_mcp"):
            assert parse_depth(1.5, default=1, field="max_depth") == 1
        assert any("max_depth" in r.getMessage() and "truncated" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("value", ["3", True, [1]])
    def test_wrong_type_falls_back_to_default(self, value, caplog):
        with caplog.at_level(logging.WARNING, logger="bazel_mcp"):
            assert parse_depth(value, default=-1) == -1
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(InvalidArgumentError):
            parse_depth(value, default=1)

    def test_truncated_negative_fraction_is_valid_deps_depth(self):
        """-0.5 truncates to 0, which deps accepts."""
        plan = plan_query(QueryMode.DEPENDENCIES, "//a:b", parse_depth(-0.5, default=1))
        assert plan.expression == "deps('//a:b', 0)"

    def test_fractional_value_appends_note(self):
        notes = []
        assert parse_depth(4.2, default=1, field="max_depth", notes=notes) == 4
        assert notes == ["max_depth received non-integer number 4.2, using truncated value 4"]

    def test_wrong_type_appends_note(self):
        notes = []
        assert parse_depth("3", default=-1, notes=notes) == -1
        assert len(notes) == 1
        assert "using default -1" in notes[0]

    def test_exact_values_append_nothing(self):
        notes = []
        parse_depth(None, default=1, notes=notes)
        parse_depth(2, default=1, notes=notes)
        parse_depth(2.0, default=1, notes=notes)
        assert notes == []
