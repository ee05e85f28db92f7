"""Tests for the bounded instance generator."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from ifsctl.domain.generator import MAX_INSTANCES, expected_instance_count, generate_instances
from ifsctl.domain.models import TransformRule
from ifsctl.domain.transforms import build_local_transform

UP = TransformRule(position=(0.0, 0.5, 0.0), scale=0.5)
SIDE = TransformRule(position=(0.5, 0.0, 0.0), rotation=(0.0, 0.4, 0.0), scale=0.4)
DOWN = TransformRule(position=(0.0, -0.5, 0.0), rotation=(0.2, 0.0, 0.1), scale=0.3)


class TestCounts:
    @pytest.mark.parametrize(
        ("rule_count", "iterations"),
        [(0, 0), (0, 5), (1, 0), (1, 4), (2, 3), (3, 4), (4, 2)],
    )
    def test_total_is_geometric_sum(self, rule_count: int, iterations: int) -> None:
        rules = [UP, SIDE, DOWN, UP][:rule_count]
        result = generate_instances(rules, iterations)
        assert result.count == expected_instance_count(rule_count, iterations)
        assert result.count == sum(rule_count**k for k in range(iterations + 1))
        assert not result.truncated

    def test_level_counts(self) -> None:
        result = generate_instances([UP, SIDE, DOWN], 3)
        assert result.level_counts == [1, 3, 9, 27]
        assert result.completed_levels == 3

    def test_zero_iterations_is_root_only(self) -> None:
        result = generate_instances([UP, SIDE], 0)
        assert result.count == 1
        assert np.allclose(result.transforms[0], np.eye(4))

    def test_no_rules_is_root_only(self) -> None:
        result = generate_instances([], 10)
        assert result.count == 1
        assert result.level_counts == [1]
        assert not result.truncated

    def test_shape(self) -> None:
        result = generate_instances([UP, SIDE], 2)
        assert result.transforms.shape == (7, 4, 4)


class TestOrdering:
    def test_root_then_rules_in_order(self) -> None:
        result = generate_instances([UP, SIDE], 1)
        assert np.allclose(result.transforms[0], np.eye(4))
        assert np.allclose(result.transforms[1], build_local_transform(UP))
        assert np.allclose(result.transforms[2], build_local_transform(SIDE))

    def test_parent_major_order(self) -> None:
        result = generate_instances([UP, SIDE], 2)
        locals_ = [build_local_transform(UP), build_local_transform(SIDE)]
        level2 = result.transforms[3:]
        expected = [p @ c for p in locals_ for c in locals_]
        assert len(level2) == 4
        for got, want in zip(level2, expected, strict=True):
            assert np.allclose(got, want)

    def test_deterministic(self) -> None:
        a = generate_instances([UP, SIDE, DOWN], 4)
        b = generate_instances([UP, SIDE, DOWN], 4)
        assert np.array_equal(a.transforms, b.transforms)

    def test_single_rule_chain(self) -> None:
        result = generate_instances([UP], 2)
        assert result.count == 3
        level2 = result.transforms[2]
        assert np.allclose(level2[:3, 3], (0.0, 0.75, 0.0))
        assert math.isclose(level2[0, 0], 0.25)


class TestCap:
    def test_never_exceeds_cap(self) -> None:
        rules = [UP, SIDE, DOWN, UP]
        for cap in (1, 4, 5, 20, 21, 22, 100):
            result = generate_instances(rules, 6, max_instances=cap)
            assert result.count <= cap

    def test_stops_before_overflowing_level(self) -> None:
        # 1 + 3 + 9 = 13 fits; adding 27 would give 40.
        result = generate_instances([UP, SIDE, DOWN], 5, max_instances=20)
        assert result.count == 13
        assert result.level_counts == [1, 3, 9]
        assert result.truncated
        assert result.requested_iterations == 5

    def test_exact_fit_is_not_truncated(self) -> None:
        result = generate_instances([UP, SIDE, DOWN], 2, max_instances=13)
        assert result.count == 13
        assert not result.truncated

    def test_cap_of_one_yields_root(self) -> None:
        result = generate_instances([UP], 3, max_instances=1)
        assert result.count == 1
        assert result.truncated

    def test_truncation_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="ifsctl.domain.generator"):
            generate_instances([UP, SIDE], 10, max_instances=10)
        assert "Max instances reached" in caplog.text

    def test_default_cap(self) -> None:
        assert MAX_INSTANCES == 100_000
        result = generate_instances([UP, SIDE, DOWN, UP], 10)
        assert result.count <= MAX_INSTANCES
        assert result.truncated


class TestValidation:
    @pytest.mark.parametrize("iterations", [-1, 1.5, True, "3"])
    def test_bad_iterations(self, iterations: object) -> None:
        with pytest.raises(ValueError, match="iterations"):
            generate_instances([UP], iterations)  # type: ignore[arg-type]

    def test_bad_cap(self) -> None:
        with pytest.raises(ValueError, match="max_instances"):
            generate_instances([UP], 1, max_instances=0)

    def test_invalid_rule_rejected_before_expansion(self) -> None:
        bad = TransformRule.model_construct(position=(0.0, 0.0, 0.0), rotation=(0.0, 0.0, 0.0), scale=-1.0)
        with pytest.raises(ValueError, match="positive"):
            generate_instances([UP, bad], 0)


class TestExpectedCount:
    def test_values(self) -> None:
        assert expected_instance_count(0, 7) == 1
        assert expected_instance_count(1, 7) == 8
        assert expected_instance_count(2, 3) == 15
        assert expected_instance_count(3, 4) == 121
