"""Fractal instance generator — bounded level-by-level IFS expansion.

Level 0 is the root (identity).  Level ``n`` holds one transform per path of
``n`` rule applications, grouped parent-then-rule.  The whole result is
returned as a single ``(N, 4, 4)`` array in that order.

INVARIANT: the returned count never exceeds ``max_instances``.  Before a level
is expanded the projected total ``accumulated + level_size * rule_count`` is
checked; if it would exceed the cap, expansion stops and the completed levels
are returned.  Truncation is a normal outcome, not an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from ifsctl.domain.models import TransformRule
from ifsctl.domain.transforms import build_local_transform, compose, identity

logger = logging.getLogger(__name__)

MAX_INSTANCES = 100_000


@dataclass(frozen=True)
class GenerationResult:
    """Transforms for every generated instance plus expansion bookkeeping."""

    transforms: np.ndarray
    level_counts: list[int] = field(default_factory=list)
    requested_iterations: int = 0
    truncated: bool = False

    @property
    def count(self) -> int:
        return int(self.transforms.shape[0])

    @property
    def completed_levels(self) -> int:
        """Deepest level included in the result (0 = root only)."""
        return len(self.level_counts) - 1


def generate_instances(
    rules: Sequence[TransformRule],
    iterations: int,
    *,
    max_instances: int = MAX_INSTANCES,
) -> GenerationResult:
    """Expand the identity root through *iterations* levels of *rules*.

    Raises:
        ValueError: on negative or non-integer *iterations*, a non-positive
            cap, or non-finite rule fields.  Nothing is computed in that case.
    """
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        msg = f"iterations must be an integer, got {iterations!r}"
        raise ValueError(msg)
    if iterations < 0:
        msg = f"iterations must be >= 0, got {iterations}"
        raise ValueError(msg)
    if max_instances < 1:
        msg = f"max_instances must be >= 1, got {max_instances}"
        raise ValueError(msg)

    # Validates every rule before any expansion happens.
    locals_ = np.array([build_local_transform(rule) for rule in rules], dtype=np.float64)
    rule_count = len(rules)

    current = identity()[np.newaxis]
    levels: list[np.ndarray] = [current]
    total = 1
    truncated = False

    for level in range(1, iterations + 1):
        if rule_count == 0:
            break
        projected = total + current.shape[0] * rule_count
        if projected > max_instances:
            logger.warning(
                "Max instances reached at level %d (projected %d > %d); stopping expansion",
                level,
                projected,
                max_instances,
            )
            truncated = True
            break

        # (parents, 1, 4, 4) @ (1, rules, 4, 4) -> parent-major, rule-minor order
        current = compose(current[:, np.newaxis], locals_[np.newaxis]).reshape(-1, 4, 4)
        levels.append(current)
        total = projected

    return GenerationResult(
        transforms=np.concatenate(levels, axis=0),
        level_counts=[lvl.shape[0] for lvl in levels],
        requested_iterations=iterations,
        truncated=truncated,
    )


def expected_instance_count(rule_count: int, iterations: int) -> int:
    """Uncapped total ``1 + r + r^2 + ... + r^n``."""
    if rule_count == 0:
        return 1
    if rule_count == 1:
        return iterations + 1
    return (rule_count ** (iterations + 1) - 1) // (rule_count - 1)
