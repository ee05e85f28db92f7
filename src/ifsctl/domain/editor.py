"""Rule set editing — pure rewrites of an ordered rules sequence.

Every function returns a new tuple and leaves its input untouched.  None of
them revalidate the rest of the rule set; the next frontier computation
reflects the change.
"""

from __future__ import annotations

from collections.abc import Sequence

from ifsctl.domain.models import ZERO3, TransformRule

DEFAULT_FREE_RULE = TransformRule(position=(0.0, 1.0, 0.0), rotation=ZERO3, scale=0.5)


def _check_index(rules: Sequence[TransformRule], index: int) -> None:
    if not 0 <= index < len(rules):
        msg = f"Rule index {index} out of range (0..{len(rules) - 1})"
        raise ValueError(msg)


def add_rule(
    rules: Sequence[TransformRule],
    position: tuple[float, float, float],
    step: float,
) -> tuple[TransformRule, ...]:
    """Append a rule at *position* with zero rotation and scale *step*."""
    new_rule = TransformRule(position=tuple(position), rotation=ZERO3, scale=step)
    return (*rules, new_rule)


def append_default_rule(rules: Sequence[TransformRule]) -> tuple[TransformRule, ...]:
    """Append the free-form default rule (one unit up, half scale)."""
    return (*rules, DEFAULT_FREE_RULE)


def remove_rule(rules: Sequence[TransformRule], index: int) -> tuple[TransformRule, ...]:
    _check_index(rules, index)
    return tuple(rule for i, rule in enumerate(rules) if i != index)


def update_rule(
    rules: Sequence[TransformRule],
    index: int,
    *,
    position: tuple[float, float, float] | None = None,
    rotation: tuple[float, float, float] | None = None,
    scale: float | None = None,
) -> tuple[TransformRule, ...]:
    """Replace the given fields of one rule; omitted fields are kept."""
    _check_index(rules, index)
    current = rules[index]
    replaced = TransformRule(
        position=tuple(position) if position is not None else current.position,
        rotation=tuple(rotation) if rotation is not None else current.rotation,
        scale=scale if scale is not None else current.scale,
    )
    return tuple(replaced if i == index else rule for i, rule in enumerate(rules))
