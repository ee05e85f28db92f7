"""Fractal data model — TransformRule, FractalConfig, BaseShape.

Field names are snake_case in Python and camelCase on the wire
(``baseShape``, ``maxInstances``).  Models are frozen: a config is changed
by building a new value with ``model_copy(update=...)``, never in place.

INVARIANT: every TransformRule that reaches the generator or the frontier
engine holds finite reals and a strictly positive scale.  Validation happens
here, at the boundary, not inside the algorithms.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import AllowInfNan, BaseModel, Field, Strict

FiniteReal = Annotated[float, Strict(), AllowInfNan(False)]
Vector3 = tuple[FiniteReal, FiniteReal, FiniteReal]

ZERO3: Vector3 = (0.0, 0.0, 0.0)


class BaseShape(StrEnum):
    """Shape instanced at every node.  Opaque to the generator."""

    BOX = "box"
    SPHERE = "sphere"
    PYRAMID = "pyramid"


class TransformRule(BaseModel):
    """One child placement relative to a unit-size parent centred at the origin."""

    model_config = {"frozen": True, "extra": "ignore"}

    position: Vector3 = ZERO3
    rotation: Vector3 = ZERO3
    scale: Annotated[FiniteReal, Field(gt=0)] = 0.5


class FractalConfig(BaseModel):
    """Aggregate unit of generation and persistence.

    Unknown wire fields are ignored so newer files still load.
    """

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    name: str = "Sand Castle Base"
    description: str = "An empty plot ready for your sand structures."
    base_shape: BaseShape = Field(default=BaseShape.BOX, alias="baseShape")
    color: str = "#e6c288"
    rules: tuple[TransformRule, ...] = ()
    iterations: Annotated[int, Strict(), Field(ge=0)] = 4
    max_instances: Annotated[int, Strict(), Field(gt=0)] | None = Field(
        default=None, alias="maxInstances"
    )

    def with_rules(self, rules: tuple[TransformRule, ...]) -> FractalConfig:
        """Return a copy with *rules* replaced (validated)."""
        return FractalConfig.model_validate({**self.to_wire(), "rules": list(rules)})

    def with_iterations(self, iterations: int) -> FractalConfig:
        """Return a copy with *iterations* replaced (validated)."""
        return FractalConfig.model_validate({**self.to_wire(), "iterations": iterations})

    def to_wire(self) -> dict[str, object]:
        """Serialize to the camelCase wire object."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DEFAULT_CONFIG = FractalConfig()
