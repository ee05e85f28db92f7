"""FrontierService — occupied cells and addable frontier for a rule set."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ifsctl.domain.frontier import FrontierResult, compute_frontier
from ifsctl.domain.models import FractalConfig
from ifsctl.services.base import BaseService
from ifsctl.services.result import ServiceResult
from ifsctl.services.telemetry import trace_span, traced


class FrontierService(BaseService):
    """Grid-snapped editing support: where can the next rule go?"""

    @traced
    def frontier(self, path: Path, *, step: float | None = None) -> ServiceResult:
        op = "frontier"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None
        return self.frontier_config(config, step=step)

    def frontier_config(self, config: FractalConfig, *, step: float | None = None) -> ServiceResult:
        op = "frontier"
        try:
            result = self.compute(config, step=step)
        except ValueError as exc:
            return self._invalid_input(op, exc)
        return ServiceResult(ok=True, op=op, data=frontier_payload(result))

    def compute(self, config: FractalConfig, *, step: float | None = None) -> FrontierResult:
        """Run the frontier engine with settings defaults.  Raises ValueError."""
        with trace_span("compute_frontier") as span:
            result = compute_frontier(
                config.rules,
                self.resolve_step(step),
                tolerance=self._settings.grid.tolerance,
            )
            if span:
                span.annotate(occupied=len(result.occupied), frontier=len(result.frontier))
        return result

    def resolve_step(self, step: float | None) -> float:
        return self._settings.grid.step if step is None else step


def frontier_payload(result: FrontierResult) -> dict[str, Any]:
    return {
        "step": result.grid.step,
        "offset": result.grid.offset,
        "occupied_count": len(result.occupied),
        "parent_cell_count": len(result.parent_cells),
        "rule_cells": [list(cell) for cell in result.rule_cells],
        "frontier_count": len(result.frontier),
        "frontier": [
            {"id": cell.key, "index": list(cell.index), "position": list(cell.position)}
            for cell in result.frontier
        ],
    }
