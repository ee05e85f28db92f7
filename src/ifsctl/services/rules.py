"""RuleService — edit the rules and iteration count of a fractal file.

Pipeline for every mutation: LOAD → VALIDATE → REWRITE → SAVE → RESPOND.
The file is written only after the rewrite succeeds, so a rejected edit
never touches disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ifsctl.domain import editor
from ifsctl.domain.grid import GridCellIndex
from ifsctl.domain.models import FractalConfig, TransformRule
from ifsctl.services.base import BaseService
from ifsctl.services.frontier import FrontierService
from ifsctl.services.result import ServiceResult
from ifsctl.services.telemetry import traced


def _rule_payload(index: int, rule: TransformRule, cell: GridCellIndex | None) -> dict[str, Any]:
    item: dict[str, Any] = {
        "index": index,
        "position": list(rule.position),
        "rotation": list(rule.rotation),
        "scale": rule.scale,
    }
    if cell is not None:
        item["cell"] = list(cell)
    return item


class RuleService(BaseService):
    """List, add, update, and remove transform rules."""

    @traced
    def list_rules(self, path: Path, *, step: float | None = None) -> ServiceResult:
        op = "list_rules"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        try:
            frontier = FrontierService(self._settings).compute(config, step=step)
        except ValueError as exc:
            return self._invalid_input(op, exc)
        items = [
            _rule_payload(i, rule, cell)
            for i, (rule, cell) in enumerate(zip(config.rules, frontier.rule_cells, strict=True))
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": config.name,
                "step": frontier.grid.step,
                "count": len(items),
                "items": items,
            },
        )

    @traced
    def add_rule(
        self,
        path: Path,
        *,
        cell: GridCellIndex | None = None,
        step: float | None = None,
    ) -> ServiceResult:
        """Append a rule at frontier *cell*, or the free-form default rule when no cell."""
        op = "add_rule"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        if cell is None:
            rules = editor.append_default_rule(config.rules)
        else:
            frontier_svc = FrontierService(self._settings)
            try:
                frontier = frontier_svc.compute(config, step=step)
            except ValueError as exc:
                return self._invalid_input(op, exc)
            target = frontier.find(cell)
            if target is None:
                return ServiceResult.failure(
                    op,
                    "NOT_IN_FRONTIER",
                    f"Cell {list(cell)} is not an empty cell adjacent to occupied space",
                    cell=list(cell),
                )
            rules = editor.add_rule(config.rules, target.position, frontier.grid.step)

        return self._commit(op, path, config, rules, index=len(rules) - 1)

    @traced
    def remove_rule(self, path: Path, index: int) -> ServiceResult:
        op = "remove_rule"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        try:
            rules = editor.remove_rule(config.rules, index)
        except ValueError as exc:
            return self._invalid_input(op, exc)
        removed = config.rules[index]
        result = self._commit(op, path, config, rules, index=None)
        if not result.ok:
            return result
        data = {**result.data, "removed": _rule_payload(index, removed, None)}
        return result.model_copy(update={"data": data})

    @traced
    def update_rule(
        self,
        path: Path,
        index: int,
        *,
        position: tuple[float, float, float] | None = None,
        rotation: tuple[float, float, float] | None = None,
        scale: float | None = None,
    ) -> ServiceResult:
        op = "update_rule"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        try:
            rules = editor.update_rule(
                config.rules, index, position=position, rotation=rotation, scale=scale
            )
        except ValueError as exc:
            return self._invalid_input(op, exc)
        return self._commit(op, path, config, rules, index=index)

    @traced
    def set_iterations(self, path: Path, iterations: int) -> ServiceResult:
        op = "set_iterations"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None

        try:
            updated = config.with_iterations(iterations)
        except ValueError as exc:
            return self._invalid_input(op, exc)
        failure = self._save(path, updated, op=op)
        if failure is not None:
            return failure
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(path), "previous": config.iterations, "iterations": updated.iterations},
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(
        self,
        op: str,
        path: Path,
        config: FractalConfig,
        rules: tuple[TransformRule, ...],
        *,
        index: int | None,
    ) -> ServiceResult:
        try:
            updated = config.with_rules(rules)
        except ValueError as exc:
            return self._invalid_input(op, exc)
        failure = self._save(path, updated, op=op)
        if failure is not None:
            return failure

        data: dict[str, Any] = {"path": str(path), "rule_count": len(updated.rules)}
        if index is not None:
            data["rule"] = _rule_payload(index, updated.rules[index], None)
        return ServiceResult(ok=True, op=op, data=data)
