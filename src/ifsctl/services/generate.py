"""GenerateService — run the instance generator over a fractal file.

The instance cap is resolved per call: an explicit ``max_instances``
argument wins, then the fractal's own ``maxInstances`` field, then
``[generator] max_instances`` from settings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ifsctl.domain.generator import GenerationResult, expected_instance_count, generate_instances
from ifsctl.domain.models import FractalConfig
from ifsctl.infrastructure.filesystem import save_transforms
from ifsctl.services.base import BaseService
from ifsctl.services.result import ServiceResult
from ifsctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class GenerateService(BaseService):
    """Expand fractal rule sets into instance transforms."""

    @traced
    def generate(
        self,
        path: Path,
        *,
        iterations: int | None = None,
        max_instances: int | None = None,
        include_matrices: bool = False,
        save_path: Path | None = None,
    ) -> ServiceResult:
        """Load *path* and generate its instances."""
        op = "generate"
        config, failure = self._load(path, op=op)
        if failure is not None:
            return failure
        assert config is not None
        return self._run(
            config,
            op=op,
            iterations=iterations,
            max_instances=max_instances,
            include_matrices=include_matrices,
            save_path=save_path,
        )

    @traced
    def generate_config(
        self,
        config: FractalConfig,
        *,
        iterations: int | None = None,
        max_instances: int | None = None,
        include_matrices: bool = False,
    ) -> ServiceResult:
        """Generate instances for an in-memory config."""
        return self._run(
            config,
            op="generate",
            iterations=iterations,
            max_instances=max_instances,
            include_matrices=include_matrices,
            save_path=None,
        )

    def resolve_cap(self, config: FractalConfig, override: int | None = None) -> int:
        if override is not None:
            return override
        if config.max_instances is not None:
            return config.max_instances
        return self._settings.generator.max_instances

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(
        self,
        config: FractalConfig,
        *,
        op: str,
        iterations: int | None,
        max_instances: int | None,
        include_matrices: bool,
        save_path: Path | None,
    ) -> ServiceResult:
        warnings: list[str] = []
        depth = config.iterations if iterations is None else iterations
        cap = self.resolve_cap(config, max_instances)

        with trace_span("generate_instances") as span:
            try:
                result = generate_instances(config.rules, depth, max_instances=cap)
            except ValueError as exc:
                return self._invalid_input(op, exc)
            if span:
                span.annotate(count=result.count, levels=result.completed_levels)

        if result.truncated:
            warnings.append(
                f"Instance cap {cap} reached: stopped after level "
                f"{result.completed_levels} of {depth}"
            )

        data = _summary(config, result, cap=cap)
        if include_matrices:
            data["instances"] = result.transforms.tolist()
        if save_path is not None:
            with trace_span("save_transforms", path=str(save_path)):
                try:
                    written = save_transforms(save_path, result.transforms)
                except OSError as exc:
                    return ServiceResult.failure(op, "IO_ERROR", f"Cannot write {save_path}: {exc}")
            data["saved"] = str(written)

        logger.debug("Generated %d instances for %r", result.count, config.name)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)


def _summary(config: FractalConfig, result: GenerationResult, *, cap: int) -> dict[str, Any]:
    return {
        "name": config.name,
        "base_shape": config.base_shape.value,
        "color": config.color,
        "rule_count": len(config.rules),
        "iterations": result.requested_iterations,
        "completed_levels": result.completed_levels,
        "count": result.count,
        "expected_count": expected_instance_count(len(config.rules), result.requested_iterations),
        "level_counts": result.level_counts,
        "max_instances": cap,
        "truncated": result.truncated,
    }
