"""BaseService — abstract foundation for all ifsctl services.

Every service receives the resolved :class:`IfsSettings` at construction
time.  Services own file access: they load a fractal file through the codec,
run the pure domain functions, and write results back only on success.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ifsctl.domain.codec import InvalidFormatError, dump_config_json, load_config_json
from ifsctl.infrastructure.filesystem import read_text_file, write_text_file
from ifsctl.services.result import ServiceResult

if TYPE_CHECKING:
    from ifsctl.config.settings import IfsSettings
    from ifsctl.domain.models import FractalConfig

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class GenerateService(BaseService):
            def generate(self, path: Path) -> ServiceResult:
                config, failure = self._load(path, op="generate")
                if failure is not None:
                    return failure
                ...
    """

    def __init__(self, settings: IfsSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> IfsSettings:
        return self._settings

    def _load(self, path: Path, *, op: str) -> tuple[FractalConfig | None, ServiceResult | None]:
        """Load and validate a fractal file.

        Returns ``(config, None)`` on success or ``(None, failure)`` where
        *failure* is a ready-to-return error result.
        """
        try:
            text = read_text_file(path)
        except FileNotFoundError:
            return None, ServiceResult.failure(op, "NOT_FOUND", f"No fractal file at {path}")
        except OSError as exc:
            return None, ServiceResult.failure(op, "IO_ERROR", f"Cannot read {path}: {exc}")

        try:
            return load_config_json(text), None
        except InvalidFormatError as exc:
            logger.debug("Rejected %s: %s", path, exc.detail or exc)
            return None, self._invalid_format(op, exc, path=str(path))

    def _save(self, path: Path, config: FractalConfig, *, op: str) -> ServiceResult | None:
        """Write *config* to *path*.  Returns a failure result if the write fails."""
        try:
            write_text_file(path, dump_config_json(config))
        except OSError as exc:
            return ServiceResult.failure(op, "IO_ERROR", f"Cannot write {path}: {exc}")
        logger.debug("Wrote %s (%d rules)", path, len(config.rules))
        return None

    @staticmethod
    def _invalid_format(op: str, exc: InvalidFormatError, **detail: str) -> ServiceResult:
        if exc.detail:
            detail["reason"] = exc.detail
        return ServiceResult.failure(op, "INVALID_FORMAT", str(exc), **detail)

    @staticmethod
    def _invalid_input(op: str, exc: ValueError) -> ServiceResult:
        return ServiceResult.failure(op, "INVALID_INPUT", str(exc))
