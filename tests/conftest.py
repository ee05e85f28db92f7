"""Shared pytest fixtures and test helpers for ifsctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from ifsctl.config.logging import LOGGER_NAME
from ifsctl.config.settings import IfsSettings
from ifsctl.domain.models import FractalConfig, TransformRule
from ifsctl.services.telemetry import _current_span, set_tracing


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's IFSCTL_* environment out of the tests."""
    monkeypatch.delenv("IFSCTL_CONFIG", raising=False)
    monkeypatch.delenv("IFSCTL_QUIET", raising=False)
    monkeypatch.delenv("IFSCTL_VERBOSE", raising=False)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """CLI runs switch tracing on and install the ifsctl log handler; undo both."""
    yield
    set_tracing(False)
    _current_span.set(None)
    structlog.contextvars.clear_contextvars()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> IfsSettings:
    """Default settings rooted at a temp directory."""
    return IfsSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def tower_config() -> FractalConfig:
    """Two-rule fractal: one child above, one to the side."""
    return FractalConfig(
        name="Tower",
        rules=(
            TransformRule(position=(0.0, 0.5, 0.0), scale=0.5),
            TransformRule(position=(0.5, 0.0, 0.0), rotation=(0.0, 0.3, 0.0), scale=0.5),
        ),
        iterations=3,
    )


@pytest.fixture
def fractal_file(tmp_path: Path, tower_config: FractalConfig) -> Path:
    """The tower config written to ``tower.json``."""
    return write_fractal(tmp_path / "tower.json", tower_config.to_wire())


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI does not pick up stray config.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_fractal(path: Path, data: Any) -> Path:
    """Write *data* as JSON to *path* and return the path."""
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def read_fractal(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))
