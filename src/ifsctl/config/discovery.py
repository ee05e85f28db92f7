"""Locate the ``ifsctl.toml`` that applies to a working directory.

``IFSCTL_CONFIG`` pins one file explicitly.  Otherwise the nearest
``ifsctl.toml`` at or above the start directory applies, so a project can
keep its grid, share, and generator settings beside its fractal files.
Parsing happens in :mod:`ifsctl.config.settings`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "ifsctl.toml"
CONFIG_ENV_VAR = "IFSCTL_CONFIG"

logger = logging.getLogger(__name__)


def candidate_paths(start: Path | None = None) -> Iterator[Path]:
    """Yield every ``ifsctl.toml`` location from *start* (default: cwd) up to ``/``."""
    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start*, or None to run on built-in defaults.

    A pinned ``IFSCTL_CONFIG`` that is not a file disables discovery rather
    than falling back to a different project's config.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned).expanduser()
        if path.is_file():
            return path
        logger.warning("%s=%s is not a file; using built-in defaults", CONFIG_ENV_VAR, pinned)
        return None

    return next((path for path in candidate_paths(start) if path.is_file()), None)
