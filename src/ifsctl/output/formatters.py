"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and colors), for
scripts (``--quiet``), or for machines (``--json``).  The formatter layer
picks the mode; :mod:`ifsctl.output.renderers` does the human drawing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ifsctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from ifsctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags resolved from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
