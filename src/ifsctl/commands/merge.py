"""Command: apply an externally generated rule set to a fractal file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ifsctl.commands._base import IfsCommand

if TYPE_CHECKING:
    from ifsctl.commands._context import AppContext


@click.command(
    cls=IfsCommand,
    examples="""\
  ifsctl merge castle.json generated.json
  ifsctl merge castle.json generated.json --prompt 'a spiralling sand tower'""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("generated", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--prompt", default=None, help="Prompt text, used as a fallback description.")
@click.pass_obj
def merge(app: AppContext, path: Path, generated: Path, prompt: str | None) -> None:
    """Merge a generated (AI) partial config into PATH.

    Missing rule components default to 0 and a missing scale to 0.5;
    the iteration count is reset to the configured value.
    """
    from ifsctl.services.exchange import ExchangeService

    app.emit(ExchangeService(app.settings).merge_generated(path, generated, prompt=prompt))
