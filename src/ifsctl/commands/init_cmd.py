"""Command: write a fresh default fractal file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ifsctl.commands._base import IfsCommand

if TYPE_CHECKING:
    from ifsctl.commands._context import AppContext


@click.command(
    "init",
    cls=IfsCommand,
    examples="""\
  ifsctl init castle.json
  ifsctl init castle.json --force""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_obj
def init_cmd(app: AppContext, path: Path, force: bool) -> None:
    """Create a fractal file with the default (empty) rule set."""
    from ifsctl.services.exchange import ExchangeService

    app.emit(ExchangeService(app.settings).init_config(path, force=force))
