"""Command: list the empty grid cells where a rule can be added."""

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
  ifsctl frontier castle.json
  ifsctl frontier castle.json --step 0.5
  ifsctl -q frontier castle.json""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--step", type=float, default=None, help="Grid cell size (default from config).")
@click.pass_obj
def frontier(app: AppContext, path: Path, step: float | None) -> None:
    """Show occupied space and the addable frontier cells."""
    from ifsctl.services.frontier import FrontierService

    app.emit(FrontierService(app.settings).frontier(path, step=step))
