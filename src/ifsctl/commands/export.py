"""Command: export a normalized copy of a fractal file."""

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
  ifsctl export castle.json --output exports/""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write <name>_fractal.json into.",
)
@click.pass_obj
def export(app: AppContext, path: Path, output_dir: Path) -> None:
    """Export a fractal as <name>_fractal.json."""
    from ifsctl.services.exchange import ExchangeService

    app.emit(ExchangeService(app.settings).export(path, output_dir))
