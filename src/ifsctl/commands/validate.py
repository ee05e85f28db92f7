"""Command: check that a file satisfies the fractal import contract."""

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
  ifsctl validate castle.json
  ifsctl --json validate downloaded_fractal.json""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def validate(app: AppContext, path: Path) -> None:
    """Validate a fractal file without changing it."""
    from ifsctl.services.exchange import ExchangeService

    app.emit(ExchangeService(app.settings).validate(path))
