"""Command: replace the recursion depth of a fractal file."""

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
  ifsctl iterations castle.json 5""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("count", type=int)
@click.pass_obj
def iterations(app: AppContext, path: Path, count: int) -> None:
    """Set the number of recursion levels."""
    from ifsctl.services.rules import RuleService

    app.emit(RuleService(app.settings).set_iterations(path, count))
