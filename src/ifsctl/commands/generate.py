"""Command: expand a fractal file into instance transforms."""

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
  ifsctl generate castle.json
  ifsctl generate castle.json --iterations 6
  ifsctl generate castle.json --max-instances 5000 --save castle.npy
  ifsctl --json generate castle.json --matrices""",
)
@click.argument("path", type=click.Path(exists=False, dir_okay=False, path_type=Path))
@click.option(
    "--iterations",
    type=int,
    default=None,
    help="Override the recursion depth stored in the file.",
)
@click.option(
    "--max-instances",
    type=click.IntRange(min=1),
    default=None,
    help="Override the instance cap.",
)
@click.option("--matrices", is_flag=True, help="Include the 4x4 transforms in the result data.")
@click.option(
    "--save",
    "save_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the (N, 4, 4) transform stack to a .npy file.",
)
@click.pass_obj
def generate(
    app: AppContext,
    path: Path,
    iterations: int | None,
    max_instances: int | None,
    matrices: bool,
    save_path: Path | None,
) -> None:
    """Generate every instance transform of a fractal."""
    from ifsctl.services.generate import GenerateService

    app.emit(
        GenerateService(app.settings).generate(
            path,
            iterations=iterations,
            max_instances=max_instances,
            include_matrices=matrices,
            save_path=save_path,
        )
    )
