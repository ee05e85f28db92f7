"""Command group: list, add, edit, and remove transform rules."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ifsctl.commands._base import IfsGroup

if TYPE_CHECKING:
    from ifsctl.commands._context import AppContext

_RULE_EXAMPLES = """\
  ifsctl rule list castle.json
  ifsctl rule add castle.json --cell 0 2 0
  ifsctl rule add castle.json --cell 1 0 0 --step 0.5
  ifsctl rule set castle.json 0 --scale 0.4 --rotation 0 0.785 0
  ifsctl rule remove castle.json 0"""

_VECTOR = click.Tuple([float, float, float])


@click.group(cls=IfsGroup, examples=_RULE_EXAMPLES)
@click.pass_obj
def rule(app: AppContext) -> None:
    """Edit the child-placement rules of a fractal."""


@rule.command(
    "list",
    examples="""\
  ifsctl rule list castle.json
  ifsctl rule list castle.json --step 0.25""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--step", type=float, default=None, help="Grid cell size used for the Cell column.")
@click.pass_obj
def list_cmd(app: AppContext, path: Path, step: float | None) -> None:
    """List rules with their grid cells."""
    from ifsctl.services.rules import RuleService

    app.emit(RuleService(app.settings).list_rules(path, step=step))


@rule.command(
    examples="""\
  ifsctl rule add castle.json --cell 0 2 0
  ifsctl rule add castle.json""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--cell",
    type=click.Tuple([int, int, int]),
    default=None,
    help="Frontier cell index I J K to place the rule in.",
)
@click.option("--step", type=float, default=None, help="Grid cell size (default from config).")
@click.pass_obj
def add(
    app: AppContext,
    path: Path,
    cell: tuple[int, int, int] | None,
    step: float | None,
) -> None:
    """Add a rule at a frontier cell (or a default rule when no cell is given)."""
    from ifsctl.services.rules import RuleService

    app.emit(RuleService(app.settings).add_rule(path, cell=cell, step=step))


@rule.command(
    "set",
    examples="""\
  ifsctl rule set castle.json 2 --position 0 0.5 0
  ifsctl rule set castle.json 2 --scale 0.25""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("index", type=int)
@click.option("--position", type=_VECTOR, default=None, help="New position X Y Z.")
@click.option("--rotation", type=_VECTOR, default=None, help="New rotation X Y Z (radians).")
@click.option("--scale", type=float, default=None, help="New uniform scale (> 0).")
@click.pass_obj
def set_cmd(
    app: AppContext,
    path: Path,
    index: int,
    position: tuple[float, float, float] | None,
    rotation: tuple[float, float, float] | None,
    scale: float | None,
) -> None:
    """Change fields of one rule."""
    from ifsctl.services.rules import RuleService

    app.emit(
        RuleService(app.settings).update_rule(
            path, index, position=position, rotation=rotation, scale=scale
        )
    )


@rule.command(
    examples="""\
  ifsctl rule remove castle.json 0""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("index", type=int)
@click.pass_obj
def remove(app: AppContext, path: Path, index: int) -> None:
    """Remove the rule at INDEX."""
    from ifsctl.services.rules import RuleService

    app.emit(RuleService(app.settings).remove_rule(path, index))
