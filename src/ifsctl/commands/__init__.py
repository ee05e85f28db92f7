"""Subcommand modules for ifsctl.

Provides register_commands() which uses deferred imports to keep
``ifsctl --help`` fast as the codebase grows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 7 standalone commands.
    """
    # --- Groups ---
    from ifsctl.commands.rule import rule
    from ifsctl.commands.share import share

    cli.add_command(rule)
    cli.add_command(share)

    # --- Standalone commands ---
    from ifsctl.commands.export import export
    from ifsctl.commands.frontier import frontier
    from ifsctl.commands.generate import generate
    from ifsctl.commands.init_cmd import init_cmd
    from ifsctl.commands.iterations import iterations
    from ifsctl.commands.merge import merge
    from ifsctl.commands.validate import validate

    cli.add_command(init_cmd)
    cli.add_command(generate)
    cli.add_command(frontier)
    cli.add_command(iterations)
    cli.add_command(validate)
    cli.add_command(export)
    cli.add_command(merge)
