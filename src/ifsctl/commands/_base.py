"""Click classes whose commands carry runnable ``ifsctl`` invocations.

Commands are declared with an ``examples`` block holding one invocation per
line.  Lines are checked when the command is defined, so a typo in an
example fails at import rather than in front of a user.  ``--examples``
prints them and exits; under the root ``--json`` flag it prints a JSON
object instead.
"""

from __future__ import annotations

import json
from typing import Any

import click

PROG_NAME = "ifsctl"


def split_examples(block: str) -> tuple[str, ...]:
    """Split an examples block into single invocations.

    Raises:
        ValueError: if a non-blank line does not start with ``ifsctl``.
    """
    lines = tuple(line.strip() for line in block.splitlines() if line.strip())
    for line in lines:
        if line.split()[0] != PROG_NAME:
            msg = f"Example does not start with {PROG_NAME!r}: {line!r}"
            raise ValueError(msg)
    return lines


def _json_requested(ctx: click.Context) -> bool:
    # The root callback has already run and stored its AppContext.
    app = ctx.find_root().obj
    settings = getattr(app, "settings", None)
    return bool(getattr(settings, "json_output", False))


class IfsCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = split_examples(examples) if examples else ()
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        if _json_requested(ctx):
            payload = {"command": ctx.command_path, "examples": list(self.examples)}
            click.echo(json.dumps(payload, indent=2))
        else:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            for line in self.examples:
                click.echo(f"  {line}")
        ctx.exit(0)


class IfsGroup(IfsCommand, click.Group):
    """Group with ``--examples``; subcommands default to :class:`IfsCommand`."""

    command_class = IfsCommand
