"""Command group: encode and decode share links."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ifsctl.commands._base import IfsGroup

if TYPE_CHECKING:
    from ifsctl.commands._context import AppContext

_SHARE_EXAMPLES = """\
  ifsctl share encode castle.json
  ifsctl share encode castle.json --base-url https://example.org/builder
  ifsctl share decode 'https://ifsctl.local/?c=eyJuYW1l...' --output shared.json"""


@click.group(cls=IfsGroup, examples=_SHARE_EXAMPLES)
@click.pass_obj
def share(app: AppContext) -> None:
    """Pack fractals into URL-safe share links and back."""


@share.command(
    examples="""\
  ifsctl share encode castle.json
  ifsctl -q share encode castle.json""",
)
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--base-url", default=None, help="URL to attach the token to.")
@click.pass_obj
def encode(app: AppContext, path: Path, base_url: str | None) -> None:
    """Print the share token and link for a fractal."""
    from ifsctl.services.exchange import ExchangeService

    app.emit(ExchangeService(app.settings).share_encode(path, base_url=base_url))


@share.command(
    examples="""\
  ifsctl share decode eyJuYW1lIjoi... --output shared.json
  ifsctl share decode 'https://ifsctl.local/?c=eyJuYW1l...' --output shared.json --force""",
)
@click.argument("value")
@click.option(
    "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Fractal file to write.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing output file.")
@click.pass_obj
def decode(app: AppContext, value: str, output: Path, force: bool) -> None:
    """Decode a share token or link into a fractal file."""
    from ifsctl.services.exchange import ExchangeService

    app.emit(ExchangeService(app.settings).share_decode(value, output, force=force))
