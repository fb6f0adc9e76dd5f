"""Command: write the dependency manifest from the installed environment."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from bootkit.commands._base import BootCommand

if TYPE_CHECKING:
    from bootkit.commands._context import AppContext


@click.command(
    cls=BootCommand,
    examples="""\
  bootkit lock
  bootkit lock flask gunicorn
  bootkit lock --output build/requirements.lock click""",
)
@click.argument("names", nargs=-1)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Manifest to write (default: the pinned manifest path).",
)
@click.pass_obj
def lock(app: AppContext, names: tuple[str, ...], output: Path | None) -> None:
    """Pin installed versions of NAMES (or every distribution) to the manifest."""
    app.emit(app.service.lock(list(names), output=output))
