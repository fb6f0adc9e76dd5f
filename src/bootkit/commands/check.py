"""Command: run the bootstrap and report what it did."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bootkit.commands._base import BootCommand

if TYPE_CHECKING:
    from bootkit.commands._context import AppContext


@click.command(
    cls=BootCommand,
    examples="""\
  bootkit check
  bootkit --json check
  bootkit -c config/bootkit.toml check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Bootstrap this process and report each step; exit 1 on failure."""
    app.emit(app.service.run())
