"""Command group: bytecode cache maintenance."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bootkit.commands._base import BootGroup

if TYPE_CHECKING:
    from bootkit.commands._context import AppContext


@click.group(cls=BootGroup, examples="bootkit cache clear")
def cache() -> None:
    """Manage the startup bytecode cache."""


@cache.command(examples="bootkit cache clear")
@click.pass_obj
def clear(app: AppContext) -> None:
    """Delete the bytecode cache directory."""
    app.emit(app.service.clear_cache())
