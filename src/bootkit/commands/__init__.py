"""Subcommand modules for bootkit.

Provides register_commands() which uses deferred imports to keep
``bootkit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    from bootkit.commands.cache import cache

    cli.add_command(cache)

    from bootkit.commands.check import check
    from bootkit.commands.exec_cmd import exec_cmd
    from bootkit.commands.lock import lock

    cli.add_command(check)
    cli.add_command(exec_cmd)
    cli.add_command(lock)
