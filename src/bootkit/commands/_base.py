"""Click command classes carrying an eager ``--examples`` flag.

Examples are written as indented triple-quoted strings next to the command
and printed dedented, one shell line per example line.
"""

from __future__ import annotations

import inspect
from typing import Any

import click


class _ExamplesMixin:
    """Adds ``--examples`` to any Click command that is given example text."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = inspect.cleandoc(examples) if examples else None
        if self.examples:
            self.params.append(  # type: ignore[attr-defined]
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
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples.splitlines():  # type: ignore[union-attr]
            click.echo(f"  {line}" if line else "")
        ctx.exit(0)


class BootCommand(_ExamplesMixin, click.Command):
    """A command that accepts ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class BootGroup(_ExamplesMixin, click.Group):
    """A group that accepts ``examples=``; its subcommands are BootCommands."""

    command_class = BootCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
