"""Command: bootstrap, then run a module as ``__main__``."""

from __future__ import annotations

import runpy
import sys
from typing import TYPE_CHECKING

import click

from bootkit.commands._base import BootCommand

if TYPE_CHECKING:
    from bootkit.commands._context import AppContext


@click.command(
    "exec",
    cls=BootCommand,
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
    examples="""\
  bootkit exec myapp
  bootkit exec gunicorn myapp.wsgi:app --workers 4""",
)
@click.argument("module")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def exec_cmd(app: AppContext, module: str, args: tuple[str, ...]) -> None:
    """Bootstrap, then run MODULE like ``python -m MODULE ARGS``.

    MODULE is never imported when the bootstrap fails.
    """
    result = app.service.run()
    if not result.ok:
        app.emit(result)
        return
    if app.settings.verbose:
        app.emit(result)

    sys.argv = [module, *args]
    runpy.run_module(module, run_name="__main__", alter_sys=True)
