"""Root CLI group for bootkit with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from bootkit import __version__
from bootkit.commands import register_commands
from bootkit.commands._context import AppContext
from bootkit.config.settings import BootSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bootkit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """bootkit — run-once process bootstrap."""
    ctx.ensure_object(dict)
    try:
        settings = BootSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid settings: {exc}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
