"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and colors) or
machines (--json). The bootstrap report gets a per-step table; other
operations are shown as key-value pairs.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from bootkit.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from bootkit.services.result import ServiceResult


def _boot_table(data: dict[str, Any]) -> Table:
    table = Table(show_header=True, header_style="boot.key", box=None, pad_edge=False)
    table.add_column("step")
    table.add_column("outcome")

    manifest = data["manifest"]
    origin = "preset" if manifest["preset"] else "derived"
    table.add_row("manifest", Text(f"{manifest['env_var']}={manifest['path']} ({origin})"))

    probe = data["logging"]
    style = "boot.ok" if probe["status"] == "available" else "boot.skipped"
    table.add_row("logging", Text(f"{probe['module']} {probe['status']}", style=style))

    lock = data["lock"]
    table.add_row("dependencies", Text(f"{len(lock['pins'])} locked from {lock['manifest']}"))

    cache = data["cache"]
    if cache["enabled"]:
        warmed = f", {len(cache['compiled'])} trees warmed" if cache["compiled"] else ""
        table.add_row("cache", Text(f"{cache['cache_dir']}{warmed}", style="boot.path"))
    else:
        table.add_row("cache", Text("disabled", style="boot.skipped"))

    silenced = "silenced" if data["deprecations_silenced"] else "left on"
    table.add_row(
        "deprecations", Text(f"{silenced} (Python {data['python_version']})")
    )
    return table


def _print_data(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            value = _json.dumps(value, separators=(",", ":"))
        console.print(Text.assemble(("  " + key, "boot.key"), f": {value}"))


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        quiet: Only the status line.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "UNKNOWN"
        console.print(Text.assemble(("ERROR", "boot.error"), f": {result.op} [{code}] {error_msg}"))
        return get_output(console).rstrip("\n")

    console.print(Text.assemble(("OK", "boot.ok"), ": ", (result.op, "boot.op")))
    if not quiet and result.data:
        if result.op == "bootstrap":
            console.print(_boot_table(result.data))
        else:
            _print_data(console, result.data)
    return get_output(console).rstrip("\n")
