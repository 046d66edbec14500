"""Diff command implementation.

Shows which accounts would be locked or created, without changing anything.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from accountctl.core.desired import load_desired_state
from accountctl.core.diff import DiffEngine, DiffResult
from accountctl.core.errors import ConfigParseError, SettingsError
from accountctl.core.registry import CategoryRegistry
from accountctl.core.settings import load_settings
from accountctl.scanners.homes import HomeDirectoryScanner
from accountctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Compare the desired state with accounts on disk.",
    invoke_without_command=True,
)


def _create_diff_table(result: DiffResult) -> Table:
    table = Table(
        title="Differences",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Category", width=8)
    table.add_column("Account", no_wrap=True)
    table.add_column("Action")

    for entry in result.removed:
        mark, outcome = ("=", "protected") if entry.protected else ("-", "lock")
        style = "muted" if entry.protected else "lock"
        table.add_row(
            f"[{style}]{mark}[/]", entry.category.value, entry.username, f"[{style}]{outcome}[/]"
        )

    for entry in result.new:
        table.add_row("[create]+[/]", entry.category.value, entry.username, "[create]create[/]")

    return table


@app.callback(invoke_without_command=True)
def show_diff(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Desired-state YAML document."),
    ] = None,
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON."),
    ] = False,
) -> None:
    """Compare the desired state with accounts on disk.

    Lists users and authors that would be locked and declared accounts
    that have no home directory yet.
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = load_settings()
        desired = load_desired_state(config or settings.desired_state_path)
    except (ConfigParseError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scanner = HomeDirectoryScanner(CategoryRegistry.from_settings(settings))
    result = DiffEngine(desired, settings.protected_identities).compute_diff(scanner)

    if output_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    if result.is_in_sync:
        print_success("Accounts on disk match the desired state.")
        return

    console.print(_create_diff_table(result))
    console.print(
        f"\n[lock]{len(result.to_lock)} to lock[/lock], "
        f"[create]{len(result.new)} to create[/create]"
    )
