"""Scan command implementation.

Lists the accounts inferred from home directories on disk.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from accountctl.core.errors import SettingsError
from accountctl.core.registry import CategoryRegistry
from accountctl.core.settings import load_settings
from accountctl.models.category import CATEGORY_ORDER, Category
from accountctl.scanners.homes import HomeDirectoryScanner
from accountctl.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="List accounts found under the category base directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_accounts(
    ctx: typer.Context,
    category: Annotated[
        Category | None,
        typer.Option(
            "--category",
            "-C",
            help="Only scan one category.",
            case_sensitive=False,
        ),
    ] = None,
    output_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON."),
    ] = False,
) -> None:
    """List accounts found under the category base directories."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    registry = CategoryRegistry.from_settings(settings)
    scanner = HomeDirectoryScanner(registry)
    categories = (category,) if category else CATEGORY_ORDER
    observed = scanner.scan_many(categories)

    if output_json:
        data = {c.value: [a.username for a in accounts] for c, accounts in observed.items()}
        console.print_json(json.dumps(data))
        return

    table = Table(
        title="Observed Accounts",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", width=8)
    table.add_column("Base Directory", style="muted")
    table.add_column("Accounts")

    total = 0
    for cat, accounts in observed.items():
        total += len(accounts)
        names = ", ".join(a.username for a in accounts) or "[muted]-[/muted]"
        table.add_row(cat.value, str(registry.base_dir_for(cat)), names)

    console.print(table)
    print_info(f"{total} account(s) found.")
