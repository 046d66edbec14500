"""Config command implementation.

Shows the effective settings or writes a default settings file.
"""

import json
from typing import Annotated

import typer

from accountctl.core.errors import SettingsError
from accountctl.core.paths import get_settings_path
from accountctl.core.settings import Settings, load_settings, save_settings, settings_to_dict
from accountctl.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(help="Show or initialize accountctl settings.", no_args_is_help=True)


@app.command("show")
def show_settings() -> None:
    """Print the effective settings as JSON."""
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(f"[muted]Settings file: {get_settings_path()}[/muted]")
    console.print_json(json.dumps(settings_to_dict(settings)))


@app.command("init")
def init_settings(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_warning(f"Settings file already exists: {path}")
        print_warning("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
