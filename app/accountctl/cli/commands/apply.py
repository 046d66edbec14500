"""Apply command implementation.

Reconciles accounts, home directories and link trees with the
desired-state document.
"""

from pathlib import Path
from typing import Annotated

import typer

from accountctl.cli.display import (
    create_actions_table,
    create_results_table,
    print_actions_summary,
    print_results_summary,
)
from accountctl.core.errors import (
    AccountCreationError,
    ConfigNotFoundError,
    ConfigParseError,
    SettingsError,
)
from accountctl.core.reconcile import Reconciler
from accountctl.core.settings import load_settings
from accountctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Apply the desired-state document to the system.",
    invoke_without_command=True,
)


def run_apply(config: Path | None = None, dry_run: bool = False, quiet: bool = False) -> None:
    """Run one reconciliation pass and report the results.

    Recoverable failures are shown but do not change the exit code. Missing
    system tools abort a real pass and only warn in dry-run mode.

    Args:
        config: Desired-state document. If None, uses the configured path.
        dry_run: If True, log mutations instead of performing them.
        quiet: If True, skip the planned actions table.

    Raises:
        typer.Exit: With code 1 on a fatal error.
    """
    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = config or settings.desired_state_path
    reconciler = Reconciler.from_settings(settings, dry_run=dry_run)

    try:
        plan = reconciler.plan(source)
    except ConfigNotFoundError as e:
        print_error(str(e))
        print_info("Pass --config or set desired_state_path in the settings file.")
        raise typer.Exit(code=1) from e
    except ConfigParseError as e:
        print_error(f"Failed to load desired state: {e}")
        raise typer.Exit(code=1) from e

    if not quiet:
        console.print(create_actions_table(plan.actions, dry_run))
        print_actions_summary(plan.actions)

    missing = reconciler.missing_tools()
    if missing:
        message = f"Required tools not found: {', '.join(missing)}"
        if not dry_run:
            print_error(message)
            raise typer.Exit(code=1)
        print_warning(message)

    try:
        results = reconciler.execute(plan)
    except AccountCreationError as e:
        print_error(str(e))
        print_error("Aborting: remaining actions were not applied.")
        raise typer.Exit(code=1) from e

    console.print(create_results_table(results))
    print_results_summary(results)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
    else:
        print_success("accountctl: completed.")


@app.callback(invoke_without_command=True)
def apply_desired_state(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Desired-state YAML document (default: ../users.yaml).",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
) -> None:
    """Apply the desired-state document to the system.

    Actions performed, in order:
      - Lock users and authors no longer declared (protected identities excepted)
      - Create missing category groups
      - Create or unlock every declared account and fix its home directory
      - Rebuild moderator link directories
      - Rebuild every user's all_blogs directory
      - Grant admins access to every home tree

    Examples:
        accountctl apply --dry-run
        accountctl apply --config /etc/accountctl/users.yaml
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    run_apply(config=config, dry_run=dry_run, quiet=quiet)
