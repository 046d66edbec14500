"""accountctl command line.

Running ``accountctl`` on its own performs a full reconciliation against
the configured desired-state document, like ``accountctl apply``.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from accountctl import __version__
from accountctl.cli.commands import apply, config, diff, scan
from accountctl.utils.formatting import console, err_console

# -v shows every mutation, -vv every command
_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

app = typer.Typer(
    name="accountctl",
    help="Keep accounts, home directories and blog links in line with users.yaml.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(value: bool) -> None:
    if value:
        console.print(f"accountctl version {__version__}", highlight=False)
        raise typer.Exit()


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr through Rich.

    Args:
        verbosity: Number of ``-v`` flags given.
    """
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=level == logging.DEBUG)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Log mutations (-vv: commands too)."),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Do not print the plan before applying it."),
    ] = False,
) -> None:
    """Reconcile accounts, home directories and blog links with users.yaml.

    Users, authors, moderators and admins declared in the document get an
    account and a home; users and authors dropped from it are locked.
    Without a command, runs [bold]apply[/bold].
    """
    ctx.obj = {"quiet": quiet}
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        apply.run_apply(quiet=quiet)


app.add_typer(apply.app, name="apply")
app.add_typer(diff.app, name="diff")
app.add_typer(scan.app, name="scan")
app.add_typer(config.app, name="config")
