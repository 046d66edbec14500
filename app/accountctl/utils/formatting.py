"""Console output.

Reports go to stdout; warnings, errors and log records go to stderr so
that ``--json`` output stays parseable.
"""

import sys

from rich.console import Console
from rich.markup import escape

from accountctl.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Full hex colors on a terminal; plain text when piped.
    return Console(
        theme=get_theme(),
        stderr=stderr,
        color_system="truecolor" if stream.isatty() else None,
    )


console = _make_console()
err_console = _make_console(stderr=True)


def print_info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/info]")


def print_success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/success]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/warning] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/error] {escape(message)}")
