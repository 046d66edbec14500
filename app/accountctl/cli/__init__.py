"""CLI package for accountctl.

This package contains the Typer application and all subcommands.
"""

from accountctl.cli.main import app

__all__ = ["app"]
