"""CLI commands for accountctl.

This package contains all subcommand implementations.
"""

from accountctl.cli.commands import apply, config, diff, scan

__all__ = ["apply", "config", "diff", "scan"]
