"""Observed-state scanners.

This module exports the scanner classes for inferring provisioned accounts.
"""

from accountctl.scanners.base import Scanner
from accountctl.scanners.homes import HomeDirectoryScanner

__all__ = ["HomeDirectoryScanner", "Scanner"]
