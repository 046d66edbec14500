"""accountctl - Declarative account and home directory provisioning.

Reconciles operating-system accounts, home directories and content-sharing
symlinks against a desired-state document.
"""

__version__ = "0.1.0"
