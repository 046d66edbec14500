"""Path management for accountctl.

The desired-state document lives at a fixed path relative to the working
directory. Tool settings follow the XDG Base Directory Specification:

- Config: ~/.config/accountctl/settings.toml
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "accountctl"

# Desired-state document, relative to the working directory
DEFAULT_DESIRED_STATE_PATH = Path("../users.yaml")

# Environment variable overriding the settings file location
SETTINGS_ENV_VAR = "ACCOUNTCTL_SETTINGS"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/accountctl/ (or XDG_CONFIG_HOME/accountctl/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_settings_path() -> Path:
    """Get the settings file path.

    The ACCOUNTCTL_SETTINGS environment variable takes precedence over
    the XDG location.

    Returns:
        Path to the settings TOML file.
    """
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / "settings.toml"
