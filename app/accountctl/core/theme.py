"""Console colors.

Every reconciliation step has its own style so that a long plan can be
read at a glance. Colors can be overridden per style in
``~/.config/accountctl/colors.toml``::

    [colors]
    lock = "#ff5555"
    link = "#8be9fd"
"""

import functools
import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from accountctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

HexColor = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        pattern=r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$",
    ),
]


class Palette(BaseModel):
    """Hex color per console style."""

    model_config = ConfigDict(extra="forbid")

    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # One per kind of reconciliation step
    lock: HexColor = "#f53263"
    create: HexColor = "#c1ff62"
    provision: HexColor = "#0e8ac8"
    link: HexColor = "#0ec1c8"
    grant: HexColor = "#f5b332"


def get_palette_path() -> Path:
    """Get the user color override file."""
    return get_config_dir() / "colors.toml"


def load_palette(path: Path | None = None) -> Palette:
    """Load the palette, applying user overrides if present.

    A broken color file only costs the overrides: the defaults are used
    and a warning is logged.
    """
    palette_path = path or get_palette_path()
    if not palette_path.exists():
        return Palette()

    try:
        with open(palette_path, "rb") as f:
            overrides = tomllib.load(f).get("colors", {})
        return Palette.model_validate(overrides)
    except (tomllib.TOMLDecodeError, OSError, ValidationError) as e:
        logger.warning("Ignoring color overrides in %s: %s", palette_path, e)
        return Palette()


def build_theme(palette: Palette) -> Theme:
    """Turn a palette into a Rich theme.

    Every palette field becomes a style of the same name. ``error`` and
    ``bold_header`` are bold.
    """
    styles = palette.model_dump()
    styles["error"] = f"bold {palette.error}"
    styles["bold_header"] = f"bold {palette.header}"
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Get the Rich theme of this process."""
    return build_theme(load_palette())
