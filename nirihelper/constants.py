"""Shared constants for nirihelper."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_BOTTOM_MARGIN",
    "DEFAULT_FOLLOW_MODE_HELPER",
    "DEFAULT_FOLLOW_MODE_SUBCOMMAND",
    "DEFAULT_LEFT_MARGIN",
    "DEFAULT_RIGHT_MARGIN",
    "DEFAULT_TOP_MARGIN",
    "NIRI_SOCKET_ENV",
]

NIRI_SOCKET_ENV = "NIRI_SOCKET"

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "nirihelper" / "config.toml"

# Edge margins in logical units; the bottom one clears a panel
DEFAULT_LEFT_MARGIN = 0.0
DEFAULT_RIGHT_MARGIN = 0.0
DEFAULT_TOP_MARGIN = 0.0
DEFAULT_BOTTOM_MARGIN = 48.0

DEFAULT_FOLLOW_MODE_HELPER = "nirius"
DEFAULT_FOLLOW_MODE_SUBCOMMAND = "toggle-follow-mode"
