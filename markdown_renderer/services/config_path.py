"""Configuration and data directory locations.

Honors XDG_CONFIG_HOME and XDG_DATA_HOME, falling back to the usual
~/.config and ~/.local/share locations.
"""

import os
from pathlib import Path


APP_DIR_NAME = "markdown-renderer"


def get_config_dir() -> Path:
    """Get the configuration directory (settings.json lives here)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_DIR_NAME


def get_data_dir() -> Path:
    """Get the data directory (drafts live here)."""
    base = os.environ.get("XDG_DATA_HOME")
    root = Path(base) if base else Path.home() / ".local" / "share"
    return root / APP_DIR_NAME
