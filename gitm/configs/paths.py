"""
gitm Data Paths

Manages the data directory that holds the log file and config.yaml.
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".gitm"


def get_data_path() -> Path:
    """Get the gitm data directory path.

    Honors GITM_DATA_PATH, falling back to ~/.gitm.

    Returns:
        Path to the data directory
    """
    data_path = os.environ.get("GITM_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    return DEFAULT_DATA_PATH


def ensure_data_dir() -> Path:
    """Ensure the data directory exists.

    Returns:
        Path to data directory
    """
    data_path = get_data_path()
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
