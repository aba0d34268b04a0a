"""
gitm Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from gitm.configs.logging import get_logger, setup_logging

# Paths
from gitm.configs.paths import ensure_data_dir, get_data_path

# Constants
from gitm.configs.constants import (
    DEFAULT_B,
    DEFAULT_K1,
    DEFAULT_MAX_RESULTS,
    DIFF_MARKER,
    GIT_LOG_DELIMITER,
    GIT_LOG_FIELDS,
    LARGE_REPO_COMMIT_THRESHOLD,
    LARGE_REPO_SINCE,
    TIMEOUTS,
    get_timeout,
)

# YAML config
from gitm.configs.yaml_config import (
    DEFAULT_CONFIG_YAML,
    create_default_config,
    get_config_path,
    load_yaml_config,
    save_yaml_config,
)

# Runtime
from gitm.configs.runtime import DEFAULT_CONFIG, get_full_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    "ensure_data_dir",
    # Constants
    "DEFAULT_B",
    "DEFAULT_K1",
    "DEFAULT_MAX_RESULTS",
    "DIFF_MARKER",
    "GIT_LOG_DELIMITER",
    "GIT_LOG_FIELDS",
    "LARGE_REPO_COMMIT_THRESHOLD",
    "LARGE_REPO_SINCE",
    "TIMEOUTS",
    "get_timeout",
    # YAML config
    "DEFAULT_CONFIG_YAML",
    "get_config_path",
    "load_yaml_config",
    "save_yaml_config",
    "create_default_config",
    # Runtime
    "DEFAULT_CONFIG",
    "get_full_config",
]
