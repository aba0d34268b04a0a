"""
gitm Logging Configuration

Configures logging based on environment variables:
- GITM_DEBUG: Enable debug logging (default: false)
- GITM_LOG_FILE: Log file path (default: $GITM_DATA_PATH/gitm.log)
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from gitm.configs.paths import get_data_path


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for gitm.

    Args:
        debug: Enable debug level. Defaults to GITM_DEBUG env var.
        log_file: Log file path. Defaults to GITM_LOG_FILE env var,
                  or $GITM_DATA_PATH/gitm.log if not set.

    Returns:
        Root logger for gitm
    """
    if debug is None:
        debug = os.environ.get("GITM_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("GITM_LOG_FILE")
        if not log_file:
            log_file = str(get_data_path() / "gitm.log")

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger("gitm")
    logger.setLevel(level)
    logger.handlers.clear()

    # Terminal output belongs to the CLI, so stderr only carries warnings
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)
    logger.addHandler(stderr_handler)

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)
    logger.debug(f"Logging to file: {log_file}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "search.bm25", "git.client")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"gitm.{component}")
