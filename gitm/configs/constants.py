"""
gitm Constants

Static configuration values that rarely change: history log format,
large-repository fetch guard, ranking defaults, and timeouts.
"""

# --- History Log Format ---
# Fields are joined by a private delimiter; records are NUL separated (-z).

GIT_LOG_DELIMITER = "|||"

GIT_LOG_FIELDS = ["%an", "%ae", "%aD", "%s", "%b", "%H"]

DIFF_MARKER = "diff --git"

# --- Large Repository Guard ---
# Cost bound only: repositories above the threshold are fetched over a
# recent window unless the caller asks for the full history.

LARGE_REPO_COMMIT_THRESHOLD = 1000
LARGE_REPO_SINCE = "3 months ago"

# --- Ranking Defaults ---

DEFAULT_K1 = 1.2
DEFAULT_B = 0.75
DEFAULT_MAX_RESULTS = 5

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    # Git operations
    "git_command": 10,  # Default git command timeout
    "git_log": 120,  # Full history with patches can be large
    # Issue tracker
    "gh_command": 60,
    # HTTP requests
    "http_default": 10,  # Default HTTP request timeout
    "http_llm_request": 120,  # LLM API requests (can be slow)
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS.get("http_default", 10)
    return TIMEOUTS.get(key, default)
