"""
Git Detection Utilities

Functions for detecting git repositories and sizing their history.
"""

import os
from typing import Optional

from gitm.exceptions import GitCommandError
from gitm.utils.subprocess_utils import run_command


def is_git_repo(path: Optional[str] = None) -> bool:
    """
    Check if the given path is inside a git work tree.

    Args:
        path: Directory path to check (defaults to the current directory)

    Returns:
        True if path is a directory inside a git work tree
    """
    path = path or os.getcwd()
    if not os.path.isdir(path):
        return False
    try:
        returncode, stdout, _ = run_command(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=path,
            timeout=5,
            error_cls=GitCommandError,
        )
    except GitCommandError:
        return False
    return returncode == 0 and stdout.strip() == "true"


def count_commits(path: Optional[str] = None) -> int:
    """
    Count commits reachable from HEAD.

    Args:
        path: Repository path

    Returns:
        Number of commits, or 0 if HEAD does not exist yet
    """
    returncode, stdout, _ = run_command(
        ["git", "rev-list", "--count", "HEAD"],
        cwd=path,
        error_cls=GitCommandError,
    )
    if returncode != 0:
        return 0
    try:
        return int(stdout.strip())
    except ValueError:
        return 0
