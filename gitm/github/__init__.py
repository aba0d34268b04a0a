"""
gitm GitHub Integration

Issue listing through the gh CLI.
"""

from gitm.github.client import GitHubClient, parse_issues

__all__ = ["GitHubClient", "parse_issues"]
