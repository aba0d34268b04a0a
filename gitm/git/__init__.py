"""
gitm Git Integration

Repository detection, history fetching and history stream parsing.
"""

from gitm.git.client import GitClient
from gitm.git.detection import count_commits, is_git_repo
from gitm.git.log_parser import parse_authors, parse_log, parse_record, split_record

__all__ = [
    "GitClient",
    "count_commits",
    "is_git_repo",
    "parse_authors",
    "parse_log",
    "parse_record",
    "split_record",
]
