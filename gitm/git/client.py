"""
Git History Client

Fetches commit history (with patches) and the author list by spawning a
fresh `git` process per call.
"""

import time
from typing import Optional

from gitm.configs import (
    GIT_LOG_DELIMITER,
    GIT_LOG_FIELDS,
    LARGE_REPO_COMMIT_THRESHOLD,
    LARGE_REPO_SINCE,
    get_logger,
    get_timeout,
)
from gitm.exceptions import GitCommandError
from gitm.git.detection import count_commits
from gitm.git.log_parser import parse_authors, parse_log
from gitm.models import Author, Commit, FilterConfig
from gitm.utils.subprocess_utils import command_stdout

logger = get_logger("git.client")


class GitClient:
    """
    Reads history from the repository at `path` (current directory if None).

    Large repositories: when HEAD has more than `commit_threshold` commits
    and the caller did not ask for the full history, only commits from the
    last `large_repo_since` window are fetched. This bounds the cost of
    fetching and ranking patches; it is not a relevance feature, and older
    matches will be missed unless fetch_all is set.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        commit_threshold: int = LARGE_REPO_COMMIT_THRESHOLD,
        large_repo_since: str = LARGE_REPO_SINCE,
    ):
        self.path = path
        self.commit_threshold = commit_threshold
        self.large_repo_since = large_repo_since

    def _log_args(self, filter_config: Optional[FilterConfig]) -> list[str]:
        pretty = GIT_LOG_DELIMITER.join(GIT_LOG_FIELDS)
        args = ["git", "log", "-z", "--patch", "--no-color", f"--pretty=format:{pretty}"]

        fetch_all = filter_config.fetch_all if filter_config else False
        since = filter_config.since if filter_config else None
        if since is not None:
            # An explicit window replaces the size guard
            args.append(f"--since={since.isoformat()}")
        elif not fetch_all:
            total = count_commits(self.path)
            if total > self.commit_threshold:
                logger.info(
                    f"{total} commits exceed {self.commit_threshold}; "
                    f"fetching since '{self.large_repo_since}' (use search-all to lift)"
                )
                args.append(f"--since={self.large_repo_since}")
        return args

    def get_all_commits(self, filter_config: Optional[FilterConfig] = None) -> list[Commit]:
        """
        Fetch, parse and filter history.

        Args:
            filter_config: Optional author/date filter and fetch window control

        Returns:
            Commits passing the filter, oldest first

        Raises:
            GitCommandError: git failed or produced non-UTF-8 output
            LogParseError: A commit date could not be parsed
        """
        start_time = time.time()
        stdout = command_stdout(
            self._log_args(filter_config),
            cwd=self.path,
            timeout=get_timeout("git_log", 120),
            error_cls=GitCommandError,
        )
        commits = parse_log(stdout, filter_config)
        elapsed = time.time() - start_time
        logger.debug(f"Fetched {len(commits)} commits in {elapsed*1000:.1f}ms")
        return commits

    def get_all_authors(self) -> list[Author]:
        """
        List distinct commit authors (by name), first seen first.

        Raises:
            GitCommandError: git failed or produced non-UTF-8 output
        """
        stdout = command_stdout(
            ["git", "log", f"--pretty=format:%an{GIT_LOG_DELIMITER}%ae"],
            cwd=self.path,
            timeout=get_timeout("git_log", 120),
            error_cls=GitCommandError,
        )
        authors = parse_authors(stdout)
        logger.debug(f"Found {len(authors)} authors")
        return authors
