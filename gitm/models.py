"""
gitm Data Models

Records that flow through the search pipeline: commits and issues, the
authors attached to them, and the filter configuration derived from a query.
Records render themselves to text via __str__; that rendering is what the
ranker tokenizes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from gitm.patch import PatchSet


@dataclass(frozen=True)
class Author:
    """
    Commit or issue author.

    Equality and hashing use the name only, so two authors with the same
    display name are the same author regardless of email or username. This
    lets authors live in sets and match filters without a canonical identity;
    two different people sharing a display name will be conflated.
    """

    name: Optional[str] = None
    username: Optional[str] = field(default=None, compare=False)
    email: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name or self.username or self.email or "unknown"


class DisplayMode(str, Enum):
    """Which part of a commit is rendered for tokenization and display."""

    TITLE = "title"
    BODY = "body"
    TITLE_AND_BODY = "title_and_body"
    PATCH_ADDED = "patch_added"
    PATCH_REMOVED = "patch_removed"
    PATCH_ALL = "patch_all"


@dataclass
class Commit:
    """One parsed record from the history stream."""

    author: Author
    date: datetime
    title: str
    body: str
    sha: str
    patch: PatchSet = field(default_factory=PatchSet)
    display_mode: DisplayMode = DisplayMode.TITLE_AND_BODY

    @property
    def identifier(self) -> str:
        return self.sha

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    def __str__(self) -> str:
        mode = self.display_mode
        if mode is DisplayMode.TITLE:
            return self.title
        if mode is DisplayMode.BODY:
            return self.body
        if mode is DisplayMode.PATCH_ADDED:
            return "\n".join(self.patch.added_lines())
        if mode is DisplayMode.PATCH_REMOVED:
            return "\n".join(self.patch.removed_lines())
        if mode is DisplayMode.PATCH_ALL:
            return str(self.patch)
        return f"{self.title}\n\n{self.body}"


@dataclass
class Issue:
    """An issue from the issue tracker."""

    title: str
    body: str
    author: Author
    created_at: datetime
    number: int

    @property
    def identifier(self) -> int:
        return self.number

    def __str__(self) -> str:
        return "\n".join(
            [self.title, self.body, str(self.author), str(self.created_at), str(self.number)]
        ) + "\n"


@dataclass
class FilterConfig:
    """
    Filters applied to commits before ranking.

    date_range bounds are each optional and inclusive. fetch_all lifts the
    large-repository fetch window.
    """

    author: Optional[Author] = None
    date_range: Optional[tuple[Optional[datetime], Optional[datetime]]] = None
    fetch_all: bool = False

    @property
    def since(self) -> Optional[datetime]:
        return self.date_range[0] if self.date_range else None

    @property
    def until(self) -> Optional[datetime]:
        return self.date_range[1] if self.date_range else None

    def is_empty(self) -> bool:
        return self.author is None and self.date_range is None


class SearchMode(str, Enum):
    """Which record types a search covers."""

    COMMITS = "commits"
    ISSUES = "issues"
    COMMITS_AND_ISSUES = "commits_and_issues"

    @property
    def includes_commits(self) -> bool:
        return self is not SearchMode.ISSUES

    @property
    def includes_issues(self) -> bool:
        return self is not SearchMode.COMMITS
