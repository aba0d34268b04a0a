"""
GitHub Issues Client

Lists issues through the `gh` CLI and converts its JSON into Issue records.
"""

import json
import time
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from gitm.configs import get_logger, get_timeout
from gitm.exceptions import IssueFetchError
from gitm.models import Author, Issue
from gitm.utils.subprocess_utils import command_stdout

logger = get_logger("github.client")

ISSUE_JSON_FIELDS = "author,number,title,body,createdAt"


class IssueAuthorJson(BaseModel):
    """Author object in `gh issue list --json` output."""

    login: str


class IssueJson(BaseModel):
    """One issue in `gh issue list --json` output."""

    author: IssueAuthorJson
    number: int
    title: str
    body: str = ""
    created_at: datetime = Field(alias="createdAt")

    def to_issue(self) -> Issue:
        created_at = self.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Issue(
            title=self.title,
            body=self.body,
            author=Author(name=self.author.login, username=self.author.login),
            created_at=created_at.astimezone(timezone.utc),
            number=self.number,
        )


def parse_issues(raw: str) -> list[Issue]:
    """
    Parse `gh issue list --json` output.

    Raises:
        IssueFetchError: Output is not the expected JSON shape
    """
    try:
        payload = json.loads(raw or "[]")
        if not isinstance(payload, list):
            raise IssueFetchError("Expected a JSON list of issues")
        return [IssueJson.model_validate(item).to_issue() for item in payload]
    except json.JSONDecodeError as e:
        raise IssueFetchError(f"Invalid JSON from gh: {e}") from e
    except PydanticValidationError as e:
        raise IssueFetchError(f"Unexpected issue JSON: {e.error_count()} errors") from e


class GitHubClient:
    """Reads issues of the repository at `path` via `gh issue list`."""

    def __init__(self, path: Optional[str] = None, limit: int = 100):
        self.path = path
        self.limit = limit

    def get_all_issues(self) -> list[Issue]:
        """
        Fetch issues.

        Raises:
            IssueFetchError: gh failed, produced non-UTF-8 output, or bad JSON
        """
        start_time = time.time()
        stdout = command_stdout(
            [
                "gh",
                "issue",
                "list",
                "--json",
                ISSUE_JSON_FIELDS,
                "--limit",
                str(self.limit),
            ],
            cwd=self.path,
            timeout=get_timeout("gh_command", 60),
            error_cls=IssueFetchError,
        )
        issues = parse_issues(stdout)
        elapsed = time.time() - start_time
        logger.debug(f"Fetched {len(issues)} issues in {elapsed*1000:.1f}ms")
        return issues
