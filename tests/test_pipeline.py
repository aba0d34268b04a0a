"""
Tests for the search pipeline orchestration.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from gitm.exceptions import ClassifierError, GitCommandError, IssueFetchError
from gitm.llm import OpenAIProvider
from gitm.llm.classifier import BinaryClassificationResult
from gitm.models import Author, DisplayMode, Issue, SearchMode
from gitm.pipeline import SearchPipeline

PATCH_WITH_TIMEOUT = "\n".join([
    "diff --git a/client.py b/client.py",
    "--- a/client.py",
    "+++ b/client.py",
    "@@ -1,1 +1,2 @@",
    " import requests",
    "+retry_on_timeout = True",
])


@pytest.fixture
def commits(commit_factory):
    return [
        commit_factory("a1", title="Fix login timeout", body="Increase the session timeout"),
        commit_factory("b2", title="Add README", body="Docs"),
        commit_factory("c3", title="Refactor", body="Cleanup", diff=PATCH_WITH_TIMEOUT),
    ]


@pytest.fixture
def git_client(commits):
    client = MagicMock()
    client.get_all_commits.return_value = commits
    client.get_all_authors.return_value = [Author(name="Ada Lovelace")]
    return client


@pytest.fixture
def github_client():
    client = MagicMock()
    client.get_all_issues.return_value = [
        Issue(
            title="Login timeout too short",
            body="Sessions expire",
            author=Author(name="octocat", username="octocat"),
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
            number=7,
        ),
        Issue(
            title="Dark mode",
            body="Please",
            author=Author(name="octocat", username="octocat"),
            created_at=datetime(2024, 3, 2, tzinfo=timezone.utc),
            number=8,
        ),
    ]
    return client


def make_pipeline(git_client, github_client, **kwargs):
    kwargs.setdefault("classify", False)
    return SearchPipeline(git_client=git_client, github_client=github_client, **kwargs)


class TestCommitRanking:
    """Tests for the commit ranking phases."""

    def test_title_and_body_view(self, git_client, github_client):
        results = make_pipeline(git_client, github_client, query="timeout", max_results=1).execute()

        assert [c.sha for c in results.commits] == ["a1"]
        assert results.issues == []
        github_client.get_all_issues.assert_not_called()

    def test_patch_view_appended(self, git_client, github_client):
        pipeline = make_pipeline(
            git_client, github_client, query="timeout", max_results=1, include_patches=True
        )
        results = pipeline.execute()

        assert [c.sha for c in results.commits] == ["a1", "c3"]
        assert all(c.display_mode is DisplayMode.TITLE_AND_BODY for c in results.commits)

    def test_duplicates_removed_keeping_primary(self, commit_factory, git_client, github_client):
        git_client.get_all_commits.return_value = [
            commit_factory("a1", title="Fix login timeout", diff=PATCH_WITH_TIMEOUT),
            commit_factory("b2", title="Add README"),
        ]
        pipeline = make_pipeline(
            git_client, github_client, query="timeout", max_results=1, include_patches=True
        )

        assert [c.sha for c in pipeline.execute().commits] == ["a1"]

    def test_no_commits_returns_empty(self, git_client, github_client):
        git_client.get_all_commits.return_value = []
        assert make_pipeline(git_client, github_client, query="timeout").execute().commits == []

    def test_fetch_failure_aborts(self, git_client, github_client):
        git_client.get_all_commits.side_effect = GitCommandError("git log failed")
        with pytest.raises(GitCommandError):
            make_pipeline(git_client, github_client, query="timeout").execute()

    def test_search_all_lifts_window(self, git_client, github_client):
        make_pipeline(git_client, github_client, query="timeout", search_all=True).execute()

        filter_config = git_client.get_all_commits.call_args[0][0]
        assert filter_config.fetch_all is True
        assert filter_config.is_empty()


class TestIssueSearch:
    """Tests for the independent issue branch."""

    def test_issues_only(self, git_client, github_client):
        pipeline = make_pipeline(
            git_client, github_client, query="timeout", mode=SearchMode.ISSUES, max_results=1
        )
        results = pipeline.execute()

        assert [i.number for i in results.issues] == [7]
        assert results.commits == []
        git_client.get_all_commits.assert_not_called()

    def test_commits_and_issues_kept_separate(self, git_client, github_client):
        pipeline = make_pipeline(
            git_client,
            github_client,
            query="timeout",
            mode=SearchMode.COMMITS_AND_ISSUES,
            max_results=1,
        )
        results = pipeline.execute()

        assert [c.sha for c in results.commits] == ["a1"]
        assert [i.number for i in results.issues] == [7]

    def test_issue_failure_degrades(self, git_client, github_client):
        github_client.get_all_issues.side_effect = IssueFetchError("gh failed")
        pipeline = make_pipeline(
            git_client, github_client, query="timeout", mode=SearchMode.COMMITS_AND_ISSUES
        )
        results = pipeline.execute()

        assert results.issues == []
        assert results.commits


class TestClassification:
    """Tests for filter extraction through the mention classifiers."""

    def run_with(self, git_client, github_client, author_result, date_result):
        with patch("gitm.pipeline.AuthorMentionClassifier") as author_cls, patch(
            "gitm.pipeline.DateMentionClassifier"
        ) as date_cls:
            if isinstance(author_result, Exception):
                author_cls.return_value.classify.side_effect = author_result
            else:
                author_cls.return_value.classify.return_value = author_result
            if isinstance(date_result, Exception):
                date_cls.return_value.classify.side_effect = date_result
            else:
                date_cls.return_value.classify.return_value = date_result

            pipeline = make_pipeline(
                git_client, github_client, query="timeout by Ada", classify=True, provider=MagicMock()
            )
            results = pipeline.execute()
            author_cls.assert_called_once_with(pipeline.provider, [Author(name="Ada Lovelace")])
        return results

    def test_positive_results_build_filter(self, git_client, github_client):
        since = datetime(2023, 1, 1, tzinfo=timezone.utc)
        results = self.run_with(
            git_client,
            github_client,
            BinaryClassificationResult(True, Author(name="Ada Lovelace")),
            BinaryClassificationResult(True, (since, None)),
        )

        filter_config = git_client.get_all_commits.call_args[0][0]
        assert filter_config.author == Author(name="Ada Lovelace")
        assert filter_config.date_range == (since, None)
        assert results.filter_config is filter_config

    def test_negative_results_leave_filter_absent(self, git_client, github_client):
        self.run_with(
            git_client,
            github_client,
            BinaryClassificationResult.negative(),
            BinaryClassificationResult.negative(),
        )

        assert git_client.get_all_commits.call_args[0][0].is_empty()

    def test_classifier_failure_degrades(self, git_client, github_client):
        results = self.run_with(
            git_client,
            github_client,
            ClassifierError("bad arguments"),
            BinaryClassificationResult(True, (None, datetime(2023, 6, 1, tzinfo=timezone.utc))),
        )

        filter_config = git_client.get_all_commits.call_args[0][0]
        assert filter_config.author is None
        assert filter_config.until == datetime(2023, 6, 1, tzinfo=timezone.utc)
        assert results.commits

    def test_no_provider_skips_classification(self, git_client, github_client):
        with patch("gitm.pipeline.AuthorMentionClassifier") as author_cls:
            make_pipeline(git_client, github_client, query="timeout", classify=True).execute()
        author_cls.assert_not_called()

    def test_dropped_transfer_degrades_to_no_filter(self, git_client, github_client):
        """A transfer failure inside requests must not abort the search."""
        provider = OpenAIProvider(api_key="sk-test", config={"base_url": "http://llm.local/v1"})
        error = requests.exceptions.ChunkedEncodingError("connection reset mid-body")

        with patch("gitm.utils.http_client.requests.post", side_effect=error) as mock_post, patch(
            "time.sleep"
        ):
            results = make_pipeline(
                git_client, github_client, query="timeout by Ada", classify=True, provider=provider
            ).execute()

        filter_config = git_client.get_all_commits.call_args[0][0]
        assert filter_config.author is None
        assert filter_config.is_empty()
        assert results.commits
        # Both classifiers exhausted their retries
        assert mock_post.call_count == 6
