"""
Tests for data models and the filter evaluator.
"""

from dataclasses import replace
from datetime import datetime, timezone

from gitm.models import Author, DisplayMode, FilterConfig, Issue, SearchMode
from gitm.search.filters import dedupe_by_identifier, matches_filter

FEB_1 = datetime(2023, 2, 1, tzinfo=timezone.utc)


class TestAuthor:
    """Tests for Author equality by name."""

    def test_email_ignored(self):
        assert Author(name="Ada") == Author(name="Ada", email="a@x.com")

    def test_different_names_differ(self):
        assert Author(name="Ada") != Author(name="Grace")

    def test_set_membership_by_name(self):
        authors = {Author(name="Ada", email="a@x.com"), Author(name="Ada", username="ada")}
        assert len(authors) == 1
        assert Author(name="Ada") in authors

    def test_str_falls_back_to_username(self):
        assert str(Author(username="octocat")) == "octocat"
        assert str(Author()) == "unknown"


class TestCommitDisplay:
    """Tests for Commit rendering per display mode."""

    def test_modes(self, commit_factory, sample_diff):
        commit = commit_factory("abc1234def", title="Fix bug", body="Details", diff=sample_diff)

        assert str(commit) == "Fix bug\n\nDetails"
        assert str(replace(commit, display_mode=DisplayMode.TITLE)) == "Fix bug"
        assert str(replace(commit, display_mode=DisplayMode.BODY)) == "Details"
        assert str(replace(commit, display_mode=DisplayMode.PATCH_ADDED)) == (
            'print("hello world")\n-- first\nsecond'
        )
        assert str(replace(commit, display_mode=DisplayMode.PATCH_REMOVED)) == 'print("hello")'
        assert str(replace(commit, display_mode=DisplayMode.PATCH_ALL)) == sample_diff

    def test_identifier_and_short_sha(self, commit_factory):
        commit = commit_factory("abc1234def")
        assert commit.identifier == "abc1234def"
        assert commit.short_sha == "abc1234"


class TestIssue:
    """Tests for Issue rendering."""

    def test_str_and_identifier(self):
        issue = Issue(
            title="Crash on start",
            body="Stack trace",
            author=Author(name="octocat", username="octocat"),
            created_at=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
            number=42,
        )

        assert issue.identifier == 42
        assert str(issue) == "Crash on start\nStack trace\noctocat\n2024-03-01 12:00:00+00:00\n42\n"


class TestFilterConfig:
    """Tests for FilterConfig accessors."""

    def test_bounds(self):
        config = FilterConfig(date_range=(FEB_1, None))
        assert config.since == FEB_1
        assert config.until is None
        assert not config.is_empty()

    def test_empty(self):
        config = FilterConfig()
        assert config.since is None and config.until is None
        assert config.is_empty()


class TestSearchMode:
    """Tests for SearchMode coverage flags."""

    def test_includes(self):
        assert SearchMode.COMMITS.includes_commits and not SearchMode.COMMITS.includes_issues
        assert SearchMode.ISSUES.includes_issues and not SearchMode.ISSUES.includes_commits
        assert SearchMode.COMMITS_AND_ISSUES.includes_commits
        assert SearchMode.COMMITS_AND_ISSUES.includes_issues


class TestMatchesFilter:
    """Tests for the filter evaluator."""

    def test_no_config_keeps_everything(self, commit_factory):
        assert matches_filter(commit_factory("a"), None)
        assert matches_filter(commit_factory("a"), FilterConfig())

    def test_since_excludes_older(self, commit_factory):
        commit = commit_factory("a")  # dated 2023-01-01
        assert not matches_filter(commit, FilterConfig(date_range=(FEB_1, None)))

    def test_until_includes_older(self, commit_factory):
        commit = commit_factory("a")
        assert matches_filter(commit, FilterConfig(date_range=(None, FEB_1)))

    def test_bounds_inclusive(self, commit_factory):
        commit = commit_factory("a", date=FEB_1)
        assert matches_filter(commit, FilterConfig(date_range=(FEB_1, FEB_1)))

    def test_author_by_name(self, commit_factory):
        commit = commit_factory("a", author="Ada")
        assert matches_filter(commit, FilterConfig(author=Author(name="Ada", email="other@x.com")))
        assert not matches_filter(commit, FilterConfig(author=Author(name="Grace")))

    def test_author_and_date_combined(self, commit_factory):
        commit = commit_factory("a", author="Ada")
        config = FilterConfig(author=Author(name="Ada"), date_range=(FEB_1, None))
        assert not matches_filter(commit, config)


class TestDedupe:
    """Tests for dedupe_by_identifier."""

    def test_first_occurrence_wins(self, commit_factory):
        primary = [commit_factory("abc123", title="first"), commit_factory("def456")]
        secondary = [commit_factory("abc123", title="second"), commit_factory("789fed")]

        merged = dedupe_by_identifier(primary + secondary)

        assert [c.sha for c in merged] == ["abc123", "def456", "789fed"]
        assert [c.title for c in merged if c.sha == "abc123"] == ["first"]

    def test_custom_key(self):
        assert dedupe_by_identifier(["a", "A", "b"], key=str.lower) == ["a", "b"]
