"""
gitm Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All gitm-specific exceptions inherit from GitmError.

Usage:
    from gitm.exceptions import GitmError, GitCommandError, RankingError

    try:
        commits = client.get_all_commits()
    except GitCommandError as e:
        logger.error(f"History fetch failed: {e}")
"""


class GitmError(Exception):
    """Base exception for all gitm errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GitmError):
    """Error in gitm configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    pass


class ValidationError(GitmError):
    """Input validation failed."""

    pass


# =============================================================================
# External Command Errors
# =============================================================================


class CommandError(GitmError):
    """An external command failed to execute or returned unusable output."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
    ):
        details = {}
        if command:
            details["command"] = " ".join(command)
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr
        super().__init__(message, details)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitError(CommandError):
    """Base class for git-related errors."""

    pass


class GitCommandError(GitError):
    """Git command failed to execute."""

    pass


class NotAGitRepoError(GitError):
    """Path is not a git repository."""

    pass


class IssueTrackerError(CommandError):
    """Base class for issue tracker (gh) errors."""

    pass


class IssueFetchError(IssueTrackerError):
    """Listing issues failed or returned malformed JSON."""

    pass


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(GitmError):
    """Error parsing external tool output."""

    pass


class LogParseError(ParseError):
    """History stream could not be decoded (fatal for the whole fetch)."""

    pass


class PatchParseError(ParseError):
    """Unified diff could not be decoded."""

    pass


# =============================================================================
# Search Errors
# =============================================================================


class SearchError(GitmError):
    """Base class for search-related errors."""

    pass


class RankingError(SearchError):
    """Ranking precondition violated (e.g. empty corpus)."""

    pass


# =============================================================================
# HTTP/Client Errors
# =============================================================================


class HTTPRequestError(GitmError):
    """HTTP request failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        if response_text:
            details["response_text"] = response_text[:200]
        super().__init__(message, details)
        self.status_code = status_code
        self.response_text = response_text


# =============================================================================
# LLM Provider Errors
# =============================================================================


class LLMError(GitmError):
    """Base class for LLM provider errors."""

    pass


class LLMConnectionError(LLMError):
    """Failed to connect to LLM provider."""

    pass


class LLMTimeoutError(LLMError):
    """LLM request timed out."""

    pass


class LLMResponseError(LLMError):
    """Invalid or unexpected response from LLM."""

    pass


class ClassifierError(LLMError):
    """Classifier tool-call arguments did not match the expected schema."""

    pass
