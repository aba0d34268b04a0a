"""
gitm Command Line Interface

Search the current repository's commits (and optionally its GitHub issues)
with a natural-language query:

    gitm "where did we fix the login timeout"
    gitm --issues-too --include-patches "retry_on_timeout"
"""

import argparse
import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

from gitm import __version__
from gitm.configs import get_full_config, get_logger, setup_logging
from gitm.exceptions import GitmError, MissingConfigError, NotAGitRepoError, ValidationError
from gitm.git import GitClient, is_git_repo
from gitm.github import GitHubClient
from gitm.llm import get_provider
from gitm.models import Commit, Issue, SearchMode
from gitm.pipeline import SearchPipeline, SearchResults
from gitm.utils import missing_tools

logger = get_logger("cli")

console = Console()
err_console = Console(stderr=True)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitm",
        description="Search git commits and GitHub issues with BM25 and LLM query filters",
    )
    parser.add_argument("query", help="Free-text search query")
    parser.add_argument(
        "--api-key",
        default=None,
        help="OpenAI API key (default: OPENAI_API_KEY)",
    )
    parser.add_argument("--issues-only", action="store_true", help="Search GitHub issues only")
    parser.add_argument("--issues-too", action="store_true", help="Search GitHub issues as well as commits")
    parser.add_argument(
        "--include-patches",
        action="store_true",
        help="Also rank commits by the lines their patches add",
    )
    parser.add_argument(
        "--no-classify",
        action="store_true",
        help="Do not extract author/date filters from the query",
    )
    parser.add_argument(
        "--search-all",
        action="store_true",
        help="Fetch the full history even for large repositories",
    )
    parser.add_argument("-n", "--max-results", type=positive_int, default=None, help="Results per list")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_mode(issues_only: bool, issues_too: bool) -> SearchMode:
    """
    Map the issue flags to a search mode.

    Raises:
        ValidationError: Both flags are set
    """
    if issues_only and issues_too:
        raise ValidationError("--issues-only and --issues-too are mutually exclusive")
    if issues_only:
        return SearchMode.ISSUES
    if issues_too:
        return SearchMode.COMMITS_AND_ISSUES
    return SearchMode.COMMITS


def check_preconditions(mode: SearchMode, classify: bool, api_key: Optional[str], path: Optional[str] = None) -> None:
    """
    Verify the environment before any fetch.

    Raises:
        GitmError: A required tool is missing, the directory is not a
            repository, or an API key is needed and absent
    """
    required = ["git"]
    if mode.includes_issues:
        required.append("gh")
    missing = missing_tools(required)
    if missing:
        raise GitmError(f"Required tools not found: {', '.join(missing)}")

    if not is_git_repo(path):
        raise NotAGitRepoError("Not inside a git repository")

    if classify and mode.includes_commits and not api_key:
        raise MissingConfigError("An OpenAI API key is required (use --api-key or OPENAI_API_KEY, or pass --no-classify)")


def print_commit(commit: Commit) -> None:
    console.print(
        f"[bold yellow]{commit.short_sha}[/bold yellow] [bold]{escape(commit.title)}[/bold]"
    )
    console.print(f"  [dim]{escape(str(commit.author))} - {commit.date:%Y-%m-%d %H:%M}[/dim]")
    body = commit.body.strip()
    if body:
        for line in body.splitlines():
            console.print(f"    {escape(line)}")
    console.print()


def print_issue(issue: Issue) -> None:
    console.print(f"[bold cyan]#{issue.number}[/bold cyan] [bold]{escape(issue.title)}[/bold]")
    console.print(f"  [dim]{escape(str(issue.author))} - {issue.created_at:%Y-%m-%d}[/dim]")
    console.print()


def print_results(results: SearchResults, mode: SearchMode) -> None:
    if mode.includes_commits:
        console.rule("Commits")
        if not results.commits:
            console.print("No results")
        for commit in results.commits:
            print_commit(commit)

    if mode.includes_issues:
        console.rule("Issues")
        if not results.issues:
            console.print("No results")
        for issue in results.issues:
            print_issue(issue)


def run(args: argparse.Namespace) -> SearchResults:
    config = get_full_config()
    mode = resolve_mode(args.issues_only, args.issues_too)
    classify = config["classify"] and not args.no_classify
    api_key = args.api_key or config.get("api_key") or os.environ.get("OPENAI_API_KEY")

    check_preconditions(mode, classify, api_key)

    pipeline = SearchPipeline(
        query=args.query,
        mode=mode,
        max_results=args.max_results if args.max_results is not None else config["max_results"],
        include_patches=args.include_patches or config["include_patches"],
        classify=classify,
        search_all=args.search_all,
        k1=config["k1"],
        b=config["b"],
        git_client=GitClient(),
        github_client=GitHubClient(limit=config["issue_limit"]),
        provider=get_provider(api_key, config) if classify else None,
    )
    results = pipeline.execute()
    print_results(results, mode)
    return results


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(debug=True if args.debug else None)

    try:
        run(args)
    except ValidationError as e:
        err_console.print(f"[red]error:[/red] {escape(e.message)}")
        sys.exit(2)
    except GitmError as e:
        logger.debug(f"Aborted: {e}")
        err_console.print(f"[red]error:[/red] {escape(e.message)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
