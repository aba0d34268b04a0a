"""
Search Pipeline

Orchestrates one search invocation: query classification into filters,
history fetch, BM25 ranking over one or two commit views, and the
independent issue search.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Optional

from gitm.configs import DEFAULT_B, DEFAULT_K1, DEFAULT_MAX_RESULTS, get_logger
from gitm.exceptions import GitmError
from gitm.git.client import GitClient
from gitm.github.client import GitHubClient
from gitm.llm.classifier import BinaryClassificationResult
from gitm.llm.mention_classifiers import AuthorMentionClassifier, DateMentionClassifier
from gitm.llm.provider import LLMProvider
from gitm.models import Commit, DisplayMode, FilterConfig, Issue, SearchMode
from gitm.search import BM25Ranker, BM25Retriever, Splitter, Store, dedupe_by_identifier

logger = get_logger("search.pipeline")


@dataclass
class SearchResults:
    """Ranked commits and ranked issues. The two lists are never merged."""

    commits: list[Commit] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    filter_config: FilterConfig = field(default_factory=FilterConfig)


@dataclass
class SearchPipeline:
    """
    Encapsulates the search pipeline for one query.

    Phases:
    1. Classification (author and date mentions, run concurrently)
    2. History fetch with parse-time filtering
    3. Ranking of the title+body view
    4. Optional ranking of the added-lines patch view, appended
    5. De-duplication by commit sha
    6. Independent issue fetch and ranking
    """

    query: str
    mode: SearchMode = SearchMode.COMMITS
    max_results: int = DEFAULT_MAX_RESULTS
    include_patches: bool = False
    classify: bool = True
    search_all: bool = False
    k1: float = DEFAULT_K1
    b: float = DEFAULT_B

    git_client: GitClient = field(default_factory=GitClient, repr=False)
    github_client: GitHubClient = field(default_factory=GitHubClient, repr=False)
    provider: Optional[LLMProvider] = field(default=None, repr=False)

    def execute(self) -> SearchResults:
        """
        Run the pipeline.

        Raises:
            GitmError: The history fetch failed (commit modes only)
        """
        logger.info(
            f"Search query: '{self.query}' (mode={self.mode.value}, "
            f"patches={self.include_patches}, classify={self.classify})"
        )
        start_time = time.time()
        results = SearchResults()

        if self.mode.includes_commits:
            results.filter_config = self._build_filter_config()
            commits = self._fetch_commits(results.filter_config)
            results.commits = self._rank_commits(commits)

        if self.mode.includes_issues:
            results.issues = self._search_issues()

        total_time = time.time() - start_time
        logger.info(
            f"Search complete: {len(results.commits)} commits, "
            f"{len(results.issues)} issues in {total_time*1000:.1f}ms"
        )
        return results

    # --- Phase 1: classification ---

    def _build_filter_config(self) -> FilterConfig:
        filter_config = FilterConfig(fetch_all=self.search_all)
        if not self.classify or self.provider is None:
            return filter_config

        classify_start = time.time()
        with ThreadPoolExecutor(max_workers=2) as executor:
            author_future = executor.submit(self._classify_author)
            date_future = executor.submit(self._classify_date)
            author_result = author_future.result()
            date_result = date_future.result()

        if author_result.classification:
            filter_config.author = author_result.content
        if date_result.classification:
            filter_config.date_range = date_result.content

        classify_time = time.time() - classify_start
        logger.debug(
            f"Classification: author={filter_config.author}, "
            f"date_range={filter_config.date_range} in {classify_time*1000:.1f}ms"
        )
        return filter_config

    def _classify_author(self) -> BinaryClassificationResult:
        try:
            authors = self.git_client.get_all_authors()
            return AuthorMentionClassifier(self.provider, authors).classify(self.query)
        except GitmError as e:
            logger.warning(f"Author classification failed, no author filter: {e}")
            return BinaryClassificationResult.negative()

    def _classify_date(self) -> BinaryClassificationResult:
        try:
            return DateMentionClassifier(self.provider).classify(self.query)
        except GitmError as e:
            logger.warning(f"Date classification failed, no date filter: {e}")
            return BinaryClassificationResult.negative()

    # --- Phase 2: fetch ---

    def _fetch_commits(self, filter_config: FilterConfig) -> list[Commit]:
        try:
            return self.git_client.get_all_commits(filter_config)
        except GitmError as e:
            logger.error(f"History fetch failed: {e}")
            raise

    # --- Phases 3-5: ranking ---

    def _rank_commits(self, commits: list[Commit]) -> list[Commit]:
        if not commits:
            logger.info("Search: no commits after filtering")
            return []

        rank_start = time.time()
        retriever = BM25Retriever(BM25Ranker(k1=self.k1, b=self.b))
        store = Store(replace(c, display_mode=DisplayMode.TITLE_AND_BODY) for c in commits)
        ranked = retriever.retrieve(self.query, store, self.max_results)

        if self.include_patches:
            patch_retriever = BM25Retriever(
                BM25Ranker(k1=self.k1, b=self.b, splitter=Splitter.PUNCTUATION)
            )
            patch_store = Store(replace(c, display_mode=DisplayMode.PATCH_ADDED) for c in commits)
            patch_ranked = patch_retriever.retrieve(self.query, patch_store, self.max_results)
            ranked = ranked + [replace(c, display_mode=DisplayMode.TITLE_AND_BODY) for c in patch_ranked]

        unique = dedupe_by_identifier(ranked)
        rank_time = time.time() - rank_start
        logger.debug(
            f"Ranking: {len(commits)} commits -> {len(unique)} results "
            f"({len(ranked) - len(unique)} duplicates) in {rank_time*1000:.1f}ms"
        )
        return unique

    # --- Phase 6: issues ---

    def _search_issues(self) -> list[Issue]:
        try:
            issues = self.github_client.get_all_issues()
        except GitmError as e:
            logger.error(f"Issue search failed: {e}")
            return []
        if not issues:
            return []
        retriever = BM25Retriever(BM25Ranker(k1=self.k1, b=self.b))
        return retriever.retrieve(self.query, Store(issues), self.max_results)
