"""
gitm Search Module

BM25 ranking over commits and issues, the per-search corpus store, and the
filters applied while parsing history.
"""

from gitm.search.bm25 import BM25Ranker, RankingResult, SubstringIdfBM25
from gitm.search.filters import dedupe_by_identifier, matches_filter
from gitm.search.retriever import BM25Retriever
from gitm.search.splitters import Splitter
from gitm.search.store import Store

__all__ = [
    "BM25Ranker",
    "BM25Retriever",
    "RankingResult",
    "Splitter",
    "Store",
    "SubstringIdfBM25",
    "dedupe_by_identifier",
    "matches_filter",
]
