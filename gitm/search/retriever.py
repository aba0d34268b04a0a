"""
BM25 Retriever

Binds a BM25Ranker to a Store and returns the top items for a query.
"""

from typing import Any, Generic, Optional, TypeVar

from gitm.search.bm25 import BM25Ranker
from gitm.search.store import Store

T = TypeVar("T")


class BM25Retriever(Generic[T]):
    """Top-N retrieval over a Store."""

    def __init__(self, ranker: Optional[BM25Ranker] = None):
        self.ranker = ranker or BM25Ranker()

    def retrieve(self, query: Any, store: Store[T], max_num_results: int) -> list[T]:
        """
        Return up to max_num_results items, best first.

        Raises:
            RankingError: If the store is empty
        """
        ranked = self.ranker.rank(query, store.items(), max_results=max_num_results)
        return [result.item for result in ranked]
