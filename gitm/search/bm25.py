"""
BM25 Ranking

Ranks any corpus of displayable items (anything with a meaningful __str__)
against a query. Built on rank_bm25's BM25Okapi for the term-frequency and
length bookkeeping, with two differences from stock Okapi:

- idf(term) = ln((N - n_t + 0.5) / (n_t + 0.5) + 1), where n_t counts corpus
  items whose rendered text contains the term as a substring. This is an
  approximation: "search" is credited to a document containing "searching".
- Each distinct query term contributes once.

Term frequency is exact token equality under the configured splitter.
"""

import heapq
import math
import time
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Generic, Optional, Sequence, TypeVar

import numpy as np
from rank_bm25 import BM25Okapi

from gitm.configs import DEFAULT_B, DEFAULT_K1, get_logger
from gitm.exceptions import RankingError
from gitm.search.splitters import Splitter

logger = get_logger("search.bm25")

T = TypeVar("T")


@total_ordering
@dataclass(eq=False)
class RankingResult(Generic[T]):
    """A scored item. Ordered by score only."""

    score: float
    item: T

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RankingResult):
            return NotImplemented
        return self.score == other.score

    def __lt__(self, other: "RankingResult") -> bool:
        return self.score < other.score


class SubstringIdfBM25(BM25Okapi):
    """BM25Okapi with substring document frequency and distinct query terms."""

    def __init__(
        self,
        tokenized_corpus: list[list[str]],
        texts: list[str],
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
    ):
        self._texts = texts
        super().__init__(tokenized_corpus, k1=k1, b=b)

    def _calc_idf(self, nd: dict) -> None:
        # Document frequency depends on the query term, not the vocabulary,
        # so idf is filled lazily by term_idf()
        self.idf = {}

    def term_idf(self, term: str) -> float:
        if term not in self.idf:
            n_t = sum(1 for text in self._texts if term in text)
            self.idf[term] = math.log((self.corpus_size - n_t + 0.5) / (n_t + 0.5) + 1)
        return self.idf[term]

    def get_scores(self, query: list[str]) -> np.ndarray:
        score = np.zeros(self.corpus_size)
        if self.avgdl == 0:
            # Every document is empty: no term can occur
            return score
        doc_len = np.array(self.doc_len)
        length_norm = self.k1 * (1 - self.b + self.b * doc_len / self.avgdl)
        for term in dict.fromkeys(query):
            q_freq = np.array([doc.get(term) or 0 for doc in self.doc_freqs], dtype=float)
            denom = q_freq + length_norm
            # denom is 0 only for an empty document under b=1; the term is absent there
            tf = np.divide(
                q_freq * (self.k1 + 1),
                denom,
                out=np.zeros_like(q_freq),
                where=denom > 0,
            )
            score += self.term_idf(term) * tf
        return score


class BM25Ranker:
    """
    Scores a corpus against a query and returns items by descending score.

    Configuration:
        k1: Term frequency saturation (default 1.2)
        b: Length normalization strength (default 0.75)
        splitter: Tokenization strategy (default whitespace)
    """

    def __init__(
        self,
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
        splitter: Splitter = Splitter.WHITESPACE,
    ):
        self.k1 = k1
        self.b = b
        self.splitter = splitter

    def __repr__(self) -> str:
        return f"BM25Ranker(k1={self.k1}, b={self.b}, splitter={self.splitter.value})"

    def score(self, query: Any, corpus: Sequence[T]) -> list[float]:
        """
        Compute one BM25 score per corpus item, in corpus order.

        Raises:
            RankingError: If the corpus is empty
        """
        if len(corpus) == 0:
            raise RankingError("Cannot rank an empty corpus")

        texts = [str(item) for item in corpus]
        tokenized = [self.splitter.split(text) for text in texts]
        index = SubstringIdfBM25(tokenized, texts, k1=self.k1, b=self.b)
        return [float(s) for s in index.get_scores(self.splitter.split(str(query)))]

    def rank(
        self,
        query: Any,
        corpus: Sequence[T],
        max_results: Optional[int] = None,
    ) -> list[RankingResult[T]]:
        """
        Rank a corpus against a query.

        Ties in score come out in an unspecified order; callers must not rely
        on it.

        Args:
            query: Anything renderable with str()
            corpus: Non-empty sequence of items renderable with str()
            max_results: Return at most this many results (all when None)

        Returns:
            RankingResults in non-increasing score order

        Raises:
            RankingError: If the corpus is empty
        """
        start_time = time.time()
        scores = self.score(query, corpus)

        heap = [(-score, position) for position, score in enumerate(scores)]
        heapq.heapify(heap)

        count = len(heap) if max_results is None else min(max_results, len(heap))
        results = []
        for _ in range(count):
            neg_score, position = heapq.heappop(heap)
            results.append(RankingResult(score=-neg_score, item=corpus[position]))

        elapsed = time.time() - start_time
        logger.debug(
            f"Ranked {len(corpus)} items ({self.splitter.value}) "
            f"-> {len(results)} results in {elapsed*1000:.1f}ms"
        )
        return results
