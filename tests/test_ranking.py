"""
Tests for splitters, BM25 ranking, the corpus store and the retriever.
"""

import math

import pytest

from gitm.exceptions import RankingError
from gitm.search import BM25Ranker, BM25Retriever, RankingResult, Splitter, Store

CORPUS = [
    "Germany was founded in 1871",
    "Apples fall downwards",
    "What happened to Alan Turing?",
    "Google is searching for answers",
    "When was the first computer invented?",
]


class TestSplitter:
    """Tests for the Splitter strategies."""

    def test_whitespace_collapses_runs(self):
        assert Splitter.WHITESPACE.split("a  b\tc\n") == ["a", "b", "c"]

    def test_char_keeps_every_character(self):
        assert Splitter.CHAR.split("ab c") == ["a", "b", " ", "c"]

    def test_punctuation_splits_identifiers(self):
        """Dots, brackets and underscores separate terms; empty terms are dropped."""
        assert Splitter.PUNCTUATION.split("foo.bar(baz_qux)") == ["foo", "bar", "baz", "qux"]

    def test_no_case_folding(self):
        assert Splitter.WHITESPACE.split("Germany germany") == ["Germany", "germany"]

    def test_lookup_by_value(self):
        assert Splitter("punctuation") is Splitter.PUNCTUATION


class TestBM25Ranker:
    """Tests for BM25Ranker scoring and ordering."""

    def test_empty_corpus_raises(self):
        with pytest.raises(RankingError):
            BM25Ranker().rank("query", [])

    def test_lowercase_query_scores_zero_everywhere(self):
        """Matching is case sensitive, so 'germany' matches nothing."""
        scores = BM25Ranker().score("some search about germany", CORPUS)
        assert scores == [0.0] * len(CORPUS)

        results = BM25Ranker().rank("some search about germany", CORPUS)
        assert results[0].item == "Germany was founded in 1871"

    def test_capitalized_query_matches_exact_score(self):
        """idf uses substring counts; tf uses exact tokens."""
        scores = BM25Ranker().score("some search about Germany", CORPUS)

        doc_lens = [5, 3, 5, 5, 6]
        avgdl = sum(doc_lens) / len(doc_lens)
        idf = math.log((5 - 1 + 0.5) / (1 + 0.5) + 1)
        expected = idf * 2.2 / (1 + 1.2 * (0.25 + 0.75 * 5 / avgdl))

        assert scores[0] == pytest.approx(expected)
        assert scores[0] == pytest.approx(1.36306, abs=1e-5)
        assert scores[1:] == [0.0, 0.0, 0.0, 0.0]

        top = BM25Ranker().rank("some search about Germany", CORPUS, max_results=1)
        assert top[0].item == "Germany was founded in 1871"

    def test_scores_non_increasing(self):
        results = BM25Ranker().rank("was the first Alan computer", CORPUS)
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert len(results) == len(CORPUS)

    def test_scores_non_negative(self):
        for splitter in Splitter:
            scores = BM25Ranker(splitter=splitter).score("was the first computer", CORPUS)
            assert all(score >= 0 for score in scores)

    def test_ranking_is_idempotent(self):
        ranker = BM25Ranker()
        assert ranker.score("When was it", CORPUS) == ranker.score("When was it", CORPUS)

    def test_max_results_truncates(self):
        assert len(BM25Ranker().rank("was", CORPUS, max_results=2)) == 2
        assert len(BM25Ranker().rank("was", CORPUS, max_results=50)) == len(CORPUS)

    def test_repeated_query_term_counts_once(self):
        ranker = BM25Ranker()
        assert ranker.score("Apples Apples", CORPUS) == ranker.score("Apples", CORPUS)

    def test_all_empty_documents_score_zero(self):
        assert BM25Ranker().score("anything", ["", ""]) == [0.0, 0.0]

    def test_empty_document_under_full_length_normalization(self):
        scores = BM25Ranker(b=1.0).score("foo", ["foo bar", ""])
        assert not any(math.isnan(score) for score in scores)
        assert scores[0] > 0
        assert scores[1] == 0.0

    def test_ranks_arbitrary_items_by_str(self):
        class Doc:
            def __init__(self, text):
                self.text = text

            def __str__(self):
                return self.text

        docs = [Doc("nothing here"), Doc("retry on timeout")]
        results = BM25Ranker().rank("timeout", docs)
        assert results[0].item is docs[1]


class TestRankingResult:
    """Tests for RankingResult ordering."""

    def test_ordered_by_score_only(self):
        low = RankingResult(score=0.5, item="b")
        high = RankingResult(score=2.0, item="a")
        assert low < high
        assert RankingResult(score=1.0, item="x") == RankingResult(score=1.0, item="y")
        assert max([low, high]) is high


class TestStore:
    """Tests for the thread-safe corpus store."""

    def test_get_in_and_out_of_range(self):
        store = Store(["a", "b"])
        assert store.get(0) == "a"
        assert store.get(2) is None

    def test_append_and_len(self):
        store = Store()
        store.append("a")
        store.append("b")
        assert len(store) == 2
        assert store.items() == ["a", "b"]

    def test_items_is_a_snapshot(self):
        store = Store(["a"])
        snapshot = store.items()
        store.append("b")
        assert snapshot == ["a"]


class TestBM25Retriever:
    """Tests for top-N retrieval over a store."""

    def test_returns_best_items_first(self):
        retriever = BM25Retriever()
        results = retriever.retrieve("Apples fall", Store(CORPUS), max_num_results=1)
        assert results == ["Apples fall downwards"]

    def test_empty_store_raises(self):
        with pytest.raises(RankingError):
            BM25Retriever().retrieve("query", Store(), max_num_results=3)
