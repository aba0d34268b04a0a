"""
Text Splitters

Turn free text into an ordered list of terms for BM25. No strategy
lowercases, stems or drops stop-words: scoring is case and form sensitive.
"""

import re
from enum import Enum

# Runs of whitespace, punctuation, symbols and underscores
PUNCTUATION_SPLIT_RE = re.compile(r"[\W_]+")


class Splitter(str, Enum):
    """
    Closed set of splitting strategies.

    - WHITESPACE: split on runs of whitespace (default)
    - CHAR: one term per character
    - PUNCTUATION: split on whitespace and punctuation, for code where
      identifiers are joined by dots, colons, underscores and brackets
    """

    WHITESPACE = "whitespace"
    CHAR = "char"
    PUNCTUATION = "punctuation"

    def split(self, text: str) -> list[str]:
        if self is Splitter.CHAR:
            return list(text)
        if self is Splitter.PUNCTUATION:
            return [term for term in PUNCTUATION_SPLIT_RE.split(text) if term]
        return text.split()
