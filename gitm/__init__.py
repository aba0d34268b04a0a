"""gitm: search git history and GitHub issues with BM25."""

__version__ = "0.1.0"
