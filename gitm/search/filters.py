"""
Search Filters

Record-level predicates applied while parsing the history stream, and the
de-duplication used when merging ranked lists.
"""

from typing import Callable, Hashable, Iterable, Optional, TypeVar

from gitm.models import Commit, FilterConfig

T = TypeVar("T")


def matches_filter(commit: Commit, filter_config: Optional[FilterConfig]) -> bool:
    """
    Decide whether a commit survives the filter.

    A commit is kept when there is no author filter or the author matches by
    name, and there is no date range or its date lies within the inclusive
    bounds that are present. No filter config keeps everything.
    """
    if filter_config is None:
        return True

    if filter_config.author is not None and commit.author != filter_config.author:
        return False

    if filter_config.date_range is not None:
        since, until = filter_config.date_range
        if since is not None and commit.date < since:
            return False
        if until is not None and commit.date > until:
            return False

    return True


def dedupe_by_identifier(
    items: Iterable[T],
    key: Callable[[T], Hashable] = lambda item: item.identifier,
) -> list[T]:
    """Drop repeated identifiers, keeping the first occurrence and its position."""
    seen: set = set()
    unique = []
    for item in items:
        identifier = key(item)
        if identifier in seen:
            continue
        seen.add(identifier)
        unique.append(item)
    return unique
