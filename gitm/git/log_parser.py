"""
History Stream Parser

Decodes the output of

    git log -z --patch --pretty=format:%an|||%ae|||%aD|||%s|||%b|||%H

into Commit records. Each NUL-separated blob holds the delimited metadata
fields followed by that commit's unified diff. Metadata and diff are both
line-oriented text, so the blob is split on the "diff --git" marker: every
line before the first marker is metadata, every line from a marker onward
belongs to a patch fragment, and each marker starts a new fragment.
"""

from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from gitm.configs import DIFF_MARKER, GIT_LOG_DELIMITER, GIT_LOG_FIELDS, get_logger
from gitm.exceptions import LogParseError, PatchParseError
from gitm.models import Author, Commit, FilterConfig
from gitm.patch import parse_patch
from gitm.search.filters import matches_filter

logger = get_logger("git.log_parser")

RECORD_SEPARATOR = "\0"


def split_record(blob: str) -> tuple[list[str], str]:
    """
    Separate one record blob into patch fragments and metadata text.

    Args:
        blob: One NUL-delimited record from the history stream

    Returns:
        Tuple of (patch_fragments, metadata_text). Each fragment starts with
        the diff marker line; metadata_text holds every line that precedes
        the first marker.
    """
    fragments: list[str] = []
    metadata_lines: list[str] = []
    current: list[str] = []
    in_diff = False

    for line in blob.split("\n"):
        if line.startswith(DIFF_MARKER):
            if in_diff and current:
                fragments.append("\n".join(current))
                current = []
            in_diff = True
        if in_diff:
            current.append(line)
        else:
            metadata_lines.append(line)

    if current:
        fragments.append("\n".join(current))

    return fragments, "\n".join(metadata_lines)


def parse_date(raw: str):
    """
    Parse an RFC 2822 date (git's %aD) into an aware UTC datetime.

    Raises:
        LogParseError: If the date cannot be parsed
    """
    try:
        parsed = parsedate_to_datetime(raw.strip())
    except (TypeError, ValueError) as e:
        raise LogParseError(f"Invalid commit date: {raw.strip()!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_record(blob: str) -> Optional[Commit]:
    """
    Parse one record blob into a Commit.

    Returns:
        Commit, or None when the metadata does not split into the expected
        number of fields or the patch is malformed

    Raises:
        LogParseError: If the date field cannot be parsed
    """
    fragments, metadata = split_record(blob)

    fields = metadata.split(GIT_LOG_DELIMITER)
    if len(fields) != len(GIT_LOG_FIELDS):
        logger.debug(f"Dropping record with {len(fields)} fields: {metadata[:80]!r}")
        return None
    name, email, date_raw, title, body, sha = fields

    try:
        patch = parse_patch("\n".join(fragments))
    except PatchParseError as e:
        logger.debug(f"Dropping record {sha.strip()[:7]}: {e}")
        return None

    return Commit(
        author=Author(name=name.strip(), email=email.strip() or None),
        date=parse_date(date_raw),
        title=title,
        body=body.rstrip(),
        sha=sha.strip(),
        patch=patch,
    )


def parse_log(raw: str, filter_config: Optional[FilterConfig] = None) -> list[Commit]:
    """
    Parse a full history stream into commits, oldest first.

    Commits that fail the filter are discarded as they are parsed. The
    stream arrives newest first and is reversed once at the end.

    Args:
        raw: Complete stdout of the history query
        filter_config: Optional author/date filter

    Returns:
        Commits in chronological order (oldest first)

    Raises:
        LogParseError: If any record has an unparseable date
    """
    commits: list[Commit] = []
    dropped = 0
    for blob in raw.split(RECORD_SEPARATOR):
        if not blob.strip():
            continue
        commit = parse_record(blob.lstrip("\n"))
        if commit is None:
            dropped += 1
            continue
        if matches_filter(commit, filter_config):
            commits.append(commit)

    commits.reverse()
    if dropped:
        logger.debug(f"Dropped {dropped} malformed records")
    return commits


def parse_authors(raw: str) -> list[Author]:
    """
    Parse `git log --pretty=format:%an|||%ae` output into distinct authors.

    Authors are distinct by name and kept in first-seen order.
    """
    authors: dict[Author, None] = {}
    for line in raw.splitlines():
        parts = line.split(GIT_LOG_DELIMITER)
        if len(parts) != 2:
            continue
        name = parts[0].strip()
        if not name:
            continue
        author = Author(name=name, email=parts[1].strip() or None)
        authors.setdefault(author, None)
    return list(authors)
