"""
Mention Classifiers

Decide whether a search query asks to filter by author or by date, and
extract the filter value.
"""

from datetime import date, datetime, time, timezone
from typing import Iterable, Optional

from pydantic import BaseModel

from gitm.configs import get_logger
from gitm.exceptions import ClassifierError
from gitm.llm.classifier import BinaryClassificationResult, LLMBinaryClassifier
from gitm.llm.provider import LLMProvider, Property
from gitm.models import Author

logger = get_logger("llm.mention_classifiers")

DateRange = tuple[Optional[datetime], Optional[datetime]]


class AuthorMentionArgs(BaseModel):
    classification: bool
    author_name: Optional[str] = None


class DateMentionArgs(BaseModel):
    classification: bool
    since: Optional[str] = None
    until: Optional[str] = None


class AuthorMentionClassifier:
    """
    Extracts an author filter. The model is shown the complete author list
    and its answer is only accepted when it names an author in that list.
    """

    def __init__(self, provider: LLMProvider, existing_authors: Iterable[Author]):
        self.existing_authors = set(existing_authors)
        names = sorted(author.name for author in self.existing_authors if author.name)
        author_list = "\n".join(f"- {name}" for name in names)
        self.classifier = LLMBinaryClassifier(
            provider,
            instruction="Determine if the user's query is trying to filter by the author.",
            result_properties={
                "author_name": Property(
                    type="string",
                    description="The name of the author that the user is trying to filter by",
                )
            },
            additional_information=(
                f"## Complete Author List\n{author_list}\n\n"
                "*The author name must be an exact match to the author's name in the list above.*"
            ),
        )

    def classify(self, query: str) -> BinaryClassificationResult[Author]:
        """
        Raises:
            LLMError: The model call failed
            ClassifierError: The model's arguments were malformed
        """
        args = self.classifier.classify_arguments(query, AuthorMentionArgs)
        if not args.classification or not args.author_name:
            return BinaryClassificationResult.negative()

        author = Author(name=args.author_name)
        if author not in self.existing_authors:
            logger.debug(f"Classifier named unknown author: {args.author_name!r}")
            return BinaryClassificationResult.negative()
        return BinaryClassificationResult(classification=True, content=author)


def _parse_day(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise ClassifierError(f"Invalid {field_name} date: {value!r} (expected YYYY-MM-DD)") from e


class DateMentionClassifier:
    """
    Extracts an inclusive date range. `since` starts at 00:00 UTC of its day
    and `until` ends at the last microsecond of its day; either may be absent.
    """

    def __init__(self, provider: LLMProvider, today: Optional[date] = None):
        today = today or date.today()
        self.classifier = LLMBinaryClassifier(
            provider,
            instruction="Determine if the user's query is trying to filter by the date.",
            result_properties={
                "since": Property(
                    type="string",
                    description="The YYYY-MM-DD since date that the user is trying to filter by",
                ),
                "until": Property(
                    type="string",
                    description="The YYYY-MM-DD until date that the user is trying to filter by",
                ),
            },
            additional_information=(
                "The date must be in the format YYYY-MM-DD.\n\n"
                f"The current datetime is: {today.strftime('%Y-%m-%d')}"
            ),
        )

    def classify(self, query: str) -> BinaryClassificationResult[DateRange]:
        """
        Raises:
            LLMError: The model call failed
            ClassifierError: Malformed arguments or a date not in YYYY-MM-DD
        """
        args = self.classifier.classify_arguments(query, DateMentionArgs)
        if not args.classification:
            return BinaryClassificationResult.negative()

        since_day = _parse_day(args.since, "since")
        until_day = _parse_day(args.until, "until")
        if since_day is None and until_day is None:
            return BinaryClassificationResult.negative()
        if since_day and until_day and since_day > until_day:
            logger.warning(f"Ignoring inverted date range: {since_day} > {until_day}")
            return BinaryClassificationResult.negative()

        since = datetime.combine(since_day, time.min, tzinfo=timezone.utc) if since_day else None
        until = datetime.combine(until_day, time.max, tzinfo=timezone.utc) if until_day else None
        return BinaryClassificationResult(classification=True, content=(since, until))
