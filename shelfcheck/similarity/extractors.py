"""Concrete extractor implementations."""

from typing import Optional

from shelfcheck.models import BookRecord
from shelfcheck.similarity.base import Extractor


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class IsbnExtractor(Extractor[str]):
    """Extracts the raw ISBN string from a record."""

    def extract(self, record: BookRecord) -> Optional[str]:
        return _clean(record.isbn)


class TitleExtractor(Extractor[str]):
    """Extracts the title from a record."""

    def extract(self, record: BookRecord) -> Optional[str]:
        return _clean(record.title)


class AuthorExtractor(Extractor[str]):
    """Extracts the author name from a record."""

    def extract(self, record: BookRecord) -> Optional[str]:
        return _clean(record.author)


class PublisherExtractor(Extractor[str]):
    """Extracts the publisher name from a record."""

    def extract(self, record: BookRecord) -> Optional[str]:
        """Extract publisher from record.

        Args:
            record: Record to extract from

        Returns:
            Publisher name, or None if not available
        """
        return _clean(record.publisher)
