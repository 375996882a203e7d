"""Base classes for the similarity system.

This module defines the core abstractions:
- Extractor: Pulls one field out of a book record
- Metric: Computes similarity between two field values
- Feature: Combines an extractor and a metric with a weight
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from shelfcheck.models import BookRecord

T = TypeVar("T")


class Extractor(ABC, Generic[T]):
    """Extracts a value from a book record for similarity comparison.

    Returning ``None`` means the record carries no signal for this field,
    and any feature built on the extractor is skipped for that pair.

    Examples:
        - IsbnExtractor: Raw ISBN string
        - TitleExtractor: Title string
        - AuthorExtractor: Author string
        - PublisherExtractor: Publisher string
    """

    @abstractmethod
    def extract(self, record: BookRecord) -> Optional[T]:
        """Extract a value from the record.

        Args:
            record: Record to extract value from

        Returns:
            Extracted value, or None if the field is absent
        """
        pass


class Metric(ABC, Generic[T]):
    """Computes similarity between two values.

    All similarity scores must be normalized to [0, 1] where:
    - 0 = completely dissimilar
    - 1 = identical

    Metrics must be symmetric: ``similarity(a, b) == similarity(b, a)``.

    Examples:
        - IsbnMetric: ISBN-10/13 aware equality
        - TitleMetric: Token overlap with edition boost
        - AuthorMetric: Name-part overlap with reversal detection
        - PublisherMetric: Word overlap
    """

    @abstractmethod
    def similarity(self, value1: T, value2: T) -> float:
        """Compute similarity between two values.

        Args:
            value1: First value
            value2: Second value

        Returns:
            Similarity score in [0, 1]
        """
        pass


class Feature:
    """Combines an extractor and a metric with a weight.

    A Feature represents one aspect of book similarity, such as ISBN
    equivalence or title overlap.

    Attributes:
        extractor: Extractor for getting values from records
        metric: Metric for computing similarity between values
        weight: Weight for this feature (default 1.0)
        name: Optional name for this feature
    """

    def __init__(
        self,
        extractor: Extractor,
        metric: Metric,
        weight: float = 1.0,
        name: str = None,
    ):
        """Initialize a feature.

        Args:
            extractor: Extractor for getting values from records
            metric: Metric for computing similarity between values
            weight: Weight for this feature (default 1.0)
            name: Optional name for this feature
        """
        self.extractor = extractor
        self.metric = metric
        self.weight = weight
        self.name = name or f"{extractor.__class__.__name__}+{metric.__class__.__name__}"

    def compare(self, record1: BookRecord, record2: BookRecord) -> Optional[float]:
        """Compute the unweighted similarity of two records on this feature.

        Args:
            record1: First record
            record2: Second record

        Returns:
            Similarity in [0, 1], or None when either side lacks the field
        """
        value1 = self.extractor.extract(record1)
        value2 = self.extractor.extract(record2)
        if not value1 or not value2:
            return None
        return self.metric.similarity(value1, value2)

    def similarity(self, record1: BookRecord, record2: BookRecord) -> Optional[float]:
        """Compute weighted similarity between two records.

        Args:
            record1: First record
            record2: Second record

        Returns:
            Weighted similarity score, or None when the feature is skipped
        """
        sim = self.compare(record1, record2)
        if sim is None:
            return None
        return sim * self.weight

    def __repr__(self) -> str:
        return f"Feature(name={self.name!r}, weight={self.weight})"
