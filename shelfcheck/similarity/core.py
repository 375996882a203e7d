"""Core SimilarityEngine class with fluent API."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from shelfcheck.models import BookRecord, SimilarityResult
from shelfcheck.similarity.base import Feature, Metric
from shelfcheck.similarity.classification import (
    FieldScores,
    classify_match,
    generate_reasons,
)
from shelfcheck.similarity.extractors import (
    AuthorExtractor,
    IsbnExtractor,
    PublisherExtractor,
    TitleExtractor,
)
from shelfcheck.similarity.metrics import (
    EDITION_KEYWORDS,
    AuthorMetric,
    IsbnMetric,
    PublisherMetric,
    TitleMetric,
)

logger = logging.getLogger(__name__)

# Results at or below this aggregate score are not reported
DEFAULT_MIN_SCORE = 0.3

RecordLike = Union[BookRecord, Dict[str, Any]]


def _as_record(item: RecordLike) -> BookRecord:
    if isinstance(item, BookRecord):
        return item
    return BookRecord.from_dict(item)


class SimilarityEngine:
    """Find books in a collection that look like a candidate book.

    This class uses a fluent API for configuration:

    Example:
        >>> engine = (SimilarityEngine()
        ...     .isbn(weight=0.4)
        ...     .title(weight=0.3)
        ...     .author(weight=0.2)
        ...     .publisher(weight=0.1))
        >>> matches = engine.find_similar(candidate, collection)

    Each method adds a feature (extractor + metric + weight). The aggregate
    score is the weighted average over the features both records can supply,
    so a missing field neither helps nor hurts.

    The engine holds configuration only. Every call works on the arguments it
    is given and keeps nothing between calls, so one engine can be shared
    across threads.
    """

    def __init__(
        self,
        min_score: float = DEFAULT_MIN_SCORE,
        edition_keywords: Optional[Iterable[str]] = None,
    ):
        """Initialize empty engine configuration.

        Args:
            min_score: Results must score strictly above this (default 0.3)
            edition_keywords: Words that mark a title as a specific edition
        """
        self.features: List[Feature] = []
        self.min_score = min_score
        self.edition_keywords = frozenset(
            EDITION_KEYWORDS if edition_keywords is None else
            (word.lower() for word in edition_keywords)
        )

    @classmethod
    def from_config(cls, config) -> "SimilarityEngine":
        """Build an engine from a ``SimilarityConfig`` or full ``ShelfcheckConfig``."""
        sim_config = getattr(config, "similarity", config)
        engine = cls(
            min_score=sim_config.min_score,
            edition_keywords=sim_config.edition_keywords,
        )
        return (
            engine.isbn(weight=sim_config.isbn_weight)
            .title(weight=sim_config.title_weight)
            .author(weight=sim_config.author_weight)
            .publisher(weight=sim_config.publisher_weight)
        )

    # ===== Presets =====

    def default(self) -> "SimilarityEngine":
        """Default duplicate-detection weights.

        Weights:
        - ISBN: 0.4
        - Title: 0.3
        - Author: 0.2
        - Publisher: 0.1

        Returns:
            Self for chaining
        """
        return (
            self.isbn(weight=0.4)
            .title(weight=0.3)
            .author(weight=0.2)
            .publisher(weight=0.1)
        )

    # ===== Semantic Methods =====

    def isbn(self, weight: float = 0.4, metric: Optional[Metric] = None) -> "SimilarityEngine":
        """Add ISBN equivalence (ISBN-10 and ISBN-13 aware).

        Args:
            weight: Weight for this feature (default 0.4)
            metric: Optional custom metric (default IsbnMetric)

        Returns:
            Self for chaining
        """
        metric = metric or IsbnMetric()
        self.features.append(Feature(IsbnExtractor(), metric, weight, "isbn"))
        return self

    def title(self, weight: float = 0.3, metric: Optional[Metric] = None) -> "SimilarityEngine":
        """Add title word overlap.

        Args:
            weight: Weight for this feature (default 0.3)
            metric: Optional custom metric (default TitleMetric)

        Returns:
            Self for chaining
        """
        metric = metric or TitleMetric(self.edition_keywords)
        self.features.append(Feature(TitleExtractor(), metric, weight, "title"))
        return self

    def author(self, weight: float = 0.2, metric: Optional[Metric] = None) -> "SimilarityEngine":
        """Add author name similarity.

        Args:
            weight: Weight for this feature (default 0.2)
            metric: Optional custom metric (default AuthorMetric)

        Returns:
            Self for chaining
        """
        metric = metric or AuthorMetric()
        self.features.append(Feature(AuthorExtractor(), metric, weight, "author"))
        return self

    def publisher(self, weight: float = 0.1, metric: Optional[Metric] = None) -> "SimilarityEngine":
        """Add publisher word overlap.

        Args:
            weight: Weight for this feature (default 0.1)
            metric: Optional custom metric (default PublisherMetric)

        Returns:
            Self for chaining
        """
        metric = metric or PublisherMetric()
        self.features.append(Feature(PublisherExtractor(), metric, weight, "publisher"))
        return self

    # ===== Escape Hatch =====

    def custom(self, feature: Feature, name: Optional[str] = None) -> "SimilarityEngine":
        """Add a custom feature.

        Args:
            feature: Custom Feature (extractor + metric + weight)
            name: Optional name for this feature

        Returns:
            Self for chaining
        """
        if name:
            feature.name = name
        self.features.append(feature)
        return self

    # ===== Core Functionality =====

    def field_scores(self, record1: RecordLike, record2: RecordLike) -> FieldScores:
        """Unweighted per-feature scores, None for features that were skipped."""
        record1 = _as_record(record1)
        record2 = _as_record(record2)
        return {feature.name: feature.compare(record1, record2) for feature in self.features}

    def _aggregate(self, scores: FieldScores) -> float:
        total_score = 0.0
        max_score = 0.0

        for feature in self.features:
            value = scores.get(feature.name)
            if value is None:
                continue
            total_score += value * feature.weight
            max_score += feature.weight

        return total_score / max_score if max_score > 0 else 0.0

    def similarity(self, record1: RecordLike, record2: RecordLike) -> float:
        """Compute aggregate similarity between two records.

        Args:
            record1: First record
            record2: Second record

        Returns:
            Similarity score in [0, 1]
        """
        if not self.features:
            raise ValueError("No features configured. Use .default(), .isbn(), .title(), etc.")

        return self._aggregate(self.field_scores(record1, record2))

    def compare(self, query: RecordLike, record: RecordLike) -> Optional[SimilarityResult]:
        """Compare one stored record against a query.

        Returns:
            A SimilarityResult, or None when the score does not clear min_score
        """
        if not self.features:
            raise ValueError("No features configured. Use .default(), .isbn(), .title(), etc.")

        query = _as_record(query)
        record = _as_record(record)
        scores = self.field_scores(query, record)
        score = self._aggregate(scores)
        if score <= self.min_score:
            return None

        return SimilarityResult(
            record=record,
            score=score,
            match_type=classify_match(scores, query.title, record.title, self.edition_keywords),
            reasons=generate_reasons(scores, query.title, record.title, self.edition_keywords),
        )

    def find_similar(
        self,
        query: RecordLike,
        collection: Iterable[RecordLike],
        top_k: Optional[int] = None,
    ) -> List[SimilarityResult]:
        """Rank the stored records that look like ``query``.

        Args:
            query: Candidate book
            collection: Stored records to compare against
            top_k: Optional cap on the number of results

        Returns:
            Results sorted by score descending, one per stored record
        """
        query = _as_record(query)
        snapshot = tuple(collection)

        scored: List[Tuple[Any, SimilarityResult]] = []
        for item in snapshot:
            result = self.compare(query, item)
            if result is None:
                continue
            # Stored identity: the record id, else the caller's object
            key = result.record.id if result.record.id is not None else id(item)
            scored.append((key, result))

        scored.sort(key=lambda pair: pair[1].score, reverse=True)

        seen = set()
        results = []
        for key, result in scored:
            if key in seen:
                continue
            seen.add(key)
            results.append(result)

        logger.debug(
            f"Scanned {len(snapshot)} records for '{query.title}': {len(results)} similar"
        )

        if top_k is not None:
            return results[:top_k]
        return results

    def find_duplicates(
        self, collection: Iterable[RecordLike]
    ) -> List[Tuple[BookRecord, SimilarityResult]]:
        """Find likely duplicate pairs inside a collection.

        Every unordered pair is compared once.

        Returns:
            (record, result) pairs where ``result.record`` is the other
            member of the pair, sorted by score descending
        """
        records = [_as_record(item) for item in collection]
        pairs = []
        for i in range(len(records)):
            for j in range(i + 1, len(records)):
                result = self.compare(records[i], records[j])
                if result is not None:
                    pairs.append((records[i], result))

        pairs.sort(key=lambda pair: pair[1].score, reverse=True)
        logger.debug(f"Found {len(pairs)} duplicate candidates among {len(records)} records")
        return pairs

    def similarity_matrix(self, collection: Iterable[RecordLike]) -> np.ndarray:
        """Compute pairwise similarity matrix for all records.

        Returns NxN matrix where matrix[i][j] = similarity(records[i], records[j])

        Args:
            collection: Records to compare

        Returns:
            NxN numpy array of similarities
        """
        records = [_as_record(item) for item in collection]
        n = len(records)
        matrix = np.zeros((n, n))

        # Compute upper triangle (matrix is symmetric)
        for i in range(n):
            matrix[i][i] = self.similarity(records[i], records[i])
            for j in range(i + 1, n):
                sim = self.similarity(records[i], records[j])
                matrix[i][j] = sim
                matrix[j][i] = sim

        return matrix


def default_engine() -> SimilarityEngine:
    """Engine with the default ISBN/title/author/publisher weights."""
    return SimilarityEngine().default()


def calculate_similarity_score(record1: RecordLike, record2: RecordLike) -> float:
    """Aggregate similarity of two records using the default weights."""
    return default_engine().similarity(record1, record2)


def find_similar_books(
    query: RecordLike, collection: Iterable[RecordLike]
) -> List[SimilarityResult]:
    """Ranked, deduplicated similar books using the default engine."""
    return default_engine().find_similar(query, collection)
