"""Book similarity and duplicate detection.

Compares a candidate book against an existing collection and reports which
stored books look like it, how strongly, and why.

Basic usage:
    >>> from shelfcheck.similarity import find_similar_books
    >>> from shelfcheck.models import BookRecord
    >>>
    >>> candidate = BookRecord(title="Dune", author="Frank Herbert",
    ...                        isbn="978-0441013593")
    >>> for match in find_similar_books(candidate, collection):
    ...     print(match.score, match.match_type.value, match.reasons)

Advanced usage:
    >>> # Custom weights
    >>> engine = (SimilarityEngine(min_score=0.5)
    ...     .isbn(weight=0.5)
    ...     .title(weight=0.3)
    ...     .author(weight=0.2))
    >>>
    >>> # Duplicates already inside a collection
    >>> pairs = engine.find_duplicates(collection)
"""

from shelfcheck.similarity.base import Extractor, Feature, Metric
from shelfcheck.similarity.classification import classify_match, generate_reasons
from shelfcheck.similarity.core import (
    SimilarityEngine,
    calculate_similarity_score,
    default_engine,
    find_similar_books,
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
    canonicalize_isbn,
    compare_authors,
    compare_isbns,
    compare_publishers,
    compare_titles,
    isbn10_to_isbn13,
)
from shelfcheck.similarity.report import (
    SimilarityReport,
    match_type_label,
    similarity_level,
)

__all__ = [
    # Core
    "SimilarityEngine",
    "default_engine",
    "calculate_similarity_score",
    "find_similar_books",
    "classify_match",
    "generate_reasons",
    # Base classes
    "Extractor",
    "Metric",
    "Feature",
    # Extractors
    "IsbnExtractor",
    "TitleExtractor",
    "AuthorExtractor",
    "PublisherExtractor",
    # Metrics
    "IsbnMetric",
    "TitleMetric",
    "AuthorMetric",
    "PublisherMetric",
    "EDITION_KEYWORDS",
    "canonicalize_isbn",
    "isbn10_to_isbn13",
    "compare_isbns",
    "compare_titles",
    "compare_authors",
    "compare_publishers",
    # Report
    "SimilarityReport",
    "similarity_level",
    "match_type_label",
]
