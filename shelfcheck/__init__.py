"""
shelfcheck - duplicate detection for a personal book catalog.

Main API:
    from shelfcheck import BookRecord, find_similar_books

    collection = [
        BookRecord(title="Dune", author="Frank Herbert",
                   isbn="978-0441013593", id="1"),
        BookRecord(title="Moby Dick", author="Herman Melville", id="2"),
    ]

    candidate = BookRecord(title="Dune", author="Frank Herbert",
                           isbn="0441013597")

    for match in find_similar_books(candidate, collection):
        print(match.record.title, match.score, match.match_type.value)
        print("  " + "; ".join(match.reasons))

    # Tune weights and threshold
    engine = SimilarityEngine(min_score=0.5).default()
    results = engine.find_similar(candidate, collection, top_k=5)
"""

from .models import BookRecord, MatchType, SimilarityResult
from .similarity import (
    SimilarityEngine,
    SimilarityReport,
    calculate_similarity_score,
    find_similar_books,
)

__version__ = "0.1.0"
__all__ = [
    "BookRecord",
    "MatchType",
    "SimilarityResult",
    "SimilarityEngine",
    "SimilarityReport",
    "calculate_similarity_score",
    "find_similar_books",
]
