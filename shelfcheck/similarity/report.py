"""Presentation helpers for similarity results.

Turns a ranked result list into the groups and labels shown before a book is
added: exact matches block the add, everything else is a warning.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from shelfcheck.models import MatchType, SimilarityResult

MATCH_TYPE_LABELS = {
    MatchType.EXACT_ISBN: "Exact Match",
    MatchType.SIMILAR_TITLE_AUTHOR: "Very Similar",
    MatchType.SIMILAR_TITLE: "Similar Title",
    MatchType.SAME_AUTHOR_SERIES: "Same Author",
    MatchType.EDITION_VARIANT: "Edition Variant",
}

# (lower bound, label), checked from the top down
SIMILARITY_LEVELS = [
    (0.9, "Very High"),
    (0.7, "High"),
    (0.5, "Medium"),
    (0.3, "Low"),
]


def similarity_level(score: float) -> str:
    """Bucket a score into a human-readable level."""
    for bound, label in SIMILARITY_LEVELS:
        if score >= bound:
            return label
    return "Very Low"


def match_type_label(match_type: MatchType) -> str:
    return MATCH_TYPE_LABELS.get(MatchType(match_type), "Similar")


@dataclass
class SimilarityReport:
    """Similarity results grouped for display.

    Attributes:
        results: All results, in ranked order
        exact: Exact ISBN matches
        high: Non-exact results scoring at least 0.7
        medium: Results scoring at least 0.5 but below 0.7
    """

    results: List[SimilarityResult]
    exact: List[SimilarityResult] = field(default_factory=list)
    high: List[SimilarityResult] = field(default_factory=list)
    medium: List[SimilarityResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[SimilarityResult]) -> "SimilarityReport":
        report = cls(results=list(results))
        for result in report.results:
            if result.match_type == MatchType.EXACT_ISBN:
                report.exact.append(result)
            elif result.score >= 0.7:
                report.high.append(result)
            if 0.5 <= result.score < 0.7:
                report.medium.append(result)
        return report

    @property
    def should_block(self) -> bool:
        """The candidate is already in the collection."""
        return bool(self.exact)

    @property
    def should_warn(self) -> bool:
        return bool(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": len(self.results),
            "should_block": self.should_block,
            "should_warn": self.should_warn,
            "results": [
                dict(
                    result.to_dict(),
                    level=similarity_level(result.score),
                    label=match_type_label(result.match_type),
                )
                for result in self.results
            ],
        }
