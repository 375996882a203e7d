"""Match-type classification and reason generation.

Both work from the per-field scores of one compared pair, keyed by feature
name (``isbn``, ``title``, ``author``, ``publisher``). A missing key or a
``None`` value means the field was not comparable for that pair.
"""

from typing import Dict, Iterable, List, Optional

from shelfcheck.models import MatchType
from shelfcheck.similarity.metrics import EDITION_KEYWORDS, has_edition_keyword

FieldScores = Dict[str, Optional[float]]


def _above(scores: FieldScores, name: str, threshold: float) -> bool:
    value = scores.get(name)
    return value is not None and value > threshold


def edition_markers(
    title1: Optional[str],
    title2: Optional[str],
    edition_keywords: Iterable[str] = EDITION_KEYWORDS,
) -> int:
    """Number of titles in the pair (0, 1 or 2) that name an edition."""
    keywords = frozenset(edition_keywords)
    return sum(1 for title in (title1, title2) if title and has_edition_keyword(title, keywords))


def classify_match(
    scores: FieldScores,
    title1: Optional[str] = None,
    title2: Optional[str] = None,
    edition_keywords: Iterable[str] = EDITION_KEYWORDS,
) -> MatchType:
    """Pick the match type for a compared pair. First rule that holds wins.

    1. exact_isbn: ISBN score above 0.9
    2. similar_title_author: title and author both above 0.7
    3. edition_variant: a title names an edition and title score is at least 0.6
    4. same_author_series: author above 0.8 and title above 0.3
    5. edition_variant: title above 0.6
    6. similar_title otherwise
    """
    if _above(scores, "isbn", 0.9):
        return MatchType.EXACT_ISBN

    if _above(scores, "title", 0.7) and _above(scores, "author", 0.7):
        return MatchType.SIMILAR_TITLE_AUTHOR

    title_score = scores.get("title")
    if (
        title_score is not None
        and title_score >= 0.6
        and edition_markers(title1, title2, edition_keywords) > 0
    ):
        return MatchType.EDITION_VARIANT

    if _above(scores, "author", 0.8) and _above(scores, "title", 0.3):
        return MatchType.SAME_AUTHOR_SERIES

    if _above(scores, "title", 0.6):
        return MatchType.EDITION_VARIANT

    return MatchType.SIMILAR_TITLE


def generate_reasons(
    scores: FieldScores,
    title1: Optional[str] = None,
    title2: Optional[str] = None,
    edition_keywords: Iterable[str] = EDITION_KEYWORDS,
) -> List[str]:
    """Explain a compared pair, in ISBN, title, author, publisher, edition order."""
    reasons = []

    if _above(scores, "isbn", 0.9):
        reasons.append("Same ISBN")
    elif _above(scores, "isbn", 0.8):
        reasons.append("Similar ISBN (different format)")

    if _above(scores, "title", 0.9):
        reasons.append("Nearly identical title")
    elif _above(scores, "title", 0.7):
        reasons.append("Very similar title")
    elif _above(scores, "title", 0.5):
        reasons.append("Similar title")

    if _above(scores, "author", 0.9):
        reasons.append("Same author")
    elif _above(scores, "author", 0.7):
        reasons.append("Similar author name")

    if _above(scores, "publisher", 0.8):
        reasons.append("Same publisher")

    markers = edition_markers(title1, title2, edition_keywords)
    if markers == 2:
        reasons.append("Both appear to be different editions")
    elif markers == 1:
        reasons.append("One appears to be a special edition")

    return reasons
