"""Concrete metric implementations for book fields.

Each field comparison is available both as a plain function
(``compare_isbns``, ``compare_titles``, ...) and as a Metric class so it can
be plugged into a Feature.
"""

import re
from typing import FrozenSet, Iterable, List, Optional, Set

from shelfcheck.similarity.base import Metric

EDITION_KEYWORDS: FrozenSet[str] = frozenset(
    ["edition", "ed", "version", "revised", "updated", "new", "special", "collector"]
)

# Boost applied to title overlap when both titles name an edition
EDITION_BOOST = 0.2

# Similarity when an ISBN-10 converts to the other side's ISBN-13
ISBN_FORMAT_MATCH = 0.95

# Similarity for a two-part name written in reverse order
REVERSED_NAME_MATCH = 0.9

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_NON_ISBN = re.compile(r"[^0-9X]", re.IGNORECASE)


# ============================================================================
# Text helpers
# ============================================================================


def normalize_text(text: Optional[str]) -> str:
    """Lowercase, drop punctuation, collapse whitespace and trim."""
    if not text:
        return ""
    text = _NON_WORD.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def title_tokens(title: Optional[str]) -> Set[str]:
    """Significant words of a title (longer than two characters)."""
    return {word for word in normalize_text(title).split() if len(word) > 2}


def has_edition_keyword(
    title: Optional[str], keywords: Iterable[str] = EDITION_KEYWORDS
) -> bool:
    """Whether a title names an edition ("Special Edition", "Revised", ...)."""
    words = set(normalize_text(title).split())
    return not words.isdisjoint(keywords)


def _overlap(words1: List[str], words2: List[str]) -> float:
    if not words1 or not words2:
        return 0.0
    common = set(words1) & set(words2)
    return len(common) / max(len(words1), len(words2))


# ============================================================================
# ISBN helpers
# ============================================================================


def canonicalize_isbn(isbn: Optional[str]) -> str:
    """Strip everything but digits and the check character X.

    >>> canonicalize_isbn("978-0-441-01359-3")
    '9780441013593'
    >>> canonicalize_isbn("0-8044-2957-x")
    '080442957X'
    """
    if not isbn:
        return ""
    return _NON_ISBN.sub("", isbn).upper()


def isbn13_check_digit(first12: str) -> int:
    """Check digit for the first twelve digits of an ISBN-13."""
    total = sum(int(digit) * (1 if i % 2 == 0 else 3) for i, digit in enumerate(first12[:12]))
    return (10 - (total % 10)) % 10


def isbn10_to_isbn13(isbn10: str) -> Optional[str]:
    """Convert a canonical ISBN-10 to its 978-prefixed ISBN-13.

    The ISBN-10 check character is discarded and a new ISBN-13 check digit
    is computed. Returns None when the body is not nine digits.

    >>> isbn10_to_isbn13("0743273567")
    '9780743273565'
    """
    body = isbn10[:9]
    if len(body) != 9 or not body.isdigit():
        return None
    first12 = "978" + body
    return first12 + str(isbn13_check_digit(first12))


def compare_isbns(isbn1: str, isbn2: str) -> float:
    """Compare two ISBNs.

    Returns:
        1.0 if canonical forms are identical
        0.95 if one is the ISBN-10 form of the other's ISBN-13
        0.0 otherwise
    """
    clean1 = canonicalize_isbn(isbn1)
    clean2 = canonicalize_isbn(isbn2)

    # Nothing left after canonicalization: malformed, matches nothing
    if not clean1 or not clean2:
        return 0.0

    if clean1 == clean2:
        return 1.0

    if len(clean1) == 10 and len(clean2) == 13:
        if isbn10_to_isbn13(clean1) == clean2:
            return ISBN_FORMAT_MATCH
    elif len(clean1) == 13 and len(clean2) == 10:
        if isbn10_to_isbn13(clean2) == clean1:
            return ISBN_FORMAT_MATCH

    return 0.0


# ============================================================================
# Field comparators
# ============================================================================


def compare_titles(
    title1: str, title2: str, edition_keywords: Iterable[str] = EDITION_KEYWORDS
) -> float:
    """Compare two titles by significant-word overlap.

    Overlap is ``|common| / max(|words1|, |words2|)``. When both titles
    mention an edition keyword the overlap is boosted by 0.2 (capped at 1.0).
    """
    norm1 = normalize_text(title1)
    norm2 = normalize_text(title2)

    if norm1 == norm2:
        return 1.0

    words1 = title_tokens(norm1)
    words2 = title_tokens(norm2)
    if not words1 or not words2:
        return 0.0

    overlap = len(words1 & words2) / max(len(words1), len(words2))

    keywords = frozenset(edition_keywords)
    if has_edition_keyword(norm1, keywords) and has_edition_keyword(norm2, keywords):
        return min(1.0, overlap + EDITION_BOOST)

    return overlap


def compare_authors(author1: str, author2: str) -> float:
    """Compare two author names.

    Returns:
        1.0 for identical normalized names
        0.9 for a reversed two-part name ("Smith, John" vs "John Smith")
        Otherwise the share of common name parts
    """
    norm1 = normalize_text(author1)
    norm2 = normalize_text(author2)

    if norm1 == norm2:
        return 1.0

    parts1 = norm1.split()
    parts2 = norm2.split()

    if len(parts1) == 2 and len(parts2) == 2:
        if parts1[0] == parts2[1] and parts1[1] == parts2[0]:
            return REVERSED_NAME_MATCH

    return _overlap(parts1, parts2)


def compare_publishers(publisher1: str, publisher2: str) -> float:
    """Compare two publisher names by word overlap.

    Inner whitespace is kept as written, so every single space separates a
    word and a doubled space yields an empty one.
    """
    norm1 = _NON_WORD.sub("", (publisher1 or "").lower()).strip()
    norm2 = _NON_WORD.sub("", (publisher2 or "").lower()).strip()

    if norm1 == norm2:
        return 1.0

    return _overlap(norm1.split(" "), norm2.split(" "))


# ============================================================================
# Metric classes
# ============================================================================


class IsbnMetric(Metric[str]):
    """ISBN equality that treats ISBN-10 and ISBN-13 forms as equivalent.

    Returns:
        1.0 for identical canonical ISBNs
        0.95 for ISBN-10 / ISBN-13 of the same book
        0.0 otherwise
    """

    def similarity(self, value1: str, value2: str) -> float:
        return compare_isbns(value1, value2)


class TitleMetric(Metric[str]):
    """Word-overlap title similarity with an edition keyword boost.

    Attributes:
        edition_keywords: Words that mark a title as a specific edition
    """

    def __init__(self, edition_keywords: Optional[Iterable[str]] = None):
        """Initialize title metric.

        Args:
            edition_keywords: Override the default edition keyword set
        """
        self.edition_keywords = frozenset(
            EDITION_KEYWORDS if edition_keywords is None else
            (word.lower() for word in edition_keywords)
        )

    def similarity(self, value1: str, value2: str) -> float:
        """Compute title similarity.

        Args:
            value1: First title
            value2: Second title

        Returns:
            Similarity in [0, 1]
        """
        return compare_titles(value1, value2, self.edition_keywords)


class AuthorMetric(Metric[str]):
    """Author name similarity with reversed-name detection."""

    def similarity(self, value1: str, value2: str) -> float:
        return compare_authors(value1, value2)


class PublisherMetric(Metric[str]):
    """Publisher name similarity by word overlap."""

    def similarity(self, value1: str, value2: str) -> float:
        return compare_publishers(value1, value2)
