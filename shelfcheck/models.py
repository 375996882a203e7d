"""Plain data types consumed and produced by the similarity engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MatchType(str, Enum):
    """Coarse label for the dominant reason two records are similar."""

    EXACT_ISBN = "exact_isbn"
    SIMILAR_TITLE_AUTHOR = "similar_title_author"
    SIMILAR_TITLE = "similar_title"
    SAME_AUTHOR_SERIES = "same_author_series"
    EDITION_VARIANT = "edition_variant"


# Keys with a dedicated attribute on BookRecord; everything else goes to extra.
_RECORD_KEYS = ("id", "title", "author", "isbn", "publisher")


@dataclass
class BookRecord:
    """A book as the similarity engine sees it.

    Only title, author, isbn and publisher take part in matching. Anything
    else a caller attaches (status, cover, dates, notes, tags) is carried in
    ``extra`` untouched.

    Attributes:
        title: Book title
        author: Primary author as a single string
        isbn: ISBN-10 or ISBN-13, punctuation allowed
        publisher: Publisher name
        id: Opaque identity of a stored record
        extra: Pass-through fields
    """

    title: str
    author: str
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookRecord":
        """Create a record from a collection entry.

        Accepts either ``author`` or ``authors``, a list (first entry wins) or
        a single name.

        Raises:
            ValueError: If the entry has no title or no author
        """
        title = data.get("title")
        author = data.get("author")
        authors = data.get("authors")
        if isinstance(authors, str):
            authors = [authors]
        if not author and authors:
            author = authors[0]

        if not title or not author:
            raise ValueError(f"Book entry must include 'title' and 'author': {data!r}")

        extra = {
            key: value
            for key, value in data.items()
            if key not in _RECORD_KEYS and key != "authors"
        }
        if authors and len(authors) > 1:
            extra["authors"] = list(authors)

        record_id = data.get("id")
        return cls(
            title=str(title),
            author=str(author),
            isbn=str(data["isbn"]) if data.get("isbn") else None,
            publisher=data.get("publisher") or None,
            id=str(record_id) if record_id is not None else None,
            extra=extra,
        )

    @classmethod
    def from_volume_info(
        cls, volume_info: Dict[str, Any], record_id: Optional[str] = None
    ) -> "BookRecord":
        """Normalize a Google Books ``volumeInfo`` payload into a record.

        The first listed author is used, or ``"Unknown"`` when there is none.
        ISBN_13 is preferred over ISBN_10.
        """
        authors = volume_info.get("authors") or []
        author = authors[0] if authors else "Unknown"

        isbn = None
        identifiers = {
            ident.get("type"): ident.get("identifier")
            for ident in volume_info.get("industryIdentifiers", [])
        }
        for kind in ("ISBN_13", "ISBN_10"):
            if identifiers.get(kind):
                isbn = identifiers[kind]
                break

        extra: Dict[str, Any] = {}
        if len(authors) > 1:
            extra["authors"] = list(authors)
        for key in ("publishedDate", "pageCount", "language", "description"):
            if volume_info.get(key) is not None:
                extra[key] = volume_info[key]

        image_links = volume_info.get("imageLinks") or {}
        cover = image_links.get("thumbnail") or image_links.get("smallThumbnail")
        if cover:
            extra["cover"] = cover

        return cls(
            title=volume_info.get("title") or "",
            author=author,
            isbn=isbn,
            publisher=volume_info.get("publisher") or None,
            id=record_id,
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary, pass-through fields included."""
        data: Dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data["title"] = self.title
        data["author"] = self.author
        if self.isbn:
            data["isbn"] = self.isbn
        if self.publisher:
            data["publisher"] = self.publisher
        data.update(self.extra)
        return data


@dataclass
class SimilarityResult:
    """One stored record judged similar to a query.

    Attributes:
        record: The stored record that was compared against
        score: Aggregate similarity in [0, 1]
        match_type: Dominant reason for the similarity
        reasons: Human-readable explanations in evaluation order
    """

    record: BookRecord
    score: float
    match_type: MatchType
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record": self.record.to_dict(),
            "score": self.score,
            "match_type": self.match_type.value,
            "reasons": list(self.reasons),
        }
