"""Tests for the field comparators and ISBN helpers."""

import pytest

from shelfcheck.similarity import (
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
from shelfcheck.similarity.metrics import (
    has_edition_keyword,
    isbn13_check_digit,
    normalize_text,
    title_tokens,
)


# ============================================================================
# Text helpers
# ============================================================================


def test_normalize_text():
    """Test punctuation stripping and whitespace collapsing."""
    assert normalize_text("  The Hobbit:  An Unexpected   Journey! ") == "the hobbit an unexpected journey"
    assert normalize_text("F. Scott Fitzgerald") == "f scott fitzgerald"
    assert normalize_text("") == ""
    assert normalize_text(None) == ""


def test_title_tokens_skip_short_words():
    """Words of two characters or fewer are not significant."""
    assert title_tokens("Of Mice and Men") == {"mice", "and", "men"}
    assert title_tokens("It") == set()


def test_has_edition_keyword_matches_whole_words():
    """Edition keywords are matched as words, not substrings."""
    assert has_edition_keyword("The Great Gatsby (Special Edition)")
    assert has_edition_keyword("Calculus, 2nd ed.")
    assert has_edition_keyword("Revised")
    assert not has_edition_keyword("The Hobbit: An Unexpected Journey")
    assert not has_edition_keyword("Renewed Hope")
    assert not has_edition_keyword(None)


# ============================================================================
# ISBN
# ============================================================================


def test_canonicalize_isbn():
    """Test ISBN canonicalization."""
    assert canonicalize_isbn("978-0-441-01359-3") == "9780441013593"
    assert canonicalize_isbn("ISBN 0-8044-2957-x") == "080442957X"
    assert canonicalize_isbn(" 0743273567 ") == "0743273567"
    assert canonicalize_isbn(None) == ""


def test_isbn13_check_digit():
    """The 978 + 974327356 body has check digit 5."""
    assert isbn13_check_digit("978074327356") == 5
    assert isbn13_check_digit("978044101359") == 3


def test_isbn10_to_isbn13():
    """Test ISBN-10 to ISBN-13 conversion."""
    assert isbn10_to_isbn13("0743273567") == "9780743273565"
    assert isbn10_to_isbn13("0441013597") == "9780441013593"
    assert isbn10_to_isbn13("080442957X") == "9780804429573"

    # Body is not nine digits
    assert isbn10_to_isbn13("12345") is None
    assert isbn10_to_isbn13("X12345678X") is None


def test_compare_isbns_identical():
    """Identical ISBNs match regardless of punctuation."""
    assert compare_isbns("978-0441013593", "9780441013593") == 1.0
    assert compare_isbns("080442957x", "0-8044-2957-X") == 1.0


def test_compare_isbns_ten_vs_thirteen():
    """ISBN-10 and ISBN-13 of the same book score 0.95 in either order."""
    assert compare_isbns("0743273567", "9780743273565") == 0.95
    assert compare_isbns("978-0743273565", "0-7432-7356-7") == 0.95


def test_compare_isbns_different():
    """Different books, and wrong check digits, do not match."""
    assert compare_isbns("9780441013593", "9780743273565") == 0.0
    assert compare_isbns("0743273567", "9780743273566") == 0.0
    assert compare_isbns("0743273567", "0441013597") == 0.0


def test_compare_isbns_malformed():
    """Non-numeric ISBNs never match, not even each other."""
    assert compare_isbns("unknown", "n/a") == 0.0
    assert compare_isbns("unknown", "9780441013593") == 0.0


# ============================================================================
# Titles
# ============================================================================


def test_compare_titles_identical_after_normalization():
    """Case and punctuation do not matter."""
    assert compare_titles("The Hobbit", "the hobbit!") == 1.0


def test_compare_titles_overlap():
    """Overlap is common words over the larger word count."""
    # {the, great, gatsby} vs {the, great, gatsby, special, edition}
    assert compare_titles("The Great Gatsby", "The Great Gatsby (Special Edition)") == pytest.approx(0.6)

    # {the, hobbit} vs {the, hobbit, unexpected, journey}
    assert compare_titles("The Hobbit", "The Hobbit: An Unexpected Journey") == pytest.approx(0.5)


def test_compare_titles_edition_boost():
    """Two edition titles get a 0.2 boost, capped at 1.0."""
    # {dune, special, edition} vs {dune, collector, edition}: 2/3 + 0.2
    score = compare_titles("Dune Special Edition", "Dune Collector's Edition")
    assert score == pytest.approx(2 / 3 + 0.2)

    # {dune, revised, edition} vs {dune, edition, revised, new}: 3/4 + 0.2
    score = compare_titles("Dune: Revised Edition", "Dune Edition Revised New")
    assert score == pytest.approx(0.95)

    # Already a full overlap after reordering
    assert compare_titles("Special Edition Dune", "Dune Special Edition") == 1.0


def test_compare_titles_no_significant_words():
    """Titles made of short words score 0 unless identical."""
    assert compare_titles("It", "Up") == 0.0
    assert compare_titles("It", "It") == 1.0


def test_compare_titles_no_overlap():
    assert compare_titles("Dune", "Moby Dick") == 0.0


def test_title_metric_custom_keywords():
    """TitleMetric can use its own edition keyword set."""
    metric = TitleMetric(edition_keywords=["Deluxe"])
    assert metric.edition_keywords == frozenset({"deluxe"})

    # Default keywords would boost this pair, custom ones do not
    assert metric.similarity("Dune Special Edition", "Dune Collector Edition") == pytest.approx(2 / 3)
    assert TitleMetric().similarity("Dune Special Edition", "Dune Collector Edition") == pytest.approx(2 / 3 + 0.2)


# ============================================================================
# Authors
# ============================================================================


def test_compare_authors_identical():
    assert compare_authors("F. Scott Fitzgerald", "f scott fitzgerald") == 1.0


def test_compare_authors_reversed():
    """A two-part name written surname first scores 0.9."""
    assert compare_authors("John Smith", "Smith, John") == 0.9
    assert compare_authors("Smith John", "John Smith") == 0.9


def test_compare_authors_partial():
    """Shared name parts over the longer name."""
    assert compare_authors("Frank Herbert", "Brian Herbert") == pytest.approx(0.5)
    assert compare_authors("Ursula K. Le Guin", "Ursula Le Guin") == pytest.approx(0.75)


def test_compare_authors_unrelated():
    assert compare_authors("Frank Herbert", "Herman Melville") == 0.0


# ============================================================================
# Publishers
# ============================================================================


def test_compare_publishers():
    """Test publisher comparison."""
    assert compare_publishers("Penguin Books", "penguin books.") == 1.0
    assert compare_publishers("Penguin Books", "Penguin Random House") == pytest.approx(1 / 3)
    assert compare_publishers("Ace", "Tor") == 0.0


def test_compare_publishers_keeps_inner_whitespace():
    """A doubled space counts as an extra (empty) word."""
    assert compare_publishers("Penguin  Books", "Penguin Books") == pytest.approx(2 / 3)
    assert compare_publishers("Penguin Books", "Penguin  Books") == pytest.approx(2 / 3)
    assert compare_publishers("  Penguin Books ", "penguin books") == 1.0


# ============================================================================
# Metric classes
# ============================================================================


@pytest.mark.parametrize(
    "metric, value1, value2",
    [
        (IsbnMetric(), "0743273567", "9780743273565"),
        (TitleMetric(), "The Great Gatsby", "The Great Gatsby (Special Edition)"),
        (TitleMetric(), "Dune Special Edition", "Dune Collector Edition Deluxe"),
        (AuthorMetric(), "Ursula K. Le Guin", "Ursula Le Guin"),
        (AuthorMetric(), "John Smith", "Smith, John"),
        (PublisherMetric(), "Penguin Books", "Penguin Random House"),
    ],
)
def test_metrics_are_symmetric(metric, value1, value2):
    """Every comparator gives the same score in both directions."""
    assert metric.similarity(value1, value2) == metric.similarity(value2, value1)
