"""Shared fixtures."""

from pathlib import Path

import pytest

from shelfcheck.models import BookRecord


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config reads and writes out of the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def sample_collection():
    """A small stored collection."""
    return [
        BookRecord(
            id="1",
            title="Dune",
            author="Frank Herbert",
            isbn="978-0441013593",
            publisher="Ace Books",
            extra={"status": "owned", "dateAdded": "2024-01-03"},
        ),
        BookRecord(
            id="2",
            title="The Great Gatsby (Special Edition)",
            author="F. Scott Fitzgerald",
            extra={"status": "owned"},
        ),
        BookRecord(
            id="3",
            title="Moby Dick",
            author="Herman Melville",
            isbn="9781503280786",
            extra={"status": "wishlist"},
        ),
        BookRecord(
            id="4",
            title="Harry Potter and the Chamber of Secrets",
            author="J.K. Rowling",
            extra={"status": "owned"},
        ),
    ]
