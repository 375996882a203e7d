"""Loading stored book collections and simple lookups over them.

A collection file is a JSON or YAML list of book entries, or a mapping with
the list under a ``books`` key. Each entry needs a title and an author;
every other field is carried through untouched.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import jmespath
import yaml
from jmespath.exceptions import JMESPathError

from .models import BookRecord
from .similarity.metrics import ISBN_FORMAT_MATCH, compare_isbns

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def read_entries(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read raw book entries from a collection file.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        List of entry dictionaries

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed or is not a list of entries
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Collection not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Could not parse collection {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("books")
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise ValueError(f"Collection {path} must be a list of book entries")

    return data


def filter_entries(entries: List[Dict[str, Any]], where: str) -> List[Dict[str, Any]]:
    """
    Narrow entries with a JMESPath expression, e.g. ``[?status=='owned']``.

    Raises:
        ValueError: If the expression is invalid or does not yield a list
    """
    try:
        selected = jmespath.search(where, entries)
    except JMESPathError as e:
        raise ValueError(f"Invalid filter expression {where!r}: {e}") from e

    if selected is None:
        return []
    if not isinstance(selected, list):
        raise ValueError(f"Filter expression {where!r} must select a list of entries")
    return [entry for entry in selected if isinstance(entry, dict)]


def load_collection(path: Union[str, Path], where: Optional[str] = None) -> List[BookRecord]:
    """
    Load a stored collection as book records.

    Args:
        path: Collection file
        where: Optional JMESPath filter applied before conversion

    Returns:
        Records in file order
    """
    entries = read_entries(path)
    if where:
        entries = filter_entries(entries, where)

    records = []
    for index, entry in enumerate(entries):
        try:
            records.append(BookRecord.from_dict(entry))
        except ValueError as e:
            raise ValueError(f"Entry {index} in {path}: {e}") from e

    logger.info(f"Loaded {len(records)} books from {path}")
    return records


def books_by_isbn(isbn: str, collection: Iterable[BookRecord]) -> List[BookRecord]:
    """
    Stored records that carry the same ISBN, in either ISBN-10 or ISBN-13 form.

    Args:
        isbn: ISBN to look up, punctuation allowed
        collection: Stored records

    Returns:
        Matching records in collection order
    """
    if not isbn:
        return []
    return [
        record
        for record in collection
        if record.isbn and compare_isbns(isbn, record.isbn) >= ISBN_FORMAT_MATCH
    ]
