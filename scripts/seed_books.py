#!/usr/bin/env python3
"""
Book Seeding Script.

Loads a JSON array of book objects into the store. Every entry goes
through the same validation as POST /books/; invalid entries and ISBNs
that already exist are skipped and logged.

Usage:
    python -m scripts.seed_books data/books.json --db data/books.db
"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from bookstore.api.v1.converters import validated_payload_to_domain
from bookstore.api.v1.validation import validate_book
from bookstore.config import get_settings
from bookstore.domain.errors import BookConflictError
from bookstore.domain.ports import BookRepository
from bookstore.infrastructure.db.sqlite_book_repository import SqliteBookRepository
from bookstore.logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class SeedSummary:
    """Outcome of one seeding run."""

    n_read: int = 0
    n_inserted: int = 0
    n_duplicates: int = 0
    n_invalid: int = 0
    errors: List[str] = field(default_factory=list)


def seed_books(entries: list, repo: BookRepository) -> SeedSummary:
    """
    Validate and insert each entry.

    Args:
        entries: Decoded JSON array of book objects
        repo: Repository to insert into

    Returns:
        SeedSummary with per-outcome counts
    """
    summary = SeedSummary(n_read=len(entries))

    for position, entry in enumerate(entries):
        result = validate_book(entry)
        if not result.is_valid:
            summary.n_invalid += 1
            summary.errors.append(f"entry {position}: {'; '.join(result.errors)}")
            logger.warning(f"Skipping invalid entry {position}: {result.errors}")
            continue

        try:
            repo.create(validated_payload_to_domain(result.data))
        except BookConflictError as e:
            summary.n_duplicates += 1
            logger.info(f"Skipping entry {position}: {e}")
            continue

        summary.n_inserted += 1

    return summary


def load_entries(path: Path) -> list:
    """
    Read the seed file.

    Raises:
        ValueError: If the file is not valid JSON or not a JSON array
        OSError: If the file cannot be read
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of books")
    return data


def main(seed_file: str, db_path: Optional[str] = None) -> int:
    """
    Main entry point for the seeding script.

    Returns:
        Number of books inserted
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    db_path = db_path or settings.database_path

    logger.info(f"Seeding {db_path} from {seed_file}")

    try:
        entries = load_entries(Path(seed_file))
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load seed file: {e}")
        sys.exit(1)

    repo = SqliteBookRepository(db_path)
    summary = seed_books(entries, repo)

    print(
        f"read={summary.n_read} inserted={summary.n_inserted} "
        f"duplicates={summary.n_duplicates} invalid={summary.n_invalid} "
        f"total_in_store={repo.count()}"
    )
    return summary.n_inserted


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the book store from a JSON file")
    parser.add_argument(
        "seed_file",
        type=str,
        help="Path to a JSON array of book objects"
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="SQLite database path (default: DATABASE_PATH setting)"
    )

    args = parser.parse_args()
    main(args.seed_file, args.db)
