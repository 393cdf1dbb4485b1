"""
Import book documents into the catalog.

Accepts a JSON array, JSON lines or CSV export. Field names are mapped by the
record adapter, so dumps with ``book_title``/``Category`` style columns load
as-is. The author and genre directories are rebuilt afterwards.

Run with: python -m bookcatalog.scripts.import_books books.json
"""

import argparse
import csv
import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from bookcatalog.core.config import get_settings
from bookcatalog.core.database import Database
from bookcatalog.core.logging import get_logger, setup_logging
from bookcatalog.services.book_service import insert_documents
from bookcatalog.services.catalog_service import rebuild_directory

logger = get_logger(__name__)


def load_documents(path: Path) -> Iterator[dict[str, Any]]:
    """Yield source documents from a .json, .jsonl or .csv file."""
    suffix = path.suffix.lower()

    if suffix == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            yield from csv.DictReader(f)
        return

    if suffix == ".jsonl":
        with path.open(encoding="utf-8") as f:
            for line_number, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping line {line_number}: {e}")
        return

    if suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("books", [])
        for document in data:
            if isinstance(document, dict):
                yield document
        return

    raise ValueError(f"Unsupported file type: {path.suffix}")


def import_file(database: Database, path: Path, rebuild: bool = True) -> int:
    """Import one file. Returns the number of books stored."""
    database.create_all()
    with database.session() as db:
        added = insert_documents(db, load_documents(path))
        if rebuild:
            rebuild_directory(db)
    return added


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Import book documents into the catalog")
    parser.add_argument("files", nargs="+", type=Path, help=".json, .jsonl or .csv files")
    parser.add_argument("--database-url", type=str, default=None)
    parser.add_argument(
        "--no-rebuild",
        action="store_true",
        help="Skip rebuilding the author and genre directories",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings)
    database = Database(args.database_url or settings.DATABASE_URL)

    total = 0
    try:
        for path in args.files:
            added = import_file(database, path, rebuild=False)
            logger.info(f"{path}: {added} books imported")
            total += added

        if not args.no_rebuild:
            with database.session() as db:
                rebuild_directory(db)
    finally:
        database.dispose()

    logger.info(f"Import complete: {total} books")


if __name__ == "__main__":
    main()
