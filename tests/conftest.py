"""
Pytest configuration and fixtures for catalog tests.
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import insert
from sqlalchemy.orm import Session

from bookcatalog.core.config import Settings
from bookcatalog.main import create_app
from bookcatalog.models.book import Book
from bookcatalog.services.book_service import insert_documents
from bookcatalog.services.catalog_service import rebuild_directory

# Source documents as they appear in mixed dumps: different sources use
# different field names for the same thing.
BOOK_DOCUMENTS = [
    {
        "book_title": "Dune",
        "book_author": "Frank Herbert",
        "Summary": "A desert planet and the spice that everyone wants.",
        "Category": "['Science Fiction','Classic']",
        "rating": 4.6,
        "year_of_publication": 1965,
        "isbn": "9780441013593",
        "pages": 412,
        "Language": "English",
        "img_l": "https://covers.example.com/dune.jpg",
    },
    {
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "description": "An envoy visits the winter planet Gethen.",
        "genres": ["Science Fiction", "Feminism"],
        "rating": 4.1,
        "year": 1969,
    },
    {
        "title": "A Wizard of Earthsea",
        "author": "Ursula K. Le Guin",
        "summary": "A young mage is hunted by his own shadow.",
        "genres": "Fantasy, Coming of Age",
        "rating": 4.0,
        "language": "English",
    },
    {
        "title": "Good Omens",
        "author": "Terry Pratchett",
        "genres": "Fantasy",
        "rating": 3.9,
    },
    {
        "book_title": "Mort",
        "book_author": "Terry Pratchett",
    },
]


@pytest.fixture(scope="function")
def app(tmp_path) -> Generator[FastAPI, None, None]:
    """Application bound to a fresh SQLite database file."""
    settings = Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'catalog.db'}",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        SENTRY_DSN="",
    )
    application = create_app(settings)
    application.state.database.create_all()
    yield application
    application.state.database.dispose()


@pytest.fixture(scope="function")
def db(app: FastAPI) -> Generator[Session, None, None]:
    """Session on the application's database."""
    session = app.state.database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_books(db: Session) -> list[Book]:
    """The sample documents, stored through the field adapter."""
    insert_documents(db, BOOK_DOCUMENTS)
    return list(db.query(Book).order_by(Book.id).all())


@pytest.fixture
def directory(db: Session, test_books: list[Book]) -> tuple[int, int]:
    """Author and genre directories built from the sample books."""
    return rebuild_directory(db)


@pytest.fixture
def many_books(db: Session) -> int:
    """2500 minimal books, enough for three batches."""
    total = 2500
    db.execute(insert(Book), [{"title": f"Book {i:04d}", "author": "Batch Author"} for i in range(total)])
    db.commit()
    return total
