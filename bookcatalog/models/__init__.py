from bookcatalog.models.book import Book
from bookcatalog.models.directory import Author, Genre
from bookcatalog.models.review import Review

__all__ = [
    "Book",
    "Author",
    "Genre",
    "Review",
]
