from bookcatalog.client.books_client import BooksClient, BooksClientError, BooksPage
from bookcatalog.client.pager import ClientPager

__all__ = ["BooksClient", "BooksClientError", "BooksPage", "ClientPager"]
