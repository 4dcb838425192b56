"""
Read-only lookup of books by title, author or ISBN.
"""

from typing import List, Optional

from app.domain.entities import Book
from app.domain.ports import BookStore

SEARCH_TYPES = ("title", "author", "isbn")


class BookSearchService:
    """
    Plain-text lookup over the book inventory.

    Blank search terms match nothing. Lookups scan a snapshot from the
    BookStore and never modify it.
    """

    def __init__(self, book_store: BookStore) -> None:
        self._book_store = book_store

    def search_by_title(self, title: Optional[str]) -> List[Book]:
        """Case-insensitive substring match on the title."""
        if not title or not title.strip():
            return []
        needle = title.strip().lower()
        return [
            book for book in self._book_store.all_books()
            if book.title and needle in book.title.lower()
        ]

    def search_by_author(self, author: Optional[str]) -> List[Book]:
        """Case-insensitive exact match on the author name."""
        if not author or not author.strip():
            return []
        needle = author.strip().lower()
        return [
            book for book in self._book_store.all_books()
            if book.author and book.author.strip().lower() == needle
        ]

    def search_by_isbn(self, isbn: Optional[str]) -> Optional[Book]:
        if not isbn or not isbn.strip():
            return None
        return self._book_store.find_by_isbn(isbn.strip())

    def search(self, term: str, search_type: str) -> List[Book]:
        """
        Dispatch a search on its type.

        Args:
            term: Text to look for
            search_type: One of "title", "author" or "isbn" (case-insensitive)

        Returns:
            Matching books (at most one for ISBN searches)

        Raises:
            ValueError: If search_type is not supported
        """
        kind = (search_type or "").lower()
        if kind not in SEARCH_TYPES:
            raise ValueError("Invalid search type")

        if kind == "title":
            return self.search_by_title(term)
        if kind == "isbn":
            book = self.search_by_isbn(term)
            return [book] if book else []
        return self.search_by_author(term)
