"""
In-memory implementation of the BookStore port.
"""

from typing import Dict, Iterable, List, Optional

from app.domain.entities import Book
from app.domain.ports import BookStore


class InMemoryBookStore(BookStore):
    """
    Books keyed by ISBN, in insertion order.

    save() replaces an existing entry in place, so a book keeps its
    position in all_books() snapshots across checkouts and returns.
    """

    def __init__(self, initial_books: Optional[Iterable[Book]] = None) -> None:
        self._books: Dict[Optional[str], Book] = {}
        for book in initial_books or []:
            self.add(book)

    def add(self, book: Book) -> None:
        """
        Register a new book.

        Raises:
            ValueError: If a book with the same ISBN already exists
        """
        if book.isbn in self._books:
            raise ValueError(f"Book with ISBN '{book.isbn}' already exists")
        self._books[book.isbn] = book

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        return self._books.get(isbn)

    def save(self, book: Book) -> None:
        self._books[book.isbn] = book

    def all_books(self) -> List[Book]:
        return list(self._books.values())

    def count(self) -> int:
        return len(self._books)
