"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Following Hexagonal Architecture principles, the domain layer depends only
on these abstract protocols, never on concrete implementations.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol, List, Optional

from .entities import Book, Member


class BookStore(Protocol):
    """
    Port for retrieving and persisting books of the inventory.

    The store owns the lifecycle of Book records; the lending core only
    reads them and saves them back after a state change.

    Implementations are expected to serialize concurrent checkout/return
    requests against the same ISBN (transaction or lock). The domain
    services never lock on their own.
    """

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        """
        Retrieve a book by its ISBN.

        Args:
            isbn: The book's ISBN

        Returns:
            The Book entity if found, None otherwise
        """
        ...

    def save(self, book: Book) -> None:
        """
        Persist the current state of a book.

        If a book with the same ISBN exists, it is replaced.

        Args:
            book: The book entity to persist
        """
        ...

    def all_books(self) -> List[Book]:
        """
        Snapshot of every book in the inventory.

        Returns:
            A finite list of books as read at call time. Callers may
            sort or filter it without affecting the store.
        """
        ...


class MemberStore(Protocol):
    """
    Port for retrieving and persisting library members.
    """

    def find_by_email(self, email: str) -> Optional[Member]:
        """
        Retrieve a member by email.

        Args:
            email: The member's email

        Returns:
            The Member entity if found, None otherwise
        """
        ...

    def save(self, member: Member) -> None:
        """
        Persist the current state of a member.

        Args:
            member: The member entity to persist
        """
        ...


class Notifier(Protocol):
    """
    Port for sending lending notifications to members.

    Sends are one-way: the core consumes no return value and a failing
    notifier never rolls back or fails the surrounding transaction.
    Delivery guarantees (retries, queuing) belong to the implementation.
    """

    def notify_checkout(self, member: Member, book: Book, due_date: date) -> None:
        """
        Tell a member that a book was checked out to them.

        Args:
            member: The borrowing member
            book: The book checked out
            due_date: When the book is due back
        """
        ...

    def notify_return(self, member: Member, book: Book, fee: Decimal) -> None:
        """
        Tell a member that a book they held was returned.

        Args:
            member: The member who held the book
            book: The returned book
            fee: Late fee charged (zero when on time)
        """
        ...


class Clock(Protocol):
    """
    Port providing the current calendar date.

    Injected into services so that due dates, late fees and reports are
    deterministic under test.
    """

    def today(self) -> date:
        """
        Returns:
            Today's date
        """
        ...
