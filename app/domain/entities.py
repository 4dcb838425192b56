"""
Domain entities for the library lending system.

Entities are objects with a unique identity that runs through time and
different representations. A Book is identified by its ISBN and a Member
by their email.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class BookStatus(str, Enum):
    """Lending state of a single book copy."""

    AVAILABLE = "AVAILABLE"
    CHECKED_OUT = "CHECKED_OUT"


class MembershipTier(str, Enum):
    """Membership category determining limits, loan duration and fees."""

    REGULAR = "REGULAR"
    PREMIUM = "PREMIUM"
    STUDENT = "STUDENT"


@dataclass
class Book:
    """
    Represents a book in the library inventory.

    A book is either AVAILABLE (no due date, no borrower) or CHECKED_OUT
    (both set). The lending workflow only moves a book between those two
    states through check_out() and mark_returned(), which keep the three
    fields consistent.

    Title, author and ISBN may be missing on records coming from a
    collaborator; reports render them as "(unknown)".
    """

    isbn: Optional[str]
    """International Standard Book Number, unique within the inventory"""

    title: Optional[str]
    """Book title"""

    author: Optional[str]
    """Author name"""

    status: BookStatus = BookStatus.AVAILABLE
    """Current lending state"""

    due_date: Optional[date] = None
    """Date the book must be returned by, set while checked out"""

    checked_out_by: Optional[str] = None
    """Email of the member holding the book, set while checked out"""

    def __eq__(self, other: object) -> bool:
        """Two books are equal if they have the same ISBN."""
        if not isinstance(other, Book):
            return NotImplemented
        return self.isbn == other.isbn

    def __hash__(self) -> int:
        """Hash based on ISBN."""
        return hash(self.isbn)

    def is_available(self) -> bool:
        return self.status == BookStatus.AVAILABLE

    def is_checked_out(self) -> bool:
        return self.status == BookStatus.CHECKED_OUT

    def check_out(self, member_email: str, due_date: date) -> None:
        """
        Move the book to CHECKED_OUT for a member until a due date.

        Args:
            member_email: Email of the borrowing member
            due_date: Date the book is due back

        Raises:
            ValueError: If the book is not currently available
        """
        if not self.is_available():
            raise ValueError(f"Book {self.isbn} is not available for checkout")

        self.status = BookStatus.CHECKED_OUT
        self.due_date = due_date
        self.checked_out_by = member_email

    def mark_returned(self) -> None:
        """
        Move the book back to AVAILABLE, clearing due date and borrower.

        Raises:
            ValueError: If the book is not currently checked out
        """
        if not self.is_checked_out():
            raise ValueError(f"Book {self.isbn} is not checked out")

        self.status = BookStatus.AVAILABLE
        self.due_date = None
        self.checked_out_by = None

    def days_overdue(self, today: date) -> int:
        """
        Number of calendar days past the due date as of today.

        Returns 0 when the book has no due date or is not yet late.
        """
        if self.due_date is None or today <= self.due_date:
            return 0
        return (today - self.due_date).days


@dataclass
class Member:
    """
    Represents a registered library member.

    books_checked_out mirrors the number of books whose checked_out_by is
    this member's email. The lending workflow keeps the two in step by
    pairing every checkout with an increment and every return with a
    decrement.
    """

    email: str
    """Unique identifier of the member"""

    name: str
    """Display name used in notifications"""

    tier: MembershipTier = MembershipTier.REGULAR
    """Membership tier"""

    books_checked_out: int = 0
    """Count of books currently held"""

    def __post_init__(self) -> None:
        """Validate member data."""
        if not self.email or not self.email.strip():
            raise ValueError("Member email cannot be empty")

        if self.books_checked_out < 0:
            raise ValueError(
                f"books_checked_out cannot be negative, got {self.books_checked_out}"
            )

    def __eq__(self, other: object) -> bool:
        """Two members are equal if they have the same email."""
        if not isinstance(other, Member):
            return NotImplemented
        return self.email == other.email

    def __hash__(self) -> int:
        """Hash based on email."""
        return hash(self.email)

    def increment_checkout_count(self) -> None:
        self.books_checked_out += 1

    def decrement_checkout_count(self) -> None:
        """
        Record that the member returned a book.

        Raises:
            ValueError: If the member holds no books
        """
        if self.books_checked_out == 0:
            raise ValueError(f"Member {self.email} has no checked out books")
        self.books_checked_out -= 1
