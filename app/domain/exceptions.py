"""
Domain exceptions for the lending core.

Lookup misses and configuration errors are raised as exceptions and propagate
to the caller unchanged. Declined business outcomes (book unavailable, limit
reached, book not checked out) are NOT exceptions: they are returned as
ordinary results (see value_objects.CheckoutResult / ReturnResult).
"""

from typing import Any


class LibraryError(Exception):
    """Base class for all lending domain errors."""


class BookNotFoundError(LibraryError):
    """No book exists with the requested ISBN."""

    def __init__(self, isbn: str) -> None:
        self.isbn = isbn
        super().__init__(f"Book not found with ISBN: {isbn}")


class MemberNotFoundError(LibraryError):
    """No member exists with the requested email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Member not found with email: {email}")


class UnsupportedTierError(LibraryError):
    """A resolver has no strategy registered for a membership tier."""

    def __init__(self, tier: Any) -> None:
        self.tier = tier
        super().__init__(f"Unsupported membership tier: {tier}")
