"""
Domain layer - Core lending logic and entities.

This layer contains the business entities, value objects, tier strategies,
and defines the ports (interfaces) that the infrastructure layer must
implement.

It has NO dependencies on external frameworks, databases, or APIs.
"""

from .entities import Book, BookStatus, Member, MembershipTier
from .value_objects import CheckoutResult, ReturnResult
from .exceptions import (
    LibraryError,
    BookNotFoundError,
    MemberNotFoundError,
    UnsupportedTierError,
)
from .policies import MembershipPolicy, PolicyResolver
from .fees import LateFeeCalculator, FeeResolver

__all__ = [
    # Entities
    "Book",
    "BookStatus",
    "Member",
    "MembershipTier",
    # Value Objects
    "CheckoutResult",
    "ReturnResult",
    # Exceptions
    "LibraryError",
    "BookNotFoundError",
    "MemberNotFoundError",
    "UnsupportedTierError",
    # Strategies
    "MembershipPolicy",
    "PolicyResolver",
    "LateFeeCalculator",
    "FeeResolver",
]
