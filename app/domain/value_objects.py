"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity. Here they carry the outcome of
a lending transaction back to the caller.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class CheckoutResult:
    """
    Outcome of a checkout attempt.

    A declined checkout (book unavailable, limit reached) is a normal
    result with success=False, not an error.
    """

    success: bool
    """Whether the book was checked out"""

    message: str
    """Human-readable message, rendered as-is by callers"""

    due_date: Optional[date] = None
    """Due date of the new loan, set only on success"""

    def __post_init__(self) -> None:
        """Validate result constraints."""
        if not self.message:
            raise ValueError("message cannot be empty")

        if self.success and self.due_date is None:
            raise ValueError("due_date is required when success=True")

        if not self.success and self.due_date is not None:
            raise ValueError("due_date must be None when success=False")

    @staticmethod
    def declined(message: str) -> "CheckoutResult":
        return CheckoutResult(success=False, message=message)


@dataclass(frozen=True)
class ReturnResult:
    """
    Outcome of a return attempt.

    late_fee is the fee charged on a successful return (zero when the book
    came back on time) and None when the return was declined.
    """

    success: bool
    """Whether the book was returned"""

    message: str
    """Human-readable message, rendered as-is by callers"""

    late_fee: Optional[Decimal] = None
    """Fee charged for this return"""

    def __post_init__(self) -> None:
        """Validate result constraints."""
        if not self.message:
            raise ValueError("message cannot be empty")

        if self.success and self.late_fee is None:
            raise ValueError("late_fee is required when success=True")

        if self.late_fee is not None and self.late_fee < 0:
            raise ValueError(f"late_fee cannot be negative, got {self.late_fee}")

    @staticmethod
    def declined(message: str) -> "ReturnResult":
        return ReturnResult(success=False, message=message)
