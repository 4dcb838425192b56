"""
Inventory report generators.

Each generator reads a fresh snapshot from the BookStore on every call,
filters and sorts it, and renders plain text. Generators never mutate the
books they read, so the same snapshot and the same "today" always produce
byte-identical output.

The header lines, field order and separators below are consumed by
existing report readers and must not change.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Protocol

from app.domain.entities import Book
from app.domain.ports import BookStore, Clock

logger = logging.getLogger(__name__)

UNKNOWN = "(unknown)"
UNKNOWN_BORROWER = "(unknown borrower)"

AVAILABILITY_HEADER = "Available Books Report\n-----------------------\n"
OVERDUE_HEADER = "Overdue Books Report\n---------------------\n"


class ReportGenerator(Protocol):
    """A report rendered as human-readable text."""

    def generate_report(self) -> str:
        ...


def _safe(value: Optional[str]) -> str:
    return UNKNOWN if value is None else value


def _title_key(book: Book) -> str:
    return (book.title or "").lower()


def _book_line(book: Book) -> str:
    return f"- {_safe(book.title)} by {_safe(book.author)} (ISBN: {_safe(book.isbn)})"


def _days_late_phrase(days_late: int) -> str:
    unit = "day" if days_late == 1 else "days"
    return f"{days_late} {unit} late"


class AvailabilityReportGenerator:
    """
    Lists every AVAILABLE book, ordered by title (case-insensitive).

    Books with equal titles keep their snapshot order.
    """

    def __init__(self, book_store: BookStore) -> None:
        self._book_store = book_store

    def generate_report(self) -> str:
        available = sorted(
            (book for book in self._book_store.all_books() if book.is_available()),
            key=_title_key,
        )
        logger.debug(f"Availability report: {len(available)} available books")

        if not available:
            return AVAILABILITY_HEADER + "No books are currently available."

        rows = "\n".join(_book_line(book) for book in available)

        return AVAILABILITY_HEADER + f"Total: {len(available)}\n\n" + rows + "\n"


class OverdueReportGenerator:
    """
    Lists CHECKED_OUT books whose due date is strictly before today.

    Ordered by due date (oldest first), then title (case-insensitive).
    """

    def __init__(self, book_store: BookStore, clock: Clock) -> None:
        self._book_store = book_store
        self._clock = clock

    def generate_report(self) -> str:
        today = self._clock.today()

        overdue = sorted(
            (book for book in self._book_store.all_books() if self._is_overdue(book, today)),
            key=lambda book: (book.due_date, _title_key(book)),
        )
        logger.debug(f"Overdue report as of {today.isoformat()}: {len(overdue)} overdue books")

        if not overdue:
            return OVERDUE_HEADER + f"No overdue books as of {today.isoformat()}."

        blocks = "\n\n".join(self._render_block(book, today) for book in overdue)

        return (
            OVERDUE_HEADER
            + f"As of: {today.isoformat()}\n"
            + f"Total Overdue: {len(overdue)}\n\n"
            + blocks
            + "\n"
        )

    @staticmethod
    def _is_overdue(book: Book, today: date) -> bool:
        return book.is_checked_out() and book.due_date is not None and book.due_date < today

    @staticmethod
    def _render_block(book: Book, today: date) -> str:
        days_late = (today - book.due_date).days
        borrower = UNKNOWN_BORROWER if book.checked_out_by is None else book.checked_out_by
        return (
            _book_line(book) + "\n"
            + f"  Due: {book.due_date.isoformat()}  ({_days_late_phrase(days_late)})\n"
            + f"  Borrower: {borrower}"
        )


class ReportService:
    """
    Facade over the report generators.

    Generators are registered by name so callers can request a report by
    type (e.g. from an HTTP path parameter).
    """

    def __init__(self, book_store: BookStore, clock: Clock) -> None:
        self._availability = AvailabilityReportGenerator(book_store)
        self._overdue = OverdueReportGenerator(book_store, clock)
        self._generators: Dict[str, Callable[[], str]] = {
            "available": self._availability.generate_report,
            "availability": self._availability.generate_report,
            "overdue": self._overdue.generate_report,
        }

    def generate_availability_report(self) -> str:
        return self._availability.generate_report()

    def generate_overdue_report(self) -> str:
        return self._overdue.generate_report()

    def generate_report(self, report_type: str) -> str:
        """
        Generate a report by name.

        Args:
            report_type: "available"/"availability" or "overdue"
                         (case-insensitive)

        Returns:
            The rendered report

        Raises:
            ValueError: If the report type is unknown
        """
        generator = self._generators.get((report_type or "").strip().lower())
        if generator is None:
            raise ValueError(f"Invalid report type: {report_type}")
        return generator()

    def available_report_types(self) -> List[str]:
        return sorted(self._generators)
