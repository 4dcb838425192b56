"""
Tests for LendingWorkflow.

Uses fake/spy implementations of every port so the checkout and return
transactions can be verified without any infrastructure:
- book and member state after each transaction
- which notifications were sent
- which outcomes are declined results and which are errors
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from app.domain.entities import Book, BookStatus, Member, MembershipTier
from app.domain.exceptions import (
    BookNotFoundError,
    MemberNotFoundError,
    UnsupportedTierError,
)
from app.domain.fees import FeeResolver, RegularLateFeeCalculator
from app.domain.policies import PolicyResolver, RegularMembershipPolicy
from app.domain.services import LendingWorkflow

TODAY = date(2024, 3, 15)


# =============================================================================
# Fake implementations for testing
# =============================================================================


class FakeBookStore:
    """Fake book store with spy capabilities."""

    def __init__(self, books: Optional[List[Book]] = None):
        self._books: Dict[str, Book] = {book.isbn: book for book in books or []}
        self.save_calls: List[Book] = []

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        return self._books.get(isbn)

    def save(self, book: Book) -> None:
        self.save_calls.append(book)
        self._books[book.isbn] = book

    def all_books(self) -> List[Book]:
        return list(self._books.values())


class FakeMemberStore:
    """Fake member store with spy capabilities."""

    def __init__(self, members: Optional[List[Member]] = None):
        self._members: Dict[str, Member] = {m.email: m for m in members or []}
        self.save_calls: List[Member] = []

    def find_by_email(self, email: str) -> Optional[Member]:
        return self._members.get(email)

    def save(self, member: Member) -> None:
        self.save_calls.append(member)
        self._members[member.email] = member


class SpyNotifier:
    """Records every notification it receives."""

    def __init__(self):
        self.checkout_calls: List[tuple] = []
        self.return_calls: List[tuple] = []

    def notify_checkout(self, member: Member, book: Book, due_date: date) -> None:
        self.checkout_calls.append((member.email, book.isbn, due_date))

    def notify_return(self, member: Member, book: Book, fee: Decimal) -> None:
        self.return_calls.append((member.email, book.isbn, fee))


class FailingNotifier:
    """Notifier whose transport is down."""

    def notify_checkout(self, member, book, due_date):
        raise ConnectionError("SMTP server unreachable")

    def notify_return(self, member, book, fee):
        raise ConnectionError("SMTP server unreachable")


class FakeClock:
    def __init__(self, today: date = TODAY):
        self._today = today

    def today(self) -> date:
        return self._today


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def book():
    return Book(isbn="978-0132350884", title="Clean Code", author="Robert C. Martin")


@pytest.fixture
def regular_member():
    return Member(email="john@example.com", name="John Doe", tier=MembershipTier.REGULAR)


@pytest.fixture
def premium_member():
    return Member(email="jane@example.com", name="Jane Smith", tier=MembershipTier.PREMIUM)


@pytest.fixture
def student_member():
    return Member(email="bob@example.com", name="Bob Student", tier=MembershipTier.STUDENT)


@pytest.fixture
def book_store(book):
    return FakeBookStore([book])


@pytest.fixture
def member_store(regular_member, premium_member, student_member):
    return FakeMemberStore([regular_member, premium_member, student_member])


@pytest.fixture
def notifier():
    return SpyNotifier()


@pytest.fixture
def workflow(book_store, member_store, notifier):
    return LendingWorkflow(
        book_store=book_store,
        member_store=member_store,
        notifier=notifier,
        clock=FakeClock(),
    )


def checked_out(isbn: str, borrower: Optional[str], due_date: date, title: str = "Book") -> Book:
    book = Book(isbn=isbn, title=title, author="Author")
    book.status = BookStatus.CHECKED_OUT
    book.due_date = due_date
    book.checked_out_by = borrower
    return book


# =============================================================================
# Checkout
# =============================================================================


class TestCheckout:
    """Tests for LendingWorkflow.checkout."""

    def test_successful_checkout_regular(self, workflow, book, regular_member, book_store, member_store):
        result = workflow.checkout(book.isbn, regular_member.email)

        assert result.success is True
        assert result.due_date == TODAY + timedelta(days=14)
        assert result.message == "Book checked out successfully. Due date: 2024-03-29"

        assert book.status == BookStatus.CHECKED_OUT
        assert book.due_date == date(2024, 3, 29)
        assert book.checked_out_by == regular_member.email
        assert regular_member.books_checked_out == 1

        assert book_store.save_calls == [book]
        assert member_store.save_calls == [regular_member]

    @pytest.mark.parametrize(
        "member_fixture, loan_days",
        [("regular_member", 14), ("premium_member", 30), ("student_member", 21)],
    )
    def test_due_date_follows_tier_loan_period(self, request, workflow, book, member_fixture, loan_days):
        member = request.getfixturevalue(member_fixture)

        result = workflow.checkout(book.isbn, member.email)

        assert result.due_date == TODAY + timedelta(days=loan_days)
        assert book.due_date == TODAY + timedelta(days=loan_days)

    def test_checkout_increments_count_by_exactly_one(self, workflow, book, student_member):
        student_member.books_checked_out = 2

        workflow.checkout(book.isbn, student_member.email)

        assert student_member.books_checked_out == 3

    def test_checkout_sends_notification(self, workflow, book, regular_member, notifier):
        workflow.checkout(book.isbn, regular_member.email)

        assert notifier.checkout_calls == [
            (regular_member.email, book.isbn, date(2024, 3, 29)),
        ]
        assert notifier.return_calls == []

    def test_unavailable_book_is_declined(self, workflow, book, regular_member, premium_member,
                                          book_store, member_store, notifier):
        book.check_out(premium_member.email, date(2024, 4, 1))
        premium_member.books_checked_out = 1

        result = workflow.checkout(book.isbn, regular_member.email)

        assert result.success is False
        assert result.message == "Book is not available"
        assert result.due_date is None

        # State untouched, no notification
        assert book.checked_out_by == premium_member.email
        assert book.due_date == date(2024, 4, 1)
        assert regular_member.books_checked_out == 0
        assert book_store.save_calls == []
        assert member_store.save_calls == []
        assert notifier.checkout_calls == []

    def test_limit_reached_is_declined(self, workflow, book, regular_member,
                                       book_store, member_store, notifier):
        regular_member.books_checked_out = 3

        result = workflow.checkout(book.isbn, regular_member.email)

        assert result.success is False
        assert result.message == "Member has reached checkout limit"
        assert book.status == BookStatus.AVAILABLE
        assert regular_member.books_checked_out == 3
        assert book_store.save_calls == []
        assert member_store.save_calls == []
        assert notifier.checkout_calls == []

    def test_one_below_limit_is_allowed(self, workflow, book, premium_member):
        premium_member.books_checked_out = 9

        result = workflow.checkout(book.isbn, premium_member.email)

        assert result.success is True
        assert premium_member.books_checked_out == 10

    def test_unknown_book_raises(self, workflow, regular_member, notifier):
        with pytest.raises(BookNotFoundError, match="Book not found with ISBN: missing") as exc_info:
            workflow.checkout("missing", regular_member.email)

        assert exc_info.value.isbn == "missing"
        assert notifier.checkout_calls == []

    def test_unknown_member_raises(self, workflow, book, book_store):
        with pytest.raises(MemberNotFoundError, match="nobody@example.com"):
            workflow.checkout(book.isbn, "nobody@example.com")

        assert book.status == BookStatus.AVAILABLE
        assert book_store.save_calls == []

    def test_member_lookup_happens_before_availability_check(self, workflow, book):
        """An unknown member is an error even when the book is unavailable."""
        book.check_out("someone@example.com", date(2024, 4, 1))

        with pytest.raises(MemberNotFoundError):
            workflow.checkout(book.isbn, "nobody@example.com")

    def test_unsupported_tier_raises(self, book_store, member_store, notifier, book, student_member):
        workflow = LendingWorkflow(
            book_store=book_store,
            member_store=member_store,
            notifier=notifier,
            clock=FakeClock(),
            policy_resolver=PolicyResolver({MembershipTier.REGULAR: RegularMembershipPolicy()}),
        )

        with pytest.raises(UnsupportedTierError):
            workflow.checkout(book.isbn, student_member.email)

        assert book.status == BookStatus.AVAILABLE

    def test_notifier_failure_does_not_undo_checkout(self, book_store, member_store, book,
                                                     regular_member, caplog):
        workflow = LendingWorkflow(
            book_store=book_store,
            member_store=member_store,
            notifier=FailingNotifier(),
            clock=FakeClock(),
        )

        with caplog.at_level("WARNING"):
            result = workflow.checkout(book.isbn, regular_member.email)

        assert result.success is True
        assert book.status == BookStatus.CHECKED_OUT
        assert regular_member.books_checked_out == 1
        assert "notification" in caplog.text
        assert "SMTP server unreachable" in caplog.text


# =============================================================================
# Return
# =============================================================================


class TestReturnBook:
    """Tests for LendingWorkflow.return_book."""

    def _checkout_with_due_date(self, book: Book, member: Member, due_date: date) -> None:
        book.check_out(member.email, due_date)
        member.increment_checkout_count()

    def test_on_time_return(self, workflow, book, regular_member, book_store, member_store, notifier):
        self._checkout_with_due_date(book, regular_member, TODAY + timedelta(days=3))

        result = workflow.return_book(book.isbn)

        assert result.success is True
        assert result.late_fee == 0.0
        assert result.message == "Book returned successfully"
        assert "fee" not in result.message.lower()

        assert book.status == BookStatus.AVAILABLE
        assert book.due_date is None
        assert book.checked_out_by is None
        assert regular_member.books_checked_out == 0
        assert book_store.save_calls == [book]
        assert member_store.save_calls == [regular_member]
        assert notifier.return_calls == [(regular_member.email, book.isbn, Decimal("0.00"))]

    def test_return_on_due_date_is_not_late(self, workflow, book, regular_member):
        self._checkout_with_due_date(book, regular_member, TODAY)

        result = workflow.return_book(book.isbn)

        assert result.late_fee == 0.0
        assert result.message == "Book returned successfully"

    def test_late_return_regular(self, workflow, book, regular_member, notifier):
        self._checkout_with_due_date(book, regular_member, TODAY - timedelta(days=5))

        result = workflow.return_book(book.isbn)

        assert result.success is True
        assert result.late_fee == Decimal("2.50")
        assert result.message == "Book returned. Late fee: $2.50"
        assert notifier.return_calls == [(regular_member.email, book.isbn, Decimal("2.50"))]

    def test_late_return_student(self, workflow, book, student_member):
        self._checkout_with_due_date(book, student_member, TODAY - timedelta(days=3))

        result = workflow.return_book(book.isbn)

        assert result.late_fee == Decimal("0.75")
        assert result.message == "Book returned. Late fee: $0.75"

    def test_late_return_premium_is_waived(self, workflow, book, premium_member):
        self._checkout_with_due_date(book, premium_member, TODAY - timedelta(days=30))

        result = workflow.return_book(book.isbn)

        assert result.success is True
        assert result.late_fee == 0.0
        assert result.message == "Book returned successfully"
        assert premium_member.books_checked_out == 0

    def test_fee_uses_tier_at_return_time(self, workflow, book, regular_member):
        """A member upgraded to premium while holding a book pays no fee."""
        self._checkout_with_due_date(book, regular_member, TODAY - timedelta(days=4))
        regular_member.tier = MembershipTier.PREMIUM

        result = workflow.return_book(book.isbn)

        assert result.late_fee == 0.0

    def test_available_book_is_declined(self, workflow, book, book_store, member_store, notifier):
        result = workflow.return_book(book.isbn)

        assert result.success is False
        assert result.message == "Book is not checked out"
        assert result.late_fee is None
        assert book.status == BookStatus.AVAILABLE
        assert book_store.save_calls == []
        assert member_store.save_calls == []
        assert notifier.return_calls == []

    def test_unknown_book_raises(self, workflow):
        with pytest.raises(BookNotFoundError):
            workflow.return_book("missing")

    def test_unknown_borrower_raises(self, member_store, notifier):
        orphan = checked_out("111", "gone@example.com", TODAY - timedelta(days=1))
        book_store = FakeBookStore([orphan])
        workflow = LendingWorkflow(book_store, member_store, notifier, FakeClock())

        with pytest.raises(MemberNotFoundError, match="gone@example.com"):
            workflow.return_book("111")

        assert orphan.status == BookStatus.CHECKED_OUT
        assert book_store.save_calls == []

    def test_missing_borrower_raises(self, member_store, notifier):
        orphan = checked_out("111", None, TODAY - timedelta(days=1))
        workflow = LendingWorkflow(FakeBookStore([orphan]), member_store, notifier, FakeClock())

        with pytest.raises(MemberNotFoundError):
            workflow.return_book("111")

    def test_unsupported_tier_raises(self, book_store, member_store, notifier, book, student_member):
        self._checkout_with_due_date(book, student_member, TODAY - timedelta(days=1))
        workflow = LendingWorkflow(
            book_store=book_store,
            member_store=member_store,
            notifier=notifier,
            clock=FakeClock(),
            fee_resolver=FeeResolver({MembershipTier.REGULAR: RegularLateFeeCalculator()}),
        )

        with pytest.raises(UnsupportedTierError):
            workflow.return_book(book.isbn)

        assert book.status == BookStatus.CHECKED_OUT
        assert student_member.books_checked_out == 1

    def test_zero_holder_count_raises_without_changing_anything(self, workflow, book, regular_member,
                                                                 book_store, member_store, notifier):
        """A holder whose count is already 0 fails the return before any write."""
        book.check_out(regular_member.email, TODAY - timedelta(days=2))
        assert regular_member.books_checked_out == 0

        with pytest.raises(ValueError, match="no checked out books"):
            workflow.return_book(book.isbn)

        assert book.status == BookStatus.CHECKED_OUT
        assert book.checked_out_by == regular_member.email
        assert book.due_date == TODAY - timedelta(days=2)
        assert regular_member.books_checked_out == 0
        assert book_store.save_calls == []
        assert member_store.save_calls == []
        assert notifier.return_calls == []

    def test_notifier_failure_does_not_undo_return(self, book_store, member_store, book, regular_member):
        self._checkout_with_due_date(book, regular_member, TODAY - timedelta(days=2))
        workflow = LendingWorkflow(book_store, member_store, FailingNotifier(), FakeClock())

        result = workflow.return_book(book.isbn)

        assert result.success is True
        assert result.late_fee == Decimal("1.00")
        assert book.status == BookStatus.AVAILABLE
        assert regular_member.books_checked_out == 0


class TestLendingRoundTrip:
    """Checkout followed by return through the same workflow."""

    def test_checkout_then_late_return(self, book_store, member_store, notifier, book, regular_member):
        clock = FakeClock(TODAY)
        workflow = LendingWorkflow(book_store, member_store, notifier, clock)

        assert workflow.checkout(book.isbn, regular_member.email).success is True

        clock._today = TODAY + timedelta(days=14 + 6)
        result = workflow.return_book(book.isbn)

        assert result.message == "Book returned. Late fee: $3.00"
        assert regular_member.books_checked_out == 0
        assert book.is_available()
        assert len(notifier.checkout_calls) == 1
        assert len(notifier.return_calls) == 1

    def test_second_checkout_after_return(self, workflow, book, regular_member, premium_member):
        workflow.checkout(book.isbn, regular_member.email)
        assert workflow.checkout(book.isbn, premium_member.email).success is False

        workflow.return_book(book.isbn)
        result = workflow.checkout(book.isbn, premium_member.email)

        assert result.success is True
        assert book.checked_out_by == premium_member.email
