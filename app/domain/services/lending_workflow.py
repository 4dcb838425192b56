"""
Domain service for the checkout/return lending transaction.

A book moves AVAILABLE -> CHECKED_OUT on checkout and back on return; no
other transition exists. Business rules that stop a transaction (book
unavailable, checkout limit reached, book not checked out) produce declined
results. Unknown ISBNs, unknown members and unsupported tiers raise domain
errors that propagate to the caller.

The workflow holds no state of its own and takes no locks: atomicity of
the book/member updates and mutual exclusion per book are the
responsibility of the store implementations.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from app.domain.entities import Book, Member
from app.domain.exceptions import BookNotFoundError, MemberNotFoundError
from app.domain.fees import FeeResolver, ZERO_FEE
from app.domain.policies import PolicyResolver
from app.domain.ports import BookStore, MemberStore, Notifier, Clock
from app.domain.value_objects import CheckoutResult, ReturnResult

logger = logging.getLogger(__name__)

BOOK_NOT_AVAILABLE = "Book is not available"
CHECKOUT_LIMIT_REACHED = "Member has reached checkout limit"
BOOK_NOT_CHECKED_OUT = "Book is not checked out"


class LendingWorkflow:
    """
    Orchestrates checkout and return of a single book.

    Checkout:
    1. Look up book and member (errors if missing)
    2. Decline if the book is not available or the member's policy refuses
    3. Check the book out until today + loan period, bump the member count
    4. Notify the member (fire-and-forget)

    Return:
    1. Look up the book (error if missing), decline if not checked out
    2. Compute the late fee with the holder's current tier calculator
    3. Decrement the holder's count, mark the book available
    4. Notify the member (fire-and-forget)

    Usage:
        workflow = LendingWorkflow(
            book_store=books,
            member_store=members,
            notifier=LoggingNotifier(),
            clock=SystemClock(),
        )
        result = workflow.checkout("978-0132350884", "ada@example.com")
    """

    def __init__(
        self,
        book_store: BookStore,
        member_store: MemberStore,
        notifier: Notifier,
        clock: Clock,
        policy_resolver: Optional[PolicyResolver] = None,
        fee_resolver: Optional[FeeResolver] = None,
    ) -> None:
        """
        Initialize the workflow with its collaborators.

        Args:
            book_store: Store the books are read from and saved to
            member_store: Store the members are read from and saved to
            notifier: Receives checkout/return notifications
            clock: Source of today's date
            policy_resolver: Tier -> membership policy (default tiers if None)
            fee_resolver: Tier -> late fee calculator (default tiers if None)
        """
        self._book_store = book_store
        self._member_store = member_store
        self._notifier = notifier
        self._clock = clock
        self._policy_resolver = policy_resolver or PolicyResolver()
        self._fee_resolver = fee_resolver or FeeResolver()

    def checkout(self, isbn: str, member_email: str) -> CheckoutResult:
        """
        Check a book out to a member.

        Args:
            isbn: ISBN of the book to borrow
            member_email: Email of the borrowing member

        Returns:
            A successful CheckoutResult carrying the due date, or a declined
            result whose message explains why

        Raises:
            BookNotFoundError: If no book has this ISBN
            MemberNotFoundError: If no member has this email
            UnsupportedTierError: If the member's tier has no policy
        """
        book = self._get_book(isbn)
        member = self._get_member(member_email)

        if not book.is_available():
            logger.debug(f"Checkout of {isbn} declined: book is {book.status.value}")
            return CheckoutResult.declined(BOOK_NOT_AVAILABLE)

        policy = self._policy_resolver.resolve(member.tier)

        if not policy.can_checkout(member):
            logger.debug(
                f"Checkout of {isbn} declined: {member_email} holds "
                f"{member.books_checked_out}/{policy.max_books} books"
            )
            return CheckoutResult.declined(CHECKOUT_LIMIT_REACHED)

        due_date = self._clock.today() + timedelta(days=policy.loan_period_days)

        book.check_out(member.email, due_date)
        self._book_store.save(book)

        member.increment_checkout_count()
        self._member_store.save(member)

        logger.info(f"Checked out {isbn} to {member.email}, due {due_date.isoformat()}")

        self._send_checkout_notification(member, book, due_date)

        return CheckoutResult(
            success=True,
            message=f"Book checked out successfully. Due date: {due_date.isoformat()}",
            due_date=due_date,
        )

    def return_book(self, isbn: str) -> ReturnResult:
        """
        Return a checked-out book, charging a late fee if it is overdue.

        The fee calculator is resolved from the holder's tier at return
        time, which may differ from the tier they had at checkout.

        Args:
            isbn: ISBN of the book being returned

        Returns:
            A successful ReturnResult carrying the fee, or a declined result
            if the book was not checked out

        Raises:
            BookNotFoundError: If no book has this ISBN
            MemberNotFoundError: If the recorded borrower does not exist
            UnsupportedTierError: If the holder's tier has no fee calculator
            ValueError: If the holder's recorded count is already zero
        """
        book = self._get_book(isbn)

        if not book.is_checked_out():
            logger.debug(f"Return of {isbn} declined: book is {book.status.value}")
            return ReturnResult.declined(BOOK_NOT_CHECKED_OUT)

        member = self._get_member(book.checked_out_by)
        calculator = self._fee_resolver.resolve(member.tier)

        fee = ZERO_FEE
        days_late = book.days_overdue(self._clock.today())
        if days_late > 0:
            fee = calculator.calculate_late_fee(days_late)

        # decrement_checkout_count() raises on an inconsistent count and must
        # run before anything is mutated or saved.
        member.decrement_checkout_count()
        book.mark_returned()

        self._book_store.save(book)
        self._member_store.save(member)

        logger.info(f"Returned {isbn} from {member.email}, {days_late} days late, fee {fee}")

        self._send_return_notification(member, book, fee)

        if fee > 0:
            message = f"Book returned. Late fee: ${fee:.2f}"
        else:
            message = "Book returned successfully"

        return ReturnResult(success=True, message=message, late_fee=fee)

    def _get_book(self, isbn: str) -> Book:
        book = self._book_store.find_by_isbn(isbn)
        if book is None:
            raise BookNotFoundError(isbn)
        return book

    def _get_member(self, email: Optional[str]) -> Member:
        member = self._member_store.find_by_email(email) if email else None
        if member is None:
            raise MemberNotFoundError(email)
        return member

    # Notifications are one-way: a failing notifier is logged and the
    # already-applied book/member changes stand.

    def _send_checkout_notification(self, member: Member, book: Book, due_date: date) -> None:
        try:
            self._notifier.notify_checkout(member, book, due_date)
        except Exception as e:
            logger.warning(f"Checkout notification for {member.email} failed: {e}")

    def _send_return_notification(self, member: Member, book: Book, fee: Decimal) -> None:
        try:
            self._notifier.notify_return(member, book, fee)
        except Exception as e:
            logger.warning(f"Return notification for {member.email} failed: {e}")
