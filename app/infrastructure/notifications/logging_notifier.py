"""
Notifier adapter that writes notifications to the application log.

Stands in for an email/SMS transport: the message text is what a member
would receive.
"""

import logging
from datetime import date
from decimal import Decimal

from app.domain.entities import Book, Member
from app.domain.ports import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Logs one INFO line per notification."""

    def notify_checkout(self, member: Member, book: Book, due_date: date) -> None:
        logger.info(
            f"Notification for {member.name}: Book checked out: {book.title}. "
            f"Due date: {due_date.isoformat()}"
        )

    def notify_return(self, member: Member, book: Book, fee: Decimal) -> None:
        logger.info(
            f"Notification for {member.name}: Book returned: {book.title}. "
            f"Late fee: {fee:.2f}"
        )
