"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of stores and services
for use with FastAPI's Depends() system.

Note: We use module-level singletons instead of @lru_cache with Depends()
parameters, which is an antipattern that can cause unexpected behavior.
"""

import logging
import os
from typing import Optional

from app.domain.ports import Clock, Notifier
from app.domain.services import LendingWorkflow, ReportService, BookSearchService
from app.infrastructure.clock import FixedClock, SystemClock
from app.infrastructure.memory import InMemoryBookStore, InMemoryMemberStore
from app.infrastructure.notifications import LoggingNotifier

logger = logging.getLogger(__name__)

# Module-level singletons (initialized lazily)
_book_store: Optional[InMemoryBookStore] = None
_member_store: Optional[InMemoryMemberStore] = None
_notifier: Optional[Notifier] = None
_clock: Optional[Clock] = None
_lending_workflow: Optional[LendingWorkflow] = None
_report_service: Optional[ReportService] = None
_book_search_service: Optional[BookSearchService] = None


def get_book_store() -> InMemoryBookStore:
    """Provide a singleton instance of the book store."""
    global _book_store
    if _book_store is None:
        _book_store = InMemoryBookStore()
    return _book_store


def get_member_store() -> InMemoryMemberStore:
    """Provide a singleton instance of the member store."""
    global _member_store
    if _member_store is None:
        _member_store = InMemoryMemberStore()
    return _member_store


def get_notifier() -> Notifier:
    global _notifier
    if _notifier is None:
        _notifier = LoggingNotifier()
    return _notifier


def get_clock() -> Clock:
    """
    Provide the clock.

    If LIBRARY_TODAY is set (ISO date), the clock is pinned to that date.

    Raises:
        ValueError: If LIBRARY_TODAY is not a valid ISO date
    """
    global _clock
    if _clock is None:
        pinned = os.getenv("LIBRARY_TODAY")
        if pinned:
            logger.info(f"Clock pinned to {pinned} via LIBRARY_TODAY")
            _clock = FixedClock.from_iso(pinned)
        else:
            _clock = SystemClock()
    return _clock


def get_lending_workflow() -> LendingWorkflow:
    """Provide the LendingWorkflow with all dependencies wired."""
    global _lending_workflow
    if _lending_workflow is None:
        _lending_workflow = LendingWorkflow(
            book_store=get_book_store(),
            member_store=get_member_store(),
            notifier=get_notifier(),
            clock=get_clock(),
        )
    return _lending_workflow


def get_report_service() -> ReportService:
    global _report_service
    if _report_service is None:
        _report_service = ReportService(get_book_store(), get_clock())
    return _report_service


def get_book_search_service() -> BookSearchService:
    global _book_search_service
    if _book_search_service is None:
        _book_search_service = BookSearchService(get_book_store())
    return _book_search_service


def reset_dependencies() -> None:
    """
    Reset all singletons. Useful for testing.

    This allows tests to start from empty stores and to re-read
    LIBRARY_TODAY between test cases.
    """
    global _book_store, _member_store, _notifier, _clock
    global _lending_workflow, _report_service, _book_search_service

    _book_store = None
    _member_store = None
    _notifier = None
    _clock = None
    _lending_workflow = None
    _report_service = None
    _book_search_service = None
