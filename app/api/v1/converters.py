"""
Converters between domain entities/value objects and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer, maintaining clean separation of concerns.
"""

from dataclasses import asdict

from app.domain import entities as domain
from app.domain import value_objects as domain_vo
from app.api.v1 import schemas as api


def domain_book_to_api(book: domain.Book) -> api.Book:
    """
    Convert a domain Book entity to an API Book model.

    Args:
        book: Domain Book entity

    Returns:
        API Book model
    """
    return api.Book(
        isbn=book.isbn,
        title=book.title,
        author=book.author,
        status=book.status.value,
        due_date=book.due_date,
        checked_out_by=book.checked_out_by,
    )


def domain_member_to_api(member: domain.Member) -> api.Member:
    return api.Member(
        email=member.email,
        name=member.name,
        tier=member.tier.value,
        books_checked_out=member.books_checked_out,
    )


def api_book_to_domain(request: api.BookCreate) -> domain.Book:
    """New books always start AVAILABLE."""
    return domain.Book(
        isbn=request.isbn.strip(),
        title=request.title,
        author=request.author,
    )


def api_member_to_domain(request: api.MemberCreate) -> domain.Member:
    return domain.Member(
        email=request.email.strip(),
        name=request.name,
        tier=domain.MembershipTier(request.tier),
    )


def domain_checkout_to_api(result: domain_vo.CheckoutResult) -> api.CheckoutResponse:
    return api.CheckoutResponse(**asdict(result))


def domain_return_to_api(result: domain_vo.ReturnResult) -> api.ReturnResponse:
    return api.ReturnResponse(**asdict(result))
