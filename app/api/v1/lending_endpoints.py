"""
API endpoints for lending operations.

This module defines the FastAPI routes for registering books and members,
checking books out and in, looking books up and rendering reports. It
handles HTTP concerns and delegates to domain services.
"""

from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from app.domain.exceptions import (
    LibraryError,
    BookNotFoundError,
    MemberNotFoundError,
)
from app.domain.services import LendingWorkflow, ReportService, BookSearchService
from app.infrastructure.memory import InMemoryBookStore, InMemoryMemberStore
from app.api.v1 import schemas as api
from app.api.v1.converters import (
    api_book_to_domain,
    api_member_to_domain,
    domain_book_to_api,
    domain_member_to_api,
    domain_checkout_to_api,
    domain_return_to_api,
)
from app.api.v1.dependencies import (
    get_book_store,
    get_member_store,
    get_lending_workflow,
    get_report_service,
    get_book_search_service,
)

router = APIRouter()


def _lending_error_to_http(e: Exception) -> HTTPException:
    if isinstance(e, (BookNotFoundError, MemberNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValueError):
        # stored lending state is inconsistent; nothing was changed
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e),
    )


@router.post("/books", response_model=api.Book, status_code=status.HTTP_201_CREATED)
def register_book(
    request: api.BookCreate,
    book_store: InMemoryBookStore = Depends(get_book_store),
) -> api.Book:
    """
    Add a book to the inventory. New books start AVAILABLE.

    Raises:
        409: A book with this ISBN already exists
    """
    book = api_book_to_domain(request)
    try:
        book_store.add(book)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return domain_book_to_api(book)


@router.get("/books", response_model=List[api.Book])
def search_books(
    q: str = Query(description="Text to search for"),
    by: Literal["title", "author", "isbn"] = Query(default="title"),
    service: BookSearchService = Depends(get_book_search_service),
) -> List[api.Book]:
    """Look books up by title (substring), author or ISBN."""
    return [domain_book_to_api(book) for book in service.search(q, by)]


@router.get("/books/{isbn}", response_model=api.Book)
def get_book(
    isbn: str,
    book_store: InMemoryBookStore = Depends(get_book_store),
) -> api.Book:
    """
    Get a book by ISBN.

    Raises:
        404: Book not found
    """
    book = book_store.find_by_isbn(isbn)
    if book is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(BookNotFoundError(isbn)),
        )
    return domain_book_to_api(book)


@router.post("/members", response_model=api.Member, status_code=status.HTTP_201_CREATED)
def register_member(
    request: api.MemberCreate,
    member_store: InMemoryMemberStore = Depends(get_member_store),
) -> api.Member:
    """
    Register a library member.

    Raises:
        400: Invalid member data
        409: A member with this email already exists
    """
    try:
        member = api_member_to_domain(request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        member_store.add(member)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return domain_member_to_api(member)


@router.get("/members/{email}", response_model=api.Member)
def get_member(
    email: str,
    member_store: InMemoryMemberStore = Depends(get_member_store),
) -> api.Member:
    member = member_store.find_by_email(email)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(MemberNotFoundError(email)),
        )
    return domain_member_to_api(member)


@router.post("/checkouts", response_model=api.CheckoutResponse)
def checkout_book(
    request: api.CheckoutRequest,
    workflow: LendingWorkflow = Depends(get_lending_workflow),
) -> api.CheckoutResponse:
    """
    Check a book out to a member.

    A declined checkout (book unavailable, limit reached) is a 200 response
    with success=false.

    Raises:
        404: Unknown ISBN or member email
        500: Member tier has no policy configured
    """
    try:
        result = workflow.checkout(request.isbn, request.member_email)
    except (LibraryError, ValueError) as e:
        raise _lending_error_to_http(e)
    return domain_checkout_to_api(result)


@router.post("/returns", response_model=api.ReturnResponse)
def return_book(
    request: api.ReturnRequest,
    workflow: LendingWorkflow = Depends(get_lending_workflow),
) -> api.ReturnResponse:
    """
    Return a checked-out book, charging any late fee.

    Raises:
        404: Unknown ISBN, or the recorded borrower no longer exists
        409: The borrower's checkout count is already zero
        500: Member tier has no fee calculator configured
    """
    try:
        result = workflow.return_book(request.isbn)
    except (LibraryError, ValueError) as e:
        raise _lending_error_to_http(e)
    return domain_return_to_api(result)


@router.get("/reports", response_model=List[str])
def list_reports(
    service: ReportService = Depends(get_report_service),
) -> List[str]:
    """List the report type names accepted by /reports/{report_type}."""
    return service.available_report_types()


@router.get("/reports/{report_type}", response_class=PlainTextResponse)
def get_report(
    report_type: str,
    service: ReportService = Depends(get_report_service),
) -> str:
    """
    Render an inventory report as plain text.

    report_type is "available" or "overdue".

    Raises:
        400: Unknown report type
    """
    try:
        return service.generate_report(report_type)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
