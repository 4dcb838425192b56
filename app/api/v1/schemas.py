"""
Request and response models for the lending API.
"""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


# request bodies

class BookCreate(BaseModel):
    """
    Request body for POST /books.
    """
    isbn: str = Field(min_length=1, description="International Standard Book Number")
    title: str = Field(min_length=1, description="Book title")
    author: str = Field(min_length=1, description="Author name")


class MemberCreate(BaseModel):
    """
    Request body for POST /members.
    """
    email: str = Field(min_length=3, description="Member email, used as identifier")
    name: str = Field(min_length=1, description="Member display name")
    tier: Literal["REGULAR", "PREMIUM", "STUDENT"] = Field(
        default="REGULAR",
        description="Membership tier"
    )


class CheckoutRequest(BaseModel):
    """
    Request body for POST /checkouts.
    """
    isbn: str = Field(description="ISBN of the book to check out")
    member_email: str = Field(description="Email of the borrowing member")


class ReturnRequest(BaseModel):
    """
    Request body for POST /returns.
    """
    isbn: str = Field(description="ISBN of the book being returned")


# response bodies

class Book(BaseModel):
    """
    API representation of a Book entity.
    """
    isbn: str | None = Field(default=None, description="International Standard Book Number")
    title: str | None = Field(default=None, description="Book title")
    author: str | None = Field(default=None, description="Author name")
    status: Literal["AVAILABLE", "CHECKED_OUT"] = Field(description="Lending state")
    due_date: date | None = Field(default=None, description="Due date while checked out")
    checked_out_by: str | None = Field(
        default=None,
        description="Email of the member holding the book"
    )


class Member(BaseModel):
    """
    API representation of a Member entity.
    """
    email: str
    name: str
    tier: Literal["REGULAR", "PREMIUM", "STUDENT"]
    books_checked_out: int = Field(ge=0)


class CheckoutResponse(BaseModel):
    """
    Outcome of a checkout. success=false is a declined checkout, not an error.
    """
    success: bool
    message: str = Field(description="Human-readable outcome, rendered as-is")
    due_date: date | None = Field(default=None, description="Due date when successful")


class ReturnResponse(BaseModel):
    """
    Outcome of a return. success=false is a declined return, not an error.
    """
    success: bool
    message: str = Field(description="Human-readable outcome, rendered as-is")
    late_fee: Decimal | None = Field(default=None, description="Fee charged, 0 when on time")
