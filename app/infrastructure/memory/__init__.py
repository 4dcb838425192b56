"""
In-memory store adapters.

Dict-backed implementations of the BookStore and MemberStore ports. They
keep insertion order and hold entity references, so they suit tests and
single-process demos. They take no locks and persist nothing.
"""

from .in_memory_book_store import InMemoryBookStore
from .in_memory_member_store import InMemoryMemberStore

__all__ = ["InMemoryBookStore", "InMemoryMemberStore"]
