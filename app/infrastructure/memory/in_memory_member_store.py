"""
In-memory implementation of the MemberStore port.
"""

from typing import Dict, Iterable, Optional

from app.domain.entities import Member
from app.domain.ports import MemberStore


class InMemoryMemberStore(MemberStore):
    """Members keyed by email, in insertion order."""

    def __init__(self, initial_members: Optional[Iterable[Member]] = None) -> None:
        self._members: Dict[str, Member] = {}
        for member in initial_members or []:
            self.add(member)

    def add(self, member: Member) -> None:
        """
        Register a new member.

        Raises:
            ValueError: If a member with the same email already exists
        """
        if member.email in self._members:
            raise ValueError(f"Member with email '{member.email}' already exists")
        self._members[member.email] = member

    def find_by_email(self, email: str) -> Optional[Member]:
        return self._members.get(email)

    def save(self, member: Member) -> None:
        self._members[member.email] = member

    def count(self) -> int:
        return len(self._members)
