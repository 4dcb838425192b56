"""
Membership policies: checkout eligibility and loan period per tier.

Each tier is a frozen dataclass exposing the same capability
(max_books, loan_period_days, can_checkout). PolicyResolver maps a tier to
its policy and is the only place that needs to change when a tier is added.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, Union

from .entities import Member, MembershipTier
from .exceptions import UnsupportedTierError

logger = logging.getLogger(__name__)


class MembershipPolicy(Protocol):
    """Strategy deciding whether a member may borrow and for how long."""

    @property
    def max_books(self) -> int:
        """Maximum number of books a member may hold at once."""
        ...

    @property
    def loan_period_days(self) -> int:
        """Length of a loan in calendar days."""
        ...

    def can_checkout(self, member: Member) -> bool:
        """True iff the member holds fewer books than max_books."""
        ...


@dataclass(frozen=True)
class CheckoutLimitPolicy:
    """
    Policy based on a fixed checkout limit and a fixed loan period.
    """

    max_books: int
    loan_period_days: int

    def __post_init__(self) -> None:
        """Validate policy values."""
        if self.max_books < 1:
            raise ValueError(f"max_books must be >= 1, got {self.max_books}")

        if self.loan_period_days < 1:
            raise ValueError(
                f"loan_period_days must be >= 1, got {self.loan_period_days}"
            )

    def can_checkout(self, member: Member) -> bool:
        return member.books_checked_out < self.max_books


@dataclass(frozen=True)
class RegularMembershipPolicy(CheckoutLimitPolicy):
    max_books: int = 3
    loan_period_days: int = 14


@dataclass(frozen=True)
class PremiumMembershipPolicy(CheckoutLimitPolicy):
    max_books: int = 10
    loan_period_days: int = 30


@dataclass(frozen=True)
class StudentMembershipPolicy(CheckoutLimitPolicy):
    max_books: int = 5
    loan_period_days: int = 21


def normalize_tier(tier: Union[MembershipTier, str]) -> MembershipTier:
    """
    Convert a tier name to a MembershipTier.

    Strings are matched case-insensitively against the tier values.

    Raises:
        UnsupportedTierError: If the value names no known tier
    """
    if isinstance(tier, MembershipTier):
        return tier

    if isinstance(tier, str):
        try:
            return MembershipTier(tier.strip().upper())
        except ValueError:
            pass

    raise UnsupportedTierError(tier)


class PolicyResolver:
    """
    Resolves the MembershipPolicy for a membership tier.

    The resolver is total over its registered tiers and raises for anything
    else; it never falls back to a default policy.
    """

    def __init__(
        self, policies: Optional[Mapping[MembershipTier, MembershipPolicy]] = None
    ) -> None:
        """
        Args:
            policies: Optional tier -> policy mapping. Defaults to the
                      Regular, Premium and Student policies.
        """
        if policies is None:
            policies = {
                MembershipTier.REGULAR: RegularMembershipPolicy(),
                MembershipTier.PREMIUM: PremiumMembershipPolicy(),
                MembershipTier.STUDENT: StudentMembershipPolicy(),
            }
        self._policies: Dict[MembershipTier, MembershipPolicy] = dict(policies)

    def resolve(self, tier: Union[MembershipTier, str]) -> MembershipPolicy:
        """
        Get the policy for a tier.

        Args:
            tier: A MembershipTier or its name

        Returns:
            The registered policy

        Raises:
            UnsupportedTierError: If no policy is registered for the tier
        """
        policy = self._policies.get(normalize_tier(tier))
        if policy is None:
            logger.error(f"No membership policy registered for tier {tier}")
            raise UnsupportedTierError(tier)
        return policy
