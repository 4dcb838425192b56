"""
Late fee calculators per membership tier.

Fees are Decimal amounts. Regular members pay 0.50 per day late, students
0.25 per day, and premium members have their late fees waived.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Mapping, Optional, Protocol, Union

from .entities import MembershipTier
from .exceptions import UnsupportedTierError
from .policies import normalize_tier

logger = logging.getLogger(__name__)

ZERO_FEE = Decimal("0.00")


class LateFeeCalculator(Protocol):
    """Strategy computing the fee owed for a late return."""

    def calculate_late_fee(self, days_late: int) -> Decimal:
        """
        Args:
            days_late: Whole calendar days past the due date (>= 0)

        Returns:
            The non-negative fee owed

        Raises:
            ValueError: If days_late is negative
        """
        ...


def _check_days_late(days_late: int) -> None:
    if days_late < 0:
        raise ValueError(f"days_late cannot be negative, got {days_late}")


@dataclass(frozen=True)
class PerDayLateFeeCalculator:
    """Charges a flat rate for every day late."""

    rate_per_day: Decimal

    def __post_init__(self) -> None:
        """Validate the rate."""
        if self.rate_per_day < 0:
            raise ValueError(
                f"rate_per_day cannot be negative, got {self.rate_per_day}"
            )

    def calculate_late_fee(self, days_late: int) -> Decimal:
        _check_days_late(days_late)
        return self.rate_per_day * days_late


@dataclass(frozen=True)
class RegularLateFeeCalculator(PerDayLateFeeCalculator):
    rate_per_day: Decimal = Decimal("0.50")


@dataclass(frozen=True)
class StudentLateFeeCalculator(PerDayLateFeeCalculator):
    rate_per_day: Decimal = Decimal("0.25")


@dataclass(frozen=True)
class PremiumLateFeeCalculator:
    """Premium membership waives late fees."""

    def calculate_late_fee(self, days_late: int) -> Decimal:
        _check_days_late(days_late)
        return ZERO_FEE


class FeeResolver:
    """
    Resolves the LateFeeCalculator for a membership tier.

    Same contract as PolicyResolver: total over the registered tiers,
    UnsupportedTierError for anything else.
    """

    def __init__(
        self, calculators: Optional[Mapping[MembershipTier, LateFeeCalculator]] = None
    ) -> None:
        if calculators is None:
            calculators = {
                MembershipTier.REGULAR: RegularLateFeeCalculator(),
                MembershipTier.PREMIUM: PremiumLateFeeCalculator(),
                MembershipTier.STUDENT: StudentLateFeeCalculator(),
            }
        self._calculators: Dict[MembershipTier, LateFeeCalculator] = dict(calculators)

    def resolve(self, tier: Union[MembershipTier, str]) -> LateFeeCalculator:
        """
        Get the fee calculator for a tier.

        Raises:
            UnsupportedTierError: If no calculator is registered for the tier
        """
        calculator = self._calculators.get(normalize_tier(tier))
        if calculator is None:
            logger.error(f"No late fee calculator registered for tier {tier}")
            raise UnsupportedTierError(tier)
        return calculator
