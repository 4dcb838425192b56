"""
Clock adapters implementing the Clock port.
"""

from datetime import date

from app.domain.ports import Clock


class SystemClock(Clock):
    """Today's date from the local system clock."""

    def today(self) -> date:
        return date.today()


class FixedClock(Clock):
    """
    A clock pinned to one date.

    Used in tests and when LIBRARY_TODAY is set, so that due dates, fees and
    reports are reproducible.
    """

    def __init__(self, today: date) -> None:
        self._today = today

    def today(self) -> date:
        return self._today

    @staticmethod
    def from_iso(value: str) -> "FixedClock":
        """
        Build a clock from an ISO date string (YYYY-MM-DD).

        Raises:
            ValueError: If the string is not a valid ISO date
        """
        return FixedClock(date.fromisoformat(value.strip()))
