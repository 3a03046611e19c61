"""Clock abstraction for the one wall-clock dependent calendar query.

SystemClock: real wall-clock time in a configured time zone
FixedClock: deterministic date for tests and report replays

Calendar code never calls date.today() directly; "current week" lookups
take a clock or an explicit date.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as a timezone-aware datetime."""
        ...

    def today(self) -> date:
        """Current calendar date in the clock's time zone."""
        ...


class SystemClock:
    """Real wall-clock time. Defaults to UTC."""

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz or timezone.utc

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Fixed clock for deterministic week lookups.

    The date only moves when explicitly set or advanced.
    """

    def __init__(self, start: date | None = None) -> None:
        self._date = start or date(2026, 1, 1)

    def now(self) -> datetime:
        return datetime.combine(self._date, time.min, tzinfo=timezone.utc)

    def today(self) -> date:
        return self._date

    def set_date(self, d: date) -> None:
        """Move the clock. Must be monotonically increasing."""
        if d < self._date:
            raise ValueError(
                f"FixedClock cannot go backwards: {d} < {self._date}"
            )
        self._date = d

    def advance_days(self, days: int) -> None:
        """Advance the clock by whole days."""
        self.set_date(self._date + timedelta(days=days))
