"""Calendar value types shared by the week calendar, month mapper and rollup.

All of these are immutable and recomputed on demand from dates and
integers; none of them carry time-of-day or time zone information.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union

from pydantic import BaseModel

from .errors import InvalidArgumentError, PeriodFormatError

DateLike = Union[date, datetime, str]

SATURDAY = 5  # date.weekday(): 0=Monday .. 6=Sunday
FRIDAY = 4

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")
_WEEK_TOKEN_RE = re.compile(r"^(\d{4})-W(\d{1,2})$")


def to_date(value: DateLike) -> date:
    """Reduce a date-like value to a calendar date.

    ``datetime`` values keep their own calendar date (no time zone
    conversion). Strings must be ISO ``YYYY-MM-DD``, optionally followed by
    a ``T`` or space separated time part, which must itself be valid.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            if len(text) > 10 and text[10] in "T ":
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                return datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise InvalidArgumentError(f"Invalid date: {value!r}") from exc
        raise InvalidArgumentError(f"Invalid date: {value!r}")
    raise InvalidArgumentError(f"Expected a date, got {type(value).__name__}")


# ---------------------------------------------------------------------------
# Week range
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WeekRange:
    """One fiscal week: Saturday ``start`` through Friday ``end``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start.weekday() != SATURDAY:
            raise InvalidArgumentError(
                f"Week must start on a Saturday, got {self.start.isoformat()}"
            )
        if self.end - self.start != timedelta(days=6):
            raise InvalidArgumentError(
                f"Week must span 7 days, got {self.start.isoformat()}..{self.end.isoformat()}"
            )

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(7)]


# ---------------------------------------------------------------------------
# Week identifier
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class WeekIdentifier:
    """(fiscal year, week number) pair. Orders chronologically."""

    year: int
    week: int

    def __post_init__(self) -> None:
        if not 1 <= self.week <= 52:
            raise InvalidArgumentError(
                f"Week number must be between 1 and 52, got {self.week}"
            )

    @property
    def token(self) -> str:
        """``YYYY-WXX`` form used by week-range report periods."""
        return f"{self.year:04d}-W{self.week:02d}"

    @classmethod
    def parse(cls, token: str) -> WeekIdentifier:
        match = _WEEK_TOKEN_RE.match(token.strip()) if isinstance(token, str) else None
        if not match:
            raise PeriodFormatError(
                f"Invalid week format {token!r}. Expected YYYY-WXX"
            )
        return cls(year=int(match.group(1)), week=int(match.group(2)))

    def __str__(self) -> str:
        return self.token


# ---------------------------------------------------------------------------
# Month key
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class MonthKey:
    """Calendar month used as a rollup bucket. Renders as ``YYYY-MM``."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InvalidArgumentError(
                f"Month must be between 1 and 12, got {self.month}"
            )

    @classmethod
    def from_date(cls, value: DateLike) -> MonthKey:
        d = to_date(value)
        return cls(year=d.year, month=d.month)

    @classmethod
    def parse(cls, text: str) -> MonthKey:
        match = _MONTH_KEY_RE.match(text.strip()) if isinstance(text, str) else None
        if not match:
            raise PeriodFormatError(
                f"Invalid month format {text!r}. Expected YYYY-MM"
            )
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        if self.month == 12:
            return date(self.year, 12, 31)
        return self.next().first_day - timedelta(days=1)

    def next(self) -> MonthKey:
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# ---------------------------------------------------------------------------
# Week listing row
# ---------------------------------------------------------------------------

class WeekInfo(BaseModel):
    """One row of a fiscal year's week listing."""

    week: int
    year: int
    start_date: date
    end_date: date
    label: str
