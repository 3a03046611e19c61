"""Saturday-to-Friday fiscal week calendar, 52 weeks per year.

Week 1 of fiscal year ``Y`` starts on the Saturday on or before
31 December of ``Y - 1``. Weeks are numbered 1..52 from that anchor.

Because consecutive anchors are either 364 or 371 days apart, some fiscal
years have seven extra days after week 52 (the overflow days). Those days
are reported as week 52 of their fiscal year, so every date maps to
exactly one (year, week) pair and the day before any Week 1 is week 52 of
the previous year.

Usage::

    week_dates(48, 2025)        # WeekRange(2025-11-22, 2025-11-28)
    week_from_date(date(2025, 11, 25))  # WeekIdentifier(year=2025, week=48)
"""

from __future__ import annotations

import logging
from datetime import date

from hse_kpi.core.clock import IClock, SystemClock
from hse_kpi.core.errors import InvalidArgumentError
from hse_kpi.core.models import (
    SATURDAY,
    DateLike,
    WeekIdentifier,
    WeekInfo,
    WeekRange,
    to_date,
)

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52
DAYS_PER_WEEK = 7
DEFAULT_WEEK_LABEL = "Semaine"


def _check_week(week_number: int) -> None:
    if not 1 <= week_number <= WEEKS_PER_YEAR:
        raise InvalidArgumentError(
            f"Week number must be between 1 and {WEEKS_PER_YEAR}, got {week_number}"
        )


def _anchor_ordinal(year: int) -> int:
    """Proleptic ordinal of week1_start(year), possibly below date.min.

    Works on ordinals so the first days of year 1 still resolve: their
    fiscal year starts on 31 December of year 0 (ordinal -1).
    """
    if not 1 <= year <= date.max.year + 1:
        raise InvalidArgumentError(
            f"Year must be between 1 and {date.max.year + 1}, got {year}"
        )
    dec31 = date(year - 1, 12, 31).toordinal() if year > 1 else 0
    weekday = (dec31 + 6) % DAYS_PER_WEEK  # same numbering as date.weekday()
    return dec31 - (weekday - SATURDAY) % DAYS_PER_WEEK


def _from_ordinal(ordinal: int, what: str) -> date:
    if not date.min.toordinal() <= ordinal <= date.max.toordinal():
        raise InvalidArgumentError(f"{what} is outside the supported date range")
    return date.fromordinal(ordinal)


# ---------------------------------------------------------------------------
# Anchors and ranges
# ---------------------------------------------------------------------------

def week1_start(year: int) -> date:
    """Saturday that starts Week 1 of ``year``.

    31 December of the previous year if that is a Saturday, otherwise the
    Saturday 1-6 days before it.

    Raises:
        InvalidArgumentError: If that Saturday is not a representable date
            (fiscal year 1 starts in year 0).
    """
    return _from_ordinal(_anchor_ordinal(year), f"Week 1 of {year}")


def week_dates(week_number: int, year: int) -> WeekRange:
    """Saturday-Friday range of ``week_number`` in fiscal ``year``.

    Raises:
        InvalidArgumentError: If ``week_number`` is not in 1..52, or the
            week falls outside the representable dates.
    """
    _check_week(week_number)
    start = _anchor_ordinal(year) + (week_number - 1) * DAYS_PER_WEEK
    what = f"Week {week_number} of {year}"
    return WeekRange(
        start=_from_ordinal(start, what),
        end=_from_ordinal(start + DAYS_PER_WEEK - 1, what),
    )


def fiscal_year_bounds(year: int) -> tuple[date, date]:
    """First and last day of fiscal ``year`` (364 or 371 days)."""
    first = week1_start(year)
    last = _from_ordinal(_anchor_ordinal(year + 1) - 1, f"Fiscal year {year}")
    return first, last


def fiscal_year_of(value: DateLike) -> int:
    """Fiscal year ``Y`` such that week1_start(Y) <= d < week1_start(Y + 1)."""
    d = to_date(value)
    year = d.year
    # Week 1 of year+1 starts 25-31 Dec of year, so a date is either in its
    # own calendar year's fiscal year or in the next one.
    if d.toordinal() >= _anchor_ordinal(year + 1):
        year += 1
    return year


def _week_offset(d: date) -> tuple[int, int]:
    year = fiscal_year_of(d)
    return year, d.toordinal() - _anchor_ordinal(year)


def week_from_date(value: DateLike) -> WeekIdentifier:
    """Fiscal (year, week) containing ``value``."""
    d = to_date(value)
    year, offset = _week_offset(d)
    week = offset // DAYS_PER_WEEK + 1
    if week > WEEKS_PER_YEAR:
        logger.debug(
            "Overflow day %s assigned to week %d of %d",
            d.isoformat(), WEEKS_PER_YEAR, year,
        )
        week = WEEKS_PER_YEAR
    return WeekIdentifier(year=year, week=week)


def is_overflow_date(value: DateLike) -> bool:
    """True for the days after week 52 in a 371-day fiscal year."""
    _, offset = _week_offset(to_date(value))
    return offset >= WEEKS_PER_YEAR * DAYS_PER_WEEK


def current_week(
    today: date | None = None,
    clock: IClock | None = None,
) -> WeekIdentifier:
    """Fiscal week of ``today``, read from ``clock`` when not given."""
    if today is None:
        today = (clock or SystemClock()).today()
    return week_from_date(today)


# ---------------------------------------------------------------------------
# Listings and labels
# ---------------------------------------------------------------------------

def all_weeks_for_year(year: int, *, label: str = DEFAULT_WEEK_LABEL) -> list[WeekInfo]:
    """All 52 weeks of ``year`` in order with display labels."""
    weeks = []
    for w in range(1, WEEKS_PER_YEAR + 1):
        rng = week_dates(w, year)
        weeks.append(
            WeekInfo(
                week=w,
                year=year,
                start_date=rng.start,
                end_date=rng.end,
                label=f"{label} {w} ({rng.start:%d/%m} - {rng.end:%d/%m})",
            )
        )
    return weeks


def format_week(week_number: int, year: int, *, label: str = DEFAULT_WEEK_LABEL) -> str:
    """e.g. ``Semaine 48 (22/11/2025 - 28/11/2025)``."""
    rng = week_dates(week_number, year)
    return f"{label} {week_number} ({rng.start:%d/%m/%Y} - {rng.end:%d/%m/%Y})"


def parse_week_token(token: str) -> WeekIdentifier:
    """Parse ``YYYY-WXX`` (e.g. ``2026-W05``)."""
    return WeekIdentifier.parse(token)


def format_week_token(week_id: WeekIdentifier) -> str:
    return week_id.token
