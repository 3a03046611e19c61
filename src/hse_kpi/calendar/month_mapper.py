"""Assign a week range to the calendar month it is reported under.

Rule:

- If the range stays inside one month, that month.
- Otherwise the month holding the most days of the range.
- On equal day counts, the month that contains the range's end date.

Monthly KPI reports are built by grouping weekly rows on this key, so each
weekly row lands in exactly one month.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from hse_kpi.core.models import DateLike, MonthKey, WeekIdentifier, to_date

from .weeks import week_dates

logger = logging.getLogger(__name__)


def month_day_counts(start: DateLike, end: DateLike) -> dict[MonthKey, int]:
    """Days of the inclusive range per calendar month, in month order.

    Inverted bounds are swapped.
    """
    first, last = to_date(start), to_date(end)
    if last < first:
        first, last = last, first

    counts: dict[MonthKey, int] = {}
    key = MonthKey.from_date(first)
    cursor = first
    while cursor <= last:
        segment_end = min(key.last_day, last)
        counts[key] = (segment_end - cursor).days + 1
        cursor = segment_end + timedelta(days=1)
        key = key.next()
    return counts


def week_to_month_key(week_start: DateLike, week_end: DateLike) -> MonthKey:
    """Month (``YYYY-MM``) to which the whole week belongs."""
    first, last = to_date(week_start), to_date(week_end)
    if last < first:
        first, last = last, first

    start_key = MonthKey.from_date(first)
    end_key = MonthKey.from_date(last)
    if start_key == end_key:
        return start_key

    counts = month_day_counts(first, last)
    top = max(counts.values())
    # Latest tied month wins; for a two-month span that is the end month.
    # On longer ranges the end month only wins when it is among the tied
    # leaders: 2026-01-01..2026-04-01 ties January and March at 31 days
    # and gives 2026-03, not the 1-day April.
    winner = max(k for k, n in counts.items() if n == top)
    if len(counts) > 2:
        logger.debug(
            "Range %s..%s spans %d months, assigned to %s",
            first.isoformat(), last.isoformat(), len(counts), winner,
        )
    return winner


def week_id_to_month_key(week_id: WeekIdentifier) -> MonthKey:
    """Month of a fiscal week identified by (year, week)."""
    rng = week_dates(week_id.week, week_id.year)
    return week_to_month_key(rng.start, rng.end)
