"""Report periods for the monthly KPI report.

A period is either one calendar month (``YYYY-MM``), whose weeks are the
fiscal weeks the month mapper assigns to it, or an explicit fiscal week
range (``YYYY-WXX`` to ``YYYY-WXX``), whose weeks are those overlapping
the range's dates.

Usage::

    period = parse_period(month="2026-02")
    period.includes(WeekIdentifier(2026, 5))    # True
    period = parse_period(week_start="2026-W05", week_end="2026-W08")
    period.key                                  # "2026-W05_to_2026-W08"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from hse_kpi.core.clock import IClock, SystemClock
from hse_kpi.core.enums import PeriodMode
from hse_kpi.core.errors import InvalidArgumentError, PeriodFormatError
from hse_kpi.core.models import MonthKey, WeekIdentifier

from .month_mapper import week_id_to_month_key, week_to_month_key
from .weeks import WEEKS_PER_YEAR, week_dates

logger = logging.getLogger(__name__)


def build_week_month_map(target_year: int) -> dict[WeekIdentifier, MonthKey]:
    """Month key of every week of ``target_year`` and both neighbouring years.

    Boundary weeks of the neighbouring years can fall in January or
    December of ``target_year``.
    """
    mapping: dict[WeekIdentifier, MonthKey] = {}
    for year in (target_year - 1, target_year, target_year + 1):
        for w in range(1, WEEKS_PER_YEAR + 1):
            rng = week_dates(w, year)
            mapping[WeekIdentifier(year=year, week=w)] = week_to_month_key(rng.start, rng.end)
    return mapping


@dataclass(frozen=True)
class ReportPeriod:
    """A month or a fiscal week range selected for a report."""

    mode: PeriodMode
    month: MonthKey | None = None
    week_start: WeekIdentifier | None = None
    week_end: WeekIdentifier | None = None

    def __post_init__(self) -> None:
        if self.mode == PeriodMode.MONTH:
            if self.month is None:
                raise InvalidArgumentError("Month period requires a month")
            return
        if self.week_start is None or self.week_end is None:
            raise InvalidArgumentError("Week range period requires both bounds")
        if self.week_end < self.week_start:
            raise InvalidArgumentError(
                f"Week range ends before it starts: {self.week_start} > {self.week_end}"
            )

    # ------------------------------------------------------------------ #
    # Constructors                                                         #
    # ------------------------------------------------------------------ #

    @classmethod
    def for_month(cls, month: MonthKey | str) -> ReportPeriod:
        if isinstance(month, str):
            month = MonthKey.parse(month)
        return cls(mode=PeriodMode.MONTH, month=month)

    @classmethod
    def for_week_range(
        cls,
        start: WeekIdentifier | str,
        end: WeekIdentifier | str,
    ) -> ReportPeriod:
        if isinstance(start, str):
            start = WeekIdentifier.parse(start)
        if isinstance(end, str):
            end = WeekIdentifier.parse(end)
        return cls(mode=PeriodMode.WEEK_RANGE, week_start=start, week_end=end)

    # ------------------------------------------------------------------ #
    # Properties                                                           #
    # ------------------------------------------------------------------ #

    @property
    def key(self) -> str:
        if self.mode == PeriodMode.MONTH:
            return str(self.month)
        return f"{self.week_start.token}_to_{self.week_end.token}"

    @property
    def target_year(self) -> int:
        if self.mode == PeriodMode.MONTH:
            return self.month.year
        return self.week_start.year

    def date_range(self) -> tuple[date, date]:
        """First and last calendar day covered by the period."""
        if self.mode == PeriodMode.MONTH:
            return self.month.first_day, self.month.last_day
        first = week_dates(self.week_start.week, self.week_start.year).start
        last = week_dates(self.week_end.week, self.week_end.year).end
        return first, last

    # ------------------------------------------------------------------ #
    # Membership                                                           #
    # ------------------------------------------------------------------ #

    def includes(self, week_id: WeekIdentifier) -> bool:
        """Whether a fiscal week's data belongs to this period."""
        if self.mode == PeriodMode.MONTH:
            return week_id_to_month_key(week_id) == self.month
        rng = week_dates(week_id.week, week_id.year)
        first, last = self.date_range()
        return rng.start <= last and rng.end >= first

    def weeks(self) -> list[WeekIdentifier]:
        """Fiscal weeks included in the period, in order."""
        if self.mode == PeriodMode.MONTH:
            mapping = build_week_month_map(self.target_year)
            return sorted(w for w, m in mapping.items() if m == self.month)

        weeks = []
        for year in range(self.week_start.year, self.week_end.year + 1):
            for w in range(1, WEEKS_PER_YEAR + 1):
                week_id = WeekIdentifier(year=year, week=w)
                if self.week_start <= week_id <= self.week_end:
                    weeks.append(week_id)
        return weeks

    def __str__(self) -> str:
        return self.key


def parse_period(
    month: str | None = None,
    week_start: str | None = None,
    week_end: str | None = None,
    *,
    clock: IClock | None = None,
) -> ReportPeriod:
    """Build a period from request-style strings.

    A week range needs both ``week_start`` and ``week_end``. Without one,
    ``month`` is used, defaulting to the clock's current month.

    Raises:
        PeriodFormatError: On malformed strings or a half-open week range.
    """
    if week_start or week_end:
        if not (week_start and week_end):
            raise PeriodFormatError("Week range requires both week_start and week_end")
        return ReportPeriod.for_week_range(week_start, week_end)

    if month:
        return ReportPeriod.for_month(month)

    today = (clock or SystemClock()).today()
    logger.debug("No period given, defaulting to month of %s", today.isoformat())
    return ReportPeriod.for_month(MonthKey.from_date(today))
