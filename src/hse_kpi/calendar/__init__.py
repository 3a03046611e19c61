"""Fiscal week calendar, week-to-month mapping and report periods.

WeekCalendar      Saturday-Friday weeks, 52 per fiscal year (``weeks``)
WeekMonthMapper   Month a week range is reported under (``month_mapper``)
ReportPeriod      Month or week-range selection for monthly reports (``periods``)
"""

from .month_mapper import month_day_counts, week_id_to_month_key, week_to_month_key
from .periods import ReportPeriod, build_week_month_map, parse_period
from .weeks import (
    DAYS_PER_WEEK,
    DEFAULT_WEEK_LABEL,
    WEEKS_PER_YEAR,
    all_weeks_for_year,
    current_week,
    fiscal_year_bounds,
    fiscal_year_of,
    format_week,
    format_week_token,
    is_overflow_date,
    parse_week_token,
    week1_start,
    week_dates,
    week_from_date,
)

__all__ = [
    "DAYS_PER_WEEK",
    "DEFAULT_WEEK_LABEL",
    "WEEKS_PER_YEAR",
    "ReportPeriod",
    "all_weeks_for_year",
    "build_week_month_map",
    "current_week",
    "fiscal_year_bounds",
    "fiscal_year_of",
    "format_week",
    "format_week_token",
    "is_overflow_date",
    "month_day_counts",
    "parse_period",
    "parse_week_token",
    "week1_start",
    "week_dates",
    "week_from_date",
    "week_id_to_month_key",
    "week_to_month_key",
]
