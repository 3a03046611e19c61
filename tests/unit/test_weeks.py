"""Tests for the Saturday-Friday fiscal week calendar."""

from datetime import date, datetime, timedelta, timezone

import pytest

from hse_kpi.calendar.weeks import (
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
from hse_kpi.core.clock import FixedClock
from hse_kpi.core.errors import InvalidArgumentError, PeriodFormatError
from hse_kpi.core.models import WeekIdentifier, WeekRange


class TestWeek1Start:
    @pytest.mark.parametrize(
        "year, expected",
        [
            (2022, date(2021, 12, 25)),  # Dec 31 2021 is a Friday
            (2023, date(2022, 12, 31)),  # Dec 31 2022 is a Saturday
            (2024, date(2023, 12, 30)),  # Dec 31 2023 is a Sunday
            (2025, date(2024, 12, 28)),
            (2026, date(2025, 12, 27)),
        ],
    )
    def test_known_anchors(self, year, expected):
        assert week1_start(year) == expected

    def test_anchor_is_saturday(self):
        assert week1_start(2026).weekday() == 5

    def test_last_representable_anchors(self):
        assert week1_start(9999).year == 9998
        anchor = week1_start(10000)
        assert anchor.year == 9999
        assert anchor.weekday() == 5

    def test_first_anchor_before_date_min(self):
        # Week 1 of fiscal year 1 starts on 31 December of year 0.
        assert week1_start(2) <= date(1, 12, 31)
        with pytest.raises(InvalidArgumentError):
            week1_start(1)

    @pytest.mark.parametrize("year", [0, -5, 10001])
    def test_year_out_of_range(self, year):
        with pytest.raises(InvalidArgumentError):
            week1_start(year)


class TestWeekDates:
    def test_reference_week(self):
        rng = week_dates(48, 2025)
        assert rng == WeekRange(start=date(2025, 11, 22), end=date(2025, 11, 28))

    def test_week_one_starts_at_anchor(self):
        assert week_dates(1, 2026).start == week1_start(2026)

    def test_week_52(self):
        rng = week_dates(52, 2022)
        assert rng.start == date(2022, 12, 17)
        assert rng.end == date(2022, 12, 23)

    @pytest.mark.parametrize("week_number", [0, 53, -1, 100])
    def test_out_of_range_week_raises(self, week_number):
        with pytest.raises(InvalidArgumentError, match="between 1 and 52"):
            week_dates(week_number, 2026)

    def test_week_past_date_max_raises(self):
        assert week_dates(1, 10000).end <= date.max
        with pytest.raises(InvalidArgumentError, match="outside the supported date range"):
            week_dates(2, 10000)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            week_dates(53, 2026)


class TestFiscalYear:
    def test_bounds_regular_year(self):
        first, last = fiscal_year_bounds(2026)
        assert first == date(2025, 12, 27)
        assert last == date(2026, 12, 25)
        assert (last - first).days + 1 == 364

    def test_bounds_long_year(self):
        first, last = fiscal_year_bounds(2022)
        assert first == date(2021, 12, 25)
        assert last == date(2022, 12, 30)
        assert (last - first).days + 1 == 371

    def test_late_december_belongs_to_next_year(self):
        assert fiscal_year_of(date(2025, 12, 27)) == 2026
        assert fiscal_year_of(date(2025, 12, 26)) == 2025

    def test_early_january_belongs_to_own_year(self):
        assert fiscal_year_of(date(2026, 1, 1)) == 2026


class TestWeekFromDate:
    def test_reference_week(self):
        assert week_from_date(date(2025, 11, 25)) == WeekIdentifier(year=2025, week=48)

    def test_saturday_starts_new_week(self):
        assert week_from_date(date(2025, 11, 28)).week == 48
        assert week_from_date(date(2025, 11, 29)).week == 49

    def test_december_date_in_next_fiscal_year(self):
        assert week_from_date(date(2025, 12, 27)) == WeekIdentifier(year=2026, week=1)

    def test_accepts_datetime_and_string(self):
        assert week_from_date(datetime(2026, 1, 3, 23, 59, tzinfo=timezone.utc)).week == 2
        assert week_from_date("2026-01-03") == WeekIdentifier(year=2026, week=2)

    def test_overflow_days_go_to_week_52(self):
        for offset in range(7):
            d = date(2022, 12, 24) + timedelta(days=offset)
            assert week_from_date(d) == WeekIdentifier(year=2022, week=52)
            assert is_overflow_date(d)

    def test_day_after_overflow_is_week_one(self):
        assert week_from_date(date(2022, 12, 31)) == WeekIdentifier(year=2023, week=1)
        assert not is_overflow_date(date(2022, 12, 31))

    def test_day_before_week1_is_week_52_of_previous_year(self):
        for year in (2022, 2023, 2024, 2025, 2026):
            prev = week1_start(year) - timedelta(days=1)
            assert week_from_date(prev) == WeekIdentifier(year=year - 1, week=52)

    def test_regular_dates_are_not_overflow(self):
        assert not is_overflow_date(date(2025, 12, 26))

    def test_year_9999(self):
        d = date(9999, 6, 1)
        result = week_from_date(d)
        assert result.year == 9999
        assert week_dates(result.week, 9999).contains(d)

    def test_date_max_is_week_one_of_next_year(self):
        assert week_from_date(date.max) == WeekIdentifier(year=10000, week=1)
        assert fiscal_year_of(date.max) == 10000

    def test_date_min_resolves(self):
        # date.min is a Monday, two days after fiscal year 1 begins.
        assert week_from_date(date.min) == WeekIdentifier(year=1, week=1)
        assert not is_overflow_date(date.min)


class TestCurrentWeek:
    def test_explicit_today(self):
        assert current_week(today=date(2025, 11, 25)) == WeekIdentifier(2025, 48)

    def test_from_clock(self, fixed_clock):
        assert current_week(clock=fixed_clock) == WeekIdentifier(2026, 8)

    def test_clock_advances(self):
        clock = FixedClock(date(2026, 1, 2))
        assert current_week(clock=clock) == WeekIdentifier(2026, 1)
        clock.advance_days(1)
        assert current_week(clock=clock) == WeekIdentifier(2026, 2)

    def test_system_clock_default(self):
        result = current_week()
        assert 1 <= result.week <= 52


class TestListingAndFormatting:
    def test_all_weeks_has_52_entries(self):
        weeks = all_weeks_for_year(2026)
        assert len(weeks) == 52
        assert [w.week for w in weeks] == list(range(1, 53))
        assert all(w.year == 2026 for w in weeks)

    def test_all_weeks_label(self):
        weeks = all_weeks_for_year(2025)
        assert weeks[47].label == "Semaine 48 (22/11 - 28/11)"

    def test_custom_label(self):
        weeks = all_weeks_for_year(2025, label="Week")
        assert weeks[0].label.startswith("Week 1 (")

    def test_format_week(self):
        assert format_week(48, 2025) == "Semaine 48 (22/11/2025 - 28/11/2025)"

    def test_format_week_validates(self):
        with pytest.raises(InvalidArgumentError):
            format_week(0, 2025)

    def test_week_token_round_trip(self):
        week_id = parse_week_token("2026-W05")
        assert week_id == WeekIdentifier(2026, 5)
        assert format_week_token(week_id) == "2026-W05"

    def test_single_digit_token(self):
        assert parse_week_token("2026-W5") == WeekIdentifier(2026, 5)

    @pytest.mark.parametrize("token", ["2026W05", "2026-05", "W05-2026", ""])
    def test_malformed_token(self, token):
        with pytest.raises(PeriodFormatError):
            parse_week_token(token)

    def test_token_week_out_of_range(self):
        with pytest.raises(InvalidArgumentError):
            parse_week_token("2026-W53")
