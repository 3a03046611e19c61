"""Shared fixtures for reporting tests."""

import pytest

from hse_kpi.core.enums import ReportStatus
from hse_kpi.reporting.records import WeeklyKpiReport


def make_report(
    project_id: int = 1,
    week_number: int = 6,
    year: int = 2026,
    status: ReportStatus = ReportStatus.APPROVED,
    **counters,
) -> WeeklyKpiReport:
    return WeeklyKpiReport(
        project_id=project_id,
        week_number=week_number,
        year=year,
        status=status,
        **counters,
    )


@pytest.fixture
def sample_reports() -> list[WeeklyKpiReport]:
    """Four weekly reports spread over Dec 2025, Jan 2026 and Feb 2026.

    2026 W1 (2025-12-27..2026-01-02) -> 2025-12
    2026 W5 (2026-01-24..2026-01-30) -> 2026-01
    2026 W6 (2026-01-31..2026-02-06) -> 2026-02
    2026 W7 (2026-02-07..2026-02-13) -> 2026-02
    """
    return [
        make_report(
            project_id=1, week_number=6, accidents=1, lost_workdays=2,
            hours_worked=1000.0, near_misses=3,
        ),
        make_report(project_id=2, week_number=7, hours_worked=1000.0, near_misses=1),
        make_report(
            project_id=1, week_number=5, accidents=2, hours_worked=500.0,
            status=ReportStatus.SUBMITTED,
        ),
        make_report(project_id=3, week_number=1, hours_worked=100.0),
    ]
