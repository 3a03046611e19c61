"""Weekly KPI report rows and the HSE frequency/severity rates."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from hse_kpi.calendar.month_mapper import week_to_month_key
from hse_kpi.calendar.weeks import week_dates
from hse_kpi.core.enums import ReportStatus
from hse_kpi.core.models import MonthKey, WeekIdentifier

# Counters that add up across weeks. Rates (TF/TG) are recomputed from sums.
KPI_COUNTERS: tuple[str, ...] = (
    "accidents",
    "accidents_fatal",
    "accidents_serious",
    "accidents_minor",
    "near_misses",
    "first_aid_cases",
    "trainings_conducted",
    "trainings_planned",
    "employees_trained",
    "training_hours",
    "toolbox_talks",
    "inspections_completed",
    "inspections_planned",
    "findings_open",
    "findings_closed",
    "corrective_actions",
    "lost_workdays",
    "hours_worked",
    "unsafe_acts_reported",
    "unsafe_conditions_reported",
    "emergency_drills",
    "work_permits",
)


class WeeklyKpiReport(BaseModel):
    """One project's KPI submission for one fiscal week."""

    project_id: int
    week_number: int = Field(ge=1, le=52)
    year: int
    start_date: date | None = None  # Stored week bounds, when known
    end_date: date | None = None
    status: ReportStatus = ReportStatus.SUBMITTED

    # Accidents
    accidents: int = Field(default=0, ge=0)
    accidents_fatal: int = Field(default=0, ge=0)
    accidents_serious: int = Field(default=0, ge=0)
    accidents_minor: int = Field(default=0, ge=0)
    near_misses: int = Field(default=0, ge=0)
    first_aid_cases: int = Field(default=0, ge=0)

    # Training
    trainings_conducted: int = Field(default=0, ge=0)
    trainings_planned: int = Field(default=0, ge=0)
    employees_trained: int = Field(default=0, ge=0)
    training_hours: float = Field(default=0.0, ge=0)
    toolbox_talks: int = Field(default=0, ge=0)

    # Inspections
    inspections_completed: int = Field(default=0, ge=0)
    inspections_planned: int = Field(default=0, ge=0)
    findings_open: int = Field(default=0, ge=0)
    findings_closed: int = Field(default=0, ge=0)
    corrective_actions: int = Field(default=0, ge=0)

    # Rate inputs
    lost_workdays: int = Field(default=0, ge=0)
    hours_worked: float = Field(default=0.0, ge=0)

    # Other
    unsafe_acts_reported: int = Field(default=0, ge=0)
    unsafe_conditions_reported: int = Field(default=0, ge=0)
    emergency_drills: int = Field(default=0, ge=0)
    work_permits: int = Field(default=0, ge=0)

    notes: str = ""

    @property
    def week_id(self) -> WeekIdentifier:
        return WeekIdentifier(year=self.year, week=self.week_number)

    def week_range(self) -> tuple[date, date]:
        """Stored week bounds when both are set, else the fiscal week's dates."""
        if self.start_date is not None and self.end_date is not None:
            return self.start_date, self.end_date
        rng = week_dates(self.week_number, self.year)
        return rng.start, rng.end

    def month_key(self) -> MonthKey:
        start, end = self.week_range()
        return week_to_month_key(start, end)

    def counters(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in KPI_COUNTERS}


# ---------------------------------------------------------------------------
# Rates
# ---------------------------------------------------------------------------

def frequency_rate(
    accidents: float,
    hours_worked: float,
    *,
    hours_multiplier: float = 10.0,
    factor: float = 1_000_000.0,
) -> float:
    """TF (taux de fréquence): accidents per ``factor`` effective hours."""
    effective_hours = hours_worked * hours_multiplier
    if effective_hours <= 0:
        return 0.0
    return accidents * factor / effective_hours


def severity_rate(
    lost_workdays: float,
    hours_worked: float,
    *,
    hours_multiplier: float = 10.0,
    factor: float = 1_000.0,
) -> float:
    """TG (taux de gravité): lost workdays per ``factor`` effective hours."""
    effective_hours = hours_worked * hours_multiplier
    if effective_hours <= 0:
        return 0.0
    return lost_workdays * factor / effective_hours
