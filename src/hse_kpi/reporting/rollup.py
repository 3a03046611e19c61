"""Monthly rollup of weekly KPI reports.

Each weekly report is bucketed under the month its week belongs to
(see ``hse_kpi.calendar.month_mapper``), so a week straddling two months
is counted once, in the month holding most of its days. Counters are
summed per bucket; TF/TG are recomputed from the summed accidents, lost
workdays and hours rather than averaged.

Usage::

    rollup = MonthlyRollup()
    rollup.add_reports(reports)
    summary = rollup.report(parse_period(month="2026-02"))
    print(summary["buckets"][0]["tf"])
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from hse_kpi.calendar.periods import ReportPeriod
from hse_kpi.core.config import ReportingConfig
from hse_kpi.core.enums import PeriodMode, ReportStatus
from hse_kpi.core.errors import ReportError
from hse_kpi.core.models import MonthKey, WeekIdentifier

from .records import KPI_COUNTERS, WeeklyKpiReport, frequency_rate, severity_rate

logger = logging.getLogger(__name__)


def load_reports(rows: Iterable[Mapping[str, Any]]) -> list[WeeklyKpiReport]:
    """Validate raw rows (e.g. decoded JSON) into reports.

    Raises:
        ReportError: Naming the index of the first invalid row.
    """
    reports = []
    for i, row in enumerate(rows):
        try:
            reports.append(WeeklyKpiReport.model_validate(row))
        except ValidationError as exc:
            raise ReportError(f"Invalid weekly report at index {i}: {exc}") from exc
    return reports


@dataclass
class _BucketStats:
    """Accumulator for one month (or one project within a month)."""

    reports: int = 0
    weeks: set[WeekIdentifier] = field(default_factory=set)
    projects: set[int] = field(default_factory=set)
    totals: dict[str, float] = field(
        default_factory=lambda: {name: 0 for name in KPI_COUNTERS}
    )

    def record(self, report: WeeklyKpiReport) -> None:
        self.reports += 1
        self.weeks.add(report.week_id)
        self.projects.add(report.project_id)
        for name, value in report.counters().items():
            self.totals[name] += value

    def to_dict(self, key: str, cfg: ReportingConfig) -> dict[str, Any]:
        dp = cfg.decimal_places
        hours = self.totals["hours_worked"]
        return {
            "period_key": key,
            "reports": self.reports,
            "weeks": len(self.weeks),
            "projects": len(self.projects),
            **{
                name: round(value, dp) if isinstance(value, float) else value
                for name, value in self.totals.items()
            },
            "tf": round(
                frequency_rate(
                    self.totals["accidents"], hours,
                    hours_multiplier=cfg.hours_multiplier, factor=cfg.tf_factor,
                ),
                dp,
            ),
            "tg": round(
                severity_rate(
                    self.totals["lost_workdays"], hours,
                    hours_multiplier=cfg.hours_multiplier, factor=cfg.tg_factor,
                ),
                dp,
            ),
        }


class MonthlyRollup:
    """Groups weekly KPI reports into monthly buckets.

    Parameters
    ----------
    config : ReportingConfig | None
        Rate constants, rounding and approval filter.  Defaults apply
        when omitted.
    """

    def __init__(self, config: ReportingConfig | None = None) -> None:
        self._cfg = config or ReportingConfig()
        self._by_month: dict[MonthKey, list[WeeklyKpiReport]] = defaultdict(list)

    # ------------------------------------------------------------------ #
    # Recording                                                            #
    # ------------------------------------------------------------------ #

    def add_report(self, report: WeeklyKpiReport) -> MonthKey | None:
        """Add one weekly report; returns its month, or None if skipped."""
        if self._cfg.approved_only and report.status != ReportStatus.APPROVED:
            logger.debug(
                "Skipping %s report for project %d week %s",
                report.status.value, report.project_id, report.week_id,
            )
            return None
        key = report.month_key()
        self._by_month[key].append(report)
        return key

    def add_reports(self, reports: Iterable[WeeklyKpiReport]) -> int:
        """Add many reports; returns how many were kept."""
        added = 0
        for report in reports:
            if self.add_report(report) is not None:
                added += 1
        logger.info("Rollup loaded %d reports into %d months", added, len(self._by_month))
        return added

    def months(self) -> list[MonthKey]:
        return sorted(self._by_month)

    # ------------------------------------------------------------------ #
    # Reporting                                                            #
    # ------------------------------------------------------------------ #

    def report(self, period: ReportPeriod | None = None) -> dict[str, Any]:
        """Per-month buckets and overall totals.

        Returns
        -------
        dict
            ``period`` : str, period key, or ``"all"``
            ``buckets`` : list of per-month stats in month order
            ``totals`` : stats across all included reports
        """
        buckets = []
        overall = _BucketStats()
        for key in self.months():
            selected = [r for r in self._by_month[key] if self._in_period(r, key, period)]
            if not selected:
                continue
            stats = _BucketStats()
            for r in selected:
                stats.record(r)
                overall.record(r)
            buckets.append(stats.to_dict(str(key), self._cfg))

        totals = overall.to_dict("all", self._cfg)
        totals.pop("period_key", None)
        return {
            "period": period.key if period is not None else "all",
            "buckets": buckets,
            "totals": totals,
        }

    def by_project(self, month: MonthKey | str) -> dict[int, dict[str, Any]]:
        """Per-project stats for one month."""
        if isinstance(month, str):
            month = MonthKey.parse(month)
        per_project: dict[int, _BucketStats] = defaultdict(_BucketStats)
        for r in self._by_month.get(month, []):
            per_project[r.project_id].record(r)
        return {
            pid: stats.to_dict(str(month), self._cfg)
            for pid, stats in sorted(per_project.items())
        }

    @staticmethod
    def _in_period(
        report: WeeklyKpiReport,
        month: MonthKey,
        period: ReportPeriod | None,
    ) -> bool:
        if period is None:
            return True
        if period.mode == PeriodMode.MONTH:
            return month == period.month
        start, end = report.week_range()
        if end < start:
            start, end = end, start
        first, last = period.date_range()
        return start <= last and end >= first
