"""Monthly KPI reporting built on the fiscal week calendar.

WeeklyKpiReport   One project's weekly KPI submission
MonthlyRollup     Groups weekly reports under their month
RollupExporter    CSV/JSON export of rollup buckets
"""

from .export import RollupExporter
from .records import KPI_COUNTERS, WeeklyKpiReport, frequency_rate, severity_rate
from .rollup import MonthlyRollup, load_reports

__all__ = [
    "KPI_COUNTERS",
    "MonthlyRollup",
    "RollupExporter",
    "WeeklyKpiReport",
    "frequency_rate",
    "load_reports",
    "severity_rate",
]
