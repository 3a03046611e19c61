"""Enumerations used across the KPI calendar and reporting."""

from enum import Enum


class ReportStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class PeriodMode(str, Enum):
    MONTH = "month"
    WEEK_RANGE = "week_range"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
