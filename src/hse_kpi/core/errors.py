"""Custom exception hierarchy for the HSE KPI calendar and reporting."""


class HseKpiError(Exception):
    """Base exception for all HSE KPI errors."""


# --- Configuration ---
class ConfigError(HseKpiError):
    """Invalid or missing configuration."""


# --- Calendar ---
class CalendarError(HseKpiError):
    """Fiscal calendar computation error."""


class InvalidArgumentError(CalendarError, ValueError):
    """Argument outside its valid domain (e.g. week number not in 1..52)."""


class PeriodFormatError(CalendarError, ValueError):
    """Period string could not be parsed (expected YYYY-MM or YYYY-WXX)."""


# --- Reporting ---
class ReportError(HseKpiError):
    """Weekly report input could not be aggregated."""
