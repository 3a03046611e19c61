"""HSE KPI fiscal calendar: Saturday-Friday weeks, month mapping, monthly rollups."""

__version__ = "0.1.0"
