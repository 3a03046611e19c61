"""Shared fixtures for the hse_kpi test suite."""

from __future__ import annotations

import logging
from datetime import date

import pytest

from hse_kpi.core.clock import FixedClock
from hse_kpi.observability.logger import HANDLER_NAME


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock pinned to mid-February 2026 (fiscal week 8)."""
    return FixedClock(date(2026, 2, 15))


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Drop the handler and level installed by ``setup_logging``."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    root.setLevel(level)
