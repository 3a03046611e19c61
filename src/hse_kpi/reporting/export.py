"""Rollup export: CSV/JSON output of monthly buckets.

Usage::

    exporter = RollupExporter()
    csv_str = exporter.to_csv(summary["buckets"])
    json_str = exporter.to_json(summary)
"""

from __future__ import annotations

import csv
import io
import json
import logging
from typing import Any

from .records import KPI_COUNTERS

logger = logging.getLogger(__name__)

# Default CSV columns
_CSV_COLUMNS = [
    "period_key",
    "reports",
    "weeks",
    "projects",
    *KPI_COUNTERS,
    "tf",
    "tg",
]


class RollupExporter:
    """Export rollup buckets to CSV or JSON."""

    def to_csv(
        self,
        buckets: list[dict[str, Any]],
        *,
        columns: list[str] | None = None,
    ) -> str:
        """Export buckets as a CSV string with a header row.

        Missing values are written as empty cells.
        """
        cols = columns or _CSV_COLUMNS
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        for bucket in buckets:
            writer.writerow({c: bucket.get(c, "") for c in cols})
        logger.debug("Exported %d buckets to CSV", len(buckets))
        return buf.getvalue()

    def to_json(self, summary: dict[str, Any] | list[dict[str, Any]], *, indent: int = 2) -> str:
        """Export a full rollup summary (or a bucket list) as JSON."""
        return json.dumps(summary, indent=indent, default=str)
