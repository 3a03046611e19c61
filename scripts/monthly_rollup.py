#!/usr/bin/env python3
"""Roll weekly KPI reports (JSON list) up into monthly buckets."""

import sys
sys.path.insert(0, "src")

from hse_kpi.cli import main

if __name__ == "__main__":
    main(["rollup"] + sys.argv[1:], standalone_mode=False)
