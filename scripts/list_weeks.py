#!/usr/bin/env python3
"""List the 52 fiscal weeks of a year."""

import sys
sys.path.insert(0, "src")

from hse_kpi.cli import main

if __name__ == "__main__":
    main(["weeks"] + sys.argv[1:], standalone_mode=False)
