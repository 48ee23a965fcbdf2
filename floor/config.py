"""Runtime configuration defaults for the floor manager."""

from __future__ import annotations

import os

SEED_TABLE_COUNT = int(os.environ.get("FLOOR_TABLE_COUNT", "8"))

# Order numbers are displayed as "#<base + n>".
ORDER_NUMBER_BASE = int(os.environ.get("FLOOR_ORDER_NUMBER_BASE", "100"))

CURRENCY_SUFFIX = os.environ.get("FLOOR_CURRENCY", "F")

LOG_PATH = os.environ.get("FLOOR_LOG_PATH", "/tmp/floor-manager.log")
LOG_LEVEL = os.environ.get("FLOOR_LOG_LEVEL", "INFO")
