from __future__ import annotations

from datetime import datetime, timezone

import pytest

from floor.data import seed_tables
from floor.ids import OrderNumberSequence, SequentialIds
from floor.store import FloorStore

FIXED_NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def make_store(table_count: int = 8) -> FloorStore:
    return FloorStore(
        tables=seed_tables(table_count),
        ids=SequentialIds(),
        order_numbers=OrderNumberSequence(100),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def store() -> FloorStore:
    return make_store()
