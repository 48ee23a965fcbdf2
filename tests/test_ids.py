from __future__ import annotations

import re

from floor.ids import OrderNumberSequence, RandomIds, SequentialIds
from floor.store import FloorStore


def test_sequential_ids_count_per_prefix() -> None:
    ids = SequentialIds()
    assert [ids("it_"), ids("it_"), ids("c_"), ids("it_")] == ["it_1", "it_2", "c_1", "it_3"]


def test_random_ids_shape() -> None:
    ids = RandomIds()
    value = ids("c_")
    assert re.fullmatch(r"c_[0-9a-f]{7}", value)
    assert ids("c_") != value


def test_order_numbers_are_monotonic() -> None:
    numbers = OrderNumberSequence(base=100)
    assert [numbers(), numbers(), numbers()] == ["#101", "#102", "#103"]
    assert numbers.last == 103


def test_colliding_order_number_is_skipped() -> None:
    numbers = iter(["#7", "#7", "#8"])
    store = FloorStore(order_numbers=lambda: next(numbers), ids=SequentialIds())
    assert store.open_order_for_table("T1") == "#7"
    assert store.open_order_for_table("T2") == "#8"
