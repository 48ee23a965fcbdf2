from __future__ import annotations

import random

import pytest

from floor.models import CommentRole, OrderStatus, TableStatus
from floor.state import FloorState
from floor.store import FloorStore
from tests.conftest import make_store

PRODUCT_IDS = ["p-ent-1", "p-plt-1", "p-plt-2", "p-des-1", "p-sup-2", "p-missing"]
NOTES = [None, None, "sans sel", "bien cuit"]


def assert_invariants(state: FloorState) -> None:
    linked = [table.active_order_id for table in state.tables if table.active_order_id is not None]
    assert len(linked) == len(set(linked))

    for table in state.tables:
        if table.active_order_id is None:
            continue
        matches = [order for order in state.orders if order.id == table.active_order_id]
        assert len(matches) == 1
        assert matches[0].table_id == table.id
        assert table.status is TableStatus.IN_SERVICE

    for table in state.tables:
        if table.status is TableStatus.IN_SERVICE:
            assert table.active_order_id is not None

    for order in state.orders:
        plain = [item.product_id for item in order.items if item.note is None]
        assert len(plain) == len(set(plain))
        assert all(item.qty > 0 for item in order.items)


def random_step(store: FloorStore, rng: random.Random) -> None:
    table_ids = [table.id for table in store.tables] + ["T99"]
    order_ids = [order.id for order in store.orders] + ["#999"]
    op = rng.randrange(10)
    order_id = rng.choice(order_ids)
    table_id = rng.choice(table_ids)

    if op == 0 and table_id != "T99":
        store.open_order_for_table(table_id)
    elif op == 1:
        store.move_order_to_table(order_id, table_id)
    elif op == 2:
        store.close_order(order_id)
    elif op == 3:
        store.occupy_table(table_id)
    elif op == 4:
        store.free_table(table_id)
    elif op == 5:
        store.add_item_to_order(order_id, rng.choice(PRODUCT_IDS), rng.randint(1, 3), rng.choice(NOTES))
    elif op == 6:
        order = store.get_order(order_id)
        if order is not None and order.items:
            store.update_item_qty(order_id, rng.choice(order.items).id, rng.randint(-1, 4))
    elif op == 7:
        order = store.get_order(order_id)
        if order is not None and order.items:
            store.remove_item_from_order(order_id, rng.choice(order.items).id)
    elif op == 8:
        store.set_order_status(order_id, rng.choice(list(OrderStatus)))
    else:
        store.add_order_comment(order_id, rng.choice(list(CommentRole)), "note")


@pytest.mark.parametrize("seed", range(25))
def test_random_operation_sequences_keep_invariants(seed: int) -> None:
    rng = random.Random(seed)
    store = make_store(table_count=5)
    comment_counts: dict[str, int] = {}

    for _ in range(200):
        random_step(store, rng)
        assert_invariants(store.state)
        for order in store.orders:
            assert len(order.comments) >= comment_counts.get(order.id, 0)
            comment_counts[order.id] = len(order.comments)


def test_listeners_see_each_commit_once(store: FloorStore) -> None:
    seen: list[int] = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.version))

    order_id = store.open_order_for_table("T1")
    store.free_table("T1")
    store.move_order_to_table(order_id, "T2")
    unsubscribe()
    store.close_order(order_id)

    assert seen == [1, 2]


def test_listener_never_sees_half_applied_move(store: FloorStore) -> None:
    order_id = store.open_order_for_table("T1")
    store.subscribe(assert_invariants)
    store.move_order_to_table(order_id, "T3")
    store.close_order(order_id)


def test_service_scenario(store: FloorStore) -> None:
    order_id = store.open_order_for_table("T1")
    assert order_id
    assert store.get_table("T1").status is TableStatus.IN_SERVICE

    store.add_item_to_order(order_id, "p-plt-1", 2)
    items = store.get_order(order_id).items
    assert len(items) == 1
    assert items[0].qty == 2
    assert store.get_order_total(order_id) == 3500 * 2

    store.close_order(order_id)
    table = store.get_table("T1")
    assert table.status is TableStatus.FREE
    assert table.active_order_id is None


def test_independent_stores_do_not_share_state() -> None:
    first, second = make_store(), make_store()
    first.open_order_for_table("T1")
    assert second.orders == ()
    assert second.get_table("T1").status is TableStatus.FREE


def test_failing_listener_does_not_fail_the_commit(store: FloorStore) -> None:
    seen: list[int] = []

    def broken(state: FloorState) -> None:
        raise RuntimeError("listener failed")

    store.subscribe(broken)
    store.subscribe(lambda state: seen.append(state.version))

    store.set_table_name("T1", "Bar")

    assert store.get_table("T1").name == "Bar"
    assert seen == [store.version]


def test_select_sets_table_and_order_in_one_commit(store: FloorStore) -> None:
    order_id = store.open_order_for_table("T1")
    store.select("T2", None)
    seen: list[tuple[str | None, str | None]] = []
    store.subscribe(lambda state: seen.append((state.current_table_id, state.current_order_id)))

    store.select("T1", order_id)

    assert seen == [("T1", order_id)]
