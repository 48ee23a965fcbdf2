from __future__ import annotations

import asyncio

from floor.floor_app import FloorApp
from floor.models import OrderStatus, TableStatus
from tests.conftest import make_store


def run_keys(app: FloorApp, *keys: str) -> None:
    async def drive() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
            await pilot.pause()

    asyncio.run(drive())


def test_first_table_is_selected_on_mount() -> None:
    store = make_store()
    run_keys(FloorApp(store))
    assert store.current_table_id == "T1"
    assert store.current_order_id is None


def test_open_ticket_and_add_items_from_keyboard() -> None:
    store = make_store()
    run_keys(FloorApp(store), "o", "2", "enter", "enter")

    order = store.get_active_order_for_table("T1")
    assert order is not None
    assert [(item.product_id, item.qty) for item in order.items] == [("p-plt-1", 2)]


def test_status_cycle_and_close_from_keyboard() -> None:
    store = make_store()
    run_keys(FloorApp(store), "j", "o", "x")
    order = store.get_active_order_for_table("T2")
    assert order.status is OrderStatus.IN_PREPARATION

    run_keys(FloorApp(store), "c")
    assert store.get_order(order.id).status is OrderStatus.SERVED
    assert store.get_table("T2").status is TableStatus.FREE


def test_table_selection_moves_table_and_ticket_together() -> None:
    store = make_store()
    order_id = store.open_order_for_table("T1")
    store.select("T1", order_id)
    seen: list[tuple[str | None, str | None]] = []
    store.subscribe(lambda state: seen.append((state.current_table_id, state.current_order_id)))

    run_keys(FloorApp(store), "j")

    assert seen == [("T2", None)]


def test_move_ticket_through_prompt() -> None:
    store = make_store()
    run_keys(FloorApp(store), "o", "m", "9", "enter", "backspace", "4", "enter")

    order = store.get_active_order_for_table("T4")
    assert order is not None
    assert store.get_table("T1").status is TableStatus.FREE


def test_move_prompt_refuses_taken_table() -> None:
    store = make_store()
    taken = store.open_order_for_table("T3")
    run_keys(FloorApp(store), "k", "k", "o", "m", "3", "enter", "escape")

    assert store.get_table("T3").active_order_id == taken
    assert store.get_active_order_for_table("T1") is not None
