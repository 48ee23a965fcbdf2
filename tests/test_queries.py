from __future__ import annotations

from floor import queries
from floor.models import OrderItem
from floor.store import FloorStore


def test_products_by_category(store: FloorStore) -> None:
    products = store.get_products_by_category("cat-plat")
    assert [product.id for product in products] == ["p-plt-1", "p-plt-2"]
    assert store.get_products_by_category("cat-none") == []


def test_products_by_category_code(store: FloorStore) -> None:
    products = store.get_products_by_category_code("DESSERT")
    assert [product.name for product in products] == ["Beignets banane", "Ananas frais"]
    assert store.get_products_by_category_code("BOISSON") == []


def test_active_order_for_table(store: FloorStore) -> None:
    assert store.get_active_order_for_table("T1") is None
    assert store.get_active_order_for_table("T99") is None
    order_id = store.open_order_for_table("T1")
    assert store.get_active_order_for_table("T1").id == order_id


def test_order_total(store: FloorStore) -> None:
    order_id = store.open_order_for_table("T1")
    store.add_item_to_order(order_id, "p-plt-1", 2)
    store.add_item_to_order(order_id, "p-sup-1", 1, "à part")
    assert store.get_order_total(order_id) == 3500 * 2 + 200
    assert store.get_order_total("#404") == 0


def test_compute_order_total_of_empty_order(store: FloorStore) -> None:
    order_id = store.open_order_for_table("T1")
    assert queries.compute_order_total(store.get_order(order_id)) == 0


def test_line_total() -> None:
    item = OrderItem(id="it_1", product_id="p-ent-2", name="Salade fraîche", qty=3, price=700)
    assert item.line_total == 2100


def test_queries_do_not_commit(store: FloorStore) -> None:
    order_id = store.open_order_for_table("T1")
    version = store.version
    store.get_order_total(order_id)
    store.get_active_order_for_table("T1")
    store.get_products_by_category_code("PLAT")
    assert store.version == version
