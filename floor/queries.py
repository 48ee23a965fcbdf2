"""Read-only queries over a floor snapshot."""

from __future__ import annotations

from floor.models import Order, Product
from floor.state import FloorState


def compute_order_total(order: Order) -> int:
    """Sum of unit price times quantity over the ticket's current lines."""
    return sum(item.price * item.qty for item in order.items)


def active_order_for_table(state: FloorState, table_id: str) -> Order | None:
    table = state.table(table_id)
    if table is None or table.active_order_id is None:
        return None
    return state.order(table.active_order_id)


def products_by_category(state: FloorState, category_id: str) -> list[Product]:
    return [product for product in state.catalog.products if product.category_id == category_id]


def products_by_category_code(state: FloorState, code: str) -> list[Product]:
    category = state.catalog.category_by_code(code)
    if category is None:
        return []
    return products_by_category(state, category.id)


def order_total(state: FloorState, order_id: str) -> int:
    """Computed total of a ticket, or 0 when the ticket is unknown."""
    order = state.order(order_id)
    if order is None:
        return 0
    return compute_order_total(order)
