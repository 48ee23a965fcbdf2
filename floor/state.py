"""Immutable snapshot of the floor."""

from __future__ import annotations

from dataclasses import dataclass

from floor.data import Catalog
from floor.models import Order, Table


@dataclass(frozen=True)
class FloorState:
    """
    One committed version of the floor.

    Records are frozen and shared between versions: a commit only rebuilds
    the tuples whose members changed.
    """

    tables: tuple[Table, ...]
    orders: tuple[Order, ...]
    catalog: Catalog
    current_table_id: str | None = None
    current_order_id: str | None = None
    version: int = 0

    def table(self, table_id: str) -> Table | None:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def order(self, order_id: str) -> Order | None:
        for order in self.orders:
            if order.id == order_id:
                return order
        return None


def replace_table(tables: tuple[Table, ...], updated: Table) -> tuple[Table, ...]:
    return tuple(updated if table.id == updated.id else table for table in tables)


def replace_order(orders: tuple[Order, ...], updated: Order) -> tuple[Order, ...]:
    return tuple(updated if order.id == updated.id else order for order in orders)
