"""Domain store: the single writer of tables, tickets and selection."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable

from floor import queries
from floor.constant import OPENING_COMMENT
from floor.data import SEED_CATALOG, Catalog, seed_tables
from floor.ids import OrderNumberSequence, RandomIds
from floor.models import (
    Category,
    Comment,
    CommentRole,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    Table,
    TableStatus,
)
from floor.state import FloorState, replace_order, replace_table

logger = logging.getLogger(__name__)

Listener = Callable[[FloorState], None]


class UnknownTableError(LookupError):
    """Raised when a ticket is opened for a table id that does not exist."""

    def __init__(self, table_id: str) -> None:
        super().__init__(f"Unknown table: {table_id}")
        self.table_id = table_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FloorStore:
    """
    In-memory authority over the floor.

    Every mutation reads the current snapshot, builds the next one and
    commits it with a single assignment, so readers never see a half-applied
    change. Calls that reference unknown records are ignored, except
    ``open_order_for_table`` which raises ``UnknownTableError``.
    """

    def __init__(
        self,
        catalog: Catalog = SEED_CATALOG,
        tables: Iterable[Table] | None = None,
        ids: Callable[[str], str] | None = None,
        order_numbers: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._state = FloorState(
            tables=tuple(tables) if tables is not None else seed_tables(),
            orders=(),
            catalog=catalog,
        )
        self._ids = ids or RandomIds()
        self._order_numbers = order_numbers or OrderNumberSequence()
        self._clock = clock or _utc_now
        self._listeners: list[Listener] = []

    # ---- Snapshot access ----

    @property
    def state(self) -> FloorState:
        return self._state

    @property
    def version(self) -> int:
        return self._state.version

    @property
    def tables(self) -> tuple[Table, ...]:
        return self._state.tables

    @property
    def orders(self) -> tuple[Order, ...]:
        """Tickets, newest first."""
        return self._state.orders

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._state.catalog.categories

    @property
    def products(self) -> tuple[Product, ...]:
        return self._state.catalog.products

    @property
    def current_table_id(self) -> str | None:
        return self._state.current_table_id

    @current_table_id.setter
    def current_table_id(self, table_id: str | None) -> None:
        self.select_table(table_id)

    @property
    def current_order_id(self) -> str | None:
        return self._state.current_order_id

    @current_order_id.setter
    def current_order_id(self, order_id: str | None) -> None:
        self.select_order(order_id)

    def get_table(self, table_id: str) -> Table | None:
        return self._state.table(table_id)

    def get_order(self, order_id: str) -> Order | None:
        return self._state.order(order_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with each new snapshot; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, event: str, **changes: object) -> FloorState:
        new_state = replace(self._state, version=self._state.version + 1, **changes)
        self._state = new_state
        logger.debug("commit version=%d event=%s", new_state.version, event)
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("listener_failed version=%d event=%s", new_state.version, event)
        return new_state

    def _ignored(self, event: str, reason: str, **context: object) -> None:
        details = " ".join(f"{key}={value}" for key, value in context.items())
        logger.debug("%s_ignored reason=%s %s", event, reason, details)

    def _new_comment(self, role: CommentRole, message: str) -> Comment:
        return Comment(id=self._ids("c_"), role=role, message=message, timestamp=self._clock().isoformat())

    # ---- Tables ----

    def set_table_name(self, table_id: str, name: str) -> None:
        table = self._state.table(table_id)
        if table is None:
            self._ignored("set_table_name", "unknown_table", table_id=table_id)
            return
        self._commit("set_table_name", tables=replace_table(self._state.tables, replace(table, name=name)))

    def occupy_table(self, table_id: str) -> None:
        """Seat guests without a ticket; a table that holds a ticket stays in service."""
        table = self._state.table(table_id)
        if table is None:
            self._ignored("occupy_table", "unknown_table", table_id=table_id)
            return
        if table.active_order_id is not None:
            self._ignored("occupy_table", "active_order", table_id=table_id, order_id=table.active_order_id)
            return
        updated = replace(table, status=TableStatus.OCCUPIED)
        self._commit("occupy_table", tables=replace_table(self._state.tables, updated))

    def free_table(self, table_id: str) -> None:
        """Free a table, unless a ticket is still linked to it."""
        table = self._state.table(table_id)
        if table is None:
            self._ignored("free_table", "unknown_table", table_id=table_id)
            return
        if table.active_order_id is not None:
            self._ignored("free_table", "active_order", table_id=table_id, order_id=table.active_order_id)
            return
        updated = replace(table, status=TableStatus.FREE)
        self._commit("free_table", tables=replace_table(self._state.tables, updated))

    def open_order_for_table(self, table_id: str) -> str:
        """
        Return the table's active ticket id, opening a new ticket if needed.

        Opening links the ticket to the table, puts the table in service and
        selects both. Re-entering a table that already has a ticket only
        updates the selection.
        """
        state = self._state
        table = state.table(table_id)
        if table is None:
            logger.warning("open_order_failed reason=unknown_table table_id=%s", table_id)
            raise UnknownTableError(table_id)

        if table.active_order_id is not None:
            if (state.current_table_id, state.current_order_id) != (table_id, table.active_order_id):
                self._commit(
                    "open_order_for_table",
                    current_table_id=table_id,
                    current_order_id=table.active_order_id,
                )
            return table.active_order_id

        order_id = self._order_numbers()
        while state.order(order_id) is not None:
            order_id = self._order_numbers()

        order = Order(
            id=order_id,
            table_id=table_id,
            status=OrderStatus.PENDING,
            comments=(self._new_comment(CommentRole.WAITER, OPENING_COMMENT),),
        )
        linked = replace(table, status=TableStatus.IN_SERVICE, active_order_id=order_id)
        self._commit(
            "open_order_for_table",
            orders=(order,) + state.orders,
            tables=replace_table(state.tables, linked),
            current_table_id=table_id,
            current_order_id=order_id,
        )
        logger.info("order_opened order_id=%s table_id=%s", order_id, table_id)
        return order_id

    def move_order_to_table(self, order_id: str, new_table_id: str) -> None:
        """Move a ticket to another table, freeing the table it leaves."""
        state = self._state
        order = state.order(order_id)
        destination = state.table(new_table_id)
        if order is None or destination is None:
            self._ignored("move_order_to_table", "unknown_record", order_id=order_id, table_id=new_table_id)
            return
        if order.status.is_terminal:
            self._ignored("move_order_to_table", "order_served", order_id=order_id)
            return
        if order.table_id == new_table_id:
            self._ignored("move_order_to_table", "same_table", order_id=order_id, table_id=new_table_id)
            return
        if destination.active_order_id is not None and destination.active_order_id != order_id:
            self._ignored(
                "move_order_to_table",
                "table_taken",
                order_id=order_id,
                table_id=new_table_id,
                active_order_id=destination.active_order_id,
            )
            return

        tables = state.tables
        origin = state.table(order.table_id)
        if origin is not None and origin.active_order_id == order_id:
            tables = replace_table(tables, replace(origin, status=TableStatus.FREE, active_order_id=None))
        tables = replace_table(
            tables, replace(destination, status=TableStatus.IN_SERVICE, active_order_id=order_id)
        )
        self._commit(
            "move_order_to_table",
            orders=replace_order(state.orders, replace(order, table_id=new_table_id)),
            tables=tables,
            current_table_id=new_table_id,
        )
        logger.info("order_moved order_id=%s from_table_id=%s to_table_id=%s", order_id, order.table_id, new_table_id)

    # ---- Tickets ----

    def add_item_to_order(self, order_id: str, product_id: str, qty: int = 1, note: str | None = None) -> None:
        """
        Add ``qty`` of a product to a ticket.

        A line without a note absorbs further note-less additions of the same
        product. A noted addition always gets its own line. Name and price
        are copied from the catalog at this moment.
        """
        state = self._state
        order = state.order(order_id)
        product = state.catalog.product(product_id)
        if order is None or product is None:
            self._ignored("add_item_to_order", "unknown_record", order_id=order_id, product_id=product_id)
            return
        if qty < 1:
            self._ignored("add_item_to_order", "bad_qty", order_id=order_id, qty=qty)
            return

        note = note or None
        existing = None
        if note is None:
            existing = next(
                (item for item in order.items if item.product_id == product_id and item.note is None),
                None,
            )

        if existing is not None:
            items = tuple(
                replace(item, qty=item.qty + qty) if item.id == existing.id else item for item in order.items
            )
        else:
            line = OrderItem(
                id=self._ids("it_"),
                product_id=product_id,
                name=product.name,
                qty=qty,
                price=product.price,
                note=note,
            )
            items = order.items + (line,)

        self._commit("add_item_to_order", orders=replace_order(state.orders, replace(order, items=items)))

    def update_item_qty(self, order_id: str, item_id: str, qty: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        order = self._state.order(order_id)
        if order is None or not any(item.id == item_id for item in order.items):
            self._ignored("update_item_qty", "unknown_record", order_id=order_id, item_id=item_id)
            return
        if qty <= 0:
            self.remove_item_from_order(order_id, item_id)
            return
        items = tuple(replace(item, qty=qty) if item.id == item_id else item for item in order.items)
        self._commit("update_item_qty", orders=replace_order(self._state.orders, replace(order, items=items)))

    def remove_item_from_order(self, order_id: str, item_id: str) -> None:
        order = self._state.order(order_id)
        if order is None or not any(item.id == item_id for item in order.items):
            self._ignored("remove_item_from_order", "unknown_record", order_id=order_id, item_id=item_id)
            return
        items = tuple(item for item in order.items if item.id != item_id)
        self._commit("remove_item_from_order", orders=replace_order(self._state.orders, replace(order, items=items)))

    def add_order_comment(self, order_id: str, role: CommentRole | str, message: str) -> None:
        order = self._state.order(order_id)
        if order is None:
            self._ignored("add_order_comment", "unknown_order", order_id=order_id)
            return
        try:
            role = CommentRole(role)
        except ValueError:
            self._ignored("add_order_comment", "unknown_role", order_id=order_id, role=role)
            return
        comment = self._new_comment(role, message)
        updated = replace(order, comments=order.comments + (comment,))
        self._commit("add_order_comment", orders=replace_order(self._state.orders, updated))

    def set_order_status(self, order_id: str, status: OrderStatus | str) -> None:
        """Assign any status; tables are not touched (use ``close_order`` to serve)."""
        order = self._state.order(order_id)
        if order is None:
            self._ignored("set_order_status", "unknown_order", order_id=order_id)
            return
        try:
            status = OrderStatus(status)
        except ValueError:
            self._ignored("set_order_status", "unknown_status", order_id=order_id, status=status)
            return
        updated = replace(order, status=status)
        self._commit("set_order_status", orders=replace_order(self._state.orders, updated))

    def close_order(self, order_id: str) -> None:
        """Mark a ticket served and release its table."""
        state = self._state
        order = state.order(order_id)
        if order is None:
            self._ignored("close_order", "unknown_order", order_id=order_id)
            return

        tables = state.tables
        table = state.table(order.table_id)
        if table is not None and table.active_order_id == order_id:
            tables = replace_table(tables, replace(table, status=TableStatus.FREE, active_order_id=None))

        current_order_id = None if state.current_order_id == order_id else state.current_order_id
        self._commit(
            "close_order",
            orders=replace_order(state.orders, replace(order, status=OrderStatus.SERVED)),
            tables=tables,
            current_order_id=current_order_id,
        )
        logger.info(
            "order_closed order_id=%s table_id=%s total=%d",
            order_id,
            order.table_id,
            queries.compute_order_total(order),
        )

    # ---- Selection ----

    def select_table(self, table_id: str | None = None) -> None:
        self._commit("select_table", current_table_id=table_id)

    def select_order(self, order_id: str | None = None) -> None:
        self._commit("select_order", current_order_id=order_id)

    def select(self, table_id: str | None, order_id: str | None) -> None:
        """Point the selection at a table and a ticket in one commit."""
        self._commit("select", current_table_id=table_id, current_order_id=order_id)

    # ---- Derived queries ----

    def get_active_order_for_table(self, table_id: str) -> Order | None:
        return queries.active_order_for_table(self._state, table_id)

    def get_products_by_category(self, category_id: str) -> list[Product]:
        return queries.products_by_category(self._state, category_id)

    def get_products_by_category_code(self, code: str) -> list[Product]:
        return queries.products_by_category_code(self._state, code)

    def get_order_total(self, order_id: str) -> int:
        return queries.order_total(self._state, order_id)
