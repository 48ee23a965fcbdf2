"""Domain models for the floor manager."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TableStatus(str, Enum):
    """Occupancy state of a physical table."""

    FREE = "FREE"
    OCCUPIED = "OCCUPIED"
    IN_SERVICE = "IN_SERVICE"


class OrderStatus(str, Enum):
    """Progress of a ticket, from opening to service."""

    PENDING = "PENDING"
    IN_PREPARATION = "IN_PREPARATION"
    READY = "READY"
    SERVED = "SERVED"

    @property
    def is_terminal(self) -> bool:
        return self is OrderStatus.SERVED


class CommentRole(str, Enum):
    """Staff role that wrote a ticket comment."""

    WAITER = "WAITER"
    KITCHEN = "KITCHEN"
    CASHIER = "CASHIER"
    MANAGER = "MANAGER"


@dataclass(frozen=True)
class Category:
    """A menu grouping."""

    id: str
    code: str
    name: str


@dataclass(frozen=True)
class Product:
    """A purchasable menu product with its current unit price."""

    id: str
    name: str
    category_id: str
    price: int


@dataclass(frozen=True)
class Table:
    """A physical table and the ticket currently linked to it."""

    id: str
    name: str
    status: TableStatus = TableStatus.FREE
    active_order_id: str | None = None


@dataclass(frozen=True)
class OrderItem:
    """One ticket line; name and price are copied from the product when added."""

    id: str
    product_id: str
    name: str
    qty: int
    price: int
    note: str | None = None

    @property
    def line_total(self) -> int:
        return self.price * self.qty


@dataclass(frozen=True)
class Comment:
    """An immutable audit entry on a ticket."""

    id: str
    role: CommentRole
    message: str
    timestamp: str


@dataclass(frozen=True)
class Order:
    """A ticket for one table."""

    id: str
    table_id: str
    status: OrderStatus = OrderStatus.PENDING
    items: tuple[OrderItem, ...] = ()
    comments: tuple[Comment, ...] = ()
