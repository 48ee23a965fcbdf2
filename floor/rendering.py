"""Rendering helpers for tables, ticket lines and comments."""

from __future__ import annotations

from rich.text import Text

from floor.config import CURRENCY_SUFFIX
from floor.models import Comment, Order, OrderItem, OrderStatus, Table, TableStatus
from floor.queries import compute_order_total

_STATUS_LABELS: dict[TableStatus, str] = {
    TableStatus.FREE: "FREE",
    TableStatus.OCCUPIED: "SEAT",
    TableStatus.IN_SERVICE: "SERV",
}


def badge_style(status: TableStatus) -> str:
    """Return a consistent badge style for table statuses."""
    if status is TableStatus.IN_SERVICE:
        return "bold #ffffff on #b23a48"
    if status is TableStatus.OCCUPIED:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def order_status_style(status: OrderStatus) -> str:
    if status is OrderStatus.SERVED:
        return "dim"
    if status is OrderStatus.READY:
        return "bold #5fbf72"
    return "bold"


def format_price(amount: int) -> str:
    """Format an amount with space-separated thousands, e.g. ``3 500 F``."""
    return f"{amount:,}".replace(",", " ") + f" {CURRENCY_SUFFIX}"


def format_table_label(table: Table, order: Order | None = None) -> Text:
    """Render a table row with its status badge and active ticket summary."""
    text = Text()
    text.append(f" {_STATUS_LABELS[table.status]} ", style=badge_style(table.status))
    text.append(f" {table.name}")
    if order is not None:
        text.append(f"  {order.id}", style="dim")
        text.append(f"  {format_price(compute_order_total(order))}")
    return text


def format_order_header(order: Order) -> Text:
    text = Text()
    text.append(f"Ticket {order.id}", style="bold")
    text.append("  ")
    text.append(order.status.value, style=order_status_style(order.status))
    return text


def format_order_item(item: OrderItem) -> Text:
    """Render one ticket line with quantity, line total and optional note tag."""
    text = Text()
    text.append(f"{item.qty} x {item.name}")
    text.append(f"  {format_price(item.line_total)}", style="dim")
    if item.note:
        text.append(" ")
        text.append(f"[{item.note}]", style="white")
    return text


def format_comment(comment: Comment) -> Text:
    text = Text()
    # HH:MM from the ISO timestamp.
    text.append(comment.timestamp[11:16], style="dim")
    text.append(f" {comment.role.value}: ", style="bold")
    text.append(comment.message)
    return text
