"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from floor.data import table_id_for_number
from floor.models import CommentRole, Order, OrderStatus, Product, Table
from floor.prompt_modal import PromptModal
from floor.queries import compute_order_total
from floor.rendering import (
    format_comment,
    format_order_header,
    format_order_item,
    format_price,
    format_table_label,
)
from floor.state import FloorState
from floor.store import FloorStore, UnknownTableError

logger = logging.getLogger(__name__)

# Staff cycle through these with "x"; serving goes through close ("c").
_STATUS_CYCLE = [OrderStatus.PENDING, OrderStatus.IN_PREPARATION, OrderStatus.READY]
_VISIBLE_COMMENTS = 4


def _visible_window(total: int, height: int, selected: int | None) -> tuple[int, int]:
    """Slice of ``total`` rows that fits ``height`` lines, centred on ``selected``."""
    rows = height if height > 0 else 8
    if total <= rows:
        return (0, total)
    start = 0 if selected is None else min(max(0, selected - rows // 2), total - rows)
    return (start, start + rows)


class FloorApp(App):
    """A Textual app for seating tables and taking tickets."""

    TITLE = "Floor Manager"
    SUB_TITLE = "Tables / Tickets"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #tables-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #ticket-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #menu-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #tables-list, #ticket-view {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    category_code = reactive("")
    search_text = reactive("")
    selected_index = reactive(0)
    item_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "add_selected", "Add item"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+n", "add_selected_with_note", "Add with note", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, store: FloorStore) -> None:
        super().__init__()
        self.store = store
        self.system_status = ""
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="tables-pane"):
                yield Static("Tables", classes="pane-title")
                yield Static(id="tables-list")
            with Vertical(id="ticket-pane"):
                yield Static("Ticket", classes="pane-title")
                yield Static(id="ticket-view")
            with Vertical(id="menu-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")

    def on_mount(self) -> None:
        self._unsubscribe = self.store.subscribe(self._on_store_change)
        if self.store.current_table_id is None and self.store.tables:
            self._select_table(self.store.tables[0].id)
        self._refresh_all()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_store_change(self, state: FloorState) -> None:
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not event.is_printable or not event.character or len(event.character) != 1:
            if event.key == "delete" and self.input_state == "normal":
                self._remove_selected_item()
                event.stop()
            return

        char = event.character
        if self.input_state == "active":
            self._set_search_text(self.search_text + char)
            event.stop()
            return

        handlers = {
            "j": lambda: self._move_table_selection(1),
            "k": lambda: self._move_table_selection(-1),
            "o": self._open_ticket,
            "s": self._seat_table,
            "f": self._free_table,
            "c": self._close_ticket,
            "x": self._cycle_ticket_status,
            "m": self._prompt_move,
            "n": self._prompt_comment,
            "r": self._prompt_rename,
            "d": self._remove_selected_item,
            "[": lambda: self._move_item_selection(-1),
            "]": lambda: self._move_item_selection(1),
            "+": lambda: self._change_selected_qty(1),
            "-": lambda: self._change_selected_qty(-1),
        }
        handler = handlers.get(char.lower())
        if handler is not None:
            handler()
            event.stop()
            return

        if char.isdigit():
            self._start_category_search(int(char))
            event.stop()

    # ---- Menu search ----

    def _start_category_search(self, number: int) -> None:
        categories = self.store.categories
        if not (1 <= number <= len(categories)):
            return
        self.category_code = categories[number - 1].code
        self.input_state = "active"
        self._set_search_text("")

    def _searching(self) -> bool:
        return self.input_state == "active" and not isinstance(self.screen, ModalScreen)

    def action_cancel_active_mode(self) -> None:
        if not self._searching():
            return
        self.input_state = "normal"
        self._set_search_text("")

    def action_cycle_results(self, delta: int) -> None:
        if not self._searching():
            return
        count = len(self._filtered_results())
        self.selected_index = (self.selected_index + delta) % count if count else 0
        self._refresh_search()

    def action_backspace_query(self) -> None:
        if self._searching() and self.search_text:
            self._set_search_text(self.search_text[:-1])

    def _set_search_text(self, text: str) -> None:
        self.search_text = text
        self.selected_index = 0
        self._refresh_search()

    def action_add_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        product = self._selected_product()
        order = self._current_order()
        if product is None or order is None:
            return
        self.store.add_item_to_order(order.id, product.id)

    def action_add_selected_with_note(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        product = self._selected_product()
        order = self._current_order()
        if product is None or order is None:
            return

        def add_with_note(note: str | None) -> None:
            if note is None:
                return
            self.store.add_item_to_order(order.id, product.id, note=note)

        self.push_screen(PromptModal(f"Note for {product.name}"), add_with_note)

    def _selected_product(self) -> Product | None:
        if self.input_state != "active":
            return None
        results = self._filtered_results()
        if not results:
            return None
        if self._current_order() is None:
            self._set_status("Open a ticket first (o)")
            return None
        return results[self.selected_index % len(results)]

    def _filtered_results(self) -> list[Product]:
        source = self.store.get_products_by_category_code(self.category_code)
        if not self.search_text:
            return source
        q = self.search_text.lower()
        return [product for product in source if q in product.name.lower()]

    # ---- Tables ----

    def _current_order(self) -> Order | None:
        order_id = self.store.current_order_id
        if order_id is None:
            return None
        return self.store.get_order(order_id)

    def _select_table(self, table_id: str) -> None:
        active = self.store.get_active_order_for_table(table_id)
        self.item_selected_index = None
        self.store.select(table_id, active.id if active is not None else None)

    def _move_table_selection(self, delta: int) -> None:
        tables = self.store.tables
        if not tables:
            return
        ids = [table.id for table in tables]
        current = self.store.current_table_id
        if current not in ids:
            idx = 0 if delta > 0 else len(ids) - 1
        else:
            idx = (ids.index(current) + delta) % len(ids)
        self._select_table(ids[idx])

    def _open_ticket(self) -> None:
        table_id = self.store.current_table_id
        if table_id is None:
            return
        try:
            order_id = self.store.open_order_for_table(table_id)
        except UnknownTableError as exc:
            self._set_status(str(exc))
            return
        self._set_status(f"Ticket {order_id} open")

    def _seat_table(self) -> None:
        if self.store.current_table_id is not None:
            self.store.occupy_table(self.store.current_table_id)

    def _free_table(self) -> None:
        table = self._current_table()
        if table is None:
            return
        if table.active_order_id is not None:
            self._set_status(f"Close ticket {table.active_order_id} before freeing {table.name}")
            return
        self.store.free_table(table.id)

    def _close_ticket(self) -> None:
        order = self._current_order()
        if order is None:
            return
        total = compute_order_total(order)
        self.store.close_order(order.id)
        self.item_selected_index = None
        self._set_status(f"Ticket {order.id} served: {format_price(total)}")

    def _cycle_ticket_status(self) -> None:
        order = self._current_order()
        if order is None:
            return
        if order.status in _STATUS_CYCLE:
            next_status = _STATUS_CYCLE[(_STATUS_CYCLE.index(order.status) + 1) % len(_STATUS_CYCLE)]
        else:
            next_status = _STATUS_CYCLE[0]
        self.store.set_order_status(order.id, next_status)

    def _current_table(self) -> Table | None:
        table_id = self.store.current_table_id
        if table_id is None:
            return None
        return self.store.get_table(table_id)

    def _prompt_move(self) -> None:
        order = self._current_order()
        if order is None:
            return
        by_number = {table.id: table for table in self.store.tables}

        def check(value: str) -> str | None:
            table = by_number.get(table_id_for_number(int(value))) if value else None
            if table is None:
                return f"Pick a table from 1 to {len(by_number)}."
            if table.id == order.table_id:
                return f"{order.id} is already on {table.name}."
            if table.active_order_id is not None:
                return f"{table.name} already has ticket {table.active_order_id}."
            return None

        def move(value: str | None) -> None:
            if value is None:
                return
            table_id = table_id_for_number(int(value))
            self.store.move_order_to_table(order.id, table_id)
            logger.debug("ui_move order_id=%s table_id=%s", order.id, table_id)

        self.push_screen(
            PromptModal(f"Move {order.id} to table", max_length=3, hint="Table number", digits_only=True, validate=check),
            move,
        )

    def _prompt_comment(self) -> None:
        order = self._current_order()
        if order is None:
            return

        def comment(message: str | None) -> None:
            if message is None:
                return
            self.store.add_order_comment(order.id, CommentRole.WAITER, message)

        self.push_screen(PromptModal(f"Comment on {order.id}"), comment)

    def _prompt_rename(self) -> None:
        table = self._current_table()
        if table is None:
            return

        def rename(name: str | None) -> None:
            if name is None:
                return
            self.store.set_table_name(table.id, name)

        self.push_screen(PromptModal("Table name", initial=table.name, max_length=24), rename)

    # ---- Ticket lines ----

    def _move_item_selection(self, delta: int) -> None:
        order = self._current_order()
        if order is None or not order.items:
            return

        if self.item_selected_index is None:
            self.item_selected_index = 0 if delta > 0 else len(order.items) - 1
        else:
            self.item_selected_index = (self.item_selected_index + delta) % len(order.items)
        self._refresh_ticket()

    def _selected_item_id(self) -> str | None:
        order = self._current_order()
        if order is None or self.item_selected_index is None:
            return None
        if not (0 <= self.item_selected_index < len(order.items)):
            return None
        return order.items[self.item_selected_index].id

    def _change_selected_qty(self, delta: int) -> None:
        order = self._current_order()
        item_id = self._selected_item_id()
        if order is None or item_id is None:
            return
        item = next(item for item in order.items if item.id == item_id)
        self.store.update_item_qty(order.id, item_id, item.qty + delta)

    def _remove_selected_item(self) -> None:
        order = self._current_order()
        item_id = self._selected_item_id()
        if order is None or item_id is None:
            return
        self.store.remove_item_from_order(order.id, item_id)

    # ---- Rendering ----

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_search()

    def _refresh_all(self) -> None:
        self._refresh_tables()
        self._refresh_ticket()
        self._refresh_search()

    def _refresh_tables(self) -> None:
        try:
            tables_widget = self.query_one("#tables-list", Static)
        except NoMatches:
            return

        tables = self.store.tables
        ids = [table.id for table in tables]
        selected = ids.index(self.store.current_table_id) if self.store.current_table_id in ids else None
        start, end = _visible_window(len(tables), tables_widget.size.height, selected)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append("➤ " if idx == selected else "  ")
            lines.append_text(
                format_table_label(tables[idx], self.store.get_active_order_for_table(tables[idx].id))
            )
        if end < len(tables):
            lines.append("\n⋮", style="dim")
        tables_widget.update(lines)

    def _refresh_ticket(self) -> None:
        try:
            ticket_widget = self.query_one("#ticket-view", Static)
        except NoMatches:
            return

        order = self._current_order()
        if order is None:
            ticket_widget.update("(no ticket, press O to open)")
            return

        if self.item_selected_index is not None and self.item_selected_index >= len(order.items):
            self.item_selected_index = len(order.items) - 1 if order.items else None

        lines = Text()
        lines.append_text(format_order_header(order))
        lines.append("\n")
        if not order.items:
            lines.append("\n  (no items yet)", style="dim")
        for idx, item in enumerate(order.items):
            lines.append("\n")
            lines.append("➤ " if idx == self.item_selected_index else "  ")
            lines.append_text(format_order_item(item))

        lines.append("\n\nTotal: ", style="bold")
        lines.append(format_price(compute_order_total(order)), style="bold")

        lines.append("\n")
        for comment in order.comments[-_VISIBLE_COMMENTS:]:
            lines.append("\n")
            lines.append_text(format_comment(comment))
        ticket_widget.update(lines)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            codes = " ".join(f"{idx}:{category.code}" for idx, category in enumerate(self.store.categories, start=1))
            bar.update(f"{codes}\nO open, C close, M move, N comment.\n{status}")
            return

        text = Text()
        text.append(f" {self.category_code} ", style="bold #ffffff on #2f6db5")
        text.append(f": {self.search_text}")
        bar.update(text)

    def _refresh_results(self, results: list[Product]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update("")
            return

        if not results:
            results_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        start, end = _visible_window(len(results), results_widget.size.height, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(f"{pointer}{results[idx].name}")
            lines.append(f"  {format_price(results[idx].price)}", style="dim")
        if end < len(results):
            lines.append("\n⋮", style="dim")
        results_widget.update(lines)
