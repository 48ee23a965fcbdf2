"""One-line entry modal used for notes, comments, table names and moves."""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

# Returns an error message, or None when the value is accepted.
Validator = Callable[[str], str | None]


def require_text(value: str) -> str | None:
    if not value:
        return "Text is required."
    return None


class PromptModal(ModalScreen[str | None]):
    """Collect one line of input and dismiss with it once ``validate`` accepts it."""

    CSS = """
    PromptModal {
        align: center middle;
        background: $background 60%;
    }

    #prompt-dialog {
        width: 60;
        height: auto;
        border: round $primary;
        background: $panel;
        padding: 1 2;
    }

    #prompt-title {
        text-style: bold;
        color: white;
    }

    #prompt-hint {
        color: #dddddd;
        margin-bottom: 1;
    }

    #prompt-value {
        border: heavy $primary;
        padding: 0 1;
    }

    #prompt-error {
        color: #ffb3b3;
    }
    """

    def __init__(
        self,
        title: str,
        initial: str = "",
        max_length: int = 60,
        hint: str = "Enter confirm, Esc cancel",
        digits_only: bool = False,
        validate: Validator = require_text,
    ) -> None:
        super().__init__()
        self.heading = title
        self.hint = hint
        self.value = initial
        self.max_length = max_length
        self.digits_only = digits_only
        self.validate = validate
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="prompt-dialog"):
            yield Static(self.heading, id="prompt-title")
            yield Static(self.hint, id="prompt-hint")
            yield Static(id="prompt-value")
            yield Static(id="prompt-error")

    def on_mount(self) -> None:
        self._render_value()

    def on_key(self, event: Key) -> None:
        event.stop()
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
        elif event.key == "enter":
            self._submit()
        elif event.key == "backspace":
            self.value = self.value[:-1]
            self.error = ""
            self._render_value()
        elif self._accepts(event.character):
            self.value += event.character
            self.error = ""
            self._render_value()

    def _accepts(self, char: str | None) -> bool:
        if not char or not char.isprintable() or len(self.value) >= self.max_length:
            return False
        return char.isdigit() or not self.digits_only

    def _submit(self) -> None:
        candidate = self.value.strip()
        error = self.validate(candidate)
        if error:
            self.error = error
            self._render_value()
            return
        self.dismiss(candidate)

    def _render_value(self) -> None:
        self.query_one("#prompt-value", Static).update(f"{self.value}|")
        self.query_one("#prompt-error", Static).update(self.error)
