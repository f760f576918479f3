"""Variant (serving size) picker modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from taproom.formatter import format_price, size_label
from taproom.i18n import Language, translate
from taproom.models import Product
from taproom.pricing import variant_options


class SizeModal(ModalScreen[str | None]):
    """Centered modal to pick one purchasable size of a product."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("q", "cancel", "Cancel"),
        ("ctrl+c", "cancel", "Cancel"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "choose", "Choose"),
    ]

    CSS = """
    SizeModal {
        align: center middle;
        background: $background 60%;
    }

    #size-dialog {
        width: 52;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #size-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #size-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, product: Product, language: Language) -> None:
        super().__init__()
        self.product = product
        self.language = language
        self.options = variant_options(product)

    def compose(self) -> ComposeResult:
        with Container(id="size-dialog"):
            yield Static(f"{translate(self.language, 'select_size')}: {self.product.name}", id="size-title")
            yield Static(id="size-body")
            yield Static("J/K/↑/↓ move, Enter choose, Esc/q cancel", id="size-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        if not self.options:
            return
        self.cursor_index = (self.cursor_index + delta) % len(self.options)
        self._refresh_content()

    def action_choose(self) -> None:
        if not self.options:
            self.dismiss(None)
            return
        size, _ = self.options[self.cursor_index]
        self.dismiss(size)

    def _refresh_content(self) -> None:
        body = self.query_one("#size-body", Static)
        content = Text(style="white")
        for idx, (size, price) in enumerate(self.options):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"{pointer}{size_label(size)}  {format_price(price)}", style=style)
        body.update(content)
