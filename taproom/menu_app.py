"""Main Textual app class."""

from __future__ import annotations

import logging
import webbrowser
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from taproom.catalog import Catalog, group_by_subcategory
from taproom.config import UI_NAMESPACE, WHATSAPP_PHONE
from taproom.formatter import format_price, send_order
from taproom.i18n import Language, next_language, translate
from taproom.ledger import CartLedger
from taproom.models import CartLine, Product
from taproom.notes_modal import NotesModal
from taproom.persistence import PersistenceError, SqliteCartStore
from taproom.pricing import variant_options
from taproom.rendering import format_cart_line, format_category_tabs, format_product_row, subcategory_heading
from taproom.size_modal import SizeModal

logger = logging.getLogger(__name__)


class TaproomApp(App):
    """A Textual app for browsing the menu and sending an order."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #category-tabs {
        height: auto;
        margin-bottom: 1;
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

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-summary {
        height: auto;
        margin-top: 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_query = reactive("")
    category_index = reactive(0)
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next item"),
        ("up", "cycle_results(-1)", "Previous item"),
        ("down", "cycle_results(1)", "Next item"),
        ("left", "cycle_category(-1)", "Previous category"),
        ("right", "cycle_category(1)", "Next category"),
        ("enter", "add_selected", "Add to cart"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "send_order", "Send order", priority=True),
        ("ctrl+c", "cancel_search", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        catalog: Catalog,
        ledger: CartLedger,
        store: SqliteCartStore,
        language: Language,
        channel_address: str = WHATSAPP_PHONE,
        open_uri: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        super().__init__()
        self.catalog = catalog
        self.ledger = ledger
        self.store = store
        self.ui_language = language
        self.channel_address = channel_address
        self.open_uri = open_uri
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static(id="category-tabs")
                yield Static(id="search-bar")
                yield Static(id="results")
            with Vertical(id="cart-pane"):
                yield Static(id="cart-title", classes="pane-title")
                yield Static(id="cart-list")
                yield Static(id="cart-summary")

    def on_mount(self) -> None:
        if not self.catalog.is_available:
            self.system_status = translate(self.ui_language, "menu_unavailable")
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if isinstance(self.screen, (NotesModal, SizeModal)):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        if self.input_state == "search":
            self.search_query += event.character
            self.selected_index = 0
            self._refresh_menu()
            event.stop()
            return

        key = event.character.lower()
        handlers: dict[str, Callable[[], None]] = {
            "/": self._enter_search,
            "j": lambda: self._move_cart_selection(1),
            "k": lambda: self._move_cart_selection(-1),
            "+": lambda: self._change_selected_quantity(1),
            "=": lambda: self._change_selected_quantity(1),
            "-": lambda: self._change_selected_quantity(-1),
            "d": self._delete_selected_line,
            "n": self._open_notes,
            "l": self._cycle_language,
            "x": self._clear_cart,
        }
        handler = handlers.get(key)
        if handler is None:
            return
        handler()
        event.stop()

    def action_cancel_search(self) -> None:
        if isinstance(self.screen, (NotesModal, SizeModal)):
            return
        if self.input_state == "normal":
            return
        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_menu()

    def action_cycle_results(self, delta: int) -> None:
        if isinstance(self.screen, (NotesModal, SizeModal)):
            return
        results = self._visible_products()
        if not results:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_menu()

    def action_cycle_category(self, delta: int) -> None:
        if isinstance(self.screen, (NotesModal, SizeModal)):
            return
        if not self.catalog.categories:
            return
        self.category_index = (self.category_index + delta) % len(self.catalog.categories)
        self.selected_index = 0
        self._refresh_menu()

    def action_backspace_query(self) -> None:
        if self.input_state != "search" or not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_menu()

    def action_add_selected(self) -> None:
        if isinstance(self.screen, (NotesModal, SizeModal)):
            return
        results = self._visible_products()
        if not results:
            return
        product = results[min(self.selected_index, len(results) - 1)]
        if variant_options(product):
            self.push_screen(
                SizeModal(product, self.ui_language),
                callback=lambda size: self._add_product(product, size) if size is not None else None,
            )
            return
        self._add_product(product, None)

    def action_send_order(self) -> None:
        if isinstance(self.screen, (NotesModal, SizeModal)):
            return
        if self.ledger.is_empty:
            self.system_status = translate(self.ui_language, "empty_cart")
            self._refresh_menu()
            return

        try:
            send_order(self.ledger, self.ui_language, self.channel_address, self.open_uri)
        except PersistenceError as exc:
            # The message is already out, only the cart reset failed.
            logger.error("order sent but cart not cleared: %s", exc)
            self.system_status = f"Order sent, cart not cleared: {exc}"
            self._refresh_all()
            return
        except RuntimeError as exc:
            logger.error("send_order failed: %s", exc)
            self.system_status = f"Order not sent: {exc}"
            self._refresh_menu()
            return

        self.cart_selected_index = None
        self.system_status = f"{translate(self.ui_language, 'send_order')} ✓"
        self._refresh_all()

    def _enter_search(self) -> None:
        self.input_state = "search"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_menu()

    def _add_product(self, product: Product, variant: str | None) -> None:
        if self._mutate(self.ledger.add, product, variant):
            keys = [line.key for line in self.ledger.lines]
            self.cart_selected_index = keys.index((product.id, variant))
            self.system_status = f"+ {product.name}"
        self._refresh_all()

    def _mutate(self, operation: Callable[..., None], *args: object) -> bool:
        try:
            operation(*args)
        except PersistenceError as exc:
            logger.error("cart mutation failed: %s", exc)
            self.system_status = f"Cart not saved: {exc}"
            return False
        return True

    def _selected_line(self) -> CartLine | None:
        if self.cart_selected_index is None:
            return None
        if not (0 <= self.cart_selected_index < len(self.ledger.lines)):
            return None
        return self.ledger.lines[self.cart_selected_index]

    def _move_cart_selection(self, delta: int) -> None:
        lines = self.ledger.lines
        if not lines:
            return
        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(lines)
        self._refresh_cart()

    def _change_selected_quantity(self, delta: int) -> None:
        line = self._selected_line()
        if line is None:
            return
        self._mutate(self.ledger.set_quantity, line.product.id, line.quantity + delta, line.selected_variant)
        self._refresh_all()

    def _delete_selected_line(self) -> None:
        line = self._selected_line()
        if line is None:
            return
        self._mutate(self.ledger.remove, line.product.id, line.selected_variant)
        self._refresh_all()

    def _clear_cart(self) -> None:
        if self._mutate(self.ledger.clear):
            self.cart_selected_index = None
        self._refresh_all()

    def _open_notes(self) -> None:
        self.push_screen(NotesModal(self.ledger.notes, self.ui_language), callback=self._save_notes)

    def _save_notes(self, notes: str | None) -> None:
        if notes is None:
            return
        self._mutate(self.ledger.set_notes, notes)
        self._refresh_all()

    def _cycle_language(self) -> None:
        self.ui_language = next_language(self.ui_language)
        try:
            self.store.save_preference(UI_NAMESPACE, "language", self.ui_language.value)
        except PersistenceError as exc:
            logger.warning("language preference not saved: %s", exc)
        self._refresh_all()

    def _current_category_slug(self) -> str | None:
        if not self.catalog.categories:
            return None
        return self.catalog.categories[self.category_index % len(self.catalog.categories)].id

    def _visible_products(self) -> list[Product]:
        if self.input_state == "search" and self.search_query.strip():
            return self.catalog.search(self.search_query)
        slug = self._current_category_slug()
        if slug is None:
            return []
        # Flatten in display order so the selection index matches the grouped view.
        return [product for _, group in group_by_subcategory(self.catalog.products_in(slug)) for product in group]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height // 3)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        self.title = translate(self.ui_language, "app_title")
        self.sub_title = self.ui_language.value.upper()
        self._refresh_menu()
        self._refresh_cart()

    def _refresh_menu(self) -> None:
        try:
            tabs = self.query_one("#category-tabs", Static)
            bar = self.query_one("#search-bar", Static)
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return

        tabs.update(format_category_tabs(self.catalog.categories, self._current_category_slug(), self.ui_language))

        if self.input_state == "search":
            bar.update(Text(f"{translate(self.ui_language, 'search')}: {self.search_query}|"))
        else:
            status = self.system_status or "Ready"
            bar.update(
                "←/→ category, ↑/↓ item, Enter add, / search, J/K cart, +/- qty, D delete, "
                f"N notes, L language, X clear, Ctrl+S send\n{status}"
            )

        results = self._visible_products()
        if not results:
            key = "menu_unavailable" if not self.catalog.is_available else "no_results"
            results_widget.update(translate(self.ui_language, key))
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        start, end = self._window_bounds(len(results), self._visible_rows(results_widget), self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        # Headings only when the visible products are actually grouped.
        grouped = any(product.subcategory for product in results)
        last_group: object = object()
        for idx in range(start, end):
            product = results[idx]
            if grouped and product.subcategory != last_group:
                heading = subcategory_heading(product.subcategory, self.ui_language)
                lines.append(f"{heading}\n", style="bold underline")
            last_group = product.subcategory
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_product_row(product, self.ui_language))
            lines.append("\n")

        if end < len(results):
            lines.append("⋮", style="dim")

        results_widget.update(lines)

    def _refresh_cart(self) -> None:
        try:
            title = self.query_one("#cart-title", Static)
            cart_widget = self.query_one("#cart-list", Static)
            summary = self.query_one("#cart-summary", Static)
        except NoMatches:
            return

        count = self.ledger.item_count()
        title.update(f"{translate(self.ui_language, 'your_cart')} ({count} {translate(self.ui_language, 'items_in_cart')})")

        summary_text = Text()
        summary_text.append(f"{translate(self.ui_language, 'total')}: {format_price(self.ledger.total())}", style="bold")
        if self.ledger.notes.strip():
            summary_text.append(f"\n{translate(self.ui_language, 'notes')}: {self.ledger.notes}")
        summary.update(summary_text)

        lines = self.ledger.lines
        if not lines:
            self.cart_selected_index = None
            cart_widget.update(translate(self.ui_language, "empty_cart"))
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        start, end = self._window_bounds(len(lines), self._visible_rows(cart_widget), self.cart_selected_index)

        text = Text()
        if start > 0:
            text.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                text.append("\n")
            pointer = "➤ " if idx == self.cart_selected_index else "  "
            text.append(pointer)
            text.append(f"{idx + 1}. ")
            text.append_text(format_cart_line(lines[idx]))

        if end < len(lines):
            text.append("\n⋮", style="dim")

        cart_widget.update(text)
