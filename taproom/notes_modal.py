"""Order notes modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from taproom.i18n import Language, translate


class NotesModal(ModalScreen[str | None]):
    """Free-text editor for the order notes; dismisses with the new text or ``None``."""

    CSS = """
    NotesModal {
        align: center middle;
        background: $background 60%;
    }

    #notes-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #notes-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #notes-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #notes-help {
        color: #dddddd;
    }
    """

    def __init__(self, notes: str, language: Language) -> None:
        super().__init__()
        self.value = notes
        self.language = language

    def compose(self) -> ComposeResult:
        with Container(id="notes-dialog"):
            yield Static(translate(self.language, "order_notes"), id="notes-title")
            yield Static(id="notes-value")
            yield Static("Type text. Enter save. Backspace delete. Ctrl+U clear. Esc cancel.", id="notes-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(self.value)
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.key == "ctrl+u":
            self.value = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.value += event.character
            self._refresh_content()
            event.stop()
            return

        # Ignore all non-text keys while typing.
        event.stop()

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#notes-value", Static)
        if self.value:
            value_widget.update(Text(f"{self.value}|"))
        else:
            value_widget.update(Text(translate(self.language, "order_notes_placeholder"), style="dim"))
