"""Help modal showing console commands and key mappings."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from hyperplex.shared.commands import COMMAND_HELP

KEY_HELP: dict[str, str] = {
    "Enter": "submit command",
    "Up / Down": "recall previous commands",
    "Ctrl+L": "clear transcript",
    "Ctrl+H": "open help",
    "Ctrl+Q": "quit",
    "Esc": "close dialogs",
}


def _help_text() -> Text:
    # Built as Text because command usage strings contain [brackets].
    text = Text()
    text.append("Commands\n", style="bold")
    for name, desc in COMMAND_HELP.items():
        text.append(f"- {name}", style="cyan")
        text.append(f": {desc}\n")
    text.append("\nKeyboard shortcuts\n", style="bold")
    for key, desc in KEY_HELP.items():
        text.append(f"- {key}", style="cyan")
        text.append(f": {desc}\n")
    return text


class HelpScreen(ModalScreen[None]):
    """Display usage instructions and keyboard shortcuts."""

    CSS_PATH = "../styles/modal.tcss"
    BINDINGS = [
        ("escape", "close", "Close"),
        ("ctrl+h", "close", "Close"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="help-dialog"):
            yield Static(
                "[bold]Hyperplex Help[/bold]",
                id="help-title",
                markup=True,
            )
            yield Static(_help_text(), id="help-body")
            yield Button("Close", id="help-close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
