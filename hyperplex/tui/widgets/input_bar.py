"""Input bar — command prompt with Up/Down recall and quick suggestions."""

from __future__ import annotations

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, Static

from hyperplex.shared.suggestions import Suggestion

HISTORY_LIMIT = 30
SUGGESTION_SLOTS = 3


class CommandHistory:
    """Most-recent-first command recall, bounded to ``limit`` entries.

    ``index`` is None while the user is editing a fresh line.
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self.limit = limit
        self.entries: list[str] = []
        self.index: int | None = None

    def record(self, command: str) -> None:
        self.entries = [command, *self.entries][: self.limit]
        self.index = None

    def older(self) -> str | None:
        """Step back in time. Returns None when there is no history."""
        if not self.entries:
            return None
        self.index = 0 if self.index is None else min(self.index + 1, len(self.entries) - 1)
        return self.entries[self.index]

    def newer(self) -> str | None:
        """Step forward. Returns "" when leaving history, None if not browsing."""
        if not self.entries or self.index is None:
            return None
        if self.index == 0:
            self.index = None
            return ""
        self.index -= 1
        return self.entries[self.index]


class InputBar(Widget):
    """Single-line command prompt plus suggestion chips."""

    class Submitted(Message):
        """Posted when the user submits a command."""

        def __init__(self, text: str) -> None:
            self.text = text
            super().__init__()

    DEFAULT_CSS = """
    InputBar {
        height: auto;
        padding: 0 1;
        background: $surface;
        border-top: solid $primary-darken-3;
    }
    InputBar #prompt-row {
        height: 3;
    }
    InputBar #prompt-sigil {
        width: 2;
        padding: 1 0;
        color: $text-muted;
    }
    InputBar #command-input {
        width: 1fr;
        border: none;
    }
    InputBar #suggestions {
        height: 1;
        margin: 0 0 1 2;
    }
    InputBar .suggestion-btn {
        min-width: 8;
        height: 1;
        border: none;
        margin: 0 1 0 0;
        background: $success-darken-3;
        color: $text;
    }
    InputBar .suggestion-btn:hover {
        background: $success-darken-1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.history = CommandHistory()
        self._suggestions: list[Suggestion] = []

    def compose(self) -> ComposeResult:
        with Horizontal(id="prompt-row"):
            yield Static("$", id="prompt-sigil")
            yield Input(
                placeholder="run ship onboarding autopilot --priority=high",
                id="command-input",
            )
        with Horizontal(id="suggestions"):
            for i in range(SUGGESTION_SLOTS):
                yield Button("", id=f"suggestion-{i}", classes="suggestion-btn")

    @property
    def _input(self) -> Input:
        return self.query_one("#command-input", Input)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        text = event.value
        if not text.strip():
            return
        self.history.record(text)
        self._input.value = ""
        self.post_message(self.Submitted(text))

    def on_key(self, event: events.Key) -> None:
        if not self._input.has_focus:
            return
        if event.key == "up":
            recalled = self.history.older()
        elif event.key == "down":
            recalled = self.history.newer()
        else:
            return
        event.prevent_default()
        event.stop()
        if recalled is not None:
            self.set_text(recalled)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("suggestion-"):
            return
        event.stop()
        index = int(button_id.removeprefix("suggestion-"))
        if index < len(self._suggestions):
            self.set_text(self._suggestions[index].command)
            self.focus_input()

    def set_suggestions(self, suggestions: list[Suggestion]) -> None:
        """Relabel the suggestion chips; unused slots are hidden."""
        self._suggestions = list(suggestions)[:SUGGESTION_SLOTS]
        for i in range(SUGGESTION_SLOTS):
            button = self.query_one(f"#suggestion-{i}", Button)
            if i < len(self._suggestions):
                button.label = self._suggestions[i].label
                button.display = True
            else:
                button.display = False

    def set_busy(self, busy: bool) -> None:
        """Disable the prompt while a command is running."""
        self._input.disabled = busy
        if not busy:
            self.focus_input()

    def set_text(self, text: str) -> None:
        self._input.value = text
        self._input.cursor_position = len(text)

    def focus_input(self) -> None:
        self._input.focus()
