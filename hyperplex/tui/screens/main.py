"""Main screen — transcript, prompt and state sidebar."""

from __future__ import annotations

import logging
import random

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Header

from hyperplex.adapters.orchestrator import MissionBridge, is_clear_signal
from hyperplex.shared.suggestions import rotate_suggestions
from hyperplex.tui.widgets.input_bar import InputBar
from hyperplex.tui.widgets.sidebar import AgentPanel, MissionPanel
from hyperplex.tui.widgets.status_bar import StatusBar
from hyperplex.tui.widgets.transcript import Transcript

logger = logging.getLogger(__name__)


class MainScreen(Screen):
    """Primary console workspace."""

    def __init__(
        self,
        bridge: MissionBridge,
        rng: random.Random | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.bridge = bridge
        self._rng = rng or random.Random()

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="workspace"):
            with Vertical(id="main-pane"):
                yield Transcript(id="transcript")
                yield InputBar(id="input-bar")
            with Vertical(id="sidebar"):
                yield AgentPanel(id="agent-panel")
                yield MissionPanel(id="mission-panel")
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        self.query_one("#transcript", Transcript).write_boot_banner()
        self.refresh_state()
        self._rotate_suggestions()
        self.query_one(InputBar).focus_input()

    def refresh_state(self) -> None:
        """Pull a fresh snapshot into the sidebar and status bar."""
        snapshot = self.bridge.snapshot()
        self.query_one("#agent-panel", AgentPanel).show_agents(snapshot.agents)
        self.query_one("#mission-panel", MissionPanel).show_history(snapshot.history)
        self.query_one("#status-bar", StatusBar).apply_snapshot(snapshot)

    def clear_transcript(self) -> None:
        self.query_one("#transcript", Transcript).clear()

    def _rotate_suggestions(self) -> None:
        self.query_one(InputBar).set_suggestions(rotate_suggestions(self._rng))

    def on_input_bar_submitted(self, message: InputBar.Submitted) -> None:
        if self.bridge.busy:
            return
        self.run_command(message.text)

    @work(exclusive=True, name="run-command")
    async def run_command(self, command: str) -> None:
        """Background worker: stream one command into the transcript."""
        transcript = self.query_one("#transcript", Transcript)
        input_bar = self.query_one(InputBar)
        status_bar = self.query_one("#status-bar", StatusBar)

        input_bar.set_busy(True)
        status_bar.status = "running"
        try:
            async for event in self.bridge.submit(command):
                if is_clear_signal(event):
                    transcript.clear()
                    continue
                transcript.write_event(event)
            self.refresh_state()
        finally:
            status_bar.status = "idle"
            input_bar.set_busy(False)
            self._rotate_suggestions()
