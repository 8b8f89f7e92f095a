"""Hyperplex TUI — Textual application class."""

from __future__ import annotations

import random
from pathlib import Path

from textual.app import App

from hyperplex.adapters.orchestrator import MissionBridge
from hyperplex.engine.engine import MissionEngine
from hyperplex.tui.screens.main import MainScreen


class HyperplexApp(App):
    """Terminal console for the simulated agent swarm."""

    TITLE = "Hyperplex"
    SUB_TITLE = "Agentic CLI"
    CSS_PATH = Path("styles/app.tcss")

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+h", "open_help", "Help"),
        ("ctrl+l", "clear_transcript", "Clear"),
        ("escape", "blur", "Blur"),
    ]

    def __init__(
        self,
        engine: MissionEngine | None = None,
        suggestion_seed: int | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.bridge = MissionBridge(engine)
        self._suggestion_rng = random.Random(suggestion_seed)

    def on_mount(self) -> None:
        self.push_screen(MainScreen(self.bridge, rng=self._suggestion_rng))

    def action_open_help(self) -> None:
        """Open the commands/keys help modal."""
        from hyperplex.tui.screens.help import HelpScreen

        self.push_screen(HelpScreen())

    def action_clear_transcript(self) -> None:
        screen = self.screen
        if isinstance(screen, MainScreen):
            screen.clear_transcript()

    def action_blur(self) -> None:
        self.screen.set_focus(None)
