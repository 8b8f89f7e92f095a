"""Status bar — run state and mission statistics."""

from __future__ import annotations

import time
from typing import Optional

from textual.reactive import reactive
from textual.timer import Timer
from textual.widget import Widget
from rich.text import Text

from hyperplex.engine.models import EngineSnapshot


def _format_elapsed(seconds: float) -> str:
    """Format elapsed seconds into a human-readable string."""
    secs = int(seconds)
    if secs < 60:
        return f"{secs}s"
    m, s = divmod(secs, 60)
    return f"{m}m {s}s"


class StatusBar(Widget):
    """Single-line bar: run pill, missions, average squad size, stack depth."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $panel;
    }
    """

    status: reactive[str] = reactive("idle")
    missions: reactive[int] = reactive(0)
    avg_agents: reactive[float] = reactive(0.0)
    stack_size: reactive[int] = reactive(0)

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._run_started_at: Optional[float] = None
        self._elapsed_timer: Timer | None = None

    def watch_status(self, old_value: str, new_value: str) -> None:
        """Track elapsed time while a command is running."""
        if new_value == "running" and old_value != "running":
            self._run_started_at = time.monotonic()
            if self._elapsed_timer is None:
                self._elapsed_timer = self.set_interval(1.0, self.refresh)
        elif old_value == "running" and new_value != "running":
            self._run_started_at = None
            if self._elapsed_timer is not None:
                self._elapsed_timer.stop()
                self._elapsed_timer = None

    def apply_snapshot(self, snapshot: EngineSnapshot) -> None:
        self.missions = snapshot.stats.missions
        self.avg_agents = snapshot.stats.avg_agents
        self.stack_size = len(snapshot.stack)

    @property
    def pill(self) -> str:
        return "Autopilot engaged" if self.status == "running" else "Idle"

    def render(self) -> Text:
        bar = Text()
        dot_style = "bold green" if self.status == "running" else "grey50"
        bar.append(" ● ", style=dot_style)
        pill = self.pill
        if self._run_started_at is not None:
            pill += f" ({_format_elapsed(time.monotonic() - self._run_started_at)})"
        bar.append(pill, style="bold")
        for label, value in (
            ("MISSIONS", f"{self.missions:02d}"),
            ("AVG AGENTS", f"{self.avg_agents:.1f}"),
            ("STACK", f"{self.stack_size:02d}"),
        ):
            bar.append(" │ ", style="dim")
            bar.append(f"{label} ", style="dim")
            bar.append(value, style="cyan")
        return bar
