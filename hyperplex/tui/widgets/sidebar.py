"""Sidebar panels: active agents and recent missions."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from hyperplex.engine.models import Agent, Mission

EMPTY_HISTORY_HINT = "Missions will appear here after first run."


class AgentPanel(Static):
    """Roster with glyph, name and role."""

    def show_agents(self, agents: tuple[Agent, ...]) -> None:
        text = Text("Active agents\n", style="bold green")
        for agent in agents:
            text.append(f"\n{agent.glyph} {agent.name}\n", style="bold")
            text.append(f"{agent.role}\n", style="grey62")
        self.update(text)


class MissionPanel(Static):
    """Most recent missions, newest first."""

    def show_history(self, history: tuple[Mission, ...]) -> None:
        text = Text("Recent missions\n", style="bold green")
        if not history:
            text.append(f"\n{EMPTY_HISTORY_HINT}", style="grey62")
        for mission in history:
            text.append(f"\n{mission.task}\n", style="bold")
            text.append(
                f"{mission.priority.value.upper()} · {mission.deliverable}\n",
                style="grey50",
            )
        self.update(text)
