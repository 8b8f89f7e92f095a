"""Transcript — scrolling RichLog of engine events."""

from __future__ import annotations

from textual.widgets import RichLog

from hyperplex.engine.models import EngineEvent, EventType
from hyperplex.shared.formatters.event import render_event

BOOT_EVENTS = (
    EngineEvent(
        EventType.SYSTEM,
        headline="Hyperplex · Agentic CLI",
        body="Booting swarm orchestration layer...",
    ),
    EngineEvent(
        EventType.SYSTEM,
        body="Type `help` to view commands · Ships with autoplan, stack queue, and telemetry",
    ),
)


class Transcript(RichLog):
    """Line-oriented log of every event the console has shown."""

    def __init__(self, **kwargs) -> None:
        super().__init__(
            auto_scroll=True,
            wrap=True,
            markup=False,
            highlight=False,
            max_lines=5000,
            **kwargs,
        )
        self.event_count = 0

    def write_event(self, event: EngineEvent) -> None:
        self.write(render_event(event))
        self.event_count += 1

    def write_boot_banner(self) -> None:
        for event in BOOT_EVENTS:
            self.write_event(event)

    def clear(self) -> "Transcript":
        self.event_count = 0
        return super().clear()
