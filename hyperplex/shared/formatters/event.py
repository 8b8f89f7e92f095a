"""Rich rendering for engine events.

Both the TUI transcript and the headless runner render through here so
every event type looks the same everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from hyperplex.engine.models import EngineEvent, EventType


@dataclass(frozen=True)
class EventStyle:
    """How one event type is drawn."""

    headline: str
    gutter: str = ""  # left rule character, empty for none
    gutter_style: str = ""


# Every EventType must have an entry; see style_for().
EVENT_STYLES: dict[EventType, EventStyle] = {
    EventType.INPUT: EventStyle("bold grey93"),
    EventType.SYSTEM: EventStyle("bold cyan"),
    EventType.AGENT: EventStyle("bold green", "▍", "green4"),
    EventType.TOOL: EventStyle("bold sky_blue1", "▍", "deep_sky_blue4"),
    EventType.RESULT: EventStyle("bold gold1", "▍", "dark_goldenrod"),
    EventType.WARNING: EventStyle("bold dark_orange", "▍", "orange4"),
    EventType.ERROR: EventStyle("bold red", "▍", "red3"),
    EventType.DIVIDER: EventStyle("grey35"),
}

BODY_STYLE = "grey70"


def style_for(event_type: EventType) -> EventStyle:
    try:
        return EVENT_STYLES[event_type]
    except KeyError:
        raise ValueError(f"No style registered for event type {event_type!r}") from None


def format_headline(event: EngineEvent) -> str:
    """Headline text; input events read as a shell prompt."""
    if event.type is EventType.INPUT:
        return f"$ {event.body or ''}"
    return event.headline or event.body or ""


def body_lines(event: EngineEvent) -> list[str]:
    """Body split for line-oriented rendering.

    Input events show only their headline. Body-only events already
    used the body as headline.
    """
    if event.type is EventType.INPUT or not event.body or not event.headline:
        return []
    return event.body.split("\n")


def render_event(event: EngineEvent) -> Text:
    """Render one event to Rich Text."""
    style = style_for(event.type)
    text = Text()

    if event.type is EventType.DIVIDER:
        label = (event.body or event.headline or "").upper()
        text.append(f"── {' '.join(label)} ──" if label else "─" * 24, style=style.headline)
        return text

    def _gutter() -> None:
        if style.gutter:
            text.append(f"{style.gutter} ", style=style.gutter_style)

    _gutter()
    text.append(format_headline(event), style=style.headline)
    for line in body_lines(event):
        text.append("\n")
        _gutter()
        text.append(line, style=BODY_STYLE)
    return text


def format_plain(event: EngineEvent) -> str:
    """Unstyled rendering for logs and non-terminal output."""
    return render_event(event).plain
