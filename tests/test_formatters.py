from hyperplex.engine.models import EngineEvent, EventType
from hyperplex.shared.formatters.event import (
    EVENT_STYLES,
    body_lines,
    format_headline,
    format_plain,
    render_event,
)


def test_every_event_type_has_a_style() -> None:
    assert set(EVENT_STYLES) == set(EventType)


def test_input_renders_as_prompt_line() -> None:
    event = EngineEvent(EventType.INPUT, body="agents")
    assert format_headline(event) == "$ agents"
    assert body_lines(event) == []
    assert format_plain(event) == "$ agents"


def test_agent_event_has_gutter_on_every_line() -> None:
    event = EngineEvent(EventType.AGENT, headline="🧭 Atlas", body="Mapping\nstep 1/2 · planner")
    lines = format_plain(event).split("\n")
    assert len(lines) == 3
    assert all(line.startswith("▍ ") for line in lines)
    assert lines[0] == "▍ 🧭 Atlas"


def test_body_only_event_uses_body_as_headline() -> None:
    event = EngineEvent(EventType.SYSTEM, body="Booting")
    assert format_plain(event) == "Booting"


def test_divider_is_letter_spaced() -> None:
    event = EngineEvent(EventType.DIVIDER, body="squad deployed")
    assert format_plain(event) == "── S Q U A D   D E P L O Y E D ──"


def test_headline_carries_type_style() -> None:
    text = render_event(EngineEvent(EventType.ERROR, headline="Runtime failure"))
    styles = {str(span.style) for span in text.spans}
    assert EVENT_STYLES[EventType.ERROR].headline in styles
