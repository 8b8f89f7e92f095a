"""Plain-dict conversion for engine events.

Used by the headless runner's JSON-lines output and by anything that
needs to ship events across a process boundary.
"""
from __future__ import annotations

from typing import Any

from hyperplex.engine.models import EngineEvent, EventType


def event_to_dict(event: EngineEvent) -> dict[str, Any]:
    """Convert an event to a plain dict for JSON serialization.

    ``None`` fields are dropped; the type is emitted under the ``event`` key.
    """
    d: dict[str, Any] = {"id": event.id, "event": event.type.value}
    if event.headline is not None:
        d["headline"] = event.headline
    if event.body is not None:
        d["body"] = event.body
    return d


def dict_to_event(data: dict[str, Any]) -> EngineEvent:
    """Rebuild an event from ``event_to_dict`` output.

    Raises ValueError for an unknown event type.
    """
    kwargs: dict[str, Any] = {
        "type": EventType(data.get("event", "")),
        "headline": data.get("headline"),
        "body": data.get("body"),
    }
    if data.get("id"):
        kwargs["id"] = str(data["id"])
    return EngineEvent(**kwargs)
