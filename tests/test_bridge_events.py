"""MissionBridge consumption loop and event dict conversion."""

from __future__ import annotations

import asyncio

import pytest

from hyperplex.adapters import MissionBridge, dict_to_event, event_to_dict, is_clear_signal
from hyperplex.adapters.orchestrator import RUNTIME_FAILURE_FALLBACK, RUNTIME_FAILURE_HEADLINE
from hyperplex.engine.config import EngineConfig
from hyperplex.engine.engine import MissionEngine
from hyperplex.engine.models import EngineEvent, EventType


def _bridge() -> MissionBridge:
    return MissionBridge(MissionEngine(EngineConfig(step_delay_seconds=0.0, seed=2)))


async def _submit(bridge: MissionBridge, command: str) -> list[EngineEvent]:
    return [event async for event in bridge.submit(command)]


def test_submit_echoes_input_first() -> None:
    async def _run() -> None:
        bridge = _bridge()
        events = await _submit(bridge, "run ship it")
        assert events[0].type is EventType.INPUT
        assert events[0].body == "run ship it"
        assert events[-1].type is EventType.RESULT
        assert bridge.snapshot().stats.missions == 1
        assert not bridge.busy

    asyncio.run(_run())


def test_blank_submit_yields_nothing() -> None:
    async def _run() -> None:
        assert await _submit(_bridge(), "   ") == []

    asyncio.run(_run())


def test_busy_engine_becomes_runtime_failure() -> None:
    async def _run() -> None:
        bridge = _bridge()
        held = bridge.engine.execute("run long job")
        await held.__anext__()

        events = await _submit(bridge, "agents")
        assert [e.type for e in events] == [EventType.INPUT, EventType.ERROR]
        assert events[1].headline == RUNTIME_FAILURE_HEADLINE
        assert "busy" in events[1].body
        await held.aclose()
        assert not bridge.busy

    asyncio.run(_run())


class _ExplodingEngine:
    busy = False

    def execute(self, command: str):
        raise RuntimeError("")


def test_unexpected_error_uses_fallback_message() -> None:
    async def _run() -> None:
        bridge = MissionBridge(_ExplodingEngine())
        events = await _submit(bridge, "agents")
        assert events[-1].type is EventType.ERROR
        assert events[-1].body == RUNTIME_FAILURE_FALLBACK

    asyncio.run(_run())


def test_abandoned_submit_releases_engine() -> None:
    async def _run() -> None:
        bridge = _bridge()
        gen = bridge.submit("run ship it")
        async for event in gen:
            if event.type is EventType.AGENT:
                break
        await gen.aclose()
        assert not bridge.busy
        assert bridge.snapshot().stats.missions == 0

    asyncio.run(_run())


def test_clear_signal_passes_through() -> None:
    async def _run() -> None:
        events = await _submit(_bridge(), "clear")
        assert [is_clear_signal(e) for e in events] == [False, True]

    asyncio.run(_run())


def test_event_to_dict_drops_missing_fields() -> None:
    event = EngineEvent(EventType.DIVIDER, body="squad deployed")
    data = event_to_dict(event)
    assert data == {"id": event.id, "event": "divider", "body": "squad deployed"}
    assert dict_to_event(data) == event


def test_dict_to_event_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        dict_to_event({"event": "telemetry", "headline": "x"})
