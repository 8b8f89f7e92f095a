"""Informational and stack commands on the mission engine."""

from __future__ import annotations

import asyncio

from hyperplex.engine.config import DEFAULT_ROSTER, DEFAULT_TOOLS, EngineConfig
from hyperplex.engine.engine import MissionEngine
from hyperplex.engine.models import CLEAR_SENTINEL, EventType


def _engine(**overrides) -> MissionEngine:
    overrides.setdefault("step_delay_seconds", 0.0)
    overrides.setdefault("seed", 7)
    return MissionEngine(EngineConfig(**overrides))


async def _collect(engine: MissionEngine, command: str) -> list:
    return [event async for event in engine.execute(command)]


def test_agents_lists_roster_in_order() -> None:
    async def _run() -> None:
        engine = _engine()
        before = engine.get_snapshot()
        events = await _collect(engine, "agents")

        assert len(events) == len(DEFAULT_ROSTER)
        for event, agent in zip(events, DEFAULT_ROSTER):
            assert event.type is EventType.AGENT
            assert agent.name in event.headline
        assert engine.get_snapshot() == before
        assert len(engine.get_snapshot().agents) == len(DEFAULT_ROSTER)

    asyncio.run(_run())


def test_stack_add_then_list_shows_single_entry() -> None:
    async def _run() -> None:
        engine = _engine()
        added = await _collect(engine, "stack add ship onboarding")
        assert len(added) == 1
        assert added[0].type is EventType.SYSTEM

        snapshot = engine.get_snapshot()
        assert len(snapshot.stack) == 1
        assert snapshot.stack[0].task == "ship onboarding"
        assert snapshot.stack[0].entry_id == "S-001"

        listed = await _collect(engine, "stack")
        assert len(listed) == 1
        assert listed[0].body.splitlines() == ["1. ship onboarding  (S-001)"]

    asyncio.run(_run())


def test_stack_pop_removes_most_recent_and_ids_are_not_reused() -> None:
    async def _run() -> None:
        engine = _engine()
        await _collect(engine, "stack add first")
        await _collect(engine, "stack add second")

        popped = await _collect(engine, "stack pop")
        assert popped[0].headline == "Popped S-002"
        assert [e.task for e in engine.get_snapshot().stack] == ["first"]

        await _collect(engine, "stack add third")
        assert [e.entry_id for e in engine.get_snapshot().stack] == ["S-001", "S-003"]

    asyncio.run(_run())


def test_stack_pop_and_clear_on_empty_stack() -> None:
    async def _run() -> None:
        engine = _engine()
        popped = await _collect(engine, "stack pop")
        assert [e.type for e in popped] == [EventType.WARNING]

        await _collect(engine, "stack add a")
        await _collect(engine, "stack add b")
        cleared = await _collect(engine, "stack clear")
        assert cleared[0].headline == "Cleared 2 task(s) from stack"
        assert engine.get_snapshot().stack == ()

        listed = await _collect(engine, "stack")
        assert listed[0].headline == "Mission stack is empty"

    asyncio.run(_run())


def test_stack_usage_error_leaves_state_unchanged() -> None:
    async def _run() -> None:
        engine = _engine()
        await _collect(engine, "stack add keep me")
        before = engine.get_snapshot()

        events = await _collect(engine, "stack shuffle")
        assert len(events) == 1
        assert events[0].type is EventType.WARNING
        assert "Usage" in events[0].body
        assert engine.get_snapshot() == before

    asyncio.run(_run())


def test_unknown_commands_yield_one_warning_and_no_mutation() -> None:
    async def _run() -> None:
        engine = _engine()
        await _collect(engine, "stack add something")
        await _collect(engine, "run warm up")
        before = engine.get_snapshot()

        for command in ("deploy now", "xyz", "runx build", "agentsx", "???"):
            events = await _collect(engine, command)
            assert len(events) == 1
            assert events[0].type in (EventType.WARNING, EventType.ERROR)
            assert command in events[0].headline
            assert engine.get_snapshot() == before

    asyncio.run(_run())


def test_empty_input_yields_nothing() -> None:
    async def _run() -> None:
        engine = _engine()
        assert await _collect(engine, "") == []
        assert await _collect(engine, "   ") == []
        assert not engine.busy

    asyncio.run(_run())


def test_tools_lists_catalog() -> None:
    async def _run() -> None:
        events = await _collect(_engine(), "tools")
        assert [e.headline for e in events] == [t.name for t in DEFAULT_TOOLS]
        assert all(e.type is EventType.TOOL for e in events)

    asyncio.run(_run())


def test_help_lists_every_command() -> None:
    async def _run() -> None:
        events = await _collect(_engine(), "help")
        assert len(events) == 1
        for name in ("run", "agents", "stack", "history", "tools", "help", "clear"):
            assert name in events[0].body

    asyncio.run(_run())


def test_clear_emits_sentinel_without_touching_state() -> None:
    async def _run() -> None:
        engine = _engine()
        await _collect(engine, "stack add x")
        before = engine.get_snapshot()

        events = await _collect(engine, "clear")
        assert len(events) == 1
        assert events[0].type is EventType.SYSTEM
        assert events[0].body == CLEAR_SENTINEL
        assert events[0].is_clear
        assert engine.get_snapshot() == before

    asyncio.run(_run())


def test_history_empty_then_newest_first() -> None:
    async def _run() -> None:
        engine = _engine()
        empty = await _collect(engine, "history")
        assert len(empty) == 1
        assert empty[0].headline == "No missions yet"

        await _collect(engine, "run first mission")
        await _collect(engine, "run second mission --priority=high")
        events = await _collect(engine, "history")
        assert len(events) == 2
        assert events[0].headline == "M-0002 · second mission"
        assert events[1].headline == "M-0001 · first mission"
        assert events[0].body.startswith("HIGH · brief")

    asyncio.run(_run())
