"""Mission engine — owns roster, stack, history and stats.

``execute()`` classifies one command and returns an EventStream. Run
commands play a paced, seeded narration of the squad at work and
record a Mission once the result event has been handed to the
consumer. Everything else answers from current state in one pass.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import random
import weakref
from collections import deque
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Callable

from hyperplex.shared.commands import (
    COMMAND_HELP,
    STACK_USAGE,
    Intent,
    ParsedCommand,
    parse_command,
)

from .config import EngineConfig
from .errors import ConcurrentExecutionError
from .models import (
    CLEAR_SENTINEL,
    Agent,
    EngineEvent,
    EngineSnapshot,
    EventType,
    Mission,
    MissionStats,
    Priority,
    StackEntry,
    Tool,
)

logger = logging.getLogger(__name__)

# Step templates shared by every agent; config may add per-agent lines.
_STEP_LINES: tuple[str, ...] = (
    "Breaking \"{task}\" into workstreams",
    "Mapping dependencies the {deliverable} has to cover",
    "Drafting a first pass of the {deliverable}",
    "Pressure-testing assumptions at {priority} priority",
    "Flagging risks and open questions for the squad",
    "Packaging findings for the final {deliverable}",
)

_TOOL_COUNT = {Priority.LOW: 1, Priority.NORMAL: 2, Priority.HIGH: 3}


class EventStream:
    """Ordered events for one execute() call.

    Holds the engine's run slot until the stream is exhausted, closed,
    fails, or is garbage collected. Supports ``async with`` for
    deterministic release when a consumer stops early.
    """

    def __init__(
        self,
        command: str,
        events: AsyncGenerator[EngineEvent, None] | None,
        release: Callable[[EventStream], None],
    ) -> None:
        self.command = command
        self._events = events
        self._release = release

    @property
    def closed(self) -> bool:
        return self._events is None

    def __aiter__(self) -> EventStream:
        return self

    async def __anext__(self) -> EngineEvent:
        if self._events is None:
            raise StopAsyncIteration
        try:
            return await self._events.__anext__()
        except BaseException:
            # Exhaustion, failure and cancellation all end the stream.
            self._finish()
            raise

    async def aclose(self) -> None:
        """Stop early. A run closed before its result records nothing."""
        events = self._events
        if events is None:
            return
        try:
            await events.aclose()
        finally:
            self._finish()

    async def __aenter__(self) -> EventStream:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _finish(self) -> None:
        self._events = None
        self._release(self)

    def __del__(self) -> None:
        if self._events is not None:
            self._finish()


class MissionEngine:
    """Command interpreter front door plus mission state."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.config.validate()
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self._roster: tuple[Agent, ...] = self.config.roster
        self._tools: tuple[Tool, ...] = self.config.tools
        self._stack: list[StackEntry] = []
        # Newest first; the deque evicts the oldest mission at capacity.
        self._history: deque[Mission] = deque(maxlen=self.config.history_capacity)
        self._completed = 0
        self._mission_seq = 0
        self._stack_seq = 0
        # Weak so a stream dropped mid-iteration is collected and frees the slot.
        self._active: weakref.ref[EventStream] | None = None
        logger.info(
            "MissionEngine ready: %d agents, %d tools, history capacity %d",
            len(self._roster), len(self._tools), self.config.history_capacity,
        )

    # ── public surface ──────────────────────────────────────────────

    @property
    def busy(self) -> bool:
        return self._active_stream() is not None

    def execute(self, command: str) -> EventStream:
        """Submit one command and return its event stream.

        Raises ConcurrentExecutionError if the previous stream is still
        open. Blank input returns an already exhausted stream.
        """
        active = self._active_stream()
        if active is not None:
            logger.warning(
                "execute(%r) rejected: stream for %r still open",
                command, active.command,
            )
            raise ConcurrentExecutionError(active.command)

        parsed = parse_command(command, self.config.default_deliverable)
        if parsed.intent is Intent.EMPTY:
            return EventStream(parsed.raw, None, self._release)

        logger.debug("execute: %s %r", parsed.intent.value, parsed.raw)
        if parsed.intent is Intent.RUN:
            events = self._run_mission(parsed)
        else:
            events = self._answer(parsed)
        stream = EventStream(parsed.raw, events, self._release)
        self._active = weakref.ref(stream)
        return stream

    def get_snapshot(self) -> EngineSnapshot:
        """Immutable view of current state; stats are recomputed each call."""
        history = tuple(self._history)
        avg = (
            sum(len(m.agent_ids) for m in history) / len(history)
            if history else 0.0
        )
        return EngineSnapshot(
            agents=self._roster,
            stack=tuple(self._stack),
            history=history,
            stats=MissionStats(missions=self._completed, avg_agents=avg),
        )

    # ── dispatch ────────────────────────────────────────────────────

    def _active_stream(self) -> EventStream | None:
        return self._active() if self._active is not None else None

    def _release(self, stream: EventStream) -> None:
        # From __del__ the weak reference is already dead.
        current = self._active_stream()
        if current is None or current is stream:
            self._active = None

    async def _answer(self, parsed: ParsedCommand) -> AsyncGenerator[EngineEvent, None]:
        handlers = {
            Intent.AGENTS: self._agents_events,
            Intent.STACK_ADD: self._stack_add_events,
            Intent.STACK_LIST: self._stack_list_events,
            Intent.STACK_POP: self._stack_pop_events,
            Intent.STACK_CLEAR: self._stack_clear_events,
            Intent.STACK_USAGE: self._stack_usage_events,
            Intent.HISTORY: self._history_events,
            Intent.TOOLS: self._tools_events,
            Intent.HELP: self._help_events,
            Intent.CLEAR: self._clear_events,
            Intent.UNKNOWN: self._unknown_events,
        }
        for event in handlers[parsed.intent](parsed):
            yield event

    # ── informational commands ─────────────────────────────────────

    def _agents_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        return [
            EngineEvent(
                EventType.AGENT,
                headline=f"{agent.glyph} {agent.name}",
                body=f"{agent.role}\nid: {agent.agent_id}",
            )
            for agent in self._roster
        ]

    def _stack_add_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        self._stack_seq += 1
        entry = StackEntry(
            entry_id=f"S-{self._stack_seq:03d}",
            task=parsed.task,
            order=self._stack_seq,
        )
        self._stack.append(entry)
        logger.info("Stack push %s: %r", entry.entry_id, entry.task)
        return [EngineEvent(
            EventType.SYSTEM,
            headline=f"Queued {entry.entry_id}",
            body=f"{entry.task}\n{len(self._stack)} task(s) in stack",
        )]

    def _stack_list_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        if not self._stack:
            return [EngineEvent(
                EventType.SYSTEM,
                headline="Mission stack is empty",
                body="Queue work with `stack add <task>`",
            )]
        lines = [
            f"{index}. {entry.task}  ({entry.entry_id})"
            for index, entry in enumerate(self._stack, start=1)
        ]
        return [EngineEvent(
            EventType.SYSTEM,
            headline=f"Mission stack · {len(self._stack)} queued",
            body="\n".join(lines),
        )]

    def _stack_pop_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        if not self._stack:
            return [EngineEvent(
                EventType.WARNING,
                headline="Stack is empty",
                body="Nothing to pop.",
            )]
        entry = self._stack.pop()
        logger.info("Stack pop %s", entry.entry_id)
        return [EngineEvent(
            EventType.SYSTEM,
            headline=f"Popped {entry.entry_id}",
            body=f"{entry.task}\n{len(self._stack)} task(s) in stack",
        )]

    def _stack_clear_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        count = len(self._stack)
        self._stack.clear()
        logger.info("Stack cleared (%d entries)", count)
        return [EngineEvent(EventType.SYSTEM, headline=f"Cleared {count} task(s) from stack")]

    def _stack_usage_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        return [EngineEvent(
            EventType.WARNING,
            headline=f"Unrecognized stack command: {parsed.raw}",
            body=f"Usage: {STACK_USAGE}",
        )]

    def _history_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        if not self._history:
            return [EngineEvent(
                EventType.SYSTEM,
                headline="No missions yet",
                body="Missions will appear here after first run.",
            )]
        names = {agent.agent_id: agent.name for agent in self._roster}
        return [
            EngineEvent(
                EventType.RESULT,
                headline=f"{mission.mission_id} · {mission.task}",
                body=(
                    f"{mission.priority.value.upper()} · {mission.deliverable}\n"
                    f"Squad: {', '.join(names[a] for a in mission.agent_ids)}\n"
                    f"Completed {mission.completed_at:%Y-%m-%d %H:%M:%S} UTC"
                ),
            )
            for mission in self._history
        ]

    def _tools_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        return [
            EngineEvent(EventType.TOOL, headline=tool.name, body=tool.description)
            for tool in self._tools
        ]

    def _help_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        body = "\n".join(f"{name:<8} {desc}" for name, desc in COMMAND_HELP.items())
        return [EngineEvent(EventType.SYSTEM, headline="Available commands", body=body)]

    def _clear_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        return [EngineEvent(EventType.SYSTEM, body=CLEAR_SENTINEL)]

    def _unknown_events(self, parsed: ParsedCommand) -> list[EngineEvent]:
        return [EngineEvent(
            EventType.WARNING,
            headline=f"Unknown command: {parsed.raw}",
            body="Type `help` to view available commands.",
        )]

    # ── missions ───────────────────────────────────────────────────

    def _squad_size(self, parsed: ParsedCommand) -> int:
        size = 2
        if len(parsed.task.split()) >= 6:
            size += 1
        if parsed.priority is Priority.HIGH:
            size += 1
        elif parsed.priority is Priority.LOW:
            size -= 1
        if parsed.deliverable_set:
            size += 1
        return max(1, min(size, len(self._roster)))

    def _select_squad(self, parsed: ParsedCommand) -> list[Agent]:
        picked = set(self._rng.sample(range(len(self._roster)), self._squad_size(parsed)))
        return [agent for index, agent in enumerate(self._roster) if index in picked]

    async def _pause(self) -> None:
        base = self.config.step_delay_seconds
        if base <= 0:
            await asyncio.sleep(0)
            return
        jitter = self.config.step_jitter
        await asyncio.sleep(base * (1 + self._rng.uniform(-jitter, jitter)))

    def _step_line(self, agent: Agent, step: int, parsed: ParsedCommand) -> str:
        line = _STEP_LINES[step % len(_STEP_LINES)].format(
            task=parsed.task,
            deliverable=parsed.deliverable,
            priority=parsed.priority.value,
        )
        # Configured lines are plain text, never format templates.
        extra = self.config.agent_lines.get(agent.agent_id)
        if extra:
            line = self._rng.choice([line, *extra])
        return line

    async def _run_mission(self, parsed: ParsedCommand) -> AsyncGenerator[EngineEvent, None]:
        if not parsed.task:
            yield EngineEvent(
                EventType.WARNING,
                headline="Mission needs a task",
                body="Usage: " + COMMAND_HELP["run"],
            )
            return

        self._mission_seq += 1
        mission_id = f"M-{self._mission_seq:04d}"
        squad = self._select_squad(parsed)
        logger.info(
            "Mission %s accepted: task=%r priority=%s deliverable=%s squad=%s",
            mission_id, parsed.task, parsed.priority.value, parsed.deliverable,
            ",".join(a.agent_id for a in squad),
        )

        delivered = False
        try:
            await self._pause()
            yield EngineEvent(
                EventType.SYSTEM,
                headline=f"Mission {mission_id} accepted",
                body=(
                    f"Task: {parsed.task}\n"
                    f"Priority: {parsed.priority.value.upper()} · "
                    f"Deliverable: {parsed.deliverable}\n"
                    f"Squad: {', '.join(a.name for a in squad)}"
                ),
            )
            for note in parsed.warnings:
                yield EngineEvent(EventType.WARNING, headline=note)

            await self._pause()
            yield EngineEvent(EventType.DIVIDER, body="squad deployed")

            for step, agent in enumerate(squad):
                await self._pause()
                yield EngineEvent(
                    EventType.AGENT,
                    headline=f"{agent.glyph} {agent.name}",
                    body=(
                        f"{self._step_line(agent, step, parsed)}\n"
                        f"step {step + 1}/{len(squad)} · {agent.role}"
                    ),
                )

            tool_count = min(_TOOL_COUNT[parsed.priority], len(self._tools))
            for tool in self._rng.sample(self._tools, tool_count):
                caller = self._rng.choice(squad)
                latency = self._rng.randint(40, 900)
                await self._pause()
                yield EngineEvent(
                    EventType.TOOL,
                    headline=f"⚙ {tool.name}",
                    body=f"{tool.description}\ninvoked by {caller.name} · {latency}ms",
                )

            mission = Mission(
                mission_id=mission_id,
                task=parsed.task,
                priority=parsed.priority,
                deliverable=parsed.deliverable,
                agent_ids=tuple(a.agent_id for a in squad),
            )
            await self._pause()
            delivered = True
            yield EngineEvent(
                EventType.RESULT,
                headline=f"Mission {mission_id} complete · {mission.deliverable} ready",
                body=(
                    f"{len(squad)} agent(s) delivered a {parsed.priority.value}-priority "
                    f"{mission.deliverable} for \"{mission.task}\"."
                ),
            )
        finally:
            if delivered:
                self._commit(mission)
            else:
                logger.info("Mission %s abandoned before completion", mission_id)

    def _commit(self, mission: Mission) -> None:
        mission = dataclasses.replace(mission, completed_at=datetime.now(timezone.utc))
        self._history.appendleft(mission)
        self._completed += 1
        logger.info(
            "Mission %s recorded (history %d/%d, lifetime %d)",
            mission.mission_id, len(self._history),
            self.config.history_capacity, self._completed,
        )
