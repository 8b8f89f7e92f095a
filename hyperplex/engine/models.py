"""Core data models for the mission engine.

All dataclasses, enums, and type aliases. Single source of truth
to avoid circular imports.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Priority(str, Enum):
    """Mission priority accepted by ``run --priority=...``."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class EventType(str, Enum):
    """Closed set of event kinds streamed by the engine."""
    INPUT = "input"
    SYSTEM = "system"
    AGENT = "agent"
    TOOL = "tool"
    RESULT = "result"
    WARNING = "warning"
    ERROR = "error"
    DIVIDER = "divider"


# Body of a system event telling the presentation layer to drop its transcript.
CLEAR_SENTINEL = "__CLEAR__"


def _make_event_id() -> str:
    return str(uuid.uuid4())[:8]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Agent:
    """A named virtual collaborator from the fixed roster."""
    agent_id: str
    name: str
    role: str
    glyph: str = "◆"


@dataclass(frozen=True)
class Tool:
    """A simulated tool the squad can appear to invoke."""
    name: str
    description: str


@dataclass(frozen=True)
class Mission:
    """One completed unit of simulated work."""
    mission_id: str
    task: str
    priority: Priority
    deliverable: str
    agent_ids: tuple[str, ...]
    completed_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class StackEntry:
    """A queued task description that has not been run."""
    entry_id: str
    task: str
    order: int


@dataclass(frozen=True)
class EngineEvent:
    """One narrated step or informational line in the output stream."""
    type: EventType
    headline: str | None = None
    body: str | None = None
    id: str = field(default_factory=_make_event_id)

    @property
    def is_clear(self) -> bool:
        return self.type is EventType.SYSTEM and self.body == CLEAR_SENTINEL


@dataclass(frozen=True)
class MissionStats:
    """Derived statistics. ``avg_agents`` covers retained history only."""
    missions: int = 0
    avg_agents: float = 0.0


@dataclass(frozen=True)
class EngineSnapshot:
    """Immutable point-in-time view of engine state."""
    agents: tuple[Agent, ...]
    stack: tuple[StackEntry, ...]
    history: tuple[Mission, ...]
    stats: MissionStats
