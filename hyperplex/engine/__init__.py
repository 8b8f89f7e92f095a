"""Hyperplex mission engine — simulated multi-agent command console core."""
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
from .config import DEFAULT_ROSTER, DEFAULT_TOOLS, EngineConfig
from .errors import (
    ConcurrentExecutionError,
    ConfigError,
    EngineError,
    RosterError,
)

__all__ = [
    # Core engine (lazy import to avoid circular deps)
    "MissionEngine",
    "EventStream",
    # Models
    "Agent",
    "CLEAR_SENTINEL",
    "EngineEvent",
    "EngineSnapshot",
    "EventType",
    "Mission",
    "MissionStats",
    "Priority",
    "StackEntry",
    "Tool",
    # Config
    "DEFAULT_ROSTER",
    "DEFAULT_TOOLS",
    "EngineConfig",
    # YAML config (lazy import)
    "load_yaml_config",
    # Errors
    "ConcurrentExecutionError",
    "ConfigError",
    "EngineError",
    "RosterError",
]


def __getattr__(name: str):
    if name == "MissionEngine":
        from .engine import MissionEngine
        return MissionEngine
    if name == "EventStream":
        from .engine import EventStream
        return EventStream
    if name == "load_yaml_config":
        from .yaml_config import load_yaml_config
        return load_yaml_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
