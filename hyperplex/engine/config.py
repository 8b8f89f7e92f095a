"""Configuration loaded from environment variables.

All settings have sensible defaults. Override via HYPERPLEX_* env vars.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .errors import ConfigError, RosterError
from .models import Agent, Tool

logger = logging.getLogger(__name__)


DEFAULT_ROSTER: tuple[Agent, ...] = (
    Agent("atlas", "Atlas", "Mission planner · decomposes goals into steps", "🧭"),
    Agent("forge", "Forge", "Builder · drafts implementations and prototypes", "🛠"),
    Agent("lens", "Lens", "Research analyst · gathers context and signals", "🔍"),
    Agent("sentinel", "Sentinel", "Reviewer · stress-tests risks and quality", "🛡"),
    Agent("echo", "Echo", "Narrator · packages findings for stakeholders", "📣"),
)

DEFAULT_TOOLS: tuple[Tool, ...] = (
    Tool("autoplan", "Breaks a goal into an ordered milestone plan"),
    Tool("repo.scan", "Maps modules, owners and hotspots in a codebase"),
    Tool("web.research", "Collects market and competitor signals"),
    Tool("sandbox.exec", "Dry-runs snippets in an isolated sandbox"),
    Tool("metrics.probe", "Pulls funnel and usage telemetry"),
    Tool("docs.compose", "Drafts briefs, specs and release notes"),
)


def validate_roster(agents: tuple[Agent, ...] | list[Agent]) -> tuple[Agent, ...]:
    """Return the roster as a tuple, raising RosterError when unusable."""
    if not agents:
        raise RosterError("at least one agent is required")
    seen: set[str] = set()
    for agent in agents:
        if not agent.agent_id or not agent.name:
            raise RosterError("every agent needs an id and a name")
        if agent.agent_id in seen:
            raise RosterError(f"duplicate agent id '{agent.agent_id}'")
        seen.add(agent.agent_id)
    return tuple(agents)


@dataclass
class EngineConfig:
    """Mission engine configuration."""

    # Fixed for the lifetime of an engine built from this config.
    roster: tuple[Agent, ...] = DEFAULT_ROSTER
    tools: tuple[Tool, ...] = DEFAULT_TOOLS

    # Most-recent-N missions kept in history.
    history_capacity: int = 12

    # Base pause before each event of a run; 0 disables pacing.
    step_delay_seconds: float = 0.35
    # Fraction of the base delay added or removed at random.
    step_jitter: float = 0.5

    default_deliverable: str = "brief"

    # Seed for squad selection and narration. None means nondeterministic.
    seed: int | None = None

    log_level: str = "INFO"

    # Extra narration lines per agent id, layered over the built-ins.
    agent_lines: dict[str, list[str]] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise ConfigError if the values cannot drive an engine."""
        self.roster = validate_roster(self.roster)
        if self.history_capacity < 1:
            raise ConfigError(
                f"history_capacity must be at least 1, got {self.history_capacity}"
            )
        if self.step_delay_seconds < 0:
            raise ConfigError(
                f"step_delay_seconds cannot be negative, got {self.step_delay_seconds}"
            )
        if not 0.0 <= self.step_jitter <= 1.0:
            raise ConfigError(
                f"step_jitter must be within [0, 1], got {self.step_jitter}"
            )
        if not self.default_deliverable.strip():
            raise ConfigError("default_deliverable cannot be blank")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Load configuration from HYPERPLEX_* environment variables."""
        hp_vars = {
            k: v for k, v in os.environ.items() if k.startswith("HYPERPLEX_")
        }
        if hp_vars:
            logger.info(
                "EngineConfig.from_env: HYPERPLEX_* env overrides: %s",
                ", ".join(f"{k}={v}" for k, v in sorted(hp_vars.items())),
            )
        else:
            logger.debug("EngineConfig.from_env: no HYPERPLEX_* env vars set, using defaults")

        seed_raw = os.getenv("HYPERPLEX_SEED", "").strip()
        try:
            config = cls(
                history_capacity=int(os.getenv(
                    "HYPERPLEX_HISTORY_CAPACITY", str(cls.history_capacity)
                )),
                step_delay_seconds=float(os.getenv(
                    "HYPERPLEX_STEP_DELAY", str(cls.step_delay_seconds)
                )),
                default_deliverable=os.getenv(
                    "HYPERPLEX_DEFAULT_DELIVERABLE", cls.default_deliverable
                ),
                seed=int(seed_raw) if seed_raw else None,
                log_level=os.getenv("HYPERPLEX_LOG_LEVEL", cls.log_level).upper(),
            )
        except ValueError as exc:
            raise ConfigError(f"Bad HYPERPLEX_* environment value: {exc}") from exc
        logger.info(
            "EngineConfig.from_env: capacity=%d delay=%.2fs seed=%s log_level=%s",
            config.history_capacity, config.step_delay_seconds,
            config.seed, config.log_level,
        )
        return config
