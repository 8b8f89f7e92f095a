"""YAML configuration loader.

Loads a single YAML file layered over the HYPERPLEX_* environment
defaults. Every section is optional.

Example YAML:
    engine:
      history_capacity: 20
      step_delay_seconds: 0.2
      default_deliverable: plan
      seed: 7

    agents:
      - id: atlas
        name: Atlas
        role: Mission planner
        glyph: "🧭"
        lines:
          - "Sequencing the critical path"
      - id: forge
        name: Forge
        role: Builder

    tools:
      autoplan: Breaks a goal into an ordered milestone plan
      repo.scan: Maps modules, owners and hotspots
"""
from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import yaml

from .config import EngineConfig
from .errors import ConfigError
from .models import Agent, Tool

logger = logging.getLogger(__name__)


def _parse_agents(raw: Any) -> tuple[tuple[Agent, ...], dict[str, list[str]]]:
    """Parse the ``agents:`` list into roster entries and narration lines."""
    if not isinstance(raw, list):
        raise ConfigError("'agents' must be a list of agent mappings")
    agents: list[Agent] = []
    lines: dict[str, list[str]] = {}
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ConfigError(f"agents[{index}] must be a mapping")
        try:
            agent_id = str(item["id"])
            name = str(item["name"])
        except KeyError as exc:
            raise ConfigError(
                f"agents[{index}] is missing required key {exc.args[0]!r}"
            ) from exc
        agents.append(Agent(
            agent_id=agent_id,
            name=name,
            role=str(item.get("role", "")),
            glyph=str(item.get("glyph", "◆")),
        ))
        extra = item.get("lines") or []
        if extra:
            lines[agent_id] = [str(line) for line in extra]
    return tuple(agents), lines


def _parse_tools(raw: Any) -> tuple[Tool, ...]:
    if not isinstance(raw, dict) or not raw:
        raise ConfigError("'tools' must be a non-empty mapping of name: description")
    return tuple(Tool(str(name), str(desc or "")) for name, desc in raw.items())


def load_yaml_config(path: str | Path, base: EngineConfig | None = None) -> EngineConfig:
    """Load and parse a YAML config file into a validated EngineConfig.

    Values not present in the file keep those of *base* (by default
    ``EngineConfig.from_env()``).
    """
    path = Path(path)
    logger.info("load_yaml_config: loading %s (exists=%s)", path, path.exists())
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except yaml.YAMLError as exc:
        logger.error("load_yaml_config: YAML parse error in %s: %s", path, exc)
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    logger.info(
        "Parsed YAML config %s — sections: %s",
        path.name, ", ".join(sorted(raw)) if raw else "(empty)",
    )

    config = base if base is not None else EngineConfig.from_env()
    updates: dict[str, Any] = {}

    engine_raw = raw.get("engine") or {}
    if not isinstance(engine_raw, dict):
        raise ConfigError("'engine' must be a mapping")
    try:
        if "history_capacity" in engine_raw:
            updates["history_capacity"] = int(engine_raw["history_capacity"])
        if "step_delay_seconds" in engine_raw:
            updates["step_delay_seconds"] = float(engine_raw["step_delay_seconds"])
        if "step_jitter" in engine_raw:
            updates["step_jitter"] = float(engine_raw["step_jitter"])
        if "seed" in engine_raw:
            seed = engine_raw["seed"]
            updates["seed"] = None if seed is None else int(seed)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Bad value in 'engine' section: {exc}") from exc
    if "default_deliverable" in engine_raw:
        updates["default_deliverable"] = str(engine_raw["default_deliverable"])
    if "log_level" in engine_raw:
        updates["log_level"] = str(engine_raw["log_level"]).upper()

    if "agents" in raw:
        updates["roster"], updates["agent_lines"] = _parse_agents(raw["agents"])
    if "tools" in raw:
        updates["tools"] = _parse_tools(raw["tools"])

    config = dataclasses.replace(config, **updates)
    config.validate()
    logger.info(
        "load_yaml_config: %d agents, %d tools, capacity=%d",
        len(config.roster), len(config.tools), config.history_capacity,
    )
    return config


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Environment config, with *path* layered on top when given."""
    if path is None:
        config = EngineConfig.from_env()
        config.validate()
        return config
    return load_yaml_config(path)
