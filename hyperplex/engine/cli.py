"""Headless runner for the mission engine.

Usage:
    python -m hyperplex.engine.cli "agents" "run build onboarding --priority=high"
    python -m hyperplex.engine.cli --json --seed 7 --delay 0 "stack add ship docs" "stack"
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from rich.console import Console

from hyperplex.adapters.events import event_to_dict
from hyperplex.adapters.orchestrator import MissionBridge, is_clear_signal
from hyperplex.shared.formatters.event import render_event

from .engine import MissionEngine
from .errors import ConfigError
from .yaml_config import load_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hyperplex-run",
        description="Run Hyperplex console commands without the TUI",
    )
    parser.add_argument(
        "commands",
        nargs="+",
        metavar="COMMAND",
        help="Console commands, executed in order on one engine",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit one JSON object per event instead of styled text",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for squad selection and narration",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Base pause between run events in seconds (0 disables)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="YAML config file for engine settings, agents and tools",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


async def run_commands(
    engine: MissionEngine,
    commands: list[str],
    console: Console,
    as_json: bool = False,
) -> None:
    """Execute each command and print its events as they arrive."""
    bridge = MissionBridge(engine)
    for command in commands:
        async for event in bridge.submit(command):
            if as_json:
                console.out(json.dumps(event_to_dict(event), ensure_ascii=False), highlight=False)
            elif is_clear_signal(event):
                console.clear()
            else:
                console.print(render_event(event))

    stats = bridge.snapshot().stats
    if as_json:
        console.out(
            json.dumps({"event": "stats", "missions": stats.missions, "avg_agents": stats.avg_agents}),
            highlight=False,
        )
    else:
        console.rule(
            f"missions {stats.missions:02d} · avg agents {stats.avg_agents:.1f}",
            style="grey35",
        )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config)
        if args.seed is not None:
            config.seed = args.seed
        if args.delay is not None:
            config.step_delay_seconds = args.delay
        # basicConfig is a no-op when handlers exist, so set the level directly.
        logging.getLogger().setLevel(
            logging.DEBUG if args.verbose
            else getattr(logging, config.log_level.upper(), logging.WARNING)
        )
        engine = MissionEngine(config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    console = Console(highlight=False)
    try:
        asyncio.run(run_commands(engine, args.commands, console, as_json=args.json))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
