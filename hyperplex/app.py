"""Hyperplex CLI — main application entry point."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path


def _log_dir() -> Path:
    return Path(os.getenv("HYPERPLEX_LOG_DIR", str(Path.home() / ".hyperplex" / "logs")))


def configure_logging(level_name: str) -> Path:
    """Send logs to a rotating file; the terminal belongs to the TUI."""
    log_dir = _log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "hyperplex.log"

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    root.handlers.clear()
    file_handler = RotatingFileHandler(
        log_file, maxBytes=2_000_000, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s [pid=%(process)d] %(message)s"
    ))
    root.addHandler(file_handler)
    return log_file


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        prog="hyperplex",
        description="Hyperplex — terminal console for a simulated agent swarm",
    )
    parser.add_argument(
        "--config", metavar="PATH",
        help="YAML config file for engine settings, agents and tools",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for squad selection, narration and suggestions",
    )
    parser.add_argument(
        "--delay", type=float, default=None,
        help="Base pause between run events in seconds (0 disables)",
    )
    args = parser.parse_args()

    from hyperplex.engine.engine import MissionEngine
    from hyperplex.engine.errors import ConfigError
    from hyperplex.engine.yaml_config import load_config

    try:
        config = load_config(args.config)
        if args.seed is not None:
            config.seed = args.seed
        if args.delay is not None:
            config.step_delay_seconds = args.delay
        log_file = configure_logging(config.log_level)
        logging.getLogger(__name__).info(
            "Starting Hyperplex cwd=%s config=%s log=%s",
            Path.cwd(), args.config or "<none>", log_file,
        )
        engine = MissionEngine(config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    from hyperplex.tui.app import HyperplexApp

    app = HyperplexApp(engine=engine, suggestion_seed=config.seed)
    app.run()


if __name__ == "__main__":
    main()
