"""Adapters package - Bridge between engine and UI frontends.

This package contains the mission bridge and event serialization that
connect the engine to the TUI and the headless runner.
"""
from __future__ import annotations

__all__ = [
    "MissionBridge",
    "is_clear_signal",
    "event_to_dict",
    "dict_to_event",
]

from hyperplex.adapters.events import dict_to_event, event_to_dict
from hyperplex.adapters.orchestrator import MissionBridge, is_clear_signal
