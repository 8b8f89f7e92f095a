"""Exception hierarchy for the mission engine.

Usage mistakes in commands never raise; they are reported as warning
events. Only programmer errors and broken configuration end up here.
"""
from __future__ import annotations


class EngineError(Exception):
    """Base exception for all mission engine errors."""


class ConcurrentExecutionError(EngineError):
    """execute() was called while a previous event stream was still open."""
    def __init__(self, active_command: str):
        self.active_command = active_command
        super().__init__(
            f"Engine is busy with '{active_command}'; "
            f"drain or close that stream before submitting another command"
        )


class ConfigError(EngineError):
    """Configuration file or values could not be used."""


class RosterError(ConfigError):
    """The agent roster is empty or inconsistent."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid agent roster: {reason}")
