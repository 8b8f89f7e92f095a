"""Bridge between the mission engine and console frontends.

Wraps the consumption loop every frontend needs: echo the submitted
command, relay engine events in order, and turn anything the engine
raises into a transcript-friendly error event.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from hyperplex.engine.engine import MissionEngine
from hyperplex.engine.errors import EngineError
from hyperplex.engine.models import EngineEvent, EngineSnapshot, EventType

logger = logging.getLogger(__name__)

RUNTIME_FAILURE_HEADLINE = "Runtime failure"
RUNTIME_FAILURE_FALLBACK = "Unknown error encountered while processing command."


def is_clear_signal(event: EngineEvent) -> bool:
    """True when the frontend should discard its transcript."""
    return event.is_clear


class MissionBridge:
    """Feeds commands to a MissionEngine on behalf of a frontend."""

    def __init__(self, engine: MissionEngine | None = None) -> None:
        self.engine = engine or MissionEngine()

    @property
    def busy(self) -> bool:
        return self.engine.busy

    def snapshot(self) -> EngineSnapshot:
        return self.engine.get_snapshot()

    async def submit(self, command: str) -> AsyncIterator[EngineEvent]:
        """Yield the input echo followed by the engine's events.

        Blank input yields nothing. Errors raised by the engine become a
        single ERROR event; the bridge itself never raises them.
        """
        if not command.strip():
            return
        yield EngineEvent(EventType.INPUT, body=command)
        try:
            stream = self.engine.execute(command)
            async with stream:
                async for event in stream:
                    yield event
        except EngineError as exc:
            logger.warning("Command %r failed: %s", command, exc)
            yield self._failure(str(exc))
        except Exception as exc:
            logger.exception("Unexpected failure while running %r", command)
            yield self._failure(str(exc))

    @staticmethod
    def _failure(message: str) -> EngineEvent:
        return EngineEvent(
            EventType.ERROR,
            headline=RUNTIME_FAILURE_HEADLINE,
            body=message or RUNTIME_FAILURE_FALLBACK,
        )
