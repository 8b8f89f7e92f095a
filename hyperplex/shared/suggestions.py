"""Command suggestions offered under the console prompt."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class Suggestion:
    label: str
    command: str


SUGGESTION_CATALOG: tuple[Suggestion, ...] = (
    Suggestion(
        "Autopilot onboarding flow",
        "run build frictionless onboarding --priority=high --deliverable=plan",
    ),
    Suggestion("Inspect agent swarm", "agents"),
    Suggestion("Queue growth experiments", "stack add growth experiments roadmap"),
    Suggestion("Review recent wins", "history"),
    Suggestion("Plugin surface", "tools"),
)


def rotate_suggestions(
    rng: random.Random,
    count: int = 3,
    catalog: tuple[Suggestion, ...] = SUGGESTION_CATALOG,
) -> list[Suggestion]:
    """Pick *count* consecutive catalog entries from a random offset."""
    if not catalog:
        return []
    start = rng.randrange(len(catalog))
    return [catalog[(start + i) % len(catalog)] for i in range(min(count, len(catalog)))]
