"""Console command parser.

Turns one raw input line into a ParsedCommand. Pure: no engine state
is read or written here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from hyperplex.engine.models import Priority

logger = logging.getLogger(__name__)

DEFAULT_DELIVERABLE = "brief"


class Intent(str, Enum):
    RUN = "run"
    AGENTS = "agents"
    STACK_ADD = "stack_add"
    STACK_LIST = "stack_list"
    STACK_POP = "stack_pop"
    STACK_CLEAR = "stack_clear"
    STACK_USAGE = "stack_usage"
    HISTORY = "history"
    TOOLS = "tools"
    HELP = "help"
    CLEAR = "clear"
    EMPTY = "empty"
    UNKNOWN = "unknown"


@dataclass
class ParsedCommand:
    """A classified console command."""

    intent: Intent
    raw: str
    task: str = ""
    priority: Priority = Priority.NORMAL
    deliverable: str = DEFAULT_DELIVERABLE
    # True when --deliverable was given with a usable value.
    deliverable_set: bool = False
    # Lenient-parsing notes, e.g. an invalid priority that fell back.
    warnings: list[str] = field(default_factory=list)


_SIMPLE_INTENTS = {
    "agents": Intent.AGENTS,
    "history": Intent.HISTORY,
    "tools": Intent.TOOLS,
    "help": Intent.HELP,
    "clear": Intent.CLEAR,
}

_STACK_INTENTS = {
    "list": Intent.STACK_LIST,
    "pop": Intent.STACK_POP,
    "clear": Intent.STACK_CLEAR,
}


def _parse_run(
    raw: str, tokens: list[str], default_deliverable: str,
) -> ParsedCommand:
    cmd = ParsedCommand(intent=Intent.RUN, raw=raw, deliverable=default_deliverable)
    words: list[str] = []
    for token in tokens:
        if not (token.startswith("--") and "=" in token):
            words.append(token)
            continue
        key, _, value = token[2:].partition("=")
        key = key.lower()
        if key == "priority":
            try:
                cmd.priority = Priority(value.strip().lower())
            except ValueError:
                cmd.warnings.append(
                    f"Unknown priority '{value}', using {Priority.NORMAL.value}"
                )
        elif key == "deliverable":
            if value.strip():
                cmd.deliverable = value.strip()
                cmd.deliverable_set = True
            else:
                cmd.warnings.append(
                    f"Empty deliverable, using '{default_deliverable}'"
                )
        else:
            cmd.warnings.append(f"Ignored unknown flag --{key}")
    cmd.task = " ".join(words)
    return cmd


def parse_command(
    text: str, default_deliverable: str = DEFAULT_DELIVERABLE,
) -> ParsedCommand:
    """Classify a console line.

    The command word is matched case-insensitively. Anything that is
    not a known command becomes Intent.UNKNOWN carrying the raw text;
    blank input becomes Intent.EMPTY.
    """
    stripped = text.strip()
    if not stripped:
        return ParsedCommand(intent=Intent.EMPTY, raw=stripped)

    parts = stripped.split()
    name = parts[0].lower()

    if name == "run":
        return _parse_run(stripped, parts[1:], default_deliverable)

    if name in _SIMPLE_INTENTS:
        return ParsedCommand(intent=_SIMPLE_INTENTS[name], raw=stripped)

    if name == "stack":
        if len(parts) == 1:
            return ParsedCommand(intent=Intent.STACK_LIST, raw=stripped)
        sub = parts[1].lower()
        if sub == "add":
            # Keep the task text verbatim, inner spacing included.
            rest = stripped.split(maxsplit=2)
            task = rest[2].strip() if len(rest) > 2 else ""
            if not task:
                return ParsedCommand(intent=Intent.STACK_USAGE, raw=stripped)
            return ParsedCommand(intent=Intent.STACK_ADD, raw=stripped, task=task)
        if sub in _STACK_INTENTS and len(parts) == 2:
            return ParsedCommand(intent=_STACK_INTENTS[sub], raw=stripped)
        return ParsedCommand(intent=Intent.STACK_USAGE, raw=stripped)

    logger.debug("parse_command: unrecognized input %r", stripped)
    return ParsedCommand(intent=Intent.UNKNOWN, raw=stripped)


COMMAND_HELP: dict[str, str] = {
    "run": "run <task> [--priority=low|normal|high] [--deliverable=LABEL] — dispatch a mission to the squad",
    "agents": "List the agent roster",
    "stack": "stack [list|add <task>|pop|clear] — manage the queued task stack",
    "history": "Show recently completed missions",
    "tools": "List the simulated tool surface",
    "help": "Show this help message",
    "clear": "Clear the transcript",
}

STACK_USAGE = "stack [list] · stack add <task> · stack pop · stack clear"
