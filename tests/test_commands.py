from hyperplex.engine.models import Priority
from hyperplex.shared.commands import COMMAND_HELP, Intent, parse_command


def test_run_extracts_task_priority_and_deliverable() -> None:
    cmd = parse_command("run build onboarding --priority=high --deliverable=plan")
    assert cmd.intent is Intent.RUN
    assert cmd.task == "build onboarding"
    assert cmd.priority is Priority.HIGH
    assert cmd.deliverable == "plan"
    assert cmd.deliverable_set is True
    assert cmd.warnings == []


def test_run_flags_are_order_independent() -> None:
    cmd = parse_command("run --deliverable=report audit --priority=LOW the funnel")
    assert cmd.task == "audit the funnel"
    assert cmd.priority is Priority.LOW
    assert cmd.deliverable == "report"


def test_run_defaults_when_flags_omitted() -> None:
    cmd = parse_command("run ship it")
    assert cmd.priority is Priority.NORMAL
    assert cmd.deliverable == "brief"
    assert cmd.deliverable_set is False


def test_invalid_priority_falls_back_with_warning() -> None:
    cmd = parse_command("run ship it --priority=urgent")
    assert cmd.intent is Intent.RUN
    assert cmd.priority is Priority.NORMAL
    assert len(cmd.warnings) == 1
    assert "urgent" in cmd.warnings[0]


def test_empty_deliverable_falls_back_with_warning() -> None:
    cmd = parse_command("run ship it --deliverable=", default_deliverable="memo")
    assert cmd.deliverable == "memo"
    assert cmd.deliverable_set is False
    assert cmd.warnings


def test_unknown_flag_is_stripped_and_reported() -> None:
    cmd = parse_command("run ship it --color=blue")
    assert cmd.task == "ship it"
    assert cmd.warnings == ["Ignored unknown flag --color"]


def test_bare_double_dash_words_stay_in_task() -> None:
    cmd = parse_command("run migrate --dry-run")
    assert cmd.task == "migrate --dry-run"


def test_command_word_is_case_insensitive() -> None:
    assert parse_command("AGENTS").intent is Intent.AGENTS
    assert parse_command("History").intent is Intent.HISTORY
    assert parse_command("RUN x").intent is Intent.RUN


def test_simple_commands_ignore_trailing_words() -> None:
    assert parse_command("tools please").intent is Intent.TOOLS
    assert parse_command("clear all").intent is Intent.CLEAR
    assert parse_command("help me").intent is Intent.HELP


def test_stack_add_keeps_task_text_verbatim() -> None:
    cmd = parse_command("Stack ADD ship  onboarding v2 ")
    assert cmd.intent is Intent.STACK_ADD
    assert cmd.task == "ship  onboarding v2"


def test_stack_subcommands() -> None:
    assert parse_command("stack").intent is Intent.STACK_LIST
    assert parse_command("stack list").intent is Intent.STACK_LIST
    assert parse_command("stack pop").intent is Intent.STACK_POP
    assert parse_command("stack clear").intent is Intent.STACK_CLEAR


def test_stack_usage_errors() -> None:
    assert parse_command("stack add").intent is Intent.STACK_USAGE
    assert parse_command("stack add    ").intent is Intent.STACK_USAGE
    assert parse_command("stack shuffle").intent is Intent.STACK_USAGE
    assert parse_command("stack pop twice").intent is Intent.STACK_USAGE


def test_blank_and_unknown_input() -> None:
    assert parse_command("").intent is Intent.EMPTY
    assert parse_command("   \t ").intent is Intent.EMPTY
    cmd = parse_command("  deploy now ")
    assert cmd.intent is Intent.UNKNOWN
    assert cmd.raw == "deploy now"


def test_prefix_must_be_a_whole_word() -> None:
    assert parse_command("runx build").intent is Intent.UNKNOWN
    assert parse_command("agentsx").intent is Intent.UNKNOWN


def test_help_covers_every_top_level_command() -> None:
    assert set(COMMAND_HELP) == {"run", "agents", "stack", "history", "tools", "help", "clear"}
