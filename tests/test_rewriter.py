"""Tests for rewriting Claude-specific instructions into Pi vocabulary."""

import pytest

from plugin_bridge.core.rewriter import (
    PI_VOCABULARY,
    ContentRewriter,
    rewrite_task_calls,
)

NOTE_HEADING = "## Pi + MCPorter note"


@pytest.fixture
def rewriter():
    return ContentRewriter(PI_VOCABULARY)


def test_rules_run_in_fixed_order(rewriter):
    """Verify the rule chain order."""
    assert [rule.name for rule in rewriter.rules] == [
        "agent-invocation",
        "tool-names",
        "command-references",
        "compatibility-note",
    ]


def test_task_call_becomes_subagent_instruction():
    """Verify Task name(args) keeps its list prefix and collapses whitespace."""
    text = "Steps:\n  - Task repo-research-analyst(find   the\tconventions)\n"

    result = rewrite_task_calls(text)

    assert result == (
        'Steps:\n  - Run subagent with agent="repo-research-analyst" '
        'and task="find the conventions".\n'
    )


def test_task_call_requires_lowercase_agent():
    """Verify capitalized names are not treated as agent invocations."""
    text = "Task Planner(do it)"
    assert rewrite_task_calls(text) == text


def test_multiple_task_calls(rewriter):
    text = "- Task alpha(one)\n- Task beta(two)"

    result = rewriter.rewrite(text)

    assert 'agent="alpha" and task="one"' in result
    assert 'agent="beta" and task="two"' in result
    assert "Task " not in result


def test_tool_names_replaced(rewriter):
    """Verify Claude tool names map to Pi equivalents on word boundaries."""
    result = rewriter.rewrite("Use AskUserQuestion, then TodoWrite and TodoRead.")

    assert "ask_user_question" in result
    assert "AskUserQuestion" not in result
    assert "TodoWrite" not in result
    assert "TodoRead" not in result
    assert result.count("file-based todos (todos/ + /skill:file-todos)") == 2


def test_tool_names_inside_words_untouched(rewriter):
    text = "AskUserQuestions and MyTodoWrite stay"
    assert rewriter.rewrite(text) == text


def test_command_references_normalized(rewriter):
    """Verify namespaced slash commands become flat prompt names."""
    result = rewriter.rewrite("Then use /workflows:work and /prompts:deepen-plan.")

    assert result == "Then use /workflows-work and /deepen-plan."


def test_skill_reference_keeps_prefix(rewriter):
    assert rewriter.rewrite("Load /skill:my:skill first") == "Load /skill:my-skill first"


@pytest.mark.parametrize("text", [
    "Write to /tmp then",
    "Pipe into /dev/null",
    "See /usr/local/bin/tool",
    "Edit path/to:thing here",
    "Open https://example.com/docs",
    "Check /Users/me",
    "a / b",
])
def test_paths_and_urls_untouched(rewriter, text):
    """Verify filesystem paths, URLs and bare slashes are left alone."""
    assert rewriter.rewrite(text) == text


def test_custom_deny_list():
    """Verify a configured deny-list keeps matching references verbatim."""
    default = ContentRewriter(PI_VOCABULARY)
    custom = ContentRewriter(PI_VOCABULARY, command_deny_list=["workflows:plan"])

    assert default.rewrite("Run /workflows:plan now") == "Run /workflows-plan now"
    assert custom.rewrite("Run /workflows:plan now") == "Run /workflows:plan now"


def test_compatibility_note_appended_once(rewriter):
    """Verify the MCPorter note follows bodies that mention MCP."""
    result = rewriter.rewrite("Use the MCP server to fetch docs.")

    assert result.startswith("Use the MCP server to fetch docs.")
    assert result.count(NOTE_HEADING) == 1
    assert "mcporter_list" in result
    assert "mcporter_call" in result


def test_compatibility_note_requires_word_match(rewriter):
    text = "The mcpserver binary and MCPorter itself"
    assert NOTE_HEADING not in rewriter.rewrite(text)


def test_rewrite_without_mcp_is_stable(rewriter):
    """Verify rewriting an already-rewritten body changes nothing."""
    text = (
        "- Task repo-research-analyst(feature)\n"
        "Ask with AskUserQuestion and track with TodoWrite.\n"
        "Continue with /workflows:review, then /skill:file-todos.\n"
    )

    once = rewriter.rewrite(text)

    assert rewriter.rewrite(once) == once


def test_rewrite_is_not_idempotent_with_note(rewriter):
    """Verify the note is appended on each call, so callers rewrite once."""
    twice = rewriter.rewrite(rewriter.rewrite("mcp"))
    assert twice.count(NOTE_HEADING) == 2
