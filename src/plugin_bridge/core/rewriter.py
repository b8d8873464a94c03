"""
Content Rewriter
Rewrites Claude-specific instructions in command bodies into a target tool's vocabulary.

Rules run in a fixed order; each one receives the previous rule's output:
1. agent-invocation    Task name(args) -> explicit subagent instruction
2. tool-names          AskUserQuestion / TodoWrite / TodoRead -> target tools
3. command-references  /workflows:plan -> /workflows-plan
4. compatibility-note  appended when the body mentions MCP
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from .names import normalize_name

DEFAULT_COMMAND_DENY_LIST: Tuple[str, ...] = ("dev", "tmp", "etc", "usr", "var", "bin", "home")

_RE_TASK_CALL = re.compile(r"^(\s*-?\s*)Task\s+([a-z][a-z0-9-]*)\(([^)]+)\)", re.MULTILINE)
_RE_COMMAND_REF = re.compile(r"(?<![:\w])/([a-z][a-z0-9_:-]*?)(?=[\s,.\"')\]}`]|$)")
_RE_MCP_MENTION = re.compile(r"\bmcp\b", re.IGNORECASE)
_RE_WHITESPACE = re.compile(r"\s+")

SKILL_PREFIX = "skill:"
PROMPTS_PREFIX = "prompts:"


@dataclass(frozen=True)
class Vocabulary:
    """Target-tool equivalents for Claude primitives."""
    ask_user: str
    todo_write: str
    todo_read: str
    compatibility_note: str = ""


@dataclass(frozen=True)
class RewriteRule:
    name: str
    apply: Callable[[str], str]


PI_COMPATIBILITY_NOTE = "\n".join([
    "",
    "## Pi + MCPorter note",
    "For MCP access in Pi, use MCPorter via the generated tools:",
    "- `mcporter_list` to inspect available MCP tools",
    "- `mcporter_call` to invoke a tool",
    "",
])

PI_VOCABULARY = Vocabulary(
    ask_user="ask_user_question",
    todo_write="file-based todos (todos/ + /skill:file-todos)",
    todo_read="file-based todos (todos/ + /skill:file-todos)",
    compatibility_note=PI_COMPATIBILITY_NOTE,
)


class ContentRewriter:
    """Ordered rule chain. Call ``rewrite`` exactly once per body."""

    def __init__(self, vocabulary: Vocabulary, command_deny_list: Iterable[str] = DEFAULT_COMMAND_DENY_LIST):
        self.vocabulary = vocabulary
        self.command_deny_list = frozenset(command_deny_list)
        self.rules: List[RewriteRule] = [
            RewriteRule("agent-invocation", rewrite_task_calls),
            RewriteRule("tool-names", self._replace_tool_names),
            RewriteRule("command-references", self._rewrite_command_references),
            RewriteRule("compatibility-note", self._append_compatibility_note),
        ]

    def rewrite(self, body: str) -> str:
        result = body
        for rule in self.rules:
            result = rule.apply(result)
        return result

    def _replace_tool_names(self, text: str) -> str:
        text = re.sub(r"\bAskUserQuestion\b", self.vocabulary.ask_user, text)
        text = re.sub(r"\bTodoWrite\b", self.vocabulary.todo_write, text)
        text = re.sub(r"\bTodoRead\b", self.vocabulary.todo_read, text)
        return text

    def _rewrite_command_references(self, text: str) -> str:
        def replace(match: "re.Match[str]") -> str:
            command = match.group(1)
            if "/" in command or command in self.command_deny_list:
                return match.group(0)
            if command.startswith(SKILL_PREFIX):
                return f"/{SKILL_PREFIX}{normalize_name(command[len(SKILL_PREFIX):])}"
            if command.startswith(PROMPTS_PREFIX):
                command = command[len(PROMPTS_PREFIX):]
            return f"/{normalize_name(command)}"

        return _RE_COMMAND_REF.sub(replace, text)

    def _append_compatibility_note(self, text: str) -> str:
        note = self.vocabulary.compatibility_note
        if not note or not _RE_MCP_MENTION.search(text):
            return text
        return text + note


def rewrite_task_calls(text: str) -> str:
    """``- Task repo-analyst(feature)`` -> ``- Run subagent with agent="repo-analyst" and task="feature".``"""

    def replace(match: "re.Match[str]") -> str:
        prefix, agent_name, args = match.groups()
        task = _RE_WHITESPACE.sub(" ", args.strip())
        return f'{prefix}Run subagent with agent="{normalize_name(agent_name)}" and task="{task}".'

    return _RE_TASK_CALL.sub(replace, text)
