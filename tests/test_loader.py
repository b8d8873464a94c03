"""Tests for reading Claude plugins and Claude home directories."""

import json

import pytest

from plugin_bridge.errors import SourceError
from plugin_bridge.loader import (
    load_claude_home,
    load_claude_plugin,
    load_commands,
    load_mcp_servers,
    parse_mcp_servers,
)


def test_load_plugin_manifest(sample_plugin):
    plugin = load_claude_plugin(sample_plugin)

    assert plugin.name == "sample-plugin"
    assert plugin.version == "1.0.0"
    assert plugin.root == sample_plugin.resolve()


def test_load_commands_namespaced(sample_plugin):
    """Verify nested command files get colon-joined names."""
    commands = {c.name: c for c in load_claude_plugin(sample_plugin).commands}

    assert set(commands) == {"deploy-docs", "plan_review", "workflows:review"}
    review = commands["workflows:review"]
    assert review.description == "Run a multi-agent review workflow"
    assert review.argument_hint == "[PR number]"
    assert review.body.startswith("Review the change.")
    assert commands["deploy-docs"].disable_model_invocation is True
    assert commands["plan_review"].disable_model_invocation is False


def test_load_agents(sample_plugin):
    agents = load_claude_plugin(sample_plugin).agents

    assert len(agents) == 1
    assert agents[0].name == "repo-research-analyst"
    assert agents[0].capabilities == ["Read code", "Summarize patterns"]
    assert agents[0].body == "You research repositories.\n"


def test_load_skills(sample_plugin):
    """Verify only directories containing SKILL.md are skills."""
    (sample_plugin / "skills" / "not-a-skill").mkdir()

    skills = load_claude_plugin(sample_plugin).skills

    assert [s.name for s in skills] == ["skill-one"]
    assert skills[0].source_dir == (sample_plugin / "skills" / "skill-one").resolve()


def test_load_plugin_mcp_servers(sample_plugin):
    servers = load_claude_plugin(sample_plugin).mcp_servers

    assert servers["context7"].url == "https://mcp.context7.com/mcp"
    assert servers["context7"].is_remote
    assert servers["local-tooling"].command == "echo"
    assert servers["local-tooling"].args == ["fixture"]
    assert servers["local-tooling"].is_command


def test_bare_mcp_file(sample_plugin):
    """Verify a .mcp.json without the mcpServers wrapper is accepted."""
    (sample_plugin / ".mcp.json").write_text(json.dumps({"solo": {"command": "solo"}}))

    servers = load_claude_plugin(sample_plugin).mcp_servers

    assert list(servers) == ["solo"]


def test_plugin_without_optional_parts(tmp_path):
    root = tmp_path / "empty-plugin"
    root.mkdir()

    plugin = load_claude_plugin(root)

    assert plugin.name == "empty-plugin"
    assert plugin.commands == []
    assert plugin.agents == []
    assert plugin.skills == []
    assert plugin.mcp_servers is None


def test_missing_plugin_root(tmp_path):
    with pytest.raises(SourceError):
        load_claude_plugin(tmp_path / "missing")


def test_invalid_mcp_json(sample_plugin):
    (sample_plugin / ".mcp.json").write_text("{oops")

    with pytest.raises(SourceError):
        load_claude_plugin(sample_plugin)


def test_load_claude_home(claude_home):
    """Verify skills and settings.json servers are read from a Claude home."""
    plugin = load_claude_home(claude_home)

    assert [s.name for s in plugin.skills] == ["skill-one"]
    assert set(plugin.mcp_servers) == {"context7", "local"}
    assert plugin.mcp_servers["local"].env == {"FOO": "bar"}


def test_claude_home_mcp_file_overrides_settings(claude_home):
    (claude_home / ".mcp.json").write_text(json.dumps({
        "mcpServers": {"local": {"command": "node", "args": ["server.js"]}}
    }))

    servers = load_claude_home(claude_home).mcp_servers

    assert servers["local"].command == "node"
    assert servers["local"].env is None
    assert "context7" in servers


def test_command_without_front_matter(tmp_path):
    commands_dir = tmp_path / "commands"
    commands_dir.mkdir()
    (commands_dir / "quick.md").write_text("Just do it.\n")

    commands = load_commands(commands_dir)

    assert commands[0].name == "quick"
    assert commands[0].description is None
    assert commands[0].body == "Just do it.\n"


def test_parse_mcp_servers_skips_non_objects():
    servers = parse_mcp_servers({"good": {"url": "https://example.com"}, "bad": "nope"})
    assert list(servers) == ["good"]


def test_load_mcp_servers_empty():
    assert load_mcp_servers(None, {}, {"theme": "dark"}) is None
