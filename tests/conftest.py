"""Shared fixtures for tests."""

import json

import pytest


@pytest.fixture
def sample_plugin(tmp_path):
    """Create a minimal Claude plugin with commands, agents, skills and MCP servers."""
    root = tmp_path / "sample-plugin"
    (root / ".claude-plugin").mkdir(parents=True)
    (root / "commands" / "workflows").mkdir(parents=True)
    (root / "agents").mkdir(parents=True)
    (root / "skills" / "skill-one").mkdir(parents=True)

    (root / ".claude-plugin" / "plugin.json").write_text(
        json.dumps({"name": "sample-plugin", "version": "1.0.0"})
    )

    (root / "commands" / "workflows" / "review.md").write_text(
        "---\n"
        "description: Run a multi-agent review workflow\n"
        "argument-hint: \"[PR number]\"\n"
        "---\n\n"
        "Review the change.\n"
        "- Task repo-research-analyst(feature_description)\n"
        "Then run /workflows:work.\n"
    )
    (root / "commands" / "plan_review.md").write_text(
        "---\ndescription: Review a plan\n---\n\nAsk with AskUserQuestion.\n"
    )
    (root / "commands" / "deploy-docs.md").write_text(
        "---\ndescription: Deploy docs\ndisable-model-invocation: true\n---\n\nDeploy.\n"
    )

    (root / "agents" / "repo-research-analyst.md").write_text(
        "---\n"
        "name: repo-research-analyst\n"
        "description: Researches repository conventions\n"
        "capabilities:\n"
        "  - Read code\n"
        "  - Summarize patterns\n"
        "---\n\n"
        "You research repositories.\n"
    )

    (root / "skills" / "skill-one" / "SKILL.md").write_text(
        "---\nname: skill-one\ndescription: Sample skill\n---\n\n# Skill One\n"
    )

    mcp_config = {
        "mcpServers": {
            "context7": {"url": "https://mcp.context7.com/mcp"},
            "local-tooling": {"command": "echo", "args": ["fixture"]},
        }
    }
    (root / ".mcp.json").write_text(json.dumps(mcp_config, indent=2))

    return root


@pytest.fixture
def claude_home(tmp_path):
    """Create a minimal ~/.claude with one skill and MCP servers in settings.json."""
    home = tmp_path / "claude-home"
    skill_dir = home / "skills" / "skill-one"
    skill_dir.mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text("---\nname: skill-one\n---\n\n# Skill One\n")

    settings = {
        "theme": "dark",
        "mcpServers": {
            "context7": {"url": "https://mcp.context7.com/mcp"},
            "local": {"command": "echo", "args": ["hello"], "env": {"FOO": "bar"}},
        },
    }
    (home / "settings.json").write_text(json.dumps(settings, indent=2))
    return home
