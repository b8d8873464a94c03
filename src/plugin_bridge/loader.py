"""
Source Loader
Reads a Claude plugin root or a Claude home directory into a SourcePlugin.

Plugin layout:
- .claude-plugin/plugin.json  (name, version, optional mcpServers)
- commands/**/*.md            (nested paths become namespaced names: workflows/plan.md -> workflows:plan)
- agents/**/*.md
- skills/<name>/SKILL.md
- .mcp.json

Claude home (~/.claude) uses the same directories, with MCP servers read
from settings.json and .mcp.json.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .core.types import ClaudeAgent, ClaudeCommand, ClaudeSkill, McpServerSpec, SourcePlugin
from .errors import SourceError
from .utils import extract_yaml_frontmatter, logger

MANIFEST_PATH = Path(".claude-plugin") / "plugin.json"


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Cannot read {path}: {e}", details={"path": str(path)}) from e


def _read_json(path: Path) -> Optional[Dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise SourceError(f"Invalid JSON in {path}: {e}", details={"path": str(path)}) from e
    return data if isinstance(data, dict) else None


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


# =============================================================================
# COMMANDS / AGENTS / SKILLS
# =============================================================================


def load_commands(commands_dir: Path) -> List[ClaudeCommand]:
    commands = []
    if not commands_dir.is_dir():
        return commands

    for path in sorted(commands_dir.rglob("*.md")):
        metadata, body = extract_yaml_frontmatter(_read_text(path))
        metadata = metadata or {}
        relative = path.relative_to(commands_dir).with_suffix("")
        commands.append(ClaudeCommand(
            name=str(metadata.get("name") or ":".join(relative.parts)),
            description=_optional_str(metadata.get("description")),
            body=body,
            argument_hint=_optional_str(metadata.get("argument-hint")),
            disable_model_invocation=_flag(metadata.get("disable-model-invocation")),
            source_path=path,
        ))
    return commands


def load_agents(agents_dir: Path) -> List[ClaudeAgent]:
    agents = []
    if not agents_dir.is_dir():
        return agents

    for path in sorted(agents_dir.rglob("*.md")):
        metadata, body = extract_yaml_frontmatter(_read_text(path))
        metadata = metadata or {}
        agents.append(ClaudeAgent(
            name=str(metadata.get("name") or path.stem),
            description=_optional_str(metadata.get("description")),
            body=body,
            capabilities=_string_list(metadata.get("capabilities")),
            source_path=path,
        ))
    return agents


def load_skills(skills_dir: Path) -> List[ClaudeSkill]:
    skills = []
    if not skills_dir.is_dir():
        return skills

    for skill_dir in sorted(skills_dir.iterdir()):
        skill_file = skill_dir / "SKILL.md"
        if skill_dir.is_dir() and skill_file.is_file():
            skills.append(ClaudeSkill(name=skill_dir.name, source_dir=skill_dir.resolve(), skill_path=skill_file))
    return skills


# =============================================================================
# MCP SERVERS
# =============================================================================


def parse_mcp_servers(raw: Mapping[str, Any]) -> Dict[str, McpServerSpec]:
    servers = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            logger.warning("Ignoring MCP server %s: expected an object", name)
            continue
        servers[name] = McpServerSpec(
            command=_optional_str(entry.get("command")),
            args=_string_list(entry["args"]) if "args" in entry else None,
            env=dict(entry["env"]) if isinstance(entry.get("env"), dict) else None,
            url=_optional_str(entry.get("url")),
            headers=dict(entry["headers"]) if isinstance(entry.get("headers"), dict) else None,
        )
    return servers


def _servers_from(document: Optional[Mapping[str, Any]], allow_bare: bool = False) -> Dict[str, Any]:
    if not document:
        return {}
    servers = document.get("mcpServers")
    if isinstance(servers, dict):
        return servers
    if allow_bare and "mcpServers" not in document:
        return dict(document)
    return {}


def load_mcp_servers(*documents: Optional[Mapping[str, Any]]) -> Optional[Dict[str, McpServerSpec]]:
    """Merge server maps from several documents; later documents win. None when nothing is declared."""
    raw: Dict[str, Any] = {}
    for document in documents:
        raw.update(_servers_from(document))
    return parse_mcp_servers(raw) if raw else None


# =============================================================================
# ENTRY POINTS
# =============================================================================


def load_claude_plugin(root: Path) -> SourcePlugin:
    """Load a plugin directory (the one containing commands/, agents/, skills/)."""
    root = Path(root).resolve()
    if not root.is_dir():
        raise SourceError(f"Plugin root not found: {root}", details={"path": str(root)})

    manifest = _read_json(root / MANIFEST_PATH) or {}
    mcp_file = _read_json(root / ".mcp.json")
    mcp_document = {"mcpServers": _servers_from(mcp_file, allow_bare=True)} if mcp_file else None

    return SourcePlugin(
        root=root,
        name=str(manifest.get("name") or root.name),
        version=_optional_str(manifest.get("version")),
        commands=load_commands(root / "commands"),
        agents=load_agents(root / "agents"),
        skills=load_skills(root / "skills"),
        mcp_servers=load_mcp_servers(manifest, mcp_document),
    )


def load_claude_home(home: Path) -> SourcePlugin:
    """Load a Claude home directory (normally ~/.claude)."""
    home = Path(home).resolve()
    if not home.is_dir():
        raise SourceError(f"Claude home not found: {home}", details={"path": str(home)})

    settings = _read_json(home / "settings.json")
    mcp_file = _read_json(home / ".mcp.json")
    mcp_document = {"mcpServers": _servers_from(mcp_file, allow_bare=True)} if mcp_file else None

    return SourcePlugin(
        root=home,
        name="claude-home",
        commands=load_commands(home / "commands"),
        agents=load_agents(home / "agents"),
        skills=load_skills(home / "skills"),
        mcp_servers=load_mcp_servers(settings, mcp_document),
    )
