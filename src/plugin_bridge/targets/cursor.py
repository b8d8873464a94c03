"""
Cursor Target
Links Claude skills into Cursor and merges MCP servers into mcp.json.

Output structure (root = ~/.cursor):
- skills/<name>/   (linked skills)
- mcp.json         (mcpServers, merged with existing entries)
"""

from pathlib import Path

from ..core.converter import BaseTarget, TargetFormat, target_registry
from ..core.mcp import CURSOR_SHAPE, convert_mcp_servers
from ..core.rewriter import DEFAULT_COMMAND_DENY_LIST
from ..core.types import Bundle, PassthroughDir, SourcePlugin
from ..sync.writer import TargetPaths


class CursorTarget(BaseTarget):
    mcp_shape = CURSOR_SHAPE

    @property
    def format_info(self) -> TargetFormat:
        return TargetFormat(
            name="cursor",
            display_name="Cursor AI",
            default_home="~/.cursor",
            checkbox_label="Cursor (~/.cursor)",
            status="beta",
        )

    def build_bundle(self, plugin: SourcePlugin, command_deny_list=DEFAULT_COMMAND_DENY_LIST) -> Bundle:
        # Cursor reads skills and MCP only; commands and agents are not carried over
        server_map = None
        if plugin.mcp_servers:
            server_map = convert_mcp_servers(plugin.mcp_servers, self.mcp_shape)
        return Bundle(
            skill_dirs=[PassthroughDir(skill.name, skill.source_dir) for skill in plugin.skills],
            server_map=server_map,
        )

    def resolve_paths(self, root: Path) -> TargetPaths:
        return TargetPaths(
            root=root,
            skills_dir=root / "skills",
            server_map_path=root / "mcp.json",
        )


target_registry.register(CursorTarget())
