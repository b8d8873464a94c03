"""
Factory Droid Target
Links Claude skills into ~/.factory/skills. Droid has no MCP server map.
"""

from pathlib import Path

from ..core.converter import BaseTarget, TargetFormat, target_registry
from ..core.rewriter import DEFAULT_COMMAND_DENY_LIST
from ..core.types import Bundle, PassthroughDir, SourcePlugin
from ..sync.writer import TargetPaths


class DroidTarget(BaseTarget):
    @property
    def format_info(self) -> TargetFormat:
        return TargetFormat(
            name="droid",
            display_name="Factory Droid",
            default_home="~/.factory",
            checkbox_label="Droid (~/.factory)",
            status="experimental",
        )

    def build_bundle(self, plugin: SourcePlugin, command_deny_list=DEFAULT_COMMAND_DENY_LIST) -> Bundle:
        return Bundle(skill_dirs=[PassthroughDir(skill.name, skill.source_dir) for skill in plugin.skills])

    def resolve_paths(self, root: Path) -> TargetPaths:
        return TargetPaths(root=root, skills_dir=root / "skills")


target_registry.register(DroidTarget())
