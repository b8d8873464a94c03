"""
Pi Target
Converts a Claude plugin or Claude home into Pi coding agent format.

Output structure (root = ~/.pi/agent or <project>/.pi):
- prompts/<name>.md                      (commands)
- skills/<name>/                         (skills, linked or copied)
- skills/<name>/SKILL.md                 (agents as generated skills)
- extensions/plugin-bridge-compat.ts     (subagent, ask_user_question, MCPorter tools)
- plugin-bridge/mcporter.json            (MCP servers for MCPorter)
- AGENTS.md                              (managed tool-map block)

Any other root nests everything under <root>/.pi/ and keeps AGENTS.md at <root>.
"""

from importlib import resources
from pathlib import Path
from typing import List

from ..core.converter import BaseTarget, TargetFormat, target_registry
from ..core.mcp import MCPORTER_SHAPE
from ..core.rewriter import PI_VOCABULARY
from ..core.types import ExtensionFile
from ..sync.blocks import BlockMarkers
from ..sync.writer import TargetPaths

EXTENSION_NAME = "plugin-bridge-compat.ts"
MCPORTER_CONFIG = Path("plugin-bridge") / "mcporter.json"

PI_BLOCK_MARKERS = BlockMarkers(
    begin="<!-- BEGIN PLUGIN-BRIDGE PI TOOL MAP -->",
    end="<!-- END PLUGIN-BRIDGE PI TOOL MAP -->",
)

PI_BLOCK_BODY = """## Plugin Bridge (Pi compatibility)

This block is managed by plugin-bridge.

Compatibility notes:
- Claude Task(agent, args) maps to the subagent extension tool
- For parallel agent runs, batch multiple subagent calls with multi_tool_use.parallel
- AskUserQuestion maps to the ask_user_question extension tool
- MCP access uses MCPorter via mcporter_list and mcporter_call extension tools
- MCPorter config path: .pi/plugin-bridge/mcporter.json (project) or ~/.pi/agent/plugin-bridge/mcporter.json (global)
"""


def load_compat_extension() -> str:
    source = resources.files("plugin_bridge") / "templates" / "pi" / "compat-extension.ts"
    return source.read_text(encoding="utf-8")


class PiTarget(BaseTarget):
    vocabulary = PI_VOCABULARY
    mcp_shape = MCPORTER_SHAPE

    @property
    def format_info(self) -> TargetFormat:
        return TargetFormat(
            name="pi",
            display_name="Pi coding agent",
            default_home="~/.pi/agent",
            checkbox_label="Pi (~/.pi/agent)",
            status="beta",
        )

    def extensions(self) -> List[ExtensionFile]:
        return [ExtensionFile(name=EXTENSION_NAME, content=load_compat_extension())]

    def resolve_paths(self, root: Path) -> TargetPaths:
        # ~/.pi/agent (global) and <project>/.pi are used as-is
        base = root if root.name in ("agent", ".pi") else root / ".pi"
        return TargetPaths(
            root=root,
            skills_dir=base / "skills",
            prompts_dir=base / "prompts",
            extensions_dir=base / "extensions",
            server_map_path=base / MCPORTER_CONFIG,
            instructions_path=root / "AGENTS.md",
            block_markers=PI_BLOCK_MARKERS,
            block_body=PI_BLOCK_BODY,
        )


target_registry.register(PiTarget())
