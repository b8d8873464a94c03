"""
Data model shared by the loader, assembler and writer.

Source units come from a Claude plugin or Claude home directory and are
read-only. A Bundle is built fresh for each target on each run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


# =============================================================================
# SOURCE MODEL
# =============================================================================


@dataclass
class ClaudeCommand:
    name: str
    description: Optional[str] = None
    body: str = ""
    argument_hint: Optional[str] = None
    disable_model_invocation: bool = False
    source_path: Optional[Path] = None


@dataclass
class ClaudeAgent:
    name: str
    description: Optional[str] = None
    body: str = ""
    capabilities: List[str] = field(default_factory=list)
    source_path: Optional[Path] = None


@dataclass
class ClaudeSkill:
    """Skill directory, copied or linked as-is."""
    name: str
    source_dir: Path
    skill_path: Optional[Path] = None


@dataclass
class McpServerSpec:
    """One MCP server declaration. Exactly one of command/url is expected."""
    command: Optional[str] = None
    args: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None
    url: Optional[str] = None
    headers: Optional[Dict[str, str]] = None

    @property
    def is_command(self) -> bool:
        return bool(self.command)

    @property
    def is_remote(self) -> bool:
        return not self.command and bool(self.url)


@dataclass
class SourcePlugin:
    root: Path
    name: str = ""
    version: Optional[str] = None
    commands: List[ClaudeCommand] = field(default_factory=list)
    agents: List[ClaudeAgent] = field(default_factory=list)
    skills: List[ClaudeSkill] = field(default_factory=list)
    mcp_servers: Optional[Dict[str, McpServerSpec]] = None


# =============================================================================
# BUNDLE
# =============================================================================


@dataclass
class GeneratedArtifact:
    name: str
    content: str


@dataclass
class PassthroughDir:
    name: str
    source_dir: Path


@dataclass
class ExtensionFile:
    """Static payload written verbatim."""
    name: str
    content: str


@dataclass
class Bundle:
    prompts: List[GeneratedArtifact] = field(default_factory=list)
    skill_dirs: List[PassthroughDir] = field(default_factory=list)
    generated_skills: List[GeneratedArtifact] = field(default_factory=list)
    extensions: List[ExtensionFile] = field(default_factory=list)
    server_map: Optional[Dict[str, Any]] = None

    def artifact_names(self) -> List[str]:
        names = [p.name for p in self.prompts]
        names.extend(d.name for d in self.skill_dirs)
        names.extend(s.name for s in self.generated_skills)
        return names


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class SyncReport:
    """What one target sync did on disk."""
    target: str
    root: Path
    written: List[Path] = field(default_factory=list)
    linked: List[Path] = field(default_factory=list)
    copied: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    backup_path: Optional[Path] = None
    server_map_path: Optional[Path] = None
    block_path: Optional[Path] = None
    block_changed: bool = False
