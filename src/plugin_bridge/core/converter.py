"""
Target base class and registry.

Each target module registers one instance on import:

    target_registry.register(PiTarget())
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..sync.writer import SyncWriter, TargetPaths
from .assembler import ArtifactAssembler
from .mcp import McpShape
from .rewriter import DEFAULT_COMMAND_DENY_LIST, PI_VOCABULARY, ContentRewriter, Vocabulary
from .types import Bundle, ExtensionFile, SourcePlugin, SyncReport


@dataclass(frozen=True)
class TargetFormat:
    name: str
    display_name: str
    default_home: str
    checkbox_label: str
    status: str = "beta"


class BaseTarget(ABC):
    """One destination tool. Subclasses describe layout; assembly and writing are shared."""

    vocabulary: Vocabulary = PI_VOCABULARY
    mcp_shape: McpShape = McpShape()

    @property
    @abstractmethod
    def format_info(self) -> TargetFormat:
        ...

    @abstractmethod
    def resolve_paths(self, root: Path) -> TargetPaths:
        ...

    @property
    def name(self) -> str:
        return self.format_info.name

    def extensions(self) -> List[ExtensionFile]:
        return []

    def build_bundle(
        self,
        plugin: SourcePlugin,
        command_deny_list: Iterable[str] = DEFAULT_COMMAND_DENY_LIST,
    ) -> Bundle:
        rewriter = ContentRewriter(self.vocabulary, command_deny_list)
        return ArtifactAssembler(rewriter, self.mcp_shape, self.extensions()).assemble(plugin)

    def sync(
        self,
        plugin: SourcePlugin,
        root: Path,
        timestamp: Optional[str] = None,
        link_skills: bool = True,
        command_deny_list: Iterable[str] = DEFAULT_COMMAND_DENY_LIST,
    ) -> SyncReport:
        bundle = self.build_bundle(plugin, command_deny_list)
        writer = SyncWriter(self.resolve_paths(root), self.name, timestamp, link_skills)
        return writer.write(bundle)


class TargetRegistry:
    def __init__(self) -> None:
        self._targets: Dict[str, BaseTarget] = {}

    def register(self, target: BaseTarget) -> BaseTarget:
        self._targets[target.name.lower()] = target
        return target

    def get(self, name: str) -> Optional[BaseTarget]:
        return self._targets.get(name.lower())

    def names(self) -> List[str]:
        return list(self._targets)

    def all(self) -> List[BaseTarget]:
        return list(self._targets.values())


target_registry = TargetRegistry()
