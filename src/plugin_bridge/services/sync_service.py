"""
Business logic for 'plugin-bridge sync' and 'plugin-bridge convert'.
Runs each target independently; a failure in one target is recorded and the
remaining targets still run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from plugin_bridge import targets  # noqa: F401
from plugin_bridge.config import BridgeConfig, resolve_target_home
from plugin_bridge.core.converter import BaseTarget, target_registry
from plugin_bridge.core.mcp import has_potential_secrets
from plugin_bridge.core.types import SourcePlugin, SyncReport
from plugin_bridge.errors import BridgeError, UnknownTargetError
from plugin_bridge.sync.writer import run_timestamp
from plugin_bridge.utils import logger

ALL_TARGETS = "all"


@dataclass
class TargetOutcome:
    target: str
    root: Path
    report: Optional[SyncReport] = None
    error: Optional[BridgeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_targets(names: Iterable[str]) -> List[BaseTarget]:
    """Look up targets by name; 'all' expands to every registered target."""
    resolved: List[BaseTarget] = []
    for name in names:
        if name.lower() == ALL_TARGETS:
            candidates = target_registry.all()
        else:
            target = target_registry.get(name)
            if target is None:
                known = ", ".join(target_registry.names())
                raise UnknownTargetError(f"Unknown target: {name}. Use one of: {known}, {ALL_TARGETS}")
            candidates = [target]
        for target in candidates:
            if target not in resolved:
                resolved.append(target)
    return resolved


def warn_if_secrets(plugin: SourcePlugin) -> bool:
    if plugin.mcp_servers and has_potential_secrets(plugin.mcp_servers):
        logger.warning(
            "MCP servers contain env vars that may include secrets (API keys, tokens). "
            "These will be copied to the target config. Review before sharing the config file."
        )
        return True
    return False


def run_sync(
    plugin: SourcePlugin,
    target_names: Iterable[str],
    config: Optional[BridgeConfig] = None,
    output: Optional[str] = None,
    link_skills: Optional[bool] = None,
    timestamp: Optional[str] = None,
) -> List[TargetOutcome]:
    """Sync ``plugin`` into every requested target. Never raises for a single target's failure."""
    config = config or BridgeConfig()
    link = config.link_skills if link_skills is None else link_skills
    timestamp = timestamp or run_timestamp()
    selected = resolve_targets(target_names)
    if output and len(selected) > 1:
        raise BridgeError(
            "--output sets a single target root; choose one target or configure target_homes",
            details={"targets": [t.name for t in selected]},
        )
    warn_if_secrets(plugin)

    outcomes = []
    for target in selected:
        root = resolve_target_home(target.name, target.format_info.default_home, config, output)
        outcome = TargetOutcome(target=target.name, root=root)
        try:
            outcome.report = target.sync(
                plugin,
                root,
                timestamp=timestamp,
                link_skills=link,
                command_deny_list=config.command_deny_list,
            )
        except BridgeError as e:
            logger.error("Sync to %s failed: %s", target.name, e)
            outcome.error = e
        outcomes.append(outcome)
    return outcomes
