"""
User configuration.

Stored in: ~/.config/plugin-bridge/config.json (override with PLUGIN_BRIDGE_CONFIG)

    {
      "target_homes": {"pi": "~/work/.pi"},
      "command_deny_list": ["dev", "tmp", "etc", "usr", "var", "bin", "home", "opt"],
      "link_skills": true
    }
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from .core.rewriter import DEFAULT_COMMAND_DENY_LIST
from .errors import ConfigError, SyncError
from .sync.files import read_text_if_exists
from .utils import expand_home, from_env, from_value, if_exists, resolve_first

CONFIG_ENV_VAR = "PLUGIN_BRIDGE_CONFIG"
CLAUDE_HOME_ENV_VAR = "CLAUDE_CONFIG_DIR"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "plugin-bridge" / "config.json"


@dataclass
class BridgeConfig:
    target_homes: Dict[str, str] = field(default_factory=dict)
    command_deny_list: Tuple[str, ...] = DEFAULT_COMMAND_DENY_LIST
    link_skills: bool = True


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return expand_home(override) if override else DEFAULT_CONFIG_FILE


def load_config(path: Optional[Path] = None) -> BridgeConfig:
    """Load config; a missing file gives defaults, a broken one raises ConfigError."""
    path = path or config_path()
    try:
        result = read_text_if_exists(path)
    except SyncError as e:
        raise ConfigError(str(e), details=e.details) from e
    if not result.found:
        return BridgeConfig()

    try:
        data = json.loads(result.text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", details={"path": str(path)}) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}", details={"path": str(path)})

    homes = data.get("target_homes", {})
    if not isinstance(homes, dict) or not all(isinstance(v, str) for v in homes.values()):
        raise ConfigError("target_homes must map target names to paths", details={"path": str(path)})

    deny_list = data.get("command_deny_list", list(DEFAULT_COMMAND_DENY_LIST))
    if not isinstance(deny_list, list) or not all(isinstance(v, str) for v in deny_list):
        raise ConfigError("command_deny_list must be a list of strings", details={"path": str(path)})

    link_skills = data.get("link_skills", True)
    if not isinstance(link_skills, bool):
        raise ConfigError("link_skills must be true or false", details={"path": str(path)})

    return BridgeConfig(
        target_homes={k.lower(): v for k, v in homes.items()},
        command_deny_list=tuple(deny_list),
        link_skills=link_skills,
    )


def resolve_claude_home(explicit: Optional[str] = None) -> Optional[Path]:
    """--claude-home, then $CLAUDE_CONFIG_DIR, then ~/.claude if it exists."""
    return resolve_first([
        from_value(explicit),
        from_env(CLAUDE_HOME_ENV_VAR),
        if_exists(Path.home() / ".claude"),
    ])


def resolve_target_home(target: str, default_home: str, config: BridgeConfig, explicit: Optional[str] = None) -> Path:
    """--output, then the configured home for ``target``, then the target default."""
    home = resolve_first([
        from_value(explicit),
        from_value(config.target_homes.get(target.lower())),
        from_value(default_home),
    ])
    # default_home is never empty, so the chain always resolves
    return home if home is not None else expand_home(default_home).resolve()
