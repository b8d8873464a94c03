import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

import yaml

# Configure module logger
logger = logging.getLogger("plugin_bridge")


# ANSI colors
class Colors:
    HEADER = "\033[95m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    ENDC = "\033[0m"


# =============================================================================
# PATH RESOLUTION
# =============================================================================


def expand_home(value: str) -> Path:
    """Expand a leading ``~`` to the user's home directory."""
    if value == "~":
        return Path.home()
    if value.startswith("~" + os.sep) or value.startswith("~/"):
        return Path.home() / value[2:]
    return Path(value)


PathResolver = Callable[[], Optional[Path]]


def resolve_first(resolvers: Iterable[PathResolver]) -> Optional[Path]:
    """
    Evaluate candidate resolvers in order.
    Returns the first non-None path, or None if no candidate applies.
    """
    for resolver in resolvers:
        path = resolver()
        if path is not None:
            return path
    return None


def from_value(value: Optional[str]) -> PathResolver:
    """Resolver for an explicit (possibly empty) user-supplied path."""
    def resolve() -> Optional[Path]:
        if not value or not str(value).strip():
            return None
        return expand_home(str(value).strip()).resolve()
    return resolve


def from_env(name: str) -> PathResolver:
    return from_value(os.environ.get(name))


def if_exists(path: Path) -> PathResolver:
    def resolve() -> Optional[Path]:
        return path if path.exists() else None
    return resolve


# =============================================================================
# FRONTMATTER
# =============================================================================

_RE_FRONTMATTER = re.compile(r"^---\r?\n(.*?)\r?\n---\r?\n*", re.DOTALL)


def extract_yaml_frontmatter(content: str) -> tuple[Optional[Dict[str, Any]], str]:
    """Extract YAML frontmatter from markdown content."""
    match = _RE_FRONTMATTER.match(content)
    if match:
        try:
            frontmatter = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            logger.warning("Ignoring invalid frontmatter: %s", e)
            return None, content
        if isinstance(frontmatter, dict):
            return frontmatter, content[match.end():]

    return None, content


def format_frontmatter(fields: Mapping[str, Any], body: str) -> str:
    """
    Render ``fields`` as a YAML header above ``body``.
    Fields whose value is None or empty are left out.
    """
    present = {k: v for k, v in fields.items() if v is not None and v != "" and v != [] and v != {}}
    if not present:
        return body

    fm_str = yaml.safe_dump(present, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{fm_str}---\n\n{body}"
