"""
Plugin Bridge - Claude Code plugin/config converter for other agent tools.

Converts Claude commands, agents, skills and MCP servers to:
- Pi coding agent (~/.pi/agent or .pi/)
- Cursor AI (~/.cursor)
- Factory Droid (~/.factory)
"""

__version__ = "0.1.0"

# Trigger target auto-registration on import
from plugin_bridge import targets  # noqa: F401

__all__ = [
    "cli",
    "config",
    "core",
    "loader",
    "services",
    "sync",
    "targets",
    "utils",
]
