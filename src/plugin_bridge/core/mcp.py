"""
MCP server map translation.

Source format (Claude ``.mcp.json``):
    {"mcpServers": {"name": {"command": ..., "args": [...], "env": {...}}}}
    {"mcpServers": {"name": {"url": ..., "headers": {...}}}}

Targets differ in the field carrying the remote endpoint (MCPorter uses
``baseUrl``, Cursor uses ``url``) and in whether empty collections are kept.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from .types import McpServerSpec

SERVERS_KEY = "mcpServers"

_RE_SENSITIVE_ENV = re.compile(r"key|token|secret|password|credential|api_key", re.IGNORECASE)


@dataclass(frozen=True)
class McpShape:
    remote_field: str = "url"
    command_fields: Tuple[str, ...] = ("args", "env", "headers")
    remote_fields: Tuple[str, ...] = ("headers",)
    drop_empty: bool = False


MCPORTER_SHAPE = McpShape(remote_field="baseUrl")
CURSOR_SHAPE = McpShape(remote_field="url", command_fields=("args", "env"), drop_empty=True)


def _keep(value: Any, drop_empty: bool) -> bool:
    if value is None:
        return False
    if drop_empty and not value:
        return False
    return True


def convert_server(server: McpServerSpec, shape: McpShape) -> Dict[str, Any]:
    """Translate one server entry; returns an empty dict when it has neither command nor url."""
    if server.is_command:
        entry: Dict[str, Any] = {"command": server.command}
        fields = shape.command_fields
    elif server.is_remote:
        entry = {shape.remote_field: server.url}
        fields = shape.remote_fields
    else:
        return {}

    for field_name in fields:
        value = getattr(server, field_name)
        if _keep(value, shape.drop_empty):
            entry[field_name] = value
    return entry


def convert_mcp_servers(servers: Mapping[str, McpServerSpec], shape: McpShape) -> Dict[str, Any]:
    """Build ``{"mcpServers": {...}}``. Unsupported entries are dropped."""
    converted: Dict[str, Any] = {}
    for name, server in servers.items():
        entry = convert_server(server, shape)
        if entry:
            converted[name] = entry
    return {SERVERS_KEY: converted}


def merge_server_maps(existing: Mapping[str, Any], converted: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay converted servers on an existing document.

    New entries replace same-named ones wholesale; unknown server names and
    other top-level keys are preserved.
    """
    merged = dict(existing)
    servers = existing.get(SERVERS_KEY)
    servers = dict(servers) if isinstance(servers, Mapping) else {}
    servers.update(converted.get(SERVERS_KEY, {}))
    merged[SERVERS_KEY] = servers
    return merged


def has_potential_secrets(servers: Mapping[str, McpServerSpec]) -> bool:
    """True when any server env var name looks like a credential."""
    for server in servers.values():
        for key in (server.env or {}):
            if _RE_SENSITIVE_ENV.search(key):
                return True
    return False
