"""Merge downloaded MCP server definitions into .vscode/mcp.json.

Incoming payloads list servers under ``servers`` (VS Code) or under the
legacy ``mcpServers`` key. Both are accepted; the file on disk only ever
keeps ``servers``. Existing servers are never dropped: the result is the
union of both mappings, and an incoming definition replaces an existing one
with the same name.
"""

import json
from pathlib import Path
from typing import Any

from cct.exceptions import ParseError

SERVERS_KEY = "servers"
LEGACY_SERVERS_KEY = "mcpServers"
SERVER_KEYS = (SERVERS_KEY, LEGACY_SERVERS_KEY)


def extract_servers(payload: dict[str, Any]) -> dict[str, Any]:
    """Return the server mapping from a payload, reading both key names.

    Examples:
        >>> extract_servers({"mcpServers": {"a": {}}, "servers": {"b": {}}})
        {'a': {}, 'b': {}}
    """
    servers: dict[str, Any] = {}
    for key in (LEGACY_SERVERS_KEY, SERVERS_KEY):
        section = payload.get(key)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ParseError(f"'{key}' must be an object, got {type(section).__name__}")
        servers.update(section)
    return servers


def strip_descriptions(servers: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of servers without the ``description`` field of each entry."""
    stripped = {}
    for name, definition in servers.items():
        if isinstance(definition, dict):
            definition = {k: v for k, v in definition.items() if k != "description"}
        stripped[name] = definition
    return stripped


def merge_mcp_config(existing: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    """Merge an incoming MCP payload onto an existing mcp.json document."""
    merged = {k: v for k, v in existing.items() if k not in SERVER_KEYS}
    merged.update({k: v for k, v in incoming.items() if k not in SERVER_KEYS})

    servers = extract_servers(existing)
    servers.update(strip_descriptions(extract_servers(incoming)))
    merged[SERVERS_KEY] = servers
    return merged


def load_mcp_file(path: Path) -> dict[str, Any]:
    """Read an mcp.json file, treating a missing file as an empty document."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse {path}: {e}")
    if not isinstance(data, dict):
        raise ParseError(f"{path} must contain a JSON object")
    return data


def install_mcp_file(path: Path, payload: Any) -> list[str]:
    """Merge payload into the mcp.json at path and write it back.

    Returns:
        Names of the servers taken from the payload

    Raises:
        ParseError: If the payload or the existing file has the wrong shape
    """
    if not isinstance(payload, dict):
        raise ParseError("MCP payload must be a JSON object")
    if all(payload.get(key) is None for key in SERVER_KEYS):
        raise ParseError(f"MCP payload has no '{SERVERS_KEY}' or '{LEGACY_SERVERS_KEY}' object")
    incoming_names = list(extract_servers(payload))

    merged = merge_mcp_config(load_mcp_file(path), payload)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(merged, indent=2) + "\n", encoding="utf-8")
    return incoming_names
