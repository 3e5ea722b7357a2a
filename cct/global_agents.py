"""Agents installed once per user instead of per project."""

from pathlib import Path

from cct.components import ComponentKind, ComponentRequest, SourceRepository, remote_url_for
from cct.constants import GLOBAL_DIR_NAME
from cct.exceptions import ComponentNotFoundError
from cct.fetcher import ContentClient

AGENT_EXTENSION = ".agent.md"


def global_agents_dir(home: Path | None = None) -> Path:
    """Return the directory holding global agents (~/.cct/agents)."""
    return (home or Path.home()) / GLOBAL_DIR_NAME / "agents"


def global_agent_path(identifier: str, home: Path | None = None) -> Path:
    name = ComponentRequest(ComponentKind.AGENT, identifier).name
    return global_agents_dir(home) / f"{name}{AGENT_EXTENSION}"


def create_global_agent(
    client: ContentClient,
    identifier: str,
    source: SourceRepository | None = None,
    home: Path | None = None,
) -> Path:
    """Download an agent into the global directory, replacing any older copy.

    Raises:
        ComponentNotFoundError: If the agent does not exist remotely
        FetchError: On any other HTTP failure
    """
    request = ComponentRequest(ComponentKind.AGENT, identifier)
    content = client.get_text(remote_url_for(request, source or SourceRepository()))

    path = global_agent_path(identifier, home)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def list_global_agents(home: Path | None = None) -> list[str]:
    """Return the names of installed global agents, sorted."""
    directory = global_agents_dir(home)
    if not directory.is_dir():
        return []
    return sorted(
        path.name[: -len(AGENT_EXTENSION)]
        for path in directory.glob(f"*{AGENT_EXTENSION}")
        if path.is_file()
    )


def remove_global_agent(identifier: str, home: Path | None = None) -> Path:
    """Delete a global agent.

    Raises:
        ComponentNotFoundError: If the agent is not installed
    """
    path = global_agent_path(identifier, home)
    if not path.exists():
        raise ComponentNotFoundError(f"Global agent '{identifier}' is not installed")
    path.unlink()
    return path


def update_global_agent(
    client: ContentClient,
    identifier: str,
    source: SourceRepository | None = None,
    home: Path | None = None,
) -> Path:
    """Re-download an installed global agent.

    Raises:
        ComponentNotFoundError: If the agent is not installed or no longer exists remotely
    """
    if not global_agent_path(identifier, home).exists():
        raise ComponentNotFoundError(f"Global agent '{identifier}' is not installed")
    return create_global_agent(client, identifier, source, home)
