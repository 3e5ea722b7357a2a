"""Listing of available agents.

Sources are tried in order: the catalog bundled with the package, the hosted
agents API, the GitHub contents API, and finally a fixed fallback list.
"""

import json
from dataclasses import dataclass
from importlib import resources
from typing import Any

from cct.components import SourceRepository
from cct.constants import HOSTED_AGENTS_URL
from cct.fetcher import ContentClient, Fetched, FetchOutcome

ROOT_CATEGORY = "root"
AGENT_SUFFIXES = (".agent.md", ".md")


@dataclass(frozen=True)
class AgentEntry:
    """An installable agent."""

    name: str
    path: str  # identifier to pass to --agent
    category: str = ROOT_CATEGORY

    @classmethod
    def from_path(cls, path: str) -> "AgentEntry":
        """Build an entry from an identifier like ``category/name``.

        Examples:
            >>> AgentEntry.from_path("beginner-tutors/python-basics-tutor")
            AgentEntry(name='python-basics-tutor', path='beginner-tutors/python-basics-tutor', category='beginner-tutors')
            >>> AgentEntry.from_path("code-reviewer").category
            'root'
        """
        parts = path.split("/")
        category = parts[0] if len(parts) > 1 else ROOT_CATEGORY
        return cls(name=parts[-1], path=path, category=category)


FALLBACK_AGENTS = [
    AgentEntry.from_path("beginner-tutors/python-basics-tutor"),
    AgentEntry.from_path("beginner-tutors/javascript-basics-tutor"),
    AgentEntry.from_path("beginner-tutors/html-css-tutor"),
    AgentEntry.from_path("beginner-tutors/git-basics-tutor"),
    AgentEntry.from_path("learning-support/code-reviewer"),
    AgentEntry.from_path("learning-support/debugging-helper"),
    AgentEntry.from_path("learning-support/project-guide"),
]


def load_bundled_catalog() -> dict[str, Any]:
    """Read the components.json shipped with the package."""
    text = resources.files("cct").joinpath("data/components.json").read_text(encoding="utf-8")
    return json.loads(text)


def _entries_from(items: Any) -> list[AgentEntry]:
    if not isinstance(items, list):
        return []
    entries = []
    for item in items:
        if isinstance(item, dict) and isinstance(item.get("path"), str):
            entries.append(AgentEntry.from_path(item["path"]))
    return entries


def _strip_agent_suffix(filename: str) -> str | None:
    for suffix in AGENT_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return None


def _listing_entries(outcome: FetchOutcome) -> list[dict[str, Any]]:
    """Decode a contents-API listing, keeping only object entries with a string name."""
    if not isinstance(outcome, Fetched):
        return []
    try:
        items = json.loads(outcome.text)
    except json.JSONDecodeError:
        return []
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict) and isinstance(item.get("name"), str)]


def _agents_from_github(client: ContentClient, source: SourceRepository) -> list[AgentEntry]:
    """List agents from the contents API, one level of categories deep."""
    agents = []
    for item in _listing_entries(client.get(source.contents_url("agents"))):
        name = item["name"]
        if item.get("type") == "file":
            stem = _strip_agent_suffix(name)
            if stem:
                agents.append(AgentEntry.from_path(stem))
        elif item.get("type") == "dir":
            for child in _listing_entries(client.get(source.contents_url(f"agents/{name}"))):
                stem = _strip_agent_suffix(child["name"])
                if child.get("type") == "file" and stem:
                    agents.append(AgentEntry.from_path(f"{name}/{stem}"))
    return agents


def available_agents(
    client: ContentClient | None = None,
    source: SourceRepository | None = None,
    use_bundled: bool = True,
) -> tuple[list[AgentEntry], str]:
    """Return the known agents and a description of where they came from."""
    if use_bundled:
        try:
            bundled = _entries_from(load_bundled_catalog().get("agents"))
        except (OSError, json.JSONDecodeError):
            bundled = []
        if bundled:
            return bundled, "bundled catalog"

    if client is not None:
        hosted = client.get(HOSTED_AGENTS_URL)
        if isinstance(hosted, Fetched):
            try:
                data = json.loads(hosted.text)
            except json.JSONDecodeError:
                data = {}
            entries = _entries_from(data.get("agents") if isinstance(data, dict) else None)
            if entries:
                return entries, "hosted catalog"

        entries = _agents_from_github(client, source or SourceRepository())
        if entries:
            return entries, "GitHub"

    return list(FALLBACK_AGENTS), "fallback list"


def group_by_category(agents: list[AgentEntry]) -> dict[str, list[AgentEntry]]:
    """Group agents by category, keeping first-seen order."""
    groups: dict[str, list[AgentEntry]] = {}
    for agent in agents:
        groups.setdefault(agent.category, []).append(agent)
    return groups
