"""Learning paths: remote manifests that bundle agents, skills, instructions and prompts."""

from dataclasses import dataclass, field
from typing import Any

from cct.batch import BatchSummary, run_batch
from cct.components import (
    KIND_CONFIGS,
    ComponentKind,
    ComponentRequest,
    SourceRepository,
    remote_url_for,
)
from cct.exceptions import ComponentNotFoundError, FetchError, ParseError
from cct.fetcher import ContentClient
from cct.installer import Installer

DEFAULT_LEVEL = "beginner"

# Manifest keys in installation order
MANIFEST_SECTIONS = (
    ("agents", ComponentKind.AGENT),
    ("skills", ComponentKind.SKILL),
    ("instructions", ComponentKind.INSTRUCTION),
    ("prompts", ComponentKind.PROMPT),
)


@dataclass
class LearningPathManifest:
    """A learning path manifest.

    Example:
        {
          "name": "Python Beginner",
          "description": "First steps with Python",
          "level": "beginner",
          "agents": ["beginner-tutors/python-basics-tutor"],
          "skills": [],
          "instructions": ["always-on/beginner-friendly"],
          "prompts": ["learning/generate-exercises"]
        }
    """

    name: str
    description: str = ""
    level: str = DEFAULT_LEVEL
    agents: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, fallback_name: str, data: Any) -> "LearningPathManifest":
        """Create a manifest from decoded JSON.

        Raises:
            ParseError: If the document is not an object or a list field is malformed
        """
        if not isinstance(data, dict):
            raise ParseError(f"Learning path '{fallback_name}' manifest must be a JSON object")

        lists = {}
        for key, _kind in MANIFEST_SECTIONS:
            value = data.get(key) or []
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ParseError(
                    f"Learning path '{fallback_name}': '{key}' must be a list of strings"
                )
            lists[key] = value

        for key in ("name", "description", "level"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ParseError(f"Learning path '{fallback_name}': '{key}' must be a string")

        return cls(
            name=data.get("name") or fallback_name,
            description=data.get("description") or "",
            level=data.get("level") or DEFAULT_LEVEL,
            **lists,
        )

    @property
    def total_components(self) -> int:
        return len(self.agents) + len(self.skills) + len(self.instructions) + len(self.prompts)

    def matches_level(self, level: str | None) -> bool:
        """True when no level filter is given or the levels match."""
        return level is None or self.level.lower() == level.strip().lower()

    def to_requests(self) -> list[ComponentRequest]:
        """Flatten the manifest into ordinary component requests."""
        requests = []
        for key, kind in MANIFEST_SECTIONS:
            for identifier in getattr(self, key):
                identifier = identifier.strip()
                if identifier:
                    requests.append(ComponentRequest(kind, identifier))
        return requests


def fetch_manifest(
    client: ContentClient,
    name: str,
    source: SourceRepository | None = None,
) -> LearningPathManifest:
    """Download and parse a learning path manifest.

    Raises:
        ComponentNotFoundError: If the manifest does not exist
        FetchError: On any other HTTP failure
        ParseError: If the manifest is malformed
    """
    request = ComponentRequest(ComponentKind.LEARNING_PATH, name)
    url = remote_url_for(request, source or SourceRepository())
    return LearningPathManifest.from_dict(name, client.get_json(url))


def install_learning_path(installer: Installer, name: str) -> BatchSummary:
    """Fetch a learning path and install its components as one batch.

    A missing or malformed manifest, or a level mismatch, installs nothing and
    returns an empty summary.
    """
    console = installer.console
    options = installer.options
    console.print(f"[cyan]Installing learning path: {name}[/cyan]")

    try:
        manifest = fetch_manifest(installer.client, name, options.source)
    except ComponentNotFoundError:
        console.print(f"[red]Learning path '{name}' not found[/red]")
        console.print(f"[yellow]{KIND_CONFIGS[ComponentKind.LEARNING_PATH].hint}[/yellow]")
        return BatchSummary()
    except (FetchError, ParseError) as e:
        console.print(f"[red]Error installing learning path '{name}': {e}[/red]")
        return BatchSummary()

    console.print(f"[green]Learning path found: {manifest.name}[/green]")
    console.print(f"[dim]Description: {manifest.description or 'No description'}[/dim]")
    console.print(f"[dim]Level: {manifest.level}[/dim]")

    if not manifest.matches_level(options.level):
        console.print(
            f"[yellow]Learning path '{name}' is {manifest.level}, "
            f"not {options.level}. Nothing installed.[/yellow]"
        )
        return BatchSummary()

    return run_batch(installer, manifest.to_requests(), console)
