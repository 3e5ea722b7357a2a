"""Download a skill directory through the GitHub contents API."""

from dataclasses import dataclass, field
from typing import Any, Callable

from cct.components.resolver import SourceRepository, remote_url_for
from cct.components.types import ComponentKind, ComponentRequest
from cct.constants import DEFAULT_MAX_SKILL_DEPTH, DEFAULT_MAX_SKILL_FILES, SKILL_MARKER
from cct.exceptions import (
    ComponentNotFoundError,
    FetchError,
    MissingSentinelError,
    ParseError,
    TraversalLimitError,
)
from cct.fetcher.client import ContentClient, Fetched, FetchFailed, NotFound, parse_json


@dataclass
class SkillBundle:
    """Files of one skill, keyed by path relative to the skill directory."""

    name: str
    files: dict[str, str] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)

    @property
    def has_marker(self) -> bool:
        return SKILL_MARKER in self.files


def _is_safe_name(name: Any) -> bool:
    """A listing entry name must be a single plain path segment."""
    if not isinstance(name, str) or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name and ":" not in name


def _listing(client: ContentClient, url: str, identifier: str) -> list[dict[str, Any]]:
    outcome = client.get(url)
    if isinstance(outcome, NotFound):
        raise ComponentNotFoundError(f"Skill '{identifier}' not found")
    if isinstance(outcome, FetchFailed):
        raise FetchError(url, outcome.status_code, outcome.reason)

    entries = parse_json(outcome.text, url)
    if isinstance(entries, dict):
        # The contents API returns a single object when the path is a file
        entries = [entries]
    if not isinstance(entries, list):
        raise ParseError(f"Unexpected directory listing from {url}")
    return entries


def download_skill(
    client: ContentClient,
    identifier: str,
    source: SourceRepository | None = None,
    max_files: int = DEFAULT_MAX_SKILL_FILES,
    max_depth: int = DEFAULT_MAX_SKILL_DEPTH,
    on_file: Callable[[str], None] | None = None,
) -> SkillBundle:
    """Walk a skill's remote directory and download every file in it.

    The walk uses an explicit stack of ``(listing_url, relative_dir, depth)``
    entries. Listing URLs already visited are skipped, and the walk stops with
    TraversalLimitError once ``max_files`` or ``max_depth`` is exceeded.

    Args:
        client: Open content client
        identifier: Skill identifier, optionally ``category/name``
        source: Repository to read from
        max_files: Maximum number of files to download
        max_depth: Maximum directory nesting below the skill root
        on_file: Called with each relative path once downloaded

    Returns:
        SkillBundle with file contents in memory; nothing is written

    Raises:
        ComponentNotFoundError: If the skill directory does not exist
        FetchError: If a directory listing fails
        ParseError: If a listing is not a JSON array
        TraversalLimitError: If the listing exceeds the bounds
        MissingSentinelError: If no SKILL.md was downloaded
    """
    request = ComponentRequest(ComponentKind.SKILL, identifier)
    root_url = remote_url_for(request, source or SourceRepository())
    bundle = SkillBundle(name=request.name)

    stack: list[tuple[str, str, int]] = [(root_url, "", 0)]
    visited: set[str] = set()

    while stack:
        url, relative_dir, depth = stack.pop()
        if url in visited:
            continue
        visited.add(url)

        for entry in _listing(client, url, identifier):
            name = entry.get("name")
            if not name:
                continue
            if not _is_safe_name(name):
                raise ParseError(f"Skill '{identifier}' listing has unsafe entry name {name!r}")
            item_path = f"{relative_dir}/{name}" if relative_dir else name
            entry_type = entry.get("type")

            if entry_type == "dir":
                if not entry.get("url"):
                    continue
                if depth + 1 > max_depth:
                    raise TraversalLimitError(
                        f"Skill '{identifier}' is nested deeper than {max_depth} levels"
                    )
                stack.append((entry["url"], item_path, depth + 1))
            elif entry_type == "file":
                if len(bundle.files) >= max_files:
                    raise TraversalLimitError(
                        f"Skill '{identifier}' has more than {max_files} files"
                    )
                download_url = entry.get("download_url")
                outcome = client.get(download_url) if download_url else None
                if isinstance(outcome, Fetched):
                    bundle.files[item_path] = outcome.text
                    if on_file is not None:
                        on_file(item_path)
                else:
                    bundle.failed.append(item_path)

    if not bundle.has_marker:
        raise MissingSentinelError(
            f"{SKILL_MARKER} not found in skill '{identifier}'"
        )
    return bundle
