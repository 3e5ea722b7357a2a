"""Resolve component requests into remote URLs and local destinations.

| Kind                 | Remote (under cli-tool/components/)       | Local                                  |
|----------------------|-------------------------------------------|----------------------------------------|
| agent                | agents/{id}.agent.md                      | .github/agents/{name}.agent.md         |
| skill                | skills/{id}/ (contents API)               | .github/skills/{name}/                 |
| instruction          | instructions/{id}.instructions.md         | .github/instructions/{name}.instructions.md |
| prompt               | prompts/{id}.prompt.md                    | .github/prompts/{name}.prompt.md       |
| mcp                  | mcps/{id}.json                            | .vscode/mcp.json (merged)              |
| copilot-instructions | copilot-instructions/{id}.md              | .github/copilot-instructions.md        |
| workspace-agents     | workspace-agents/{id}.md                  | AGENTS.md                              |
| learning-path        | learning-paths/{id}.json                  | (manifest only)                        |

The category segment of an identifier is part of the remote path only; the
local destination is always flattened to the final segment.
"""

from dataclasses import dataclass
from pathlib import Path

from cct.components.types import ComponentKind, ComponentRequest
from cct.constants import (
    API_BASE_URL,
    COMPONENTS_ROOT,
    DEFAULT_BRANCH,
    DEFAULT_OWNER,
    DEFAULT_REPO,
    RAW_BASE_URL,
)


@dataclass(frozen=True)
class SourceRepository:
    """GitHub repository that publishes the components."""

    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    branch: str = DEFAULT_BRANCH

    def raw_url(self, path: str) -> str:
        """Build a raw-content URL for a path under the components root.

        Examples:
            >>> SourceRepository().raw_url("agents/tutor.agent.md")
            'https://raw.githubusercontent.com/StudentCristian/copilot-learning-templates/main/cli-tool/components/agents/tutor.agent.md'
        """
        return f"{RAW_BASE_URL}/{self.owner}/{self.repo}/{self.branch}/{COMPONENTS_ROOT}/{path}"

    def contents_url(self, path: str) -> str:
        """Build a contents-API URL for a path under the components root."""
        url = f"{API_BASE_URL}/repos/{self.owner}/{self.repo}/contents/{COMPONENTS_ROOT}/{path}"
        if self.branch != DEFAULT_BRANCH:
            url += f"?ref={self.branch}"
        return url

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}@{self.branch}"


@dataclass(frozen=True)
class ResolvedComponent:
    """A request paired with where it comes from and where it goes."""

    request: ComponentRequest
    remote_url: str
    local_path: Path  # relative to the project directory


def local_path_for(request: ComponentRequest) -> Path:
    """Return the project-relative destination for a request."""
    config = request.config
    base = Path(config.dest_dir) if config.dest_dir else Path()
    if config.dest_filename:
        return base / config.dest_filename
    if config.is_directory:
        return base / request.name
    return base / f"{request.name}{config.local_extension}"


def remote_url_for(request: ComponentRequest, source: SourceRepository) -> str:
    """Return the URL the request is fetched from."""
    config = request.config
    remote_path = f"{config.remote_subdir}/{request.identifier}{config.remote_extension}"
    if request.kind is ComponentKind.SKILL:
        return source.contents_url(remote_path)
    return source.raw_url(remote_path)


def resolve(request: ComponentRequest, source: SourceRepository | None = None) -> ResolvedComponent:
    """Resolve a request against a source repository."""
    if source is None:
        source = SourceRepository()
    return ResolvedComponent(
        request=request,
        remote_url=remote_url_for(request, source),
        local_path=local_path_for(request),
    )
