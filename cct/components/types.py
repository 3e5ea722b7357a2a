"""Type definitions for installable components."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cct.constants import GITHUB_DIR, MCP_CONFIG_FILENAME, VSCODE_DIR


class ComponentKind(Enum):
    """Kind of component to install."""

    AGENT = "agent"
    SKILL = "skill"
    INSTRUCTION = "instruction"
    PROMPT = "prompt"
    MCP = "mcp"
    COPILOT_INSTRUCTIONS = "copilot-instructions"
    WORKSPACE_AGENTS = "workspace-agents"
    LEARNING_PATH = "learning-path"

    @property
    def label(self) -> str:
        """Human readable name used in messages."""
        return KIND_CONFIGS[self].label

    @property
    def title(self) -> str:
        """Label with its first letter capitalized."""
        label = self.label
        return label[:1].upper() + label[1:]


@dataclass(frozen=True)
class KindConfig:
    """Configuration for a component kind."""

    kind: ComponentKind
    label: str
    remote_subdir: str  # e.g., "agents", "mcps"
    remote_extension: str  # e.g., ".agent.md"; empty for skills
    dest_dir: str  # relative to the project directory
    dest_filename: str | None = None  # fixed filename for singleton kinds
    local_extension: str = ""
    is_directory: bool = False  # True for skills
    is_singleton: bool = False  # copilot-instructions.md, AGENTS.md
    merges_json: bool = False  # True for MCP configs
    hint: str = ""


KIND_CONFIGS: dict[ComponentKind, KindConfig] = {
    ComponentKind.AGENT: KindConfig(
        kind=ComponentKind.AGENT,
        label="agent",
        remote_subdir="agents",
        remote_extension=".agent.md",
        dest_dir=f"{GITHUB_DIR}/agents",
        local_extension=".agent.md",
        hint="Run 'cct --list' to see available agents (e.g., beginner-tutors/python-basics-tutor).",
    ),
    ComponentKind.SKILL: KindConfig(
        kind=ComponentKind.SKILL,
        label="skill",
        remote_subdir="skills",
        remote_extension="",
        dest_dir=f"{GITHUB_DIR}/skills",
        is_directory=True,
        hint=(
            "Use format 'category/skill-name' (e.g., creative-design/algorithmic-art). "
            "Available categories: creative-design, development, document-processing, "
            "enterprise-communication"
        ),
    ),
    ComponentKind.INSTRUCTION: KindConfig(
        kind=ComponentKind.INSTRUCTION,
        label="instruction",
        remote_subdir="instructions",
        remote_extension=".instructions.md",
        dest_dir=f"{GITHUB_DIR}/instructions",
        local_extension=".instructions.md",
        hint="Available instructions: always-on/beginner-friendly",
    ),
    ComponentKind.PROMPT: KindConfig(
        kind=ComponentKind.PROMPT,
        label="prompt",
        remote_subdir="prompts",
        remote_extension=".prompt.md",
        dest_dir=f"{GITHUB_DIR}/prompts",
        local_extension=".prompt.md",
        hint="Available prompts: learning/generate-exercises",
    ),
    ComponentKind.MCP: KindConfig(
        kind=ComponentKind.MCP,
        label="MCP",
        remote_subdir="mcps",
        remote_extension=".json",
        dest_dir=VSCODE_DIR,
        dest_filename=MCP_CONFIG_FILENAME,
        merges_json=True,
        hint=(
            "Available MCPs: web-fetch, filesystem-access, github-integration, "
            "memory-integration, mysql-integration, postgresql-integration"
        ),
    ),
    ComponentKind.COPILOT_INSTRUCTIONS: KindConfig(
        kind=ComponentKind.COPILOT_INSTRUCTIONS,
        label="copilot instructions",
        remote_subdir="copilot-instructions",
        remote_extension=".md",
        dest_dir=GITHUB_DIR,
        dest_filename="copilot-instructions.md",
        is_singleton=True,
        hint="Available copilot instructions: beginner-friendly",
    ),
    ComponentKind.WORKSPACE_AGENTS: KindConfig(
        kind=ComponentKind.WORKSPACE_AGENTS,
        label="workspace agents",
        remote_subdir="workspace-agents",
        remote_extension=".md",
        dest_dir="",
        dest_filename="AGENTS.md",
        is_singleton=True,
        hint="Available workspace agents files: learning-workspace",
    ),
    ComponentKind.LEARNING_PATH: KindConfig(
        kind=ComponentKind.LEARNING_PATH,
        label="learning path",
        remote_subdir="learning-paths",
        remote_extension=".json",
        dest_dir="",
        hint="Available learning paths: python-beginner",
    ),
}


@dataclass(frozen=True)
class ComponentRequest:
    """A single component the operator asked for.

    The identifier may carry a category prefix (``category/name``). The
    category only selects the remote location; it never appears locally.
    """

    kind: ComponentKind
    identifier: str

    @property
    def name(self) -> str:
        """The final path segment of the identifier."""
        return self.identifier.rsplit("/", 1)[-1]

    @property
    def category(self) -> str | None:
        """The segment before the name, or None for bare names."""
        parts = self.identifier.split("/")
        return parts[-2] if len(parts) > 1 else None

    @property
    def config(self) -> KindConfig:
        return KIND_CONFIGS[self.kind]

    def __str__(self) -> str:
        return f"{self.kind.label} '{self.identifier}'"


@dataclass
class InstallResult:
    """Outcome of one install attempt."""

    kind: ComponentKind
    identifier: str
    success: bool
    error: str | None = None
    skipped: bool = False  # operator declined an overwrite
    installed_path: Path | None = None
    files_written: int = 0

    @classmethod
    def ok(cls, request: ComponentRequest, path: Path | None, files_written: int = 1) -> "InstallResult":
        return cls(
            kind=request.kind,
            identifier=request.identifier,
            success=True,
            installed_path=path,
            files_written=files_written,
        )

    @classmethod
    def failed(cls, request: ComponentRequest, error: str, skipped: bool = False) -> "InstallResult":
        return cls(
            kind=request.kind,
            identifier=request.identifier,
            success=False,
            error=error,
            skipped=skipped,
        )
