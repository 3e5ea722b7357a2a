"""Run configuration and the optional cct.toml file."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli

from cct.components.resolver import SourceRepository
from cct.constants import (
    CONFIG_FILENAME,
    DEFAULT_MAX_SKILL_DEPTH,
    DEFAULT_MAX_SKILL_FILES,
    DEFAULT_TIMEOUT,
)
from cct.exceptions import ConfigParseError, ConfigValidationError


@dataclass(frozen=True)
class FileConfig:
    """Settings read from cct.toml.

    Example:
        [source]
        owner = "StudentCristian"
        repo = "copilot-learning-templates"
        branch = "main"

        [network]
        timeout = 30.0

        [skills]
        max_files = 200
        max_depth = 8
    """

    source: SourceRepository = field(default_factory=SourceRepository)
    timeout: float | None = DEFAULT_TIMEOUT
    max_skill_files: int = DEFAULT_MAX_SKILL_FILES
    max_skill_depth: int = DEFAULT_MAX_SKILL_DEPTH

    @classmethod
    def load(cls, path: Path) -> "FileConfig":
        """Load configuration from a cct.toml file.

        Raises:
            ConfigParseError: If the file cannot be parsed
            ConfigValidationError: If a value has the wrong type
        """
        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigParseError(f"Failed to parse {path}: {e}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "FileConfig":
        source_data = _table(data, "source")
        network_data = _table(data, "network")
        skills_data = _table(data, "skills")

        defaults = SourceRepository()
        source = SourceRepository(
            owner=_value(source_data, "source.owner", str, defaults.owner),
            repo=_value(source_data, "source.repo", str, defaults.repo),
            branch=_value(source_data, "source.branch", str, defaults.branch),
        )
        timeout = _value(network_data, "network.timeout", (int, float), DEFAULT_TIMEOUT)
        if timeout <= 0:
            # A non-positive timeout disables it
            timeout = None

        max_files = _value(skills_data, "skills.max_files", int, DEFAULT_MAX_SKILL_FILES)
        max_depth = _value(skills_data, "skills.max_depth", int, DEFAULT_MAX_SKILL_DEPTH)
        if max_files < 1 or max_depth < 0:
            raise ConfigValidationError("skills.max_files must be >= 1 and skills.max_depth >= 0")

        return cls(
            source=source,
            timeout=float(timeout) if timeout is not None else None,
            max_skill_files=max_files,
            max_skill_depth=max_depth,
        )


def _table(data: dict[str, Any], name: str) -> dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigValidationError(f"[{name}] must be a table, got {type(table).__name__}")
    return table


def _value(table: dict[str, Any], key: str, expected: type | tuple, default: Any) -> Any:
    value = table.get(key.split(".", 1)[1], default)
    # bool is an int subclass; reject it for numeric settings
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ConfigValidationError(f"'{key}' has invalid value {value!r}")
    return value


def find_config(start_path: Path | None = None) -> Path | None:
    """Find cct.toml by walking up the directory tree.

    Args:
        start_path: Starting directory (defaults to current working directory)

    Returns:
        Path to cct.toml if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while True:
        config_path = current / CONFIG_FILENAME
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def load_file_config(start_path: Path | None = None) -> FileConfig:
    """Load the nearest cct.toml, or defaults when there is none."""
    path = find_config(start_path)
    if path is None:
        return FileConfig()
    return FileConfig.load(path)


@dataclass(frozen=True)
class InstallOptions:
    """Everything an install run needs, built once by the CLI."""

    project_dir: Path
    assume_yes: bool = False
    dry_run: bool = False
    verbose: bool = False
    level: str | None = None
    source: SourceRepository = field(default_factory=SourceRepository)
    timeout: float | None = DEFAULT_TIMEOUT
    max_skill_files: int = DEFAULT_MAX_SKILL_FILES
    max_skill_depth: int = DEFAULT_MAX_SKILL_DEPTH

    @classmethod
    def build(
        cls,
        project_dir: Path,
        *,
        assume_yes: bool = False,
        dry_run: bool = False,
        verbose: bool = False,
        level: str | None = None,
        file_config: FileConfig | None = None,
    ) -> "InstallOptions":
        """Combine command-line flags with the nearest cct.toml."""
        if file_config is None:
            file_config = load_file_config(project_dir)
        return cls(
            project_dir=project_dir,
            assume_yes=assume_yes,
            dry_run=dry_run,
            verbose=verbose,
            level=level,
            source=file_config.source,
            timeout=file_config.timeout,
            max_skill_files=file_config.max_skill_files,
            max_skill_depth=file_config.max_skill_depth,
        )
