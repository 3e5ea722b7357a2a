"""Check what a project already has installed."""

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.table import Table

from cct.components import KIND_CONFIGS, ComponentKind
from cct.constants import SKILL_MARKER
from cct.exceptions import ParseError
from cct.mcp import SERVERS_KEY, extract_servers, load_mcp_file


@dataclass
class HealthCheck:
    """Result of a single check."""

    name: str
    passed: bool
    detail: str


def _count_files(directory: Path, suffix: str) -> int:
    if not directory.is_dir():
        return 0
    return sum(1 for path in directory.glob(f"*{suffix}") if path.is_file())


def _count_skills(directory: Path) -> int:
    if not directory.is_dir():
        return 0
    return sum(1 for path in directory.iterdir() if (path / SKILL_MARKER).is_file())


def _check_singleton(project_dir: Path, kind: ComponentKind) -> HealthCheck:
    config = KIND_CONFIGS[kind]
    relative = Path(config.dest_dir) / config.dest_filename
    exists = (project_dir / relative).is_file()
    return HealthCheck(
        name=relative.as_posix(),
        passed=exists,
        detail="present" if exists else "missing",
    )


def _check_mcp(project_dir: Path) -> HealthCheck:
    config = KIND_CONFIGS[ComponentKind.MCP]
    relative = Path(config.dest_dir) / config.dest_filename
    path = project_dir / relative
    if not path.exists():
        return HealthCheck(relative.as_posix(), False, "missing")
    try:
        data = load_mcp_file(path)
        servers = extract_servers(data)
    except ParseError as e:
        return HealthCheck(relative.as_posix(), False, str(e))
    if SERVERS_KEY not in data:
        return HealthCheck(relative.as_posix(), False, f"no '{SERVERS_KEY}' key")
    return HealthCheck(relative.as_posix(), True, f"{len(servers)} server(s)")


def run_health_check(project_dir: Path) -> list[HealthCheck]:
    """Inspect the Copilot files of a project."""
    checks = [
        _check_singleton(project_dir, ComponentKind.COPILOT_INSTRUCTIONS),
        _check_singleton(project_dir, ComponentKind.WORKSPACE_AGENTS),
    ]

    for kind in (ComponentKind.AGENT, ComponentKind.INSTRUCTION, ComponentKind.PROMPT):
        config = KIND_CONFIGS[kind]
        count = _count_files(project_dir / config.dest_dir, config.local_extension)
        checks.append(HealthCheck(config.dest_dir, count > 0, f"{count} {config.label}(s)"))

    skills_dir = KIND_CONFIGS[ComponentKind.SKILL].dest_dir
    count = _count_skills(project_dir / skills_dir)
    checks.append(HealthCheck(skills_dir, count > 0, f"{count} skill(s)"))

    checks.append(_check_mcp(project_dir))
    return checks


def print_health_report(checks: list[HealthCheck], console: Console) -> None:
    """Render checks as a table."""
    table = Table(title="Copilot setup")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Detail", style="dim")
    for check in checks:
        status = "[green]ok[/green]" if check.passed else "[yellow]attention[/yellow]"
        table.add_row(check.name, status, check.detail)
    console.print(table)

    passed = sum(1 for check in checks if check.passed)
    console.print(f"[dim]{passed} of {len(checks)} checks passed[/dim]")
