"""Shared CLI utilities for cct."""

from pathlib import Path

import typer
from rich.console import Console

from cct.catalog import ROOT_CATEGORY, AgentEntry, group_by_category
from cct.exceptions import CctError

console = Console()


def resolve_project_dir(directory: Path | None) -> Path:
    """Return the absolute project directory, defaulting to the current one.

    Raises:
        CctError: If the directory does not exist
    """
    project_dir = (directory or Path.cwd()).expanduser().resolve()
    if not project_dir.is_dir():
        raise CctError(f"Directory does not exist: {project_dir}")
    return project_dir


def confirm(message: str) -> bool:
    """Ask a yes/no question, defaulting to no."""
    return typer.confirm(message, default=False)


def print_available_agents(agents: list[AgentEntry], origin: str) -> None:
    """Print agents grouped by category."""
    console.print(f"\n[yellow]Available agents[/yellow] [dim]({origin})[/dim]")
    console.print("[dim]Use format: category/agent-name, or agent-name for general agents[/dim]\n")

    for category, entries in group_by_category(agents).items():
        heading = "General agents" if category == ROOT_CATEGORY else category
        console.print(f"[cyan]{heading}[/cyan]")
        for agent in entries:
            console.print(f"[dim]  - {agent.path}[/dim]")
        console.print("")

    console.print("[blue]Examples:[/blue]")
    console.print("[dim]  cct --agent beginner-tutors/python-basics-tutor[/dim]")
    console.print("[dim]  cct --agent beginner-tutors/python-basics-tutor --yes[/dim]")
