"""CLI entry point for cct / create-copilot-config."""

from pathlib import Path
from typing import Annotated, List, Optional

import typer

from cct import __version__
from cct.batch import build_requests, run_batch, split_identifiers
from cct.catalog import available_agents
from cct.cli.common import confirm, console, print_available_agents, resolve_project_dir
from cct.components import ComponentKind
from cct.config import InstallOptions
from cct.exceptions import CctError
from cct.fetcher import ContentClient
from cct.global_agents import (
    create_global_agent,
    list_global_agents,
    remove_global_agent,
    update_global_agent,
)
from cct.health import print_health_report, run_health_check
from cct.installer import Installer
from cct.learning_path import install_learning_path

app = typer.Typer(
    name="cct",
    help="Set up GitHub Copilot agents, skills, instructions, prompts and MCP servers for learning.",
    add_completion=False,
)

MultiValue = Optional[List[str]]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cct {__version__}")
        raise typer.Exit()


def _handle_global_agents(
    options: InstallOptions,
    create: str | None,
    list_all: bool,
    remove: str | None,
    update: str | None,
) -> None:
    if list_all:
        names = list_global_agents()
        if not names:
            console.print("[yellow]No global agents installed.[/yellow]")
        for name in names:
            console.print(f"  {name}")
        return

    if remove:
        path = remove_global_agent(remove)
        console.print(f"[green]Removed global agent '{remove}'[/green] [dim]{path}[/dim]")
        return

    with ContentClient(timeout=options.timeout) as client:
        if create:
            path = create_global_agent(client, create, options.source)
            console.print(f"[green]Created global agent '{create}'[/green] [dim]{path}[/dim]")
        elif update:
            path = update_global_agent(client, update, options.source)
            console.print(f"[green]Updated global agent '{update}'[/green] [dim]{path}[/dim]")


@app.command()
def main(
    ctx: typer.Context,
    agent: Annotated[MultiValue, typer.Option("--agent", help="Agent(s) to install (comma-separated).")] = None,
    skill: Annotated[MultiValue, typer.Option("--skill", help="Skill(s) to install (comma-separated).")] = None,
    mcp: Annotated[MultiValue, typer.Option("--mcp", help="MCP server config(s) to merge into .vscode/mcp.json.")] = None,
    instruction: Annotated[
        MultiValue, typer.Option("--instruction", help="Instruction file(s) for .github/instructions/.")
    ] = None,
    prompt: Annotated[MultiValue, typer.Option("--prompt", help="Prompt file(s) for .github/prompts/.")] = None,
    copilot_instructions: Annotated[
        Optional[str],
        typer.Option("--copilot-instructions", help="Template for .github/copilot-instructions.md."),
    ] = None,
    workspace_agents: Annotated[
        Optional[str],
        typer.Option("--workspace-agents", help="Template for AGENTS.md at the project root."),
    ] = None,
    learning_path: Annotated[
        Optional[str], typer.Option("--learning-path", help="Install a complete learning path.")
    ] = None,
    level: Annotated[
        Optional[str],
        typer.Option("--level", help="Only install a learning path of this level (beginner, intermediate, advanced)."),
    ] = None,
    directory: Annotated[
        Optional[Path], typer.Option("--directory", "-d", help="Target directory (default: current directory).")
    ] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Overwrite existing files without asking.")] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show what would be installed without downloading anything.")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Print URLs and every file written.")] = False,
    health_check: Annotated[
        bool,
        typer.Option("--health-check", "--health", "--check", "--verify", help="Check the project's Copilot setup."),
    ] = False,
    list_available: Annotated[bool, typer.Option("--list", help="List available agents.")] = False,
    create_agent: Annotated[
        Optional[str], typer.Option("--create-agent", help="Install an agent globally (~/.cct/agents).")
    ] = None,
    list_agents: Annotated[bool, typer.Option("--list-agents", help="List global agents.")] = False,
    remove_agent: Annotated[Optional[str], typer.Option("--remove-agent", help="Remove a global agent.")] = None,
    update_agent: Annotated[
        Optional[str], typer.Option("--update-agent", help="Update a global agent to the latest version.")
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    """Install learning components from the copilot-learning-templates repository.

    Examples:
      cct --agent beginner-tutors/python-basics-tutor
      cct --agent a,b --skill creative-design/algorithmic-art
      cct --mcp web-fetch,github-integration --yes
      cct --learning-path python-beginner --level beginner
    """
    selection = {
        ComponentKind.AGENT: agent,
        ComponentKind.MCP: mcp,
        ComponentKind.SKILL: skill,
        ComponentKind.INSTRUCTION: instruction,
        ComponentKind.PROMPT: prompt,
        ComponentKind.COPILOT_INSTRUCTIONS: copilot_instructions,
        ComponentKind.WORKSPACE_AGENTS: workspace_agents,
    }
    wants_components = any(value is not None for value in selection.values())

    try:
        project_dir = resolve_project_dir(directory)
        options = InstallOptions.build(
            project_dir,
            assume_yes=yes,
            dry_run=dry_run,
            verbose=verbose,
            level=level,
        )

        if create_agent or list_agents or remove_agent or update_agent:
            _handle_global_agents(options, create_agent, list_agents, remove_agent, update_agent)
            return

        if health_check:
            console.print(f"[dim]Checking {project_dir}[/dim]")
            print_health_report(run_health_check(project_dir), console)
            return

        if list_available:
            with ContentClient(timeout=options.timeout) as client:
                agents, origin = available_agents(client, options.source)
            print_available_agents(agents, origin)
            return

        if not wants_components and learning_path is None:
            typer.echo(ctx.get_help())
            return

        if verbose:
            console.print(f"[dim]Target directory: {project_dir}[/dim]")
            console.print(f"[dim]Source: {options.source}[/dim]")

        with ContentClient(timeout=options.timeout) as client:
            installer = Installer(options, client, console, confirm=confirm)

            for name in split_identifiers(learning_path):
                install_learning_path(installer, name)

            if wants_components:
                run_batch(installer, build_requests(selection, console), console)

    except (CctError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
