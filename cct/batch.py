"""Install several components in one run."""

from dataclasses import dataclass, field
from typing import Iterable

from rich.console import Console

from cct.components import KIND_CONFIGS, ComponentKind, ComponentRequest, InstallResult
from cct.installer import Installer

# Fixed processing order for a batch
BATCH_ORDER = (
    ComponentKind.AGENT,
    ComponentKind.MCP,
    ComponentKind.SKILL,
    ComponentKind.INSTRUCTION,
    ComponentKind.PROMPT,
    ComponentKind.COPILOT_INSTRUCTIONS,
    ComponentKind.WORKSPACE_AGENTS,
)


def split_identifiers(values: str | Iterable[str] | None) -> list[str]:
    """Flatten comma-separated and repeated values into a clean list.

    Examples:
        >>> split_identifiers("a, b,,c")
        ['a', 'b', 'c']
        >>> split_identifiers(["a,b", " c "])
        ['a', 'b', 'c']
        >>> split_identifiers(None)
        []
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    identifiers = []
    for value in values:
        identifiers.extend(part.strip() for part in value.split(","))
    return [identifier for identifier in identifiers if identifier]


def build_requests(
    selection: dict[ComponentKind, str | Iterable[str] | None],
    console: Console | None = None,
) -> list[ComponentRequest]:
    """Normalize the per-kind selection into an ordered request list.

    Singleton kinds keep only their first identifier.
    """
    requests = []
    for kind in BATCH_ORDER:
        identifiers = split_identifiers(selection.get(kind))
        if KIND_CONFIGS[kind].is_singleton and len(identifiers) > 1:
            if console is not None:
                console.print(
                    f"[yellow]Only one {kind.label} file can be installed; "
                    f"using '{identifiers[0]}'.[/yellow]"
                )
            identifiers = identifiers[:1]
        requests.extend(ComponentRequest(kind, identifier) for identifier in identifiers)
    return requests


@dataclass
class BatchSummary:
    """Aggregate outcome of a batch."""

    results: list[InstallResult] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failures(self) -> list[InstallResult]:
        return [result for result in self.results if not result.success and not result.skipped]

    @property
    def skipped(self) -> list[InstallResult]:
        return [result for result in self.results if result.skipped]

    @property
    def all_succeeded(self) -> bool:
        return self.succeeded == self.attempted

    def describe(self) -> str:
        """One-line summary, e.g. 'Installed 2 of 3 components'."""
        if self.all_succeeded:
            return f"Installed {self.succeeded} component(s)"
        return f"Installed {self.succeeded} of {self.attempted} components"


def print_plan(requests: list[ComponentRequest], console: Console) -> None:
    """Print how many components of each kind are about to be installed."""
    console.print(f"[cyan]Installing {len(requests)} component(s):[/cyan]")
    for kind in BATCH_ORDER:
        count = sum(1 for request in requests if request.kind is kind)
        if count:
            console.print(f"[dim]  {kind.title}s: {count}[/dim]")


def print_summary(summary: BatchSummary, console: Console) -> None:
    """Print the aggregate report for a batch."""
    if summary.all_succeeded:
        console.print(f"\n[green]{summary.describe()}[/green]")
        return

    style = "yellow" if summary.succeeded else "red"
    console.print(f"\n[{style}]{summary.describe()}[/{style}]")
    if summary.failures:
        console.print(f"[red]{len(summary.failures)} component(s) failed to install:[/red]")
        for result in summary.failures:
            console.print(f"[red]  - {result.kind.label} '{result.identifier}': {result.error}[/red]")
    for result in summary.skipped:
        console.print(f"[dim]  - {result.kind.label} '{result.identifier}' skipped[/dim]")


def run_batch(
    installer: Installer,
    requests: list[ComponentRequest],
    console: Console | None = None,
) -> BatchSummary:
    """Install each request in order and report the aggregate outcome.

    A failing component never stops the batch, and nothing already written
    is rolled back.
    """
    console = console or installer.console
    summary = BatchSummary()

    if not requests:
        console.print("[yellow]No components specified to install.[/yellow]")
        return summary

    print_plan(requests, console)
    if installer.options.dry_run:
        console.print("[yellow]Dry run - nothing will be downloaded or written:[/yellow]")

    for request in requests:
        summary.results.append(installer.install(request))

    print_summary(summary, console)
    return summary
