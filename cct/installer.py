"""Install single components: resolve, fetch, write."""

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from cct.components import (
    ComponentKind,
    ComponentRequest,
    InstallResult,
    ResolvedComponent,
    resolve,
)
from cct.config import InstallOptions
from cct.exceptions import (
    ComponentNotFoundError,
    FetchError,
    MissingSentinelError,
    ParseError,
    TraversalLimitError,
    UserCancelledError,
)
from cct.fetcher import ContentClient, download_skill
from cct.mcp import install_mcp_file
from cct.writer import confirm_overwrite, write_skill, write_text


def _decline(_message: str) -> bool:
    return False


class Installer:
    """Installs components into one project directory.

    Every failure that concerns a single component is caught in ``install``
    and turned into a failed InstallResult, so callers can carry on with the
    next component. Filesystem errors and anything unexpected propagate.
    """

    def __init__(
        self,
        options: InstallOptions,
        client: ContentClient,
        console: Console | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        self.options = options
        self.client = client
        self.console = console or Console()
        # Without a prompt, existing singleton files are kept unless --yes
        self._confirm = confirm or _decline

    @property
    def project_dir(self) -> Path:
        return self.options.project_dir

    def _debug(self, message: str) -> None:
        if self.options.verbose:
            self.console.print(f"[dim]{message}[/dim]")

    @contextmanager
    def _spinner(self, text: str) -> Iterator[None]:
        """Show a spinner while fetching, unless verbose output is on."""
        if self.options.verbose:
            yield
            return
        with Live(Spinner("dots", text=text), console=self.console, transient=True):
            yield

    def install(self, request: ComponentRequest) -> InstallResult:
        """Install one component and report the outcome."""
        if request.kind is ComponentKind.LEARNING_PATH:
            raise ValueError("Learning paths are expanded before installation")

        resolved = resolve(request, self.options.source)
        label = request.kind.label

        if self.options.dry_run:
            self.console.print(
                f"[dim]  {resolved.remote_url} -> {resolved.local_path.as_posix()}[/dim]"
            )
            return InstallResult.ok(request, self.project_dir / resolved.local_path, files_written=0)

        self._debug(f"Fetching {resolved.remote_url}")
        try:
            if request.kind is ComponentKind.SKILL:
                result = self._install_skill(resolved)
            elif request.kind is ComponentKind.MCP:
                result = self._install_mcp(resolved)
            else:
                result = self._install_file(resolved)
        except ComponentNotFoundError:
            self.console.print(f"[red]{request.kind.title} '{request.identifier}' not found[/red]")
            if request.config.hint:
                self.console.print(f"[yellow]{request.config.hint}[/yellow]")
            return InstallResult.failed(request, "not found")
        except UserCancelledError as e:
            self.console.print(f"[yellow]{e}. Skipped {label} '{request.identifier}'.[/yellow]")
            return InstallResult.failed(request, str(e), skipped=True)
        except (FetchError, ParseError, MissingSentinelError, TraversalLimitError) as e:
            self.console.print(f"[red]Error installing {label} '{request.identifier}': {e}[/red]")
            return InstallResult.failed(request, str(e))

        installed = result.installed_path
        shown = installed.relative_to(self.project_dir).as_posix() if installed else ""
        self.console.print(f"[green]Installed {label} '{request.identifier}'[/green] [dim]{shown}[/dim]")
        return result

    def _install_file(self, resolved: ResolvedComponent) -> InstallResult:
        request = resolved.request
        target = self.project_dir / resolved.local_path

        if request.config.is_singleton:
            confirm_overwrite(target, self.options.assume_yes, self._confirm)

        with self._spinner(f"Fetching {request.kind.label} '{request.identifier}'..."):
            content = self.client.get_text(resolved.remote_url)

        path = write_text(self.project_dir, resolved.local_path, content)
        self._debug(f"Wrote {path}")
        return InstallResult.ok(request, path)

    def _install_skill(self, resolved: ResolvedComponent) -> InstallResult:
        request = resolved.request

        with self._spinner(f"Fetching skill '{request.identifier}'..."):
            bundle = download_skill(
                self.client,
                request.identifier,
                source=self.options.source,
                max_files=self.options.max_skill_files,
                max_depth=self.options.max_skill_depth,
                on_file=lambda path: self._debug(f"Downloaded {path}"),
            )

        for failed in bundle.failed:
            self.console.print(f"[yellow]Could not download {failed}[/yellow]")

        written = write_skill(self.project_dir, resolved.local_path, bundle)
        self._debug(f"Wrote {len(written)} file(s) to {resolved.local_path.as_posix()}")
        return InstallResult.ok(
            request, self.project_dir / resolved.local_path, files_written=len(written)
        )

    def _install_mcp(self, resolved: ResolvedComponent) -> InstallResult:
        request = resolved.request
        target = self.project_dir / resolved.local_path

        with self._spinner(f"Fetching MCP '{request.identifier}'..."):
            payload = self.client.get_json(resolved.remote_url)

        if target.exists():
            self._debug(f"Merging into existing {resolved.local_path.as_posix()}")
        servers = install_mcp_file(target, payload)
        self._debug(f"Servers: {', '.join(servers) or '(none)'}")
        return InstallResult.ok(request, target)
