"""Test configuration and fixtures."""

import io
import json
import os
from pathlib import Path

import httpx
import pytest
from rich.console import Console

from cct.components import SourceRepository
from cct.config import InstallOptions
from cct.fetcher import ContentClient
from cct.installer import Installer

SKILL_DOWNLOAD_BASE = "https://downloads.example.test/skills"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "network: tests that make real network requests")


@pytest.fixture(autouse=True)
def skip_network_unless_enabled(request):
    """Network tests only run with RUN_NETWORK_TESTS=1."""
    if request.node.get_closest_marker("network"):
        if os.environ.get("RUN_NETWORK_TESTS", "").lower() not in ("1", "true", "yes"):
            pytest.skip("Network tests disabled (set RUN_NETWORK_TESTS=1)")


@pytest.fixture(autouse=True)
def no_github_token(monkeypatch):
    """Keep a developer's GITHUB_TOKEN out of request headers."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


class FakeRemote:
    """Serves canned responses for raw-content and contents-API URLs."""

    def __init__(self, source: SourceRepository | None = None) -> None:
        self.source = source or SourceRepository()
        self.responses: dict[str, tuple[int, str]] = {}
        self.requested: list[str] = []

    def add(self, url: str, body: str, status: int = 200) -> str:
        self.responses[url] = (status, body)
        return url

    def add_component(self, path: str, body: str, status: int = 200) -> str:
        """Serve body at the raw URL of a path under the components root."""
        return self.add(self.source.raw_url(path), body, status)

    def add_skill(self, identifier: str, files: dict[str, str]) -> None:
        """Publish a skill directory with the given relative file paths."""
        listings: dict[str, list[dict]] = {"": []}
        for relative, content in files.items():
            parts = relative.split("/")
            for depth in range(1, len(parts)):
                parent = "/".join(parts[: depth - 1])
                directory = "/".join(parts[:depth])
                if directory not in listings:
                    listings[directory] = []
                    listings.setdefault(parent, []).append(
                        {"name": parts[depth - 1], "type": "dir", "url": self._listing_url(identifier, directory)}
                    )
            download_url = f"{SKILL_DOWNLOAD_BASE}/{identifier}/{relative}"
            self.add(download_url, content)
            listings.setdefault("/".join(parts[:-1]), []).append(
                {"name": parts[-1], "type": "file", "download_url": download_url}
            )

        for directory, entries in listings.items():
            self.add(self._listing_url(identifier, directory), json.dumps(entries))

    def _listing_url(self, identifier: str, directory: str) -> str:
        path = f"skills/{identifier}"
        if directory:
            path += f"/{directory}"
        return self.source.contents_url(path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        status, body = self.responses.get(url, (404, "404: Not Found"))
        return httpx.Response(status, text=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def client(remote: FakeRemote):
    with ContentClient(transport=remote.transport()) as content_client:
        yield content_client


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory."""
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(file=output, width=400, color_system=None)


@pytest.fixture
def make_installer(project: Path, client: ContentClient, console: Console):
    """Build an Installer for the project with optional overrides."""

    def _make(confirm=None, **option_overrides) -> Installer:
        options = InstallOptions(project_dir=project, **option_overrides)
        return Installer(options, client, console, confirm=confirm)

    return _make
