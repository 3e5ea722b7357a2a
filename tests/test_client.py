"""Tests for the HTTP content client."""

import httpx
import pytest

from cct.exceptions import ComponentNotFoundError, FetchError, ParseError
from cct.fetcher import ContentClient, Fetched, FetchFailed, NotFound

URL = "https://raw.githubusercontent.com/o/r/main/cli-tool/components/agents/a.agent.md"


class TestGet:
    """ContentClient.get classifies responses."""

    def test_success(self, remote, client):
        remote.add(URL, "# Agent")
        outcome = client.get(URL)
        assert outcome == Fetched(url=URL, text="# Agent")

    def test_not_found(self, client):
        assert client.get(URL) == NotFound(url=URL)

    def test_server_error(self, remote, client):
        remote.add(URL, "boom", status=500)
        outcome = client.get(URL)
        assert isinstance(outcome, FetchFailed)
        assert outcome.status_code == 500
        assert outcome.reason == "Internal Server Error"

    def test_transport_error_becomes_fetch_failed(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with ContentClient(transport=httpx.MockTransport(handler)) as client:
            outcome = client.get(URL)

        assert isinstance(outcome, FetchFailed)
        assert outcome.status_code == 0
        assert "connection refused" in outcome.reason


class TestUnwrap:
    """get_text/get_json raise typed errors."""

    def test_get_text_not_found(self, client):
        with pytest.raises(ComponentNotFoundError):
            client.get_text(URL)

    def test_get_text_fetch_error_carries_status(self, remote, client):
        remote.add(URL, "nope", status=403)
        with pytest.raises(FetchError) as exc_info:
            client.get_text(URL)
        assert exc_info.value.status_code == 403
        assert "HTTP 403" in str(exc_info.value)

    def test_get_json_parse_error(self, remote, client):
        remote.add(URL, "{not json")
        with pytest.raises(ParseError):
            client.get_json(URL)

    def test_get_json(self, remote, client):
        remote.add(URL, '{"a": 1}')
        assert client.get_json(URL) == {"a": 1}


class TestHeaders:
    """GitHub API requests carry the API headers."""

    def test_token_only_sent_to_api(self):
        seen = {}

        def handler(request):
            seen[request.url.host] = request.headers.get("Authorization")
            return httpx.Response(200, text="[]")

        transport = httpx.MockTransport(handler)
        with ContentClient(github_token="secret", transport=transport) as client:
            client.get("https://api.github.com/repos/o/r/contents/x")
            client.get(URL)

        assert seen["api.github.com"] == "Bearer secret"
        assert seen["raw.githubusercontent.com"] is None

    def test_token_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        seen = []

        def handler(request):
            seen.append(request.headers.get("Authorization"))
            return httpx.Response(200, text="[]")

        with ContentClient(transport=httpx.MockTransport(handler)) as client:
            client.get("https://api.github.com/rate_limit")

        assert seen == ["Bearer from-env"]
