"""HTTP access to the component source.

Every request goes through ``ContentClient.get``, which turns the response
into one of three outcomes. Callers branch on the outcome type instead of on
status codes.
"""

import json
import os
from dataclasses import dataclass
from typing import Any, Union

import httpx

from cct.constants import API_BASE_URL, DEFAULT_TIMEOUT, USER_AGENT
from cct.exceptions import ComponentNotFoundError, FetchError, ParseError


@dataclass(frozen=True)
class Fetched:
    """A 2xx response body."""

    url: str
    text: str


@dataclass(frozen=True)
class NotFound:
    """The server answered 404."""

    url: str


@dataclass(frozen=True)
class FetchFailed:
    """Any other non-2xx status, or a transport failure (status_code 0)."""

    url: str
    status_code: int
    reason: str


FetchOutcome = Union[Fetched, NotFound, FetchFailed]


class ContentClient:
    """Thin wrapper around a single ``httpx.Client`` for one run.

    Use as a context manager so the connection pool is closed afterwards:

        with ContentClient() as client:
            outcome = client.get(url)
    """

    def __init__(
        self,
        timeout: float | None = DEFAULT_TIMEOUT,
        github_token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if github_token is None:
            github_token = os.environ.get("GITHUB_TOKEN") or None
        self._github_token = github_token
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    def __enter__(self) -> "ContentClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _headers_for(self, url: str) -> dict[str, str]:
        if not url.startswith(API_BASE_URL):
            return {}
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self._github_token:
            headers["Authorization"] = f"Bearer {self._github_token}"
        return headers

    def get(self, url: str) -> FetchOutcome:
        """GET a URL and classify the response."""
        try:
            response = self._client.get(url, headers=self._headers_for(url))
        except httpx.RequestError as e:
            return FetchFailed(url=url, status_code=0, reason=str(e) or type(e).__name__)

        if response.status_code == 404:
            return NotFound(url=url)
        if not response.is_success:
            return FetchFailed(
                url=url,
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
        return Fetched(url=url, text=response.text)

    def get_text(self, url: str) -> str:
        """GET a URL and return its body.

        Raises:
            ComponentNotFoundError: If the server answers 404
            FetchError: On any other error status or network failure
        """
        outcome = self.get(url)
        if isinstance(outcome, NotFound):
            raise ComponentNotFoundError(f"Not found: {url}")
        if isinstance(outcome, FetchFailed):
            raise FetchError(url, outcome.status_code, outcome.reason)
        return outcome.text

    def get_json(self, url: str) -> Any:
        """GET a URL and decode its body as JSON.

        Raises:
            ComponentNotFoundError: If the server answers 404
            FetchError: On any other error status or network failure
            ParseError: If the body is not valid JSON
        """
        return parse_json(self.get_text(url), url)


def parse_json(text: str, source: str) -> Any:
    """Decode JSON text, raising ParseError with the source in the message."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {source}: {e}")
