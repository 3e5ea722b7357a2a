"""Shared exception classes for cct."""


class CctError(Exception):
    """Base exception for cct errors."""


class ComponentNotFoundError(CctError):
    """Raised when the remote source answers 404 for a component."""


class FetchError(CctError):
    """Raised when the remote source answers with a non-404 error status."""

    def __init__(self, url: str, status_code: int, reason: str) -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code:
            super().__init__(f"HTTP {status_code}: {reason}")
        else:
            super().__init__(f"Network error: {reason}")


class ParseError(CctError):
    """Raised when a manifest or MCP payload is not valid JSON of the expected shape."""


class MissingSentinelError(CctError):
    """Raised when a downloaded skill has no SKILL.md."""


class TraversalLimitError(CctError):
    """Raised when a skill listing exceeds the file or depth bound."""


class UserCancelledError(CctError):
    """Raised when the operator declines to overwrite a file."""


class ConfigParseError(CctError):
    """Raised when cct.toml cannot be parsed."""


class ConfigValidationError(CctError):
    """Raised when cct.toml contains invalid configuration."""
