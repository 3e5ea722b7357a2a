"""cct: install GitHub Copilot learning components into a project."""

__version__ = "0.4.0"
