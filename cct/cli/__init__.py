"""Command-line interface for cct."""
