"""Command-line interface."""

from fantasy_client.cli.main import cli


__all__ = ["cli"]
