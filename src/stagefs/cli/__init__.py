"""CLI entrypoints for stagefs."""

from stagefs.cli.main import app

__all__ = ["app"]
