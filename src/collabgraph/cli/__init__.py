"""Command line interface."""

from collabgraph.cli.app import app

__all__ = ["app"]
