"""CLI command modules."""

from collabgraph.cli.commands import demo, export, query, registry

__all__ = [
    "demo",
    "export",
    "query",
    "registry",
]
