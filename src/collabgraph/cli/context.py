"""Config, logging and graph loading shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from collabgraph.cli.console import error
from collabgraph.config import CollabConfig, ConfigError, load_config
from collabgraph.errors import GraphError
from collabgraph.graph import GraphStore, InteractionType, load_graph, save_graph
from collabgraph.graph.adjacency import InteractionPredicate
from collabgraph.graph.filters import all_of, of_types, within_last
from collabgraph.logging import configure_logging

DataOption = Annotated[
    Path | None,
    typer.Option(
        "--data",
        "-d",
        help="Path to the graph document (default: from config)",
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file",
    ),
]

_verbose = False


def set_verbose(verbose: bool) -> None:
    global _verbose
    _verbose = verbose


def get_config(config_path: Path | None) -> CollabConfig:
    """Load config and configure logging, exiting with 1 on bad config."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        error(escape(str(e)))
        raise typer.Exit(1) from None
    configure_logging("DEBUG" if _verbose else config.log_level)
    return config


@contextmanager
def open_graph(
    data_path: Path | None,
    config: CollabConfig,
    *,
    write: bool = False,
) -> Iterator[GraphStore]:
    """Yield the graph stored at the data path.

    With write=True the graph is saved back when the block exits cleanly.
    GraphError from the block is reported and turned into exit code 1.
    """
    path = data_path or config.data_path
    try:
        store = load_graph(path)
    except GraphError as e:
        error(f"Cannot load {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(1) from None

    try:
        yield store
    except GraphError as e:
        error(escape(str(e)))
        raise typer.Exit(1) from None

    if write:
        save_graph(store, path)


def parse_types(types: list[str] | None) -> list[InteractionType]:
    try:
        return [InteractionType.parse(t) for t in types or []]
    except ValueError as e:
        error(escape(str(e)))
        raise typer.Exit(1) from None


def build_predicate(
    days: int | None,
    types: list[str] | None,
) -> InteractionPredicate | None:
    """Predicate for --days / --type options, or None for the live graph."""
    predicates: list[InteractionPredicate] = []
    if days is not None:
        predicates.append(within_last(timedelta(days=days)))
    if parsed := parse_types(types):
        predicates.append(of_types(*parsed))
    if not predicates:
        return None
    return all_of(*predicates)
