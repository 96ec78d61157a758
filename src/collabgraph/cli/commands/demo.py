"""Seed a graph document with a sample organisation."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape

from collabgraph.cli.console import error, success, warning
from collabgraph.cli.context import ConfigOption, DataOption, get_config
from collabgraph.demo import DEMOS
from collabgraph.graph import save_graph


def register(app: typer.Typer) -> None:
    """Register the demo command."""

    @app.command()
    def demo(
        size: Annotated[
            int,
            typer.Option(
                "--size",
                "-s",
                help="Organisation size: 4 or 8 employees",
            ),
        ] = 4,
        force: Annotated[
            bool,
            typer.Option(
                "--force",
                help="Overwrite an existing graph document",
            ),
        ] = False,
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Write a sample organisation to the graph document."""
        builder = DEMOS.get(size)
        if builder is None:
            error(f"Unknown demo size: {size} (choose from 4, 8)")
            raise typer.Exit(1)

        config = get_config(config_path)
        path = data or config.data_path
        if path.exists() and not force:
            warning(f"{escape(str(path))} already exists; use --force to replace it")
            raise typer.Exit(1)

        store = builder()
        save_graph(store, path)
        totals = store.stats()
        success(
            f"Wrote {totals.employees} employees and {totals.interactions} "
            f"interactions to {escape(str(path))}"
        )
