"""Diagram export command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from collabgraph.cli.console import error, success
from collabgraph.cli.context import (
    ConfigOption,
    DataOption,
    build_predicate,
    get_config,
    open_graph,
)
from collabgraph.graph.export import EXPORTERS


def register(app: typer.Typer) -> None:
    """Register the export command."""

    @app.command()
    def export(
        fmt: Annotated[
            str | None,
            typer.Option(
                "--format",
                "-f",
                help="dot or mermaid (default: export.format from config)",
            ),
        ] = None,
        days: Annotated[
            int | None,
            typer.Option(
                "--days",
                min=1,
                help="Only interactions from the last N days",
            ),
        ] = None,
        types: Annotated[
            list[str] | None,
            typer.Option(
                "--type",
                "-t",
                help="Only interactions of this type (repeatable)",
            ),
        ] = None,
        output: Annotated[
            Path | None,
            typer.Option(
                "--output",
                "-o",
                help="Write to file instead of stdout",
            ),
        ] = None,
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Export the graph as a Graphviz DOT or Mermaid diagram.

        Examples:
            collabgraph export --format dot -o team.dot
            collabgraph export --days 7 --type BUG
        """
        config = get_config(config_path)
        fmt = (fmt or config.export.format).lower()
        if fmt not in EXPORTERS:
            error(f"Unknown format: {escape(fmt)} (expected dot or mermaid)")
            raise typer.Exit(1)

        predicate = build_predicate(
            days if days is not None else config.window_days, types
        )

        with open_graph(data, config) as store:
            if fmt == "dot":
                text = store.to_dot(predicate)
            else:
                text = store.to_mermaid(predicate)

        if output is None and config.export.output_dir is not None:
            suffix = "dot" if fmt == "dot" else "mmd"
            output = config.export.output_dir.expanduser() / f"collabgraph.{suffix}"

        if output is None:
            typer.echo(text, nl=False)
            return

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        success(f"Wrote {fmt} diagram to {escape(str(output))}")
