"""Graph query commands: neighbors, top, path, stats, verify."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape

from collabgraph.cli.console import (
    console,
    create_table,
    dim,
    error,
    success,
    warning,
)
from collabgraph.cli.context import (
    ConfigOption,
    DataOption,
    get_config,
    open_graph,
)
from collabgraph.errors import UnknownEmployeeError
from collabgraph.graph import GraphStore


def _require(store: GraphStore, *employee_ids: str) -> None:
    missing = [e for e in employee_ids if not store.has_employee(e)]
    if missing:
        raise UnknownEmployeeError(*dict.fromkeys(missing))


def _print_ranked(store: GraphStore, title: str, rows: list[tuple[str, int]]) -> None:
    table = create_table(
        title,
        [
            ("ID", {"style": "cyan", "no_wrap": True}),
            ("Name", "green"),
            ("Interactions", {"justify": "right"}),
        ],
    )
    for employee_id, weight in rows:
        table.add_row(
            escape(employee_id), escape(store.name_of(employee_id)), str(weight)
        )
    console.print(table)


def register(app: typer.Typer) -> None:
    """Register the query commands."""

    @app.command()
    def neighbors(
        employee_id: Annotated[str, typer.Argument(help="Employee id")],
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Show everyone an employee has interacted with."""
        with open_graph(data, get_config(config_path)) as store:
            _require(store, employee_id)
            row = store.neighbors(employee_id)
            if not row:
                dim(f"{escape(employee_id)} has no recorded interactions")
                return
            title = f"Neighbors of {escape(store.name_of(employee_id))}"
            _print_ranked(store, title, sorted(row.items()))

    @app.command()
    def top(
        employee_id: Annotated[str, typer.Argument(help="Employee id")],
        limit: Annotated[
            int | None,
            typer.Option(
                "--limit",
                "-n",
                min=0,
                help="Number of collaborators (default: top_limit from config)",
            ),
        ] = None,
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Show an employee's most frequent collaborators."""
        config = get_config(config_path)
        with open_graph(data, config) as store:
            _require(store, employee_id)
            ranked = store.top_collaborators(
                employee_id, config.top_limit if limit is None else limit
            )
            if not ranked:
                dim(f"{escape(employee_id)} has no recorded interactions")
                return
            title = f"Top collaborators of {escape(store.name_of(employee_id))}"
            _print_ranked(store, title, ranked)

    @app.command()
    def path(
        from_id: Annotated[str, typer.Argument(help="Starting employee id")],
        to_id: Annotated[str, typer.Argument(help="Target employee id")],
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Show the shortest chain of collaborators between two employees."""
        with open_graph(data, get_config(config_path)) as store:
            _require(store, from_id, to_id)
            hops = store.shortest_path(from_id, to_id)
            if not hops:
                warning(f"No path between {escape(from_id)} and {escape(to_id)}")
                raise typer.Exit(1)
            console.print(
                " -> ".join(
                    f"[cyan]{escape(e)}[/cyan] ({escape(store.name_of(e))})"
                    for e in hops
                )
            )
            dim(f"{len(hops) - 1} hop(s)")

    @app.command()
    def stats(
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Show graph totals."""
        with open_graph(data, get_config(config_path)) as store:
            totals = store.stats()
            report = store.load_report

        table = create_table(
            "Collaboration graph",
            [("Metric", "cyan"), ("Count", {"justify": "right"})],
        )
        table.add_row("Employees", str(totals.employees))
        table.add_row("Chat identities", str(totals.chat_identities))
        table.add_row("Interactions", str(totals.interactions))
        table.add_row("Edges", str(totals.edges))
        table.add_row("Isolated employees", str(totals.isolated))
        table.add_row("Components", str(totals.components))
        if report is not None and report.skipped:
            table.add_row("Skipped records", str(report.skipped))
        console.print(table)

    @app.command()
    def verify(
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Check that the adjacency index matches a replay of the log."""
        with open_graph(data, get_config(config_path)) as store:
            if not store.verify_adjacency():
                error("Adjacency index does not match the interaction log")
                raise typer.Exit(1)
        success(f"Adjacency index consistent ({len(store.interactions)} interactions)")
