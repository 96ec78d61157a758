"""Employee, chat identity and interaction recording commands."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

import typer
from rich.markup import escape

from collabgraph.cli.console import console, create_table, dim, error, success
from collabgraph.cli.context import (
    ConfigOption,
    DataOption,
    get_config,
    open_graph,
)
from collabgraph.graph import ChatIdentity, Employee, InteractionType
from collabgraph.graph.types import parse_timestamp


def register(app: typer.Typer) -> None:
    """Register the employee, identity and record commands."""

    employee_app = typer.Typer(help="Manage employees", no_args_is_help=True)
    identity_app = typer.Typer(help="Manage chat identities", no_args_is_help=True)
    app.add_typer(employee_app, name="employee")
    app.add_typer(identity_app, name="identity")

    @employee_app.command("add")
    def employee_add(
        employee_id: Annotated[str, typer.Argument(help="Employee id")],
        name: Annotated[str, typer.Option("--name", "-n", help="Display name")] = "",
        email: Annotated[str, typer.Option("--email", help="Email address")] = "",
        department: Annotated[
            str, typer.Option("--department", help="Department")
        ] = "",
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Register an employee."""
        with open_graph(data, get_config(config_path), write=True) as store:
            store.add_employee(Employee(employee_id, name, email, department))
        success(f"Added employee {escape(employee_id)}")

    @employee_app.command("list")
    def employee_list(
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """List registered employees."""
        with open_graph(data, get_config(config_path)) as store:
            if not store.employees:
                dim("No employees registered")
                return

            table = create_table(
                "Employees",
                [
                    ("ID", {"style": "cyan", "no_wrap": True}),
                    ("Name", "green"),
                    ("Email", ""),
                    ("Department", "magenta"),
                    ("Collaborators", {"justify": "right"}),
                ],
            )
            for employee_id in sorted(store.employees):
                employee = store.employees[employee_id]
                table.add_row(
                    escape(employee.id),
                    escape(employee.name),
                    escape(employee.email),
                    escape(employee.department),
                    str(len(store.neighbors(employee_id))),
                )
            console.print(table)

    @identity_app.command("add")
    def identity_add(
        external_id: Annotated[str, typer.Argument(help="Chat user id")],
        employee_id: Annotated[str, typer.Argument(help="Employee it belongs to")],
        handle: Annotated[
            str, typer.Option("--handle", help="Chat display handle")
        ] = "",
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Map a chat identity to an employee."""
        with open_graph(data, get_config(config_path), write=True) as store:
            store.add_chat_identity(ChatIdentity(external_id, handle, employee_id))
        success(f"Mapped {escape(external_id)} to {escape(employee_id)}")

    @identity_app.command("list")
    def identity_list(
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """List chat identities and the employees they map to."""
        with open_graph(data, get_config(config_path)) as store:
            if not store.chat_identities:
                dim("No chat identities registered")
                return

            table = create_table(
                "Chat identities",
                [
                    ("Chat ID", {"style": "cyan", "no_wrap": True}),
                    ("Handle", ""),
                    ("Employee", "green"),
                ],
            )
            for external_id in sorted(store.chat_identities):
                identity = store.chat_identities[external_id]
                table.add_row(
                    escape(identity.external_id),
                    escape(identity.handle),
                    escape(identity.employee_id),
                )
            console.print(table)

    @app.command()
    def record(
        issue_key: Annotated[
            str, typer.Argument(help="Issue the interaction is about")
        ],
        participant_a: Annotated[str, typer.Argument(help="First participant")],
        participant_b: Annotated[str, typer.Argument(help="Second participant")],
        interaction_type: Annotated[
            str,
            typer.Option(
                "--type",
                "-t",
                help="ISSUE, BUG, CODE_REVIEW or DISCUSSION",
            ),
        ] = "ISSUE",
        at: Annotated[
            str | None,
            typer.Option(
                "--at",
                help="ISO-8601 timestamp (default: now)",
            ),
        ] = None,
        by_employee: Annotated[
            bool,
            typer.Option(
                "--by-employee",
                help="Participants are employee ids instead of chat ids",
            ),
        ] = False,
        data: DataOption = None,
        config_path: ConfigOption = None,
    ) -> None:
        """Record one interaction between two participants.

        Examples:
            collabgraph record BUG-77 U1 U2 --type BUG
            collabgraph record JIRA-9 E-1 E-2 --by-employee
        """
        try:
            parsed_type = InteractionType.parse(interaction_type)
            timestamp = parse_timestamp(at) if at else datetime.now(UTC)
        except ValueError as e:
            error(escape(str(e)))
            raise typer.Exit(1) from None

        with open_graph(data, get_config(config_path), write=True) as store:
            if by_employee:
                interaction = store.record_interaction_by_employee(
                    issue_key, participant_a, participant_b, parsed_type, timestamp
                )
            else:
                interaction = store.record_interaction_by_identity(
                    issue_key, participant_a, participant_b, parsed_type, timestamp
                )

        if interaction is None:
            dim("Both participants are the same employee; nothing recorded")
            return
        success(
            f"Recorded {parsed_type.name} on {escape(issue_key)} between "
            f"{escape(interaction.employee_a)} and {escape(interaction.employee_b)}"
        )
