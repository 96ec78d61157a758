"""Main CLI application."""

from typing import Annotated

import typer

from collabgraph.cli.commands import demo, export, query, registry
from collabgraph.cli.context import set_verbose

app = typer.Typer(
    name="collabgraph",
    help="Collabgraph - who works with whom, from issue and chat activity",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    set_verbose(verbose)


registry.register(app)
query.register(app)
export.register(app)
demo.register(app)
