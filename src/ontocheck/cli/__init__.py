"""CLI commands for ontocheck.

Provides command-line interface using Typer:
- ontocheck validate: Validate a CSV column against an ontology hierarchy

Usage:
    ontocheck --help
    ontocheck validate --csv data.csv --owl onto.owl --validate id --ancestor is_a
    ontocheck --log-level DEBUG validate -c data.csv -w onto.ttl -l id -a is_a -o out.txt
"""

import typer

from ontocheck.cli.validate_cmd import app as validate_app
from ontocheck.config import settings
from ontocheck.observability.logging import configure_logging

# Main CLI application
app = typer.Typer(
    name="ontocheck",
    help="ontocheck: validate tabular data against an ontology class hierarchy",
    no_args_is_help=True,
)

app.add_typer(validate_app, name="validate")


@app.callback()
def callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Emit logs as JSON on stderr",
    ),
) -> None:
    """ontocheck: validate tabular data against an ontology class hierarchy."""
    configure_logging(
        json_format=log_json or settings.log_json,
        level=log_level or settings.log_level,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
