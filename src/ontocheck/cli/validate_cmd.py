"""CLI command for validating a CSV column against an ontology hierarchy.

Usage:
    ontocheck validate --csv data.csv --owl onto.owl --validate id --ancestor is_a
    ontocheck validate -c data.csv -w onto.ttl -l id -a is_a --output report.txt
    ontocheck validate -c data.csv -w onto.ttl -l id -a is_a --format json
    ontocheck validate -c data.csv -w onto.owl -l id -a is_a --reasoner hermit
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from uuid import uuid4

import typer

from ontocheck.config import settings

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")

app = typer.Typer(help="Validate CSV data against an ontology's class hierarchy")


@app.callback(invoke_without_command=True)
def validate(
    csv_path: Path = typer.Option(
        ...,
        "--csv",
        "-c",
        help="CSV file containing the data to validate",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    owl_path: Path = typer.Option(
        ...,
        "--owl",
        "-w",
        help="Ontology file to validate against",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    value_column: str = typer.Option(
        ...,
        "--validate",
        "-l",
        help="Name of the column to be validated",
    ),
    ancestor_column: str = typer.Option(
        ...,
        "--ancestor",
        "-a",
        help="Name of the column containing the ancestor",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Save results to file (default: standard output)",
    ),
    output_format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: text, json",
    ),
    reasoner: str | None = typer.Option(
        None,
        "--reasoner",
        "-r",
        help="Classification backend: owlrl, hermit, pellet, structural",
    ),
    fail_on_invalid: bool = typer.Option(
        False,
        "--fail-on-invalid",
        help="Exit with code 1 when the input is not valid",
    ),
) -> None:
    """Check that every value is classified under its row's ancestor.

    Writes one line per failing row, a summary, and a final verdict line.
    """
    from rich.console import Console
    from rich.markup import escape

    from ontocheck.adapters.rdf import ReasonerKind, build_oracle, load_ontology
    from ontocheck.core.errors import OntocheckError, format_error_message
    from ontocheck.core.rows import load_dataset
    from ontocheck.observability.logging import LogContext
    from ontocheck.validation import EntityResolver, validate_dataset

    console = Console(stderr=True)

    fmt = (output_format or settings.output_format).lower()
    if fmt not in OUTPUT_FORMATS:
        console.print(f"[red]Unsupported output format:[/red] {escape(fmt)}")
        raise typer.Exit(code=2)

    reasoner_name = (reasoner or settings.reasoner).lower()
    if reasoner_name not in {kind.value for kind in ReasonerKind}:
        console.print(f"[red]Unsupported reasoner:[/red] {escape(reasoner_name)}")
        raise typer.Exit(code=2)

    with LogContext(run_id=uuid4().hex[:8], dataset=str(csv_path), ontology=str(owl_path)):
        try:
            dataset = load_dataset(csv_path, delimiter=settings.csv_delimiter)
            ontology = load_ontology(owl_path, format=settings.ontology_format)
            resolver = EntityResolver(ontology, cache_size=settings.resolver_cache_size)
            report = validate_dataset(
                dataset,
                ontology,
                value_column,
                ancestor_column,
                oracle=build_oracle(ontology, reasoner_name),
                resolver=resolver,
            )
        except OntocheckError as e:
            logger.error("Validation aborted: %s", e.message, extra={"error_code": e.code})
            console.print(f"[red]Error:[/red] {escape(format_error_message(e))}")
            raise typer.Exit(code=1) from e

        logger.debug("Resolver cache: %s", resolver.cache_info)
        _write_report(report, output, fmt)

    if fail_on_invalid and not report.valid:
        raise typer.Exit(code=1)


def _write_report(report, output: Path | None, fmt: str) -> None:
    """Write the rendered report to a file or standard output."""
    from ontocheck.validation import render_json, render_text, verdict_line

    if fmt == "json":
        body = render_json(report) + "\n"
    else:
        body = "\n".join([*render_text(report), verdict_line(report)]) + "\n"

    if output is None:
        sys.stdout.write(body)
        sys.stdout.flush()
        return

    with output.open("w", encoding="utf-8") as f:
        f.write(body)
    logger.info("Report written to %s", output)
