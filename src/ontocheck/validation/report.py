"""Dataset validation and report rendering.

validate_dataset() runs the row validator over every row, in order, and
collects the verdicts into a ValidationReport. It never stops at the first
failure: the report is a full audit of the dataset.

Example:
    from ontocheck.validation import render_text, validate_dataset

    report = validate_dataset(dataset, ontology, "id", "is_a")
    for line in render_text(report):
        print(line)
    print(report.valid)
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import orjson

from ontocheck.adapters.rdf.reasoner import build_oracle
from ontocheck.validation.resolver import EntityResolver
from ontocheck.validation.validator import RowValidator, RowVerdict, VerdictStatus

if TYPE_CHECKING:
    from ontocheck.adapters.rdf.loader import Ontology
    from ontocheck.adapters.rdf.reasoner import SubsumptionOracle
    from ontocheck.core.rows import Dataset, Row

logger = logging.getLogger(__name__)

VALID_MESSAGE = "The input was valid!"
INVALID_MESSAGE = "Argh! The input was not valid!"


@dataclass(frozen=True)
class ValidationReport:
    """Verdicts for every row of a dataset, in input order.

    Attributes:
        entries: (row, verdict) pairs in the order the rows were read
        value_column: Column that was validated
        ancestor_column: Column holding the expected ancestors
    """

    entries: tuple[tuple[Row, RowVerdict], ...]
    value_column: str
    ancestor_column: str

    @property
    def valid(self) -> bool:
        """True iff every row is VALID (an empty dataset is valid)."""
        return all(verdict.valid for _, verdict in self.entries)

    @property
    def verdicts(self) -> list[RowVerdict]:
        return [verdict for _, verdict in self.entries]

    @property
    def failures(self) -> list[RowVerdict]:
        """Non-VALID verdicts, in input order."""
        return [verdict for _, verdict in self.entries if not verdict.valid]

    @property
    def counts(self) -> dict[str, int]:
        """Number of rows per verdict status."""
        counter = Counter(verdict.status for _, verdict in self.entries)
        return {status.value: counter.get(status, 0) for status in VerdictStatus}

    def __len__(self) -> int:
        return len(self.entries)


def validate_dataset(
    dataset: Dataset,
    ontology: Ontology,
    value_column: str,
    ancestor_column: str,
    oracle: SubsumptionOracle | None = None,
    resolver: EntityResolver | None = None,
) -> ValidationReport:
    """Validate every row of a dataset.

    Args:
        dataset: Rows to check
        ontology: Ontology to resolve cells against
        value_column: Column holding the entities to classify
        ancestor_column: Column holding the expected ancestors
        oracle: Subsumption oracle (default: built from the ontology)
        resolver: Entity resolver (default: a fresh one for the ontology)

    Returns:
        ValidationReport with one verdict per row

    Raises:
        ColumnNotFoundError: If either column is missing from the header
        OracleError: If a subsumption query fails
    """
    dataset.require_columns(value_column, ancestor_column)

    validator = RowValidator(
        ontology,
        oracle or build_oracle(ontology),
        resolver or EntityResolver(ontology),
    )

    entries = []
    for row in dataset:
        verdict = validator.validate(row, value_column, ancestor_column)
        if not verdict.valid:
            logger.debug("Line %d %s: %s", row.line, verdict.status.value, verdict.message)
        entries.append((row, verdict))

    report = ValidationReport(
        entries=tuple(entries),
        value_column=value_column,
        ancestor_column=ancestor_column,
    )
    logger.info(
        "Validated %d rows: %s",
        len(report),
        ", ".join(f"{count} {status}" for status, count in report.counts.items()),
    )
    return report


def format_failure(verdict: RowVerdict) -> str:
    """Format one failing row for the text report."""
    return f"Line {verdict.line}: {verdict.status.value.upper()}: {verdict.message}"


def render_text(report: ValidationReport) -> list[str]:
    """Render the report as text lines.

    One line per non-VALID row, in input order, followed by a summary line.
    """
    lines = [format_failure(verdict) for verdict in report.failures]
    counts = report.counts
    lines.append(
        f"Checked {len(report)} row(s) of '{report.value_column}' against "
        f"'{report.ancestor_column}': {counts['valid']} valid, "
        f"{counts['invalid']} invalid, {counts['unresolvable']} unresolvable"
    )
    return lines


def verdict_line(report: ValidationReport) -> str:
    """Get the final line stating overall validity."""
    return VALID_MESSAGE if report.valid else INVALID_MESSAGE


def report_to_dict(report: ValidationReport) -> dict[str, Any]:
    """Convert the report to a JSON-serializable dict listing every row."""
    return {
        "valid": report.valid,
        "value_column": report.value_column,
        "ancestor_column": report.ancestor_column,
        "summary": {"total": len(report), **report.counts},
        "rows": [
            {
                "line": verdict.line,
                "value": verdict.value,
                "ancestor": verdict.ancestor,
                "status": verdict.status.value,
                "message": verdict.message,
                "value_iri": verdict.value_iri,
                "ancestor_iri": verdict.ancestor_iri,
            }
            for verdict in report.verdicts
        ],
    }


def render_json(report: ValidationReport) -> str:
    """Render the report as indented JSON."""
    return orjson.dumps(report_to_dict(report), option=orjson.OPT_INDENT_2).decode()
