"""Validation of tabular data against an ontology's class hierarchy.

For each row, the value cell must name an entity classified under the
entity named in the ancestor cell.

Example:
    from ontocheck.adapters.rdf import load_ontology
    from ontocheck.core.rows import load_dataset
    from ontocheck.validation import render_text, validate_dataset

    report = validate_dataset(
        load_dataset("animals.csv"),
        load_ontology("animals.ttl"),
        value_column="id",
        ancestor_column="is_a",
    )
    print("\\n".join(render_text(report)))
"""

from ontocheck.validation.report import (
    INVALID_MESSAGE,
    VALID_MESSAGE,
    ValidationReport,
    render_json,
    render_text,
    report_to_dict,
    validate_dataset,
    verdict_line,
)
from ontocheck.validation.resolver import EntityResolver
from ontocheck.validation.validator import (
    ResolutionFailure,
    RowValidator,
    RowVerdict,
    Side,
    VerdictStatus,
)

__all__ = [
    # Resolution
    "EntityResolver",
    # Row validation
    "RowValidator",
    "RowVerdict",
    "ResolutionFailure",
    "Side",
    "VerdictStatus",
    # Reporting
    "ValidationReport",
    "validate_dataset",
    "render_text",
    "render_json",
    "report_to_dict",
    "verdict_line",
    "VALID_MESSAGE",
    "INVALID_MESSAGE",
]
