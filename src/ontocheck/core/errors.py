"""Error taxonomy for ontocheck.

Two kinds of failure exist:

- Fatal errors abort a validation run: configuration mistakes
  (ColumnNotFoundError), unreadable inputs (DatasetLoadError,
  OntologyLoadError) and reasoning failures (OracleError).
- Resolution errors (EntityNotFoundError, AmbiguousEntityError) concern a
  single cell. The row validator turns them into an UNRESOLVABLE verdict and
  the run continues.
"""

from __future__ import annotations

from typing import Any


class OntocheckError(Exception):
    """Base class for all ontocheck errors.

    Attributes:
        message: Human-readable error message
        code: Stable error code used in reports and CLI output
        details: Additional structured context
    """

    code = "OntocheckError"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}


class ColumnNotFoundError(OntocheckError):
    """A requested column is not present in the dataset header."""

    code = "ColumnNotFound"

    def __init__(self, column: str, header: tuple[str, ...] | list[str]):
        available = ", ".join(header) if header else "<none>"
        super().__init__(
            f"Column '{column}' not found in header (available: {available})",
            details={"column": column, "header": list(header)},
        )
        self.column = column


class DatasetLoadError(OntocheckError):
    """The tabular input could not be read or is malformed."""

    code = "DatasetLoadError"


class OntologyLoadError(OntocheckError):
    """The ontology file could not be read or parsed."""

    code = "OntologyLoadError"


class ResolutionError(OntocheckError):
    """A cell value could not be resolved to a single ontology entity.

    Attributes:
        text: The (stripped) text that was looked up
    """

    code = "ResolutionError"

    def __init__(self, message: str, text: str, details: dict[str, Any] | None = None):
        super().__init__(message, details=details)
        self.text = text


class EntityNotFoundError(ResolutionError):
    """No entity matches the given identifier or label."""

    code = "NotFound"

    def __init__(self, text: str):
        super().__init__(f"no entity matches '{text}'", text)


class AmbiguousEntityError(ResolutionError):
    """More than one entity matches the given identifier or label.

    Attributes:
        candidates: IRIs of all matching entities, sorted
    """

    code = "AmbiguousEntity"

    def __init__(self, text: str, candidates: list[str]):
        super().__init__(
            f"'{text}' is ambiguous, it matches {', '.join(candidates)}",
            text,
            details={"candidates": candidates},
        )
        self.candidates = candidates


class OracleError(OntocheckError):
    """The subsumption oracle failed to answer a query."""

    code = "OracleFailure"


def format_error_message(error: OntocheckError) -> str:
    """Format an error for display to the user."""
    return f"{error.message} (Code: {error.code})"
