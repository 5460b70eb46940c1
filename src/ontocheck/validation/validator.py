"""Per-row validation.

For one row the validator reads the value and ancestor cells, resolves both
to ontology entities and asks the subsumption oracle whether the value is
classified under the ancestor.

Verdicts:
- VALID: both cells resolve and the value is subsumed by the ancestor
- INVALID: both cells resolve and the value is not subsumed by the ancestor
- UNRESOLVABLE: at least one cell does not resolve to exactly one entity

A missing column raises ColumnNotFoundError and oracle failures raise
OracleError; neither is turned into a verdict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ontocheck.core.errors import ResolutionError
from ontocheck.validation.resolver import EntityResolver

if TYPE_CHECKING:
    from ontocheck.adapters.rdf.loader import Ontology
    from ontocheck.adapters.rdf.reasoner import SubsumptionOracle
    from ontocheck.core.entities import Entity
    from ontocheck.core.rows import Row


class VerdictStatus(str, Enum):
    """Outcome of validating one row."""

    VALID = "valid"
    INVALID = "invalid"
    UNRESOLVABLE = "unresolvable"


class Side(str, Enum):
    """Which cell of a row a resolution failure refers to."""

    VALUE = "value"
    ANCESTOR = "ancestor"


@dataclass(frozen=True)
class ResolutionFailure:
    """Why one side of a row could not be resolved."""

    side: Side
    text: str
    code: str
    message: str


@dataclass(frozen=True)
class RowVerdict:
    """Result of validating a single row.

    Attributes:
        status: VALID, INVALID or UNRESOLVABLE
        message: Human-readable explanation
        line: Source line of the row
        value: Value cell text (stripped)
        ancestor: Ancestor cell text (stripped)
        value_iri: Resolved value entity, if it resolved
        ancestor_iri: Resolved ancestor entity, if it resolved
        failures: Resolution failures (only for UNRESOLVABLE)
    """

    status: VerdictStatus
    message: str
    line: int
    value: str
    ancestor: str
    value_iri: str | None = None
    ancestor_iri: str | None = None
    failures: tuple[ResolutionFailure, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return self.status is VerdictStatus.VALID


class RowValidator:
    """Validates rows against one ontology and oracle.

    Attributes:
        oracle: Subsumption oracle queried for resolved pairs
        resolver: Resolver used for both cells
    """

    def __init__(
        self,
        ontology: Ontology,
        oracle: SubsumptionOracle,
        resolver: EntityResolver | None = None,
    ):
        self.oracle = oracle
        self.resolver = resolver or EntityResolver(ontology)

    def validate(self, row: Row, value_column: str, ancestor_column: str) -> RowVerdict:
        """Validate one row.

        Args:
            row: The row to check
            value_column: Column holding the entity to classify
            ancestor_column: Column holding the expected ancestor

        Returns:
            RowVerdict for the row

        Raises:
            ColumnNotFoundError: If either column is missing
            OracleError: If the subsumption query fails
        """
        value_text = row.cell(value_column).strip()
        ancestor_text = row.cell(ancestor_column).strip()

        value, value_failure = self._resolve(Side.VALUE, value_text)
        ancestor, ancestor_failure = self._resolve(Side.ANCESTOR, ancestor_text)

        failures = tuple(f for f in (value_failure, ancestor_failure) if f is not None)
        if failures:
            reasons = "; ".join(
                f"cannot resolve {f.side.value} '{f.text}': {f.message} ({f.code})"
                for f in failures
            )
            return RowVerdict(
                status=VerdictStatus.UNRESOLVABLE,
                message=reasons,
                line=row.line,
                value=value_text,
                ancestor=ancestor_text,
                value_iri=value.iri if value else None,
                ancestor_iri=ancestor.iri if ancestor else None,
                failures=failures,
            )

        assert value is not None and ancestor is not None
        if self.oracle.is_subsumed_by(value, ancestor):
            status = VerdictStatus.VALID
            message = f"'{value_text}' is a descendant of '{ancestor_text}'"
        else:
            status = VerdictStatus.INVALID
            message = (
                f"'{value_text}' ({value.iri}) is not a descendant of "
                f"'{ancestor_text}' ({ancestor.iri})"
            )

        return RowVerdict(
            status=status,
            message=message,
            line=row.line,
            value=value_text,
            ancestor=ancestor_text,
            value_iri=value.iri,
            ancestor_iri=ancestor.iri,
        )

    def _resolve(
        self, side: Side, text: str
    ) -> tuple[Entity | None, ResolutionFailure | None]:
        try:
            return self.resolver.resolve(text), None
        except ResolutionError as e:
            return None, ResolutionFailure(side=side, text=text, code=e.code, message=e.message)
