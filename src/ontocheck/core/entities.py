"""Resolved ontology entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntityKind(str, Enum):
    """Kind of named entity a cell can resolve to."""

    CLASS = "class"
    INDIVIDUAL = "individual"


@dataclass(frozen=True, order=True)
class Entity:
    """A named class or individual in the ontology.

    Attributes:
        iri: Full IRI of the entity
        kind: Whether the entity is a class or an individual
    """

    iri: str
    kind: EntityKind = EntityKind.CLASS

    def __str__(self) -> str:
        return self.iri
