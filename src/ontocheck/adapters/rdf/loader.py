"""Ontology loading and entity indexing.

The Ontology wraps a parsed rdflib Graph and indexes the named entities
(classes and individuals) together with their labels and local names, so
that cell values can be resolved without repeated graph scans.

Example:
    from ontocheck.adapters.rdf import load_ontology

    ontology = load_ontology("animals.ttl")
    print(len(ontology.classes), "classes")
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path

from rdflib import Graph, URIRef

from ontocheck.adapters.rdf.ontology import (
    BUILTIN_TYPES,
    CLASS_TYPES,
    LABEL_PREDICATES,
    OWL,
    RDF,
    RDFS,
    RdfFormat,
    local_name,
)
from ontocheck.core.entities import Entity, EntityKind
from ontocheck.core.errors import OntologyLoadError

logger = logging.getLogger(__name__)


class Ontology:
    """Read-only view of an RDF/OWL graph.

    Attributes:
        graph: The parsed RDF graph (never mutated)
        source: Where the graph was loaded from, if known
        classes: IRIs of named classes, always including owl:Thing
        individuals: IRIs of named individuals
    """

    def __init__(self, graph: Graph, source: str | None = None):
        self.graph = graph
        self.source = source
        self.classes = self._collect_classes(graph)
        self.individuals = self._collect_individuals(graph, self.classes)

        self._labels: dict[str, set[URIRef]] = defaultdict(set)
        self._local_names: dict[str, set[URIRef]] = defaultdict(set)
        for iri in self.classes | self.individuals:
            self._local_names[local_name(str(iri))].add(iri)
            for predicate in LABEL_PREDICATES:
                for label in graph.objects(iri, predicate):
                    self._labels[str(label)].add(iri)

        self._prefixes = {prefix: str(ns) for prefix, ns in graph.namespaces()}

    @staticmethod
    def _collect_classes(graph: Graph) -> frozenset[URIRef]:
        # owl:Thing is the implicit root of every ontology.
        found: set[URIRef] = {OWL.Thing}
        for class_type in CLASS_TYPES:
            found.update(graph.subjects(RDF.type, class_type))
        for predicate in (RDFS.subClassOf, OWL.equivalentClass):
            for sub, sup in graph.subject_objects(predicate):
                found.add(sub)
                found.add(sup)
        return frozenset(node for node in found if isinstance(node, URIRef))

    @staticmethod
    def _collect_individuals(graph: Graph, classes: frozenset[URIRef]) -> frozenset[URIRef]:
        found: set[URIRef] = set(graph.subjects(RDF.type, OWL.NamedIndividual))
        for subject, rdf_type in graph.subject_objects(RDF.type):
            if rdf_type in classes and rdf_type not in BUILTIN_TYPES:
                found.add(subject)
        # Punned IRIs are treated as classes.
        return frozenset(
            node for node in found if isinstance(node, URIRef) and node not in classes
        )

    def entity(self, iri: str) -> Entity | None:
        """Get the entity with this exact IRI, if it is known."""
        ref = URIRef(iri)
        if ref in self.classes:
            return Entity(iri, EntityKind.CLASS)
        if ref in self.individuals:
            return Entity(iri, EntityKind.INDIVIDUAL)
        return None

    def by_label(self, label: str) -> list[Entity]:
        """Get all entities carrying exactly this label."""
        return self._to_entities(self._labels.get(label, ()))

    def by_local_name(self, name: str) -> list[Entity]:
        """Get all entities whose IRI ends in this local name."""
        return self._to_entities(self._local_names.get(name, ()))

    def expand_curie(self, curie: str) -> str | None:
        """Expand 'prefix:local' using the graph's namespace bindings.

        Returns:
            The full IRI, or None if the text is not a CURIE with a bound prefix
        """
        if ":" not in curie:
            return None
        prefix, local = curie.split(":", 1)
        if local.startswith("//") or prefix not in self._prefixes:
            return None
        return self._prefixes[prefix] + local

    def _to_entities(self, iris) -> list[Entity]:
        entities = (self.entity(str(iri)) for iri in iris)
        return sorted(e for e in entities if e is not None)

    def __len__(self) -> int:
        return len(self.graph)


def load_ontology(path: str | Path, format: RdfFormat | str | None = None) -> Ontology:
    """Parse an ontology file.

    Args:
        path: Ontology file
        format: Serialization format (default: guessed from the extension)

    Returns:
        Loaded Ontology

    Raises:
        OntologyLoadError: If the file is missing, has an unknown format or
            cannot be parsed
    """
    path = Path(path)
    if not path.is_file():
        raise OntologyLoadError(f"Ontology file not found: {path}", details={"path": str(path)})

    try:
        rdf_format = RdfFormat(format) if format else RdfFormat.from_path(path)
    except ValueError as e:
        raise OntologyLoadError(str(e), details={"path": str(path)}) from e

    graph = Graph()
    try:
        graph.parse(str(path), format=rdf_format.value)
    except Exception as e:
        raise OntologyLoadError(
            f"Cannot parse ontology {path} as {rdf_format.value}: {e}",
            details={"path": str(path), "format": rdf_format.value},
        ) from e

    ontology = Ontology(graph, source=str(path))
    logger.info(
        "Loaded ontology %s: %d triples, %d classes, %d individuals",
        path,
        len(graph),
        len(ontology.classes),
        len(ontology.individuals),
    )
    return ontology
