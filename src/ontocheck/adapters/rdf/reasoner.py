"""Subsumption oracles.

A SubsumptionOracle answers one question: is entity A classified under
entity B? The row validator depends only on that interface, so any
classification service can be plugged in.

Three implementations are provided:

- OwlRlSubsumptionOracle (default) materialises the OWL 2 RL closure of the
  ontology with owlrl and answers from the inferred rdfs:subClassOf and
  rdf:type triples. This covers defined classes such as
  ``Puppy == Dog and (hasAge some Young)``.
- OwlreadySubsumptionOracle classifies the ontology with HermiT or Pellet
  through owlready2 (needs the ``dl`` extra and a Java runtime).
- RdfsSubsumptionOracle walks the asserted hierarchy without inference:
  rdfs:subClassOf, owl:equivalentClass in both directions and the named
  conjuncts of owl:intersectionOf expressions.

Every entity is subsumed by owl:Thing, every entity by itself, and a class
never by an individual.

Example:
    from ontocheck.adapters.rdf import build_oracle, load_ontology

    ontology = load_ontology("animals.ttl")
    oracle = build_oracle(ontology, reasoner="owlrl")
    oracle.is_subsumed_by(dog, animal)  # True
"""

from __future__ import annotations

import logging
import tempfile
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import owlrl
from rdflib import BNode, Graph, URIRef
from rdflib.collection import Collection

from ontocheck.adapters.rdf.ontology import OWL, RDF, RDFS
from ontocheck.core.entities import Entity, EntityKind
from ontocheck.core.errors import OracleError

if TYPE_CHECKING:
    from ontocheck.adapters.rdf.loader import Ontology

logger = logging.getLogger(__name__)


class ReasonerKind(str, Enum):
    """Classification backends selectable by name."""

    OWLRL = "owlrl"
    HERMIT = "hermit"
    PELLET = "pellet"
    STRUCTURAL = "structural"


class SubsumptionOracle(ABC):
    """Answers hierarchical membership queries over one ontology.

    Implementations must be read-only and side-effect free. Failures are
    raised as OracleError and never reported as a negative answer.
    """

    @abstractmethod
    def is_subsumed_by(self, descendant: Entity, ancestor: Entity) -> bool:
        """Check whether descendant is (transitively) classified under ancestor.

        Reflexive: every entity is subsumed by itself.

        Raises:
            OracleError: If the query cannot be answered
        """


def _trivial_answer(descendant: Entity, ancestor: Entity) -> bool | None:
    """Answer the queries that need no hierarchy, or None."""
    if descendant.iri == ancestor.iri:
        return True
    if ancestor.kind is EntityKind.INDIVIDUAL:
        return False
    if URIRef(ancestor.iri) == OWL.Thing:
        return True
    return None


def _query_failed(descendant: Entity, ancestor: Entity, error: Exception) -> OracleError:
    return OracleError(
        f"Subsumption query failed for {descendant.iri} under {ancestor.iri}: {error}",
        details={"descendant": descendant.iri, "ancestor": ancestor.iri},
    )


class RdfsSubsumptionOracle(SubsumptionOracle):
    """Subsumption over the asserted RDFS/OWL class hierarchy.

    Superclass closures are memoised per class for the lifetime of the
    oracle; the ontology must not change while the oracle is in use.
    """

    def __init__(self, ontology: Ontology):
        self.ontology = ontology
        self._closures: dict[URIRef, frozenset[URIRef]] = {}

    def is_subsumed_by(self, descendant: Entity, ancestor: Entity) -> bool:
        answer = _trivial_answer(descendant, ancestor)
        if answer is not None:
            return answer
        target = URIRef(ancestor.iri)

        try:
            if descendant.kind is EntityKind.INDIVIDUAL:
                starts = [
                    t
                    for t in self.ontology.graph.objects(URIRef(descendant.iri), RDF.type)
                    if t in self.ontology.classes
                ]
            else:
                starts = [URIRef(descendant.iri)]
            result = any(target in self.superclasses(start) for start in starts)
        except OracleError:
            raise
        except Exception as e:
            raise _query_failed(descendant, ancestor, e) from e

        logger.debug("%s subsumed by %s: %s", descendant.iri, ancestor.iri, result)
        return result

    def superclasses(self, cls: URIRef) -> frozenset[URIRef]:
        """Get all named superclasses of a class, including itself.

        Cycles in the hierarchy are tolerated.
        """
        cached = self._closures.get(cls)
        if cached is not None:
            return cached

        graph = self.ontology.graph
        seen: set[URIRef] = {cls}
        queue: deque[URIRef] = deque([cls])
        while queue:
            current = queue.popleft()
            neighbours = [
                *graph.objects(current, RDFS.subClassOf),
                *graph.objects(current, OWL.equivalentClass),
                *graph.subjects(OWL.equivalentClass, current),
            ]
            for node in neighbours:
                for named in self._named_superclasses(node):
                    if named not in seen:
                        seen.add(named)
                        queue.append(named)

        closure = frozenset(seen)
        self._closures[cls] = closure
        return closure

    def _named_superclasses(self, node: Any, depth: int = 0) -> Iterator[URIRef]:
        """Yield the named classes implied by a superclass expression.

        A named class implies itself; an owl:intersectionOf expression
        implies each of its conjuncts. Other anonymous expressions imply
        nothing here.
        """
        if isinstance(node, URIRef):
            yield node
            return
        if not isinstance(node, BNode) or depth > 32:
            return
        graph = self.ontology.graph
        for members in graph.objects(node, OWL.intersectionOf):
            for member in Collection(graph, members):
                yield from self._named_superclasses(member, depth + 1)


class OwlRlSubsumptionOracle(SubsumptionOracle):
    """Subsumption over the OWL 2 RL deductive closure of the ontology.

    The closure is computed once, on a copy of the graph, the first time
    the oracle is queried.
    """

    def __init__(self, ontology: Ontology):
        self.ontology = ontology
        self._closure: Graph | None = None

    @property
    def closure(self) -> Graph:
        """The inferred graph (asserted plus entailed triples)."""
        if self._closure is None:
            self._closure = self._materialise()
        return self._closure

    def _materialise(self) -> Graph:
        graph = Graph()
        graph += self.ontology.graph
        asserted = len(graph)
        try:
            owlrl.DeductiveClosure(owlrl.OWLRL_Semantics).expand(graph)
        except Exception as e:
            raise OracleError(
                f"OWL 2 RL reasoning failed: {e}",
                details={"reasoner": ReasonerKind.OWLRL.value},
            ) from e
        logger.info(
            "OWL 2 RL closure: %d asserted, %d inferred triples",
            asserted,
            len(graph) - asserted,
        )
        return graph

    def is_subsumed_by(self, descendant: Entity, ancestor: Entity) -> bool:
        answer = _trivial_answer(descendant, ancestor)
        if answer is not None:
            return answer

        predicate = RDF.type if descendant.kind is EntityKind.INDIVIDUAL else RDFS.subClassOf
        triple = (URIRef(descendant.iri), predicate, URIRef(ancestor.iri))
        closure = self.closure
        try:
            result = triple in closure
        except Exception as e:
            raise _query_failed(descendant, ancestor, e) from e

        logger.debug("%s subsumed by %s: %s", descendant.iri, ancestor.iri, result)
        return result


class OwlreadySubsumptionOracle(SubsumptionOracle):
    """Subsumption as classified by a DL reasoner run through owlready2.

    The ontology is handed to owlready2 as RDF/XML and classified once, on
    first query. HermiT and Pellet are Java programs; a missing runtime is
    reported as an OracleError.
    """

    def __init__(self, ontology: Ontology, reasoner: ReasonerKind | str = ReasonerKind.HERMIT):
        reasoner = ReasonerKind(reasoner)
        if reasoner not in (ReasonerKind.HERMIT, ReasonerKind.PELLET):
            raise ValueError(f"owlready2 cannot run the {reasoner.value} reasoner")
        self.ontology = ontology
        self.reasoner = reasoner
        self._world: Any = None
        self._owlready: Any = None

    @property
    def world(self) -> Any:
        """The classified owlready2 World."""
        if self._world is None:
            self._world = self._classify()
        return self._world

    def _classify(self) -> Any:
        details = {"reasoner": self.reasoner.value}
        try:
            import owlready2
        except ImportError as e:
            raise OracleError(
                f"The {self.reasoner.value} reasoner needs owlready2 "
                "(install ontocheck[dl])",
                details=details,
            ) from e
        self._owlready = owlready2

        world = owlready2.World()
        run = (
            owlready2.sync_reasoner_pellet
            if self.reasoner is ReasonerKind.PELLET
            else owlready2.sync_reasoner_hermit
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "ontology.owl"
            try:
                self.ontology.graph.serialize(destination=str(path), format="xml")
                onto = world.get_ontology(path.as_uri()).load()
                with onto:
                    run(world, infer_property_values=False, debug=0)
            except Exception as e:
                raise OracleError(
                    f"{self.reasoner.value} classification failed: {e}",
                    details=details,
                ) from e
        logger.info("Classified ontology with %s", self.reasoner.value)
        return world

    def _lookup(self, entity: Entity) -> Any:
        found = self.world[entity.iri]
        if found is None:
            raise OracleError(
                f"{self.reasoner.value} reasoner does not know {entity.iri}",
                details={"iri": entity.iri, "reasoner": self.reasoner.value},
            )
        return found

    def is_subsumed_by(self, descendant: Entity, ancestor: Entity) -> bool:
        answer = _trivial_answer(descendant, ancestor)
        if answer is not None:
            return answer

        target = self._lookup(ancestor)
        subject = self._lookup(descendant)
        try:
            if descendant.kind is EntityKind.INDIVIDUAL:
                types = [t for t in subject.is_a if isinstance(t, self._owlready.ThingClass)]
            else:
                types = [subject]
            result = any(target in t.ancestors() for t in types)
        except Exception as e:
            raise _query_failed(descendant, ancestor, e) from e

        logger.debug("%s subsumed by %s: %s", descendant.iri, ancestor.iri, result)
        return result


def build_oracle(
    ontology: Ontology, reasoner: ReasonerKind | str = ReasonerKind.OWLRL
) -> SubsumptionOracle:
    """Create the oracle for an ontology.

    Args:
        ontology: The ontology to classify
        reasoner: owlrl (default), hermit, pellet or structural

    Raises:
        ValueError: If the reasoner name is unknown
    """
    kind = ReasonerKind(reasoner)
    if kind is ReasonerKind.STRUCTURAL:
        return RdfsSubsumptionOracle(ontology)
    if kind is ReasonerKind.OWLRL:
        return OwlRlSubsumptionOracle(ontology)
    return OwlreadySubsumptionOracle(ontology, kind)
