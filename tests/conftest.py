"""Global pytest configuration and fixtures.

Provides a small zoo ontology and helpers for writing tabular inputs.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from rdflib import Graph

from ontocheck.adapters.rdf import Ontology, RdfsSubsumptionOracle
from ontocheck.validation import EntityResolver

ZOO_TTL = """\
@prefix zoo: <http://example.org/zoo#> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix skos: <http://www.w3.org/2004/02/skos/core#> .

zoo:Animal a owl:Class ;
    rdfs:subClassOf owl:Thing ;
    rdfs:label "animal" .

zoo:Mammal a owl:Class ;
    rdfs:subClassOf zoo:Animal ;
    rdfs:label "mammal" .

zoo:Dog a owl:Class ;
    rdfs:subClassOf zoo:Mammal ;
    rdfs:label "dog", "hound"@en .

zoo:Canine a owl:Class ;
    owl:equivalentClass zoo:Dog .

zoo:Cat a owl:Class ;
    rdfs:subClassOf zoo:Mammal ;
    skos:prefLabel "house cat" .

zoo:Jaguar a owl:Class ;
    rdfs:subClassOf zoo:Mammal .

zoo:Car a owl:Class ;
    rdfs:label "Jaguar" .

zoo:Plant a owl:Class ;
    rdfs:label "plant" .

zoo:Fern a owl:Class ;
    rdfs:subClassOf zoo:Plant ;
    rdfs:subClassOf [ a owl:Restriction ] .

zoo:LoopA a owl:Class ;
    rdfs:subClassOf zoo:LoopB .

zoo:LoopB a owl:Class ;
    rdfs:subClassOf zoo:LoopA .

zoo:Rex a owl:NamedIndividual, zoo:Dog ;
    rdfs:label "Rex" .

zoo:Orphan a owl:NamedIndividual .
"""

# Puppy is defined, not asserted, to be a Dog; owl:Thing is never mentioned.
DEFINED_TTL = """\
@prefix zoo: <http://example.org/zoo#> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .

zoo:hasAge a owl:ObjectProperty .

zoo:Age a owl:Class .

zoo:Young a owl:Class ;
    rdfs:subClassOf zoo:Age .

zoo:Animal a owl:Class .

zoo:Dog a owl:Class ;
    rdfs:subClassOf zoo:Animal .

zoo:Plant a owl:Class .

zoo:Puppy a owl:Class ;
    owl:equivalentClass [
        a owl:Class ;
        owl:intersectionOf (
            zoo:Dog
            [ a owl:Restriction ; owl:onProperty zoo:hasAge ; owl:someValuesFrom zoo:Young ]
        )
    ] .

zoo:Fido a owl:NamedIndividual, zoo:Puppy .
"""


@pytest.fixture
def zoo_graph() -> Graph:
    """Parsed zoo ontology graph."""
    graph = Graph()
    graph.parse(data=ZOO_TTL, format="turtle")
    return graph


@pytest.fixture
def ontology(zoo_graph: Graph) -> Ontology:
    """Zoo ontology."""
    return Ontology(zoo_graph, source="zoo.ttl")


@pytest.fixture
def oracle(ontology: Ontology) -> RdfsSubsumptionOracle:
    return RdfsSubsumptionOracle(ontology)


@pytest.fixture
def resolver(ontology: Ontology) -> EntityResolver:
    return EntityResolver(ontology)


@pytest.fixture
def zoo_ttl(tmp_path: Path) -> Path:
    """Zoo ontology written to a Turtle file."""
    path = tmp_path / "zoo.ttl"
    path.write_text(ZOO_TTL, encoding="utf-8")
    return path


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing rows to a CSV file and returning its path."""

    def _write(rows: list[list[str]], name: str = "data.csv", delimiter: str = ",") -> Path:
        path = tmp_path / name
        path.write_text(
            "".join(delimiter.join(row) + "\n" for row in rows),
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def defined_ontology() -> Ontology:
    """Ontology whose Puppy class is defined by an intersection."""
    graph = Graph()
    graph.parse(data=DEFINED_TTL, format="turtle")
    return Ontology(graph, source="defined.ttl")


@pytest.fixture
def defined_ttl(tmp_path: Path) -> Path:
    """Defined-class ontology written to a Turtle file."""
    path = tmp_path / "defined.ttl"
    path.write_text(DEFINED_TTL, encoding="utf-8")
    return path
