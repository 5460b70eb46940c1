"""RDF adapter: ontology loading and subsumption queries.

Supported formats:
- Turtle (.ttl)
- RDF/XML (.owl, .rdf, .xml)
- N-Triples (.nt)
- JSON-LD (.jsonld, .json)

Example:
    from ontocheck.adapters.rdf import build_oracle, load_ontology

    ontology = load_ontology("animals.owl")
    oracle = build_oracle(ontology)
"""

from ontocheck.adapters.rdf.loader import Ontology, load_ontology
from ontocheck.adapters.rdf.ontology import RdfFormat
from ontocheck.adapters.rdf.reasoner import (
    OwlreadySubsumptionOracle,
    OwlRlSubsumptionOracle,
    RdfsSubsumptionOracle,
    ReasonerKind,
    SubsumptionOracle,
    build_oracle,
)

__all__ = [
    # Loading
    "Ontology",
    "load_ontology",
    "RdfFormat",
    # Reasoning
    "SubsumptionOracle",
    "ReasonerKind",
    "OwlRlSubsumptionOracle",
    "OwlreadySubsumptionOracle",
    "RdfsSubsumptionOracle",
    "build_oracle",
]
