"""RDF vocabulary constants and serialization format handling.

Classification is read from the standard RDFS/OWL terms:
- owl:Class / rdfs:Class → named classes
- owl:NamedIndividual and rdf:type → individuals and their types
- rdfs:subClassOf / owl:equivalentClass → the class hierarchy
- rdfs:label / skos:prefLabel → human-readable labels
"""

from enum import Enum
from pathlib import Path
from typing import Final

from rdflib import Namespace, URIRef

RDFS_NAMESPACE: Final[str] = "http://www.w3.org/2000/01/rdf-schema#"
RDF_NAMESPACE: Final[str] = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
OWL_NAMESPACE: Final[str] = "http://www.w3.org/2002/07/owl#"
SKOS_NAMESPACE: Final[str] = "http://www.w3.org/2004/02/skos/core#"

RDFS = Namespace(RDFS_NAMESPACE)
RDF = Namespace(RDF_NAMESPACE)
OWL = Namespace(OWL_NAMESPACE)
SKOS = Namespace(SKOS_NAMESPACE)

# Class-declaring types
CLASS_TYPES: Final[tuple[URIRef, ...]] = (OWL.Class, RDFS.Class)

# Label predicates, in no particular precedence
LABEL_PREDICATES: Final[tuple[URIRef, ...]] = (RDFS.label, SKOS.prefLabel)

# Types that never denote a user class when they appear as rdf:type objects
BUILTIN_TYPES: Final[frozenset[URIRef]] = frozenset(
    {
        OWL.Class,
        RDFS.Class,
        OWL.NamedIndividual,
        OWL.Ontology,
        OWL.ObjectProperty,
        OWL.DatatypeProperty,
        OWL.AnnotationProperty,
        OWL.Restriction,
        RDF.Property,
    }
)


class RdfFormat(str, Enum):
    """Supported RDF serialization formats (values are rdflib parser names)."""

    JSON_LD = "json-ld"
    TURTLE = "turtle"
    N_TRIPLES = "nt"
    RDF_XML = "xml"

    @classmethod
    def from_path(cls, path: str | Path) -> "RdfFormat":
        """Guess the format from a file extension.

        Args:
            path: Ontology file path

        Returns:
            Corresponding RdfFormat

        Raises:
            ValueError: If the extension is not recognised
        """
        mapping = {
            ".ttl": cls.TURTLE,
            ".turtle": cls.TURTLE,
            ".owl": cls.RDF_XML,
            ".rdf": cls.RDF_XML,
            ".xml": cls.RDF_XML,
            ".nt": cls.N_TRIPLES,
            ".jsonld": cls.JSON_LD,
            ".json": cls.JSON_LD,
        }
        suffix = Path(path).suffix.lower()
        if suffix not in mapping:
            raise ValueError(f"Cannot guess RDF format from extension: '{suffix}'")
        return mapping[suffix]


def local_name(iri: str) -> str:
    """Get the local part of an IRI (after the last '#', '/' or ':')."""
    for sep in ("#", "/", ":"):
        if sep in iri:
            tail = iri.rsplit(sep, 1)[1]
            if tail:
                return tail
    return iri
