"""ontocheck: validate tabular data against an ontology's class hierarchy."""

__version__ = "0.1.0"
