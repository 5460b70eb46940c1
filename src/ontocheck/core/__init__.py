"""Core data model: rows, entities and errors."""
