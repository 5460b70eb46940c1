"""Resolution of cell text to ontology entities.

A cell may name an entity by identifier or by label:

- full IRI: ``http://example.org/zoo#Dog``
- CURIE with a prefix bound in the ontology: ``zoo:Dog``
- bare local name: ``Dog``
- exact rdfs:label or skos:prefLabel, optionally single-quoted: ``'hunting dog'``

All interpretations are tried. If together they point at more than one
entity the text is ambiguous; no interpretation takes precedence.

Example:
    resolver = EntityResolver(ontology)
    try:
        entity = resolver.resolve(" Dog ")
    except ResolutionError as e:
        print(e.code, e.message)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from ontocheck.core.entities import Entity
from ontocheck.core.errors import AmbiguousEntityError, EntityNotFoundError

if TYPE_CHECKING:
    from ontocheck.adapters.rdf.loader import Ontology

logger = logging.getLogger(__name__)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] == "'":
        return text[1:-1]
    return text


class EntityResolver:
    """Maps identifiers and labels to entities of one ontology.

    Attributes:
        ontology: The ontology to resolve against
    """

    def __init__(self, ontology: Ontology, cache_size: int = 4096):
        """Initialize the resolver.

        Args:
            ontology: The ontology to resolve against
            cache_size: Maximum number of lookups to memoise (0 disables)
        """
        self.ontology = ontology
        self._cached_matches = lru_cache(maxsize=cache_size)(self._match_impl)

    def resolve(self, text: str) -> Entity:
        """Resolve cell text to a single entity.

        Args:
            text: Identifier or label; surrounding whitespace is ignored

        Returns:
            The matching entity

        Raises:
            EntityNotFoundError: If nothing matches
            AmbiguousEntityError: If several entities match
        """
        stripped = text.strip()
        matches = self._cached_matches(stripped)
        if not matches:
            raise EntityNotFoundError(stripped)
        if len(matches) > 1:
            raise AmbiguousEntityError(stripped, [m.iri for m in matches])
        return matches[0]

    def candidates(self, text: str) -> list[Entity]:
        """Get every entity the (stripped) text could refer to, sorted."""
        if not text:
            return []

        found: set[Entity] = set()

        entity = self.ontology.entity(text)
        if entity is not None:
            found.add(entity)

        expanded = self.ontology.expand_curie(text)
        if expanded is not None:
            entity = self.ontology.entity(expanded)
            if entity is not None:
                found.add(entity)

        found.update(self.ontology.by_local_name(text))

        found.update(self.ontology.by_label(text))
        unquoted = _unquote(text)
        if unquoted != text:
            found.update(self.ontology.by_label(unquoted))

        return sorted(found)

    def _match_impl(self, text: str) -> tuple[Entity, ...]:
        # Only immutable outcomes are cached; exceptions are built per call.
        matches = tuple(self.candidates(text))
        if not matches:
            logger.debug("No entity for '%s'", text)
        elif len(matches) > 1:
            logger.debug("Ambiguous '%s': %d candidates", text, len(matches))
        return matches

    def clear_cache(self) -> None:
        """Clear the lookup cache."""
        self._cached_matches.cache_clear()

    @property
    def cache_info(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with hits, misses, maxsize, currsize
        """
        info = self._cached_matches.cache_info()
        return {
            "hits": info.hits,
            "misses": info.misses,
            "maxsize": info.maxsize or 0,
            "currsize": info.currsize,
        }
