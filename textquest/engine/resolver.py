"""
Entity Resolver for textquest.

Maps free-text player input ("sword", "the crystal") onto entities.

Collections are searched in priority order and the search stops at
the first collection that produces any match, even an ambiguous one.
Callers choose the order per action, e.g. inventory before room
contents so the player's own items win over distractors.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from textquest.models.entity import Entity


@dataclass(frozen=True)
class Found:
    """Exactly one entity matched."""

    entity: Entity


@dataclass(frozen=True)
class Ambiguous:
    """Several entities in the same collection matched."""

    matches: list[Entity] = field(default_factory=list)

    def candidates_for(self, query: str) -> list[Entity]:
        """
        Narrow the matches to those containing the literal query.

        The per-word scan is loose, so "rusty key" may also pick up
        every "rusty" entity. Only echo back those that contain the
        whole phrase, unless that leaves nothing.
        """
        phrase = query.strip().lower()
        narrowed = [
            entity
            for entity in self.matches
            if any(phrase in term for term in entity.search_terms())
        ]
        return narrowed or list(self.matches)

    def describe(self, query: str) -> str:
        """Clarifying question listing candidate names."""
        names = [entity.name for entity in self.candidates_for(query)]
        return f'Which "{query.strip()}" do you mean: {_join_names(names)}?'


@dataclass(frozen=True)
class NotFound:
    """Nothing matched."""


ResolutionResult = Found | Ambiguous | NotFound


def matches_query(entity: Entity, words: Sequence[str]) -> bool:
    """True if any word is a substring of the entity's name or a tag."""
    terms = entity.search_terms()
    return any(word in term for word in words for term in terms)


def resolve(
    query: str,
    collections: Sequence[Mapping[str, Entity]],
) -> ResolutionResult:
    """
    Resolve a free-text query against entity collections.

    Args:
        query: Raw player text, e.g. "rusty sword"
        collections: id -> entity mappings in priority order

    Returns:
        Found, Ambiguous or NotFound
    """
    words = query.lower().split()
    if not words:
        return NotFound()

    for collection in collections:
        hits = [entity for entity in collection.values() if matches_query(entity, words)]
        if len(hits) == 1:
            return Found(hits[0])
        if hits:
            return Ambiguous(hits)

    return NotFound()


def find_exact(query: str, collections: Sequence[Mapping[str, Entity]]) -> Entity | None:
    """First entity whose name or id equals the query, ignoring case."""
    wanted = query.strip().lower()
    if not wanted:
        return None
    for collection in collections:
        for entity in collection.values():
            if entity.name.lower() == wanted or entity.id.lower() == wanted:
                return entity
    return None


def _join_names(names: list[str]) -> str:
    if len(names) <= 1:
        return "".join(f"the {name}" for name in names)
    quoted = [f"the {name}" for name in names]
    return ", ".join(quoted[:-1]) + f" or {quoted[-1]}"
