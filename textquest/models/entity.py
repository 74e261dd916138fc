"""
Entity Models for textquest.

Defines the passive data the world is built from:
Items, Features, and Characters.

Entities are templates. Once a map is cloned for a playthrough
the Action Processor moves and rewrites them in place.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Entity(BaseModel):
    """
    Core entity model - the fundamental game object.

    Only ``name`` and ``tags`` are consulted when matching player input.
    """

    id: str = Field(min_length=1, description="Stable key, unique within its collection")
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", description="A couple of sentences shown on look")
    tags: list[str] = Field(
        default_factory=list,
        description="One-word keywords matched against vague player input",
    )

    def search_terms(self) -> list[str]:
        """Lowercased name followed by lowercased tags."""
        return [self.name.lower(), *(tag.lower() for tag in self.tags)]


class Item(Entity):
    """Something the player may carry."""

    takeable: bool = False
    usable_with: set[str] | None = Field(
        default=None, description="Ids of entities this item interacts with"
    )


class Feature(Entity):
    """Static scenery. Never takeable, never moves."""


class Character(Entity):
    """A being present in a room. Never moves in this engine."""


def create_item(
    id: str,
    name: str,
    description: str = "",
    tags: list[str] | None = None,
    takeable: bool = True,
    usable_with: set[str] | None = None,
) -> Item:
    """Factory function to create an item entity."""
    return Item(
        id=id,
        name=name,
        description=description,
        tags=tags if tags is not None else [name.lower()],
        takeable=takeable,
        usable_with=usable_with,
    )


def create_feature(
    id: str,
    name: str,
    description: str = "",
    tags: list[str] | None = None,
) -> Feature:
    """Factory function to create a feature entity."""
    return Feature(
        id=id,
        name=name,
        description=description,
        tags=tags if tags is not None else name.lower().split(),
    )


def create_character(
    id: str,
    name: str,
    description: str = "",
    tags: list[str] | None = None,
) -> Character:
    """Factory function to create a character entity."""
    return Character(
        id=id,
        name=name,
        description=description,
        tags=tags if tags is not None else ["character"],
    )
