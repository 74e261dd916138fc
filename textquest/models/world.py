"""
World Models for textquest.

A GameMap is the template for one adventure: rooms joined by
exits and populated with items, features and characters.

Maps are never shared between playthroughs. The engine calls
``GameMap.clone()`` and mutates only its private copy.
"""

from __future__ import annotations

from copy import deepcopy
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from textquest.errors import WorldIntegrityError
from textquest.models.entity import Character, Entity, Feature, Item


class Direction(str, Enum):
    """Directions an exit may lead."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class Exit(Entity):
    """A way out of a room."""

    target_room_id: str = Field(min_length=1, description="Room this exit leads to")


class Room(BaseModel):
    """A single location in the room graph."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    exits: dict[Direction, Exit] = Field(default_factory=dict)
    items: dict[str, Item] = Field(default_factory=dict)
    features: dict[str, Feature] = Field(default_factory=dict)
    characters: dict[str, Character] = Field(default_factory=dict)

    @model_validator(mode="after")
    def keys_match_ids(self) -> Room:
        for collection in (self.items, self.features, self.characters):
            for key, entity in collection.items():
                if key != entity.id:
                    raise ValueError(
                        f"Room '{self.id}' stores entity '{entity.id}' under key '{key}'"
                    )
        return self

    def exit_towards(self, direction: Direction | str) -> Exit | None:
        """Get the exit in a direction, if there is one."""
        try:
            return self.exits.get(Direction(direction))
        except ValueError:
            return None


class GameMap(BaseModel):
    """
    The template describing a whole adventure.

    ``items`` is the static item catalog. Every item placed in a room
    is also listed there, so items that have left every room (carried
    or destroyed) can still be looked up by id.
    """

    title: str = Field(min_length=1)
    description: str = ""
    start_room_id: str = Field(min_length=1)
    rooms: dict[str, Room]
    items: dict[str, Item] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_room_graph(self) -> GameMap:
        if not self.rooms:
            raise ValueError("A game map needs at least one room")
        if self.start_room_id not in self.rooms:
            raise ValueError(f"Start room '{self.start_room_id}' is not in the map")

        placed_in: dict[str, str] = {}
        for key, room in self.rooms.items():
            if key != room.id:
                raise ValueError(f"Room '{room.id}' is stored under key '{key}'")
            for direction, exit_ in room.exits.items():
                if exit_.target_room_id not in self.rooms:
                    raise ValueError(
                        f"Exit {direction.value} of room '{room.id}' leads to "
                        f"unknown room '{exit_.target_room_id}'"
                    )
            # Catalog entries share identity with placed items
            for item_id, item in room.items.items():
                if item_id in placed_in:
                    raise ValueError(
                        f"Item '{item_id}' is placed in more than one room "
                        f"('{placed_in[item_id]}' and '{room.id}')"
                    )
                placed_in[item_id] = room.id
                self.items[item_id] = item

        for key, item in self.items.items():
            if key != item.id:
                raise ValueError(f"Item '{item.id}' is catalogued under key '{key}'")
        return self

    def hidden_item_ids(self) -> set[str]:
        """Catalogued items not lying in any room."""
        return set(self.items) - self.placed_item_ids()

    def clone(self) -> GameMap:
        """Deep copy for a single playthrough."""
        return deepcopy(self)

    def room(self, room_id: str) -> Room:
        """
        Get a room by id.

        Raises:
            WorldIntegrityError: The id does not exist. This means the
                world graph or a save file is broken.
        """
        room = self.rooms.get(room_id)
        if room is None:
            raise WorldIntegrityError(f"Room not found: {room_id}")
        return room

    def placed_item_ids(self) -> set[str]:
        """Ids of every item currently lying in some room."""
        return {item_id for room in self.rooms.values() for item_id in room.items}

    def find_item(self, item_id: str) -> Item | None:
        """Look an item up in the rooms first, then the catalog."""
        for room in self.rooms.values():
            if item_id in room.items:
                return room.items[item_id]
        return self.items.get(item_id)

    def find_entity(self, entity_id: str) -> Entity | None:
        """Find any item, feature or character by id."""
        item = self.find_item(entity_id)
        if item is not None:
            return item
        for room in self.rooms.values():
            if entity_id in room.features:
                return room.features[entity_id]
            if entity_id in room.characters:
                return room.characters[entity_id]
        return None
