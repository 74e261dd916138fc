"""
Save/Restore Service for textquest.

A save is a single flat JSON snapshot: where the player stands, what
they carry, where they have been, and the (mutated) map itself.

Save data is validated in full before any session is built. Broken
data raises SaveDataError and never yields a half-restored game.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from textquest.errors import SaveDataError
from textquest.models.session import SessionState
from textquest.models.world import GameMap

logger = logging.getLogger(__name__)


class SaveRecord(BaseModel):
    """Serialized game progress."""

    model_config = {"populate_by_name": True}

    current_room_id: str = Field(alias="currentRoomId", min_length=1)
    inventory: list[str] = Field(description="Carried item ids in pickup order")
    visited_rooms: list[str] = Field(
        alias="visitedRooms", description="Room ids in first-visit order"
    )
    score: int = Field(default=0, ge=0)
    turns: int = Field(default=0, ge=0)
    game_over: bool = Field(default=False, alias="gameOver")
    won: bool = False
    game_map: GameMap = Field(alias="gameMap")

    @model_validator(mode="after")
    def check_against_map(self) -> SaveRecord:
        rooms = self.game_map.rooms
        if self.current_room_id not in rooms:
            raise ValueError(f"currentRoomId '{self.current_room_id}' is not in the map")

        for room_id in self.visited_rooms:
            if room_id not in rooms:
                raise ValueError(f"Visited room '{room_id}' is not in the map")

        if len(set(self.inventory)) != len(self.inventory):
            raise ValueError("Inventory lists an item more than once")

        placed = self.game_map.placed_item_ids()
        for item_id in self.inventory:
            if item_id not in self.game_map.items:
                raise ValueError(f"Inventory item '{item_id}' is not in the item catalog")
            if item_id in placed:
                raise ValueError(f"Inventory item '{item_id}' is also lying in a room")
        return self

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def serialize(session: SessionState, game_map: GameMap) -> SaveRecord:
    """
    Capture a session and its live map.

    The map is copied, so later play does not change the record.
    """
    return SaveRecord(
        current_room_id=session.current_room_id,
        inventory=session.inventory_ids(),
        visited_rooms=list(session.visited_rooms),
        score=session.score,
        turns=session.turns,
        game_over=session.terminal,
        won=session.won,
        game_map=game_map.clone(),
    )


def deserialize(data: SaveRecord | dict[str, Any]) -> tuple[SessionState, GameMap]:
    """
    Rebuild a session and its map from save data.

    Args:
        data: A SaveRecord, or its JSON-shaped dict

    Returns:
        (session, game_map); the session's inventory holds the map's
        own item objects.

    Raises:
        SaveDataError: The data fails validation
    """
    try:
        if isinstance(data, SaveRecord):
            data = data.model_dump(by_alias=True)
        record = SaveRecord.model_validate(data)
    except ValidationError as e:
        raise SaveDataError(f"Invalid save data: {e}") from e

    game_map = record.game_map
    session = SessionState(
        current_room_id=record.current_room_id,
        inventory={item_id: game_map.items[item_id] for item_id in record.inventory},
        visited_rooms=list(dict.fromkeys(record.visited_rooms)),
        score=record.score,
        turns=record.turns,
        terminal=record.game_over,
        won=record.won,
    )
    return session, game_map


def save_to_file(record: SaveRecord, path: str | Path) -> Path:
    """Write a save record as JSON."""
    path = Path(path)
    path.write_text(record.to_json(), encoding="utf-8")
    logger.info("Wrote save file %s", path)
    return path


def load_from_file(path: str | Path) -> SaveRecord:
    """
    Read and validate a save file.

    Raises:
        SaveDataError: The file is not valid save JSON
        OSError: The file cannot be read
    """
    path = Path(path)
    try:
        record = SaveRecord.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise SaveDataError(f"Invalid save file {path}: {e}") from e
    logger.info("Read save file %s", path)
    return record
