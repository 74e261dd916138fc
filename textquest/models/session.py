"""
Session State for textquest.

All mutable per-playthrough data. A session is owned by exactly
one Game and is only changed by the Action Processor.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from textquest.models.entity import Item
from textquest.models.world import GameMap


class SessionState(BaseModel):
    """Location, inventory, visited rooms, score and terminal flag."""

    current_room_id: str
    inventory: dict[str, Item] = Field(
        default_factory=dict, description="Carried items in pickup order"
    )
    visited_rooms: list[str] = Field(
        default_factory=list, description="Room ids in first-visit order"
    )
    score: int = Field(default=0, ge=0)
    turns: int = Field(default=0, ge=0)
    terminal: bool = False
    won: bool = False

    @classmethod
    def begin(cls, game_map: GameMap) -> SessionState:
        """Fresh state standing in the map's start room."""
        return cls(
            current_room_id=game_map.start_room_id,
            visited_rooms=[game_map.start_room_id],
        )

    def visit(self, room_id: str) -> None:
        """Move to a room and remember it."""
        self.current_room_id = room_id
        if room_id not in self.visited_rooms:
            self.visited_rooms.append(room_id)

    def add_score(self, points: int, reason: str) -> str:
        """
        Award points and return the feedback fragment.

        Raises:
            ValueError: points is negative. Score never decreases.
        """
        if points < 0:
            raise ValueError(f"Score can only increase, got {points} points")
        self.score += points
        return f"(+{points} points: {reason})"

    def has_all(self, item_ids: list[str]) -> bool:
        """Check the inventory holds every listed item."""
        return all(item_id in self.inventory for item_id in item_ids)

    def inventory_ids(self) -> list[str]:
        return list(self.inventory)
