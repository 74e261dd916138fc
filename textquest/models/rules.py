"""
Rule Tables for textquest.

Everything game-specific that the Action Processor must know lives
here as data rather than code:

- MoveTrap: entering an exit without the listed items is fatal
- TakeRule: points, prerequisites and victory for picking an item up
- UseEffect: what happens when one entity is used on another

A RuleBook bundles the tables for one adventure.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from textquest.models.world import Direction, GameMap


class MoveTrap(BaseModel):
    """A fatal precondition bound to one exit of one room."""

    room_id: str
    direction: Direction
    requires: list[str] = Field(description="Item ids that must all be carried")
    message: str = Field(description="Narration when the trap is sprung")


class TakeRule(BaseModel):
    """Special handling for taking a particular item."""

    item_id: str
    points: int = Field(ge=0)
    reason: str
    requires: list[str] = Field(
        default_factory=list, description="Item ids that must already be carried"
    )
    failure_message: str = Field(
        default="", description="Narration when prerequisites are missing (a loss)"
    )
    wins: bool = Field(default=False, description="Taking this item ends the game in victory")
    win_message: str = ""

    @model_validator(mode="after")
    def failure_needs_message(self) -> TakeRule:
        if self.requires and not self.failure_message:
            raise ValueError(f"Take rule for '{self.item_id}' has requirements but no failure message")
        return self


class UseEffect(BaseModel):
    """
    Outcome of using one entity on another.

    ``describe`` rewrites entity descriptions permanently.
    ``consume`` destroys participating items.
    ``open_exits`` and ``reveal_items`` change the room the player
    stands in when the effect fires.
    An effect with none of these is flavor text only.
    """

    item_id: str
    target_id: str
    message: str
    describe: dict[str, str] = Field(
        default_factory=dict, description="Entity id -> replacement description"
    )
    consume: list[str] = Field(default_factory=list)
    open_exits: dict[Direction, str] = Field(
        default_factory=dict, description="Direction -> room id of a new exit"
    )
    reveal_items: list[str] = Field(
        default_factory=list, description="Hidden catalog items placed in the room"
    )

    @model_validator(mode="after")
    def consume_only_participants(self) -> UseEffect:
        for entity_id in self.consume:
            if entity_id not in {self.item_id, self.target_id}:
                raise ValueError(
                    f"Use effect {self.item_id} -> {self.target_id} cannot consume '{entity_id}'"
                )
        return self


class RuleBook(BaseModel):
    """All rule tables for one adventure."""

    move_traps: list[MoveTrap] = Field(default_factory=list)
    take_rules: dict[str, TakeRule] = Field(default_factory=dict)
    use_effects: list[UseEffect] = Field(default_factory=list)

    def traps_for(self, room_id: str, direction: Direction) -> list[MoveTrap]:
        return [
            trap
            for trap in self.move_traps
            if trap.room_id == room_id and trap.direction == direction
        ]

    def take_rule(self, item_id: str) -> TakeRule | None:
        return self.take_rules.get(item_id)

    def use_effect(self, item_id: str, target_id: str) -> UseEffect | None:
        for effect in self.use_effects:
            if effect.item_id == item_id and effect.target_id == target_id:
                return effect
        return None

    def check(self, game_map: GameMap) -> None:
        """
        Verify every id the rules mention exists in a map.

        Raises:
            ValueError: A rule names an unknown room, exit or entity.
        """
        for trap in self.move_traps:
            room = game_map.rooms.get(trap.room_id)
            if room is None:
                raise ValueError(f"Move trap names unknown room '{trap.room_id}'")
            if trap.direction not in room.exits:
                raise ValueError(
                    f"Move trap names missing exit {trap.direction.value} of '{trap.room_id}'"
                )
            self._check_items(game_map, trap.requires)

        for key, rule in self.take_rules.items():
            if key != rule.item_id:
                raise ValueError(f"Take rule for '{rule.item_id}' stored under '{key}'")
            self._check_items(game_map, [rule.item_id, *rule.requires])

        for effect in self.use_effects:
            self._check_items(game_map, [effect.item_id])
            for entity_id in [effect.target_id, *effect.describe]:
                if game_map.find_entity(entity_id) is None:
                    raise ValueError(f"Use effect names unknown entity '{entity_id}'")
            self._check_items(game_map, effect.consume)
            for direction, room_id in effect.open_exits.items():
                if room_id not in game_map.rooms:
                    raise ValueError(
                        f"Use effect opens exit {direction.value} to unknown room '{room_id}'"
                    )
            self._check_items(game_map, effect.reveal_items)
            hidden = game_map.hidden_item_ids()
            for item_id in effect.reveal_items:
                if item_id not in hidden:
                    raise ValueError(f"Use effect reveals item '{item_id}' that is not hidden")

    @staticmethod
    def _check_items(game_map: GameMap, item_ids: list[str]) -> None:
        for item_id in item_ids:
            if game_map.find_item(item_id) is None:
                raise ValueError(f"Rule names unknown item '{item_id}'")
