"""
Action Processor for textquest.

Interprets one action against the session and the current room,
mutates state, and reports narration plus whether the game ended.

The processor knows nothing about any particular adventure. Traps,
special pickups and use effects come from the RuleBook.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, assert_never

from pydantic import BaseModel, ValidationError

from textquest.engine.models import (
    ACTION_MODELS,
    EngineConfig,
    HelpAction,
    InventoryAction,
    LookAction,
    MoveAction,
    TakeAction,
    UseAction,
)
from textquest.engine.render import describe_exits, describe_inventory, describe_room
from textquest.engine.resolver import Ambiguous, Found, NotFound, find_exact, resolve
from textquest.models.entity import Entity, Item
from textquest.models.rules import RuleBook
from textquest.models.session import SessionState
from textquest.models.world import Direction, Exit, GameMap, Room

logger = logging.getLogger(__name__)

ROOM_WORDS = frozenset({"room", "around", "surroundings"})


@dataclass
class ActionOutcome:
    """Narration for one action, and whether it ended the game."""

    feedback: str
    terminal: bool = False
    won: bool = False


class ActionProcessor:
    """
    Applies player actions to one playthrough.

    Owns no state of its own; the map and session belong to the Game.
    """

    def __init__(
        self,
        game_map: GameMap,
        session: SessionState,
        rules: RuleBook,
        config: EngineConfig,
    ) -> None:
        self.game_map = game_map
        self.session = session
        self.rules = rules
        self.config = config

    def handle(self, action_name: Any, payload: Any) -> ActionOutcome:
        """
        Process a named action with a raw payload.

        Unknown names and invalid payloads become feedback, never
        exceptions, so a driver can show them like any other turn.
        """
        model = ACTION_MODELS.get(action_name) if isinstance(action_name, str) else None
        if model is None:
            logger.warning("Unrecognized action %r", action_name)
            return ActionOutcome(
                "Action not recognized. Please try one of: "
                + ", ".join(ACTION_MODELS)
                + "."
            )

        try:
            action = model.model_validate(payload if payload is not None else {})
        except ValidationError as e:
            logger.warning("Invalid payload for %s: %s", action_name, e)
            return ActionOutcome(f"Invalid parameters for '{action_name}': {_summarize(e)}")

        room = self.game_map.room(self.session.current_room_id)
        return self.dispatch(action, room)

    def dispatch(self, action: BaseModel, room: Room) -> ActionOutcome:
        """Route a validated action to its handler."""
        if isinstance(action, LookAction):
            return ActionOutcome(self.look(action.target, room))
        if isinstance(action, MoveAction):
            return self.move(action.direction, room)
        if isinstance(action, TakeAction):
            return self.take(action.item, room)
        if isinstance(action, UseAction):
            return ActionOutcome(self.use(action.item, action.target, room))
        if isinstance(action, InventoryAction):
            return ActionOutcome(describe_inventory(self.session))
        if isinstance(action, HelpAction):
            return ActionOutcome(self.help())
        raise TypeError(f"No handler for {type(action).__name__}")

    # Look -----------------------------------------------------------------

    def look(self, target: str, room: Room) -> str:
        """Describe the room, its exits, or one entity. Never mutates."""
        wanted = target.strip().lower()
        if not wanted:
            return "Look at what?"
        if wanted in ROOM_WORDS or wanted == room.name.lower():
            return describe_room(room)
        if wanted == "exits":
            return describe_exits(room)

        result = resolve(
            target,
            [room.features, room.items, self.session.inventory, room.characters],
        )
        match result:
            case Found(entity):
                where = "in your inventory" if self._carried(entity) else "in this room"
                return f"{entity.name} ({where}): {entity.description}"
            case Ambiguous():
                return result.describe(target)
            case NotFound():
                return f"You don't see any {target.strip()} here."
            case _:
                assert_never(result)

    # Move -----------------------------------------------------------------

    def move(self, direction: Direction, room: Room) -> ActionOutcome:
        """Go through an exit, unless a trap ends the game first."""
        exit_ = room.exit_towards(direction)
        if exit_ is None:
            return ActionOutcome(f"You cannot move {direction.value} from here.")

        for trap in self.rules.traps_for(room.id, direction):
            if not self.session.has_all(trap.requires):
                logger.info(
                    "Move trap sprung: %s %s without %s", room.id, direction.value, trap.requires
                )
                return ActionOutcome(trap.message, terminal=True)

        destination = self.game_map.room(exit_.target_room_id)
        self.session.visit(destination.id)
        return ActionOutcome(f"You move {direction.value}.")

    # Take -----------------------------------------------------------------

    def take(self, query: str, room: Room) -> ActionOutcome:
        """Move an item from the room into the inventory."""
        if not query.strip():
            return ActionOutcome("Take what?")
        result = resolve(query, [self.session.inventory, room.items])
        match result:
            case Found(entity):
                pass
            case Ambiguous():
                return ActionOutcome(result.describe(query))
            case NotFound():
                return ActionOutcome(f"You don't see any {query.strip()} here.")
            case _:
                assert_never(result)

        if self._carried(entity):
            return ActionOutcome(f"You already have the {entity.name}.")
        if not isinstance(entity, Item) or not entity.takeable:
            return ActionOutcome(f"You can't take the {entity.name}.")

        rule = self.rules.take_rule(entity.id)
        if rule is not None and not self.session.has_all(rule.requires):
            logger.info("Take prerequisites missing for %s: %s", entity.id, rule.requires)
            return ActionOutcome(rule.failure_message, terminal=True)

        room.items.pop(entity.id)
        self.session.inventory[entity.id] = entity

        if rule is not None:
            points, reason = rule.points, rule.reason
        else:
            points, reason = self.config.default_points, self.config.default_points_reason
        score_note = self.session.add_score(points, reason)

        if rule is not None and rule.wins:
            return ActionOutcome(
                f"{rule.win_message} {score_note} Final score: {self.session.score}".strip(),
                terminal=True,
                won=True,
            )
        return ActionOutcome(f"You take the {entity.name}. {score_note}")

    # Use ------------------------------------------------------------------

    def use(self, item_query: str, target_query: str, room: Room) -> str:
        """Use a carried item on something. Never ends the game."""
        if not item_query.strip():
            return "Use what?"
        if not target_query.strip():
            return f"What do you want to use the {item_query.strip()} on?"
        held = resolve(item_query, [self.session.inventory])
        match held:
            case Found(entity):
                item = entity
            case Ambiguous():
                return held.describe(item_query)
            case NotFound():
                return f"You don't have {_with_article(item_query)}."
            case _:
                assert_never(held)

        target = find_exact(target_query, [room.items, room.features])
        if target is None:
            result = resolve(target_query, [self.session.inventory, room.items, room.features])
            match result:
                case Found(entity):
                    target = entity
                case Ambiguous():
                    return result.describe(target_query)
                case NotFound():
                    return f"You don't see any {target_query.strip()} here."
                case _:
                    assert_never(result)

        effect = self.rules.use_effect(item.id, target.id)
        if effect is None:
            if isinstance(item, Item) and item.usable_with and target.id in item.usable_with:
                return f"You use the {item.name} on the {target.name}, but nothing happens."
            return f"You can't figure out how to use the {item.name} on the {target.name}."

        for entity_id, description in effect.describe.items():
            changed = self.game_map.find_entity(entity_id)
            if changed is None:
                logger.warning("Use effect rewrites unknown entity %s", entity_id)
                continue
            changed.description = description

        for entity_id in effect.consume:
            if self.session.inventory.pop(entity_id, None) is None:
                room.items.pop(entity_id, None)
            logger.debug("Item %s destroyed by use", entity_id)

        for direction, room_id in effect.open_exits.items():
            destination = self.game_map.room(room_id)
            room.exits[direction] = Exit(
                id=f"{direction.value}_to_{room_id}",
                name=f"{direction.value} exit",
                description=f"The way {direction.value} to the {destination.name} stands open.",
                tags=[direction.value],
                target_room_id=room_id,
            )
            logger.info("Exit %s opened from %s to %s", direction.value, room.id, room_id)

        for item_id in effect.reveal_items:
            # Already carried or placed
            if item_id in self.session.inventory or item_id in self.game_map.placed_item_ids():
                continue
            room.items[item_id] = self.game_map.items[item_id]
            logger.info("Item %s revealed in %s", item_id, room.id)

        return effect.message

    # Help -----------------------------------------------------------------

    def help(self) -> str:
        lines = ["Available actions:"]
        for name, model in ACTION_MODELS.items():
            fields = ", ".join(model.model_fields)
            signature = f"{name}({fields})" if fields else name
            lines.append(f"- {signature}: {model.__doc__ or ''}".rstrip())
        return "\n".join(lines)

    # Helpers --------------------------------------------------------------

    def _carried(self, entity: Entity) -> bool:
        return self.session.inventory.get(entity.id) is entity


def _with_article(text: str) -> str:
    text = text.strip()
    if text.lower().startswith(("a ", "an ", "the ")):
        return text
    return f"an {text}" if text[:1].lower() in "aeiou" else f"a {text}"


def _summarize(error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "payload"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)
