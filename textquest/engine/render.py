"""
Text rendering for textquest.

Static templates only. Output for a given state is deterministic so
repeated looks read identically.
"""

from __future__ import annotations

from collections.abc import Iterable

from textquest.models.entity import Entity
from textquest.models.session import SessionState
from textquest.models.world import Room


def _names(entities: Iterable[Entity]) -> str:
    return ", ".join(entity.name for entity in entities)


def describe_room(room: Room) -> str:
    """Room description plus visible items and features."""
    parts = [room.description]
    if room.items:
        parts.append(f"You see: {_names(room.items.values())}.")
    if room.features:
        parts.append(f"You notice: {_names(room.features.values())}.")
    return "\n\n".join(parts)


def describe_exits(room: Room) -> str:
    if not room.exits:
        return "There are no visible exits."
    lines = [
        f"{direction.value}: {exit_.description or exit_.name}"
        for direction, exit_ in room.exits.items()
    ]
    return "\n".join(lines)


def describe_inventory(session: SessionState) -> str:
    if not session.inventory:
        return "Your inventory is empty."
    return f"You are carrying: {_names(session.inventory.values())}."


def render_view(room: Room, session: SessionState, show_score: bool = True) -> str:
    """Full view of the current room shown after every step."""
    parts = [f"# {room.name}", room.description]

    if room.items:
        parts.append(f"You see: {_names(room.items.values())}")
    if room.exits:
        parts.append(f"Visible exits: {', '.join(d.value for d in room.exits)}")
    if room.characters:
        parts.append(f"Characters present: {_names(room.characters.values())}")
    if session.inventory:
        parts.append(f"You are carrying: {_names(session.inventory.values())}")
    if show_score:
        parts.append(f"Score: {session.score}")

    return "\n\n".join(parts)
