"""
Core Data Models for textquest.

These models define the world ontology - entities, rooms, the map
template, per-playthrough session state and the rule tables that
gate progress.
"""

from textquest.models.entity import (
    Character,
    Entity,
    Feature,
    Item,
    create_character,
    create_feature,
    create_item,
)
from textquest.models.rules import MoveTrap, RuleBook, TakeRule, UseEffect
from textquest.models.session import SessionState
from textquest.models.world import Direction, Exit, GameMap, Room

__all__ = [
    # Entity
    "Entity",
    "Item",
    "Feature",
    "Character",
    "create_item",
    "create_feature",
    "create_character",
    # World
    "Direction",
    "Exit",
    "Room",
    "GameMap",
    # Session
    "SessionState",
    # Rules
    "MoveTrap",
    "TakeRule",
    "UseEffect",
    "RuleBook",
]
