"""
Core Engine for textquest.

The engine orchestrates:
- Command parsing (typed input to actions)
- Entity resolution (free text to entities)
- Action processing (rules, scoring, termination)
- Rendering (static text templates)
"""

from __future__ import annotations

from textquest.engine.game import Game
from textquest.engine.intent import CommandParser, ParsedCommand
from textquest.engine.models import (
    ACTION_MODELS,
    EngineConfig,
    GameResult,
    GameState,
    HelpAction,
    InventoryAction,
    LookAction,
    MoveAction,
    ResultStep,
    StateStep,
    StepResult,
    TakeAction,
    UseAction,
    action_schemas,
)
from textquest.engine.processor import ActionOutcome, ActionProcessor
from textquest.engine.resolver import (
    Ambiguous,
    Found,
    NotFound,
    ResolutionResult,
    find_exact,
    resolve,
)

__all__ = [
    # Main engine
    "Game",
    "ActionOutcome",
    "ActionProcessor",
    # Models
    "ACTION_MODELS",
    "EngineConfig",
    "GameResult",
    "GameState",
    "HelpAction",
    "InventoryAction",
    "LookAction",
    "MoveAction",
    "ResultStep",
    "StateStep",
    "StepResult",
    "TakeAction",
    "UseAction",
    "action_schemas",
    # Resolution
    "Ambiguous",
    "Found",
    "NotFound",
    "ResolutionResult",
    "find_exact",
    "resolve",
    # Command parsing
    "CommandParser",
    "ParsedCommand",
]
