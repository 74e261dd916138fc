"""
Engine Data Models for textquest.

Defines the data crossing the engine boundary:
- Action payloads: what a driver sends to step()
- GameState / GameResult: what step() sends back
- EngineConfig: tunables
"""

from __future__ import annotations

import os
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from textquest.models.world import Direction

# =============================================================================
# Action Payloads
# =============================================================================
#
# Every field is required. Structured callers (LLM function calling in
# particular) must be able to send complete payloads without guessing
# which fields are optional.


class LookAction(BaseModel):
    """Look at the room, its exits, or something in it."""

    target: str = Field(
        description='What to look at: "room", "exits", or the name of a thing'
    )


class MoveAction(BaseModel):
    """Move through an exit."""

    direction: Direction = Field(description="Direction to move")


class TakeAction(BaseModel):
    """Pick up an item."""

    item: str = Field(description="Item to pick up")


class UseAction(BaseModel):
    """Use an item you carry on something."""

    item: str = Field(description="Item from your inventory to use")
    target: str = Field(description="What to use the item on")


class InventoryAction(BaseModel):
    """List what you are carrying."""


class HelpAction(BaseModel):
    """Show the available actions."""


ACTION_MODELS: dict[str, type[BaseModel]] = {
    "look": LookAction,
    "move": MoveAction,
    "take": TakeAction,
    "use": UseAction,
    "inventory": InventoryAction,
    "help": HelpAction,
}


def action_schemas() -> dict[str, dict[str, Any]]:
    """JSON schema of every action payload, keyed by action name."""
    return {name: model.model_json_schema() for name, model in ACTION_MODELS.items()}


# =============================================================================
# Step Results
# =============================================================================


class GameState(BaseModel):
    """A continuing game: what to render and what can be done next."""

    output: str = Field(description="Rendered view of the current room")
    feedback: str = Field(default="", description="Narration of the last action")
    actions: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Action name -> payload JSON schema"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Location, inventory, score and turns for reporting tools",
    )


class GameResult(BaseModel):
    """Final outcome of a finished game. Wins and losses share this shape."""

    description: str = Field(description="Closing narration")
    score: int = Field(ge=0)
    inventory: list[str] = Field(default_factory=list, description="Item ids held at the end")
    visited_rooms: list[str] = Field(default_factory=list)
    turns: int = 0
    won: bool = False
    game_over: Literal[True] = True


class StateStep(BaseModel):
    type: Literal["state"] = "state"
    state: GameState


class ResultStep(BaseModel):
    type: Literal["result"] = "result"
    result: GameResult


StepResult = Annotated[StateStep | ResultStep, Field(discriminator="type")]


# =============================================================================
# Configuration
# =============================================================================


class EngineConfig(BaseModel):
    """Engine configuration."""

    # Scoring
    default_points: int = Field(default=5, ge=0)
    default_points_reason: str = "collected a treasure"

    # Turn limit, None for unlimited
    max_turns: int | None = Field(default=None, ge=1)
    turn_limit_message: str = (
        "You hear a rumbling sound as the temple begins to collapse. "
        "You've taken too long and now you're trapped! Game over."
    )

    # Rendering
    show_score: bool = True

    @classmethod
    def from_env(cls) -> EngineConfig:
        """
        Build a config from environment variables.

        TEXTQUEST_MAX_TURNS: Turn limit (unset or 0 for unlimited)
        TEXTQUEST_DEFAULT_POINTS: Points for an ordinary pickup
        TEXTQUEST_SHOW_SCORE: "0"/"false" hides the score line

        Raises:
            ValueError: A variable holds a value the config rejects
        """
        values: dict[str, Any] = {}

        if os.getenv("TEXTQUEST_MAX_TURNS"):
            values["max_turns"] = _env_int("TEXTQUEST_MAX_TURNS") or None

        if os.getenv("TEXTQUEST_DEFAULT_POINTS"):
            values["default_points"] = _env_int("TEXTQUEST_DEFAULT_POINTS")

        if os.getenv("TEXTQUEST_SHOW_SCORE"):
            flag = os.getenv("TEXTQUEST_SHOW_SCORE", "1").strip().lower()
            values["show_score"] = flag not in {"0", "false", "no", "off"}

        return cls(**values)


def _env_int(name: str) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
