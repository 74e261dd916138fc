"""
Game Engine for textquest.

The facade a driver talks to. Owns one private copy of the map and
one session, and turns each action into either a continuing state or
a final result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from textquest.content import build_temple_map, build_temple_rules
from textquest.engine.models import (
    EngineConfig,
    GameResult,
    GameState,
    ResultStep,
    StateStep,
    action_schemas,
)
from textquest.engine.processor import ActionOutcome, ActionProcessor
from textquest.engine.render import render_view
from textquest.errors import GameOverError
from textquest.models.rules import RuleBook
from textquest.models.session import SessionState
from textquest.models.world import GameMap
from textquest.services.save import SaveRecord, deserialize, serialize

logger = logging.getLogger(__name__)

Action = tuple[str, Any]


@dataclass
class Game:
    """
    A single playthrough of one adventure.

    Lifecycle:
    - initialize(): fresh session from the template (also a reset)
    - start(): opening view and the action schemas
    - step(): one action, until a result ends the game
    - cleanup(): nothing to release, kept for drivers
    """

    template: GameMap = field(default_factory=build_temple_map)
    rules: RuleBook = field(default_factory=build_temple_rules)
    config: EngineConfig = field(default_factory=EngineConfig)

    # Playthrough state (initialized in initialize() or restore())
    game_map: GameMap | None = field(init=False, default=None)
    session: SessionState | None = field(init=False, default=None)
    _processor: ActionProcessor | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Check the rule tables against the template."""
        self.rules.check(self.template)

    def initialize(self) -> None:
        """Clone the template and place the player in the start room."""
        game_map = self.template.clone()
        self._attach(game_map, SessionState.begin(game_map))
        logger.info(
            "Initialized '%s' at room %s", game_map.title, game_map.start_room_id
        )

    def start(self) -> GameState:
        """
        Get the opening state.

        Returns:
            The start room view, a welcome line and every action schema
        """
        game_map, session = self._require_session()
        room = game_map.room(session.current_room_id)
        return GameState(
            output=render_view(room, session, self.config.show_score),
            feedback=f"Welcome to {game_map.title}. {game_map.description}.",
            actions=action_schemas(),
            metadata=self._metadata(),
        )

    def step(self, action: Action) -> StateStep | ResultStep:
        """
        Process one action.

        Args:
            action: (action_name, payload) pair, e.g. ("move", {"direction": "north"}).
                Anything else is reported as an unrecognized action.

        Returns:
            StateStep while the game continues, ResultStep once it ends

        Raises:
            RuntimeError: The game was never initialized
            GameOverError: A result was already returned
            WorldIntegrityError: The current room is missing from the map
        """
        game_map, session = self._require_session()
        if session.terminal:
            raise GameOverError("The game is over; initialize() to play again")

        if isinstance(action, (tuple, list)) and len(action) == 2:
            action_name, payload = action
        else:
            logger.warning("Malformed action %r", action)
            action_name, payload = None, None
        logger.debug("Turn %d: %s %r", session.turns + 1, action_name, payload)

        outcome = self._processor.handle(action_name, payload)
        session.turns += 1

        if (
            not outcome.terminal
            and self.config.max_turns is not None
            and session.turns >= self.config.max_turns
        ):
            outcome = ActionOutcome(
                f"{outcome.feedback}\n\n{self.config.turn_limit_message}".strip(),
                terminal=True,
            )

        logger.debug("Turn %d feedback: %s", session.turns, outcome.feedback)

        if outcome.terminal:
            session.terminal = True
            session.won = outcome.won
            logger.info(
                "Game over after %d turns: %s with score %d",
                session.turns,
                "won" if outcome.won else "lost",
                session.score,
            )
            return ResultStep(
                result=GameResult(
                    description=outcome.feedback,
                    score=session.score,
                    inventory=session.inventory_ids(),
                    visited_rooms=list(session.visited_rooms),
                    turns=session.turns,
                    won=outcome.won,
                )
            )

        room = game_map.room(session.current_room_id)
        return StateStep(
            state=GameState(
                output=render_view(room, session, self.config.show_score),
                feedback=outcome.feedback,
                actions=action_schemas(),
                metadata=self._metadata(),
            )
        )

    def cleanup(self) -> None:
        """Release resources. The core holds none."""
        logger.debug("Cleanup requested")

    # Save / restore -------------------------------------------------------

    def save_data(self) -> SaveRecord:
        """Snapshot the session and the mutated map."""
        game_map, session = self._require_session()
        record = serialize(session, game_map)
        logger.info(
            "Saved game at room %s after %d turns", session.current_room_id, session.turns
        )
        return record

    @classmethod
    def restore(
        cls,
        data: SaveRecord | dict[str, Any],
        template: GameMap | None = None,
        rules: RuleBook | None = None,
        config: EngineConfig | None = None,
    ) -> Game:
        """
        Build a game that resumes from save data.

        The saved map becomes the live map. The template, used by a
        later initialize(), stays the pristine adventure.

        Raises:
            SaveDataError: The data fails validation
        """
        session, game_map = deserialize(data)
        game = cls(
            template=template if template is not None else build_temple_map(),
            rules=rules if rules is not None else build_temple_rules(),
            config=config if config is not None else EngineConfig(),
        )
        game._attach(game_map, session)
        logger.info(
            "Restored game at room %s with %d items",
            session.current_room_id,
            len(session.inventory),
        )
        return game

    # Helpers --------------------------------------------------------------

    def _attach(self, game_map: GameMap, session: SessionState) -> None:
        self.game_map = game_map
        self.session = session
        self._processor = ActionProcessor(game_map, session, self.rules, self.config)

    def _require_session(self) -> tuple[GameMap, SessionState]:
        if self.game_map is None or self.session is None or self._processor is None:
            raise RuntimeError("Game not initialized; call initialize() first")
        return self.game_map, self.session

    def _metadata(self) -> dict[str, Any]:
        session = self.session
        return {
            "currentRoom": session.current_room_id,
            "visitedRooms": list(session.visited_rooms),
            "inventoryItems": session.inventory_ids(),
            "score": session.score,
            "turns": session.turns,
        }
