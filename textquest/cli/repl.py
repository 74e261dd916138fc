"""
Interactive REPL for textquest.

Provides a text-based interface for playing the bundled adventure.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from textquest.engine import CommandParser, EngineConfig, Game, GameState, ResultStep
from textquest.engine.models import GameResult
from textquest.errors import GameOverError, SaveDataError
from textquest.services.save import load_from_file, save_to_file

logger = logging.getLogger(__name__)


@dataclass
class ReplState:
    """Current state of the REPL session."""

    game: Game
    running: bool = True
    finished: bool = False


@dataclass
class Command:
    """A special REPL command."""

    name: str
    aliases: list[str]
    description: str
    handler: Callable[[ReplState, list[str]], str]


class GameREPL:
    """
    Interactive REPL for playing textquest.

    Handles user input, special commands, and game output. Plain text
    is parsed into actions; lines starting with "/" are REPL commands.
    """

    def __init__(self, *, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.parser = CommandParser()
        self.commands: dict[str, Command] = {}
        self._register_commands()

    def _register_commands(self) -> None:
        """Register all special commands."""
        commands = [
            Command(
                name="quit",
                aliases=["exit", "q"],
                description="Exit the game",
                handler=self._cmd_quit,
            ),
            Command(
                name="help",
                aliases=["?", "h"],
                description="Show available commands",
                handler=self._cmd_help,
            ),
            Command(
                name="save",
                aliases=[],
                description="Save progress to a file: /save <file>",
                handler=self._cmd_save,
            ),
            Command(
                name="load",
                aliases=["restore"],
                description="Load progress from a file: /load <file>",
                handler=self._cmd_load,
            ),
            Command(
                name="restart",
                aliases=["reset"],
                description="Start the adventure over",
                handler=self._cmd_restart,
            ),
        ]

        for cmd in commands:
            self.commands[cmd.name] = cmd
            for alias in cmd.aliases:
                self.commands[alias] = cmd

    # Commands -------------------------------------------------------------

    def _cmd_quit(self, state: ReplState, args: list[str]) -> str:
        """Handle quit command."""
        state.running = False
        return "Farewell, adventurer!"

    def _cmd_help(self, state: ReplState, args: list[str]) -> str:
        """Handle help command."""
        lines = [
            "Available Commands:",
            "-" * 40,
        ]

        seen = set()
        for cmd in self.commands.values():
            if cmd.name not in seen:
                aliases = f" ({', '.join('/' + a for a in cmd.aliases)})" if cmd.aliases else ""
                lines.append(f"  /{cmd.name}{aliases} - {cmd.description}")
                seen.add(cmd.name)

        lines.extend(
            [
                "",
                "Tips:",
                "  - Type actions in plain English",
                "  - Examples: 'look around', 'go north', 'take torch', 'use scroll on inscriptions'",
                "  - Type 'help' for the engine's own list of actions",
            ]
        )

        return "\n".join(lines)

    def _cmd_save(self, state: ReplState, args: list[str]) -> str:
        """Handle save command."""
        if not args:
            return "Usage: /save <file>"
        path = Path(" ".join(args))
        try:
            save_to_file(state.game.save_data(), path)
        except OSError as e:
            logger.error("Could not write save file %s: %s", path, e)
            return f"Could not save to {path}: {e}"
        return f"Game saved to {path}."

    def _cmd_load(self, state: ReplState, args: list[str]) -> str:
        """Handle load command."""
        if not args:
            return "Usage: /load <file>"
        path = Path(" ".join(args))
        try:
            record = load_from_file(path)
            game = Game.restore(record, config=self.config)
        except OSError as e:
            logger.error("Could not read save file %s: %s", path, e)
            return f"Could not load {path}: {e}"
        except SaveDataError as e:
            logger.warning("Rejected save file %s", path)
            return f"{path} is not a valid save file.\n{e}"

        state.game = game
        state.finished = game.session.terminal
        return f"Game loaded from {path}.\n\n{self._format_state(game.start())}"

    def _cmd_restart(self, state: ReplState, args: list[str]) -> str:
        """Handle restart command."""
        state.game.initialize()
        state.finished = False
        return self._format_state(state.game.start())

    # Input handling -------------------------------------------------------

    def _is_command(self, text: str) -> bool:
        """Check if input is a special command."""
        return text.startswith("/")

    def _parse_command(self, text: str) -> tuple[str, list[str]]:
        """Parse a command into name and arguments."""
        parts = text[1:].split()  # Remove leading /
        if not parts:
            return "", []
        return parts[0].lower(), parts[1:]

    def process_input(self, text: str, state: ReplState) -> str:
        """Process user input and return response."""
        text = text.strip()

        if not text:
            return ""

        if self._is_command(text):
            cmd_name, args = self._parse_command(text)
            if cmd_name in self.commands:
                return self.commands[cmd_name].handler(state, args)
            return f"Unknown command: /{cmd_name}. Type /help for commands."

        if state.finished:
            return "The adventure is over. Type /restart to play again or /quit to leave."

        command = self.parser.parse(text)
        if command is None:
            return ""

        try:
            step = state.game.step(command.as_action())
        except GameOverError:
            state.finished = True
            return "The adventure is over. Type /restart to play again or /quit to leave."

        if isinstance(step, ResultStep):
            state.finished = True
            return self._format_result(step.result)
        return self._format_state(step.state)

    # Formatting -----------------------------------------------------------

    def _format_state(self, game_state: GameState) -> str:
        """Format a continuing state for display."""
        parts = []
        if game_state.feedback:
            parts.append(game_state.feedback)
        parts.append(game_state.output)
        return "\n\n".join(parts)

    def _format_result(self, result: GameResult) -> str:
        """Format the final result for display."""
        outcome = "VICTORY" if result.won else "GAME OVER"
        lines = [
            result.description,
            "",
            f"=== {outcome} ===",
            f"Score: {result.score}",
            f"Turns: {result.turns}",
            f"Rooms visited: {len(result.visited_rooms)}",
        ]
        if result.inventory:
            lines.append(f"Carrying: {', '.join(result.inventory)}")
        lines.append("")
        lines.append("Type /restart to play again or /quit to leave.")
        return "\n".join(lines)

    def _print_banner(self) -> None:
        """Print the game banner."""
        banner = r"""
  _____         _    ___                  _
 |_   _|____  _| |_ / _ \ _   _  ___  ___| |_
   | |/ _ \ \/ / __| | | | | | |/ _ \/ __| __|
   | |  __/>  <| |_| |_| | |_| |  __/\__ \ |_
   |_|\___/_/\_\\__|\__\_\\__,_|\___||___/\__|

    A Turn-Based Text Adventure
"""
        print(banner)
        print("Type /help for commands, or just type what you want to do.\n")

    def run(self) -> None:
        """Run the interactive REPL."""
        game = Game(config=self.config)
        game.initialize()
        state = ReplState(game=game)

        self._print_banner()
        print(self._format_state(game.start()))
        print()

        # Main loop
        while state.running:
            try:
                user_input = input("> ").strip()

                if not user_input:
                    continue

                response = self.process_input(user_input, state)

                if response:
                    print()
                    print(response)
                    print()

            except KeyboardInterrupt:
                print("\n")
                state.running = False
            except EOFError:
                print("\n")
                state.running = False

        state.game.cleanup()
        print("Thanks for playing!")


def run_game(config: EngineConfig | None = None) -> None:
    """
    Run the textquest game.

    Args:
        config: Engine configuration (defaults to the environment)
    """
    repl = GameREPL(config=config or EngineConfig.from_env())
    repl.run()


def main(argv: list[str] | None = None) -> None:
    """Console entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="textquest text adventure")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="End the game after this many turns (default: unlimited)",
    )
    parser.add_argument(
        "--hide-score",
        action="store_true",
        help="Do not show the score under each view",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("TEXTQUEST_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: $TEXTQUEST_LOG_LEVEL or WARNING)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, object] = {}
    if args.max_turns is not None:
        overrides["max_turns"] = args.max_turns or None
    if args.hide_score:
        overrides["show_score"] = False

    try:
        config = EngineConfig.model_validate(
            {**EngineConfig.from_env().model_dump(), **overrides}
        )
    except ValueError as e:
        parser.error(str(e))

    run_game(config)


if __name__ == "__main__":
    main()
