"""Tests for the interactive REPL."""

from __future__ import annotations

from pathlib import Path

import pytest

from textquest.cli.repl import GameREPL, ReplState, main
from textquest.engine import EngineConfig, Game


@pytest.fixture
def repl() -> GameREPL:
    return GameREPL()


@pytest.fixture
def state() -> ReplState:
    game = Game()
    game.initialize()
    return ReplState(game=game)


class TestGameREPL:
    """Tests for REPL input handling."""

    def test_plain_text_becomes_action(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("take the torch", state)
        assert response.startswith("You take the Torch. (+5 points: collected a treasure)")
        assert "# Temple Entrance" in response

    def test_blank_input(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("   ", state) == ""

    def test_unknown_verb(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("dance", state).startswith("Action not recognized.")

    def test_help_command(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("/help", state)
        assert "/save" in response
        assert "/load (/restore)" in response

    def test_unknown_command(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("/fly", state).startswith("Unknown command: /fly")

    def test_quit(self, repl: GameREPL, state: ReplState):
        repl.process_input("/quit", state)
        assert state.running is False

    def test_game_over_then_restart(self, repl: GameREPL, state: ReplState):
        response = repl.process_input("go north", state)
        assert "=== GAME OVER ===" in response
        assert state.finished is True
        assert repl.process_input("look", state).startswith("The adventure is over.")

        response = repl.process_input("/restart", state)
        assert "# Temple Entrance" in response
        assert state.finished is False

    def test_victory_banner(self, repl: GameREPL, state: ReplState):
        for line in [
            "take torch",
            "n",
            "e",
            "take scroll",
            "w",
            "w",
            "n",
            "take badge",
            "e",
            "n",
            "take gem",
            "e",
        ]:
            repl.process_input(line, state)
        response = repl.process_input("take chalice", state)
        assert "=== VICTORY ===" in response
        assert "Score: 85" in response

    def test_save_and_load(self, repl: GameREPL, state: ReplState, tmp_path: Path):
        repl.process_input("take torch", state)
        repl.process_input("n", state)
        path = tmp_path / "save.json"
        assert repl.process_input(f"/save {path}", state) == f"Game saved to {path}."

        repl.process_input("/restart", state)
        assert state.game.session.current_room_id == "entrance"

        response = repl.process_input(f"/load {path}", state)
        assert response.startswith(f"Game loaded from {path}.")
        assert state.game.session.current_room_id == "mainHall"
        assert state.game.session.inventory_ids() == ["torch"]

    def test_load_bad_file(self, repl: GameREPL, state: ReplState, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text('{"currentRoomId": "entrance"}', encoding="utf-8")
        response = repl.process_input(f"/load {path}", state)
        assert "is not a valid save file" in response
        assert state.game.session.current_room_id == "entrance"

    def test_load_missing_file(self, repl: GameREPL, state: ReplState, tmp_path: Path):
        response = repl.process_input(f"/load {tmp_path / 'nope.json'}", state)
        assert response.startswith("Could not load")

    def test_save_usage(self, repl: GameREPL, state: ReplState):
        assert repl.process_input("/save", state) == "Usage: /save <file>"

    def test_config_passed_to_loaded_game(self, state: ReplState, tmp_path: Path):
        repl = GameREPL(config=EngineConfig(show_score=False))
        path = tmp_path / "save.json"
        repl.process_input(f"/save {path}", state)
        repl.process_input(f"/load {path}", state)
        assert state.game.config.show_score is False


class TestMain:
    """Tests for command line configuration."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: pytest.MonkeyPatch):
        for name in ("TEXTQUEST_MAX_TURNS", "TEXTQUEST_DEFAULT_POINTS", "TEXTQUEST_SHOW_SCORE"):
            monkeypatch.delenv(name, raising=False)

    def test_negative_max_turns_rejected(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc:
            main(["--max-turns", "-3"])
        assert exc.value.code == 2
        assert "max_turns" in capsys.readouterr().err

    def test_bad_env_rejected(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ):
        monkeypatch.setenv("TEXTQUEST_DEFAULT_POINTS", "many")
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2
        assert "TEXTQUEST_DEFAULT_POINTS must be an integer" in capsys.readouterr().err

    def test_flags_reach_game(self, monkeypatch: pytest.MonkeyPatch):
        started = []
        monkeypatch.setattr("textquest.cli.repl.run_game", started.append)
        main(["--max-turns", "0", "--hide-score"])
        assert started[0].max_turns is None
        assert started[0].show_score is False
