"""Tests for the bundled Ancient Maze Temple adventure."""

from __future__ import annotations

import json

import pytest

from textquest.content import build_temple_map, build_temple_rules
from textquest.engine import Game, ResultStep, StateStep
from textquest.models import Direction

WINNING_ROUTE = [
    ("take", {"item": "torch"}),
    ("move", {"direction": "north"}),
    ("move", {"direction": "east"}),
    ("take", {"item": "scroll"}),
    ("move", {"direction": "west"}),
    ("move", {"direction": "west"}),
    ("move", {"direction": "north"}),
    ("take", {"item": "badge"}),
    ("move", {"direction": "east"}),
    ("move", {"direction": "north"}),
    ("take", {"item": "gem"}),
    ("move", {"direction": "east"}),
    ("take", {"item": "chalice"}),
]


@pytest.fixture
def game() -> Game:
    game = Game()
    game.initialize()
    return game


class TestTempleMap:
    """Tests for the temple layout."""

    def test_rules_match_map(self):
        build_temple_rules().check(build_temple_map())

    def test_layout(self):
        temple = build_temple_map()
        assert temple.title == "Ancient Maze Temple"
        assert temple.start_room_id == "entrance"
        assert len(temple.rooms) == 10
        assert temple.rooms["northCorridor"].exits[Direction.NORTH].target_room_id == "innerSanctum"
        assert temple.rooms["treasureVault"].items["golden_chalice"].takeable
        assert temple.hidden_item_ids() == {"bronze_key"}
        assert Direction.NORTH not in temple.rooms["guardRoom"].exits

    def test_every_room_reachable(self):
        temple = build_temple_map()
        opened = [
            room_id
            for effect in build_temple_rules().use_effects
            for room_id in effect.open_exits.values()
        ]
        seen = {temple.start_room_id, *opened}
        frontier = [temple.start_room_id, *opened]
        while frontier:
            room = temple.rooms[frontier.pop()]
            for exit_ in room.exits.values():
                if exit_.target_room_id not in seen:
                    seen.add(exit_.target_room_id)
                    frontier.append(exit_.target_room_id)
        assert seen == set(temple.rooms)

    def test_fresh_template_each_call(self):
        assert build_temple_map() is not build_temple_map()


class TestTemplePlaythrough:
    """Tests that play the temple end to end."""

    def test_winning_route(self, game: Game):
        score = 0
        for action in WINNING_ROUTE[:-1]:
            step = game.step(action)
            assert isinstance(step, StateStep), action
            assert step.state.metadata["score"] >= score
            score = step.state.metadata["score"]

        step = game.step(WINNING_ROUTE[-1])
        assert isinstance(step, ResultStep)
        assert step.result.won is True
        assert step.result.score == 85
        assert step.result.turns == len(WINNING_ROUTE)
        assert step.result.description.startswith("Congratulations!")
        assert step.result.description.endswith("Final score: 85")
        assert "golden_chalice" in step.result.inventory

    def test_dark_passage_kills(self, game: Game):
        step = game.step(("move", {"direction": "north"}))
        assert isinstance(step, ResultStep)
        assert step.result.won is False
        assert "without a light" in step.result.description

    def test_guardian_needs_badge(self, game: Game):
        for action in [
            ("take", {"item": "torch"}),
            ("move", {"direction": "north"}),
            ("move", {"direction": "north"}),
            ("move", {"direction": "north"}),
        ]:
            step = game.step(action)
        assert isinstance(step, ResultStep)
        assert "Temple Guardian" in step.result.description
        assert step.result.visited_rooms == ["entrance", "mainHall", "northCorridor"]

    def test_chalice_without_scroll(self, game: Game):
        route = [a for a in WINNING_ROUTE if a != ("take", {"item": "scroll"})]
        for action in route[:-1]:
            game.step(action)
        step = game.step(route[-1])
        assert isinstance(step, ResultStep)
        assert step.result.won is False
        assert "curse" in step.result.description
        assert "golden_chalice" not in step.result.inventory

    def test_sacred_gem_points(self, game: Game):
        for action in WINNING_ROUTE[:-3]:
            game.step(action)
        step = game.step(("take", {"item": "gem"}))
        assert step.state.feedback == "You take the Sacred Gem. (+20 points: found a rare sacred gem)"

    def test_offering_bowl_is_fixed(self, game: Game):
        for action in [
            ("take", {"item": "torch"}),
            ("move", {"direction": "north"}),
            ("move", {"direction": "east"}),
            ("move", {"direction": "north"}),
        ]:
            game.step(action)
        step = game.step(("take", {"item": "bowl"}))
        assert step.state.feedback == "You can't take the Offering Bowl."

    def test_hermit_is_present(self, game: Game):
        for action in [
            ("take", {"item": "torch"}),
            ("move", {"direction": "north"}),
            ("move", {"direction": "east"}),
            ("move", {"direction": "north"}),
        ]:
            step = game.step(action)
        assert "Characters present: Old Hermit" in step.state.output
        look = game.step(("look", {"target": "hermit"}))
        assert look.state.feedback.startswith("Old Hermit (in this room):")

    def test_light_the_brazier(self, game: Game):
        for action in [
            ("take", {"item": "torch"}),
            ("move", {"direction": "north"}),
            ("move", {"direction": "east"}),
        ]:
            game.step(action)
        step = game.step(("use", {"item": "torch", "target": "brazier"}))
        assert step.state.feedback == "You light the brazier. Warm light floods the library."
        look = game.step(("look", {"target": "brazier"}))
        assert "burns brightly" in look.state.feedback
        assert "torch" in game.session.inventory


ARMORY_ROUTE = [
    ("take", {"item": "torch"}),
    ("move", {"direction": "north"}),
    ("take", {"item": "coin"}),
    ("use", {"item": "coin", "target": "stone altar"}),
    ("take", {"item": "key"}),
    ("move", {"direction": "west"}),
    ("move", {"direction": "north"}),
]


class TestHiddenArmory:
    """Tests for the altar key and the iron door."""

    def test_altar_reveals_key(self, game: Game):
        for action in ARMORY_ROUTE[:3]:
            game.step(action)
        step = game.step(ARMORY_ROUTE[3])
        assert "revealing a bronze key" in step.state.feedback
        assert "You see: Bronze Key" in step.state.output
        assert "old_coin" not in game.session.inventory
        assert "bronze_key" in game.game_map.rooms["mainHall"].items

    def test_door_starts_locked(self, game: Game):
        for action in ARMORY_ROUTE:
            game.step(action)
        assert game.session.current_room_id == "guardRoom"
        step = game.step(("move", {"direction": "north"}))
        assert step.state.feedback == "You cannot move north from here."

    def test_key_opens_door(self, game: Game):
        for action in ARMORY_ROUTE:
            game.step(action)
        step = game.step(("use", {"item": "key", "target": "iron door"}))
        assert step.state.feedback.startswith("The serpent key turns")
        assert "Visible exits: south, east, north" in step.state.output
        assert "bronze_key" not in game.session.inventory

        game.step(("move", {"direction": "north"}))
        step = game.step(("take", {"item": "dagger"}))
        assert step.state.feedback == (
            "You take the Silver Dagger. "
            "(+15 points: recovered the guard captain's silver dagger)"
        )
        assert step.state.metadata["score"] == 30
        assert step.state.metadata["turns"] == 10

    def test_open_door_survives_save(self, game: Game):
        for action in ARMORY_ROUTE:
            game.step(action)
        game.step(("use", {"item": "key", "target": "iron door"}))

        restored = Game.restore(json.loads(game.save_data().to_json()))
        assert restored.game_map.room("guardRoom").features["iron_door"].description == (
            "The iron door stands open, the bronze key fixed in its lock."
        )
        step = restored.step(("move", {"direction": "north"}))
        assert step.state.metadata["currentRoom"] == "hiddenArmory"

        restored.initialize()
        assert Direction.NORTH not in restored.game_map.rooms["guardRoom"].exits
