"""Tests for core world models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from textquest.errors import WorldIntegrityError
from textquest.models import (
    Direction,
    Exit,
    GameMap,
    MoveTrap,
    Room,
    RuleBook,
    SessionState,
    TakeRule,
    UseEffect,
    create_character,
    create_feature,
    create_item,
)


def make_map() -> GameMap:
    lamp = create_item("lamp", "Brass Lamp", "A dented lamp.", tags=["lamp", "light"])
    key = create_item("key", "Iron Key", "A heavy key.")
    return GameMap(
        title="Two Rooms",
        start_room_id="hall",
        rooms={
            "hall": Room(
                id="hall",
                name="Hall",
                description="A bare hall.",
                exits={
                    Direction.NORTH: Exit(
                        id="hall_north", name="north door", target_room_id="study"
                    )
                },
                items={"lamp": lamp},
                features={"rug": create_feature("rug", "Faded Rug")},
            ),
            "study": Room(
                id="study",
                name="Study",
                exits={
                    Direction.SOUTH: Exit(
                        id="study_south", name="south door", target_room_id="hall"
                    )
                },
                characters={"owl": create_character("owl", "Stuffed Owl")},
            ),
        },
        items={"key": key},
    )


# --- Entity Tests ---


class TestEntityFactories:
    """Tests for entity factory functions."""

    def test_create_item_defaults(self):
        item = create_item("torch", "Torch")
        assert item.takeable is True
        assert item.tags == ["torch"]
        assert item.usable_with is None

    def test_create_feature_tags_from_name(self):
        feature = create_feature("wall_inscriptions", "Wall Inscriptions")
        assert feature.tags == ["wall", "inscriptions"]

    def test_create_character_default_tag(self):
        character = create_character("hermit", "Old Hermit")
        assert character.tags == ["character"]

    def test_search_terms_are_lowercase(self):
        item = create_item("gem", "Sacred Gem", tags=["Jewel"])
        assert item.search_terms() == ["sacred gem", "jewel"]

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            create_item("", "Nothing")


# --- Room Tests ---


class TestRoom:
    """Tests for Room model."""

    def test_exit_towards(self):
        room = make_map().room("hall")
        assert room.exit_towards(Direction.NORTH).target_room_id == "study"
        assert room.exit_towards("north").target_room_id == "study"

    def test_exit_towards_missing(self):
        room = make_map().room("hall")
        assert room.exit_towards("south") is None
        assert room.exit_towards("up") is None

    def test_key_must_match_id(self):
        with pytest.raises(ValidationError, match="under key"):
            Room(id="x", name="X", items={"wrong": create_item("lamp", "Lamp")})


# --- GameMap Tests ---


class TestGameMap:
    """Tests for GameMap validation and lookups."""

    def test_room_items_merged_into_catalog(self):
        game_map = make_map()
        assert set(game_map.items) == {"lamp", "key"}
        # Same object, so rewrites in a room show in the catalog
        assert game_map.items["lamp"] is game_map.rooms["hall"].items["lamp"]

    def test_requires_rooms(self):
        with pytest.raises(ValidationError, match="at least one room"):
            GameMap(title="Empty", start_room_id="nowhere", rooms={})

    def test_start_room_must_exist(self):
        with pytest.raises(ValidationError, match="Start room"):
            GameMap(
                title="Bad",
                start_room_id="attic",
                rooms={"hall": Room(id="hall", name="Hall")},
            )

    def test_exit_target_must_exist(self):
        with pytest.raises(ValidationError, match="unknown room"):
            GameMap(
                title="Bad",
                start_room_id="hall",
                rooms={
                    "hall": Room(
                        id="hall",
                        name="Hall",
                        exits={
                            Direction.EAST: Exit(
                                id="e", name="east door", target_room_id="garden"
                            )
                        },
                    )
                },
            )

    def test_room_lookup_raises_integrity_error(self):
        with pytest.raises(WorldIntegrityError, match="Room not found: cellar"):
            make_map().room("cellar")

    def test_clone_is_independent(self):
        template = make_map()
        clone = template.clone()
        clone.rooms["hall"].items.pop("lamp")
        clone.rooms["hall"].features["rug"].description = "Burnt."

        assert "lamp" in template.rooms["hall"].items
        assert template.rooms["hall"].features["rug"].description == ""

    def test_clone_keeps_catalog_identity(self):
        clone = make_map().clone()
        assert clone.items["lamp"] is clone.rooms["hall"].items["lamp"]

    def test_find_item_checks_catalog(self):
        game_map = make_map()
        assert game_map.find_item("key").name == "Iron Key"
        assert game_map.find_item("ghost") is None

    def test_find_entity(self):
        game_map = make_map()
        assert game_map.find_entity("rug").name == "Faded Rug"
        assert game_map.find_entity("owl").name == "Stuffed Owl"
        assert game_map.find_entity("lamp").name == "Brass Lamp"
        assert game_map.find_entity("ghost") is None

    def test_placed_item_ids(self):
        assert make_map().placed_item_ids() == {"lamp"}

    def test_hidden_item_ids(self):
        assert make_map().hidden_item_ids() == {"key"}

    def test_item_placed_in_two_rooms_rejected(self):
        gem = create_item("gem", "Green Gem")
        with pytest.raises(ValidationError, match="'gem' is placed in more than one room"):
            GameMap(
                title="Twins",
                start_room_id="a",
                rooms={
                    "a": Room(id="a", name="Room A", items={"gem": gem}),
                    "b": Room(id="b", name="Room B", items={"gem": gem.model_copy()}),
                },
            )


# --- Session Tests ---


class TestSessionState:
    """Tests for SessionState."""

    def test_begin(self):
        session = SessionState.begin(make_map())
        assert session.current_room_id == "hall"
        assert session.visited_rooms == ["hall"]
        assert session.score == 0
        assert session.terminal is False

    def test_visit_keeps_first_visit_order(self):
        session = SessionState.begin(make_map())
        session.visit("study")
        session.visit("hall")
        assert session.current_room_id == "hall"
        assert session.visited_rooms == ["hall", "study"]

    def test_add_score(self):
        session = SessionState.begin(make_map())
        note = session.add_score(20, "found a rare sacred gem")
        assert session.score == 20
        assert note == "(+20 points: found a rare sacred gem)"

    def test_score_never_decreases(self):
        session = SessionState.begin(make_map())
        with pytest.raises(ValueError, match="only increase"):
            session.add_score(-1, "penalty")

    def test_has_all(self):
        session = SessionState.begin(make_map())
        session.inventory["key"] = create_item("key", "Iron Key")
        assert session.has_all(["key"])
        assert session.has_all([])
        assert not session.has_all(["key", "lamp"])


# --- Rule Tests ---


class TestRuleBook:
    """Tests for rule tables."""

    def test_take_rule_requirements_need_message(self):
        with pytest.raises(ValidationError, match="failure message"):
            TakeRule(item_id="lamp", points=5, reason="x", requires=["key"])

    def test_use_effect_consumes_only_participants(self):
        with pytest.raises(ValidationError, match="cannot consume"):
            UseEffect(item_id="key", target_id="rug", message="ok", consume=["lamp"])

    def test_lookups(self):
        rules = RuleBook(
            move_traps=[
                MoveTrap(
                    room_id="hall", direction=Direction.NORTH, requires=["lamp"], message="Dark!"
                )
            ],
            take_rules={"key": TakeRule(item_id="key", points=10, reason="found a key")},
            use_effects=[UseEffect(item_id="lamp", target_id="rug", message="Bright.")],
        )
        assert len(rules.traps_for("hall", Direction.NORTH)) == 1
        assert rules.traps_for("hall", Direction.SOUTH) == []
        assert rules.take_rule("key").points == 10
        assert rules.take_rule("lamp") is None
        assert rules.use_effect("lamp", "rug").message == "Bright."
        assert rules.use_effect("rug", "lamp") is None

    def test_check_passes_for_consistent_rules(self):
        rules = RuleBook(
            move_traps=[
                MoveTrap(room_id="hall", direction=Direction.NORTH, requires=["lamp"], message="!")
            ],
            use_effects=[UseEffect(item_id="lamp", target_id="owl", message="Hoot.")],
        )
        rules.check(make_map())

    def test_check_accepts_world_changing_effect(self):
        rules = RuleBook(
            use_effects=[
                UseEffect(
                    item_id="lamp",
                    target_id="rug",
                    message="A trapdoor!",
                    open_exits={Direction.WEST: "study"},
                    reveal_items=["key"],
                )
            ]
        )
        rules.check(make_map())

    def test_check_rejects_exit_to_unknown_room(self):
        rules = RuleBook(
            use_effects=[
                UseEffect(
                    item_id="lamp",
                    target_id="rug",
                    message="!",
                    open_exits={Direction.WEST: "cellar"},
                )
            ]
        )
        with pytest.raises(ValueError, match="unknown room 'cellar'"):
            rules.check(make_map())

    def test_check_rejects_revealing_placed_item(self):
        rules = RuleBook(
            use_effects=[
                UseEffect(item_id="lamp", target_id="rug", message="!", reveal_items=["lamp"])
            ]
        )
        with pytest.raises(ValueError, match="not hidden"):
            rules.check(make_map())

    def test_check_rejects_revealing_unknown_item(self):
        rules = RuleBook(
            use_effects=[
                UseEffect(item_id="lamp", target_id="rug", message="!", reveal_items=["crown"])
            ]
        )
        with pytest.raises(ValueError, match="unknown item 'crown'"):
            rules.check(make_map())

    def test_check_rejects_unknown_room(self):
        rules = RuleBook(
            move_traps=[
                MoveTrap(room_id="attic", direction=Direction.NORTH, requires=[], message="!")
            ]
        )
        with pytest.raises(ValueError, match="unknown room"):
            rules.check(make_map())

    def test_check_rejects_missing_exit(self):
        rules = RuleBook(
            move_traps=[
                MoveTrap(room_id="hall", direction=Direction.WEST, requires=[], message="!")
            ]
        )
        with pytest.raises(ValueError, match="missing exit"):
            rules.check(make_map())

    def test_check_rejects_unknown_item(self):
        rules = RuleBook(
            take_rules={"crown": TakeRule(item_id="crown", points=1, reason="x")}
        )
        with pytest.raises(ValueError, match="unknown item 'crown'"):
            rules.check(make_map())
