"""
The Ancient Maze Temple.

Bundled adventure: a temple of twisting corridors with a golden
chalice in its vault. Reaching the vault requires light and a guard's
badge. Lifting the chalice requires the sacred gem and the ancient
scroll, or the temple claims another treasure hunter.

A coin left on the stone altar uncovers a key to the guard captain's
hidden armory.
"""

from __future__ import annotations

from textquest.models import (
    Direction,
    Exit,
    Feature,
    GameMap,
    MoveTrap,
    Room,
    RuleBook,
    TakeRule,
    UseEffect,
    create_character,
    create_feature,
    create_item,
)


def _exits(**targets: tuple[str, str]) -> dict[Direction, Exit]:
    """Build exits from direction=(target_room_id, description) pairs."""
    exits = {}
    for direction, (target, description) in targets.items():
        exits[Direction(direction)] = Exit(
            id=f"{direction}_to_{target}",
            name=f"{direction} exit",
            description=description,
            tags=[direction],
            target_room_id=target,
        )
    return exits


def _features(*features: Feature) -> dict[str, Feature]:
    return {feature.id: feature for feature in features}


def build_temple_map() -> GameMap:
    """
    Create the Ancient Maze Temple map template.

    Returns a fresh template every call. Games clone it again before
    playing, so callers may keep and reuse the returned map.
    """
    torch = create_item(
        "torch",
        "Torch",
        "A pitch-soaked torch, burning steadily. It will light the dark corridors ahead.",
        tags=["torch", "light", "fire"],
        usable_with={"bronze_brazier"},
    )
    old_coin = create_item(
        "old_coin",
        "Old Coin",
        "A tarnished coin stamped with the image of a forgotten king.",
        tags=["coin", "money", "treasure"],
        usable_with={"offering_bowl", "stone_altar"},
    )
    ancient_scroll = create_item(
        "ancient_scroll",
        "Ancient Scroll",
        "A brittle scroll covered in the same script as the entrance inscriptions.",
        tags=["scroll", "paper", "text"],
        usable_with={"wall_inscriptions", "golden_altar"},
    )
    rusty_sword = create_item(
        "rusty_sword",
        "Rusty Sword",
        "An old sword, pitted with rust but still holding an edge.",
        tags=["sword", "blade", "weapon"],
        usable_with={"armor_stand", "weapon_racks"},
    )
    crystal_shard = create_item(
        "crystal_shard",
        "Crystal Shard",
        "A sliver of pale crystal that hums faintly when held.",
        tags=["crystal", "shard"],
        usable_with={"crystal_lights", "crystal_formations"},
    )
    guard_badge = create_item(
        "guard_badge",
        "Guard Badge",
        "A bronze badge bearing the temple guard's seal. Someone might still honor it.",
        tags=["badge", "seal"],
        usable_with={"grand_archway"},
    )
    sacred_gem = create_item(
        "sacred_gem",
        "Sacred Gem",
        "A flawless gem that glows with an inner light.",
        tags=["gem", "jewel", "treasure"],
    )
    golden_chalice = create_item(
        "golden_chalice",
        "Golden Chalice",
        "The legendary Golden Chalice, its rim set with tiny rubies.",
        tags=["chalice", "cup", "treasure"],
    )
    # Hidden until the coin is placed on the stone altar
    bronze_key = create_item(
        "bronze_key",
        "Bronze Key",
        "A heavy bronze key, its bow shaped like a coiled serpent.",
        tags=["key", "bronze"],
        usable_with={"iron_door"},
    )
    silver_dagger = create_item(
        "silver_dagger",
        "Silver Dagger",
        "A slender dagger of untarnished silver, once the guard captain's pride.",
        tags=["dagger", "blade", "silver", "treasure"],
    )
    offering_bowl = create_item(
        "offering_bowl",
        "Offering Bowl",
        "A shallow stone bowl set beside the fountain. It is empty.",
        tags=["bowl", "offering"],
        takeable=False,
    )

    rooms = [
        Room(
            id="entrance",
            name="Temple Entrance",
            description=(
                "A grand entranceway with weathered stone columns. Ancient inscriptions "
                "cover the walls. The musty air carries the weight of centuries, and your "
                "footsteps echo ominously through the chamber."
            ),
            exits=_exits(north=("mainHall", "A dark passage leads deeper into the temple.")),
            items={torch.id: torch},
            features=_features(
                create_feature(
                    "stone_columns",
                    "Stone Columns",
                    "Massive stone columns rise to the ceiling, carved with intricate spiral "
                    "patterns that seem to tell ancient stories.",
                ),
                create_feature(
                    "wall_inscriptions",
                    "Wall Inscriptions",
                    "The wall inscriptions appear to be in an ancient script, depicting "
                    "rituals and warnings about the temple's depths.",
                ),
                create_feature(
                    "grand_doorway",
                    "Grand Doorway",
                    "The grand stone doorway is flanked by carved serpents, their eyes "
                    "seeming to follow your movements.",
                ),
            ),
        ),
        Room(
            id="mainHall",
            name="Main Hall",
            description=(
                "A vast ceremonial hall with high ceilings. Faded murals depict forgotten "
                "rituals. The air is thick with dust, and your torch casts dancing shadows "
                "on the crumbling walls."
            ),
            exits=_exits(
                south=("entrance", "Daylight glimmers back toward the entrance."),
                east=("eastWing", "A doorway opens onto rows of dusty shelves."),
                west=("westWing", "A low arch leads to what looks like an armory."),
                north=("northCorridor", "A corridor glows with a faint blue light."),
            ),
            items={old_coin.id: old_coin},
            features=_features(
                create_feature(
                    "ancient_murals",
                    "Ancient Murals",
                    "The faded murals show robed figures performing complex ceremonies "
                    "around a golden chalice.",
                ),
                create_feature(
                    "vaulted_ceiling",
                    "Vaulted Ceiling",
                    "The vaulted ceiling stretches high above, decorated with astronomical "
                    "symbols.",
                ),
                create_feature(
                    "stone_altar",
                    "Stone Altar",
                    "A large stone altar dominates the center of the hall, its surface "
                    "stained dark with age.",
                ),
            ),
        ),
        Room(
            id="eastWing",
            name="Eastern Wing",
            description="A library-like chamber filled with dusty scrolls and broken pottery.",
            exits=_exits(
                west=("mainHall", "The main hall lies back to the west."),
                north=("meditation", "The sound of trickling water comes from the north."),
            ),
            items={ancient_scroll.id: ancient_scroll},
            features=_features(
                create_feature(
                    "wooden_shelves",
                    "Wooden Shelves",
                    "Wooden shelves line the walls, sagging under the weight of ancient "
                    "tomes and scrolls.",
                ),
                create_feature(
                    "scholars_desk",
                    "Scholar's Desk",
                    "A scholar's desk sits in the corner, covered in dust and fragments of "
                    "pottery.",
                ),
                create_feature(
                    "bronze_brazier",
                    "Bronze Brazier",
                    "An old bronze brazier stands cold and empty, its surface green with age.",
                ),
            ),
        ),
        Room(
            id="westWing",
            name="Western Wing",
            description="An armory with empty weapon racks and fallen shields.",
            exits=_exits(
                east=("mainHall", "The main hall lies back to the east."),
                north=("guardRoom", "A narrow passage leads to the guard post."),
            ),
            items={rusty_sword.id: rusty_sword},
            features=_features(
                create_feature(
                    "weapon_racks",
                    "Weapon Racks",
                    "The wooden weapon racks stand mostly empty, though you can see where "
                    "weapons once rested.",
                ),
                create_feature(
                    "training_circle",
                    "Training Circle",
                    "A circular area marked in the stone floor suggests this was once a "
                    "practice area.",
                ),
                create_feature(
                    "armor_stand",
                    "Armor Stand",
                    "A toppled armor stand lies in the corner, its bronze surface dulled by "
                    "time.",
                ),
            ),
        ),
        Room(
            id="northCorridor",
            name="North Corridor",
            description=(
                "A long hallway with flickering magical lights. The air feels charged "
                "with energy."
            ),
            exits=_exits(
                south=("mainHall", "The main hall lies back to the south."),
                east=("meditation", "A quiet chamber lies to the east."),
                west=("guardRoom", "An abandoned guard post lies to the west."),
                north=("innerSanctum", "A grand archway opens onto an otherworldly glow."),
            ),
            features=_features(
                create_feature(
                    "crystal_lights",
                    "Crystal Lights",
                    "Mysterious crystals embedded in the walls emit a soft, pulsing blue "
                    "light.",
                ),
                create_feature(
                    "wall_carvings",
                    "Wall Carvings",
                    "The walls are carved with flowing patterns that seem to move in the "
                    "flickering light.",
                ),
                create_feature(
                    "grand_archway",
                    "Grand Archway",
                    "A grand archway ahead bears symbols of power and protection.",
                ),
            ),
        ),
        Room(
            id="meditation",
            name="Meditation Chamber",
            description=(
                "A peaceful room with a small fountain. Crystal formations catch what "
                "little light there is."
            ),
            exits=_exits(
                south=("eastWing", "The library lies to the south."),
                west=("northCorridor", "Blue light spills in from the corridor to the west."),
            ),
            items={crystal_shard.id: crystal_shard, offering_bowl.id: offering_bowl},
            features=_features(
                create_feature(
                    "stone_fountain",
                    "Stone Fountain",
                    "A small fountain trickles with surprisingly clear water, creating a "
                    "peaceful atmosphere.",
                ),
                create_feature(
                    "crystal_formations",
                    "Crystal Formations",
                    "Natural crystal formations grow from the walls, catching and refracting "
                    "light beautifully.",
                ),
                create_feature(
                    "meditation_cushions",
                    "Meditation Cushions",
                    "Ancient meditation cushions, now mostly dust, are arranged in a circle.",
                ),
            ),
            characters={
                "old_hermit": create_character(
                    "old_hermit",
                    "Old Hermit",
                    "A gaunt hermit sits cross-legged by the fountain, murmuring about "
                    "gems and scrolls and the price the vault demands.",
                    tags=["hermit", "man", "character"],
                ),
            },
        ),
        Room(
            id="guardRoom",
            name="Guard's Quarters",
            description=(
                "Once a guard post, now abandoned. Old bedrolls and equipment lie "
                "scattered about."
            ),
            exits=_exits(
                south=("westWing", "The armory lies to the south."),
                east=("northCorridor", "The glowing corridor lies to the east."),
            ),
            items={guard_badge.id: guard_badge},
            features=_features(
                create_feature(
                    "stone_firepit",
                    "Stone Firepit",
                    "A cold firepit contains the ashes of long-dead fires.",
                ),
                create_feature(
                    "stone_bunks",
                    "Stone Bunks",
                    "Stone bunks line the walls, their old bedding reduced to dust.",
                ),
                create_feature(
                    "fallen_weapon_rack",
                    "Fallen Weapon Rack",
                    "A fallen weapon rack lies against the wall, its contents long since "
                    "looted.",
                ),
                create_feature(
                    "iron_door",
                    "Iron Door",
                    "A heavy iron door is set into the north wall. Its lock is shaped like "
                    "a coiled serpent.",
                    tags=["door", "iron", "lock"],
                ),
            ),
        ),
        Room(
            id="hiddenArmory",
            name="Hidden Armory",
            description=(
                "A cramped vault behind the iron door, where the guard captain kept "
                "what mattered most."
            ),
            exits=_exits(south=("guardRoom", "The guard post lies back to the south.")),
            items={silver_dagger.id: silver_dagger},
            features=_features(
                create_feature(
                    "captains_chest",
                    "Captain's Chest",
                    "An iron-bound chest with its lid thrown back, empty but for dust.",
                ),
            ),
        ),
        Room(
            id="innerSanctum",
            name="Inner Sanctum",
            description=(
                "A sacred chamber bathed in an otherworldly glow. Ancient treasures line "
                "ornate pedestals."
            ),
            exits=_exits(
                south=("northCorridor", "The corridor lies back to the south."),
                east=("treasureVault", "Golden light gleams from a vault to the east."),
            ),
            items={sacred_gem.id: sacred_gem},
            features=_features(
                create_feature(
                    "ornate_pedestals",
                    "Ornate Pedestals",
                    "Ornate pedestals display various religious artifacts and offerings.",
                ),
                create_feature(
                    "glowing_symbols",
                    "Glowing Symbols",
                    "Glowing symbols on the floor form a complex magical pattern.",
                ),
                create_feature(
                    "golden_statues",
                    "Golden Statues",
                    "Golden statues of ancient deities stand in alcoves around the room.",
                ),
            ),
            characters={
                "temple_guardian": create_character(
                    "temple_guardian",
                    "Temple Guardian",
                    "A towering stone guardian watches the sanctum with eyes of cold fire.",
                    tags=["guardian", "statue", "character"],
                ),
            },
        ),
        Room(
            id="treasureVault",
            name="Treasure Vault",
            description=(
                "The legendary vault of the temple. Golden artifacts catch the light of "
                "your torch."
            ),
            exits=_exits(west=("innerSanctum", "The sanctum glows to the west.")),
            items={golden_chalice.id: golden_chalice},
            features=_features(
                create_feature(
                    "treasure_piles",
                    "Treasure Piles",
                    "Piles of ancient coins and jewelry glitter in your torchlight.",
                ),
                create_feature(
                    "golden_altar",
                    "Golden Altar",
                    "A golden altar stands at the center, clearly meant for the legendary "
                    "chalice.",
                ),
                create_feature(
                    "treasure_murals",
                    "Treasure Murals",
                    "Rich murals depict the history of the temple's treasures and their "
                    "guardians.",
                ),
            ),
        ),
    ]

    return GameMap(
        title="Ancient Maze Temple",
        description="A complex temple filled with twisting corridors and hidden chambers",
        start_room_id="entrance",
        rooms={room.id: room for room in rooms},
        items={bronze_key.id: bronze_key},
    )


def build_temple_rules() -> RuleBook:
    """Create the traps, scoring and use effects of the temple."""
    return RuleBook(
        move_traps=[
            MoveTrap(
                room_id="entrance",
                direction=Direction.NORTH,
                requires=["torch"],
                message=(
                    "You stumble into the pitch-black passage without a light. The floor "
                    "gives way beneath you and you fall into darkness. Game over."
                ),
            ),
            MoveTrap(
                room_id="northCorridor",
                direction=Direction.NORTH,
                requires=["guard_badge"],
                message=(
                    "As you pass beneath the grand archway, the Temple Guardian awakens. "
                    "Finding no badge of the temple guard on you, it strikes you down. "
                    "Game over."
                ),
            ),
        ],
        take_rules={
            "sacred_gem": TakeRule(
                item_id="sacred_gem",
                points=20,
                reason="found a rare sacred gem",
            ),
            "rusty_sword": TakeRule(
                item_id="rusty_sword",
                points=10,
                reason="armed yourself with an old blade",
            ),
            "silver_dagger": TakeRule(
                item_id="silver_dagger",
                points=15,
                reason="recovered the guard captain's silver dagger",
            ),
            "golden_chalice": TakeRule(
                item_id="golden_chalice",
                points=50,
                reason="found the legendary Golden Chalice",
                requires=["sacred_gem", "ancient_scroll"],
                wins=True,
                win_message=(
                    "Congratulations! You've found the Golden Chalice and won the game!"
                ),
                failure_message=(
                    "As you lift the chalice, the vault doors slam shut. Without the "
                    "sacred gem and the words of the ancient scroll the temple's curse "
                    "consumes you. Game over."
                ),
            ),
        },
        use_effects=[
            UseEffect(
                item_id="ancient_scroll",
                target_id="wall_inscriptions",
                message=(
                    "You hold the scroll against the wall. The symbols match! The "
                    "inscriptions speak of a chalice that only the worthy may lift, "
                    "bearing the sacred gem and these very words."
                ),
                describe={
                    "wall_inscriptions": (
                        "Deciphered with the scroll, the inscriptions read: 'Bring the "
                        "sacred gem and the words of old, and the chalice shall be yours.'"
                    ),
                },
            ),
            UseEffect(
                item_id="torch",
                target_id="bronze_brazier",
                message="You light the brazier. Warm light floods the library.",
                describe={
                    "bronze_brazier": (
                        "The bronze brazier burns brightly, throwing warm light across "
                        "the shelves."
                    ),
                },
            ),
            UseEffect(
                item_id="old_coin",
                target_id="offering_bowl",
                message=(
                    "You drop the coin into the offering bowl. It sinks into the stone "
                    "with a soft chime, and the fountain glows for a moment."
                ),
                describe={
                    "offering_bowl": (
                        "A shallow stone bowl set beside the fountain. A faint glow "
                        "lingers where your coin vanished."
                    ),
                },
                consume=["old_coin"],
            ),
            UseEffect(
                item_id="old_coin",
                target_id="stone_altar",
                message=(
                    "You set the coin in a worn hollow on the altar. Stone grinds on "
                    "stone as a hidden compartment slides open, revealing a bronze key."
                ),
                describe={
                    "stone_altar": (
                        "A large stone altar dominates the center of the hall. A hidden "
                        "compartment gapes open in its side."
                    ),
                },
                consume=["old_coin"],
                reveal_items=["bronze_key"],
            ),
            UseEffect(
                item_id="bronze_key",
                target_id="iron_door",
                message=(
                    "The serpent key turns with a heavy clunk. The iron door swings "
                    "open, and the key stays fast in the lock."
                ),
                describe={
                    "iron_door": "The iron door stands open, the bronze key fixed in its lock.",
                },
                consume=["bronze_key"],
                open_exits={Direction.NORTH: "hiddenArmory"},
            ),
            UseEffect(
                item_id="rusty_sword",
                target_id="armor_stand",
                message="You hang the sword on the armor stand. It looks almost proud.",
            ),
            UseEffect(
                item_id="crystal_shard",
                target_id="crystal_lights",
                message=(
                    "The shard hums in harmony with the crystal lights, and for a moment "
                    "the corridor blazes blue."
                ),
            ),
        ],
    )
