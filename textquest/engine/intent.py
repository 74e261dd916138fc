"""
Command Parser for textquest.

Turns typed player input ("take the torch", "use scroll on
inscriptions") into an (action_name, payload) pair for Game.step().
Pattern matching only; anything unrecognized is passed through under
its first word so the engine reports it like any unknown action.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

# Pattern definitions for rule-based parsing, tried in order
COMMAND_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("use", re.compile(r"^(?:use|apply)\s+(?P<item>.+?)\s+(?:on|with|in|into)\s+(?P<target>.+)$", re.I)),
    ("use", re.compile(r"^(?:use|apply)\s+(?P<item>.+)$", re.I)),
    ("move", re.compile(r"^(?:go|move|walk|run|head)\s+(?P<direction>\S+)$", re.I)),
    ("move", re.compile(r"^(?P<direction>north|south|east|west|n|s|e|w)$", re.I)),
    ("look", re.compile(r"^(?:look|examine|inspect|l|x)(?:\s+(?:at\s+)?(?P<target>.+))?$", re.I)),
    ("take", re.compile(r"^(?:take|get|grab|pick\s+up)\s+(?P<item>.+)$", re.I)),
    ("inventory", re.compile(r"^(?:inventory|inv|i)$", re.I)),
    ("help", re.compile(r"^(?:help|commands|\?)$", re.I)),
]

# Leading articles are noise for entity resolution
ARTICLE_PATTERN = re.compile(r"^(?:the|a|an|my)\s+", re.I)

DIRECTION_ALIASES = {"n": "north", "s": "south", "e": "east", "w": "west"}


@dataclass
class ParsedCommand:
    """A player command ready for Game.step()."""

    action: str
    payload: dict[str, Any] = field(default_factory=dict)
    original_input: str = ""

    def as_action(self) -> tuple[str, dict[str, Any]]:
        return self.action, self.payload


def strip_article(text: str) -> str:
    """Drop a leading article: "the rusty sword" -> "rusty sword"."""
    return ARTICLE_PATTERN.sub("", text.strip()).strip()


def normalize_direction(text: str) -> str:
    word = text.strip().lower()
    return DIRECTION_ALIASES.get(word, word)


class CommandParser:
    """Rule-based command parser using regex patterns."""

    def parse(self, player_input: str) -> ParsedCommand | None:
        """
        Parse player input into a command.

        Args:
            player_input: Raw text from the player

        Returns:
            ParsedCommand, or None for blank input
        """
        text = " ".join(player_input.split())
        if not text:
            return None

        for action, pattern in COMMAND_PATTERNS:
            match = pattern.match(text)
            if match:
                return ParsedCommand(
                    action=action,
                    payload=self._payload(action, match.groupdict()),
                    original_input=text,
                )

        # Let the engine explain unknown verbs
        return ParsedCommand(action=text.split()[0].lower(), original_input=text)

    def _payload(self, action: str, groups: dict[str, str | None]) -> dict[str, Any]:
        if action == "move":
            return {"direction": normalize_direction(groups["direction"] or "")}
        if action == "look":
            target = groups.get("target")
            return {"target": strip_article(target) if target else "room"}
        if action == "take":
            return {"item": strip_article(groups["item"] or "")}
        if action == "use":
            return {
                "item": strip_article(groups["item"] or ""),
                "target": strip_article(groups.get("target") or ""),
            }
        return {}
