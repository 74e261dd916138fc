"""
Exceptions raised by textquest.

Gameplay mistakes (unknown items, blocked exits, ambiguous names) are
never exceptions. They come back as narrative feedback. These types
cover programmer errors, broken saves and misuse of a finished game.
"""

from __future__ import annotations


class TextQuestError(Exception):
    """Base class for every textquest exception."""


class WorldIntegrityError(TextQuestError, RuntimeError):
    """The world graph references something that does not exist."""


class SaveDataError(TextQuestError, ValueError):
    """Save data failed validation. Nothing was restored."""


class GameOverError(TextQuestError, RuntimeError):
    """An action was submitted after the game reached a terminal result."""
