"""
Service layer for textquest.

Services move game state across the engine boundary.
"""

from __future__ import annotations

from textquest.services.save import (
    SaveRecord,
    deserialize,
    load_from_file,
    save_to_file,
    serialize,
)

__all__ = [
    "SaveRecord",
    "deserialize",
    "load_from_file",
    "save_to_file",
    "serialize",
]
