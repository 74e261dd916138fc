"""
Bundled adventures for textquest.
"""

from textquest.content.temple import build_temple_map, build_temple_rules

__all__ = ["build_temple_map", "build_temple_rules"]
