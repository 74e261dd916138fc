"""
textquest: a turn-based text adventure engine.
"""

__version__ = "0.1.0"
