"""
Command-line interface for textquest.
"""

from textquest.cli.repl import GameREPL, main, run_game

__all__ = ["GameREPL", "main", "run_game"]
