"""
Session Module - The single game session of the process.

A session represents the show's current state:
- Created at startup, restored from the saved blob if there is one
- Holds the prize catalog and the current game
- Notifies listeners (presentation, persistence) after each mutation
- Replaced wholesale on reset
"""

from .game_session import GameSession
from .manager import SessionManager

__all__ = [
    "GameSession",
    "SessionManager",
]
