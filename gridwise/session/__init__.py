"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through:
- Created when a player starts a game
- Holds the engine (and through it the current game state)
- Destroyed when the player leaves or the session goes stale

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
