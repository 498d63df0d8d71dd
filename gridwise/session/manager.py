"""
Session Manager - Creates and manages game sessions.

A session wraps one GameEngine for one player.

PERSISTENCE RULES:
- NO database for gameplay
- Sessions are in-memory only and vanish on restart
- Ending a session cancels its pending turn timer
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import random
import time
import uuid

from ..catalog.catalog import CardCatalog
from ..config import GameConfig
from ..engine_core.engine import GameEngine
from ..engine_core.state import GamePhase

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    WON = "won"  # Game completed
    ENDED = "ended"  # Closed by the player or cleanup


@dataclass
class Session:
    """
    An ephemeral game session.

    The session is destroyed when it ends.
    State is NOT persisted.
    """
    session_id: str
    engine: GameEngine
    created_at: float
    last_access: float = 0.0
    seed: int | None = None
    ended: bool = False

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        if self.engine.get_state().phase == GamePhase.WON:
            return SessionState.WON
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def touch(self):
        self.last_access = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions (one engine each)
    - Track sessions
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: GameConfig | None = None, catalog: CardCatalog | None = None):
        self.config = config or GameConfig()
        self.catalog = catalog
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        config: GameConfig | None = None,
    ) -> Session:
        """
        Create a new session and deal its first game.

        Args:
            seed: Optional seed for a reproducible consumer shuffle
            config: Overrides the manager's default config

        Returns:
            New Session with a game in progress

        Raises:
            ValueError: if the first deal fails
        """
        engine = GameEngine(
            catalog=self.catalog,
            config=config or self.config,
            rng=random.Random(seed),
        )
        result = engine.reset()
        if not result.success:
            raise ValueError(f"Could not start game: {result.error}")

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            engine=engine,
            created_at=now,
            last_access=now,
            seed=seed,
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        session = self._sessions.get(session_id)
        if session:
            session.touch()
        return session

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The session is removed from memory. Returns False if unknown.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.engine.close()
        session.ended = True
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_sessions(self) -> list[str]:
        return list(self._sessions.keys())

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is still in play."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_idle_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if current_time - session.last_access > max_idle_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
