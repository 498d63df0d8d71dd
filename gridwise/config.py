"""
Game Configuration - Tunable constants for a game.

Values can come from code or from the environment:
    GRIDWISE_GRID_SIZE            slots per row (default 8)
    GRIDWISE_INITIAL_FOSSILS      Fossil generators dealt at start (default 4)
    GRIDWISE_REVEALED_CONSUMERS   consumers dealt face-up (default 4)
    GRIDWISE_AUTO_ADVANCE_DELAY   seconds before the automatic turn advance (default 1.0)
"""

from __future__ import annotations
from dataclasses import dataclass
import os


FOSSIL_NAME = "Fossil"


@dataclass(frozen=True)
class GameConfig:
    """Configuration for one game instance."""
    grid_size: int = 8
    initial_fossil_count: int = 4
    initial_revealed_consumers: int = 4

    # 0 makes the advance after a placement synchronous
    auto_advance_delay: float = 1.0

    def __post_init__(self):
        if self.grid_size < 1:
            raise ValueError("grid_size must be >= 1")
        if not 1 <= self.initial_fossil_count <= self.grid_size:
            raise ValueError("initial_fossil_count must be between 1 and grid_size")
        if not 0 <= self.initial_revealed_consumers <= self.grid_size:
            raise ValueError("initial_revealed_consumers must be between 0 and grid_size")
        if self.auto_advance_delay < 0:
            raise ValueError("auto_advance_delay must be >= 0")

    @classmethod
    def from_env(cls) -> GameConfig:
        """Build a config from GRIDWISE_* environment variables."""
        return cls(
            grid_size=int(os.getenv("GRIDWISE_GRID_SIZE", "8")),
            initial_fossil_count=int(os.getenv("GRIDWISE_INITIAL_FOSSILS", "4")),
            initial_revealed_consumers=int(os.getenv("GRIDWISE_REVEALED_CONSUMERS", "4")),
            auto_advance_delay=float(os.getenv("GRIDWISE_AUTO_ADVANCE_DELAY", "1.0")),
        )
