"""Space shooter - two-level arcade game core with an Arcade front end"""

from .config import GameConfig
from .state import GameState, Outcome
from .updater import FrameUpdater
from .session import Session
from .env import SpaceShooterEnv, run_random_episode

__all__ = [
    "GameConfig",
    "GameState",
    "Outcome",
    "FrameUpdater",
    "Session",
    "SpaceShooterEnv",
    "run_random_episode",
]
