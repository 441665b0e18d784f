"""
Game configuration for the space shooter
Level constants, key bindings, colors and the gymnasium adapter settings.
"""

from dataclasses import dataclass, asdict
from typing import Tuple

# ==============================================================================
# INPUT
# ==============================================================================

MOVE_LEFT_KEY = "ArrowLeft"
MOVE_RIGHT_KEY = "ArrowRight"
FIRE_KEY = "Space"

# ==============================================================================
# COLORS (RGB)
# ==============================================================================

TITLE_COLOR = (0, 255, 255)
WIN_COLOR = (0, 255, 0)
LOSE_COLOR = (255, 68, 68)
SUBTITLE_COLOR = (255, 255, 255)


@dataclass
class GameConfig:
    """All tunable constants of the two levels. Validated on construction."""

    # Play field (screen coordinates, y grows downward)
    width: float = 1280.0
    height: float = 720.0
    tick_interval: float = 0.016  # seconds, ~60 Hz

    # Session budget, reset on every level start
    level_time: float = 60.0
    bullets_per_level: int = 10

    # Level one
    asteroid_count: int = 5
    asteroid_margin: float = 30.0
    asteroid_y_range: Tuple[float, float] = (50.0, 240.0)  # upper third

    # Player
    player_bottom_offset: float = 60.0
    player_step: float = 5.0
    player_margin: float = 15.0
    player_muzzle_offset: float = 20.0
    player_bullet_speed: float = 8.0

    # Boss
    boss_y: float = 100.0
    boss_max_hp: int = 4
    boss_speed: float = 2.0  # units per tick
    boss_margin: float = 40.0
    boss_phase_duration: float = 3.0  # seconds per still/move phase
    boss_shot_interval: float = 2.0  # seconds
    boss_muzzle_offset: float = 30.0
    boss_bullet_speed: float = 6.0
    boss_contact_distance: float = 50.0  # Manhattan pre-filter

    def __post_init__(self):
        self.asteroid_y_range = tuple(self.asteroid_y_range)
        self.validate()

    def validate(self):
        """Reject values that make the levels unplayable"""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Play field must be positive, got {self.width}x{self.height}")
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
        if self.level_time <= 0:
            raise ValueError(f"level_time must be positive, got {self.level_time}")
        if self.bullets_per_level < 0:
            raise ValueError(f"bullets_per_level cannot be negative, got {self.bullets_per_level}")
        if self.asteroid_count < 0:
            raise ValueError(f"asteroid_count cannot be negative, got {self.asteroid_count}")
        if self.boss_max_hp < 1:
            raise ValueError(f"boss_max_hp must be at least 1, got {self.boss_max_hp}")
        lo, hi = self.asteroid_y_range
        if not 0 <= lo <= hi <= self.height:
            raise ValueError(f"asteroid_y_range {self.asteroid_y_range} does not fit a field of height {self.height}")
        if 2 * self.asteroid_margin > self.width:
            raise ValueError(f"asteroid_margin {self.asteroid_margin} too wide for a field of width {self.width}")

    def to_dict(self) -> dict:
        return asdict(self)


# Defaults, overridable via GameConfig(**{**GAME_CONFIG, ...})
GAME_CONFIG = GameConfig().to_dict()

# ==============================================================================
# GYMNASIUM ADAPTER
# ==============================================================================

ENV_CONFIG = {
    "max_steps": 7500,  # two full levels at ~60 ticks per second
    "k_asteroids": 5,
    "m_boss_bullets": 3,
}

REWARD_CONFIG = {
    "R_ASTEROID": 1.0,   # asteroid destroyed
    "R_BOSS_HIT": 1.0,   # boss loses one hp
    "R_LEVEL": 3.0,      # level one cleared
    "R_WIN": 10.0,       # boss defeated
    "R_LOSE": 5.0,       # any loss
    "R_SHOT": 0.02,      # per bullet fired
    "R_TIME": 0.001,     # per tick
}
