"""
Game state store
----------------
Owns every mutable piece of a session: entities, counters, input flags and
the current outcome. Level starts rebuild the entity collections from scratch.
"""

from __future__ import annotations

import math
import random
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Any

from .config import GameConfig
from .entities import Ship, Bullet, Asteroid, Boss


class Outcome(str, Enum):
    MENU = "menu"
    LEVEL_ONE = "level1"
    LEVEL_TWO = "level2"
    WIN = "win"
    LOSE = "lose"


class GameState:
    """Single mutable container shared by the frame updater and the input side"""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()

        # World state
        self.player: Optional[Ship] = None
        self.bullets: List[Bullet] = []
        self.asteroids: List[Asteroid] = []
        self.boss: Optional[Boss] = None
        self.boss_bullets: List[Bullet] = []

        # Input flags, written by key callbacks
        self.keys: Dict[str, bool] = {}

        # Session counters
        self.bullets_remaining = self.config.bullets_per_level
        self.time_remaining = self.config.level_time
        self.outcome = Outcome.MENU
        self.last_time = 0.0

    # ----------------------------
    # Level lifecycle
    # ----------------------------

    def start_level_one(self, now: float, layout: Optional[Sequence[Tuple[float, float]]] = None):
        """Spawn the player and the asteroid field; `layout` pins asteroid positions"""
        cfg = self.config
        self._clear_entities()
        self.player = self._spawn_player()

        if layout is None:
            lo, hi = cfg.asteroid_y_range
            layout = [
                (self.rng.uniform(cfg.asteroid_margin, cfg.width - cfg.asteroid_margin),
                 self.rng.uniform(lo, hi))
                for _ in range(cfg.asteroid_count)
            ]
        self.asteroids = [Asteroid(x=float(x), y=float(y)) for x, y in layout]

        self._reset_counters(now)
        self.outcome = Outcome.LEVEL_ONE

    def start_level_two(self, now: float):
        """Spawn a fresh player and the boss at top-center"""
        cfg = self.config
        self._clear_entities()
        self.player = self._spawn_player()
        self.boss = Boss(
            x=cfg.width / 2,
            y=cfg.boss_y,
            hp=cfg.boss_max_hp,
            max_hp=cfg.boss_max_hp,
            last_shot=now - cfg.boss_shot_interval,  # first tick fires
            moving_right=True,
            move_start_time=now,
        )
        self._reset_counters(now)
        self.outcome = Outcome.LEVEL_TWO

    def reset(self):
        """Back to the menu with nothing in play"""
        self._clear_entities()
        self.bullets_remaining = self.config.bullets_per_level
        self.time_remaining = self.config.level_time
        self.outcome = Outcome.MENU

    def _clear_entities(self):
        self.player = None
        self.bullets = []
        self.asteroids = []
        self.boss = None
        self.boss_bullets = []

    def _reset_counters(self, now: float):
        self.bullets_remaining = self.config.bullets_per_level
        self.time_remaining = self.config.level_time
        self.last_time = now

    # ----------------------------
    # Spawning
    # ----------------------------

    def _spawn_player(self) -> Ship:
        return Ship(x=self.config.width / 2, y=self.config.height - self.config.player_bottom_offset)

    def spawn_player_bullet(self) -> Bullet:
        bullet = Bullet(
            x=self.player.x,
            y=self.player.y - self.config.player_muzzle_offset,
            vy=-self.config.player_bullet_speed,
        )
        self.bullets.append(bullet)
        return bullet

    def spawn_boss_bullet(self) -> Bullet:
        bullet = Bullet(
            x=self.boss.x,
            y=self.boss.y + self.config.boss_muzzle_offset,
            vy=self.config.boss_bullet_speed,
        )
        self.boss_bullets.append(bullet)
        return bullet

    # ----------------------------
    # Queries
    # ----------------------------

    def is_playing(self) -> bool:
        return self.outcome in (Outcome.LEVEL_ONE, Outcome.LEVEL_TWO)

    def snapshot(self) -> Dict[str, Any]:
        """HUD view: time is rounded up to whole seconds"""
        return {
            "bullets": self.bullets_remaining,
            "time": max(0, math.ceil(self.time_remaining)),
            "state": self.outcome.value,
            "boss_hp": self.boss.hp if self.boss is not None else 0,
            "boss_max_hp": self.config.boss_max_hp,
        }
