"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Entity:
    """Center-anchored game object with an axis-aligned bounding box"""
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    vx: float = 0.0
    vy: float = 0.0

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass
class Ship(Entity):
    """Player ship"""
    width: float = 30.0
    height: float = 40.0


@dataclass
class Bullet(Entity):
    """Projectile; negative vy travels up the screen"""
    width: float = 6.0
    height: float = 6.0
    vy: float = -8.0


@dataclass
class Asteroid(Entity):
    """Stationary level-one target"""
    width: float = 60.0
    height: float = 60.0


@dataclass
class Boss(Entity):
    """Level-two boss with a timed move/shoot pattern"""
    width: float = 80.0
    height: float = 60.0
    hp: int = 4
    max_hp: int = 4
    last_shot: float = 0.0  # clock seconds
    moving_right: bool = True
    move_start_time: float = 0.0  # clock seconds
