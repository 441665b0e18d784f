"""
Renderer interface
The game core only writes to a renderer, it never reads anything back.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from .entities import Ship, Bullet, Asteroid, Boss

Color = Tuple[int, int, int]


class RenderInitError(RuntimeError):
    """The drawing surface could not be created; the game cannot start"""


class Renderer(ABC):
    """Abstract render collaborator"""

    @abstractmethod
    def clear(self):
        """Drop everything currently shown"""

    @abstractmethod
    def draw_player(self, ship: Ship):
        pass

    @abstractmethod
    def draw_bullet(self, bullet: Bullet, hostile: bool = False):
        pass

    @abstractmethod
    def draw_asteroid(self, asteroid: Asteroid):
        pass

    @abstractmethod
    def draw_boss(self, boss: Boss):
        pass

    @abstractmethod
    def show_message(self, text: str, color: Color, subtitle: Optional[str] = None):
        """Centered banner, stays until the next clear()"""

    def close(self):
        """Release drawing resources. Must be safe to call more than once."""


class NullRenderer(Renderer):
    """Headless renderer for training and tests"""

    def clear(self):
        pass

    def draw_player(self, ship: Ship):
        pass

    def draw_bullet(self, bullet: Bullet, hostile: bool = False):
        pass

    def draw_asteroid(self, asteroid: Asteroid):
        pass

    def draw_boss(self, boss: Boss):
        pass

    def show_message(self, text: str, color: Color, subtitle: Optional[str] = None):
        pass
