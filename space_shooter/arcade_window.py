"""
Arcade front end: display-list renderer, game window and HUD.
Game coordinates have y growing downward, arcade's grow upward; every draw
call goes through `_flip`.
"""

from __future__ import annotations

import math
import random
from typing import Dict, List, Optional, Tuple, Any

import arcade

from .config import (
    GameConfig, MOVE_LEFT_KEY, MOVE_RIGHT_KEY, FIRE_KEY, SUBTITLE_COLOR,
)
from .entities import Ship, Bullet, Asteroid, Boss
from .render import Renderer, RenderInitError, Color
from .session import Session
from .state import Outcome

KEY_MAP = {
    arcade.key.LEFT: MOVE_LEFT_KEY,
    arcade.key.RIGHT: MOVE_RIGHT_KEY,
    arcade.key.SPACE: FIRE_KEY,
}

BACKGROUND_C = (10, 10, 26)
SHIP_BODY_C = (255, 170, 0)
SHIP_ACCENT_C = (74, 144, 226)
PLAYER_BULLET_C = (0, 255, 255)
BOSS_BULLET_C = (255, 68, 68)
ASTEROID_C = (170, 51, 51)
ASTEROID_LINE_C = (119, 51, 51)
BOSS_BODY_C = (102, 0, 0)
BOSS_ACCENT_C = (255, 0, 0)
BOSS_GUN_C = (51, 51, 51)
HUD_C = (220, 220, 220)
HUD_DANGER_C = (255, 90, 90)
FONT = "Courier New"

SHIP_BODY = [(0, -20), (-15, 20), (0, 10), (15, 20)]
SHIP_ACCENT = [(-10, 20), (-5, 30), (5, 30), (10, 20)]


class ArcadeRenderer(Renderer):
    """Records draw calls between clear()s and replays them on every paint()"""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        self.config = config or GameConfig()
        self._rng = random.Random(seed)
        self._commands: List[Tuple[str, Any]] = []
        self._asteroid_shapes: Dict[int, Tuple[Asteroid, list, list]] = {}
        self._drawn_asteroids: set = set()
        self._stars = self._make_stars(200)

    # ----------------------------
    # Renderer API
    # ----------------------------

    def clear(self):
        self._commands = []
        # Forget shapes of asteroids that are gone
        self._asteroid_shapes = {k: v for k, v in self._asteroid_shapes.items() if k in self._drawn_asteroids}
        self._drawn_asteroids = set()

    def draw_player(self, ship: Ship):
        self._commands.append(("player", (ship.x, ship.y)))

    def draw_bullet(self, bullet: Bullet, hostile: bool = False):
        self._commands.append(("bullet", (bullet.x, bullet.y, hostile)))

    def draw_asteroid(self, asteroid: Asteroid):
        key = id(asteroid)
        # The entry keeps its asteroid alive, so the id cannot be reused while cached
        cached = self._asteroid_shapes.get(key)
        if cached is None or cached[0] is not asteroid:
            self._asteroid_shapes[key] = (asteroid,) + self._make_asteroid_shape()
        self._drawn_asteroids.add(key)
        self._commands.append(("asteroid", (asteroid.x, asteroid.y, key)))

    def draw_boss(self, boss: Boss):
        self._commands.append(("boss", (boss.x, boss.y)))

    def show_message(self, text: str, color: Color, subtitle: Optional[str] = None):
        self._commands.append(("message", (text, color, subtitle)))

    def close(self):
        self._commands = []
        self._asteroid_shapes = {}
        self._drawn_asteroids = set()

    # ----------------------------
    # Procedural shapes
    # ----------------------------

    def _make_stars(self, n: int) -> list:
        stars = []
        for _ in range(n):
            brightness = self._rng.random()
            color = (255, 255, 255) if brightness > 0.8 else (204, 204, 255) if brightness > 0.6 else (136, 136, 136)
            stars.append((
                self._rng.random() * self.config.width,
                self._rng.random() * self.config.height,
                self._rng.random() * 2 + 0.5,
                color,
            ))
        return stars

    def _make_asteroid_shape(self) -> Tuple[list, list]:
        sides = 8
        outline = []
        for i in range(sides):
            ang = (math.pi * 2) * (i / sides)
            radius = 20 + self._rng.random() * 15
            outline.append((math.cos(ang) * radius, math.sin(ang) * radius))

        lines = []
        for _ in range(5):
            a0 = self._rng.random() * math.pi * 2
            a1 = a0 + self._rng.random() * math.pi
            r0 = self._rng.random() * 20
            r1 = self._rng.random() * 20
            lines.append(((math.cos(a0) * r0, math.sin(a0) * r0),
                          (math.cos(a1) * r1, math.sin(a1) * r1)))
        return outline, lines

    # ----------------------------
    # Painting
    # ----------------------------

    def _flip(self, x: float, y: float) -> Tuple[float, float]:
        return x, self.config.height - y

    def _polygon(self, cx: float, cy: float, points, color):
        arcade.draw_polygon_filled([self._flip(cx + dx, cy + dy) for dx, dy in points], color)

    def paint(self):
        """Draw the background and the recorded display list"""
        for sx, sy, r, color in self._stars:
            arcade.draw_circle_filled(sx, sy, r, color)

        for kind, payload in self._commands:
            if kind == "player":
                x, y = payload
                self._polygon(x, y, SHIP_BODY, SHIP_BODY_C)
                self._polygon(x, y, SHIP_ACCENT, SHIP_ACCENT_C)
            elif kind == "bullet":
                x, y, hostile = payload
                fx, fy = self._flip(x, y)
                arcade.draw_circle_filled(fx, fy, 3, BOSS_BULLET_C if hostile else PLAYER_BULLET_C)
            elif kind == "asteroid":
                x, y, key = payload
                _, outline, lines = self._asteroid_shapes[key]
                self._polygon(x, y, outline, ASTEROID_C)
                for (x0, y0), (x1, y1) in lines:
                    ax, ay = self._flip(x + x0, y + y0)
                    bx, by = self._flip(x + x1, y + y1)
                    arcade.draw_line(ax, ay, bx, by, ASTEROID_LINE_C, 2)
            elif kind == "boss":
                self._paint_boss(*payload)
            elif kind == "message":
                self._paint_message(*payload)

    def _paint_boss(self, x: float, y: float):
        left, bottom = self._flip(x - 40, y + 30)
        arcade.draw_lrbt_rectangle_filled(left, left + 80, bottom, bottom + 60, BOSS_BODY_C)
        for dx, dy, r in ((-20, -10, 8), (20, -10, 8), (0, 0, 12)):
            cx, cy = self._flip(x + dx, y + dy)
            arcade.draw_circle_filled(cx, cy, r, BOSS_ACCENT_C)
        gl, gb = self._flip(x - 5, y + 50)
        arcade.draw_lrbt_rectangle_filled(gl, gl + 10, gb, gb + 20, BOSS_GUN_C)

    def _paint_message(self, text: str, color: Color, subtitle: Optional[str]):
        cx, cy = self._flip(self.config.width / 2, self.config.height / 2)
        arcade.draw_text(text, cx, cy, color, 48, font_name=FONT,
                         anchor_x="center", anchor_y="center", bold=True)
        if subtitle:
            arcade.draw_text(subtitle, cx, cy - 60, SUBTITLE_COLOR, 24, font_name=FONT,
                             anchor_x="center", anchor_y="center")


class ShooterWindow(arcade.Window):
    """Arcade window wiring keyboard and the fixed tick into a Session"""

    def __init__(self, session: Session, renderer: ArcadeRenderer, drive_updates: bool = True,
                 title: str = "Space Shooter"):
        cfg = session.config
        super().__init__(int(cfg.width), int(cfg.height), title, update_rate=cfg.tick_interval)
        self.session = session
        self.renderer = renderer
        self.drive_updates = drive_updates
        self.background_color = BACKGROUND_C

    def on_draw(self):
        self.clear()
        self.renderer.paint()
        self._draw_hud()

    def on_update(self, delta_time: float):
        if self.drive_updates:
            self.session.tick()

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.drive_updates:
            return
        key = KEY_MAP.get(symbol)
        if key is not None:
            self.session.key_down(key)
            return

        outcome = self.session.state.outcome
        if symbol in (arcade.key.ENTER, arcade.key.RETURN) and not self.session.state.is_playing():
            self.session.start_level_one()
        elif symbol == arcade.key.ESCAPE and outcome in (Outcome.WIN, Outcome.LOSE):
            self.session.restart()

    def on_key_release(self, symbol: int, modifiers: int):
        key = KEY_MAP.get(symbol)
        if key is not None:
            self.session.key_up(key)

    def on_close(self):
        self.session.close()
        super().on_close()

    def _draw_hud(self):
        info = self.session.snapshot()
        top = self.height - 28
        cfg = self.session.config

        txt = f"Bullets: {info['bullets']}/{cfg.bullets_per_level}    Time: {info['time']}s"
        arcade.draw_text(txt, 12, top, HUD_C, 16, font_name=FONT)
        if info["state"] == Outcome.LEVEL_TWO.value:
            arcade.draw_text(f"Boss HP: {info['boss_hp']}/{info['boss_max_hp']}",
                             self.width - 12, top, HUD_DANGER_C, 16, font_name=FONT, anchor_x="right")

        if not self.session.state.is_playing():
            help_lines = [
                "Use <- -> arrows to move, SPACE to shoot",
                "Level 1: Destroy all asteroids - Level 2: Defeat the Boss "
                f"({cfg.boss_max_hp} hits)",
                f"You have {cfg.bullets_per_level} bullets and {int(cfg.level_time)} seconds per level",
                "ENTER: start new game    ESC: back to menu",
            ]
            for i, line in enumerate(help_lines):
                arcade.draw_text(line, self.width / 2, 80 - i * 20, HUD_C, 12, font_name=FONT,
                                 anchor_x="center")


def open_window(session: Session, renderer: ArcadeRenderer, drive_updates: bool = True) -> ShooterWindow:
    """Create the game window; any failure here means the game cannot start"""
    try:
        return ShooterWindow(session, renderer, drive_updates=drive_updates)
    except Exception as e:
        raise RenderInitError(f"Could not create the game window: {e}") from e
