"""
Frame updater
-------------
One `update()` per tick:
- countdown timer (timeout beats every other outcome)
- player movement from the held keys
- player bullets, then level-specific rules
- level one: bullets vs asteroids, cleared field starts level two
- level two: timed boss pattern, boss bullets, contact and hit checks
- pushes the resulting frame to the renderer

Removals are collected as index sets and compacted afterwards, collections are
never mutated while being iterated.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Set

from .config import MOVE_LEFT_KEY, MOVE_RIGHT_KEY, WIN_COLOR, LOSE_COLOR
from .render import Renderer, NullRenderer
from .state import GameState, Outcome
from .utils import aabb_overlap, manhattan_distance


class FrameUpdater:
    """Advances a GameState by one tick"""

    def __init__(
        self,
        state: GameState,
        renderer: Optional[Renderer] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.state = state
        self.renderer = renderer or NullRenderer()
        self.clock = clock

    # ----------------------------
    # Input-driven actions
    # ----------------------------

    def fire(self) -> bool:
        """Spawn one player bullet if the magazine allows it"""
        s = self.state
        if not s.is_playing() or s.player is None or s.bullets_remaining <= 0:
            return False
        s.spawn_player_bullet()
        s.bullets_remaining -= 1
        return True

    # ----------------------------
    # Tick
    # ----------------------------

    def update(self):
        s = self.state
        if not s.is_playing():
            return

        now = self.clock()
        s.time_remaining -= now - s.last_time
        s.last_time = now
        if s.time_remaining <= 0:
            self._lose()
            return

        self._move_player()
        self._update_bullets()

        if s.outcome == Outcome.LEVEL_ONE:
            if self._update_level_one(now):
                return

        if s.outcome == Outcome.LEVEL_TWO and s.boss is not None:
            if self._update_level_two(now):
                return

        self.draw_frame()

    def _move_player(self):
        s = self.state
        cfg = s.config
        if s.player is None:
            return
        if s.keys.get(MOVE_LEFT_KEY) and s.player.x > cfg.player_margin:
            s.player.x -= cfg.player_step
        if s.keys.get(MOVE_RIGHT_KEY) and s.player.x < cfg.width - cfg.player_margin:
            s.player.x += cfg.player_step

    def _update_bullets(self):
        s = self.state
        for b in s.bullets:
            b.y += b.vy
        s.bullets = [b for b in s.bullets if b.y >= 0]

    # ----------------------------
    # Level rules. Each returns True when the tick must stop.
    # ----------------------------

    def _update_level_one(self, now: float) -> bool:
        s = self.state

        spent: Set[int] = set()
        destroyed: Set[int] = set()
        for bi, bullet in enumerate(s.bullets):
            for ai, asteroid in enumerate(s.asteroids):
                if ai in destroyed:
                    continue
                if aabb_overlap(bullet, asteroid):
                    spent.add(bi)
                    destroyed.add(ai)
                    break  # a bullet destroys at most one asteroid
        if spent:
            s.bullets = [b for i, b in enumerate(s.bullets) if i not in spent]
            s.asteroids = [a for i, a in enumerate(s.asteroids) if i not in destroyed]

        # Cleared field wins over an empty magazine
        if not s.asteroids:
            s.start_level_two(now)
            self.draw_frame()
            return True

        if s.bullets_remaining == 0 and not s.bullets:
            self._lose()
            return True
        return False

    def _update_level_two(self, now: float) -> bool:
        s = self.state
        cfg = s.config
        boss = s.boss

        self._move_boss(now)

        if now - boss.last_shot >= cfg.boss_shot_interval:
            s.spawn_boss_bullet()
            boss.last_shot = now

        # Boss bullets: fall, hit the player, or cancel against player bullets
        for b in s.boss_bullets:
            b.y += b.vy
        s.boss_bullets = [b for b in s.boss_bullets if b.y <= cfg.height]

        cancelled: Set[int] = set()
        spent: Set[int] = set()
        for hi, hostile in enumerate(s.boss_bullets):
            if s.player is not None and aabb_overlap(hostile, s.player):
                self._lose()
                return True
            for pi, bullet in enumerate(s.bullets):
                if pi in spent:
                    continue
                if aabb_overlap(hostile, bullet):
                    cancelled.add(hi)
                    spent.add(pi)
                    break
        if cancelled:
            s.boss_bullets = [b for i, b in enumerate(s.boss_bullets) if i not in cancelled]
            s.bullets = [b for i, b in enumerate(s.bullets) if i not in spent]

        # Body contact, only checked when the centers are close
        if s.player is not None and manhattan_distance(s.player, boss) < cfg.boss_contact_distance:
            if aabb_overlap(s.player, boss):
                self._lose()
                return True

        hits: Set[int] = set()
        for bi, bullet in enumerate(s.bullets):
            if aabb_overlap(bullet, boss):
                hits.add(bi)
                boss.hp -= 1
                if boss.hp <= 0:
                    break
        if hits:
            s.bullets = [b for i, b in enumerate(s.bullets) if i not in hits]
        if boss.hp <= 0:
            s.boss = None
            self._win()
            return True

        if s.bullets_remaining == 0 and not s.bullets:
            self._lose()
            return True
        return False

    def _move_boss(self, now: float):
        s = self.state
        cfg = s.config
        boss = s.boss

        phase = int((now - boss.move_start_time) // cfg.boss_phase_duration) % 2
        if phase != 1:
            return
        if boss.moving_right:
            boss.x += cfg.boss_speed
            if boss.x > cfg.width - cfg.boss_margin:
                boss.moving_right = False
        else:
            boss.x -= cfg.boss_speed
            if boss.x < cfg.boss_margin:
                boss.moving_right = True

    # ----------------------------
    # Outcomes and drawing
    # ----------------------------

    def _lose(self):
        self.state.outcome = Outcome.LOSE
        self.renderer.clear()
        self.renderer.show_message("YOU LOSE", LOSE_COLOR)

    def _win(self):
        self.state.outcome = Outcome.WIN
        self.renderer.clear()
        self.renderer.show_message("YOU WIN", WIN_COLOR)

    def draw_frame(self):
        """Redraw every live entity"""
        s = self.state
        r = self.renderer
        r.clear()
        for a in s.asteroids:
            r.draw_asteroid(a)
        if s.boss is not None:
            r.draw_boss(s.boss)
        if s.player is not None:
            r.draw_player(s.player)
        for b in s.bullets:
            r.draw_bullet(b, hostile=False)
        for b in s.boss_bullets:
            r.draw_bullet(b, hostile=True)
