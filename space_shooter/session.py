"""
Session controls
Key events and ticks are two message sources drained by one single-threaded
object; only `tick()` mutates entities.
"""

from __future__ import annotations

import random
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Sequence, Tuple, Any

from .config import GameConfig, FIRE_KEY, TITLE_COLOR
from .render import Renderer, NullRenderer
from .state import GameState, Outcome
from .updater import FrameUpdater

FIRE_EVENT = "fire"


class Session:
    """One game session: menu, two levels, win/lose screens"""

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
        verbose: int = 0,
    ):
        self.renderer = renderer or NullRenderer()
        self.state = GameState(config, rng)
        self.updater = FrameUpdater(self.state, self.renderer, clock)
        self.verbose = verbose

        self._events: Deque[str] = deque()
        self._closed = False
        self._show_menu()

    @property
    def config(self) -> GameConfig:
        return self.state.config

    # ----------------------------
    # Controls
    # ----------------------------

    def start_level_one(self, layout: Optional[Sequence[Tuple[float, float]]] = None) -> bool:
        """Start a new game; refused while a level is running"""
        if self._closed or self.state.is_playing():
            return False
        before = self.state.outcome
        self._events.clear()
        self.state.start_level_one(self.updater.clock(), layout=layout)
        self.updater.draw_frame()
        self._log_transition(before)
        return True

    def restart(self):
        """Back to the menu"""
        if self._closed:
            return
        before = self.state.outcome
        self._events.clear()
        self.state.reset()
        self._show_menu()
        self._log_transition(before)

    def key_down(self, key: str, repeat: bool = False):
        if self._closed:
            return
        self.state.keys[key] = True
        if key == FIRE_KEY and not repeat:
            self._events.append(FIRE_EVENT)

    def key_up(self, key: str):
        self.state.keys[key] = False

    def tick(self):
        """Drain queued input, then advance one frame"""
        if self._closed:
            return
        before = self.state.outcome
        while self._events:
            event = self._events.popleft()
            if event == FIRE_EVENT and self.updater.fire():
                self.updater.draw_frame()
        self.updater.update()
        self._log_transition(before)

    def snapshot(self) -> Dict[str, Any]:
        return self.state.snapshot()

    def close(self):
        """Tear down input and drawing. Safe to call repeatedly or after a failed setup."""
        self._closed = True
        self._events.clear()
        self.state.keys.clear()
        if self.renderer is not None:
            self.renderer.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # ----------------------------
    # Helpers
    # ----------------------------

    def _show_menu(self):
        self.renderer.clear()
        self.renderer.show_message("SPACE SHOOTER", TITLE_COLOR, subtitle="Press START to begin")

    def _log_transition(self, before: Outcome):
        after = self.state.outcome
        if self.verbose > 0 and after != before:
            print(f"[Session] {before.value} -> {after.value} ({self.snapshot()})")
