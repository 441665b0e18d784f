"""
SpaceShooterEnv - gymnasium wrapper around a game session
---------------------------------------------------------
- Drives the real Session/FrameUpdater with a simulated clock
- Discrete action space: 0 idle, 1 left, 2 right, 3 fire
- Vector observation: player + counters + asteroid slots + boss + nearest boss bullets
- Arcade window for render_mode="human"

Quick test:
    python -m space_shooter.env
"""

from __future__ import annotations

import random
from typing import Dict, Any, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import (
    GameConfig, ENV_CONFIG, REWARD_CONFIG,
    MOVE_LEFT_KEY, MOVE_RIGHT_KEY, FIRE_KEY,
)
from .render import NullRenderer
from .session import Session
from .state import Outcome
from .utils import clamp, seed_everything

IDLE, LEFT, RIGHT, FIRE = 0, 1, 2, 3


class SimClock:
    """Deterministic clock advanced by the environment, one tick per step"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def advance(self, dt: float):
        self.now += dt

    def __call__(self) -> float:
        return self.now


class SpaceShooterEnv(gym.Env):
    """Two-level space shooter as a gymnasium environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        max_steps: int = ENV_CONFIG["max_steps"],
        k_asteroids: int = ENV_CONFIG["k_asteroids"],
        m_boss_bullets: int = ENV_CONFIG["m_boss_bullets"],
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids
        self.m_boss_bullets = m_boss_bullets
        self.rewards = dict(REWARD_CONFIG, **(rewards or {}))

        self.action_space = spaces.Discrete(4)

        # Player x(1) ammo(1) time(1) level(1)
        # Each asteroid: rel pos(2)
        # Boss: present(1) rel pos(2) hp(1)
        # Each boss bullet: rel pos(2)
        obs_dim = 4 + (self.k_asteroids * 2) + 4 + (self.m_boss_bullets * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.clock = SimClock()
        self._rng = random.Random()
        if render_mode == "human":
            from .arcade_window import ArcadeRenderer
            renderer = ArcadeRenderer(self.config)
        else:
            renderer = NullRenderer()
        self.session = Session(renderer=renderer, config=self.config, clock=self.clock, rng=self._rng)

        self._window = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self._rng.seed(seed)

        self._step_count = 0
        self.session.restart()
        layout = (options or {}).get("layout")
        self.session.start_level_one(layout=layout)

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action: {action}"
        action = int(action)
        state = self.session.state
        self._events = {"asteroid": 0.0, "boss_hit": 0.0, "shot": 0.0}

        asteroids_before = len(state.asteroids)
        boss_hp_before = state.boss.hp if state.boss is not None else None
        ammo_before = state.bullets_remaining
        outcome_before = state.outcome

        self.session.key_up(MOVE_LEFT_KEY)
        self.session.key_up(MOVE_RIGHT_KEY)
        if action == LEFT:
            self.session.key_down(MOVE_LEFT_KEY)
        elif action == RIGHT:
            self.session.key_down(MOVE_RIGHT_KEY)
        elif action == FIRE:
            self.session.key_down(FIRE_KEY)
            self.session.key_up(FIRE_KEY)

        self.clock.advance(self.config.tick_interval)
        self.session.tick()

        outcome = state.outcome
        self._events["shot"] = float(ammo_before - state.bullets_remaining) if outcome == outcome_before else 0.0
        if outcome_before == Outcome.LEVEL_ONE:
            remaining = 0 if outcome == Outcome.LEVEL_TWO else len(state.asteroids)
            self._events["asteroid"] = float(asteroids_before - remaining)
        elif outcome_before == Outcome.LEVEL_TWO and boss_hp_before is not None:
            hp_after = state.boss.hp if state.boss is not None else 0
            self._events["boss_hit"] = float(boss_hp_before - hp_after)

        reward = self._compute_reward(outcome_before, outcome)

        terminated = outcome in (Outcome.WIN, Outcome.LOSE)
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.session.state
        cfg = self.config
        player = state.player

        px = player.x if player is not None else cfg.width / 2
        py = player.y if player is not None else cfg.height - cfg.player_bottom_offset

        ammo = state.bullets_remaining / max(1, cfg.bullets_per_level)
        time_left = clamp(state.time_remaining / cfg.level_time, 0.0, 1.0)
        level = 1.0 if state.outcome in (Outcome.LEVEL_TWO, Outcome.WIN) else -1.0

        obs_parts: List[float] = [
            px / cfg.width * 2 - 1,
            ammo * 2 - 1,
            time_left * 2 - 1,
            level,
        ]

        # Asteroids: nearest first
        asteroids_sorted = sorted(
            state.asteroids,
            key=lambda a: (a.x - px) ** 2 + (a.y - py) ** 2
        )
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                obs_parts += [clamp((a.x - px) / cfg.width, -1, 1),
                              clamp((a.y - py) / cfg.height, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        boss = state.boss
        if boss is not None:
            obs_parts += [
                1.0,
                clamp((boss.x - px) / cfg.width, -1, 1),
                clamp((boss.y - py) / cfg.height, -1, 1),
                (boss.hp / max(1, boss.max_hp)) * 2 - 1,
            ]
        else:
            obs_parts += [-1.0, 0.0, 0.0, -1.0]

        bullets_sorted = sorted(
            state.boss_bullets,
            key=lambda b: (b.x - px) ** 2 + (b.y - py) ** 2
        )
        for i in range(self.m_boss_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                obs_parts += [clamp((b.x - px) / cfg.width, -1, 1),
                              clamp((b.y - py) / cfg.height, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, before: Outcome, after: Outcome) -> float:
        R = self.rewards
        reward = 0.0

        reward += R["R_ASTEROID"] * self._events.get("asteroid", 0.0)
        reward += R["R_BOSS_HIT"] * self._events.get("boss_hit", 0.0)
        reward -= R["R_SHOT"] * self._events.get("shot", 0.0)
        reward -= R["R_TIME"]

        if before == Outcome.LEVEL_ONE and after == Outcome.LEVEL_TWO:
            reward += R["R_LEVEL"]
        if after == Outcome.WIN:
            reward += R["R_WIN"]
        if after == Outcome.LOSE:
            reward -= R["R_LOSE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        state = self.session.state
        info = self.session.snapshot()
        info.update({
            "num_asteroids": len(state.asteroids),
            "num_bullets": len(state.bullets),
            "num_boss_bullets": len(state.boss_bullets),
            "step": self._step_count,
        })
        return info

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .arcade_window import open_window
            self._window = open_window(self.session, self.session.renderer, drive_updates=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
        self.session.close()


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42,
                       config: Optional[GameConfig] = None) -> Dict[str, Any]:
    """Play one episode with random actions and return the final info"""
    env = SpaceShooterEnv(render_mode="human" if render else None, config=config)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    try:
        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total += reward
    finally:
        env.close()

    print(f"[run_random_episode] return={total:.3f} outcome={info['state']} steps={info['step']}")
    info["return"] = total
    return info


if __name__ == "__main__":
    run_random_episode(render=True)
