#!/usr/bin/env python
"""
Play the space shooter in an Arcade window, or run random-agent episodes headless.

Usage:
    python -m space_shooter.play
    python -m space_shooter.play --random-agent --episodes 5 --seed 0
"""

import sys
import random
import argparse
from typing import Optional, List

from space_shooter.config import GameConfig, GAME_CONFIG
from space_shooter.render import RenderInitError
from space_shooter.session import Session
from space_shooter.env import run_random_episode


def build_config(args) -> GameConfig:
    """Apply CLI overrides on top of the defaults"""
    overrides = dict(GAME_CONFIG)
    if args.level_time is not None:
        overrides["level_time"] = args.level_time
    if args.bullets is not None:
        overrides["bullets_per_level"] = args.bullets
    return GameConfig(**overrides)


def play(config: GameConfig, seed: Optional[int] = None, verbose: int = 0) -> int:
    """Open the window and run until it is closed"""
    import arcade
    from space_shooter.arcade_window import ArcadeRenderer, open_window

    renderer = ArcadeRenderer(config, seed=seed)
    session = Session(renderer=renderer, config=config, rng=random.Random(seed), verbose=verbose)
    try:
        open_window(session, renderer)
        arcade.run()
    except RenderInitError as e:
        print(f"[play] Game cannot start: {e}")
        return 1
    finally:
        session.close()
    return 0


def run_random_agent(config: GameConfig, episodes: int, seed: Optional[int] = None) -> int:
    outcomes = {}
    for ep in range(episodes):
        ep_seed = None if seed is None else seed + ep
        info = run_random_episode(render=False, seed=ep_seed, config=config)
        outcomes[info["state"]] = outcomes.get(info["state"], 0) + 1

    print(f"\n{'='*60}")
    print(f"Random agent over {episodes} episodes: {outcomes}")
    print(f"{'='*60}\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Two-level space shooter")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for asteroid layout and visuals")
    parser.add_argument("--level-time", type=float, default=None, help="Seconds per level (default: 60)")
    parser.add_argument("--bullets", type=int, default=None, help="Bullets per level (default: 10)")
    parser.add_argument("--random-agent", action="store_true", help="Run headless random-agent episodes instead of the window")
    parser.add_argument("--episodes", type=int, default=1, help="Episodes for --random-agent")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Log outcome transitions")
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    if args.random_agent:
        return run_random_agent(config, args.episodes, seed=args.seed)
    return play(config, seed=args.seed, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
